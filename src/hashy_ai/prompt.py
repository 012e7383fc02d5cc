"""System prompt for the note assistant."""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = ["build_system_prompt", "MAX_NOTE_CONTEXT"]

MAX_NOTE_CONTEXT = 4000

_INSTRUCTIONS = (
    "You are a helpful AI assistant integrated into a markdown note-taking app called Hashy. "
    "You can create, read, search, update, and delete notes using the provided tools. "
    "When the user asks you to create a note, immediately use the create_note tool "
    "and do NOT ask for confirmation. "
    "When the user asks you to update multiple notes (e.g. add emojis to all notes), "
    "use search_notes to list them, then call update_note_metadata for EACH note; "
    "do not stop after one. "
    "Infer a good title, pick a fitting emoji icon, choose relevant tags "
    "(use single words or hyphenated-words, never spaces in tags), and generate useful content. "
    "Be concise and act on requests directly."
)


def build_system_prompt(
    note_count: int,
    existing_tags: Sequence[str] = (),
    current_note_context: Optional[str] = None,
) -> str:
    text = _INSTRUCTIONS
    text += f"\n\nThe user has {note_count} notes."

    if existing_tags:
        text += (
            f"\n\nExisting tags in the project: {', '.join(existing_tags)}. "
            "Prefer reusing these when relevant."
        )

    if current_note_context:
        text += (
            "\n\nThe user is currently viewing this note:\n\n"
            + current_note_context[:MAX_NOTE_CONTEXT]
        )

    return text
