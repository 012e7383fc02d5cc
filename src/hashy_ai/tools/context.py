from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hashy_ai.storage import NoteFile

__all__ = ["NoteToolContext"]


@dataclass(frozen=True, slots=True)
class NoteToolContext:
    """Read-only snapshot of the user's notes, taken before the conversation starts."""

    documents_directory: Path
    files: tuple[NoteFile, ...] = ()
    selected_note: Optional[Path] = None
    editor_content: str = ""

    @property
    def tags(self) -> list[str]:
        """Unique tags across all notes, sorted."""
        return sorted({tag for note in self.files for tag in note.tags})

    def find_note(self, title: str) -> Optional[NoteFile]:
        """Case-insensitive match against display title or filename."""
        lower = title.lower()
        return next(
            (f for f in self.files if f.title.lower() == lower or f.name.lower() == lower),
            None,
        )

    def current_note(self) -> Optional[NoteFile]:
        if self.selected_note is None:
            return None
        return next((f for f in self.files if f.path == self.selected_note), None)
