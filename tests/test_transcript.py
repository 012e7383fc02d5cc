"""Tests for transcript rebuilding and the system prompt."""

from hashy_ai.prompt import MAX_NOTE_CONTEXT, build_system_prompt
from hashy_ai.transcript import build_transcript
from hashy_ai.types import ChatMessage, Role


class TestBuildTranscript:
    def test_system_first_then_history_in_order(self):
        history = [
            ChatMessage(Role.USER, "one"),
            ChatMessage(Role.ASSISTANT, "two"),
            ChatMessage(Role.USER, "three"),
        ]
        transcript = build_transcript("sys", history)

        assert transcript == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "one"},
            {"role": "assistant", "content": "two"},
            {"role": "user", "content": "three"},
        ]

    def test_tool_entries_are_dropped(self):
        history = [
            ChatMessage(Role.USER, "make a note"),
            ChatMessage(Role.TOOL, "📝 Created \"Test\""),
            ChatMessage(Role.ASSISTANT, "Done"),
            ChatMessage(Role.TOOL, "🔍 Searched notes"),
        ]
        transcript = build_transcript("sys", history)

        assert [m["role"] for m in transcript] == ["system", "user", "assistant"]
        assert all(m["role"] != "tool" for m in transcript)

    def test_empty_history(self):
        assert build_transcript("sys", []) == [{"role": "system", "content": "sys"}]


class TestSystemPrompt:
    def test_note_count(self):
        assert "The user has 3 notes." in build_system_prompt(3)

    def test_tags_only_when_present(self):
        assert "Existing tags" not in build_system_prompt(0, [])
        prompt = build_system_prompt(2, ["home", "travel"])
        assert "Existing tags in the project: home, travel." in prompt

    def test_current_note_is_truncated(self):
        prompt = build_system_prompt(1, [], "x" * (MAX_NOTE_CONTEXT + 500))

        assert "currently viewing this note" in prompt
        assert prompt.endswith("x" * MAX_NOTE_CONTEXT)
        assert "x" * (MAX_NOTE_CONTEXT + 1) not in prompt

    def test_empty_note_context_is_skipped(self):
        assert "currently viewing" not in build_system_prompt(1, [], "")
