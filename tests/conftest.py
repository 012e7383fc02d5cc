"""Shared fixtures: a small note vault and a scripted provider."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence, Union

import pytest

from hashy_ai import storage
from hashy_ai.tools import NoteToolContext
from hashy_ai.types import GenerationResult, ToolCallRequest


class ScriptedProvider:
    """Provider double that replays canned results and records every transcript."""

    def __init__(
        self,
        script: Union[Sequence[GenerationResult], Callable[[int], GenerationResult]],
        model: str = "test-model",
    ) -> None:
        self.model = model
        self._script = script
        self.transcripts: list[list[dict[str, Any]]] = []
        self.params: list[dict[str, Any] | None] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.transcripts)

    async def generate(self, messages, *, params=None) -> GenerationResult:
        self.transcripts.append([dict(m) for m in messages])
        self.params.append(params)
        index = len(self.transcripts) - 1
        if callable(self._script):
            return self._script(index)
        return self._script[index]

    async def aclose(self) -> None:
        self.closed = True


def tool_call(name: str, call_id: str = "call_1", **arguments: Any) -> ToolCallRequest:
    return ToolCallRequest(id=call_id, name=name, arguments=arguments)


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "notes"
    directory.mkdir()
    (directory / "01AAAAAAAAAAAAAAAAAAAAAAAA.md").write_text(
        "---\nicon: 🛒\ntitle: Groceries\ntags:\n- shopping\n- home\n---\n\nMilk and eggs\n",
        encoding="utf-8",
    )
    (directory / "01BBBBBBBBBBBBBBBBBBBBBBBB.md").write_text(
        "---\ntitle: Trip Plan\ntags:\n- travel\n---\n\nBook the train to Lyon.\nPack light.\n",
        encoding="utf-8",
    )
    (directory / "scratch.md").write_text("No frontmatter here, just text.\n", encoding="utf-8")
    return directory


@pytest.fixture
def tool_context(notes_dir: Path) -> NoteToolContext:
    files = tuple(storage.scan_notes(notes_dir))
    return NoteToolContext(
        documents_directory=notes_dir,
        files=files,
        selected_note=notes_dir / "01BBBBBBBBBBBBBBBBBBBBBBBB.md",
        editor_content="Book the train to Lyon.",
    )
