"""Tool registry and the ordered batch executor."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Sequence

from hashy_ai.tools.base import Tool, ToolArgumentError, error_payload
from hashy_ai.tools.context import NoteToolContext
from hashy_ai.tools.notes import (
    CreateNoteTool,
    DeleteNoteTool,
    ReadCurrentNoteTool,
    ReadNoteTool,
    RenameNoteTool,
    UpdateNoteContentTool,
    UpdateNoteMetadataTool,
)
from hashy_ai.tools.search import (
    FullTextSearchTool,
    ListNotesTool,
    ListTagsTool,
    SearchNotesTool,
)
from hashy_ai.types import ToolCallRequest, ToolCallResult

__all__ = ["DEFAULT_TOOL_TYPES", "ToolRegistry"]

DEFAULT_TOOL_TYPES: tuple[type[Tool], ...] = (
    CreateNoteTool,
    ReadNoteTool,
    UpdateNoteMetadataTool,
    UpdateNoteContentTool,
    DeleteNoteTool,
    SearchNotesTool,
    RenameNoteTool,
    ListTagsTool,
    ReadCurrentNoteTool,
    FullTextSearchTool,
    ListNotesTool,
)


class ToolRegistry:
    """
    Ordered collection of tools keyed by name.

    ``execute`` runs a batch of tool calls one at a time, in order, and always
    returns exactly one result per call. Unknown tools and failing tools turn
    into ``{"error": ...}`` results so the model can adapt on the next round.
    """

    def __init__(
        self,
        tools: Iterable[Tool] = (),
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    @classmethod
    def for_context(cls, context: NoteToolContext, **kwargs) -> "ToolRegistry":
        """The standard note tools bound to *context*."""
        return cls((tool_type(context) for tool_type in DEFAULT_TOOL_TYPES), **kwargs)

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    async def execute(self, calls: Sequence[ToolCallRequest]) -> list[ToolCallResult]:
        return [ToolCallResult(call.id, await self._run(call)) for call in calls]

    async def _run(self, call: ToolCallRequest) -> str:
        tool = self._tools.get(call.name)
        if tool is None:
            self.logger.warning("Model requested unknown tool %r", call.name)
            return error_payload(f"Unknown tool: {call.name}")

        self.logger.debug("Running tool %s", call.name)
        try:
            return await tool.call(call.arguments)
        except ToolArgumentError as exc:
            self.logger.warning("Rejected %s call: %s", call.name, exc)
            return error_payload(str(exc))
        except Exception as exc:
            self.logger.warning("Tool %s failed: %s", call.name, exc, exc_info=True)
            return error_payload(f"{call.name} failed: {exc}")
