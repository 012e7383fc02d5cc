"""Note operation tools exposed to the model."""

from .base import Tool, ToolArgumentError
from .context import NoteToolContext
from .notes import (
    CreateNoteTool,
    DeleteNoteTool,
    ReadCurrentNoteTool,
    ReadNoteTool,
    RenameNoteTool,
    UpdateNoteContentTool,
    UpdateNoteMetadataTool,
)
from .registry import DEFAULT_TOOL_TYPES, ToolRegistry
from .search import FullTextSearchTool, ListNotesTool, ListTagsTool, SearchNotesTool

__all__ = [
    "Tool",
    "ToolArgumentError",
    "NoteToolContext",
    "ToolRegistry",
    "DEFAULT_TOOL_TYPES",
    "CreateNoteTool",
    "ReadNoteTool",
    "ReadCurrentNoteTool",
    "UpdateNoteMetadataTool",
    "UpdateNoteContentTool",
    "DeleteNoteTool",
    "RenameNoteTool",
    "SearchNotesTool",
    "FullTextSearchTool",
    "ListNotesTool",
    "ListTagsTool",
]
