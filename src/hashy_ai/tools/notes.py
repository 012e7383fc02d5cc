"""Tools that create, read, modify and delete individual notes."""

from __future__ import annotations

from typing import Any

from hashy_ai import storage
from hashy_ai.storage import NoteFrontmatter
from hashy_ai.tools.base import Tool, error_payload, to_json

__all__ = [
    "CreateNoteTool",
    "ReadNoteTool",
    "ReadCurrentNoteTool",
    "UpdateNoteMetadataTool",
    "UpdateNoteContentTool",
    "DeleteNoteTool",
    "RenameNoteTool",
]

_NOT_FOUND = "Note not found"

_TITLE = {"type": "string", "description": "The title of the note"}
_TAGS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "1-3 short lowercase tags (single words or hyphenated-words, no spaces)",
}
_ICON = {"type": "string", "description": "A single emoji icon that represents the note"}


class CreateNoteTool(Tool):
    name = "create_note"
    description = "Create a new note with title, icon, tags, and content"
    parameters = {
        "type": "object",
        "properties": {
            "title": _TITLE,
            "icon": _ICON,
            "tags": _TAGS,
            "content": {"type": "string", "description": "The markdown body content of the note"},
        },
        "required": ["title", "content"],
    }
    icon = "📝"

    async def call(self, arguments: dict[str, Any]) -> str:
        title = self.require_str(arguments, "title")
        path = storage.create_note(
            self.context.documents_directory,
            title,
            content=self.optional_str(arguments, "content"),
            icon=self.optional_str(arguments, "icon") or None,
            tags=self.optional_tags(arguments),
        )
        return to_json({"success": True, "title": title, "url": path.name})

    def summarize(self, arguments: dict[str, Any]) -> str:
        icon = self.optional_str(arguments, "icon") or self.icon
        return f'{icon} Created "{self.title_of(arguments)}"'


class ReadNoteTool(Tool):
    name = "read_note"
    description = "Read the full content of a note by its title"
    parameters = {
        "type": "object",
        "properties": {"title": {"type": "string", "description": "The title of the note to read"}},
        "required": ["title"],
    }
    icon = "📖"

    async def call(self, arguments: dict[str, Any]) -> str:
        note = self.context.find_note(self.require_str(arguments, "title"))
        if note is None:
            return error_payload(_NOT_FOUND)
        return to_json({"title": note.title, "content": storage.load_content(note)})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f'{self.icon} Read "{self.title_of(arguments)}"'


class ReadCurrentNoteTool(Tool):
    name = "read_current_note"
    description = "Read the currently open note in the editor"
    icon = "📖"

    async def call(self, arguments: dict[str, Any]) -> str:
        note = self.context.current_note()
        if note is None:
            return error_payload("No note is currently open")
        return to_json({"title": note.title, "content": storage.load_content(note)})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f"{self.icon} Read current note"


class UpdateNoteMetadataTool(Tool):
    name = "update_note_metadata"
    description = "Update an existing note's icon and/or tags"
    parameters = {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "The title of the note to update"},
            "icon": {"type": "string", "description": "New emoji icon for the note"},
            "tags": _TAGS,
        },
        "required": ["title"],
    }
    icon = "✏️"

    async def call(self, arguments: dict[str, Any]) -> str:
        note = self.context.find_note(self.require_str(arguments, "title"))
        if note is None:
            return error_payload(_NOT_FOUND)

        content = storage.load_content(note)
        fm = storage.parse_frontmatter(content) or NoteFrontmatter()
        # Empty values leave the existing metadata untouched
        if icon := self.optional_str(arguments, "icon"):
            fm.icon = icon
        if tags := self.optional_tags(arguments):
            fm.tags = tags
        storage.save_content(storage.update_frontmatter(fm, content), note)
        return to_json({"success": True, "title": note.title})

    def summarize(self, arguments: dict[str, Any]) -> str:
        icon = self.optional_str(arguments, "icon") or self.icon
        return f'{icon} Updated "{self.title_of(arguments)}"'


class UpdateNoteContentTool(Tool):
    name = "update_note_content"
    description = "Replace or append to a note's body content"
    parameters = {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "The title of the note to update"},
            "content": {"type": "string", "description": "The new markdown content"},
            "mode": {
                "type": "string",
                "enum": ["replace", "append"],
                "description": "Either replace or append",
            },
        },
        "required": ["title", "content"],
    }
    icon = "📝"

    async def call(self, arguments: dict[str, Any]) -> str:
        note = self.context.find_note(self.require_str(arguments, "title"))
        if note is None:
            return error_payload(_NOT_FOUND)

        new_content = self.optional_str(arguments, "content")
        mode = self.optional_str(arguments, "mode", "replace").lower()
        if mode not in ("replace", "append"):
            return error_payload(f"Unknown mode: {mode}")

        existing = storage.load_content(note)
        fm = storage.parse_frontmatter(existing) or NoteFrontmatter()
        body = storage.note_body(existing)
        new_body = f"{body}\n\n{new_content}" if mode == "append" else new_content

        storage.save_content(storage.update_frontmatter(fm, new_body), note)
        return to_json({"success": True, "title": note.title})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f'{self.icon} Updated content of "{self.title_of(arguments)}"'


class DeleteNoteTool(Tool):
    name = "delete_note"
    description = "Delete a note by its title"
    parameters = {
        "type": "object",
        "properties": {"title": {"type": "string", "description": "The title of the note to delete"}},
        "required": ["title"],
    }
    icon = "🗑"

    async def call(self, arguments: dict[str, Any]) -> str:
        note = self.context.find_note(self.require_str(arguments, "title"))
        if note is None:
            return error_payload(_NOT_FOUND)
        storage.delete_note(note)
        return to_json({"success": True, "title": note.title})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f'{self.icon} Deleted "{self.title_of(arguments)}"'


class RenameNoteTool(Tool):
    name = "rename_note"
    description = "Change a note's title"
    parameters = {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "The current title of the note"},
            "newTitle": {"type": "string", "description": "The new title for the note"},
        },
        "required": ["title", "newTitle"],
    }
    icon = "✏️"

    async def call(self, arguments: dict[str, Any]) -> str:
        title = self.require_str(arguments, "title")
        new_title = self.require_str(arguments, "newTitle")
        note = self.context.find_note(title)
        if note is None:
            return error_payload(_NOT_FOUND)

        # The filename is an id; renaming only rewrites the frontmatter title
        content = storage.load_content(note)
        fm = storage.parse_frontmatter(content) or NoteFrontmatter()
        fm.title = new_title
        storage.save_content(storage.update_frontmatter(fm, content), note)
        return to_json({"success": True, "oldTitle": title, "newTitle": new_title})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f'{self.icon} Renamed to "{self.title_of(arguments, "newTitle")}"'
