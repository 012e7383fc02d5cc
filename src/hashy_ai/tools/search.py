"""Tools that search and list notes."""

from __future__ import annotations

import logging
from typing import Any

from hashy_ai import storage
from hashy_ai.tools.base import Tool, error_payload, to_json

__all__ = ["SearchNotesTool", "FullTextSearchTool", "ListNotesTool", "ListTagsTool"]

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 20
MAX_LISTED_NOTES = 50
SNIPPET_RADIUS = 50


class SearchNotesTool(Tool):
    name = "search_notes"
    description = "Search for notes by title or tag"
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": (
                    "Search query to match against note titles and tags. "
                    "Use empty string to list all notes."
                ),
            }
        },
        "required": ["query"],
    }
    icon = "🔍"

    async def call(self, arguments: dict[str, Any]) -> str:
        query = self.optional_str(arguments, "query").lower()
        if not query:
            matches = list(self.context.files)
        else:
            matches = [
                f
                for f in self.context.files
                if query in f.title.lower()
                or query in f.name.lower()
                or any(query in tag.lower() for tag in f.tags)
            ]
        return to_json(
            {
                "results": [f.title for f in matches[:MAX_SEARCH_RESULTS]],
                "count": len(matches),
            }
        )

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f"{self.icon} Searched notes"


class FullTextSearchTool(Tool):
    name = "full_text_search"
    description = "Search inside note body text for matching content"
    parameters = {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Text to search for inside note content"}
        },
        "required": ["query"],
    }
    icon = "🔍"

    async def call(self, arguments: dict[str, Any]) -> str:
        query = self.optional_str(arguments, "query").lower()
        if not query:
            return error_payload("Query cannot be empty")

        results: list[dict[str, str]] = []
        for note in self.context.files:
            try:
                body = storage.note_body(storage.load_content(note))
            except OSError as exc:
                # Notes that vanished since the snapshot are skipped
                logger.debug("Skipping %s: %s", note.name, exc)
                continue

            index = body.lower().find(query)
            if index < 0:
                continue
            start = max(0, index - SNIPPET_RADIUS)
            end = min(len(body), index + len(query) + SNIPPET_RADIUS)
            snippet = body[start:end].replace("\n", " ")
            results.append({"title": note.title, "snippet": snippet})
            if len(results) >= MAX_SEARCH_RESULTS:
                break

        return to_json({"results": results, "count": len(results)})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f"{self.icon} Full-text search"


class ListNotesTool(Tool):
    name = "list_notes"
    description = "List all notes with their titles, icons, and tags"
    icon = "📋"

    async def call(self, arguments: dict[str, Any]) -> str:
        notes = [
            {"title": f.title, "icon": f.icon or "", "tags": list(f.tags)}
            for f in self.context.files[:MAX_LISTED_NOTES]
        ]
        return to_json({"notes": notes, "count": len(self.context.files)})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f"{self.icon} Listed notes"


class ListTagsTool(Tool):
    name = "list_tags"
    description = "List all unique tags across all notes"
    icon = "🏷"

    async def call(self, arguments: dict[str, Any]) -> str:
        tags = self.context.tags
        return to_json({"tags": tags, "count": len(tags)})

    def summarize(self, arguments: dict[str, Any]) -> str:
        return f"{self.icon} Listed tags"
