"""
Tool interface shared by every note operation.

A tool advertises a name, a description and a JSON-schema for its arguments,
and runs asynchronously against a `NoteToolContext`, returning JSON text.
Failures that the model should see (missing note, bad input) are returned as
``{"error": ...}`` payloads rather than raised.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from hashy_ai.tools.context import NoteToolContext

__all__ = ["Tool", "ToolArgumentError", "to_json", "error_payload"]


class ToolArgumentError(ValueError):
    """The model supplied arguments that do not satisfy the tool's schema."""


def to_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def error_payload(message: str) -> str:
    return to_json({"error": message})


class Tool(ABC):
    name: ClassVar[str]
    description: ClassVar[str]
    parameters: ClassVar[dict[str, Any]] = {"type": "object", "properties": {}}

    # Prefix for progress summaries
    icon: ClassVar[str] = "⚙"

    def __init__(self, context: NoteToolContext) -> None:
        self.context = context

    def definition(self) -> dict[str, Any]:
        """Neutral (function-style) definition advertised to the model."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    @abstractmethod
    async def call(self, arguments: dict[str, Any]) -> str: ...

    def summarize(self, arguments: dict[str, Any]) -> str:
        """Short human-readable progress line for one call of this tool."""
        return f"{self.icon} {self.name}"

    # --- argument helpers --------------------------------------------------
    def require_str(self, arguments: dict[str, Any], key: str) -> str:
        value = arguments.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ToolArgumentError(f"Missing required argument: {key}")
        return value.strip()

    @staticmethod
    def optional_str(arguments: dict[str, Any], key: str, default: str = "") -> str:
        value = arguments.get(key)
        return value if isinstance(value, str) else default

    @staticmethod
    def optional_tags(arguments: dict[str, Any], key: str = "tags") -> list[str]:
        value = arguments.get(key)
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            return []
        return [str(tag).strip() for tag in value if str(tag).strip()]

    @staticmethod
    def title_of(arguments: dict[str, Any], key: str = "title") -> str:
        value = arguments.get(key)
        return value if isinstance(value, str) and value else "note"
