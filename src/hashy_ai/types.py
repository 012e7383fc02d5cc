"""
Core types for hashy-ai.

Wire messages are plain dicts in a backend-neutral, chat-completions shaped
format; everything provider-specific lives in adapters.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from pathlib import Path
from typing import Any

__all__ = [
    "Role",
    "ChatMessage",
    "ChatResult",
    "GenerationResult",
    "ToolCallRequest",
    "ToolCallResult",
    "WireMessage",
]


# Type alias for backend-neutral transcript entries
WireMessage = dict[str, Any]


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A message in the caller's chat history."""

    role: Role
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(slots=True)
class ToolCallRequest:
    """A model‑agnostic request emitted by the LLM to call a local tool."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass(slots=True)
class ToolCallResult:
    """Payload to send back to the LLM after the tool finished running."""

    id: str  # must match the request id
    content: str


@dataclass(slots=True)
class GenerationResult:
    """Unified result of one provider ``generate`` call."""

    text: str = ""
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    raw: Any = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    def assistant_message(self) -> WireMessage:
        """The neutral assistant transcript entry for this result."""
        message: WireMessage = {"role": "assistant", "content": self.text or None}
        if self.tool_calls:
            message["tool_calls"] = list(self.tool_calls)
        return message


@dataclass(frozen=True, slots=True)
class ChatResult:
    """Terminal output of a conversation: final text plus created notes."""

    text: str
    created_notes: tuple[Path, ...] = ()
