"""OpenAI chat-completions adapter for pure request/response transformations."""

from __future__ import annotations

import json
from typing import Any, Sequence

from openai.types.chat import ChatCompletion

from hashy_ai.types import GenerationResult, ToolCallRequest, WireMessage


def _tool_call_to_provider(call: ToolCallRequest) -> dict[str, Any]:
    return {
        "id": call.id,
        "type": "function",
        "function": {
            "name": call.name,
            "arguments": json.dumps(call.arguments, ensure_ascii=False),
        },
    }


def _parse_arguments(raw_args: Any) -> dict[str, Any]:
    if isinstance(raw_args, dict):
        return raw_args
    if isinstance(raw_args, str) and raw_args.strip():
        try:
            parsed = json.loads(raw_args)
        except json.JSONDecodeError:
            # Keep the call so outputs stay aligned; the tool reports bad input
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


class OpenAIRequestAdapter:
    """Adapter for converting between the neutral format and OpenAI format."""

    def to_provider(
        self, messages: Sequence[WireMessage], params: dict[str, Any]
    ) -> dict[str, Any]:
        """Convert neutral messages and normalized params to OpenAI request format."""
        openai_messages: list[dict[str, Any]] = []
        for msg in messages:
            openai_msg: dict[str, Any] = {"role": msg["role"]}

            if msg.get("content") is not None:
                openai_msg["content"] = msg["content"]

            # Assistant turns that requested tools
            if msg.get("tool_calls"):
                openai_msg["tool_calls"] = [
                    _tool_call_to_provider(call) for call in msg["tool_calls"]
                ]
                # OpenAI: content should be null when tool_calls is present
                openai_msg.setdefault("content", None)

            # Tool output entries
            if msg.get("tool_call_id"):
                openai_msg["tool_call_id"] = msg["tool_call_id"]

            if "content" not in openai_msg:
                openai_msg["content"] = ""

            openai_messages.append(openai_msg)

        base_params = {k: v for k, v in params.items() if v is not None}
        extras = base_params.pop("extra", {}) or {}

        # Tool definitions are already in function format
        if not base_params.get("tools"):
            base_params.pop("tools", None)
            base_params.pop("tool_choice", None)

        for k, v in extras.items():
            base_params.setdefault(k, v)

        return {"messages": openai_messages, **base_params}

    def from_provider(self, raw: ChatCompletion) -> GenerationResult:
        """Convert an OpenAI response to a GenerationResult."""
        if not raw.choices or not raw.choices[0].message:
            return GenerationResult(raw=raw)

        message = raw.choices[0].message
        tool_calls = [
            ToolCallRequest(
                id=tc.id,
                name=tc.function.name,
                arguments=_parse_arguments(tc.function.arguments),
            )
            for tc in (message.tool_calls or [])
            if getattr(tc, "function", None) is not None
        ]
        return GenerationResult(text=message.content or "", tool_calls=tool_calls, raw=raw)
