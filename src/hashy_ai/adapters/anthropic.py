"""Anthropic messages adapter for pure request/response transformations."""

from __future__ import annotations

from typing import Any, Sequence

from anthropic.types import Message

from hashy_ai.types import GenerationResult, ToolCallRequest, WireMessage

DEFAULT_MAX_TOKENS = 4096


def _tool_to_provider(tool: dict[str, Any]) -> dict[str, Any]:
    if tool.get("type") != "function":
        return tool
    func = tool["function"]
    return {
        "name": func["name"],
        "description": func.get("description", ""),
        "input_schema": func.get("parameters") or {"type": "object", "properties": {}},
    }


def _tool_choice_to_provider(choice: Any) -> dict[str, Any]:
    if isinstance(choice, str):
        return {"type": "any" if choice == "required" else choice}
    if isinstance(choice, dict) and choice.get("type") == "function":
        return {"type": "tool", "name": choice["function"]["name"]}
    return choice


class AnthropicRequestAdapter:
    """Adapter for converting between the neutral format and Anthropic format."""

    def to_provider(
        self, messages: Sequence[WireMessage], params: dict[str, Any]
    ) -> dict[str, Any]:
        """Convert neutral messages and params to Anthropic request format."""
        anthropic_messages: list[dict[str, Any]] = []
        system_parts: list[str] = []

        last = len(messages) - 1
        for index, msg in enumerate(messages):
            role = msg["role"]

            # System prompt travels as a top-level field
            if role == "system":
                system_parts.append(str(msg.get("content") or ""))
                continue

            if role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": msg["tool_call_id"],
                    "content": msg.get("content", ""),
                }
                # All results for one assistant turn go in a single user message
                previous = anthropic_messages[-1] if anthropic_messages else None
                if (
                    previous is not None
                    and previous["role"] == "user"
                    and isinstance(previous["content"], list)
                    and previous["content"]
                    and previous["content"][-1].get("type") == "tool_result"
                ):
                    previous["content"].append(block)
                else:
                    anthropic_messages.append({"role": "user", "content": [block]})
                continue

            if role == "assistant" and msg.get("tool_calls"):
                content: list[dict[str, Any]] = []
                if msg.get("content"):
                    content.append({"type": "text", "text": msg["content"]})
                content.extend(
                    {
                        "type": "tool_use",
                        "id": call.id,
                        "name": call.name,
                        "input": call.arguments,
                    }
                    for call in msg["tool_calls"]
                )
                anthropic_messages.append({"role": "assistant", "content": content})
                continue

            text = msg.get("content") or ""
            # Empty text blocks are rejected; only the final turn may be blank
            if not text and index != last:
                continue
            anthropic_messages.append({"role": role, "content": text})

        base_params = {k: v for k, v in params.items() if v is not None}
        extras = base_params.pop("extra", {}) or {}

        # Anthropic requires max_tokens
        base_params.setdefault("max_tokens", DEFAULT_MAX_TOKENS)

        if "stop" in base_params:
            stop = base_params.pop("stop")
            base_params["stop_sequences"] = stop if isinstance(stop, list) else [stop]

        # OpenAI-only knobs
        base_params.pop("parallel_tool_calls", None)
        base_params.pop("seed", None)
        if "user" in base_params:
            base_params["metadata"] = {"user_id": base_params.pop("user")}

        if base_params.get("tools"):
            base_params["tools"] = [_tool_to_provider(t) for t in base_params["tools"]]
            if "tool_choice" in base_params:
                base_params["tool_choice"] = _tool_choice_to_provider(base_params["tool_choice"])
        else:
            base_params.pop("tools", None)
            base_params.pop("tool_choice", None)

        for k, v in extras.items():
            base_params.setdefault(k, v)

        request: dict[str, Any] = {"messages": anthropic_messages, **base_params}
        if system_parts:
            request["system"] = "\n\n".join(system_parts)
        return request

    def from_provider(self, raw: Message) -> GenerationResult:
        """Convert an Anthropic response to a GenerationResult."""
        text_parts: list[str] = []
        tool_calls: list[ToolCallRequest] = []

        for block in raw.content or []:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                tool_calls.append(
                    ToolCallRequest(
                        id=block.id,
                        name=block.name,
                        arguments=dict(block.input) if hasattr(block.input, "items") else {},
                    )
                )

        return GenerationResult(text="".join(text_parts), tool_calls=tool_calls, raw=raw)
