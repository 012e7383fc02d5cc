"""Tests for the OpenAI and Anthropic request adapters."""

import json

import pytest
from anthropic.types import Message
from openai.types.chat import ChatCompletion

from hashy_ai.adapters import AnthropicRequestAdapter, OpenAIRequestAdapter
from hashy_ai.params import normalize_params
from hashy_ai.types import GenerationResult, ToolCallRequest

TOOL_DEF = {
    "type": "function",
    "function": {
        "name": "read_note",
        "description": "Read a note",
        "parameters": {
            "type": "object",
            "properties": {"title": {"type": "string"}},
            "required": ["title"],
        },
    },
}


def _transcript_with_tools():
    calls = [
        ToolCallRequest(id="call_1", name="read_note", arguments={"title": "Groceries"}),
        ToolCallRequest(id="call_2", name="list_tags", arguments={}),
    ]
    return [
        {"role": "system", "content": "Be helpful"},
        {"role": "user", "content": "What do I need to buy?"},
        GenerationResult(text="Let me check.", tool_calls=calls).assistant_message(),
        {"role": "tool", "tool_call_id": "call_1", "name": "read_note", "content": '{"content": "Milk"}'},
        {"role": "tool", "tool_call_id": "call_2", "name": "list_tags", "content": '{"tags": []}'},
    ]


def _completion(message: dict) -> ChatCompletion:
    return ChatCompletion.model_validate(
        {
            "id": "cmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4.1",
            "choices": [{"index": 0, "finish_reason": "stop", "message": message}],
        }
    )


def _anthropic_message(content: list[dict]) -> Message:
    return Message.model_validate(
        {
            "id": "msg_1",
            "type": "message",
            "role": "assistant",
            "model": "claude-sonnet-4-5",
            "content": content,
            "stop_reason": "end_turn",
            "stop_sequence": None,
            "usage": {"input_tokens": 10, "output_tokens": 5},
        }
    )


class TestOpenAIRequestAdapter:
    @pytest.fixture
    def adapter(self):
        return OpenAIRequestAdapter()

    def test_to_provider_basic(self, adapter):
        messages = [{"role": "system", "content": "Be helpful"}, {"role": "user", "content": "Hi"}]
        result = adapter.to_provider(messages, normalize_params({"max_tokens": 100}))

        assert result["messages"] == messages
        assert result["max_tokens"] == 100
        assert "extra" not in result
        assert "tools" not in result

    def test_to_provider_tool_round(self, adapter):
        result = adapter.to_provider(_transcript_with_tools(), normalize_params({"tools": [TOOL_DEF]}))
        messages = result["messages"]

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "tool", "tool"]
        assistant = messages[2]
        assert assistant["content"] == "Let me check."
        assert [tc["id"] for tc in assistant["tool_calls"]] == ["call_1", "call_2"]
        assert json.loads(assistant["tool_calls"][0]["function"]["arguments"]) == {"title": "Groceries"}
        assert [m["tool_call_id"] for m in messages[3:]] == ["call_1", "call_2"]
        assert result["tools"] == [TOOL_DEF]

    def test_assistant_without_text_has_null_content(self, adapter):
        entry = GenerationResult(
            tool_calls=[ToolCallRequest(id="c", name="list_tags", arguments={})]
        ).assistant_message()
        result = adapter.to_provider([entry], normalize_params(None))

        assert result["messages"][0]["content"] is None

    def test_extra_params_are_flattened(self, adapter):
        result = adapter.to_provider(
            [{"role": "user", "content": "Hi"}], normalize_params({"reasoning_effort": "low"})
        )
        assert result["reasoning_effort"] == "low"

    def test_from_provider_text(self, adapter):
        result = adapter.from_provider(_completion({"role": "assistant", "content": "Hello"}))

        assert result.text == "Hello"
        assert result.has_tool_calls is False

    def test_from_provider_tool_calls_keep_order(self, adapter):
        raw = _completion(
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {"id": "a", "type": "function", "function": {"name": "search_notes", "arguments": '{"query": "x"}'}},
                    {"id": "b", "type": "function", "function": {"name": "list_tags", "arguments": ""}},
                ],
            }
        )
        result = adapter.from_provider(raw)

        assert result.text == ""
        assert [(c.id, c.name) for c in result.tool_calls] == [("a", "search_notes"), ("b", "list_tags")]
        assert result.tool_calls[0].arguments == {"query": "x"}
        assert result.tool_calls[1].arguments == {}

    def test_malformed_arguments_become_empty_dict(self, adapter):
        raw = _completion(
            {
                "role": "assistant",
                "tool_calls": [
                    {"id": "id1", "type": "function", "function": {"name": "test", "arguments": "{not valid json"}}
                ],
            }
        )
        result = adapter.from_provider(raw)

        assert len(result.tool_calls) == 1
        assert result.tool_calls[0].arguments == {}


class TestAnthropicRequestAdapter:
    @pytest.fixture
    def adapter(self):
        return AnthropicRequestAdapter()

    def test_system_is_lifted_out(self, adapter):
        result = adapter.to_provider(
            [{"role": "system", "content": "Be helpful"}, {"role": "user", "content": "Hi"}],
            normalize_params(None),
        )

        assert result["system"] == "Be helpful"
        assert result["messages"] == [{"role": "user", "content": "Hi"}]
        assert result["max_tokens"] == 4096

    def test_empty_history_entries_are_skipped(self, adapter):
        result = adapter.to_provider(
            [
                {"role": "system", "content": "Be helpful"},
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": ""},
                {"role": "user", "content": "Still there?"},
            ],
            normalize_params(None),
        )

        assert result["messages"] == [
            {"role": "user", "content": "Hi"},
            {"role": "user", "content": "Still there?"},
        ]

    def test_tool_round_conversion(self, adapter):
        result = adapter.to_provider(_transcript_with_tools(), normalize_params({"tools": [TOOL_DEF]}))
        messages = result["messages"]

        assert [m["role"] for m in messages] == ["user", "assistant", "user"]
        assistant = messages[1]["content"]
        assert assistant[0] == {"type": "text", "text": "Let me check."}
        assert [b["id"] for b in assistant[1:]] == ["call_1", "call_2"]
        assert assistant[1]["input"] == {"title": "Groceries"}

        # Both results share one user turn, in call order
        results = messages[2]["content"]
        assert [b["type"] for b in results] == ["tool_result", "tool_result"]
        assert [b["tool_use_id"] for b in results] == ["call_1", "call_2"]

        assert result["tools"] == [
            {
                "name": "read_note",
                "description": "Read a note",
                "input_schema": TOOL_DEF["function"]["parameters"],
            }
        ]

    def test_param_translation(self, adapter):
        result = adapter.to_provider(
            [{"role": "user", "content": "Hi"}],
            normalize_params(
                {"stop": "END", "max_tokens": 50, "parallel_tool_calls": True, "tools": [TOOL_DEF], "tool_choice": "auto"}
            ),
        )

        assert result["stop_sequences"] == ["END"]
        assert result["max_tokens"] == 50
        assert "parallel_tool_calls" not in result
        assert result["tool_choice"] == {"type": "auto"}

    def test_from_provider_mixed_blocks(self, adapter):
        raw = _anthropic_message(
            [
                {"type": "text", "text": "Reading "},
                {"type": "tool_use", "id": "tu_1", "name": "read_note", "input": {"title": "Trip Plan"}},
                {"type": "text", "text": "now."},
                {"type": "tool_use", "id": "tu_2", "name": "list_tags", "input": {}},
            ]
        )
        result = adapter.from_provider(raw)

        assert result.text == "Reading now."
        assert [c.id for c in result.tool_calls] == ["tu_1", "tu_2"]
        assert result.tool_calls[0].arguments == {"title": "Trip Plan"}

    def test_from_provider_empty(self, adapter):
        result = adapter.from_provider(_anthropic_message([]))

        assert result.text == ""
        assert not result.has_tool_calls
