"""Rebuild a backend-neutral transcript from the caller's chat history."""

from __future__ import annotations

from typing import Iterable

from hashy_ai.types import ChatMessage, Role, WireMessage

__all__ = ["build_transcript"]


def build_transcript(system_prompt: str, history: Iterable[ChatMessage]) -> list[WireMessage]:
    """
    Return ``[system, *history]`` as wire messages.

    User and assistant entries map 1:1 in order. Tool entries are dropped:
    tool exchanges are not replayed across invocations, each conversation
    regenerates its own inside the loop.
    """
    transcript: list[WireMessage] = [{"role": "system", "content": system_prompt}]
    for message in history:
        if message.role is Role.TOOL:
            continue
        transcript.append({"role": message.role.value, "content": message.content})
    return transcript
