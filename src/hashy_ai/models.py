"""
Supported model catalogs and backend routing.

Update the catalogs when providers release new models. Routing is a pure
function of the enabled backend set and the model identifier string.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Collection, Final

__all__ = [
    "Backend",
    "ANTHROPIC_MODELS",
    "OPENAI_MODELS",
    "OPENROUTER_MODELS",
    "ANTHROPIC_ROUTING",
    "OPENAI_ROUTING",
    "ALL_BACKENDS",
    "route",
]


class Backend(StrEnum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OPENROUTER = "openrouter"


ALL_BACKENDS: Final[frozenset[Backend]] = frozenset(Backend)

# Catch-all backend, uses vendor/model identifiers
OPENROUTER_MODELS: Final[tuple[str, ...]] = (
    "anthropic/claude-sonnet-4.5",
    "anthropic/claude-opus-4.5",
    "google/gemini-3-flash-preview",
    "google/gemini-2.5-flash",
    "google/gemini-2.5-flash-lite",
    "deepseek/deepseek-v3.2",
    "moonshotai/kimi-k2.5",
    "minimax/minimax-m2.1",
    "x-ai/grok-4.1-fast",
    "z-ai/glm-5",
)

OPENAI_MODELS: Final[tuple[str, ...]] = (
    "gpt-5.2",
    "gpt-5.1",
    "gpt-5-mini",
    "gpt-5-nano",
    "gpt-4.1",
)

ANTHROPIC_MODELS: Final[tuple[str, ...]] = (
    "claude-opus-4-6",
    "claude-sonnet-4-5-20250929",
    "claude-haiku-4-5-20251001",
    "claude-sonnet-4-20250514",
)

# Aliases keep custom model entries routing to the direct API
ANTHROPIC_ALIASES: Final[tuple[str, ...]] = (
    "claude-sonnet-4-5",
    "claude-haiku-4-5",
)

ANTHROPIC_ROUTING: Final[frozenset[str]] = frozenset(ANTHROPIC_MODELS + ANTHROPIC_ALIASES)
OPENAI_ROUTING: Final[frozenset[str]] = frozenset(OPENAI_MODELS)


def route(model: str, enabled: Collection[Backend] = ALL_BACKENDS) -> Backend:
    """
    Pick the backend that serves *model*.

    Priority: the Anthropic catalog (only when that backend is enabled),
    then the OpenAI catalog, then the OpenRouter catch-all. Exactly one
    backend is chosen and there is no fallback between them.
    """
    if Backend.ANTHROPIC in enabled and model in ANTHROPIC_ROUTING:
        return Backend.ANTHROPIC
    if model in OPENAI_ROUTING:
        return Backend.OPENAI
    return Backend.OPENROUTER
