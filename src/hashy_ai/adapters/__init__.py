"""Pure transformation adapters between the neutral transcript and each backend."""

from .openai import OpenAIRequestAdapter
from .anthropic import AnthropicRequestAdapter

# OpenRouter speaks the OpenAI chat-completions protocol
OpenRouterRequestAdapter = OpenAIRequestAdapter

__all__ = [
    "OpenAIRequestAdapter",
    "AnthropicRequestAdapter",
    "OpenRouterRequestAdapter",
]
