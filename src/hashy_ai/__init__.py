"""
hashy-ai - tool-calling conversation engine for a markdown notes app.
"""

from .client import (
    BaseAsyncLLM,
    OpenAILLM,
    AnthropicLLM,
    OpenRouterLLM,
    ProviderResolver,
    create_llm,
)
from .config import APIKeys, Settings
from .conversation import ConversationLoop, send_message
from .errors import AIError, NoAPIKeyError, EmptyResponseError, ApiError, ProviderError
from .models import Backend, route
from .tools import NoteToolContext, Tool, ToolRegistry
from .types import (
    ChatMessage,
    ChatResult,
    GenerationResult,
    Role,
    ToolCallRequest,
    ToolCallResult,
)

__version__ = "0.1.0"

__all__ = [
    "BaseAsyncLLM",
    "OpenAILLM",
    "AnthropicLLM",
    "OpenRouterLLM",
    "ProviderResolver",
    "create_llm",
    "APIKeys",
    "Settings",
    "ConversationLoop",
    "send_message",
    "AIError",
    "NoAPIKeyError",
    "EmptyResponseError",
    "ApiError",
    "ProviderError",
    "Backend",
    "route",
    "NoteToolContext",
    "Tool",
    "ToolRegistry",
    "ChatMessage",
    "ChatResult",
    "GenerationResult",
    "Role",
    "ToolCallRequest",
    "ToolCallResult",
]
