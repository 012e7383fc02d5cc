"""
Provider clients with a unified ``generate()`` method, and the resolver that
routes a model identifier to exactly one of them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, Self, Sequence

from anthropic import AsyncAnthropic
from anthropic.types import Message
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from hashy_ai.adapters import (
    AnthropicRequestAdapter,
    OpenAIRequestAdapter,
    OpenRouterRequestAdapter,
)
from hashy_ai.config import APIKeys, Settings
from hashy_ai.errors import NoAPIKeyError, classify_error
from hashy_ai.models import Backend, route
from hashy_ai.params import normalize_params
from hashy_ai.types import GenerationResult, WireMessage

__all__ = [
    "RequestAdapter",
    "ProviderClient",
    "BaseAsyncLLM",
    "OpenAILLM",
    "AnthropicLLM",
    "OpenRouterLLM",
    "ProviderResolver",
    "create_llm",
]


class RequestAdapter(Protocol):
    """Protocol for adapting between the neutral transcript and a backend's format."""

    def to_provider(
        self, messages: Sequence[WireMessage], params: dict[str, Any]
    ) -> dict[str, Any]:
        """Convert neutral messages and normalized params to a provider request."""
        ...

    def from_provider(self, raw: Any) -> GenerationResult:
        """Convert a provider response to a GenerationResult."""
        ...


class ProviderClient(Protocol):
    """What the conversation loop needs from a backend."""

    model: str

    async def generate(
        self,
        messages: Sequence[WireMessage],
        *,
        params: dict[str, Any] | None = None,
    ) -> GenerationResult: ...


class BaseAsyncLLM(ABC):
    """
    Abstract base class for async-only provider clients.

    A client is bound to one model. ``generate`` is the only network call in
    the engine; failures are not retried here and surface as `AIError`.
    """

    def __init__(
        self,
        model: str,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.model = model
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__

    @property
    @abstractmethod
    def adapter(self) -> RequestAdapter:
        """Request adapter for this provider."""
        ...

    @abstractmethod
    async def _generate_impl(self, request: dict[str, Any]) -> Any:
        """
        Send one already-adapted request and return the raw provider response.

        Args:
            request: Provider-specific request body, without the model field.
        """
        ...

    async def generate(
        self,
        messages: Sequence[WireMessage],
        *,
        params: dict[str, Any] | None = None,
    ) -> GenerationResult:
        """
        Send the transcript and return a single, non-streamed result.

        Raises:
            ApiError: The backend returned an error status or was unreachable.
            ProviderError: Any other failure while talking to the backend.
        """
        request = self.adapter.to_provider(messages, normalize_params(params))
        self._log(f"Sending request to model {self.model} ({len(messages)} messages)")
        try:
            raw = await self._generate_impl(request)
            return self.adapter.from_provider(raw)
        except Exception as exc:
            raise classify_error(exc, self.model, self.logger) from exc

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """
        Close the underlying async HTTP client. Safe to call multiple times.
        """
        client = getattr(self, "_client", None)
        close = getattr(client, "close", None)
        if close:
            await close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class OpenAILLM(BaseAsyncLLM):
    """
    OpenAI chat-completions client.

    Use ``OpenAILLM.from_client`` when you already have an ``AsyncOpenAI`` instance.
    """

    backend = Backend.OPENAI

    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        timeout: float = 60.0,
        max_retries: int = 0,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: Optional[str] = None,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(model, logger=logger, name=name)
        self._client = AsyncOpenAI(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            base_url=base_url,
            default_headers=default_headers,
        )
        self._adapter = self._make_adapter()

    @classmethod
    def from_client(
        cls,
        model: str,
        client: AsyncOpenAI,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """Build a client around an already-configured ``AsyncOpenAI``."""
        if not isinstance(client, AsyncOpenAI):
            raise TypeError(
                f"{cls.__name__}.from_client expects AsyncOpenAI; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        BaseAsyncLLM.__init__(self, model, logger=logger, name=name)
        self._client = client
        self._adapter = self._make_adapter()
        return self

    def _make_adapter(self) -> RequestAdapter:
        return OpenAIRequestAdapter()

    @property
    def adapter(self) -> RequestAdapter:
        return self._adapter

    async def _generate_impl(self, request: dict[str, Any]) -> ChatCompletion:
        if "max_tokens" in request and self._requires_max_completion_tokens():
            request["max_completion_tokens"] = request.pop("max_tokens")

        # Backend-specific fields the SDK does not model go through extra_body
        passthrough_keys = ("verbosity", "reasoning_effort", "provider")
        extra_body = {k: request.pop(k) for k in passthrough_keys if k in request}
        if extra_body:
            request["extra_body"] = {**request.get("extra_body", {}), **extra_body}

        return await self._client.chat.completions.create(model=self.model, **request)

    def _requires_max_completion_tokens(self) -> bool:
        """Reasoning models reject max_tokens on chat completions."""
        return self.model.startswith(("gpt-5", "o1", "o3", "o4"))


OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterLLM(OpenAILLM):
    """
    Catch-all client for ``vendor/model`` identifiers via OpenRouter's
    OpenAI-compatible endpoint.
    """

    backend = Backend.OPENROUTER

    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        timeout: float = 60.0,
        max_retries: int = 0,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: str = OPENROUTER_BASE_URL,
        app_title: str = "Hashy",
    ) -> None:
        super().__init__(
            model,
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            logger=logger,
            name=name,
            base_url=base_url,
            default_headers={"X-Title": app_title},
        )

    def _make_adapter(self) -> RequestAdapter:
        return OpenRouterRequestAdapter()

    def _requires_max_completion_tokens(self) -> bool:
        # OpenRouter translates max_tokens itself
        return False


class AnthropicLLM(BaseAsyncLLM):
    """
    Anthropic messages client.

    Use ``AnthropicLLM.from_client`` when you already have an ``AsyncAnthropic`` instance.
    """

    backend = Backend.ANTHROPIC

    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        timeout: float = 60.0,
        max_retries: int = 0,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        super().__init__(model, logger=logger, name=name)
        self._client = AsyncAnthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            base_url=base_url,
        )
        self._adapter = AnthropicRequestAdapter()

    @classmethod
    def from_client(
        cls,
        model: str,
        client: AsyncAnthropic,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """Wrap an existing ``AsyncAnthropic`` client."""
        if not isinstance(client, AsyncAnthropic):
            raise TypeError(
                f"AnthropicLLM.from_client expects AsyncAnthropic; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        BaseAsyncLLM.__init__(self, model, logger=logger, name=name)
        self._client = client
        self._adapter = AnthropicRequestAdapter()
        return self

    @property
    def adapter(self) -> RequestAdapter:
        return self._adapter

    async def _generate_impl(self, request: dict[str, Any]) -> Message:
        return await self._client.messages.create(model=self.model, **request)


# Factory for creating provider clients

_LLM_REGISTRY: dict[Backend, type[BaseAsyncLLM]] = {
    Backend.OPENAI: OpenAILLM,
    Backend.ANTHROPIC: AnthropicLLM,
    Backend.OPENROUTER: OpenRouterLLM,
}


def create_llm(
    backend: Backend,
    model: str,
    *,
    api_key: str = "",
    client: AsyncOpenAI | AsyncAnthropic | None = None,
    logger: logging.Logger | None = None,
    **provider_kwargs: Any,
) -> BaseAsyncLLM:
    """
    Factory for creating any supported provider client.

    Args:
        backend: Which backend to use.
        model: Model identifier (e.g. "gpt-4.1" or "google/gemini-2.5-flash").
        api_key: Backend API key. Must be non-empty unless *client* is given.
        client: Optional pre-configured SDK client, used verbatim.
        logger: Optional custom logger.
        **provider_kwargs: Extra constructor args (timeout, max_retries).

    Raises:
        NoAPIKeyError: *api_key* is empty and no *client* was supplied.
    """
    try:
        llm_cls = _LLM_REGISTRY[backend]
    except KeyError as exc:
        raise ValueError(f"Unsupported backend: {backend}") from exc

    if client is not None:
        return llm_cls.from_client(model, client, logger=logger)

    if not api_key:
        raise NoAPIKeyError(backend.value)
    return llm_cls(model, api_key=api_key, logger=logger, **provider_kwargs)


class ProviderResolver:
    """
    Routes a model identifier to a freshly created provider client.

    The key check happens here, before any client exists, so a missing key
    never costs a network round-trip.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.logger = logger or logging.getLogger(__name__)

    def backend_for(self, model: str) -> Backend:
        return route(model, self.settings.enabled_backends)

    def resolve(self, model: str, api_keys: APIKeys) -> ProviderClient:
        """
        Return the client for *model*.

        Raises:
            NoAPIKeyError: The routed backend has no key configured.
        """
        backend = self.backend_for(model)
        api_key = api_keys.for_backend(backend)
        if not api_key:
            self.logger.warning("No API key configured for %s (model %s)", backend, model)
            raise NoAPIKeyError(backend.value)

        self.logger.info("Routing model %s to %s", model, backend)
        return create_llm(
            backend,
            model,
            api_key=api_key,
            logger=self.logger,
            timeout=self.settings.timeout,
            max_retries=self.settings.max_retries,
        )
