"""
Typed error surface of the conversation engine.

Noisy SDK exceptions are translated into `ApiError` / `ProviderError` while
the original exception is preserved for full tracebacks.
"""

from __future__ import annotations

import logging
from typing import Final, Optional

import anthropic
import openai

__all__: tuple[str, ...] = (
    "AIError",
    "NoAPIKeyError",
    "EmptyResponseError",
    "ApiError",
    "ProviderError",
    "classify_error",
)


class AIError(RuntimeError):
    """Base class; ``str(exc)`` is a short message safe to show to a user."""

    original_exc: Optional[Exception] = None


class NoAPIKeyError(AIError):
    def __init__(self, backend: str = "") -> None:
        super().__init__("No API key set. Open Settings to add an API key.")
        self.backend = backend


class EmptyResponseError(AIError):
    def __init__(self, model: str = "") -> None:
        super().__init__("Received an empty response from the model.")
        self.model = model


class ApiError(AIError):
    """The backend answered with an error status or could not be reached.

    Attributes:
        model: Model identifier the request was made for.
        status: HTTP status code as text, or a short transport label.
        detail: Raw detail reported by the backend.
    """

    def __init__(
        self,
        model: str,
        status: str,
        detail: str,
        original_exc: Optional[Exception] = None,
    ) -> None:
        super().__init__(f"[{model}] {status}: {detail}")
        self.model = model
        self.status = status
        self.detail = detail
        self.original_exc = original_exc
        if original_exc is not None:
            self.__cause__ = original_exc


class ProviderError(AIError):
    def __init__(self, message: str, original_exc: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.original_exc = original_exc
        if original_exc is not None:
            self.__cause__ = original_exc


STATUS_ERRORS: Final = (openai.APIStatusError, anthropic.APIStatusError)

CONN_ERRORS: Final = (
    openai.APIConnectionError,
    anthropic.APIConnectionError,
    TimeoutError,
    ConnectionError,
)

API_ERRORS: Final = (openai.APIError, anthropic.APIError)


def _detail(exc: Exception) -> str:
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


def classify_error(
    exc: Exception,
    model: str,
    logger: Optional[logging.Logger] = None,
) -> AIError:
    """Wrap an SDK exception in an `AIError` with a concise message."""
    log = logger or logging.getLogger(__name__)

    if isinstance(exc, AIError):
        return exc

    # Status errors first: in both SDKs they subclass APIError
    if isinstance(exc, STATUS_ERRORS):
        wrapped: AIError = ApiError(model, str(exc.status_code), _detail(exc), exc)
    elif isinstance(exc, CONN_ERRORS):
        wrapped = ApiError(model, "connection", _detail(exc), exc)
    elif isinstance(exc, API_ERRORS):
        wrapped = ApiError(model, "error", _detail(exc), exc)
    else:
        wrapped = ProviderError(f"{exc.__class__.__name__}: {exc}", exc)

    log.error("Provider request failed: %s", wrapped)
    return wrapped
