"""Runtime configuration: API keys and process-wide backend settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final, Mapping

from dotenv import load_dotenv

from hashy_ai.models import ALL_BACKENDS, Backend

__all__ = ["APIKeys", "Settings", "ENV_VARS"]

ENV_VARS: Final[dict[Backend, str]] = {
    Backend.ANTHROPIC: "ANTHROPIC_API_KEY",
    Backend.OPENAI: "OPENAI_API_KEY",
    Backend.OPENROUTER: "OPENROUTER_API_KEY",
}


@dataclass(frozen=True, slots=True)
class APIKeys:
    """One key per backend; an empty string means "not configured"."""

    anthropic: str = ""
    openai: str = ""
    openrouter: str = ""

    def for_backend(self, backend: Backend) -> str:
        return getattr(self, backend.value)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "APIKeys":
        """Read keys from the environment (and ``.env``); missing keys are empty."""
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            **{
                backend.value: environ.get(env_var, "").strip()
                for backend, env_var in ENV_VARS.items()
            }
        )


def _parse_backends(raw: str) -> frozenset[Backend]:
    names = [part.strip().lower() for part in raw.split(",") if part.strip()]
    try:
        return frozenset(Backend(name) for name in names)
    except ValueError as exc:
        raise ValueError(f"Unknown backend in HASHY_ENABLED_BACKENDS: {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Process-wide settings, resolved once at startup.

    Attributes:
        enabled_backends: Backends available for routing. The Anthropic
            catalog is only honoured when Anthropic is in this set.
        timeout: Per-request transport timeout in seconds.
        max_retries: SDK-level retries. The conversation loop itself never
            retries a failed request.
        default_params: Generation parameters sent with every request.
    """

    enabled_backends: frozenset[Backend] = ALL_BACKENDS
    timeout: float = 60.0
    max_retries: int = 0
    default_params: dict = field(default_factory=lambda: {"max_tokens": 4096})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        kwargs: dict = {}
        if raw := environ.get("HASHY_ENABLED_BACKENDS"):
            kwargs["enabled_backends"] = _parse_backends(raw)
        if raw := environ.get("HASHY_TIMEOUT"):
            kwargs["timeout"] = float(raw)
        if raw := environ.get("HASHY_MAX_RETRIES"):
            kwargs["max_retries"] = int(raw)

        params: dict = {"max_tokens": int(environ.get("HASHY_MAX_TOKENS", "4096"))}
        if raw := environ.get("HASHY_TEMPERATURE"):
            params["temperature"] = float(raw)
        kwargs["default_params"] = params
        return cls(**kwargs)
