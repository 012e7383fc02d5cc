"""
Generation parameters for provider requests.

Contract
- Standard keys work across backends:
  temperature: float
  max_tokens: int
  top_p: float
  tools: list   (neutral function definitions, see ``Tool.definition``)
  tool_choice: str | dict
  stop: str | list[str]

- Anything else is backend specific and goes under `extra`, which adapters
  forward unchanged.
"""

from __future__ import annotations

from typing import Any, Iterable

__all__ = ["STANDARD_KEYS", "normalize_params", "merge_params", "generation_params"]

STANDARD_KEYS = frozenset(
    {
        "temperature",
        "max_tokens",
        "top_p",
        "tools",
        "tool_choice",
        "stop",
        "user",
        "seed",
        "parallel_tool_calls",
    }
)


def normalize_params(params: dict | None) -> dict:
    """
    Normalize a params dict to a single internal shape.

    Keys outside STANDARD_KEYS are moved into `extra`; an explicit `extra`
    dict from the caller is merged last and wins. None values are kept so
    adapters can decide to drop them.

    >>> normalize_params({"max_tokens": 10, "reasoning_effort": "low"})
    {'max_tokens': 10, 'extra': {'reasoning_effort': 'low'}}
    """
    if params is None:
        return {"extra": {}}
    if not isinstance(params, dict):
        raise TypeError(f"params must be a dict, got {type(params).__name__}")

    user_extra = params.get("extra") or {}
    if not isinstance(user_extra, dict):
        raise TypeError("params['extra'] must be a dict")

    std: dict = {}
    moved: dict = {}
    for key, value in params.items():
        if key == "extra":
            continue
        if key in STANDARD_KEYS:
            std[key] = value
        else:
            moved[key] = value

    std["extra"] = {**moved, **user_extra}
    return std


def merge_params(defaults: dict | None, overrides: dict | None) -> dict:
    """Shallow-merge defaults with overrides (overrides win, `extra` merged per key)."""
    base: dict = dict(defaults or {})
    if overrides:
        base_extra = dict(base.get("extra") or {})
        over_extra = dict(overrides.get("extra") or {})
        for k, v in overrides.items():
            if k != "extra":
                base[k] = v
        base["extra"] = {**base_extra, **over_extra}

    return normalize_params(base)


def generation_params(tools: Iterable[Any], defaults: dict | None = None) -> dict:
    """
    Build the per-conversation request params: defaults plus tool definitions.

    *tools* are ``Tool`` instances; an empty tool set leaves `tools` out so
    backends do not advertise tool calling at all.
    """
    definitions = [tool.definition() for tool in tools]
    overrides: dict[str, Any] = {}
    if definitions:
        overrides["tools"] = definitions
    return merge_params(defaults, overrides)
