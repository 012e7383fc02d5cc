"""Tests for model catalogs and backend routing."""

import pytest

from hashy_ai.models import (
    ALL_BACKENDS,
    ANTHROPIC_ALIASES,
    ANTHROPIC_MODELS,
    OPENAI_MODELS,
    OPENROUTER_MODELS,
    Backend,
    route,
)


class TestRoute:
    @pytest.mark.parametrize("model", ANTHROPIC_MODELS + ANTHROPIC_ALIASES)
    def test_anthropic_catalog_and_aliases(self, model):
        assert route(model) is Backend.ANTHROPIC

    @pytest.mark.parametrize("model", OPENAI_MODELS)
    def test_openai_catalog(self, model):
        assert route(model) is Backend.OPENAI

    @pytest.mark.parametrize(
        "model", OPENROUTER_MODELS + ("mistralai/mistral-large", "my-local-model", "")
    )
    def test_everything_else_goes_to_openrouter(self, model):
        assert route(model) is Backend.OPENROUTER

    def test_anthropic_disabled_falls_through_to_catch_all(self):
        enabled = ALL_BACKENDS - {Backend.ANTHROPIC}
        assert route("claude-sonnet-4-5", enabled) is Backend.OPENROUTER

    def test_openai_unaffected_by_anthropic_toggle(self):
        assert route("gpt-4.1", {Backend.OPENAI}) is Backend.OPENAI

    def test_routing_is_exact_match(self):
        assert route("GPT-4.1") is Backend.OPENROUTER
        assert route("anthropic/claude-sonnet-4.5") is Backend.OPENROUTER
