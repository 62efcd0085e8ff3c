"""Tests for llmls.core.search module.

Tests cover:
- glob_match: wildcards, anchoring, case, literal metacharacters
- filter_models: unified search mode
- filter_models_by_fields: explicit AND mode
- apply_filters: mode selection
- sort_models_by_created_desc: ordering and stability
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from llmls.core.models import ModelRecord
from llmls.core.search import (
    apply_filters,
    filter_models,
    filter_models_by_fields,
    glob_match,
    sort_models_by_created_desc,
)


def make_model(model_id: str, name: str = "", created: int = 0, description: str = "") -> ModelRecord:
    return ModelRecord(id=model_id, name=name or model_id, created=created, description=description)


@pytest.fixture
def catalog() -> list[ModelRecord]:
    """A small mixed catalog."""
    return [
        make_model("openai/gpt-4.1", "OpenAI: GPT-4.1", 1000, "Flagship model with vision"),
        make_model("anthropic/claude-3-opus", "Anthropic: Claude 3 Opus", 2000, "Most capable"),
        make_model("openai/gpt-4o-mini", "OpenAI: GPT-4o mini", 1500, "Small and fast"),
        make_model("ollama/llama3.2:8b", "llama3.2:8b", 3000, "llama 8.0B (Q4_K_M) - 4.6 GB"),
    ]


# =============================================================================
# glob_match
# =============================================================================


class TestGlobMatch:
    """Tests for glob_match."""

    @pytest.mark.parametrize(
        "pattern,candidate,expected",
        [
            ("openai/gpt-4.1", "openai/gpt-4.1", True),
            ("OpenAI/GPT-4.1", "openai/gpt-4.1", True),
            ("openai/gpt-4", "openai/gpt-4.1", False),
            ("gpt", "openai/gpt-4.1", False),
        ],
    )
    def test_literal_pattern_is_case_insensitive_equality(self, pattern, candidate, expected):
        """Patterns without wildcards compare whole strings, ignoring case."""
        assert glob_match(pattern, candidate) is expected

    @pytest.mark.parametrize("candidate", ["", "x", "anthropic/claude", "a/b/c\nd"])
    def test_star_matches_everything(self, candidate):
        """A lone * matches any string, including the empty string."""
        assert glob_match("*", candidate) is True

    def test_question_mark_matches_exactly_one(self):
        """? matches exactly one character."""
        assert glob_match("a?c", "abc") is True
        assert glob_match("a?c", "ac") is False
        assert glob_match("a?c", "abbc") is False

    def test_star_substring_search(self):
        """Wrapping in * gives substring behaviour."""
        assert glob_match("*gpt-4*", "openai/gpt-4.1") is True
        assert glob_match("*gpt-4*", "openai/gpt-3.5") is False

    def test_star_crosses_slash(self):
        """* also matches path separators."""
        assert glob_match("anthropic*opus", "anthropic/claude-3-opus") is True

    def test_question_mark_matches_slash(self):
        """? can match a /."""
        assert glob_match("openai?gpt-4.1", "openai/gpt-4.1") is True

    def test_regex_metacharacters_are_literal(self):
        """Characters like . are not regex syntax."""
        assert glob_match("a.b", "a.b") is True
        assert glob_match("a.b", "axb") is False
        assert glob_match("(x)+[y]", "(x)+[y]") is True
        assert glob_match("^a$", "a") is False

    def test_anchored_match(self):
        """The whole candidate must match."""
        assert glob_match("anthropic/*", "x-anthropic/claude") is False

    def test_invalid_regex_falls_back_to_equality(self):
        """A compile failure degrades to case-insensitive equality."""
        import re

        with patch("llmls.core.search.re.compile", side_effect=re.error("bad")):
            assert glob_match("ABC", "abc") is True
            assert glob_match("ABC", "abd") is False


# =============================================================================
# Unified search mode
# =============================================================================


class TestFilterModels:
    """Tests for unified search filtering."""

    def test_no_pattern_returns_input(self, catalog):
        """Empty or missing pattern is the identity."""
        assert filter_models(catalog, None) is catalog
        assert filter_models(catalog, "") is catalog

    def test_glob_on_id(self, catalog):
        """Pattern matches model ids."""
        result = filter_models(catalog, "openai/*")
        assert [m.id for m in result] == ["openai/gpt-4.1", "openai/gpt-4o-mini"]

    def test_glob_on_name(self, catalog):
        """Pattern matches display names."""
        result = filter_models(catalog, "*claude 3*")
        assert [m.id for m in result] == ["anthropic/claude-3-opus"]

    def test_provider_exact_match(self, catalog):
        """A bare provider name matches by exact provider tag."""
        result = filter_models(catalog, "OLLAMA")
        assert [m.id for m in result] == ["ollama/llama3.2:8b"]

    def test_provider_prefix_does_not_match(self, catalog):
        """Provider matching is exact, not substring."""
        assert filter_models(catalog, "open") == []

    def test_description_ignored_by_default(self, catalog):
        """Descriptions are not searched unless requested."""
        assert filter_models(catalog, "vision") == []

    def test_description_search(self, catalog):
        """include_description adds a case-insensitive substring match."""
        result = filter_models(catalog, "VISION", include_description=True)
        assert [m.id for m in result] == ["openai/gpt-4.1"]

    def test_preserves_order(self, catalog):
        """Survivors keep their relative order."""
        result = filter_models(catalog, "*")
        assert result == catalog

    def test_end_to_end_anthropic(self):
        """anthropic/* keeps only the Anthropic record."""
        models = [
            make_model("openai/gpt-4.1", created=1000),
            make_model("anthropic/claude", created=2000),
        ]
        result = filter_models(models, "anthropic/*")
        assert [m.id for m in result] == ["anthropic/claude"]


# =============================================================================
# Explicit field mode
# =============================================================================


class TestFilterModelsByFields:
    """Tests for explicit AND filtering."""

    def test_no_filters_returns_input(self, catalog):
        """No field filter is the identity."""
        assert filter_models_by_fields(catalog) is catalog

    def test_provider_substring(self, catalog):
        """Provider filter is a substring of the provider tag."""
        result = filter_models_by_fields(catalog, provider="OPEN")
        assert [m.id for m in result] == ["openai/gpt-4.1", "openai/gpt-4o-mini"]

    def test_model_matches_id_or_name(self, catalog):
        """Model filter checks id and name."""
        assert [m.id for m in filter_models_by_fields(catalog, model="4o-mini")] == [
            "openai/gpt-4o-mini"
        ]
        assert [m.id for m in filter_models_by_fields(catalog, model="Claude 3")] == [
            "anthropic/claude-3-opus"
        ]

    def test_description_substring(self, catalog):
        """Description filter is a substring match."""
        result = filter_models_by_fields(catalog, description="fast")
        assert [m.id for m in result] == ["openai/gpt-4o-mini"]

    def test_and_semantics(self, catalog):
        """A record matching provider but not model is excluded."""
        result = filter_models_by_fields(catalog, provider="openai", model="opus")
        assert result == []

    def test_all_filters_combined(self, catalog):
        """Every supplied filter must hold."""
        result = filter_models_by_fields(
            catalog, provider="openai", model="gpt", description="flagship"
        )
        assert [m.id for m in result] == ["openai/gpt-4.1"]


class TestApplyFilters:
    """Tests for filter mode selection."""

    def test_field_filters_select_explicit_mode(self, catalog):
        """Field filters use substring semantics, not the pattern."""
        result = apply_filters(catalog, provider="open")
        assert len(result) == 2

    def test_pattern_selects_unified_mode(self, catalog):
        """Without field filters the pattern is applied."""
        result = apply_filters(catalog, pattern="open")
        assert result == []

    def test_nothing_is_identity(self, catalog):
        """No filters at all returns input unchanged."""
        assert apply_filters(catalog) is catalog


# =============================================================================
# Sorting
# =============================================================================


class TestSortModels:
    """Tests for sort_models_by_created_desc."""

    def test_descending(self):
        """Newest first."""
        models = [make_model("a/1", created=100), make_model("a/2", created=300), make_model("a/3", created=200)]
        result = sort_models_by_created_desc(models)
        assert [m.created for m in result] == [300, 200, 100]

    def test_stable_for_equal_timestamps(self):
        """Equal timestamps keep input order."""
        models = [make_model("x/first", created=5), make_model("x/second", created=5), make_model("x/new", created=9)]
        result = sort_models_by_created_desc(models)
        assert [m.id for m in result] == ["x/new", "x/first", "x/second"]

    def test_does_not_mutate_input(self):
        """A new list is returned."""
        models = [make_model("a/1", created=1), make_model("a/2", created=2)]
        sort_models_by_created_desc(models)
        assert [m.id for m in models] == ["a/1", "a/2"]
