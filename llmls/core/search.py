"""Model filtering and ordering for llmls.

Two filter modes, one per invocation:
- Unified search: one glob pattern, OR across id, name and provider
  (and optionally description)
- Explicit fields: provider / model / description substrings, AND-ed

Example:
    >>> glob_match("anthropic/*", "Anthropic/claude-3-opus")
    True
    >>> glob_match("a?c", "abbc")
    False
"""

from __future__ import annotations

import re
from typing import Sequence

from .models import ModelRecord


def _glob_to_regex(pattern: str) -> str:
    """Translate * and ? to regex, escaping everything else."""
    regex = re.escape(pattern)
    regex = regex.replace(r"\*", ".*").replace(r"\?", ".")
    return regex


def glob_match(pattern: str, candidate: str) -> bool:
    """Case-insensitive, whole-string glob match.

    ``*`` matches any sequence (including "/") and ``?`` exactly one
    character. All other characters are literal.

    Args:
        pattern: Glob pattern
        candidate: String to test

    Returns:
        True if the whole candidate matches the pattern
    """
    try:
        compiled = re.compile(_glob_to_regex(pattern), re.IGNORECASE | re.DOTALL)
    except re.error:
        return pattern.casefold() == candidate.casefold()
    return compiled.fullmatch(candidate) is not None


def _contains(needle: str, haystack: str) -> bool:
    return needle.casefold() in haystack.casefold()


# =============================================================================
# Unified search mode
# =============================================================================


def matches_pattern(model: ModelRecord, pattern: str, include_description: bool = False) -> bool:
    """Check one record against a unified search pattern."""
    if glob_match(pattern, model.id) or glob_match(pattern, model.name):
        return True
    if pattern.casefold() == model.provider.casefold():
        return True
    return include_description and _contains(pattern, model.description)


def filter_models(
    models: Sequence[ModelRecord],
    pattern: str | None,
    include_description: bool = False,
) -> Sequence[ModelRecord]:
    """Filter models with a single search pattern.

    A model matches if the pattern glob-matches its id or name, equals its
    provider (case-insensitive), or, with include_description, appears in
    its description.

    Args:
        models: Records to filter
        pattern: Glob pattern; empty or None returns models unchanged
        include_description: Also match description substrings

    Returns:
        Matching records in their original order
    """
    if not pattern:
        return models
    return [m for m in models if matches_pattern(m, pattern, include_description)]


# =============================================================================
# Explicit field mode
# =============================================================================


def filter_models_by_fields(
    models: Sequence[ModelRecord],
    provider: str | None = None,
    model: str | None = None,
    description: str | None = None,
) -> Sequence[ModelRecord]:
    """Filter models by field-scoped substrings, all of which must match.

    Args:
        models: Records to filter
        provider: Substring of the provider tag
        model: Substring of the id or the name
        description: Substring of the description

    Returns:
        Matching records in their original order (models itself if no
        filter is given)
    """
    if not (provider or model or description):
        return models

    def keep(m: ModelRecord) -> bool:
        if provider and not _contains(provider, m.provider):
            return False
        if model and not (_contains(model, m.id) or _contains(model, m.name)):
            return False
        if description and not _contains(description, m.description):
            return False
        return True

    return [m for m in models if keep(m)]


def apply_filters(
    models: Sequence[ModelRecord],
    pattern: str | None = None,
    provider: str | None = None,
    model: str | None = None,
    description: str | None = None,
    include_description: bool = False,
) -> Sequence[ModelRecord]:
    """Pick the filter mode and apply it.

    Any field filter selects explicit mode; otherwise the pattern is used
    in unified search mode.
    """
    if provider or model or description:
        return filter_models_by_fields(
            models, provider=provider, model=model, description=description
        )
    return filter_models(models, pattern, include_description=include_description)


# =============================================================================
# Ordering
# =============================================================================


def sort_models_by_created_desc(models: Sequence[ModelRecord]) -> list[ModelRecord]:
    """Sort models newest first. Equal timestamps keep their input order."""
    return sorted(models, key=lambda m: m.created, reverse=True)


__all__ = [
    "glob_match",
    "matches_pattern",
    "filter_models",
    "filter_models_by_fields",
    "apply_filters",
    "sort_models_by_created_desc",
]
