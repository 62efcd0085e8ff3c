"""Core components for llmls."""

from __future__ import annotations

from .errors import ConfigError, LlmlsError, RegistryError
from .models import (
    LocalDetails,
    ModelRecord,
    ModelSource,
    extract_provider,
)
from .search import (
    apply_filters,
    filter_models,
    filter_models_by_fields,
    glob_match,
    sort_models_by_created_desc,
)
from .sources import (
    ModelCatalog,
    fetch_ollama_models,
    fetch_openrouter_models,
)

__all__ = [
    # Errors
    "LlmlsError",
    "RegistryError",
    "ConfigError",
    # Models
    "LocalDetails",
    "ModelRecord",
    "ModelSource",
    "extract_provider",
    # Search
    "apply_filters",
    "filter_models",
    "filter_models_by_fields",
    "glob_match",
    "sort_models_by_created_desc",
    # Sources
    "ModelCatalog",
    "fetch_ollama_models",
    "fetch_openrouter_models",
]
