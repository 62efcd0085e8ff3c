"""Model records for llmls.

Both catalog sources are normalized into a single ModelRecord:
1. OpenRouter registry - parsed directly from the /api/v1/models payload
2. Ollama API - converted from /api/tags entries, with LocalDetails attached

The provider tag is never stored. It is derived from the record id on
every access.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)

UNKNOWN_PROVIDER = "Unknown"
OLLAMA_PROVIDER = "ollama"

_GIB = 1024 * 1024 * 1024

# =============================================================================
# Enums
# =============================================================================


class ModelSource(str, Enum):
    """Where a model record was fetched from."""

    OPENROUTER = "openrouter"
    OLLAMA = "ollama"


# =============================================================================
# Provider derivation
# =============================================================================


def extract_provider(model_id: str) -> str:
    """Extract the provider tag from a model id.

    Args:
        model_id: Identifier such as "anthropic/claude-3-opus"

    Returns:
        Text before the first "/", or "Unknown" when there is no "/"
        or the id starts with one.
    """
    idx = model_id.find("/")
    if idx > 0:
        return model_id[:idx]
    return UNKNOWN_PROVIDER


# =============================================================================
# Record sub-models
# =============================================================================


class _Lenient(BaseModel):
    """Base for payload sections where the registry may send null."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class Architecture(_Lenient):
    """Model architecture details reported by the registry."""

    modality: str = ""
    input_modalities: list[str] = Field(default_factory=list)
    output_modalities: list[str] = Field(default_factory=list)
    tokenizer: str = ""


class Pricing(_Lenient):
    """Raw per-token prices, as strings exactly as the registry sends them."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    prompt: str = ""
    completion: str = ""
    request: str = ""
    image: str = ""
    web_search: str = ""
    internal_reasoning: str = ""


class TopProvider(_Lenient):
    """Limits of the registry's preferred upstream provider."""

    context_length: int = 0
    max_completion_tokens: int = 0
    is_moderated: bool = False


class LocalDetails(_Lenient):
    """Extra fields only a local Ollama model carries.

    Attributes:
        size: Size on disk in bytes
        format: On-disk format label (e.g., "gguf")
        family: Architecture family (e.g., "llama")
        parameter_size: Parameter count label (e.g., "8.0B")
        quantization_level: Quantization label (e.g., "Q4_K_M")
    """

    size: int = 0
    format: str = ""
    family: str = ""
    parameter_size: str = ""
    quantization_level: str = ""

    @property
    def size_gib(self) -> float:
        """Size in GiB (bytes / 1024^3)."""
        return self.size / _GIB


# =============================================================================
# ModelRecord
# =============================================================================


class ModelRecord(_Lenient):
    """A model from either catalog source.

    Attributes:
        id: "<provider>/<model-name>" identifier, unique within one fetch
        name: Human-readable label
        created: Creation (or local modification) time as epoch seconds
        description: Free text, may contain line breaks
        context_length: Context window in tokens (0 if unknown)
        architecture: Modality and tokenizer details
        pricing: Per-token prices as strings
        top_provider: Completion limits and moderation flag
        local_details: Ollama-only fields; None for registry models
        source: Which source produced the record
    """

    id: str
    name: str = ""
    created: int = 0
    description: str = ""
    context_length: int = 0
    architecture: Architecture = Field(default_factory=Architecture)
    pricing: Pricing = Field(default_factory=Pricing)
    top_provider: TopProvider = Field(default_factory=TopProvider)
    local_details: LocalDetails | None = None
    source: ModelSource = ModelSource.OPENROUTER

    @computed_field
    @property
    def provider(self) -> str:
        """Provider tag derived from the id."""
        return extract_provider(self.id)

    @property
    def is_local(self) -> bool:
        """Check if this record came from the local Ollama server."""
        return self.local_details is not None


# =============================================================================
# Ollama payload
# =============================================================================


class OllamaModelDetails(_Lenient):
    """The "details" block of an Ollama /api/tags entry."""

    format: str = ""
    family: str = ""
    families: list[str] = Field(default_factory=list)
    parameter_size: str = ""
    quantization_level: str = ""


class OllamaModel(_Lenient):
    """One entry of the Ollama /api/tags response."""

    name: str
    modified_at: str = ""
    size: int = 0
    digest: str = ""
    details: OllamaModelDetails = Field(default_factory=OllamaModelDetails)


class OllamaTagsResponse(_Lenient):
    """Ollama /api/tags response body."""

    models: list[OllamaModel] = Field(default_factory=list)


class OpenRouterResponse(BaseModel):
    """OpenRouter /api/v1/models response body."""

    data: list[ModelRecord]


# Python's ISO parser accepts at most microseconds; Ollama sends nanoseconds.
_FRACTION_RE = re.compile(r"\.(\d{1,6})\d*")


def parse_timestamp(value: str) -> int:
    """Convert an RFC 3339 timestamp to epoch seconds.

    Args:
        value: Timestamp such as "2026-01-31T10:00:00.123456789-08:00"

    Returns:
        Epoch seconds, or 0 if the value is empty or unparsable
    """
    if not value:
        return 0
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits
    text = _FRACTION_RE.sub(
        lambda m: "." + m.group(1).ljust(6, "0"), value.strip().replace("Z", "+00:00")
    )
    try:
        return int(datetime.fromisoformat(text).timestamp())
    except (ValueError, TypeError, OverflowError):
        return 0


def build_ollama_description(model: OllamaModel) -> str:
    """Create a one-line description from Ollama model details.

    Format: "<family> <parameter_size> (<quantization>) - <size> GB"
    """
    parts: list[str] = []
    if model.details.family:
        parts.append(model.details.family)
    if model.details.parameter_size:
        parts.append(model.details.parameter_size)
    if model.details.quantization_level:
        parts.append(f"({model.details.quantization_level})")
    desc = " ".join(parts)

    size_gb = model.size / _GIB
    if size_gb > 0:
        if desc:
            desc += " - "
        desc += f"{size_gb:.1f} GB"

    return desc or "Ollama local model"


def record_from_ollama(model: OllamaModel) -> ModelRecord:
    """Convert an Ollama /api/tags entry to a ModelRecord."""
    return ModelRecord(
        id=f"{OLLAMA_PROVIDER}/{model.name}",
        name=model.name,
        created=parse_timestamp(model.modified_at),
        description=build_ollama_description(model),
        source=ModelSource.OLLAMA,
        local_details=LocalDetails(
            size=model.size,
            format=model.details.format,
            family=model.details.family,
            parameter_size=model.details.parameter_size,
            quantization_level=model.details.quantization_level,
        ),
    )


# =============================================================================
# Module exports
# =============================================================================

__all__ = [
    # Enums
    "ModelSource",
    # Data model
    "Architecture",
    "Pricing",
    "TopProvider",
    "LocalDetails",
    "ModelRecord",
    # Source payloads
    "OllamaModel",
    "OllamaModelDetails",
    "OllamaTagsResponse",
    "OpenRouterResponse",
    # Functions
    "UNKNOWN_PROVIDER",
    "extract_provider",
    "parse_timestamp",
    "build_ollama_description",
    "record_from_ollama",
]
