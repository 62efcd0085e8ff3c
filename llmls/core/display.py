"""Rendering of model listings.

Three outputs:
- Compact table: one line per model (id, provider, date, description)
- Detailed view: a labeled block per model
- Provider list: unique provider tags, one per line

The ``format_*`` functions build lines; the ``display_*`` functions write
them through a rich Console with markup and highlighting turned off, so
model text such as "[beta]" is printed verbatim.
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console

from .layout import (
    format_date,
    format_number,
    format_price,
    truncate_description,
    wrap_text,
)
from .models import ModelRecord
from .terminal import calculate_description_width, get_terminal_width

RULE = "=" * 80
LABEL_WIDTH = 19
MIN_WRAP_WIDTH = 40

console = Console()


def _emit(lines: Sequence[str], out: Console | None = None) -> None:
    target = out or console
    for line in lines:
        target.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _field(label: str, value: str) -> str:
    return f"{label + ':':<{LABEL_WIDTH}}{value}"


# =============================================================================
# Compact table
# =============================================================================


def format_models(models: Sequence[ModelRecord], term_width: int) -> list[str]:
    """Build one line per model with dynamic column widths.

    Args:
        models: Records to render, already filtered and sorted
        term_width: Terminal width used to size the description column

    Returns:
        Table lines; empty list for no models
    """
    if not models:
        return []

    model_width = max(len(m.id) for m in models)
    provider_width = max(len(m.provider) for m in models)
    desc_width = calculate_description_width(term_width, model_width, provider_width)

    return [
        f"{m.id:<{model_width}} {m.provider:<{provider_width}} "
        f"{format_date(m.created)} {truncate_description(m.description, desc_width)}"
        for m in models
    ]


def display_models(
    models: Sequence[ModelRecord],
    term_width: int | None = None,
    out: Console | None = None,
) -> None:
    """Print the compact table. Prints nothing for an empty list."""
    width = term_width if term_width is not None else get_terminal_width()
    _emit(format_models(models, width), out)


# =============================================================================
# Detailed view
# =============================================================================


def _format_model_block(model: ModelRecord, wrap_width: int) -> list[str]:
    lines = [
        RULE,
        _field("Model ID", model.id),
        _field("Name", model.name),
        _field("Provider", model.provider),
        _field("Created", format_date(model.created)),
    ]

    # Technical details
    if model.context_length > 0:
        lines.append(_field("Context Length", f"{format_number(model.context_length)} tokens"))
    if model.top_provider.max_completion_tokens > 0:
        max_tokens = format_number(model.top_provider.max_completion_tokens)
        lines.append(_field("Max Completion", f"{max_tokens} tokens"))
    if model.architecture.modality:
        lines.append(_field("Modality", model.architecture.modality))

    pricing = model.pricing
    if pricing.prompt not in ("", "0"):
        lines.append(
            _field(
                "Pricing",
                f"${format_price(pricing.prompt)} / 1K prompt tokens, "
                f"${format_price(pricing.completion)} / 1K completion tokens",
            )
        )

    if model.top_provider.is_moderated:
        lines.append(_field("Moderation", "Enabled"))

    details = model.local_details
    if details is not None:
        if details.family:
            lines.append(_field("Model Family", details.family))
        if details.parameter_size:
            lines.append(_field("Parameter Size", details.parameter_size))
        if details.quantization_level:
            lines.append(_field("Quantization", details.quantization_level))
        if details.format:
            lines.append(_field("Format", details.format))
        if details.size > 0:
            lines.append(_field("Model Size", f"{details.size_gib:.2f} GB"))

    if model.description:
        lines.append("Description:")
        lines.extend(f"  {line}" for line in wrap_text(model.description, wrap_width))

    lines.append(RULE)
    return lines


def format_models_detailed(models: Sequence[ModelRecord], term_width: int) -> list[str]:
    """Build the detailed view for every model.

    Blocks are separated by one blank line. Descriptions are wrapped to
    term_width - 4 columns (at least 40) and indented by two spaces.

    Args:
        models: Records to render
        term_width: Terminal width in columns

    Returns:
        Output lines; empty list for no models
    """
    wrap_width = max(term_width - 4, MIN_WRAP_WIDTH)
    lines: list[str] = []
    for i, model in enumerate(models):
        if i > 0:
            lines.append("")
        lines.extend(_format_model_block(model, wrap_width))
    return lines


def display_models_detailed(
    models: Sequence[ModelRecord],
    term_width: int | None = None,
    out: Console | None = None,
) -> None:
    """Print the detailed view. Prints nothing for an empty list."""
    width = term_width if term_width is not None else get_terminal_width()
    _emit(format_models_detailed(models, width), out)


# =============================================================================
# Providers
# =============================================================================


def format_providers(models: Sequence[ModelRecord], pattern: str | None = None) -> list[str]:
    """List unique provider tags alphabetically.

    Args:
        models: Records to collect providers from
        pattern: Optional case-insensitive substring filter

    Returns:
        Sorted, de-duplicated provider tags
    """
    providers = {m.provider for m in models}
    if pattern:
        needle = pattern.casefold()
        providers = {p for p in providers if needle in p.casefold()}
    return sorted(providers)


def display_providers(
    models: Sequence[ModelRecord],
    pattern: str | None = None,
    out: Console | None = None,
) -> None:
    """Print provider tags, one per line."""
    _emit(format_providers(models, pattern), out)


__all__ = [
    "format_models",
    "display_models",
    "format_models_detailed",
    "display_models_detailed",
    "format_providers",
    "display_providers",
]
