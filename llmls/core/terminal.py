"""Terminal sizing for the compact model table."""

from __future__ import annotations

import os
import sys

DEFAULT_TERMINAL_WIDTH = 120

# Column layout: id, provider, date, description
DATE_WIDTH = 10  # YYYY-MM-DD
SEPARATOR_WIDTH = 3  # 3 separators * 1 space each
SAFETY_MARGIN = 5  # keeps conservative terminals from wrapping the line
MIN_DESCRIPTION_WIDTH = 30


def get_terminal_width(default: int = DEFAULT_TERMINAL_WIDTH) -> int:
    """Return the column count of stdout, or default if it is not a terminal.

    Args:
        default: Width to use when the size cannot be queried

    Returns:
        Terminal width in columns
    """
    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return default
    # Some pseudo-terminals report a size of 0x0
    return columns if columns > 0 else default


def calculate_description_width(term_width: int, model_width: int, provider_width: int) -> int:
    """Calculate the width left for the description column.

    Args:
        term_width: Terminal width in columns
        model_width: Width of the model id column
        provider_width: Width of the provider column

    Returns:
        Remaining width, never less than 30
    """
    used = model_width + provider_width + DATE_WIDTH + SEPARATOR_WIDTH + SAFETY_MARGIN
    return max(term_width - used, MIN_DESCRIPTION_WIDTH)


__all__ = [
    "DEFAULT_TERMINAL_WIDTH",
    "MIN_DESCRIPTION_WIDTH",
    "get_terminal_width",
    "calculate_description_width",
]
