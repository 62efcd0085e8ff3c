"""Text layout helpers for model listings.

Pure functions only; nothing here touches the terminal.
"""

from __future__ import annotations

import math
import re
from datetime import datetime

ELLIPSIS = ".."

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def fold_line_breaks(text: str) -> str:
    """Replace every \\r\\n, \\r and \\n with a single space."""
    return _LINE_BREAK_RE.sub(" ", text)


def truncate_description(text: str, max_len: int) -> str:
    """Fold line breaks and cut text to max_len characters.

    Python strings are sequences of code points, so the cut never splits
    a multi-byte character.

    Args:
        text: Description text
        max_len: Maximum number of characters kept before the ellipsis

    Returns:
        Folded text, with ".." appended if it had to be cut
    """
    text = fold_line_breaks(text)
    if len(text) <= max_len:
        return text
    return text[: max(max_len, 0)] + ELLIPSIS


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to width, breaking only at word boundaries.

    A word longer than width is put on its own line unbroken.

    Args:
        text: Text to wrap (line breaks are folded first)
        width: Maximum line length

    Returns:
        Wrapped lines; empty list for blank input
    """
    words = fold_line_breaks(text).split()
    if not words:
        return []

    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) <= width:
            current += " " + word
        else:
            lines.append(current)
            current = word
    lines.append(current)

    return lines


def format_number(n: int) -> str:
    """Format an integer with "," thousands separators (1234567 -> "1,234,567")."""
    return f"{n:,}"


def format_price(price: str) -> str:
    """Convert a per-token price string to a per-1K-tokens display value.

    Precision follows magnitude: 3 decimals from 1 up, 4 from 0.01 up,
    6 below that. Unparsable or non-finite input counts as zero.

    Args:
        price: Raw price string from the registry (e.g., "0.000003")

    Returns:
        Formatted price without currency symbol
    """
    if price in ("", "0"):
        return "0"

    try:
        p = float(price)
    except ValueError:
        p = 0.0
    if not math.isfinite(p):
        p = 0.0

    p1k = p * 1000
    if p1k >= 1:
        return f"{p1k:.3f}"
    if p1k >= 0.01:
        return f"{p1k:.4f}"
    return f"{p1k:.6f}"


def format_date(timestamp: int) -> str:
    """Render epoch seconds as YYYY-MM-DD in the local timezone."""
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return "????-??-??"


__all__ = [
    "ELLIPSIS",
    "fold_line_breaks",
    "truncate_description",
    "wrap_text",
    "format_number",
    "format_price",
    "format_date",
]
