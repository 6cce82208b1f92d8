"""
Number rendering and strict literal parsing shared by the value types.
"""

from __future__ import annotations

import math
import re

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_int(text: str, lo: int | None = I64_MIN, hi: int | None = I64_MAX) -> int | None:
    """
    Parse an integer literal with no surrounding whitespace.

    Returns None when the text is not an integer or falls outside [lo, hi].
    """
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if lo is not None and value < lo:
        return None
    if hi is not None and value > hi:
        return None
    return value


def parse_real(text: str) -> float | None:
    """
    Parse a float literal with no surrounding whitespace.

    Unlike float(), underscores and embedded whitespace are rejected.
    """
    if not _FLOAT_RE.fullmatch(text):
        return None
    return float(text)


def format_number(value: float, max_decimals: int = 6) -> str:
    """
    Format a number, removing unnecessary trailing zeros.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(0.126, 2)
        '0.13'
    """
    if math.isfinite(value) and value == math.floor(value):
        return f"{value:.0f}"
    text = f"{value:.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_float(value: float) -> str:
    """Shortest round-trip rendering, with whole numbers shown without '.0'."""
    if math.isfinite(value) and value == math.floor(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
