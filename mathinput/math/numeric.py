"""
Bounded numeric text: validation, stepping and display formatting.

Numbers stay as caller-owned text; a Precision parses that text into its
own representation only to validate it or to step it. Integer precisions
saturate at their type limits instead of wrapping.

Precisions:
- U64, U128, I64, I128: IntegerPrecision with inclusive limits
- DecimalPrecision(places): float arithmetic, fixed number of places
- ArbitraryPrecision: exact decimal arithmetic via decimal.Decimal
"""

from __future__ import annotations

import math
import re
import unicodedata
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

import numpy as np

from ..core.errors import (
    FormatError,
    MathInputError,
    NumericOverflowError,
    NumericUnderflowError,
    TooManyDecimalsError,
)
from ..core.logging import get_context_logger
from .formatting import parse_real

logger = get_context_logger(__name__, component="numeric")

_INTEGER_RE = re.compile(r"[+-]?\d+")

_CURRENCY_CODES = (
    "USD", "EUR", "GBP", "JPY", "CNY", "CHF", "CAD", "AUD",
    "NZD", "INR", "SEK", "NOK", "DKK", "PLN", "BRL", "MXN",
)
_CURRENCY_CODE_RE = re.compile(r"(?<![A-Za-z])(?:" + "|".join(_CURRENCY_CODES) + r")(?![A-Za-z])", re.IGNORECASE)
_GROUPING_CHARS = (",", ".", "_", "'", "’")


class NumberFormat(Enum):
    """Display format for numeric text."""

    STANDARD = "standard"  # 123456789
    THOUSAND = "thousand"  # 123,456,789
    SCIENTIFIC = "scientific"  # 1.23456789e8


def clean_numeric_text(text: str) -> str:
    """Drop ',' and '_' grouping characters and surrounding whitespace."""
    return text.replace(",", "").replace("_", "").strip()


def add_thousand_separators(text: str, separator: str = ",") -> str:
    """
    Group the integer part in threes.

    Examples:
        >>> add_thousand_separators("1234567.89")
        '1,234,567.89'
        >>> add_thousand_separators("-1000", " ")
        '-1 000'
    """
    cleaned = text.replace(",", "").replace("_", "")
    integer_part, dot, fraction_part = cleaned.partition(".")

    negative = integer_part.startswith("-")
    digits = integer_part[1:] if negative else integer_part

    grouped = []
    for i, ch in enumerate(digits):
        if i > 0 and (len(digits) - i) % 3 == 0:
            grouped.append(separator)
        grouped.append(ch)

    result = ("-" if negative else "") + "".join(grouped)
    if dot:
        result = f"{result}.{fraction_part}"
    return result


def to_scientific(text: str) -> str:
    """
    Render numeric text in shortest scientific notation, e.g. "1.5e3".

    Text that is not a number is returned unchanged.
    """
    value = parse_real(clean_numeric_text(text))
    if value is None:
        return text
    rendered = np.format_float_scientific(value, trim="-", exp_digits=1)
    return rendered.replace("e+", "e")


def format_numeric_text(text: str, fmt: NumberFormat, thousand_separator: str = ",") -> str:
    if fmt is NumberFormat.STANDARD:
        return text
    if fmt is NumberFormat.THOUSAND:
        return add_thousand_separators(text, thousand_separator)
    if fmt is NumberFormat.SCIENTIFIC:
        return to_scientific(text)
    raise ValueError(f"Unknown number format: {fmt}")


def normalize_pasted_number(text: str, decimal_separator: str = ".") -> str:
    """
    Turn pasted locale or currency text into plain numeric text.

    Currency symbols and ISO codes, whitespace (including no-break spaces)
    and grouping characters are removed, then ``decimal_separator`` is
    replaced by '.'.

    Examples:
        >>> normalize_pasted_number("$1,234.50")
        '1234.50'
        >>> normalize_pasted_number("1.234,5 EUR", decimal_separator=",")
        '1234.5'
    """
    without_codes = _CURRENCY_CODE_RE.sub("", text)
    kept = [
        ch
        for ch in without_codes
        if not ch.isspace() and unicodedata.category(ch) != "Sc"
    ]
    result = "".join(kept)
    for grouping in _GROUPING_CHARS:
        if grouping != decimal_separator:
            result = result.replace(grouping, "")
    if decimal_separator != ".":
        result = result.replace(decimal_separator, ".")
    return result


def is_valid_char(
    ch: str,
    current: str,
    allow_negative: bool,
    allow_decimal: bool,
    allow_scientific: bool,
) -> bool:
    """Keystroke filter: whether ``ch`` may be typed after ``current``."""
    if ch.isdigit() and ch.isascii():
        return True
    if ch == "-":
        return allow_negative and current == ""
    if ch == ".":
        return allow_decimal and "." not in current
    if ch in ("e", "E"):
        return allow_scientific and current != "" and "e" not in current.lower()
    # Grouping separators are stripped during validation
    return ch in (",", "_")


class Precision(ABC):
    """
    Numeric regime for bounded text input.

    Subclasses define how text is parsed, how two values combine, and how
    a result is rendered back to text. Stepping and bound handling are
    shared.
    """

    name: str

    @abstractmethod
    def validate(self, text: str) -> Any:
        """
        Parse text into this precision's representation.

        Raises:
            FormatError: Empty or non-numeric text
            NumericOverflowError: Above the precision's maximum
            NumericUnderflowError: Below the precision's minimum
            TooManyDecimalsError: More decimal places than allowed
        """

    @abstractmethod
    def _coerce(self, cleaned: str) -> Any | None:
        """Lenient parse of cleaned text, ignoring limits; None if not a number."""

    @abstractmethod
    def _combine(self, current: Any, step: Any, direction: int) -> Any:
        """current + direction * step, saturating where the precision has limits."""

    @abstractmethod
    def _render(self, value: Any) -> str:
        pass

    @property
    def default_step(self) -> Any:
        return self._coerce("1")

    def _parse_or(self, text: str | None, default: Any) -> Any:
        if text is None:
            return default
        value = self._coerce(clean_numeric_text(text))
        return default if value is None else value

    def step(
        self,
        current: str,
        step: str | None = None,
        direction: int = 1,
        minimum: str | None = None,
        maximum: str | None = None,
    ) -> str:
        """
        Move ``current`` by ``step`` in ``direction`` (+1 or -1).

        Unparseable current/step default to 0/1. Bounds use the same
        cleaning rule; malformed bounds are ignored.
        """
        value = self._parse_or(current, self._coerce("0"))
        amount = self._parse_or(step, self.default_step)
        result = self._combine(value, amount, 1 if direction >= 0 else -1)

        low = self._parse_or(minimum, None)
        high = self._parse_or(maximum, None)
        if minimum is not None and low is None:
            logger.debug("Ignoring malformed minimum", extra_data={"minimum": minimum})
        if maximum is not None and high is None:
            logger.debug("Ignoring malformed maximum", extra_data={"maximum": maximum})

        if low is not None and result < low:
            result = low
        if high is not None and result > high:
            result = high
        return self._render(result)

    def increment(
        self,
        current: str,
        step: str | None = None,
        minimum: str | None = None,
        maximum: str | None = None,
    ) -> str:
        return self.step(current, step, 1, minimum, maximum)

    def decrement(
        self,
        current: str,
        step: str | None = None,
        minimum: str | None = None,
        maximum: str | None = None,
    ) -> str:
        return self.step(current, step, -1, minimum, maximum)

    def is_valid(self, text: str) -> bool:
        try:
            self.validate(text)
        except MathInputError:
            return False
        return True

    def format(self, text: str, fmt: NumberFormat = NumberFormat.STANDARD, thousand_separator: str = ",") -> str:
        return format_numeric_text(text, fmt, thousand_separator)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class IntegerPrecision(Precision):
    """Fixed-width integer with inclusive limits and saturating arithmetic."""

    def __init__(self, name: str, minimum: int, maximum: int) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum

    @property
    def signed(self) -> bool:
        return self.minimum < 0

    def validate(self, text: str) -> int:
        cleaned = clean_numeric_text(text)
        if not cleaned:
            raise FormatError(text, f"an {self.name} integer")
        if not _INTEGER_RE.fullmatch(cleaned):
            logger.debug("Invalid integer text", extra_data={"text": text, "precision": self.name})
            raise FormatError(text, f"an {self.name} integer")

        value = int(cleaned)
        if value > self.maximum:
            raise NumericOverflowError(self.name, self.maximum)
        if value < self.minimum:
            raise NumericUnderflowError(self.name, self.minimum)
        return value

    def _coerce(self, cleaned: str) -> int | None:
        if not _INTEGER_RE.fullmatch(cleaned):
            return None
        return int(cleaned)

    def _combine(self, current: int, step: int, direction: int) -> int:
        raw = current + direction * step
        result = max(self.minimum, min(self.maximum, raw))
        if result != raw:
            logger.debug(
                "Saturated integer step",
                extra_data={"precision": self.name, "raw": str(raw), "result": str(result)},
            )
        return result

    def _render(self, value: int) -> str:
        return str(value)


class DecimalPrecision(Precision):
    """Float-backed decimal with at most ``places`` fractional digits."""

    def __init__(self, places: int) -> None:
        if places < 0:
            raise ValueError("Decimal places must be non-negative")
        self.places = places
        self.name = f"decimal({places})"

    def validate(self, text: str) -> float:
        cleaned = clean_numeric_text(text)
        if not cleaned:
            raise FormatError(text, "a decimal number")

        _, dot, fraction_part = cleaned.partition(".")
        if dot and len(fraction_part) > self.places:
            raise TooManyDecimalsError(self.places)

        value = parse_real(cleaned)
        if value is None or not math.isfinite(value):
            logger.debug("Invalid decimal text", extra_data={"text": text, "places": self.places})
            raise FormatError(text, "a decimal number")
        return value

    def _coerce(self, cleaned: str) -> float | None:
        value = parse_real(cleaned)
        if value is None or not math.isfinite(value):
            return None
        return value

    def _combine(self, current: float, step: float, direction: int) -> float:
        result = current + direction * step
        if not math.isfinite(result):
            logger.debug(
                "Decimal step overflowed",
                extra_data={"precision": self.name, "current": current, "step": step},
            )
            return current
        return result

    def _render(self, value: float) -> str:
        return f"{value:.{self.places}f}"


class ArbitraryPrecision(Precision):
    """Exact decimal arithmetic with no fixed limits."""

    name = "arbitrary"

    def validate(self, text: str) -> Decimal:
        cleaned = clean_numeric_text(text)
        if not cleaned:
            raise FormatError(text, "a decimal number")
        value = self._coerce(cleaned)
        if value is None:
            logger.debug("Invalid arbitrary-precision text", extra_data={"text": text})
            raise FormatError(text, "a decimal number")
        return value

    def _coerce(self, cleaned: str) -> Decimal | None:
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            return None
        if not value.is_finite():
            return None
        return value

    def _combine(self, current: Decimal, step: Decimal, direction: int) -> Decimal:
        return current + step if direction > 0 else current - step

    def _render(self, value: Decimal) -> str:
        return format(value, "f")


U64 = IntegerPrecision("u64", 0, 2**64 - 1)
U128 = IntegerPrecision("u128", 0, 2**128 - 1)
I64 = IntegerPrecision("i64", -(2**63), 2**63 - 1)
I128 = IntegerPrecision("i128", -(2**127), 2**127 - 1)
ARBITRARY = ArbitraryPrecision()
