"""
Fraction type for exact rational input.

Implements a Fraction that stores numerator and denominator as signed 64-bit
integers, with simplification, best-rational approximation of decimals,
mixed numbers, and fraction/mixed/decimal rendering.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import (
    FormatError,
    InvalidDenominatorError,
    NumericOverflowError,
    NumericUnderflowError,
    RangeError,
)
from ..core.logging import get_context_logger
from .formatting import I64_MAX, I64_MIN, parse_int, parse_real
from .value import MathValue

logger = get_context_logger(__name__, component="fraction")

#: Approximation error below which the denominator search stops.
DECIMAL_TOLERANCE = 1e-10

#: Largest denominator tried when a decimal literal is parsed.
PARSE_MAX_DENOMINATOR = 10000


class FractionDisplayFormat(Enum):
    """Display format for fractions."""

    FRACTION = "fraction"  # 3/2
    MIXED_NUMBER = "mixed"  # 1 1/2
    DECIMAL = "decimal"  # 1.5


def gcd(a: int, b: int) -> int:
    """Greatest common divisor (Euclidean algorithm) of |a| and |b|."""
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _check_i64(term: int) -> None:
    if term > I64_MAX:
        raise NumericOverflowError("i64", I64_MAX)
    if term < I64_MIN:
        raise NumericUnderflowError("i64", I64_MIN)


def _reduce(numerator: int, denominator: int) -> tuple[int, int]:
    """Lowest terms with a positive denominator, as unbounded ints."""
    if numerator == 0:
        return 0, 1
    divisor = gcd(numerator, denominator)
    num, den = numerator // divisor, denominator // divisor
    if den < 0:
        num, den = -num, -den
    return num, den


class Fraction(BaseModel, MathValue):
    """
    Fraction represents a rational number as numerator/denominator.

    Construction keeps the terms as given; call simplify() for lowest terms.
    Equality compares values, so Fraction(2, 4) == Fraction(1, 2).

    Examples:
        >>> Fraction(1, 2)  # 1/2
        >>> Fraction(6, -4).simplify()  # -3/2
        >>> Fraction.from_mixed(1, 1, 2)  # 3/2
    """

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(default=0, ge=I64_MIN, le=I64_MAX, description="The numerator")
    denominator: int = Field(default=1, ge=I64_MIN, le=I64_MAX, description="The denominator")

    def __init__(self, numerator: int = 0, denominator: int = 1, **kwargs: Any):
        """
        Create a Fraction.

        Raises:
            InvalidDenominatorError: If denominator is zero
            NumericOverflowError: If a term is above the i64 maximum
            NumericUnderflowError: If a term is below the i64 minimum
        """
        if denominator == 0:
            raise InvalidDenominatorError(numerator)
        if isinstance(numerator, int) and isinstance(denominator, int):
            _check_i64(numerator)
            _check_i64(denominator)
        super().__init__(numerator=numerator, denominator=denominator, **kwargs)

    @classmethod
    def _reduced(cls, numerator: int, denominator: int) -> Fraction:
        """Build in lowest terms; only the reduced terms must fit in i64."""
        if denominator == 0:
            raise InvalidDenominatorError(numerator)
        return cls(*_reduce(numerator, denominator))

    @classmethod
    def from_whole(cls, n: int) -> Fraction:
        """Create a fraction from a whole number."""
        return cls(n, 1)

    @classmethod
    def from_mixed(cls, whole: int, numerator: int, denominator: int) -> Fraction:
        """
        Create a fraction from a mixed number (whole + fraction).

        The result is negative when either the whole part or the fractional
        numerator is negative.
        """
        if denominator == 0:
            raise InvalidDenominatorError(numerator)
        sign = -1 if whole < 0 or numerator < 0 else 1
        return cls(
            sign * (abs(whole) * abs(denominator) + abs(numerator)),
            abs(denominator),
        )

    @classmethod
    def from_decimal(cls, value: float, max_denominator: int) -> Fraction:
        """
        Best rational approximation of value with denominator <= max_denominator.

        Denominators are tried in increasing order and only a strictly smaller
        error replaces the current best, so ties resolve to the smallest
        denominator. The search stops early once the error drops below
        DECIMAL_TOLERANCE.
        """
        if not math.isfinite(value):
            raise ValueError(f"Cannot approximate non-finite value {value}")
        if value == 0.0:
            return cls(0, 1)

        negative = value < 0.0
        magnitude = abs(value)

        best_num, best_den = 0, 1
        best_error = magnitude
        for den in range(1, max_denominator + 1):
            num = math.floor(magnitude * den + 0.5)
            error = abs(magnitude - num / den)
            if error < best_error:
                best_error = error
                best_num, best_den = num, den
                if error < DECIMAL_TOLERANCE:
                    break

        return cls(-best_num if negative else best_num, best_den).simplify()

    def simplify(self) -> Fraction:
        """
        Reduce to lowest terms with a positive denominator.

        Zero simplifies to 0/1. Moving the sign off the denominator can
        leave a numerator of 2**63 (e.g. -2**63/-1), which raises
        NumericOverflowError.
        """
        return Fraction._reduced(self.numerator, self.denominator)

    def is_simplified(self) -> bool:
        """Check if fraction is in lowest terms with a positive denominator."""
        return self.denominator > 0 and gcd(self.numerator, self.denominator) == 1

    def to_decimal(self) -> float:
        """Convert to decimal."""
        return self.numerator / self.denominator

    def is_whole(self) -> bool:
        """Check if this represents a whole number."""
        return self.numerator % self.denominator == 0

    def whole_part(self) -> int:
        """Whole number part, truncated toward zero."""
        return _trunc_div(self.numerator, self.denominator)

    def fractional_numerator(self) -> int:
        """Numerator of the proper fractional part (always non-negative)."""
        return abs(self.numerator) % abs(self.denominator)

    def is_negative(self) -> bool:
        """Check if the fraction is negative."""
        return self.numerator != 0 and (self.numerator < 0) != (self.denominator < 0)

    def reciprocal(self) -> Fraction:
        """Swap numerator and denominator."""
        return Fraction(self.denominator, self.numerator)

    # Formatting

    def to_fraction_string(self) -> str:
        """Format as a simple fraction string ("3/2", or "5" for whole numbers)."""
        num, den = _reduce(self.numerator, self.denominator)
        if den == 1:
            return str(num)
        return f"{num}/{den}"

    def to_mixed_string(self) -> str:
        """Format as a mixed number string ("1 1/2", "-2 3/4", "1/2")."""
        num, den = _reduce(self.numerator, self.denominator)
        if den == 1:
            return str(num)

        whole = _trunc_div(num, den)
        frac_num = abs(num) % den

        if whole == 0:
            return f"{num}/{den}"
        sign = "-" if num < 0 else ""
        return f"{sign}{abs(whole)} {frac_num}/{den}"

    def to_decimal_string(self, precision: int) -> str:
        """Format as decimal string with the given number of places."""
        return f"{self.to_decimal():.{precision}f}"

    def format(
        self,
        display: FractionDisplayFormat = FractionDisplayFormat.FRACTION,
        precision: int = 4,
    ) -> str:
        """Render using the given display format."""
        if display is FractionDisplayFormat.FRACTION:
            return self.to_fraction_string()
        if display is FractionDisplayFormat.MIXED_NUMBER:
            return self.to_mixed_string()
        if display is FractionDisplayFormat.DECIMAL:
            return self.to_decimal_string(precision)
        raise ValueError(f"Unknown display format: {display}")

    def to_string(self) -> str:
        return self.to_fraction_string()

    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        num, den = _reduce(self.numerator, self.denominator)
        if den == 1:
            return str(num)
        sign = "-" if num < 0 else ""
        return f"{sign}\\frac{{{abs(num)}}}{{{den}}}"

    def to_python(self) -> float:
        return self.to_decimal()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Fraction({self.numerator}, {self.denominator})"

    def __float__(self) -> float:
        return self.to_decimal()

    # Arithmetic

    @staticmethod
    def _coerce(other: Any) -> Fraction | None:
        if isinstance(other, Fraction):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Fraction.from_whole(other)
        return None

    # Results are reduced before the i64 check, so only a result that
    # cannot be represented raises NumericOverflowError/NumericUnderflowError.

    def __add__(self, other: Any) -> Fraction:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fraction._reduced(
            self.numerator * rhs.denominator + rhs.numerator * self.denominator,
            self.denominator * rhs.denominator,
        )

    def __radd__(self, other: Any) -> Fraction:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Fraction:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fraction._reduced(
            self.numerator * rhs.denominator - rhs.numerator * self.denominator,
            self.denominator * rhs.denominator,
        )

    def __rsub__(self, other: Any) -> Fraction:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: Any) -> Fraction:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fraction._reduced(
            self.numerator * rhs.numerator, self.denominator * rhs.denominator
        )

    def __rmul__(self, other: Any) -> Fraction:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Fraction:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Fraction._reduced(
            self.numerator * rhs.denominator, self.denominator * rhs.numerator
        )

    def __rtruediv__(self, other: Any) -> Fraction:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __neg__(self) -> Fraction:
        return Fraction(-self.numerator, self.denominator)

    def __pos__(self) -> Fraction:
        return self

    def __abs__(self) -> Fraction:
        return Fraction(abs(self.numerator), abs(self.denominator))

    # Comparison (by value)

    def __eq__(self, other: Any) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.numerator * rhs.denominator == rhs.numerator * self.denominator

    def __hash__(self) -> int:
        return hash(_reduce(self.numerator, self.denominator))

    def _cmp_key(self, other: Any) -> tuple[int, int] | None:
        rhs = self._coerce(other)
        if rhs is None:
            return None
        a_num, a_den = _reduce(self.numerator, self.denominator)
        b_num, b_den = _reduce(rhs.numerator, rhs.denominator)
        return a_num * b_den, b_num * a_den

    def __lt__(self, other: Any) -> bool:
        key = self._cmp_key(other)
        return NotImplemented if key is None else key[0] < key[1]

    def __le__(self, other: Any) -> bool:
        key = self._cmp_key(other)
        return NotImplemented if key is None else key[0] <= key[1]

    def __gt__(self, other: Any) -> bool:
        key = self._cmp_key(other)
        return NotImplemented if key is None else key[0] > key[1]

    def __ge__(self, other: Any) -> bool:
        key = self._cmp_key(other)
        return NotImplemented if key is None else key[0] >= key[1]


# Parsing


def parse_fraction(text: str) -> Fraction:
    """
    Parse a fraction from mixed ("1 1/2"), simple ("3/4"), decimal ("0.75")
    or whole-number ("5") notation.

    Dialects are tried in that order and the first successful parse wins.

    Raises:
        FormatError: If no dialect accepts the text
    """
    trimmed = text.strip()
    if trimmed:
        for dialect in (_parse_mixed_number, _parse_simple_fraction, _parse_decimal):
            result = dialect(trimmed)
            if result is not None:
                return result
        whole = parse_int(trimmed)
        if whole is not None:
            return Fraction.from_whole(whole)

    logger.debug("Unparseable fraction", extra_data={"text": text})
    raise FormatError(text, "a fraction such as '3/4', '1 1/2' or '0.75'")


def _parse_mixed_number(text: str) -> Fraction | None:
    parts = text.split()
    if len(parts) != 2:
        return None

    whole = parse_int(parts[0])
    if whole is None:
        return None

    frac_parts = parts[1].split("/")
    if len(frac_parts) != 2:
        return None
    num = parse_int(frac_parts[0])
    den = parse_int(frac_parts[1])
    if num is None or den is None or den == 0:
        return None

    try:
        return Fraction.from_mixed(whole, num, den)
    except RangeError:
        logger.debug("Mixed number outside i64", extra_data={"text": text})
        return None


def _parse_simple_fraction(text: str) -> Fraction | None:
    parts = text.split("/")
    if len(parts) != 2:
        return None

    num = parse_int(parts[0].strip())
    den = parse_int(parts[1].strip())
    if num is None or den is None or den == 0:
        return None

    return Fraction(num, den)


def _parse_decimal(text: str) -> Fraction | None:
    if "/" in text:
        return None
    value = parse_real(text)
    # Non-finite values and magnitudes beyond i64 have no fraction form
    if value is None or not abs(value) < 2.0**63:
        return None
    return Fraction.from_decimal(value, PARSE_MAX_DENOMINATOR)
