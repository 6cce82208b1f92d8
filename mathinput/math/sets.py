"""
Interval type: closed, open and half-open ranges over possibly-infinite bounds.

Examples:
- [0, 1] - closed interval
- (0, 1) - open interval
- [0, 1) - half-open interval (left endpoint included)
- (-∞, 5] - unbounded below
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..core.errors import FormatError
from ..core.logging import get_context_logger
from .formatting import format_number, parse_real
from .value import MathValue

logger = get_context_logger(__name__, component="interval")

_NEG_INFINITY_TOKENS = {"-∞", "-inf", "-infinity", "−∞", "neginf"}
_POS_INFINITY_TOKENS = {"∞", "inf", "infinity", "+∞", "+inf", "posinf"}

#: Significant decimals kept when rendering interval endpoints.
ENDPOINT_DECIMALS = 10


class IntervalBounds(Enum):
    """Which endpoints an interval includes."""

    CLOSED = "closed"  # [a, b]
    OPEN = "open"  # (a, b)
    HALF_OPEN_LEFT = "half_open_left"  # [a, b)
    HALF_OPEN_RIGHT = "half_open_right"  # (a, b]

    @classmethod
    def from_inclusion(cls, include_left: bool, include_right: bool) -> IntervalBounds:
        if include_left and include_right:
            return cls.CLOSED
        if include_left:
            return cls.HALF_OPEN_LEFT
        if include_right:
            return cls.HALF_OPEN_RIGHT
        return cls.OPEN

    @property
    def includes_left(self) -> bool:
        return self in (IntervalBounds.CLOSED, IntervalBounds.HALF_OPEN_LEFT)

    @property
    def includes_right(self) -> bool:
        return self in (IntervalBounds.CLOSED, IntervalBounds.HALF_OPEN_RIGHT)

    @property
    def left_bracket(self) -> str:
        return "[" if self.includes_left else "("

    @property
    def right_bracket(self) -> str:
        return "]" if self.includes_right else ")"


class IntervalFormat(Enum):
    """Display format for intervals."""

    MATHEMATICAL = "mathematical"  # [a, b]
    SET_NOTATION = "set"  # {x | a ≤ x ≤ b}


class Interval(BaseModel, MathValue):
    """
    Mathematical interval with optional (unbounded) endpoints.

    ``None`` for min/max means -∞/+∞. Nothing forces min <= max at
    construction; use is_empty() to detect degenerate intervals.
    """

    model_config = ConfigDict(validate_assignment=True)

    min: Optional[float] = 0.0
    max: Optional[float] = 1.0
    bounds: IntervalBounds = IntervalBounds.CLOSED

    # Constructors

    @classmethod
    def closed(cls, min: float, max: float) -> Interval:
        """Create a closed interval [a, b]."""
        return cls(min=min, max=max, bounds=IntervalBounds.CLOSED)

    @classmethod
    def open(cls, min: float, max: float) -> Interval:
        """Create an open interval (a, b)."""
        return cls(min=min, max=max, bounds=IntervalBounds.OPEN)

    @classmethod
    def half_open_left(cls, min: float, max: float) -> Interval:
        """Create a half-open interval [a, b)."""
        return cls(min=min, max=max, bounds=IntervalBounds.HALF_OPEN_LEFT)

    @classmethod
    def half_open_right(cls, min: float, max: float) -> Interval:
        """Create a half-open interval (a, b]."""
        return cls(min=min, max=max, bounds=IntervalBounds.HALF_OPEN_RIGHT)

    @classmethod
    def from_neg_infinity(cls, max: float, include_max: bool) -> Interval:
        """Create (-∞, b] or (-∞, b)."""
        bounds = IntervalBounds.HALF_OPEN_RIGHT if include_max else IntervalBounds.OPEN
        return cls(min=None, max=max, bounds=bounds)

    @classmethod
    def to_pos_infinity(cls, min: float, include_min: bool) -> Interval:
        """Create [a, ∞) or (a, ∞)."""
        bounds = IntervalBounds.HALF_OPEN_LEFT if include_min else IntervalBounds.OPEN
        return cls(min=min, max=None, bounds=bounds)

    # Queries

    def contains(self, value: float) -> bool:
        """
        Check if a value is in the interval.

        Included endpoints compare with >=/<=, excluded ones strictly.
        Unbounded sides always pass.
        """
        if self.min is not None:
            if self.bounds.includes_left:
                if value < self.min:
                    return False
            elif value <= self.min:
                return False

        if self.max is not None:
            if self.bounds.includes_right:
                if value > self.max:
                    return False
            elif value >= self.max:
                return False

        return True

    def is_empty(self) -> bool:
        """
        Check if the interval is empty.

        Closed intervals are empty when min > max; open and half-open ones
        when min >= max. Unbounded intervals are never empty.
        """
        if self.min is None or self.max is None:
            return False
        if self.bounds is IntervalBounds.CLOSED:
            return self.min > self.max
        return self.min >= self.max

    def intersects(self, other: Interval) -> bool:
        """
        Check whether two intervals overlap.

        Unbounded ends become ±∞ and the test is always strict, so intervals
        that only share an included endpoint, like [0, 1] and [1, 2], are
        reported as not intersecting.
        """
        self_min = -math.inf if self.min is None else self.min
        self_max = math.inf if self.max is None else self.max
        other_min = -math.inf if other.min is None else other.min
        other_max = math.inf if other.max is None else other.max

        return self_min < other_max and other_min < self_max

    def intersect(self, other: Interval) -> Interval | None:
        """
        Compute the intersection of two intervals.

        Endpoint inclusion is honoured: at a shared endpoint the result is
        open if either side is open.

        Returns:
            Intersection interval, or None if empty
        """
        self_min = -math.inf if self.min is None else self.min
        other_min = -math.inf if other.min is None else other.min
        if self_min > other_min:
            new_min, include_left = self.min, self.bounds.includes_left
        elif self_min < other_min:
            new_min, include_left = other.min, other.bounds.includes_left
        else:
            new_min = self.min
            include_left = self.bounds.includes_left and other.bounds.includes_left

        self_max = math.inf if self.max is None else self.max
        other_max = math.inf if other.max is None else other.max
        if self_max < other_max:
            new_max, include_right = self.max, self.bounds.includes_right
        elif self_max > other_max:
            new_max, include_right = other.max, other.bounds.includes_right
        else:
            new_max = self.max
            include_right = self.bounds.includes_right and other.bounds.includes_right

        result = Interval(
            min=new_min,
            max=new_max,
            bounds=IntervalBounds.from_inclusion(include_left, include_right),
        )
        return None if result.is_empty() else result

    def length(self) -> float | None:
        """Length of the interval (None if unbounded)."""
        if self.min is None or self.max is None:
            return None
        return self.max - self.min

    def midpoint(self) -> float | None:
        """Midpoint of the interval (None if unbounded)."""
        if self.min is None or self.max is None:
            return None
        return (self.min + self.max) / 2.0

    # Formatting

    def _endpoint_strings(self) -> tuple[str, str]:
        min_str = "-∞" if self.min is None else format_number(self.min, ENDPOINT_DECIMALS)
        max_str = "∞" if self.max is None else format_number(self.max, ENDPOINT_DECIMALS)
        return min_str, max_str

    def to_math_string(self) -> str:
        """Format as mathematical notation, e.g. "[0, 1)"."""
        min_str, max_str = self._endpoint_strings()
        return f"{self.bounds.left_bracket}{min_str}, {max_str}{self.bounds.right_bracket}"

    def to_set_notation(self) -> str:
        """Format as set-builder notation, e.g. "{x | 0 ≤ x < 1}"."""
        min_str, max_str = self._endpoint_strings()
        left_cmp = "≤" if self.bounds.includes_left else "<"
        right_cmp = "≤" if self.bounds.includes_right else "<"
        return f"{{x | {min_str} {left_cmp} x {right_cmp} {max_str}}}"

    def format(self, notation: IntervalFormat = IntervalFormat.MATHEMATICAL) -> str:
        if notation is IntervalFormat.MATHEMATICAL:
            return self.to_math_string()
        if notation is IntervalFormat.SET_NOTATION:
            return self.to_set_notation()
        raise ValueError(f"Unknown interval format: {notation}")

    def to_string(self) -> str:
        return self.to_math_string()

    def to_tex(self) -> str:
        min_tex = "-\\infty" if self.min is None else format_number(self.min, ENDPOINT_DECIMALS)
        max_tex = "\\infty" if self.max is None else format_number(self.max, ENDPOINT_DECIMALS)
        return f"\\left{self.bounds.left_bracket}{min_tex}, {max_tex}\\right{self.bounds.right_bracket}"

    def to_python(self) -> tuple[float, float, bool, bool]:
        """Endpoints as floats (±inf when unbounded) plus inclusion flags."""
        return (
            -math.inf if self.min is None else self.min,
            math.inf if self.max is None else self.max,
            self.bounds.includes_left,
            self.bounds.includes_right,
        )

    def __str__(self) -> str:
        return self.to_string()


def parse_interval(text: str) -> Interval:
    """
    Parse an interval from mathematical notation: [a, b], (a, b), [a, b), (a, b].

    Bounds may be infinity tokens such as -inf, ∞ or posinf (case-insensitive).

    Raises:
        FormatError: If the text is not bracketed, does not hold exactly two
            comma-separated bounds, or a bound is not a number
    """
    trimmed = text.strip()

    if len(trimmed) < 2 or trimmed[0] not in "[(" or trimmed[-1] not in "])":
        raise FormatError(text, "an interval such as [a, b], (a, b), [a, b) or (a, b]")

    bounds = IntervalBounds.from_inclusion(trimmed[0] == "[", trimmed[-1] == "]")

    parts = trimmed[1:-1].split(",")
    if len(parts) != 2:
        raise FormatError(text, "two comma-separated bounds: [min, max]")

    return Interval(min=_parse_bound(parts[0]), max=_parse_bound(parts[1]), bounds=bounds)


def _parse_bound(raw: str) -> float | None:
    token = raw.strip().lower()
    if token in _NEG_INFINITY_TOKENS or token in _POS_INFINITY_TOKENS:
        return None

    value = parse_real(token)
    if value is None or math.isnan(value):
        logger.debug("Invalid interval bound", extra_data={"bound": raw})
        raise FormatError(raw, "a number or an infinity token")
    return value
