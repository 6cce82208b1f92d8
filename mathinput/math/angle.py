"""
Angle values: unit conversion, normalization, and DMS notation.

Angles are carried as plain floats in degrees. DMS (degrees-minutes-seconds)
is a display/parse decomposition that converts back to degrees losslessly.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, Field

from ..core.errors import FormatError
from ..core.logging import get_context_logger
from .formatting import parse_int, parse_real
from .value import MathValue

logger = get_context_logger(__name__, component="angle")

_I32_MAX = 2**31 - 1


class AngleUnit(Enum):
    """Angle unit types."""

    DEGREES = "degrees"
    RADIANS = "radians"
    GRADIANS = "gradians"
    TURNS = "turns"
    DMS = "dms"  # e.g. 45°30'15"

    @property
    def suffix(self) -> str:
        """Display suffix for this unit."""
        return _UNIT_SUFFIXES[self]

    @property
    def label(self) -> str:
        """Full name of this unit."""
        return _UNIT_LABELS[self]


_UNIT_SUFFIXES = {
    AngleUnit.DEGREES: "°",
    AngleUnit.RADIANS: " rad",
    AngleUnit.GRADIANS: " grad",
    AngleUnit.TURNS: " turns",
    AngleUnit.DMS: "",
}

_UNIT_LABELS = {
    AngleUnit.DEGREES: "Degrees",
    AngleUnit.RADIANS: "Radians",
    AngleUnit.GRADIANS: "Gradians",
    AngleUnit.TURNS: "Turns",
    AngleUnit.DMS: "DMS",
}

# Longest first so "grad" is not mistaken for "rad"
_STRIPPABLE_SUFFIXES = ("turns", "turn", "grad", "rad", "°")


class AngleNormalization(Enum):
    """Normalization mode for angles."""

    NONE = "none"
    ZERO_TO_360 = "0..360"
    NEGATIVE_TO_180 = "-180..180"


class DMS(BaseModel, MathValue):
    """
    Degrees-minutes-seconds decomposition of an angle.

    The sign lives only in ``negative``; degrees, minutes and seconds are
    non-negative magnitudes.
    """

    degrees: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0, le=60)
    seconds: float = Field(default=0.0, ge=0.0, le=60.0)
    negative: bool = False

    @classmethod
    def new(cls, degrees: int, minutes: int = 0, seconds: float = 0.0) -> DMS:
        """Create a DMS value taking the sign from degrees."""
        return cls(degrees=abs(degrees), minutes=minutes, seconds=seconds, negative=degrees < 0)

    @classmethod
    def from_degrees(cls, degrees: float) -> DMS:
        """Decompose decimal degrees."""
        negative = degrees < 0.0
        magnitude = abs(degrees)

        d = math.floor(magnitude)
        remaining = (magnitude - d) * 60.0
        m = math.floor(remaining)
        s = (remaining - m) * 60.0

        return cls(degrees=d, minutes=m, seconds=s, negative=negative)

    def to_degrees(self) -> float:
        """Convert to decimal degrees."""
        value = self.degrees + self.minutes / 60.0 + self.seconds / 3600.0
        return -value if self.negative else value

    def to_string(self) -> str:
        sign = "-" if self.negative else ""
        if self.seconds == 0.0 and self.minutes == 0:
            return f"{sign}{self.degrees}°"
        if self.seconds == 0.0:
            return f"{sign}{self.degrees}°{self.minutes}'"
        if self.seconds.is_integer():
            return f"{sign}{self.degrees}°{self.minutes}'{int(self.seconds)}\""
        return f"{sign}{self.degrees}°{self.minutes}'{self.seconds:.2f}\""

    def to_tex(self) -> str:
        sign = "-" if self.negative else ""
        return f"{sign}{self.degrees}^\\circ {self.minutes}' {self.seconds:g}''"

    def to_python(self) -> float:
        return self.to_degrees()

    def __str__(self) -> str:
        return self.to_string()


def parse_dms(text: str) -> DMS:
    """
    Parse a DMS string.

    Accepted dialects, tried in order:
        - symbols: 45°30'15" or 45°30′15.5″
        - letters: 45d30m15s
        - spaces:  45 30 15

    A leading '-' marks the angle negative. Missing minutes/seconds are 0.

    Raises:
        FormatError: If no dialect accepts the text
    """
    trimmed = text.strip()
    negative = trimmed.startswith("-")
    value = trimmed[1:] if negative else trimmed

    for dialect in (_parse_dms_symbols, _parse_dms_letters, _parse_dms_spaces):
        parts = dialect(value)
        if parts is None:
            continue
        result = _dms_from_parts(parts)
        if result is not None:
            return result.model_copy(update={"negative": negative})

    logger.debug("Unparseable DMS angle", extra_data={"text": text})
    raise FormatError(text, "a DMS angle such as 45°30'15\", 45d30m15s or 45 30 15")


def _parse_dms_symbols(text: str) -> list[str] | None:
    for separator in "°'\"′″":
        text = text.replace(separator, "\x00")
    return [part.strip() for part in text.split("\x00")]


def _parse_dms_letters(text: str) -> list[str] | None:
    lower = text.lower()
    for separator in "dms":
        lower = lower.replace(separator, "\x00")
    return [part.strip() for part in lower.split("\x00")]


def _parse_dms_spaces(text: str) -> list[str] | None:
    parts = text.split()
    return parts or None


def _dms_from_parts(parts: list[str]) -> DMS | None:
    degrees = parse_int(parts[0], lo=0, hi=_I32_MAX)
    if degrees is None:
        return None

    minutes = 0
    if len(parts) > 1 and parts[1]:
        minutes = parse_int(parts[1], lo=0, hi=59)
        if minutes is None:
            return None

    seconds = 0.0
    if len(parts) > 2 and parts[2]:
        seconds = parse_real(parts[2])
        if seconds is None or not 0.0 <= seconds < 60.0:
            return None

    return DMS(degrees=degrees, minutes=minutes, seconds=seconds)


def to_degrees(value: float, from_unit: AngleUnit) -> float:
    """Convert an angle from the given unit to degrees."""
    if from_unit in (AngleUnit.DEGREES, AngleUnit.DMS):
        return value
    if from_unit is AngleUnit.RADIANS:
        return value * 180.0 / math.pi
    if from_unit is AngleUnit.GRADIANS:
        return value * 0.9  # 360/400
    if from_unit is AngleUnit.TURNS:
        return value * 360.0
    raise ValueError(f"Unknown angle unit: {from_unit}")


def from_degrees(degrees: float, to_unit: AngleUnit) -> float:
    """Convert an angle in degrees to the given unit."""
    if to_unit in (AngleUnit.DEGREES, AngleUnit.DMS):
        return degrees
    if to_unit is AngleUnit.RADIANS:
        return degrees * math.pi / 180.0
    if to_unit is AngleUnit.GRADIANS:
        return degrees / 0.9
    if to_unit is AngleUnit.TURNS:
        return degrees / 360.0
    raise ValueError(f"Unknown angle unit: {to_unit}")


def convert_angle(value: float, from_unit: AngleUnit, to_unit: AngleUnit) -> float:
    """Convert an angle between any two units."""
    return from_degrees(to_degrees(value, from_unit), to_unit)


def normalize_degrees(degrees: float, mode: AngleNormalization) -> float:
    """
    Normalize an angle in degrees.

    ZERO_TO_360 maps into [0, 360); NEGATIVE_TO_180 maps into (-180, 180].
    """
    if mode is AngleNormalization.NONE:
        return degrees
    if mode is AngleNormalization.ZERO_TO_360:
        return math.fmod(math.fmod(degrees, 360.0) + 360.0, 360.0)
    if mode is AngleNormalization.NEGATIVE_TO_180:
        normalized = math.fmod(degrees, 360.0)
        if normalized > 180.0:
            normalized -= 360.0
        elif normalized <= -180.0:
            normalized += 360.0
        return normalized
    raise ValueError(f"Unknown normalization mode: {mode}")


def format_angle_value(value: float, unit: AngleUnit, precision: int = 2) -> str:
    """Format an angle (in the given unit) for display."""
    if unit is AngleUnit.DMS:
        return DMS.from_degrees(value).to_string()
    return f"{value:.{precision}f}"


def parse_angle_to_degrees(text: str, unit: AngleUnit) -> float:
    """
    Parse angle text entered in the given unit and return degrees.

    A trailing unit suffix (°, rad, grad, turn, turns) is ignored.

    Raises:
        FormatError: If the text is empty or not a number
    """
    trimmed = text.strip()
    if not trimmed:
        raise FormatError(text, "an angle")

    if unit is AngleUnit.DMS:
        return parse_dms(trimmed).to_degrees()

    cleaned = trimmed
    for suffix in _STRIPPABLE_SUFFIXES:
        if cleaned.endswith(suffix):
            cleaned = cleaned[: -len(suffix)].strip()
            break

    value = parse_real(cleaned)
    if value is None:
        logger.debug("Unparseable angle", extra_data={"text": text, "unit": unit.value})
        raise FormatError(text, f"an angle in {unit.label.lower()}")
    return to_degrees(value, unit)
