"""
Physical-unit quantities with affine conversion between compatible units.

Every unit carries a scale factor to its category's base unit and an
optional offset (temperature):

    base = (value + offset) * to_base
    value = base / to_base - offset

The built-in tables are immutable tuples gathered once into DEFAULT_REGISTRY.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from ..core.errors import FormatError
from ..core.logging import get_context_logger
from .formatting import format_float, parse_real
from .value import MathValue

logger = get_context_logger(__name__, component="units")


class UnitCategory(Enum):
    """Unit categories; only units of the same category convert."""

    LENGTH = "length"
    MASS = "mass"
    TIME = "time"
    TEMPERATURE = "temperature"
    VOLUME = "volume"
    AREA = "area"
    SPEED = "speed"
    FORCE = "force"
    ENERGY = "energy"
    POWER = "power"
    PRESSURE = "pressure"
    ANGLE = "angle"
    DATA = "data"
    CUSTOM = "custom"


class Unit(BaseModel):
    """A unit with its conversion factor to the category base unit."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    category: UnitCategory
    to_base: float
    offset: float = 0.0

    def is_compatible(self, other: Unit) -> bool:
        return self.category == other.category

    def __str__(self) -> str:
        return self.symbol


class UnitValue(BaseModel, MathValue):
    """A numeric value tagged with a unit."""

    value: float
    unit: Unit

    def __init__(self, value: float = 0.0, unit: Unit | None = None, **kwargs) -> None:
        if unit is None:
            raise ValueError("UnitValue requires a unit")
        super().__init__(value=value, unit=unit, **kwargs)

    def to_base(self) -> float:
        """Value expressed in the category base unit."""
        return (self.value + self.unit.offset) * self.unit.to_base

    @staticmethod
    def from_base(base_value: float, unit: Unit) -> float:
        """Express a base-unit value in ``unit``."""
        return base_value / unit.to_base - unit.offset

    def convert_to(self, target: Unit) -> UnitValue | None:
        """
        Convert to another unit.

        Returns:
            Converted value, or None when the categories differ
        """
        if not self.unit.is_compatible(target):
            logger.debug(
                "Refused unit conversion",
                extra_data={"from": self.unit.symbol, "to": target.symbol},
            )
            return None
        return UnitValue(UnitValue.from_base(self.to_base(), target), target)

    def to_string_with_unit(self, precision: int) -> str:
        """Value with a fixed number of decimals followed by the unit symbol."""
        return f"{self.value:.{precision}f} {self.unit.symbol}"

    def to_string(self) -> str:
        return f"{format_float(self.value)} {self.unit.symbol}"

    def to_tex(self) -> str:
        return f"{format_float(self.value)}\\,\\mathrm{{{self.unit.symbol}}}"

    def to_python(self) -> tuple[float, str]:
        return (self.value, self.unit.symbol)

    def __str__(self) -> str:
        return self.to_string()


def _unit(symbol: str, name: str, category: UnitCategory, to_base: float, offset: float = 0.0) -> Unit:
    return Unit(symbol=symbol, name=name, category=category, to_base=to_base, offset=offset)


LENGTH_UNITS: tuple[Unit, ...] = (
    _unit("m", "meter", UnitCategory.LENGTH, 1.0),
    _unit("km", "kilometer", UnitCategory.LENGTH, 1000.0),
    _unit("cm", "centimeter", UnitCategory.LENGTH, 0.01),
    _unit("mm", "millimeter", UnitCategory.LENGTH, 0.001),
    _unit("in", "inch", UnitCategory.LENGTH, 0.0254),
    _unit("ft", "foot", UnitCategory.LENGTH, 0.3048),
    _unit("yd", "yard", UnitCategory.LENGTH, 0.9144),
    _unit("mi", "mile", UnitCategory.LENGTH, 1609.344),
)

MASS_UNITS: tuple[Unit, ...] = (
    _unit("kg", "kilogram", UnitCategory.MASS, 1.0),
    _unit("g", "gram", UnitCategory.MASS, 0.001),
    _unit("mg", "milligram", UnitCategory.MASS, 0.000001),
    _unit("lb", "pound", UnitCategory.MASS, 0.453592),
    _unit("oz", "ounce", UnitCategory.MASS, 0.0283495),
    _unit("t", "tonne", UnitCategory.MASS, 1000.0),
)

TIME_UNITS: tuple[Unit, ...] = (
    _unit("s", "second", UnitCategory.TIME, 1.0),
    _unit("ms", "millisecond", UnitCategory.TIME, 0.001),
    _unit("μs", "microsecond", UnitCategory.TIME, 0.000001),
    _unit("min", "minute", UnitCategory.TIME, 60.0),
    _unit("h", "hour", UnitCategory.TIME, 3600.0),
    _unit("d", "day", UnitCategory.TIME, 86400.0),
)

# Kelvin is the base
TEMPERATURE_UNITS: tuple[Unit, ...] = (
    _unit("K", "kelvin", UnitCategory.TEMPERATURE, 1.0),
    _unit("°C", "celsius", UnitCategory.TEMPERATURE, 1.0, 273.15),
    _unit("°F", "fahrenheit", UnitCategory.TEMPERATURE, 5.0 / 9.0, 459.67),
)

DATA_UNITS: tuple[Unit, ...] = (
    _unit("B", "byte", UnitCategory.DATA, 1.0),
    _unit("KB", "kilobyte", UnitCategory.DATA, 1_000.0),
    _unit("MB", "megabyte", UnitCategory.DATA, 1_000_000.0),
    _unit("GB", "gigabyte", UnitCategory.DATA, 1_000_000_000.0),
    _unit("TB", "terabyte", UnitCategory.DATA, 1_000_000_000_000.0),
    _unit("KiB", "kibibyte", UnitCategory.DATA, 1024.0),
    _unit("MiB", "mebibyte", UnitCategory.DATA, 1_048_576.0),
    _unit("GiB", "gibibyte", UnitCategory.DATA, 1_073_741_824.0),
)


class UnitRegistry:
    """Read-only lookup over a fixed collection of units."""

    def __init__(self, units: Iterable[Unit]) -> None:
        self._units: tuple[Unit, ...] = tuple(units)

    def all_units(self) -> tuple[Unit, ...]:
        return self._units

    def units(self, category: UnitCategory) -> tuple[Unit, ...]:
        """All units of one category, in registration order."""
        return tuple(unit for unit in self._units if unit.category == category)

    def categories(self) -> tuple[UnitCategory, ...]:
        """Categories present in the registry, in first-seen order."""
        seen: list[UnitCategory] = []
        for unit in self._units:
            if unit.category not in seen:
                seen.append(unit.category)
        return tuple(seen)

    def find(self, key: str) -> Unit | None:
        """Look up a unit by exact symbol, then by case-insensitive name."""
        for unit in self._units:
            if unit.symbol == key:
                return unit
        lowered = key.lower()
        for unit in self._units:
            if unit.name.lower() == lowered:
                return unit
        return None

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self):
        return iter(self._units)


DEFAULT_REGISTRY = UnitRegistry(
    LENGTH_UNITS + MASS_UNITS + TIME_UNITS + TEMPERATURE_UNITS + DATA_UNITS
)


def parse_unit_value(text: str, units: Sequence[Unit]) -> UnitValue:
    """
    Parse "value unit" text against the given units.

    Each unit is tried in order, first as a symbol suffix and then as a
    case-insensitive name suffix. A bare number is tagged with the first unit.

    Raises:
        FormatError: If the text is empty or nothing matches
    """
    trimmed = text.strip()
    if not trimmed:
        raise FormatError(text, "a value with an optional unit")

    lowered = trimmed.lower()
    for unit in units:
        if trimmed.endswith(unit.symbol):
            value = parse_real(trimmed[: len(trimmed) - len(unit.symbol)].strip())
            if value is not None:
                return UnitValue(value, unit)

        name = unit.name.lower()
        if lowered.endswith(name):
            value = parse_real(lowered[: len(lowered) - len(name)].strip())
            if value is not None:
                return UnitValue(value, unit)

    value = parse_real(trimmed)
    if value is not None and units:
        return UnitValue(value, units[0])

    logger.debug("Unparseable unit value", extra_data={"text": text})
    raise FormatError(text, "a number followed by one of: " + ", ".join(u.symbol for u in units))
