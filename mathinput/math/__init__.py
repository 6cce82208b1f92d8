"""
mathinput.math - value types behind the mathematical input widgets

Each type parses user text, keeps a canonical form, supports its algebra,
and renders to several display formats:
- Fraction: exact rationals, mixed numbers, best rational approximation
- DMS and angle helpers: unit conversion, normalization
- Interval: open, closed and half-open ranges
- UnitValue: quantities with affine unit conversion
- Vector, Matrix: Euclidean vectors and resizable matrices
- Tensor: arbitrary-rank row-major tensors
- Precision family: bounded numeric text with saturating steps
"""

from .angle import (
    DMS,
    AngleNormalization,
    AngleUnit,
    convert_angle,
    format_angle_value,
    from_degrees,
    normalize_degrees,
    parse_angle_to_degrees,
    parse_dms,
    to_degrees,
)
from .formatting import format_float, format_number
from .fraction import Fraction, FractionDisplayFormat, gcd, parse_fraction
from .geometric import (
    Matrix,
    MatrixExportFormat,
    MatrixNotation,
    MatrixOperation,
    Vector,
    VectorNotation,
)
from .numeric import (
    ARBITRARY,
    I64,
    I128,
    U64,
    U128,
    ArbitraryPrecision,
    DecimalPrecision,
    IntegerPrecision,
    NumberFormat,
    Precision,
    add_thousand_separators,
    is_valid_char,
    normalize_pasted_number,
    to_scientific,
)
from .sets import Interval, IntervalBounds, IntervalFormat, parse_interval
from .tensor import Tensor
from .units import (
    DATA_UNITS,
    DEFAULT_REGISTRY,
    LENGTH_UNITS,
    MASS_UNITS,
    TEMPERATURE_UNITS,
    TIME_UNITS,
    Unit,
    UnitCategory,
    UnitRegistry,
    UnitValue,
    parse_unit_value,
)
from .value import MathValue

__all__ = [
    "MathValue",
    "format_number",
    "format_float",
    "Fraction",
    "FractionDisplayFormat",
    "gcd",
    "parse_fraction",
    "DMS",
    "AngleUnit",
    "AngleNormalization",
    "parse_dms",
    "to_degrees",
    "from_degrees",
    "convert_angle",
    "normalize_degrees",
    "format_angle_value",
    "parse_angle_to_degrees",
    "Interval",
    "IntervalBounds",
    "IntervalFormat",
    "parse_interval",
    "Unit",
    "UnitCategory",
    "UnitValue",
    "UnitRegistry",
    "DEFAULT_REGISTRY",
    "LENGTH_UNITS",
    "MASS_UNITS",
    "TIME_UNITS",
    "TEMPERATURE_UNITS",
    "DATA_UNITS",
    "parse_unit_value",
    "Vector",
    "VectorNotation",
    "Matrix",
    "MatrixNotation",
    "MatrixOperation",
    "MatrixExportFormat",
    "Tensor",
    "Precision",
    "IntegerPrecision",
    "DecimalPrecision",
    "ArbitraryPrecision",
    "U64",
    "U128",
    "I64",
    "I128",
    "ARBITRARY",
    "NumberFormat",
    "add_thousand_separators",
    "to_scientific",
    "normalize_pasted_number",
    "is_valid_char",
]
