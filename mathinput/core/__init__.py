"""Core utilities package"""

from .config import Settings, settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    MathInputError,
    FormatError,
    RangeError,
    NumericOverflowError,
    NumericUnderflowError,
    TooManyDecimalsError,
    InvalidDenominatorError,
    ShapeError,
    InvariantViolation,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "MathInputError",
    "FormatError",
    "RangeError",
    "NumericOverflowError",
    "NumericUnderflowError",
    "TooManyDecimalsError",
    "InvalidDenominatorError",
    "ShapeError",
    "InvariantViolation",
]
