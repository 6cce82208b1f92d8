"""
Kernel exceptions.

Every fallible parse/validate/construct entry point raises one of these so
callers can recover; only InvariantViolation signals a kernel bug.
"""

from typing import Any, Dict, Optional


class MathInputError(Exception):
    """Base exception for kernel errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Standardized error payload for the calling layer"""
        return {
            "error": {
                "type": self.__class__.__name__,
                "message": self.message,
                "details": self.details,
            }
        }


class FormatError(MathInputError, ValueError):
    """Raised when text cannot be parsed into a value"""

    def __init__(self, text: str, expected: str):
        super().__init__(
            message=f"Invalid format: {text!r} (expected {expected})",
            details={"text": text, "expected": expected}
        )
        self.text = text
        self.expected = expected


class RangeError(MathInputError, ValueError):
    """Raised when a numeric value falls outside its precision's limits"""

    def __init__(self, message: str, limit: Any):
        super().__init__(message=message, details={"limit": str(limit)})
        self.limit = limit


class NumericOverflowError(RangeError):
    """Raised when a value exceeds the maximum of its precision"""

    def __init__(self, precision: str, limit: Any):
        super().__init__(f"Value exceeds {precision} maximum ({limit})", limit)


class NumericUnderflowError(RangeError):
    """Raised when a value is below the minimum of its precision"""

    def __init__(self, precision: str, limit: Any):
        super().__init__(f"Value below {precision} minimum ({limit})", limit)


class TooManyDecimalsError(RangeError):
    """Raised when a decimal carries more places than allowed"""

    def __init__(self, max_places: int):
        super().__init__(f"Too many decimal places (max: {max_places})", max_places)


class InvalidDenominatorError(MathInputError, ZeroDivisionError):
    """Raised when a fraction is built with a zero denominator"""

    def __init__(self, numerator: int):
        super().__init__(
            message="Denominator cannot be zero",
            details={"numerator": numerator}
        )


class ShapeError(MathInputError, ValueError):
    """Raised when array data does not match the declared shape"""

    def __init__(self, message: str, **details: Any):
        super().__init__(message=message, details=details)


class InvariantViolation(MathInputError, AssertionError):
    """Raised when an internal invariant has been broken (kernel bug)"""
