"""Tests for the kernel exception hierarchy."""

import pytest

from mathinput.core.errors import (
    FormatError,
    InvalidDenominatorError,
    InvariantViolation,
    MathInputError,
    NumericOverflowError,
    NumericUnderflowError,
    RangeError,
    ShapeError,
    TooManyDecimalsError,
)


class TestErrorHierarchy:
    """Every kernel error is a MathInputError and a matching builtin."""

    @pytest.mark.parametrize(
        "error, builtin",
        [
            (FormatError("x", "a number"), ValueError),
            (NumericOverflowError("u64", 10), ValueError),
            (NumericUnderflowError("u64", 0), ValueError),
            (TooManyDecimalsError(2), ValueError),
            (ShapeError("bad shape"), ValueError),
            (InvalidDenominatorError(1), ZeroDivisionError),
            (InvariantViolation("broken"), AssertionError),
        ],
    )
    def test_bases(self, error, builtin):
        assert isinstance(error, MathInputError)
        assert isinstance(error, builtin)

    def test_range_errors(self):
        for error in (NumericOverflowError("u8", 255), NumericUnderflowError("u8", 0), TooManyDecimalsError(2)):
            assert isinstance(error, RangeError)


class TestErrorPayload:
    """Messages and details."""

    def test_format_error(self):
        error = FormatError("abc", "a fraction")
        assert error.text == "abc"
        assert error.expected == "a fraction"
        assert str(error) == "Invalid format: 'abc' (expected a fraction)"

    def test_overflow_message(self):
        error = NumericOverflowError("u64", 2**64 - 1)
        assert error.limit == 2**64 - 1
        assert error.details == {"limit": str(2**64 - 1)}
        assert "u64 maximum" in error.message

    def test_underflow_message(self):
        assert NumericUnderflowError("i64", -5).message == "Value below i64 minimum (-5)"

    def test_too_many_decimals(self):
        assert str(TooManyDecimalsError(3)) == "Too many decimal places (max: 3)"

    def test_shape_error_details(self):
        error = ShapeError("mismatch", expected=4, actual=3)
        assert error.details == {"expected": 4, "actual": 3}

    def test_default_details(self):
        assert MathInputError("oops").details == {}

    def test_to_dict(self):
        payload = InvalidDenominatorError(7).to_dict()
        assert payload == {
            "error": {
                "type": "InvalidDenominatorError",
                "message": "Denominator cannot be zero",
                "details": {"numerator": 7},
            }
        }
