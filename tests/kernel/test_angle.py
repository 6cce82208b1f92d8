"""Tests for angle conversion, normalization and DMS notation."""

import math

import pytest

from mathinput.core.errors import FormatError
from mathinput.math.angle import (
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


class TestAngleUnit:
    """Unit metadata."""

    def test_suffixes(self):
        assert AngleUnit.DEGREES.suffix == "°"
        assert AngleUnit.RADIANS.suffix == " rad"
        assert AngleUnit.DMS.suffix == ""

    def test_labels(self):
        assert AngleUnit.GRADIANS.label == "Gradians"
        assert AngleUnit.TURNS.label == "Turns"


class TestConversion:
    """Linear conversion between units."""

    def test_radians(self):
        assert to_degrees(math.pi, AngleUnit.RADIANS) == pytest.approx(180.0)
        assert from_degrees(90.0, AngleUnit.RADIANS) == pytest.approx(math.pi / 2)

    def test_gradians(self):
        assert to_degrees(400.0, AngleUnit.GRADIANS) == pytest.approx(360.0)
        assert from_degrees(90.0, AngleUnit.GRADIANS) == pytest.approx(100.0)

    def test_turns(self):
        assert to_degrees(0.5, AngleUnit.TURNS) == 180.0
        assert from_degrees(720.0, AngleUnit.TURNS) == 2.0

    def test_degrees_and_dms_pass_through(self):
        assert to_degrees(12.5, AngleUnit.DEGREES) == 12.5
        assert from_degrees(12.5, AngleUnit.DMS) == 12.5

    @pytest.mark.parametrize("unit", list(AngleUnit))
    def test_round_trip(self, unit):
        assert from_degrees(to_degrees(1.25, unit), unit) == pytest.approx(1.25)

    def test_convert_angle(self):
        assert convert_angle(1.0, AngleUnit.TURNS, AngleUnit.GRADIANS) == pytest.approx(400.0)


class TestNormalization:
    """Wrapping into a canonical range."""

    def test_none_passes_through(self):
        assert normalize_degrees(450.0, AngleNormalization.NONE) == 450.0

    @pytest.mark.parametrize(
        "value, expected",
        [(450.0, 90.0), (-90.0, 270.0), (360.0, 0.0), (0.0, 0.0), (-720.0, 0.0), (359.5, 359.5)],
    )
    def test_zero_to_360(self, value, expected):
        assert normalize_degrees(value, AngleNormalization.ZERO_TO_360) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value, expected",
        [(270.0, -90.0), (180.0, 180.0), (-180.0, 180.0), (190.0, -170.0), (-190.0, 170.0), (45.0, 45.0)],
    )
    def test_negative_to_180(self, value, expected):
        assert normalize_degrees(value, AngleNormalization.NEGATIVE_TO_180) == pytest.approx(expected)


class TestDMS:
    """Degrees-minutes-seconds decomposition."""

    def test_from_degrees(self):
        dms = DMS.from_degrees(45.5)
        assert dms.degrees == 45
        assert dms.minutes == 30
        assert dms.seconds == pytest.approx(0.0, abs=1e-6)
        assert dms.negative is False

    def test_from_negative_degrees(self):
        dms = DMS.from_degrees(-10.25)
        assert (dms.degrees, dms.minutes, dms.negative) == (10, 15, True)

    @pytest.mark.parametrize("value", [45.5, -12.345, 0.0, 359.9999, 123.456789])
    def test_round_trip(self, value):
        assert DMS.from_degrees(value).to_degrees() == pytest.approx(value, abs=1e-4)

    def test_new_takes_sign_from_degrees(self):
        dms = DMS.new(-45, 30, 0.0)
        assert dms.negative is True
        assert dms.degrees == 45
        assert dms.to_degrees() == pytest.approx(-45.5)

    def test_to_string_omits_zero_parts(self):
        assert DMS.new(45).to_string() == "45°"
        assert DMS.new(45, 30).to_string() == "45°30'"
        assert DMS.new(45, 30, 15.0).to_string() == "45°30'15\""
        assert DMS.new(45, 0, 15.0).to_string() == "45°0'15\""

    def test_to_string_fractional_seconds(self):
        assert DMS.new(45, 30, 15.256).to_string() == "45°30'15.26\""

    def test_to_string_negative(self):
        assert str(DMS.new(-45, 30)) == "-45°30'"

    def test_field_validation(self, assert_validation_error):
        assert_validation_error(DMS, {"degrees": 1, "minutes": 61}, "minutes")
        assert_validation_error(DMS, {"degrees": -1}, "degrees")


class TestParseDMS:
    """The three DMS dialects."""

    def test_symbols(self):
        dms = parse_dms("45°30'15\"")
        assert dms.degrees == 45
        assert dms.minutes == 30
        assert dms.seconds == pytest.approx(15.0)
        assert dms.negative is False

    def test_unicode_primes(self):
        dms = parse_dms("45°30′15.5″")
        assert (dms.degrees, dms.minutes) == (45, 30)
        assert dms.seconds == pytest.approx(15.5)

    def test_letters(self):
        dms = parse_dms("45d30m15s")
        assert (dms.degrees, dms.minutes, dms.seconds) == (45, 30, 15.0)

    def test_letters_upper_case(self):
        dms = parse_dms("12D5M")
        assert (dms.degrees, dms.minutes, dms.seconds) == (12, 5, 0.0)

    def test_spaces(self):
        dms = parse_dms("45 30 15")
        assert (dms.degrees, dms.minutes, dms.seconds) == (45, 30, 15.0)

    def test_missing_parts_default_to_zero(self):
        dms = parse_dms("45°")
        assert (dms.degrees, dms.minutes, dms.seconds) == (45, 0, 0.0)
        assert parse_dms("45").to_degrees() == 45.0

    def test_negative(self):
        dms = parse_dms("-45°30'")
        assert dms.negative is True
        assert dms.to_degrees() == pytest.approx(-45.5)

    @pytest.mark.parametrize("text", ["", "abc", "45°61'", "45°30'60\"", "x 30 15", "--45"])
    def test_invalid(self, text):
        with pytest.raises(FormatError):
            parse_dms(text)


class TestAngleText:
    """Formatting and parsing angle text in a unit."""

    def test_format_value(self):
        assert format_angle_value(45.0, AngleUnit.DEGREES) == "45.00"
        assert format_angle_value(1.23456, AngleUnit.RADIANS, precision=3) == "1.235"

    def test_format_dms(self):
        assert format_angle_value(45.5, AngleUnit.DMS) == "45°30'"

    def test_parse_with_suffix(self):
        assert parse_angle_to_degrees("90°", AngleUnit.DEGREES) == 90.0
        assert parse_angle_to_degrees("3.14159 rad", AngleUnit.RADIANS) == pytest.approx(180.0, abs=1e-3)
        assert parse_angle_to_degrees("0.5 turns", AngleUnit.TURNS) == 180.0
        assert parse_angle_to_degrees("1 turn", AngleUnit.TURNS) == 360.0

    def test_grad_suffix_stripped_whole(self):
        assert parse_angle_to_degrees("100 grad", AngleUnit.GRADIANS) == pytest.approx(90.0)

    def test_parse_plain_number(self):
        assert parse_angle_to_degrees("  -30 ", AngleUnit.DEGREES) == -30.0

    def test_parse_dms_unit(self):
        assert parse_angle_to_degrees("10°30'", AngleUnit.DMS) == pytest.approx(10.5)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "rad"])
    def test_invalid(self, text):
        with pytest.raises(FormatError):
            parse_angle_to_degrees(text, AngleUnit.RADIANS)
