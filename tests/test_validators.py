"""
Tests for GS1 validation and decoding primitives.

Tests cover:
- Mod10 check digit calculation and validation
- YYMMDD dates with century windowing
- Integer decoding
- Implied-decimal variable measures
- Character sets
"""

from datetime import date

import pytest

from gs1_decoder import ErrorCode, ValueDecodeError
from gs1_decoder.validators import (
    calculate_check_digit_mod10,
    validate_check_digit,
    decode_date,
    decode_integer,
    decode_variable_measure,
    is_alphanumeric,
    is_numeric,
)


class TestCheckDigit:
    """Tests for check digit calculation and validation."""

    def test_mod10_gtin14(self):
        """Test Mod10 check digit for GTIN-14."""
        assert calculate_check_digit_mod10("0950110153000") == 3
        assert calculate_check_digit_mod10("0628509600084") == 2

    def test_mod10_gtin13(self):
        """Test Mod10 check digit for GTIN-13 body."""
        assert calculate_check_digit_mod10("590123412345") == 7

    def test_mod10_gln(self):
        """Test Mod10 check digit for GLN-13."""
        assert calculate_check_digit_mod10("061414112345") == 2

    def test_mod10_all_zeros(self):
        assert calculate_check_digit_mod10("0000000000000") == 0

    def test_mod10_rightmost_weight_is_three(self):
        """A single digit is weighted by 3."""
        assert calculate_check_digit_mod10("1") == 7
        assert calculate_check_digit_mod10("10") == 9

    def test_validate_gtin_valid(self):
        """Test validation of valid GTIN."""
        assert validate_check_digit("09501101530003")
        assert validate_check_digit("12345678901231")

    def test_validate_gtin_invalid(self):
        """Test validation of invalid GTIN."""
        assert not validate_check_digit("09501101530004")

    def test_validate_sscc(self):
        assert validate_check_digit("106141411234567897")

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueDecodeError) as exc_info:
            calculate_check_digit_mod10("12A4")
        assert exc_info.value.code == ErrorCode.NOT_NUMERIC

        with pytest.raises(ValueDecodeError) as exc_info:
            validate_check_digit("0950110153000X")
        assert exc_info.value.code == ErrorCode.NOT_NUMERIC

    def test_empty_rejected(self):
        with pytest.raises(ValueDecodeError) as exc_info:
            calculate_check_digit_mod10("")
        assert exc_info.value.code == ErrorCode.EMPTY_INPUT

        with pytest.raises(ValueDecodeError) as exc_info:
            validate_check_digit("")
        assert exc_info.value.code == ErrorCode.EMPTY_INPUT

    def test_single_digit_has_nothing_to_check(self):
        with pytest.raises(ValueDecodeError) as exc_info:
            validate_check_digit("7")
        assert exc_info.value.code == ErrorCode.EMPTY_INPUT

    def test_unicode_digits_are_not_numeric(self):
        """Only ASCII 0-9 count as digits."""
        with pytest.raises(ValueDecodeError):
            calculate_check_digit_mod10("12²")


class TestDateDecoding:
    """Tests for YYMMDD dates."""

    @pytest.mark.parametrize("raw, expected", [
        ("991231", date(1999, 12, 31)),
        ("000101", date(2000, 1, 1)),
        ("500630", date(2050, 6, 30)),
        ("511231", date(1951, 12, 31)),
    ])
    def test_century_window(self, raw, expected):
        assert decode_date(raw) == expected

    def test_leap_day(self):
        assert decode_date("240229") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", [
        "250230",   # Feb 30
        "250229",   # not a leap year
        "251301",   # month 13
        "250001",   # month 00
        "250100",   # day 00
        "250431",   # April 31
    ])
    def test_invalid_calendar_dates(self, raw):
        with pytest.raises(ValueDecodeError) as exc_info:
            decode_date(raw)
        assert exc_info.value.code == ErrorCode.INVALID_DATE

    @pytest.mark.parametrize("raw", ["2512", "2512310", "25A231", ""])
    def test_malformed_dates(self, raw):
        with pytest.raises(ValueDecodeError) as exc_info:
            decode_date(raw)
        assert exc_info.value.code == ErrorCode.INVALID_DATE


class TestIntegerDecoding:

    def test_leading_zeros(self):
        assert decode_integer("00000100") == 100

    def test_non_numeric(self):
        with pytest.raises(ValueDecodeError) as exc_info:
            decode_integer("12A")
        assert exc_info.value.code == ErrorCode.NOT_NUMERIC

    def test_very_long_digit_string(self):
        """Digit strings beyond the interpreter's int() limit fail cleanly."""
        try:
            value = decode_integer("9" * 5000)
        except ValueDecodeError as e:
            assert e.code == ErrorCode.NOT_NUMERIC
        else:
            assert value == int("9" * 5000)


class TestVariableMeasure:
    """Tests for implied decimal decoding."""

    @pytest.mark.parametrize("places, raw, expected", [
        (2, "001250", "12.50"),
        (0, "000045", "45"),
        (5, "000001", "0.00001"),
        (1, "123456", "12345.6"),
        (3, "123456", "123.456"),
        (4, "123456", "12.3456"),
        (5, "123456", "1.23456"),
        (2, "000045", "0.45"),
    ])
    def test_decimal_placement(self, places, raw, expected):
        assert decode_variable_measure(raw, places) == expected

    def test_zero_values(self):
        assert decode_variable_measure("000000", 0) == "0"
        assert decode_variable_measure("000000", 2) == "0.00"

    def test_no_precision_loss_on_long_values(self):
        """Digits beyond float precision survive."""
        raw = "12345678901234567890123"
        assert decode_variable_measure(raw, 3) == "12345678901234567890.123"

    def test_non_numeric(self):
        with pytest.raises(ValueDecodeError) as exc_info:
            decode_variable_measure("12.500", 2)
        assert exc_info.value.code == ErrorCode.NOT_NUMERIC

    def test_decimal_places_out_of_range(self):
        with pytest.raises(ValueError):
            decode_variable_measure("123456", 6)


class TestCharacterSets:

    def test_numeric(self):
        assert is_numeric("0123456789")
        assert not is_numeric("")
        assert not is_numeric("12 3")

    def test_alphanumeric_subset(self):
        assert is_alphanumeric("ABC-123/X.Y")
        assert is_alphanumeric("A B_C?")
        assert is_alphanumeric('!"#$%&\'()*+,-./:;<=>?_')

    @pytest.mark.parametrize("value", ["abc", "AB\x00C", "A@B", "A[B]", "A\x1dB", "Å"])
    def test_alphanumeric_rejects(self, value):
        assert not is_alphanumeric(value)
