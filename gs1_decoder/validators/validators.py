"""
GS1 Validation Functions

Implements validation and decoding primitives for GS1 element strings:
- Check digit calculation and validation (Mod10 for GTIN, SSCC, GLN, etc.)
- Character set checks (numeric, GS1 alphanumeric subset)
- Date decoding (YYMMDD with century windowing)
- Integer decoding for count AIs
- Implied decimal handling for variable measure AIs

Based on GS1 General Specifications.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date

from ..core.errors import ErrorCode, ValueDecodeError


NUMERIC = frozenset('0123456789')

# Digits, upper-case letters, space and the GS1 punctuation subset
ALPHANUMERIC = frozenset(
    '0123456789'
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    ' !"#$%&\'()*+,-./:;<=>?_'
)

# YY >= pivot: 19YY, YY < pivot: 20YY
CENTURY_PIVOT = 51

MAX_DECIMAL_PLACES = 5


def is_numeric(value: str) -> bool:
    """True if value is non-empty and made of ASCII digits only."""
    return bool(value) and all(c in NUMERIC for c in value)


def is_alphanumeric(value: str) -> bool:
    """True if every character is in the GS1 alphanumeric subset."""
    return all(c in ALPHANUMERIC for c in value)


def calculate_check_digit_mod10(digits: str) -> int:
    """
    Calculate GS1 Mod10 check digit.

    Algorithm (GS1 General Specifications):
    1. From right to left, alternate multipliers 3 and 1
    2. Sum all products
    3. Check digit = (10 - (sum mod 10)) mod 10

    Args:
        digits: Numeric string without check digit

    Returns:
        Calculated check digit (0-9)

    Raises:
        ValueDecodeError: EMPTY_INPUT for an empty string, NOT_NUMERIC for
            any non-digit character
    """
    if not digits:
        raise ValueDecodeError(
            ErrorCode.EMPTY_INPUT, "Check digit input must not be empty"
        )
    if not is_numeric(digits):
        raise ValueDecodeError(
            ErrorCode.NOT_NUMERIC, f"Check digit input must be numeric, got: {digits!r}"
        )

    total = 0
    for i, digit in enumerate(reversed(digits)):
        multiplier = 3 if i % 2 == 0 else 1
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def validate_check_digit(value: str) -> bool:
    """
    Validate the trailing GS1 check digit of a GTIN, SSCC, GLN, etc.

    Args:
        value: The complete value including check digit

    Returns:
        True if the last digit matches the digit calculated over the rest
    """
    if not value:
        raise ValueDecodeError(
            ErrorCode.EMPTY_INPUT, "Check digit input must not be empty"
        )
    if not is_numeric(value):
        raise ValueDecodeError(
            ErrorCode.NOT_NUMERIC, f"Check digit input must be numeric, got: {value!r}"
        )

    provided_check = int(value[-1])
    return calculate_check_digit_mod10(value[:-1]) == provided_check


def decode_date(value: str) -> date:
    """
    Decode a GS1 YYMMDD date.

    Century window:
    - YY 00-50: 2000-2050
    - YY 51-99: 1951-1999

    Raises:
        ValueDecodeError: INVALID_DATE on malformed input or a day that
            does not exist in the given month
    """
    if len(value) != 6 or not is_numeric(value):
        raise ValueDecodeError(
            ErrorCode.INVALID_DATE, f"Invalid date format: {value!r} (expected YYMMDD)"
        )

    yy = int(value[0:2])
    mm = int(value[2:4])
    dd = int(value[4:6])

    year = 1900 + yy if yy >= CENTURY_PIVOT else 2000 + yy

    if mm < 1 or mm > 12:
        raise ValueDecodeError(ErrorCode.INVALID_DATE, f"Invalid month: {mm}")

    max_day = monthrange(year, mm)[1]
    if dd < 1 or dd > max_day:
        raise ValueDecodeError(
            ErrorCode.INVALID_DATE, f"Day {dd} invalid for month {mm} in year {year}"
        )

    return date(year, mm, dd)


def decode_integer(value: str) -> int:
    """Base-10 parse of the whole value."""
    if not is_numeric(value):
        raise ValueDecodeError(
            ErrorCode.NOT_NUMERIC, f"Value must be numeric, got: {value!r}"
        )
    try:
        return int(value)
    except ValueError as e:
        # int() refuses very long digit strings
        raise ValueDecodeError(ErrorCode.NOT_NUMERIC, str(e)) from e


def decode_variable_measure(value: str, decimal_places: int) -> str:
    """
    Decode a numeric value with implied decimal positions.

    Used for weight/measure AIs like 310x, 320x, 330x, etc.
    where the last digit of the AI indicates decimal places.
    Works on the digit string directly so values of any length keep
    full precision.

    Example: AI 3102, value "001250" -> "12.50"

    Args:
        value: Numeric string value
        decimal_places: Number of decimal places (0-5)

    Returns:
        Fixed-point decimal string with exactly decimal_places fraction digits
    """
    if not is_numeric(value):
        raise ValueDecodeError(
            ErrorCode.NOT_NUMERIC, f"Value must be numeric, got: {value!r}"
        )
    if not 0 <= decimal_places <= MAX_DECIMAL_PLACES:
        raise ValueError(f"decimal_places must be 0-{MAX_DECIMAL_PLACES}, got {decimal_places}")

    digits = value.lstrip('0')

    if decimal_places == 0:
        return digits or '0'

    # Pad so the integer part has at least one digit
    digits = digits.zfill(decimal_places + 1)

    int_part = digits[:-decimal_places]
    dec_part = digits[-decimal_places:]

    return f"{int_part}.{dec_part}"
