"""
Validation modules for GS1 decoder.
"""

from .validators import (
    calculate_check_digit_mod10,
    validate_check_digit,
    decode_date,
    decode_integer,
    decode_variable_measure,
    is_numeric,
    is_alphanumeric,
    ALPHANUMERIC,
    NUMERIC,
    CENTURY_PIVOT,
)

__all__ = [
    "calculate_check_digit_mod10",
    "validate_check_digit",
    "decode_date",
    "decode_integer",
    "decode_variable_measure",
    "is_numeric",
    "is_alphanumeric",
    "ALPHANUMERIC",
    "NUMERIC",
    "CENTURY_PIVOT",
]
