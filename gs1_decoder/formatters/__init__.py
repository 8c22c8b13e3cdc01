"""
Output formatters for GS1 decoder.
"""

from .json_formatter import (
    DATE_ISO,
    DATE_DDMMYYYY,
    get_default_parser,
    parse_gs1_to_json,
    parse_gs1_to_dict,
    format_gs1_result_json,
    format_gs1_result_dict,
    format_error_json,
    format_date,
)

__all__ = [
    "DATE_ISO",
    "DATE_DDMMYYYY",
    "get_default_parser",
    "parse_gs1_to_json",
    "parse_gs1_to_dict",
    "format_gs1_result_json",
    "format_gs1_result_dict",
    "format_error_json",
    "format_date",
]
