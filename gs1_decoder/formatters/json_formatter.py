"""
JSON Formatter for GS1 Decoder

Renders a ParseResult as an ordered mapping keyed by AI code:
- Elements appear in the order they were encountered in the input
- Dates as ISO-8601 (yyyy-mm-dd) or dd/mm/yyyy
- Counts as JSON numbers, measures as fixed-point decimal strings
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Optional

from ..core.errors import GS1ParseError
from ..core.parser import ElementData, GS1Parser, ParseResult


DATE_ISO = "iso"
DATE_DDMMYYYY = "ddmmyyyy"

_default_parser: Optional[GS1Parser] = None


def get_default_parser() -> GS1Parser:
    """Lenient parser shared by the convenience helpers, built on first use."""
    global _default_parser

    if _default_parser is None:
        _default_parser = GS1Parser.default()
    return _default_parser


def format_date(value: date, date_format: str = DATE_ISO) -> str:
    """
    Format a decoded date.

    Handles:
    - iso: 2029-01-31
    - ddmmyyyy: 31/01/2029
    """
    if date_format == DATE_DDMMYYYY:
        return value.strftime("%d/%m/%Y")
    if date_format == DATE_ISO:
        return value.isoformat()
    raise ValueError(f"Unknown date format: {date_format}")


def _format_element(
    element: ElementData,
    include_raw_values: bool,
    date_format: str
) -> Any:
    value = element.value
    if isinstance(value, date):
        value = format_date(value, date_format)

    if not include_raw_values:
        return value

    return {
        "name": element.name,
        "value": value,
        "raw": element.raw_value,
        "position": element.start_index,
    }


def format_gs1_result_dict(
    result: ParseResult,
    include_raw_values: bool = False,
    date_format: str = DATE_ISO
) -> Dict[str, Any]:
    """
    Format GS1 parse result as an ordered dictionary.

    Args:
        result: Result from GS1Parser.parse()
        include_raw_values: Emit name/value/raw/position objects instead of bare values
        date_format: "iso" or "ddmmyyyy"

    Returns:
        Dictionary keyed by AI code in encounter order
    """
    return {
        element.ai: _format_element(element, include_raw_values, date_format)
        for element in result
    }


def format_gs1_result_json(
    result: ParseResult,
    include_raw_values: bool = False,
    date_format: str = DATE_ISO
) -> str:
    """Format GS1 parse result as JSON text."""
    output = format_gs1_result_dict(
        result,
        include_raw_values=include_raw_values,
        date_format=date_format
    )
    return json.dumps(output, ensure_ascii=False, indent=2)


def format_error_json(error: GS1ParseError) -> str:
    """Format a parse failure as JSON text."""
    return json.dumps({"error": error.to_dict()}, ensure_ascii=False, indent=2)


def parse_gs1_to_json(
    barcode_data: str,
    parser: Optional[GS1Parser] = None,
    include_raw_values: bool = False,
    date_format: str = DATE_ISO
) -> str:
    """
    Parse GS1 barcode and return JSON output.

    Args:
        barcode_data: Raw barcode string
        parser: Parser to use (the shared lenient parser if omitted)
        include_raw_values: Include raw values and positions
        date_format: "iso" or "ddmmyyyy"

    Returns:
        JSON string with decoded fields

    Example:
        >>> print(parse_gs1_to_json("(01)09501101530003(17)251231(10)ABC123"))
        {
          "01": "09501101530003",
          "17": "2025-12-31",
          "10": "ABC123"
        }
    """
    parser = parser or get_default_parser()
    result = parser.parse(barcode_data)

    return format_gs1_result_json(
        result,
        include_raw_values=include_raw_values,
        date_format=date_format
    )


def parse_gs1_to_dict(
    barcode_data: str,
    parser: Optional[GS1Parser] = None,
    include_raw_values: bool = False,
    date_format: str = DATE_ISO
) -> Dict[str, Any]:
    """
    Parse GS1 barcode and return dictionary.

    Args:
        barcode_data: Raw barcode string
        parser: Parser to use (the shared lenient parser if omitted)
        include_raw_values: Emit name/value/raw/position objects instead of bare values
        date_format: "iso" or "ddmmyyyy"

    Returns:
        Dictionary with decoded fields in encounter order
    """
    parser = parser or get_default_parser()
    return format_gs1_result_dict(
        parser.parse(barcode_data),
        include_raw_values=include_raw_values,
        date_format=date_format
    )
