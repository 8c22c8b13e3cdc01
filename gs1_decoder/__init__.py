"""
GS1 Application Identifier Decoder

Decodes GS1 element strings from GS1-128 (parenthesis notation) and
GS1 DataMatrix (concatenated, FNC1/GS-delimited notation) into typed values:
trade item identifiers, dates, counts and variable measures.

Based on GS1 General Specifications.
"""

from .core.errors import AINotFoundError, ErrorCode, GS1Error, GS1ParseError, ValueDecodeError
from .core.ai_spec import AISpec, CharacterSet, Decoder, Fixed, Variable
from .core.ai_registry import AIRegistry, RegistryBuilder, default_registry
from .core.tokenizer import GS, Token, Tokenizer
from .core.parser import (
    parse_gs1,
    ComplianceMode,
    ElementData,
    GS1Parser,
    ParseOptions,
    ParseResult,
    ParserBuilder,
)
from .validators.validators import (
    calculate_check_digit_mod10,
    validate_check_digit,
    decode_date,
    decode_variable_measure,
)
from .formatters.json_formatter import (
    parse_gs1_to_json,
    parse_gs1_to_dict,
    format_gs1_result_json,
)

__version__ = "1.0.0"
__all__ = [
    "AINotFoundError",
    "ErrorCode",
    "GS1Error",
    "GS1ParseError",
    "ValueDecodeError",
    "AISpec",
    "CharacterSet",
    "Decoder",
    "Fixed",
    "Variable",
    "AIRegistry",
    "RegistryBuilder",
    "default_registry",
    "GS",
    "Token",
    "Tokenizer",
    "parse_gs1",
    "ComplianceMode",
    "ElementData",
    "GS1Parser",
    "ParseOptions",
    "ParseResult",
    "ParserBuilder",
    "calculate_check_digit_mod10",
    "validate_check_digit",
    "decode_date",
    "decode_variable_measure",
    "parse_gs1_to_json",
    "parse_gs1_to_dict",
    "format_gs1_result_json",
]
