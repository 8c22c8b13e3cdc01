"""
Core parsing modules for GS1 decoder.
"""

from .errors import AINotFoundError, ErrorCode, GS1Error, GS1ParseError, ValueDecodeError
from .ai_spec import AISpec, CharacterSet, Decoder, Fixed, Variable, decode_value
from .ai_registry import AIRegistry, RegistryBuilder, default_registry
from .tokenizer import GS, InputFormat, Token, Tokenizer, detect_format
from .parser import (
    parse_gs1,
    ComplianceMode,
    ElementData,
    GS1Parser,
    ParseOptions,
    ParseResult,
    ParserBuilder,
)

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
    "decode_value",
    "AIRegistry",
    "RegistryBuilder",
    "default_registry",
    "GS",
    "InputFormat",
    "Token",
    "Tokenizer",
    "detect_format",
    "parse_gs1",
    "ComplianceMode",
    "ElementData",
    "GS1Parser",
    "ParseOptions",
    "ParseResult",
    "ParserBuilder",
]
