"""
Error types for the GS1 decoder.

Two tiers of failure share one error code space:
- Structural errors raised while tokenizing (syntax, AI resolution, separators)
- Value errors raised by an AI's value contract (length, charset, check digit, dates)

Every failure that leaves ``GS1Parser.parse`` is a ``GS1ParseError`` carrying
the code, a message and the offending offset in the source string.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes."""
    EMPTY_INPUT = "EMPTY_INPUT"
    INPUT_TOO_LONG = "INPUT_TOO_LONG"
    UNTERMINATED_AI = "UNTERMINATED_AI"
    UNKNOWN_AI = "UNKNOWN_AI"
    EMPTY_VALUE = "EMPTY_VALUE"
    AI_RESOLUTION_FAILURE = "AI_RESOLUTION_FAILURE"
    TRUNCATED_VALUE = "TRUNCATED_VALUE"
    MISSING_SEPARATOR = "MISSING_SEPARATOR"
    DUPLICATE_AI = "DUPLICATE_AI"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    LENGTH_EXCEEDED = "LENGTH_EXCEEDED"
    CHARACTER_SET_VIOLATION = "CHARACTER_SET_VIOLATION"
    CHECK_DIGIT_INVALID = "CHECK_DIGIT_INVALID"
    INVALID_DATE = "INVALID_DATE"
    NOT_NUMERIC = "NOT_NUMERIC"
    AI_NOT_FOUND = "AI_NOT_FOUND"


class GS1Error(ValueError):
    """Base class for all decoder errors."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ValueDecodeError(GS1Error):
    """Raised by value validation and decoding; has no source position."""


class AINotFoundError(GS1Error, KeyError):
    """Raised by ParseResult.get_or_fail; also a KeyError for mapping-style callers."""

    def __init__(self, ai: str):
        super().__init__(ErrorCode.AI_NOT_FOUND, f"AI {ai} not found")
        self.ai = ai

    def __str__(self) -> str:
        return self.message


class GS1ParseError(GS1Error):
    """
    A parse failure.

    Attributes:
        code: ErrorCode of the failure
        message: Human-readable description
        at_index: Character offset in the source string
        ai: Application Identifier involved, if any
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        at_index: int = 0,
        ai: Optional[str] = None
    ):
        super().__init__(code, message)
        self.at_index = at_index
        self.ai = ai

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message} (at index {self.at_index})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'code': self.code.value,
            'message': self.message,
            'at_index': self.at_index,
            'ai': self.ai,
        }
