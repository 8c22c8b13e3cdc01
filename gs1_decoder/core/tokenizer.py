"""
GS1 Element String Tokenizer

Splits a payload into ordered (AI, raw value, position) tokens.

Two input formats, detected from the first character:
- Parenthesis form, as printed under GS1-128 symbols: (01)09501101530003(10)ABC
- Concatenated form, as transmitted by GS1 DataMatrix scanners:
  <GS>0109501101530003<GS>10ABC

Key GS1 Rules:
- AI codes are 2-4 digits and carry no length marker; the longest
  registered code wins (4 -> 3 -> 2 digits)
- Fixed-length AIs do not require separators
- Variable-length AIs SHALL be delimited by FNC1/GS unless they are the last element
- FNC1 is transmitted as <GS> (ASCII 29, 0x1D) by scanners
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .ai_registry import AIRegistry
from .errors import ErrorCode, GS1ParseError


logger = logging.getLogger(__name__)

GS = '\x1d'

DEFAULT_MAX_INPUT_LENGTH = 10_000

AI_LENGTHS = (4, 3, 2)


class InputFormat(str, Enum):
    PARENTHESIS = "parenthesis"
    CONCATENATED = "concatenated"


@dataclass(frozen=True)
class Token:
    """One AI and its raw data field; position is the offset of the data."""
    ai: str
    raw: str
    position: int


def detect_format(text: str) -> InputFormat:
    """Parenthesis form starts with '(', anything else is concatenated."""
    if text.startswith('('):
        return InputFormat.PARENTHESIS
    return InputFormat.CONCATENATED


class Tokenizer:
    """
    Format-aware, compliance-mode-aware tokenizer.

    Holds only configuration, so one instance can serve many threads.
    """

    def __init__(
        self,
        registry: AIRegistry,
        strict: bool = False,
        max_input_length: int = DEFAULT_MAX_INPUT_LENGTH,
        detect_missing_separator: bool = True,
    ):
        self.registry = registry
        self.strict = strict
        self.max_input_length = max_input_length
        self.detect_missing_separator = detect_missing_separator

    def tokenize(self, text: str) -> List[Token]:
        """
        Tokenize a GS1 payload.

        Args:
            text: Raw barcode data in parenthesis or concatenated form

        Returns:
            Tokens in encounter order

        Raises:
            GS1ParseError: on the first structural problem found
        """
        if len(text) > self.max_input_length:
            raise GS1ParseError(
                ErrorCode.INPUT_TOO_LONG,
                f"Input length {len(text)} exceeds maximum {self.max_input_length}",
                at_index=self.max_input_length
            )

        if not text:
            raise GS1ParseError(ErrorCode.EMPTY_INPUT, "Input is empty")

        input_format = detect_format(text)
        if input_format is InputFormat.PARENTHESIS:
            tokens = self._tokenize_parenthesis(text)
        else:
            tokens = self._tokenize_concatenated(text)

        logger.debug("Tokenized %s input into %d tokens", input_format.value, len(tokens))
        return tokens

    def _tokenize_parenthesis(self, text: str) -> List[Token]:
        """(AI)value(AI)value... - a value ends at the next '(' or end of input."""
        tokens = []
        pos = 0
        n = len(text)

        while pos < n:
            close = text.find(')', pos + 1)
            if close == -1:
                raise GS1ParseError(
                    ErrorCode.UNTERMINATED_AI,
                    f"Unterminated AI at position {pos}: missing ')'",
                    at_index=pos
                )

            ai = text[pos + 1:close]
            if ai not in self.registry:
                raise GS1ParseError(
                    ErrorCode.UNKNOWN_AI,
                    f"Unknown AI {ai!r}",
                    at_index=pos + 1,
                    ai=ai
                )

            start = close + 1
            end = text.find('(', start)
            if end == -1:
                end = n

            if start == end:
                raise GS1ParseError(
                    ErrorCode.EMPTY_VALUE,
                    f"Empty value for AI {ai}",
                    at_index=start,
                    ai=ai
                )

            tokens.append(Token(ai, text[start:end], start))
            pos = end

        return tokens

    def _tokenize_concatenated(self, text: str) -> List[Token]:
        """[GS]AI value[GS]AI value... - AI length and field ends are inferred."""
        tokens = []
        n = len(text)

        if text[0] == GS:
            pos = 1
        elif self.strict:
            raise GS1ParseError(
                ErrorCode.MISSING_SEPARATOR,
                "Concatenated input must start with FNC1/GS in strict mode",
                at_index=0
            )
        else:
            pos = 0

        if pos >= n:
            raise GS1ParseError(
                ErrorCode.EMPTY_INPUT,
                "Input contains no element strings",
                at_index=pos
            )

        while pos < n:
            ai = self._resolve_ai(text, pos)
            spec = self.registry.find(ai)
            start = pos + len(ai)

            fixed_length = spec.fixed_length
            if fixed_length is not None:
                # Fixed length - take exact number of characters
                end = start + fixed_length
                value = text[start:end]
                gs_at = value.find(GS)
                if end > n or gs_at != -1:
                    got = gs_at if gs_at != -1 else len(value)
                    raise GS1ParseError(
                        ErrorCode.TRUNCATED_VALUE,
                        f"Truncated value for AI {ai}: expected {fixed_length} characters, got {got}",
                        at_index=start,
                        ai=ai
                    )
                pos = end
                # Superfluous GS after a fixed-length field is tolerated
                if pos < n and text[pos] == GS:
                    pos += 1
            else:
                # Variable length - take until GS or end of input
                end = text.find(GS, start)
                terminated = end != -1
                if not terminated:
                    end = n

                if start == end:
                    raise GS1ParseError(
                        ErrorCode.EMPTY_VALUE,
                        f"Empty value for AI {ai}",
                        at_index=start,
                        ai=ai
                    )

                value = text[start:end]
                # Strict mode accepts an unterminated last field as is
                if not terminated and not self.strict and self.detect_missing_separator:
                    self._check_missing_separator(ai, value, start)

                pos = end + 1 if terminated else end

            tokens.append(Token(ai, value, start))

        return tokens

    def _match_ai(self, text: str, pos: int) -> Optional[str]:
        """Longest registered AI code starting at pos, if any."""
        for length in AI_LENGTHS:
            if pos + length <= len(text):
                candidate = text[pos:pos + length]
                if candidate in self.registry:
                    return candidate
        return None

    def _resolve_ai(self, text: str, pos: int) -> str:
        ai = self._match_ai(text, pos)
        if ai is None:
            raise GS1ParseError(
                ErrorCode.AI_RESOLUTION_FAILURE,
                f"Unable to resolve AI at position {pos}: {text[pos:pos + 4]!r}",
                at_index=pos
            )
        return ai

    def find_embedded_field(self, value: str) -> Optional[Tuple[int, str]]:
        """
        Look for a fixed-length element string hidden inside a variable value.

        A hit is an offset where a registered fixed-length AI resolves, its
        full data follows in the right character set, and that data ends
        the value or is followed by another resolvable AI.

        This is a heuristic. Legitimate values can contain such a pattern
        (false positive) and many malformed payloads do not (false negative).

        Returns:
            (offset, embedded_ai) of the first hit, or None
        """
        for offset in range(1, len(value)):
            ai = self._match_ai(value, offset)
            if ai is None:
                continue
            spec = self.registry.find(ai)
            fixed_length = spec.fixed_length
            if fixed_length is None:
                continue

            data_start = offset + len(ai)
            data_end = data_start + fixed_length
            if data_end > len(value):
                continue
            if not spec.matches_charset(value[data_start:data_end]):
                continue

            if data_end == len(value) or self._match_ai(value, data_end) is not None:
                return offset, ai

        return None

    def _check_missing_separator(self, ai: str, value: str, start: int) -> None:
        hit = self.find_embedded_field(value)
        if hit is None:
            return

        offset, embedded_ai = hit
        logger.debug(
            "AI(%s) value %r looks like it swallowed AI(%s) at offset %d",
            ai, value, embedded_ai, start + offset
        )
        raise GS1ParseError(
            ErrorCode.MISSING_SEPARATOR,
            f"Likely missing separator: AI({ai}) variable-length value contains "
            f"AI({embedded_ai}) at position {start + offset}",
            at_index=start + offset,
            ai=ai
        )
