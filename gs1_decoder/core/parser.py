"""
GS1 Element String Parser

Parses GS1 element strings from GS1-128 (parenthesis notation) and
GS1 DataMatrix (concatenated, GS-delimited notation) into typed values.

Features:
- Single left-to-right pass with longest-match AI resolution
- Per-AI validation: length, character set, check digit, dates
- Strict and lenient compliance modes fixed per parser
- Fail-fast: one result set or one error, never a partial result

Parsers are immutable after construction and hold no per-call state,
so one instance can be shared between threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .ai_registry import AIRegistry, RegistryBuilder, default_registry
from .ai_spec import AISpec, Value
from .errors import AINotFoundError, ErrorCode, GS1ParseError, ValueDecodeError
from .tokenizer import DEFAULT_MAX_INPUT_LENGTH, Tokenizer


logger = logging.getLogger(__name__)


class ComplianceMode(str, Enum):
    """
    STRICT enforces maximum lengths, check digits and the leading
    FNC1/GS of concatenated input. LENIENT tolerates them.
    """
    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class ParseOptions:
    """
    Configuration options for parsing.

    Attributes:
        mode: Compliance mode applied to every field
        max_input_length: Longer input fails before tokenizing
        detect_missing_separator: In lenient mode, flag variable-length values
            that appear to contain another element string (advisory heuristic)
    """
    mode: ComplianceMode = ComplianceMode.LENIENT
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    detect_missing_separator: bool = True

    @property
    def strict(self) -> bool:
        return self.mode is ComplianceMode.STRICT


@dataclass(frozen=True)
class ElementData:
    """
    A decoded GS1 element.

    Attributes:
        ai: Application Identifier code
        name: Human-readable name/title
        raw_value: Raw extracted value
        value: Decoded value
        start_index: Position of the value in the source string
    """
    ai: str
    name: str
    raw_value: str
    value: Value
    start_index: int = 0


@dataclass(frozen=True)
class ParseResult:
    """
    Complete result of parsing a GS1 element string.

    Lookup is by AI code; iteration and serialization follow the order
    in which elements appeared in the input.
    """
    raw: str
    elements: Tuple[ElementData, ...] = ()
    _index: Dict[str, ElementData] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, '_index', {e.ai: e for e in self.elements})

    def get(self, ai: str) -> Optional[Value]:
        """Decoded value for ai, or None if absent."""
        element = self._index.get(ai)
        return element.value if element is not None else None

    def contains(self, ai: str) -> bool:
        return ai in self._index

    def get_or_fail(self, ai: str) -> Value:
        """Decoded value for ai; raises AINotFoundError (a KeyError) if absent."""
        element = self._index.get(ai)
        if element is None:
            raise AINotFoundError(ai)
        return element.value

    def element(self, ai: str) -> Optional[ElementData]:
        return self._index.get(ai)

    def codes(self) -> List[str]:
        return [e.ai for e in self.elements]

    def __contains__(self, ai: object) -> bool:
        return ai in self._index

    def __iter__(self) -> Iterator[ElementData]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'raw': self.raw,
            'elements': [
                {
                    'ai': e.ai,
                    'name': e.name,
                    'raw_value': e.raw_value,
                    'value': e.value.isoformat() if isinstance(e.value, date) else e.value,
                    'start_index': e.start_index,
                }
                for e in self.elements
            ],
        }


class GS1Parser:
    """
    Main GS1 parser class.

    Usage:
        parser = GS1Parser.default()
        result = parser.parse("(01)09501101530003(17)251231(10)ABC123")
        result.get("17")  # datetime.date(2025, 12, 31)
    """

    def __init__(
        self,
        options: Optional[ParseOptions] = None,
        registry: Optional[AIRegistry] = None
    ):
        self.options = options or ParseOptions()
        self.registry = registry if registry is not None else default_registry()
        self.tokenizer = Tokenizer(
            self.registry,
            strict=self.options.strict,
            max_input_length=self.options.max_input_length,
            detect_missing_separator=self.options.detect_missing_separator,
        )

    @classmethod
    def default(cls) -> 'GS1Parser':
        """Lenient parser over the default AI table."""
        return cls(ParseOptions(mode=ComplianceMode.LENIENT))

    @classmethod
    def strict(cls) -> 'GS1Parser':
        """Strict parser over the default AI table."""
        return cls(ParseOptions(mode=ComplianceMode.STRICT))

    @classmethod
    def builder(cls) -> 'ParserBuilder':
        return ParserBuilder()

    @property
    def mode(self) -> ComplianceMode:
        return self.options.mode

    def parse(self, text: str) -> ParseResult:
        """
        Parse a GS1 element string.

        Args:
            text: Raw barcode data

        Returns:
            ParseResult with all decoded elements

        Raises:
            GS1ParseError: on the first structural or value error
        """
        tokens = self.tokenizer.tokenize(text)
        strict = self.options.strict

        elements: List[ElementData] = []
        seen = set()

        for token in tokens:
            if token.ai in seen:
                raise GS1ParseError(
                    ErrorCode.DUPLICATE_AI,
                    f"Duplicate AI {token.ai} found in input",
                    at_index=token.position,
                    ai=token.ai
                )

            spec = self.registry.find(token.ai)
            if spec is None:
                raise GS1ParseError(
                    ErrorCode.UNKNOWN_AI,
                    f"Unknown AI {token.ai!r}",
                    at_index=token.position,
                    ai=token.ai
                )

            try:
                value = spec.decode(token.raw, strict)
            except ValueDecodeError as e:
                logger.debug("AI(%s) rejected at %d: %s", token.ai, token.position, e.message)
                raise GS1ParseError(
                    e.code,
                    f"Invalid value for AI {token.ai}: {e.message}",
                    at_index=token.position,
                    ai=token.ai
                ) from e

            seen.add(token.ai)
            elements.append(ElementData(
                ai=token.ai,
                name=spec.title,
                raw_value=token.raw,
                value=value,
                start_index=token.position,
            ))

        logger.debug("Parsed %d elements (%s mode)", len(elements), self.mode.value)
        return ParseResult(raw=text, elements=tuple(elements))


class ParserBuilder:
    """
    Builder for customized GS1Parser instances.

    Example:
        parser = (GS1Parser.builder()
                  .mode(ComplianceMode.STRICT)
                  .register(AISpec("99", Variable(10), CharacterSet.ANY))
                  .build())
    """

    def __init__(self):
        self._mode = ComplianceMode.LENIENT
        self._max_input_length = DEFAULT_MAX_INPUT_LENGTH
        self._detect_missing_separator = True
        self._registry = RegistryBuilder()

    def options(self, options: ParseOptions) -> 'ParserBuilder':
        """Take mode and limits from an existing ParseOptions."""
        self._mode = options.mode
        self._max_input_length = options.max_input_length
        self._detect_missing_separator = options.detect_missing_separator
        return self

    def mode(self, mode: ComplianceMode) -> 'ParserBuilder':
        self._mode = mode
        return self

    def max_input_length(self, length: int) -> 'ParserBuilder':
        self._max_input_length = length
        return self

    def detect_missing_separator(self, enabled: bool) -> 'ParserBuilder':
        self._detect_missing_separator = enabled
        return self

    def register(self, spec: AISpec) -> 'ParserBuilder':
        """Add an AI, replacing any default or earlier entry with the same code."""
        self._registry.register(spec)
        return self

    def without_defaults(self) -> 'ParserBuilder':
        """Start from an empty AI table."""
        self._registry.without_defaults()
        return self

    def build(self) -> GS1Parser:
        options = ParseOptions(
            mode=self._mode,
            max_input_length=self._max_input_length,
            detect_missing_separator=self._detect_missing_separator,
        )
        return GS1Parser(options, self._registry.build())


def parse_gs1(
    input_text: str,
    *,
    options: Optional[ParseOptions] = None,
    registry: Optional[AIRegistry] = None
) -> ParseResult:
    """
    Parse a GS1 element string from a barcode.

    Convenience entry point; builds a parser per call. Keep a GS1Parser
    around when parsing many payloads.

    Args:
        input_text: Raw barcode data string
        options: Optional parsing configuration
        registry: Optional AI registry (default table if omitted)

    Returns:
        ParseResult containing all decoded elements

    Examples:
        >>> result = parse_gs1("(01)09501101530003(17)251231")
        >>> result.get("01")
        '09501101530003'
    """
    return GS1Parser(options, registry).parse(input_text)
