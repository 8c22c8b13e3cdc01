"""
AI Registry for GS1 Decoder

Holds the GS1 Application Identifier table and the immutable registry
built from it. The default table is written in GS1 Barcode Syntax
Dictionary style notation and expanded into AISpec values.

Reference: https://ref.gs1.org/tools/gs1-barcode-syntax-resource/syntax-dictionary/
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .ai_spec import AISpec, CharacterSet, Decoder, Fixed, Length, Variable
from ..validators.validators import MAX_DECIMAL_PLACES


# Default GS1 AI table
# Specification: <type><length>[,linter...]
#   N = numeric, X = GS1 alphanumeric subset, Y = any character
#   N14 = fixed 14, X..20 = variable up to 20
#   csum = trailing GS1 check digit
# Decoder: - (identity), int, date (YYMMDD), measure (implied decimals)
# A trailing 'n' on the AI expands to n = 0..5 decimal places.
RAW_AI_TABLE = """
# AI    Specification     Decoder    Title
00      N18,csum          -          # SSCC
01      N14,csum          -          # GTIN
02      N14,csum          -          # CONTENT
03      N14,csum          -          # MTO GTIN
10      X..20             -          # BATCH/LOT
11      N6                date       # PROD DATE
12      N6                date       # DUE DATE
13      N6                date       # PACK DATE
15      N6                date       # BEST BEFORE or BEST BY
16      N6                date       # SELL BY
17      N6                date       # USE BY or EXPIRY
20      N2                -          # VARIANT
21      X..20             -          # SERIAL
22      X..20             -          # CPV
235     X..28             -          # TPX
240     X..30             -          # ADDITIONAL ID
241     X..30             -          # CUST. PART No.
242     N..6              -          # MTO VARIANT
243     X..20             -          # PCN
250     X..30             -          # SECONDARY SERIAL
251     X..30             -          # REF. TO SOURCE
254     X..20             -          # GLN EXTENSION COMPONENT
30      N..8              int        # VAR. COUNT
310n    N6                measure    # NET WEIGHT (kg)
311n    N6                measure    # LENGTH (m)
312n    N6                measure    # WIDTH (m)
313n    N6                measure    # HEIGHT (m)
314n    N6                measure    # AREA (m2)
315n    N6                measure    # NET VOLUME (l)
316n    N6                measure    # NET VOLUME (m3)
320n    N6                measure    # NET WEIGHT (lb)
321n    N6                measure    # LENGTH (in)
322n    N6                measure    # LENGTH (ft)
323n    N6                measure    # LENGTH (yd)
324n    N6                measure    # WIDTH (in)
325n    N6                measure    # WIDTH (ft)
326n    N6                measure    # WIDTH (yd)
327n    N6                measure    # HEIGHT (in)
328n    N6                measure    # HEIGHT (ft)
329n    N6                measure    # HEIGHT (yd)
330n    N6                measure    # GROSS WEIGHT (kg)
331n    N6                measure    # LENGTH (m), log
332n    N6                measure    # WIDTH (m), log
333n    N6                measure    # HEIGHT (m), log
334n    N6                measure    # AREA (m2), log
335n    N6                measure    # VOLUME (l), log
336n    N6                measure    # VOLUME (m3), log
337n    N6                measure    # KG PER m2
340n    N6                measure    # GROSS WEIGHT (lb)
341n    N6                measure    # LENGTH (in), log
342n    N6                measure    # LENGTH (ft), log
343n    N6                measure    # LENGTH (yd), log
344n    N6                measure    # WIDTH (in), log
345n    N6                measure    # WIDTH (ft), log
346n    N6                measure    # WIDTH (yd), log
347n    N6                measure    # HEIGHT (in), log
348n    N6                measure    # HEIGHT (ft), log
349n    N6                measure    # HEIGHT (yd), log
350n    N6                measure    # AREA (in2)
351n    N6                measure    # AREA (ft2)
352n    N6                measure    # AREA (yd2)
353n    N6                measure    # AREA (in2), log
354n    N6                measure    # AREA (ft2), log
355n    N6                measure    # AREA (yd2), log
356n    N6                measure    # NET WEIGHT (t oz)
357n    N6                measure    # NET VOLUME (oz)
360n    N6                measure    # NET VOLUME (q)
361n    N6                measure    # NET VOLUME (gal)
362n    N6                measure    # VOLUME (q), log
363n    N6                measure    # VOLUME (gal), log
364n    N6                measure    # VOLUME (in3)
365n    N6                measure    # VOLUME (ft3)
366n    N6                measure    # VOLUME (yd3)
367n    N6                measure    # VOLUME (in3), log
368n    N6                measure    # VOLUME (ft3), log
369n    N6                measure    # VOLUME (yd3), log
37      N..8              int        # COUNT
400     X..30             -          # ORDER NUMBER
401     X..30             -          # GINC
403     X..30             -          # ROUTE
410     N13,csum          -          # SHIP TO LOC
411     N13,csum          -          # BILL TO
412     N13,csum          -          # PURCHASE FROM
413     N13,csum          -          # SHIP FOR LOC
414     N13,csum          -          # LOC No.
415     N13,csum          -          # PAY TO
416     N13,csum          -          # PROD/SERV LOC
417     N13,csum          -          # PARTY
420     X..20             -          # SHIP TO POST
421     X..12             -          # SHIP TO POST
422     N3                -          # ORIGIN
7006    N6                date       # FIRST FREEZE DATE
710     X..20             -          # NHRN PZN
711     X..20             -          # NHRN CIP
712     X..20             -          # NHRN CN
713     X..20             -          # NHRN DRN
714     X..20             -          # NHRN AIM
715     X..20             -          # NHRN NDC
716     X..20             -          # NHRN AIC
"""

_DECODER_NAMES = {
    '-': Decoder.IDENTITY,
    'int': Decoder.INTEGER,
    'date': Decoder.DATE,
    'measure': Decoder.VARIABLE_MEASURE,
}


def _parse_syntax_spec(spec: str) -> Tuple[CharacterSet, Length, bool]:
    """
    Parse a syntax specification.

    Examples:
        "N14,csum" -> (NUMERIC, Fixed(14), True)
        "X..20" -> (ALPHANUMERIC, Variable(20), False)
        "Y.." -> (ANY, Variable(None), False)

    Returns:
        (charset, length, check_digit)
    """
    parts = spec.split(',')
    type_len = parts[0]
    linters = parts[1:]

    charset = CharacterSet(type_len[0])
    len_spec = type_len[1:]

    length: Length
    if len_spec.startswith('..'):
        max_len = len_spec[2:]
        length = Variable(int(max_len) if max_len else None)
    else:
        length = Fixed(int(len_spec))

    return charset, length, 'csum' in linters


def _parse_raw_table(raw_table: str = RAW_AI_TABLE) -> Dict[str, AISpec]:
    """Parse the raw AI table text into AISpec objects."""
    entries: Dict[str, AISpec] = {}

    for line in raw_table.strip().split('\n'):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        main_part, _, title = line.partition('#')
        tokens = main_part.split()
        if len(tokens) != 3:
            raise ValueError(f"Malformed AI table line: {line!r}")

        ai_spec, syntax, decoder_name = tokens
        charset, length, check_digit = _parse_syntax_spec(syntax)
        decoder = _DECODER_NAMES[decoder_name]

        # 310n -> 3100-3105
        if ai_spec.endswith('n'):
            codes = [f"{ai_spec[:-1]}{n}" for n in range(MAX_DECIMAL_PLACES + 1)]
        else:
            codes = [ai_spec]

        for code in codes:
            entries[code] = AISpec(
                ai=code,
                length=length,
                charset=charset,
                check_digit=check_digit,
                decoder=decoder,
                title=title.strip(),
            )

    return entries


class AIRegistry:
    """
    Immutable mapping from AI code to AISpec.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries: Optional[Mapping[str, AISpec]] = None):
        entries = dict(entries or {})
        for code, spec in entries.items():
            if code != spec.ai:
                raise ValueError(f"Registry key {code!r} does not match AI {spec.ai!r}")
        self._entries: Mapping[str, AISpec] = MappingProxyType(entries)

    def find(self, ai: str) -> Optional[AISpec]:
        """Get AI spec by exact code."""
        return self._entries.get(ai)

    def __contains__(self, ai: object) -> bool:
        return ai in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def codes(self) -> List[str]:
        return list(self._entries)

    def all_entries(self) -> Dict[str, AISpec]:
        """Return a copy of all AI entries."""
        return dict(self._entries)

    def to_json(self) -> str:
        """Export registry to JSON."""
        data = {}
        for ai, entry in self._entries.items():
            data[ai] = {
                'ai': entry.ai,
                'title': entry.title,
                'fixed_length': entry.fixed_length,
                'max_length': None if entry.is_fixed else entry.max_length,
                'charset': entry.charset.value,
                'check_digit': entry.check_digit,
                'decoder': entry.decoder.value,
            }
        return json.dumps(data, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'AIRegistry':
        """Load registry from JSON."""
        data = json.loads(json_str)
        entries = {}
        for ai, info in data.items():
            fixed_length = info.get('fixed_length')
            length: Length = (
                Fixed(fixed_length) if fixed_length is not None
                else Variable(info.get('max_length'))
            )
            entries[ai] = AISpec(
                ai=info['ai'],
                length=length,
                charset=CharacterSet(info.get('charset', CharacterSet.ALPHANUMERIC.value)),
                check_digit=info.get('check_digit', False),
                decoder=Decoder(info.get('decoder', Decoder.IDENTITY.value)),
                title=info.get('title', ''),
            )
        return cls(entries)

    def __repr__(self) -> str:
        return f"AIRegistry({len(self._entries)} AIs)"


class RegistryBuilder:
    """
    Builds an AIRegistry from the default table plus overrides.

    Overrides win over default entries with the same code.
    """

    def __init__(self):
        self._use_defaults = True
        self._overrides: Dict[str, AISpec] = {}

    def register(self, spec: AISpec) -> 'RegistryBuilder':
        """Add or replace an AI."""
        self._overrides[spec.ai] = spec
        return self

    def register_all(self, specs: Iterable[AISpec]) -> 'RegistryBuilder':
        for spec in specs:
            self.register(spec)
        return self

    def without_defaults(self) -> 'RegistryBuilder':
        """Start from an empty table instead of the default AIs."""
        self._use_defaults = False
        return self

    def with_defaults(self) -> 'RegistryBuilder':
        self._use_defaults = True
        return self

    def build(self) -> AIRegistry:
        entries: Dict[str, AISpec] = _parse_raw_table() if self._use_defaults else {}
        entries.update(self._overrides)
        return AIRegistry(entries)


def default_registry() -> AIRegistry:
    """
    Build the default registry.

    Returns a new immutable registry on every call; callers that parse
    often should build it once and keep it (GS1Parser does).
    """
    return AIRegistry(_parse_raw_table())
