from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import UnsupportedCharacterError


@dataclass(frozen=True)
class SymbolTable:
    """Immutable character -> pattern map for one symbology."""

    name: str
    patterns: Mapping[str, str]
    pattern_alphabet: str
    _lengths: frozenset[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        patterns = MappingProxyType(dict(self.patterns))
        for ch, pattern in patterns.items():
            if len(ch) != 1:
                raise ValueError(f"{self.name}: table keys must be single characters, got {ch!r}")
            bad = set(pattern) - set(self.pattern_alphabet)
            if not pattern or bad:
                raise ValueError(f"{self.name}: pattern {pattern!r} for {ch!r} is outside {self.pattern_alphabet!r}")
        object.__setattr__(self, "patterns", patterns)
        object.__setattr__(self, "_lengths", frozenset(len(p) for p in patterns.values()))

    @property
    def alphabet(self) -> str:
        return "".join(self.patterns.keys())

    @property
    def pattern_lengths(self) -> frozenset[int]:
        return self._lengths

    def __contains__(self, ch: object) -> bool:
        return ch in self.patterns

    def lookup(self, ch: str) -> str:
        try:
            return self.patterns[ch]
        except KeyError:
            raise UnsupportedCharacterError(ch, self.name) from None

    def first_unsupported(self, text: str) -> str | None:
        for ch in text:
            if ch not in self.patterns:
                return ch
        return None


# 1 = thick, 0 = thin; elements alternate bar, gap, bar, ... and end on a bar.
CODABAR = SymbolTable(
    name="codabar",
    pattern_alphabet="01",
    patterns={
        "0": "0000011",
        "1": "0000110",
        "2": "0001001",
        "3": "1100000",
        "4": "0010010",
        "5": "1000010",
        "6": "0100001",
        "7": "0100100",
        "8": "0110000",
        "9": "1001000",
        "-": "0001100",
        "$": "0011000",
        ":": "1000101",
        "/": "1010001",
        ".": "1010100",
        "+": "0010101",
        "A": "0011010",
        "B": "0101001",
        "C": "0001011",
        "D": "0001110",
    },
)

CODABAR_MARKERS = "ABCD"
CODABAR_DATA = "0123456789-$:/.+"


# Japan Post control codes CC1..CC8.
CC1 = "₁"
CC2 = "₂"
CC3 = "₃"
CC4 = "₄"
CC5 = "₅"
CC6 = "₆"
CC7 = "₇"
CC8 = "₈"

JP_START = "["
JP_STOP = "]"
JP_FILLER = "$"

# 0 = track only, 1 = ascender, 2 = descender, 3 = full height.
JAPAN_POST = SymbolTable(
    name="japan_post",
    pattern_alphabet="0123",
    patterns={
        "[": "32",
        "]": "23",
        "(": "32",
        ")": "23",
        "0": "300",
        "1": "330",
        "2": "321",
        "3": "231",
        "4": "312",
        "5": "303",
        "6": "213",
        "7": "132",
        "8": "123",
        "9": "033",
        "-": "030",
        CC1: "210",
        CC2: "201",
        CC3: "120",
        CC4: "021",
        CC5: "102",
        CC6: "012",
        CC7: "003",
        CC8: "333",
    },
)


@dataclass(frozen=True)
class CheckSymbol:
    char: str
    weight: int
    pattern: str


CHECK_ALPHABET = "0123456789-" + CC1 + CC2 + CC3 + CC4 + CC5 + CC6 + CC7 + CC8

CHECK_SYMBOLS: Mapping[str, CheckSymbol] = MappingProxyType(
    {ch: CheckSymbol(char=ch, weight=i, pattern=JAPAN_POST.lookup(ch)) for i, ch in enumerate(CHECK_ALPHABET)}
)
CHECK_MODULUS = len(CHECK_ALPHABET)


def check_weight(ch: str) -> int:
    try:
        return CHECK_SYMBOLS[ch].weight
    except KeyError:
        raise UnsupportedCharacterError(ch, "japan_post check alphabet") from None


def check_symbol_for(weight: int) -> str:
    if not 0 <= weight < CHECK_MODULUS:
        raise ValueError(f"check weight must be 0-{CHECK_MODULUS - 1}, got {weight}")
    return CHECK_ALPHABET[weight]
