from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Explicit table; a generic NFKC fold would also rewrite characters the
# postal rules expect to collapse into hyphens.
FULLWIDTH_TO_HALFWIDTH: Mapping[str, str] = MappingProxyType(
    {
        **{chr(0xFF10 + i): chr(ord("0") + i) for i in range(10)},
        **{chr(0xFF21 + i): chr(ord("A") + i) for i in range(26)},
        **{chr(0xFF41 + i): chr(ord("a") + i) for i in range(26)},
        "　": " ",
        "‐": "-",
    }
)

REMOVED_SEPARATORS = frozenset("&＆/／･・.．")

_FOLD = str.maketrans(dict(FULLWIDTH_TO_HALFWIDTH))
_DROP = str.maketrans({ch: None for ch in REMOVED_SEPARATORS})
_NOT_REQUIRED = re.compile(r"[^0-9A-Z\-]+|[A-Z]{2,}")
_HYPHEN_RUN = re.compile(r"-{2,}")
_TRAILING_F = re.compile(r"([0-9])F$")
_INNER_F = re.compile(r"([0-9])F")


def normalize_address(raw: str | None) -> str:
    """Derive the address-display number from the street part of an address.

    Keeps arithmetic digits, hyphens and isolated letters. Kanji, kana,
    blanks and runs of two or more letters become a single separating
    hyphen. Kanji numerals are not interpreted.
    """
    if not raw:
        return ""
    s = raw.translate(_FOLD)
    s = s.upper()
    s = s.translate(_DROP)
    s = _NOT_REQUIRED.sub("-", s)
    return trim_hyphens(s)


def trim_hyphens(target: str) -> str:
    target = _HYPHEN_RUN.sub("-", target)

    # A trailing "F" after a number is a floor suffix; elsewhere it separates.
    target = _TRAILING_F.sub(r"\1", target)
    target = _INNER_F.sub(r"\1-", target)

    drop: set[int] = set()
    last = len(target) - 1
    for i, ch in enumerate(target):
        if ch not in LETTERS:
            continue
        if i > 0 and target[i - 1] == "-":
            drop.add(i - 1)
        if i < last and target[i + 1] == "-":
            drop.add(i + 1)
    if drop:
        target = "".join(ch for i, ch in enumerate(target) if i not in drop)

    return target.strip("-")
