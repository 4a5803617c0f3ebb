from __future__ import annotations


class BarcodeError(Exception):
    """Base class for every error raised while encoding or rendering a symbol."""


class InvalidSymbolInputError(BarcodeError, ValueError):
    """Input text is empty or holds characters the symbology cannot encode."""


class UnsupportedCharacterError(BarcodeError, LookupError):
    """A symbol table has no pattern for a character that passed validation."""

    def __init__(self, char: str, symbology: str) -> None:
        super().__init__(f"{symbology}: no pattern for character {char!r}")
        self.char = char
        self.symbology = symbology


class InvalidHeightLevelError(BarcodeError, ValueError):
    """A four-state pattern produced a level outside 0-3."""

    def __init__(self, level: int | str) -> None:
        super().__init__(f"four-state height level must be 0-3, got {level!r}")
        self.level = level
