from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence

from barstroke_core.errors import InvalidSymbolInputError
from barstroke_core.geometry import LEFT_TO_RIGHT, RenderCursor, ThickThinMetrics, check_anchor, check_direction
from barstroke_core.render.bars import BarRun, render_thick_thin, thin_bar_width
from barstroke_core.symbols import CODABAR, CODABAR_DATA, CODABAR_MARKERS

from .base import BarcodeSymbol

DEFAULT_WIDE_NARROW_RATIO = 2.6
MIN_WIDE_NARROW_RATIO = 2.0
MAX_WIDE_NARROW_RATIO = 3.0


def validate_codabar(text: str | None) -> None:
    """Reject text Codabar cannot carry.

    Data characters are digits and ``-$:/.+``. ``A``-``D`` are start/stop
    markers: allowed only as the first and last character, and then on
    both ends.
    """
    if text is None:
        raise InvalidSymbolInputError("codabar text must not be None")
    if not text:
        raise InvalidSymbolInputError("codabar text must not be empty")
    bad = CODABAR.first_unsupported(text)
    if bad is not None:
        raise InvalidSymbolInputError(f"invalid codabar text {text!r}: unsupported character {bad!r}")
    if has_markers(text):
        inner = text[1:-1]
    elif text[0] in CODABAR_MARKERS or text[-1] in CODABAR_MARKERS:
        raise InvalidSymbolInputError(f"invalid codabar text {text!r}: start and stop markers must come in pairs")
    else:
        inner = text
    for ch in inner:
        if ch not in CODABAR_DATA:
            raise InvalidSymbolInputError(f"invalid codabar text {text!r}: {ch!r} is only allowed as start/stop marker")


def has_markers(text: str) -> bool:
    return len(text) >= 2 and text[0] in CODABAR_MARKERS and text[-1] in CODABAR_MARKERS


@dataclass(frozen=True)
class Codabar(BarcodeSymbol):
    """Thick/thin Codabar symbol stretched to exactly `width` x `height`."""

    symbology: ClassVar[str] = "codabar"

    text: str
    width: float
    height: float
    direction: str = LEFT_TO_RIGHT
    anchor: str = "top_left"
    wide_narrow_ratio: float = DEFAULT_WIDE_NARROW_RATIO
    start_char: str = "A"
    stop_char: str = "B"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if not MIN_WIDE_NARROW_RATIO <= self.wide_narrow_ratio <= MAX_WIDE_NARROW_RATIO:
            raise ValueError(
                f"wide_narrow_ratio must be within [{MIN_WIDE_NARROW_RATIO}, {MAX_WIDE_NARROW_RATIO}]"
            )
        check_direction(self.direction)
        check_anchor(self.anchor)
        for name, ch in (("start_char", self.start_char), ("stop_char", self.stop_char)):
            if len(ch) != 1 or ch not in CODABAR_MARKERS:
                raise InvalidSymbolInputError(f"{name} must be one of {CODABAR_MARKERS}, got {ch!r}")
        self.validate()

    def validate(self) -> None:
        validate_codabar(self.text)

    @property
    def size(self) -> tuple[float, float]:
        return (float(self.width), float(self.height))

    @property
    def payload(self) -> str:
        return self.text[1:-1] if has_markers(self.text) else self.text

    def build_message(self) -> str:
        if has_markers(self.text):
            return self.text
        return self.start_char + self.text + self.stop_char

    def encode_pattern(self, message: str) -> list[str]:
        return [CODABAR.lookup(ch) for ch in message]

    def metrics(self, patterns: Sequence[str]) -> ThickThinMetrics:
        return ThickThinMetrics(
            thin_width=thin_bar_width(patterns, self.width, self.wide_narrow_ratio),
            wide_narrow_ratio=self.wide_narrow_ratio,
            bar_height=float(self.height),
        )

    def render_bars(self, patterns: Sequence[str], start: tuple[float, float]) -> BarRun:
        cursor = RenderCursor(x=start[0], y=start[1], metrics=self.metrics(patterns))
        return render_thick_thin(patterns, cursor)
