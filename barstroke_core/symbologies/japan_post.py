from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import ClassVar, Sequence

from barstroke_core.checkdigit import check_digit
from barstroke_core.errors import InvalidSymbolInputError
from barstroke_core.geometry import FourStateMetrics, LEFT_TO_RIGHT, RenderCursor, check_anchor, check_direction
from barstroke_core.normalize import LETTERS, normalize_address
from barstroke_core.render.bars import BarRun, four_state_extent, render_four_state
from barstroke_core.symbols import CC1, CC2, CC3, CC4, JAPAN_POST, JP_FILLER, JP_START, JP_STOP
from barstroke_core.units import mm

from .base import BarcodeSymbol

LOGGER = logging.getLogger(__name__)

ZIP_LENGTH = 7
FIELD_WIDTH = 20

DEFAULT_TRACK_HEIGHT = mm(1.2)
DEFAULT_ASCENDER_HEIGHT = mm(1.2)
DEFAULT_BAR_WIDTH = mm(0.6)
DEFAULT_BAR_SPACE = mm(0.6)

_LETTER_PREFIX = {"1": CC1, "2": CC2, "3": CC3}
_START_STOP = frozenset("()[]")


def validate_zip(zip_code: str | None) -> str:
    if zip_code is None:
        raise InvalidSymbolInputError("zip code is required")
    if len(zip_code) != ZIP_LENGTH or not all("0" <= ch <= "9" for ch in zip_code):
        raise InvalidSymbolInputError(f"zip code must be {ZIP_LENGTH} digits, got {zip_code!r}")
    return zip_code


def transliterate(code: str) -> str:
    """Map digits, letters, hyphen and filler onto the check alphabet.

    A letter becomes a control code chosen by the tens digit of its index
    (A=10 .. Z=35) followed by the units digit. Other characters are
    dropped.
    """
    out: list[str] = []
    for ch in code:
        if "0" <= ch <= "9":
            out.append(ch)
        elif ch in LETTERS:
            number = str(ord(ch) - ord("A") + 10)
            out.append(_LETTER_PREFIX[number[0]])
            out.append(number[1])
        elif ch == "-":
            out.append("-")
        elif ch == JP_FILLER:
            out.append(CC4)
    return "".join(out)


def build_japan_post_message(code: str) -> str:
    """Pad, transliterate, check-digit and frame a zip + address number."""
    body = "".join(ch for ch in code if ch not in _START_STOP)
    payload = transliterate(body)
    if len(payload) > FIELD_WIDTH:
        LOGGER.warning(
            "japan post payload %r is %d characters; truncating to %d",
            body,
            len(payload),
            FIELD_WIDTH,
        )
    padded = transliterate(body + JP_FILLER * FIELD_WIDTH)[:FIELD_WIDTH]
    return JP_START + padded + check_digit(padded) + JP_STOP


@dataclass(frozen=True)
class JapanPostBarcode(BarcodeSymbol):
    """Japan Post customer barcode (four-state) for a zip and street address.

    `street_address` is the part of the address after the town area name;
    its address-display number is derived with `normalize_address`.
    """

    symbology: ClassVar[str] = "japan_post"

    zip_code: str
    street_address: str = ""
    direction: str = LEFT_TO_RIGHT
    anchor: str = "top_left"
    track_height: float = DEFAULT_TRACK_HEIGHT
    ascender_height: float = DEFAULT_ASCENDER_HEIGHT
    bar_width: float = DEFAULT_BAR_WIDTH
    bar_space: float = DEFAULT_BAR_SPACE
    address_number: str = field(init=False)

    def __post_init__(self) -> None:
        for name in ("track_height", "ascender_height", "bar_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.bar_space < 0:
            raise ValueError("bar_space must be >= 0")
        check_direction(self.direction)
        check_anchor(self.anchor)
        self.validate()
        object.__setattr__(self, "address_number", normalize_address(self.street_address))

    def validate(self) -> None:
        validate_zip(self.zip_code)

    @property
    def text(self) -> str:
        return self.zip_code + self.address_number

    @property
    def metrics(self) -> FourStateMetrics:
        return FourStateMetrics(
            track_height=self.track_height,
            ascender_height=self.ascender_height,
            bar_width=self.bar_width,
            bar_space=self.bar_space,
        )

    @property
    def size(self) -> tuple[float, float]:
        # start + 20 characters + check digit + stop
        bars = 2 + (FIELD_WIDTH + 1) * 3 + 2
        return four_state_extent(bars, self.metrics)

    def build_message(self) -> str:
        message = build_japan_post_message(self.text)
        LOGGER.debug("japan post message for %s: %r", self.zip_code, message)
        return message

    def encode_pattern(self, message: str) -> list[str]:
        return [JAPAN_POST.lookup(ch) for ch in message]

    def render_bars(self, patterns: Sequence[str], start: tuple[float, float]) -> BarRun:
        # `start` is the top of the box; tall bars reach one ascender above the track.
        cursor = RenderCursor(x=start[0], y=start[1] + self.ascender_height, metrics=self.metrics)
        return render_four_state(patterns, cursor)
