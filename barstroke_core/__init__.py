from .checkdigit import check_digit, verify, weight_sum
from .errors import BarcodeError, InvalidHeightLevelError, InvalidSymbolInputError, UnsupportedCharacterError
from .geometry import (
    BOTTOM_TO_TOP,
    LEFT_TO_RIGHT,
    RIGHT_TO_LEFT,
    TOP_TO_BOTTOM,
    Rect,
    RenderCursor,
    Rotation,
)
from .normalize import normalize_address
from .symbologies import BarcodeLayout, BarcodeSymbol, Codabar, JapanPostBarcode
from .units import mm

__all__ = [
    "BOTTOM_TO_TOP",
    "BarcodeError",
    "BarcodeLayout",
    "BarcodeSymbol",
    "Codabar",
    "InvalidHeightLevelError",
    "InvalidSymbolInputError",
    "JapanPostBarcode",
    "LEFT_TO_RIGHT",
    "RIGHT_TO_LEFT",
    "Rect",
    "RenderCursor",
    "Rotation",
    "TOP_TO_BOTTOM",
    "UnsupportedCharacterError",
    "check_digit",
    "mm",
    "normalize_address",
    "verify",
    "weight_sum",
]
