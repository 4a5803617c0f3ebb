from .base import BarcodeLayout, BarcodeSymbol
from .codabar import Codabar, validate_codabar
from .japan_post import JapanPostBarcode, build_japan_post_message, transliterate, validate_zip

__all__ = [
    "BarcodeLayout",
    "BarcodeSymbol",
    "Codabar",
    "JapanPostBarcode",
    "build_japan_post_message",
    "transliterate",
    "validate_codabar",
    "validate_zip",
]
