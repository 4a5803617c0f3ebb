from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import OutputSpec
from .geometry import Rect
from .render import BLACK, Color, RasterSurface, RecordingSurface, SvgSurface
from .symbologies import BarcodeSymbol
from .units import mm

LOGGER = logging.getLogger(__name__)


def symbol_extent(symbol: BarcodeSymbol) -> Rect:
    """Device-space bounds of `symbol` drawn at the origin."""
    return symbol.layout((0.0, 0.0)).bounds()


def draw_calls_json(symbol: BarcodeSymbol, fill: Color = BLACK) -> dict[str, Any]:
    surface = RecordingSurface()
    layout = symbol.render(surface, (0.0, 0.0), fill=fill)
    return {
        "symbology": layout.symbology,
        "message": layout.message,
        "size": list(layout.size),
        "draw_calls": [call.to_dict() for call in surface.calls],
    }


def write_svg(symbol: BarcodeSymbol, path: str | Path, *, margin_mm: float = 0.0, fill: Color = BLACK) -> Path:
    surface = SvgSurface.for_extent(symbol_extent(symbol), margin=mm(margin_mm))
    symbol.render(surface, (0.0, 0.0), fill=fill)
    out = surface.write(path)
    LOGGER.info("wrote %s (%d rects)", out, len(surface.rects))
    return out


def write_png(
    symbol: BarcodeSymbol,
    path: str | Path,
    *,
    dpi: float = 300.0,
    margin_mm: float = 0.0,
    fill: Color = BLACK,
) -> Path:
    surface = RasterSurface.for_extent(symbol_extent(symbol), dpi=dpi, margin=mm(margin_mm))
    symbol.render(surface, (0.0, 0.0), fill=fill)
    out = surface.save_png(path)
    LOGGER.info("wrote %s (%dx%d px)", out, surface.width_px, surface.height_px)
    return out


def export(symbol: BarcodeSymbol, output: OutputSpec) -> Path | dict[str, Any]:
    if output.path is None:
        return draw_calls_json(symbol)
    if output.format == "svg":
        return write_svg(symbol, output.path, margin_mm=output.margin_mm)
    return write_png(symbol, output.path, dpi=output.dpi, margin_mm=output.margin_mm)
