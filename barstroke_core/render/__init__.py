from .bars import BarRun, bar_height, bar_offset, render_four_state, render_thick_thin, thin_bar_width
from .framebuffer import RasterSurface
from .surface import BLACK, WHITE, Color, DrawCall, DrawingSurface, RecordingSurface
from .svg import SvgSurface, parse_rects

__all__ = [
    "BLACK",
    "BarRun",
    "Color",
    "DrawCall",
    "DrawingSurface",
    "RasterSurface",
    "RecordingSurface",
    "SvgSurface",
    "WHITE",
    "bar_height",
    "bar_offset",
    "parse_rects",
    "render_four_state",
    "render_thick_thin",
    "thin_bar_width",
]
