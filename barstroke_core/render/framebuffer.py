from __future__ import annotations

from pathlib import Path
import math

import numpy as np
from PIL import Image

from barstroke_core.geometry import Rect
from barstroke_core.units import points_to_pixels

from .surface import WHITE, Color, DrawingSurface


def new_canvas(width: int, height: int, color: Color = WHITE) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    a = color[3] / 255.0
    if a <= 0.0:
        return
    view = dst[ya:yb, xa:xb]
    if a >= 1.0:
        view[:, :, :3] = color[:3]
    else:
        inv = 1.0 - a
        view[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + view[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    view[:, :, 3] = 255


class RasterSurface(DrawingSurface):
    """RGBA canvas addressed in points; `origin` is the point shown at pixel (0, 0)."""

    def __init__(
        self,
        width_px: int,
        height_px: int,
        *,
        dpi: float = 300.0,
        origin: tuple[float, float] = (0.0, 0.0),
        background: Color = WHITE,
    ) -> None:
        if width_px <= 0 or height_px <= 0:
            raise ValueError("width and height must be > 0")
        super().__init__()
        self.dpi = float(dpi)
        self.origin = origin
        self.canvas = new_canvas(width_px, height_px, background)

    @classmethod
    def for_extent(
        cls,
        bounds: Rect,
        *,
        dpi: float = 300.0,
        margin: float = 0.0,
        background: Color = WHITE,
    ) -> "RasterSurface":
        """Canvas covering `bounds` (in points) plus `margin` on every side."""
        width_px = max(1, math.ceil(points_to_pixels(bounds.width + 2 * margin, dpi)))
        height_px = max(1, math.ceil(points_to_pixels(bounds.height + 2 * margin, dpi)))
        return cls(
            width_px,
            height_px,
            dpi=dpi,
            origin=(bounds.x - margin, bounds.y - margin),
            background=background,
        )

    @property
    def width_px(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height_px(self) -> int:
        return int(self.canvas.shape[0])

    def draw_rect(self, rect: Rect, fill: Color) -> None:
        dev = self.to_device(rect)
        ox, oy = self.origin
        x0 = round(points_to_pixels(dev.x - ox, self.dpi))
        y0 = round(points_to_pixels(dev.y - oy, self.dpi))
        x1 = round(points_to_pixels(dev.right - ox, self.dpi))
        y1 = round(points_to_pixels(dev.bottom - oy, self.dpi))
        fill_rect(self.canvas, x0, y0, x1, y1, fill)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.canvas)

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        dpi = int(round(self.dpi))
        self.to_image().save(out, format="PNG", dpi=(dpi, dpi))
        return out
