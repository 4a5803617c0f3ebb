from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Literal, Union


Direction = Literal["left_to_right", "right_to_left", "top_to_bottom", "bottom_to_top"]

LEFT_TO_RIGHT: Direction = "left_to_right"
RIGHT_TO_LEFT: Direction = "right_to_left"
TOP_TO_BOTTOM: Direction = "top_to_bottom"
BOTTOM_TO_TOP: Direction = "bottom_to_top"

# Degrees, clockwise on a y-down surface.
DIRECTION_ANGLES: dict[str, float] = {
    LEFT_TO_RIGHT: 0.0,
    RIGHT_TO_LEFT: 180.0,
    TOP_TO_BOTTOM: 90.0,
    BOTTOM_TO_TOP: -90.0,
}

AnchorType = Literal[
    "top_left",
    "top_center",
    "top_right",
    "middle_left",
    "middle_center",
    "middle_right",
    "bottom_left",
    "bottom_center",
    "bottom_right",
]

_ANCHOR_FACTORS: dict[str, tuple[float, float]] = {
    "top_left": (0.0, 0.0),
    "top_center": (0.5, 0.0),
    "top_right": (1.0, 0.0),
    "middle_left": (0.0, 0.5),
    "middle_center": (0.5, 0.5),
    "middle_right": (1.0, 0.5),
    "bottom_left": (0.0, 1.0),
    "bottom_center": (0.5, 1.0),
    "bottom_right": (1.0, 1.0),
}


def check_direction(direction: str) -> Direction:
    if direction not in DIRECTION_ANGLES:
        raise ValueError(f"unknown direction: {direction}")
    return direction  # type: ignore[return-value]


def check_anchor(anchor: str) -> AnchorType:
    if anchor not in _ANCHOR_FACTORS:
        raise ValueError(f"unknown anchor: {anchor}")
    return anchor  # type: ignore[return-value]


def anchor_offset(anchor: str, size: tuple[float, float]) -> tuple[float, float]:
    """Distance from the top-left corner of a box of `size` to `anchor`."""
    fx, fy = _ANCHOR_FACTORS[check_anchor(anchor)]
    width, height = size
    return (fx * width, fy * height)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def corners(self) -> list[tuple[float, float]]:
        return [
            (self.x, self.y),
            (self.right, self.y),
            (self.right, self.bottom),
            (self.x, self.bottom),
        ]


@dataclass(frozen=True)
class Rotation:
    """Rotation about a fixed point, in the y-down drawing convention."""

    degrees: float
    center: tuple[float, float]

    @property
    def basis_x(self) -> tuple[float, float]:
        rad = math.radians(self.degrees)
        return (_snap(math.cos(rad)), _snap(math.sin(rad)))

    @property
    def basis_y(self) -> tuple[float, float]:
        rad = math.radians(self.degrees)
        return (_snap(-math.sin(rad)), _snap(math.cos(rad)))

    @property
    def is_identity(self) -> bool:
        return self.degrees % 360.0 == 0.0

    def transform_point(self, point: tuple[float, float]) -> tuple[float, float]:
        x, y = point
        ox, oy = self.center
        exx, exy = self.basis_x
        eyx, eyy = self.basis_y
        dx = x - ox
        dy = y - oy
        return (ox + dx * exx + dy * eyx, oy + dx * exy + dy * eyy)

    def transform_rect(self, rect: Rect) -> Rect:
        """Bounding box of the rotated rect; exact for quarter turns."""
        pts = [self.transform_point(p) for p in rect.corners()]
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return Rect(x=min(xs), y=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys))


def rotation_for(direction: str, position: tuple[float, float]) -> Rotation:
    return Rotation(degrees=DIRECTION_ANGLES[check_direction(direction)], center=position)


def _snap(value: float) -> float:
    # cos(90deg) is 6e-17, not 0; quarter turns must stay axis-aligned.
    rounded = round(value)
    if abs(value - rounded) < 1e-12:
        return float(rounded)
    return value


@dataclass(frozen=True)
class ThickThinMetrics:
    thin_width: float
    wide_narrow_ratio: float
    bar_height: float

    @property
    def thick_width(self) -> float:
        return self.thin_width * self.wide_narrow_ratio

    def element_width(self, thick: bool) -> float:
        return self.thick_width if thick else self.thin_width


@dataclass(frozen=True)
class FourStateMetrics:
    track_height: float
    ascender_height: float
    bar_width: float
    bar_space: float


Metrics = Union[ThickThinMetrics, FourStateMetrics]


@dataclass(frozen=True)
class RenderCursor:
    """Drawing position of one render pass plus its resolved metrics."""

    x: float
    y: float
    metrics: Metrics
    elements: int = 0

    def advance(self, dx: float) -> "RenderCursor":
        return replace(self, x=self.x + dx, elements=self.elements + 1)
