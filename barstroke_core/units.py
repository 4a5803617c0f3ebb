from __future__ import annotations

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4


def mm(value: float) -> float:
    """Millimetres to points."""
    return float(value) * POINTS_PER_INCH / MM_PER_INCH


def points_to_pixels(points: float, dpi: float) -> float:
    if dpi <= 0:
        raise ValueError("dpi must be > 0")
    return float(points) * dpi / POINTS_PER_INCH
