from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from barstroke_core.errors import InvalidHeightLevelError
from barstroke_core.geometry import FourStateMetrics, Rect, RenderCursor, ThickThinMetrics


@dataclass(frozen=True)
class BarRun:
    """Rects emitted by one render pass and the cursor it ended on."""

    rects: tuple[Rect, ...]
    start: RenderCursor
    end: RenderCursor

    @property
    def advance(self) -> float:
        return self.end.x - self.start.x


# -- thick/thin ----------------------------------------------------------


def count_thick_thin(patterns: Iterable[str]) -> tuple[int, int]:
    thick = 0
    thin = 0
    for pattern in patterns:
        ones = pattern.count("1")
        thick += ones
        thin += len(pattern) - ones
    return thick, thin


def thin_bar_width(patterns: Sequence[str], width: float, wide_narrow_ratio: float) -> float:
    """Width of one thin element so that the whole symbol spans `width`.

    Characters are separated by a thick gap, so a message of n characters
    (start and stop included) carries n - 1 extra thick elements.
    """
    thick, thin = count_thick_thin(patterns)
    thick += max(0, len(patterns) - 1)
    units = wide_narrow_ratio * thick + thin
    if units <= 0:
        raise ValueError("nothing to render")
    return width / units


def thick_thin_bar(cursor: RenderCursor, thick: bool) -> tuple[Rect, RenderCursor]:
    metrics = _thick_thin_metrics(cursor)
    w = metrics.element_width(thick)
    rect = Rect(x=cursor.x, y=cursor.y, width=w, height=metrics.bar_height)
    return rect, cursor.advance(w)


def thick_thin_gap(cursor: RenderCursor, thick: bool) -> RenderCursor:
    return cursor.advance(_thick_thin_metrics(cursor).element_width(thick))


def thick_thin_char(cursor: RenderCursor, pattern: str) -> tuple[list[Rect], RenderCursor]:
    rects: list[Rect] = []
    for idx, symbol in enumerate(pattern):
        thick = symbol == "1"
        if idx % 2 == 0:
            rect, cursor = thick_thin_bar(cursor, thick)
            rects.append(rect)
        else:
            cursor = thick_thin_gap(cursor, thick)
    return rects, cursor


def render_thick_thin(patterns: Sequence[str], start: RenderCursor) -> BarRun:
    cursor = start
    rects: list[Rect] = []
    last = len(patterns) - 1
    for i, pattern in enumerate(patterns):
        char_rects, cursor = thick_thin_char(cursor, pattern)
        rects.extend(char_rects)
        if i < last:
            cursor = thick_thin_gap(cursor, True)
    return BarRun(rects=tuple(rects), start=start, end=cursor)


def _thick_thin_metrics(cursor: RenderCursor) -> ThickThinMetrics:
    if not isinstance(cursor.metrics, ThickThinMetrics):
        raise TypeError("cursor does not carry thick/thin metrics")
    return cursor.metrics


# -- four-state ----------------------------------------------------------


def bar_height(level: int, metrics: FourStateMetrics) -> float:
    if level == 0:
        return metrics.track_height
    if level in (1, 2):
        return metrics.track_height + metrics.ascender_height
    if level == 3:
        return metrics.track_height + 2 * metrics.ascender_height
    raise InvalidHeightLevelError(level)


def bar_offset(level: int, metrics: FourStateMetrics) -> float:
    """Top of a bar relative to the cursor, around the track centerline."""
    middle = bar_height(0, metrics) / 2
    if level in (0, 2):
        return middle - bar_height(0, metrics) / 2
    if level in (1, 3):
        return middle - bar_height(3, metrics) / 2
    raise InvalidHeightLevelError(level)


def four_state_bar(cursor: RenderCursor, level: int) -> tuple[Rect, RenderCursor]:
    metrics = _four_state_metrics(cursor)
    rect = Rect(
        x=cursor.x,
        y=cursor.y + bar_offset(level, metrics),
        width=metrics.bar_width,
        height=bar_height(level, metrics),
    )
    return rect, cursor.advance(metrics.bar_width)


def four_state_gap(cursor: RenderCursor) -> RenderCursor:
    return cursor.advance(_four_state_metrics(cursor).bar_space)


def render_four_state(patterns: Sequence[str], start: RenderCursor) -> BarRun:
    cursor = start
    rects: list[Rect] = []
    for pattern in patterns:
        for symbol in pattern:
            rect, cursor = four_state_bar(cursor, _level(symbol))
            rects.append(rect)
            cursor = four_state_gap(cursor)
    return BarRun(rects=tuple(rects), start=start, end=cursor)


def four_state_extent(bar_count: int, metrics: FourStateMetrics) -> tuple[float, float]:
    return (
        bar_count * (metrics.bar_width + metrics.bar_space),
        bar_height(3, metrics),
    )


_LEVELS = ("0", "1", "2", "3")


def _level(symbol: str) -> int:
    if symbol not in _LEVELS:
        raise InvalidHeightLevelError(symbol)
    return int(symbol)


def _four_state_metrics(cursor: RenderCursor) -> FourStateMetrics:
    if not isinstance(cursor.metrics, FourStateMetrics):
        raise TypeError("cursor does not carry four-state metrics")
    return cursor.metrics
