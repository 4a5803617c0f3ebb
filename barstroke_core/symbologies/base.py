from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import ClassVar, Sequence

from barstroke_core.geometry import Rect, Rotation, anchor_offset, rotation_for
from barstroke_core.render.bars import BarRun
from barstroke_core.render.surface import BLACK, Color, DrawCall, DrawingSurface

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarcodeLayout:
    """Everything one render pass produces, before it reaches a surface."""

    symbology: str
    message: str
    patterns: tuple[str, ...]
    rotation: Rotation
    size: tuple[float, float]
    run: BarRun

    @property
    def rects(self) -> tuple[Rect, ...]:
        return self.run.rects

    @property
    def origin(self) -> tuple[float, float]:
        return (self.run.start.x, self.run.start.y)

    def local_bounds(self) -> Rect:
        return _union(self.rects)

    def device_rects(self) -> list[Rect]:
        if self.rotation.is_identity:
            return list(self.rects)
        return [self.rotation.transform_rect(r) for r in self.rects]

    def bounds(self) -> Rect:
        return _union(self.device_rects())

    def draw_calls(self, fill: Color = BLACK) -> list[DrawCall]:
        rotation = None if self.rotation.is_identity else self.rotation
        return [DrawCall(rect=r, fill=fill, rotation=rotation) for r in self.rects]


class BarcodeSymbol(ABC):
    """Shared pipeline: validate -> build message -> encode -> lay out -> draw.

    Concrete symbols are frozen dataclasses that validate in
    ``__post_init__`` so an instance that exists can always be rendered.
    """

    symbology: ClassVar[str] = ""

    direction: str
    anchor: str

    @abstractmethod
    def validate(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def build_message(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def encode_pattern(self, message: str) -> list[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def size(self) -> tuple[float, float]:
        raise NotImplementedError

    @abstractmethod
    def render_bars(self, patterns: Sequence[str], start: tuple[float, float]) -> BarRun:
        raise NotImplementedError

    def layout(self, position: tuple[float, float] = (0.0, 0.0)) -> BarcodeLayout:
        message = self.build_message()
        patterns = tuple(self.encode_pattern(message))
        size = self.size
        dx, dy = anchor_offset(self.anchor, size)
        start = (position[0] - dx, position[1] - dy)
        run = self.render_bars(patterns, start)
        LOGGER.debug(
            "%s: %d characters, %d bars in %d elements, advance %.3f",
            self.symbology,
            len(message),
            len(run.rects),
            run.end.elements,
            run.advance,
        )
        return BarcodeLayout(
            symbology=self.symbology,
            message=message,
            patterns=patterns,
            rotation=rotation_for(self.direction, position),
            size=size,
            run=run,
        )

    def render(
        self,
        surface: DrawingSurface,
        position: tuple[float, float] = (0.0, 0.0),
        fill: Color = BLACK,
    ) -> BarcodeLayout:
        layout = self.layout(position)
        surface.save_state()
        try:
            if not layout.rotation.is_identity:
                surface.rotate_at(layout.rotation.degrees, layout.rotation.center)
            for rect in layout.rects:
                surface.draw_rect(rect, fill)
        finally:
            surface.restore_state()
        return layout


def _union(rects: Sequence[Rect]) -> Rect:
    if not rects:
        return Rect(0.0, 0.0, 0.0, 0.0)
    x0 = min(r.x for r in rects)
    y0 = min(r.y for r in rects)
    x1 = max(r.right for r in rects)
    y1 = max(r.bottom for r in rects)
    return Rect(x=x0, y=y0, width=x1 - x0, height=y1 - y0)
