from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from barstroke_core.geometry import Rect, Rotation


Color = tuple[int, int, int, int]

BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)


class DrawingSurface(ABC):
    """Target that paints absolute-positioned rects under an optional rotation."""

    def __init__(self) -> None:
        self._rotation: Rotation | None = None
        self._saved: list[Rotation | None] = []

    @property
    def rotation(self) -> Rotation | None:
        return self._rotation

    def save_state(self) -> None:
        self._saved.append(self._rotation)

    def restore_state(self) -> None:
        if not self._saved:
            raise RuntimeError("restore_state without matching save_state")
        self._rotation = self._saved.pop()

    def rotate_at(self, degrees: float, center: tuple[float, float]) -> None:
        if self._rotation is not None and not self._rotation.is_identity:
            raise RuntimeError("surface already carries a rotation; restore_state first")
        self._rotation = Rotation(degrees=degrees, center=center)

    @abstractmethod
    def draw_rect(self, rect: Rect, fill: Color) -> None:
        raise NotImplementedError

    def to_device(self, rect: Rect) -> Rect:
        if self._rotation is None or self._rotation.is_identity:
            return rect
        return self._rotation.transform_rect(rect)


@dataclass(frozen=True)
class DrawCall:
    rect: Rect
    fill: Color
    rotation: Rotation | None = None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "x": self.rect.x,
            "y": self.rect.y,
            "width": self.rect.width,
            "height": self.rect.height,
            "fill": list(self.fill),
        }
        if self.rotation is not None:
            out["rotation"] = {"degrees": self.rotation.degrees, "center": list(self.rotation.center)}
        return out


@dataclass
class RecordingSurface(DrawingSurface):
    """Keeps draw calls in local (unrotated) coordinates."""

    calls: list[DrawCall] = field(default_factory=list)

    def __post_init__(self) -> None:
        DrawingSurface.__init__(self)

    def draw_rect(self, rect: Rect, fill: Color) -> None:
        self.calls.append(DrawCall(rect=rect, fill=fill, rotation=self.rotation))

    def device_rects(self) -> list[Rect]:
        out: list[Rect] = []
        for call in self.calls:
            if call.rotation is None or call.rotation.is_identity:
                out.append(call.rect)
            else:
                out.append(call.rotation.transform_rect(call.rect))
        return out
