from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import xml.etree.ElementTree as ET

from barstroke_core.geometry import Rect, Rotation

from .surface import Color, DrawingSurface

SVG_NS = "http://www.w3.org/2000/svg"


@dataclass(frozen=True)
class SvgRect:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[Color]
    rotation: Optional[Rotation] = None


class SvgSurface(DrawingSurface):
    """Collects rects and serializes them as SVG markup, units in points."""

    def __init__(self, width: float, height: float, *, viewbox: tuple[float, float, float, float] | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        super().__init__()
        self.width = float(width)
        self.height = float(height)
        self.viewbox = viewbox or (0.0, 0.0, self.width, self.height)
        self.rects: list[SvgRect] = []

    @classmethod
    def for_extent(cls, bounds: Rect, *, margin: float = 0.0) -> "SvgSurface":
        return cls(
            bounds.width + 2 * margin,
            bounds.height + 2 * margin,
            viewbox=(bounds.x - margin, bounds.y - margin, bounds.width + 2 * margin, bounds.height + 2 * margin),
        )

    def draw_rect(self, rect: Rect, fill: Color) -> None:
        rotation = self.rotation
        if rotation is not None and rotation.is_identity:
            rotation = None
        self.rects.append(
            SvgRect(x=rect.x, y=rect.y, width=rect.width, height=rect.height, fill=fill, rotation=rotation)
        )

    def to_markup(self) -> str:
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "version": "1.1",
                "width": f"{_fmt(self.width)}pt",
                "height": f"{_fmt(self.height)}pt",
                "viewBox": " ".join(_fmt(v) for v in self.viewbox),
            },
        )
        parent = root
        current: Rotation | None = None
        for rect in self.rects:
            if rect.rotation != current:
                current = rect.rotation
                parent = root if current is None else ET.SubElement(root, "g", {"transform": _rotate_attr(current)})
            attrs = {
                "x": _fmt(rect.x),
                "y": _fmt(rect.y),
                "width": _fmt(rect.width),
                "height": _fmt(rect.height),
            }
            attrs.update(_fill_attrs(rect.fill))
            ET.SubElement(parent, "rect", attrs)
        return ET.tostring(root, encoding="unicode")

    def write(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.to_markup(), encoding="utf-8")
        return out


def parse_rects(svg_markup: str) -> list[SvgRect]:
    """Read back the rects of markup produced by `SvgSurface`."""
    root = ET.fromstring(svg_markup)
    rects: list[SvgRect] = []
    _collect_rects(root, None, rects)
    return rects


def _collect_rects(elem: ET.Element, rotation: Rotation | None, out: list[SvgRect]) -> None:
    for child in elem:
        tag = _strip_namespace(child.tag)
        if tag == "g":
            _collect_rects(child, _parse_rotate(child.attrib.get("transform")) or rotation, out)
        elif tag == "rect":
            out.append(
                SvgRect(
                    x=_parse_length(child.attrib.get("x")) or 0.0,
                    y=_parse_length(child.attrib.get("y")) or 0.0,
                    width=_parse_length(child.attrib.get("width")) or 0.0,
                    height=_parse_length(child.attrib.get("height")) or 0.0,
                    fill=_parse_color(child.attrib.get("fill"), child.attrib.get("fill-opacity")),
                    rotation=rotation,
                )
            )


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _rotate_attr(rotation: Rotation) -> str:
    cx, cy = rotation.center
    return f"rotate({_fmt(rotation.degrees)} {_fmt(cx)} {_fmt(cy)})"


def _fill_attrs(color: Optional[Color]) -> dict[str, str]:
    if color is None:
        return {"fill": "none"}
    r, g, b, a = color
    attrs = {"fill": f"#{r:02x}{g:02x}{b:02x}"}
    if a < 255:
        attrs["fill-opacity"] = _fmt(a / 255.0)
    return attrs


def _strip_namespace(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _parse_length(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    value = value.strip()
    for suffix in ("pt", "px"):
        if value.endswith(suffix):
            value = value[: -len(suffix)]
    try:
        return float(value)
    except ValueError:
        return None


def _parse_rotate(value: Optional[str]) -> Optional[Rotation]:
    if not value or not value.strip().startswith("rotate("):
        return None
    parts = value[value.find("(") + 1 : value.find(")")].replace(",", " ").split()
    try:
        nums = [float(p) for p in parts]
    except ValueError:
        return None
    if len(nums) == 1:
        return Rotation(degrees=nums[0], center=(0.0, 0.0))
    if len(nums) == 3:
        return Rotation(degrees=nums[0], center=(nums[1], nums[2]))
    return None


def _parse_color(value: Optional[str], opacity: Optional[str] = None) -> Optional[Color]:
    if not value:
        return None
    value = value.strip()
    if value == "none" or not value.startswith("#"):
        return None
    hex_value = value[1:]
    if len(hex_value) == 3:
        hex_value = "".join(c * 2 for c in hex_value)
    if len(hex_value) != 6:
        return None
    r = int(hex_value[0:2], 16)
    g = int(hex_value[2:4], 16)
    b = int(hex_value[4:6], 16)
    a = 255
    if opacity:
        try:
            a = max(0, min(255, int(round(float(opacity) * 255))))
        except ValueError:
            a = 255
    return (r, g, b, a)
