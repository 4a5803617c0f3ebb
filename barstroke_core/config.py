from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any, Mapping

from .symbologies import BarcodeSymbol, Codabar, JapanPostBarcode
from .symbologies.codabar import DEFAULT_WIDE_NARROW_RATIO
from .units import mm

SYMBOLOGIES = ("codabar", "japan_post")
DEFAULT_DPI = 300.0
DEFAULT_MARGIN_MM = 2.0
OUTPUT_SUFFIXES = (".svg", ".png")


@dataclass(frozen=True)
class OutputSpec:
    path: Path | None = None
    dpi: float = DEFAULT_DPI
    margin_mm: float = DEFAULT_MARGIN_MM

    @property
    def format(self) -> str:
        if self.path is None:
            return "json"
        suffix = self.path.suffix.lower()
        if suffix == ".svg":
            return "svg"
        if suffix == ".png":
            return "png"
        raise ValueError(f"unsupported output format: {self.path.suffix or '<none>'}")


@dataclass(frozen=True)
class BarcodeJob:
    symbol: BarcodeSymbol
    output: OutputSpec


def load_job(path: str | Path) -> BarcodeJob:
    """Read a barcode job from a TOML file.

    ```toml
    [barcode]
    symbology = "codabar"
    text = "A40156B"
    width_mm = 50
    height_mm = 12

    [output]
    path = "out/label.svg"
    ```
    """
    job_path = Path(path)
    if not job_path.exists():
        raise FileNotFoundError(f"barcode job not found: {job_path}")
    with job_path.open("rb") as f:
        raw = tomllib.load(f)
    return job_from_mapping(raw, base_dir=job_path.parent)


def job_from_mapping(raw: Mapping[str, Any], base_dir: Path | None = None) -> BarcodeJob:
    barcode = raw.get("barcode")
    if not isinstance(barcode, Mapping):
        raise ValueError("job missing required table: barcode")
    output = raw.get("output", {})
    if not isinstance(output, Mapping):
        raise ValueError("output must be a table")
    return BarcodeJob(symbol=build_symbol(barcode), output=_output_spec(output, base_dir))


def build_symbol(section: Mapping[str, Any]) -> BarcodeSymbol:
    symbology = _require_str(section, "symbology")
    common: dict[str, Any] = {}
    if "direction" in section:
        common["direction"] = _require_str(section, "direction")
    if "anchor" in section:
        common["anchor"] = _require_str(section, "anchor")

    if symbology == "codabar":
        return Codabar(
            text=_require_str(section, "text"),
            width=mm(_require_float(section, "width_mm")),
            height=mm(_require_float(section, "height_mm")),
            wide_narrow_ratio=_optional_float(section, "wide_narrow_ratio", DEFAULT_WIDE_NARROW_RATIO),
            start_char=str(section.get("start_char", "A")),
            stop_char=str(section.get("stop_char", "B")),
            **common,
        )
    if symbology == "japan_post":
        for key, attr in (
            ("track_height_mm", "track_height"),
            ("ascender_height_mm", "ascender_height"),
            ("bar_width_mm", "bar_width"),
            ("bar_space_mm", "bar_space"),
        ):
            if key in section:
                common[attr] = mm(_require_float(section, key))
        return JapanPostBarcode(
            zip_code=_require_str(section, "zip"),
            street_address=str(section.get("address", "")),
            **common,
        )
    raise ValueError(f"unknown symbology `{symbology}`; expected one of {', '.join(SYMBOLOGIES)}")


def _output_spec(section: Mapping[str, Any], base_dir: Path | None) -> OutputSpec:
    path: Path | None = None
    if "path" in section:
        path = Path(_require_str(section, "path"))
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
    spec = OutputSpec(
        path=path,
        dpi=_optional_float(section, "dpi", DEFAULT_DPI),
        margin_mm=_optional_float(section, "margin_mm", DEFAULT_MARGIN_MM),
    )
    if spec.dpi <= 0:
        raise ValueError("dpi must be > 0")
    if spec.margin_mm < 0:
        raise ValueError("margin_mm must be >= 0")
    if path is not None and path.suffix.lower() not in OUTPUT_SUFFIXES:
        raise ValueError(f"unsupported output format: {path.suffix or '<none>'}")
    return spec


def _require_str(section: Mapping[str, Any], key: str) -> str:
    if key not in section:
        raise ValueError(f"job missing required field: {key}")
    value = section[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _require_float(section: Mapping[str, Any], key: str) -> float:
    if key not in section:
        raise ValueError(f"job missing required field: {key}")
    return _coerce_float(section[key], key)


def _optional_float(section: Mapping[str, Any], key: str, default: float) -> float:
    if key not in section:
        return default
    return _coerce_float(section[key], key)


def _coerce_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)
