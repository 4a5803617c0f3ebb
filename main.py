from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from barstroke_core.config import DEFAULT_DPI, DEFAULT_MARGIN_MM, OutputSpec, load_job
from barstroke_core.errors import BarcodeError
from barstroke_core.export import export
from barstroke_core.geometry import DIRECTION_ANGLES
from barstroke_core.symbologies import BarcodeSymbol, Codabar, JapanPostBarcode
from barstroke_core.symbologies.codabar import DEFAULT_WIDE_NARROW_RATIO
from barstroke_core.units import mm

LOGGER = logging.getLogger("barstroke")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="barstroke")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    codabar = sub.add_parser("codabar", help="Render a Codabar symbol.")
    codabar.add_argument("text")
    codabar.add_argument("--width-mm", type=float, required=True)
    codabar.add_argument("--height-mm", type=float, required=True)
    codabar.add_argument("--ratio", type=float, default=DEFAULT_WIDE_NARROW_RATIO, help="Wide-to-narrow ratio (2.0-3.0).")
    codabar.add_argument("--start", default="A", help="Start marker when TEXT carries none.")
    codabar.add_argument("--stop", default="B", help="Stop marker when TEXT carries none.")
    _add_common(codabar)

    jp = sub.add_parser("japan-post", help="Render a Japan Post customer barcode.")
    jp.add_argument("zip")
    jp.add_argument("address", nargs="?", default="")
    _add_common(jp)

    job = sub.add_parser("render-job", help="Render a barcode described by a TOML job file.")
    job.add_argument("job", type=Path)
    return parser


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--direction", choices=sorted(DIRECTION_ANGLES), default="left_to_right")
    p.add_argument("--out", type=Path, default=None, help="Output .svg or .png. Default: JSON draw calls on stdout.")
    p.add_argument("--dpi", type=float, default=DEFAULT_DPI)
    p.add_argument("--margin-mm", type=float, default=DEFAULT_MARGIN_MM)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "render-job":
            job = load_job(args.job)
            symbol, output = job.symbol, job.output
        else:
            symbol = _symbol_from_args(args)
            output = OutputSpec(path=args.out, dpi=args.dpi, margin_mm=args.margin_mm)
        result = export(symbol, output)
    except (BarcodeError, ValueError, FileNotFoundError) as exc:
        LOGGER.error("%s", exc)
        return 2

    if isinstance(result, Path):
        print(f"wrote {result}")
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def _symbol_from_args(args: argparse.Namespace) -> BarcodeSymbol:
    if args.command == "codabar":
        return Codabar(
            text=args.text,
            width=mm(args.width_mm),
            height=mm(args.height_mm),
            direction=args.direction,
            wide_narrow_ratio=args.ratio,
            start_char=args.start,
            stop_char=args.stop,
        )
    if args.command == "japan-post":
        return JapanPostBarcode(zip_code=args.zip, street_address=args.address, direction=args.direction)
    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
