from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from barstroke_core.config import build_symbol, job_from_mapping, load_job
from barstroke_core.errors import InvalidSymbolInputError
from barstroke_core.symbologies import Codabar, JapanPostBarcode
from barstroke_core.units import mm


class JobConfigTests(unittest.TestCase):
    def test_load_codabar_job(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "label.toml"
            path.write_text(
                """
[barcode]
symbology = "codabar"
text = "A40156B"
width_mm = 50
height_mm = 12.5
direction = "bottom_to_top"
wide_narrow_ratio = 3.0

[output]
path = "out/label.svg"
dpi = 600
""",
                encoding="utf-8",
            )
            job = load_job(path)
            self.assertIsInstance(job.symbol, Codabar)
            assert isinstance(job.symbol, Codabar)
            self.assertAlmostEqual(job.symbol.width, mm(50))
            self.assertAlmostEqual(job.symbol.height, mm(12.5))
            self.assertEqual(job.symbol.direction, "bottom_to_top")
            self.assertEqual(job.symbol.wide_narrow_ratio, 3.0)
            self.assertEqual(job.output.path, Path(td) / "out" / "label.svg")
            self.assertEqual(job.output.dpi, 600.0)
            self.assertEqual(job.output.format, "svg")

    def test_japan_post_section(self) -> None:
        symbol = build_symbol(
            {"symbology": "japan_post", "zip": "1000001", "address": "１丁目２−３", "bar_space_mm": 0.5}
        )
        self.assertIsInstance(symbol, JapanPostBarcode)
        assert isinstance(symbol, JapanPostBarcode)
        self.assertEqual(symbol.address_number, "1-2-3")
        self.assertAlmostEqual(symbol.bar_space, mm(0.5))
        self.assertAlmostEqual(symbol.bar_width, mm(0.6))

    def test_output_defaults_to_json(self) -> None:
        job = job_from_mapping({"barcode": {"symbology": "japan_post", "zip": "1000001"}})
        self.assertIsNone(job.output.path)
        self.assertEqual(job.output.format, "json")

    def test_missing_and_malformed_fields(self) -> None:
        with self.assertRaisesRegex(ValueError, "barcode"):
            job_from_mapping({})
        with self.assertRaisesRegex(ValueError, "width_mm"):
            build_symbol({"symbology": "codabar", "text": "123", "height_mm": 10})
        with self.assertRaisesRegex(ValueError, "must be a number"):
            build_symbol({"symbology": "codabar", "text": "123", "width_mm": "wide", "height_mm": 10})
        with self.assertRaisesRegex(ValueError, "unknown symbology"):
            build_symbol({"symbology": "qr", "text": "123"})
        with self.assertRaisesRegex(ValueError, "unsupported output format"):
            job_from_mapping({"barcode": {"symbology": "japan_post", "zip": "1000001"}, "output": {"path": "x.pdf"}})

    def test_invalid_text_surfaces_symbol_error(self) -> None:
        with self.assertRaises(InvalidSymbolInputError):
            build_symbol({"symbology": "codabar", "text": "A12#5B", "width_mm": 30, "height_mm": 10})

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_job("/nonexistent/barcode.toml")


if __name__ == "__main__":
    unittest.main()
