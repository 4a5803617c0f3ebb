from __future__ import annotations

import unittest

from barstroke_core.errors import InvalidSymbolInputError
from barstroke_core.geometry import ThickThinMetrics
from barstroke_core.render.bars import count_thick_thin, thin_bar_width
from barstroke_core.symbologies import Codabar, validate_codabar


class CodabarValidationTests(unittest.TestCase):
    def test_text_with_start_and_stop_markers_validates(self) -> None:
        validate_codabar("A12-5B")
        symbol = Codabar("A12-5B", width=100.0, height=20.0)
        self.assertEqual(symbol.build_message(), "A12-5B")
        self.assertEqual(symbol.payload, "12-5")

    def test_character_outside_alphabet_is_rejected(self) -> None:
        with self.assertRaises(InvalidSymbolInputError):
            Codabar("A12#5B", width=100.0, height=20.0)

    def test_empty_and_none_are_rejected(self) -> None:
        for text in ("", None):
            with self.assertRaises(InvalidSymbolInputError):
                validate_codabar(text)

    def test_markers_only_at_the_ends_and_in_pairs(self) -> None:
        for text in ("12A5", "A125", "125D", "A"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidSymbolInputError):
                    validate_codabar(text)
        validate_codabar("C$:/.+D")

    def test_configured_markers_wrap_plain_text(self) -> None:
        symbol = Codabar("40156", width=50.0, height=10.0, start_char="C", stop_char="D")
        self.assertEqual(symbol.build_message(), "C40156D")
        self.assertEqual(Codabar("40156", width=50.0, height=10.0).build_message(), "A40156B")

    def test_invalid_parameters(self) -> None:
        with self.assertRaises(ValueError):
            Codabar("123", width=0.0, height=10.0)
        with self.assertRaises(ValueError):
            Codabar("123", width=10.0, height=10.0, wide_narrow_ratio=3.5)
        with self.assertRaises(ValueError):
            Codabar("123", width=10.0, height=10.0, direction="diagonal")
        with self.assertRaises(InvalidSymbolInputError):
            Codabar("123", width=10.0, height=10.0, start_char="E")


class CodabarEncodingTests(unittest.TestCase):
    def test_each_character_expands_to_seven_elements(self) -> None:
        symbol = Codabar("A1B", width=38.0, height=10.0)
        patterns = symbol.encode_pattern(symbol.build_message())
        self.assertEqual(patterns, ["0011010", "0000110", "0101001"])
        self.assertEqual(count_thick_thin(patterns), (8, 13))

    def test_thin_width_accounts_for_inter_character_gaps(self) -> None:
        patterns = ["0011010", "0000110", "0101001"]
        # (8 thick + 2 gaps) * 2.5 + 13 thin = 38 units
        self.assertAlmostEqual(thin_bar_width(patterns, 38.0, 2.5), 1.0)

    def test_element_positions(self) -> None:
        symbol = Codabar("1", width=38.0, height=10.0, wide_narrow_ratio=2.5)
        layout = symbol.layout((0.0, 0.0))
        metrics = layout.run.start.metrics
        self.assertIsInstance(metrics, ThickThinMetrics)
        self.assertAlmostEqual(metrics.thin_width, 1.0)
        self.assertEqual(len(layout.rects), 12)
        xs = [round(r.x, 9) for r in layout.rects[:5]]
        widths = [round(r.width, 9) for r in layout.rects[:5]]
        self.assertEqual(xs, [0.0, 2.0, 7.0, 10.5, 14.0])
        self.assertEqual(widths, [1.0, 2.5, 1.0, 1.0, 1.0])
        for rect in layout.rects:
            self.assertEqual((rect.y, rect.height), (0.0, 10.0))

    def test_elements_span_exactly_the_target_width(self) -> None:
        for text, width, ratio in (("A12-5B", 100.0, 2.6), ("0123456789", 73.3, 2.0), ("$:/.+", 12.5, 3.0)):
            with self.subTest(text=text):
                layout = Codabar(text, width=width, height=8.0, wide_narrow_ratio=ratio).layout((5.0, 7.0))
                self.assertAlmostEqual(layout.run.advance, width, places=9)
                self.assertAlmostEqual(layout.rects[-1].right, 5.0 + width, places=9)
                self.assertAlmostEqual(layout.local_bounds().width, width, places=9)

    def test_anchor_shifts_the_start(self) -> None:
        symbol = Codabar("1", width=38.0, height=10.0, anchor="middle_center")
        layout = symbol.layout((100.0, 50.0))
        self.assertEqual(layout.origin, (81.0, 45.0))
        self.assertEqual(layout.rotation.center, (100.0, 50.0))


if __name__ == "__main__":
    unittest.main()
