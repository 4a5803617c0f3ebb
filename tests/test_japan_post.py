from __future__ import annotations

import unittest

from barstroke_core.checkdigit import verify
from barstroke_core.errors import InvalidHeightLevelError, InvalidSymbolInputError
from barstroke_core.geometry import FourStateMetrics, RenderCursor
from barstroke_core.render.bars import bar_height, bar_offset, render_four_state
from barstroke_core.symbologies import JapanPostBarcode, build_japan_post_message, transliterate
from barstroke_core.symbols import CC1, CC2, CC3, CC4
from barstroke_core.units import mm


class JapanPostMessageTests(unittest.TestCase):
    def test_fullwidth_address_scenario(self) -> None:
        symbol = JapanPostBarcode("1000001", "１丁目２−３")
        self.assertEqual(symbol.address_number, "1-2-3")
        message = symbol.build_message()
        self.assertEqual(message, "[" + "10000011-2-3" + CC4 * 8 + CC2 + "]")

    def test_short_payload_is_padded_to_twenty(self) -> None:
        message = build_japan_post_message("1000001")
        self.assertEqual(len(message), 23)
        self.assertEqual(message[1:21], "1000001" + CC4 * 13)
        self.assertTrue(verify(message[1:22]))

    def test_long_payload_is_truncated_to_twenty(self) -> None:
        with self.assertLogs("barstroke_core.symbologies.japan_post", level="WARNING"):
            message = build_japan_post_message("1000001" + "1234567890123456")
        self.assertEqual(message[1:21], "10000011234567890123")
        self.assertEqual(len(message), 23)
        self.assertTrue(verify(message[1:22]))

    def test_letters_use_control_codes(self) -> None:
        self.assertEqual(transliterate("A"), CC1 + "0")
        self.assertEqual(transliterate("J"), CC1 + "9")
        self.assertEqual(transliterate("K"), CC2 + "0")
        self.assertEqual(transliterate("Z"), CC3 + "5")
        self.assertEqual(transliterate("1-$"), "1-" + CC4)

    def test_letter_expansion_counts_against_the_field(self) -> None:
        symbol = JapanPostBarcode("1000001", "B棟101号室")
        self.assertEqual(symbol.address_number, "B101")
        message = symbol.build_message()
        self.assertEqual(message[1:21], "1000001" + CC1 + "1" + "101" + CC4 * 8)

    def test_start_stop_characters_in_text_are_ignored(self) -> None:
        self.assertEqual(build_japan_post_message("[1000001]"), build_japan_post_message("1000001"))

    def test_zip_must_be_seven_ascii_digits(self) -> None:
        for zip_code in (None, "", "100000", "10000011", "100-0001", "１０００００１"):
            with self.subTest(zip_code=zip_code):
                with self.assertRaises(InvalidSymbolInputError):
                    JapanPostBarcode(zip_code, "1-2-3")  # type: ignore[arg-type]


class FourStateGeometryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.metrics = FourStateMetrics(track_height=2.0, ascender_height=1.0, bar_width=0.5, bar_space=0.5)

    def test_heights_per_level(self) -> None:
        self.assertEqual([bar_height(level, self.metrics) for level in range(4)], [2.0, 3.0, 3.0, 4.0])

    def test_offsets_share_the_track_centerline(self) -> None:
        self.assertEqual([bar_offset(level, self.metrics) for level in range(4)], [0.0, -1.0, 0.0, -1.0])
        for level in range(4):
            top = bar_offset(level, self.metrics)
            bottom = top + bar_height(level, self.metrics)
            self.assertLessEqual(top, 0.0)
            self.assertGreaterEqual(bottom, self.metrics.track_height)

    def test_level_outside_range_is_fatal(self) -> None:
        for level in (-1, 4):
            with self.assertRaises(InvalidHeightLevelError):
                bar_height(level, self.metrics)
            with self.assertRaises(InvalidHeightLevelError):
                bar_offset(level, self.metrics)

    def test_bad_pattern_symbol_is_reported(self) -> None:
        cursor = RenderCursor(x=0.0, y=0.0, metrics=self.metrics)
        with self.assertRaises(InvalidHeightLevelError) as ctx:
            render_four_state(["13", "1x3"], cursor)
        self.assertEqual(ctx.exception.level, "x")
        self.assertIn("'x'", str(ctx.exception))

    def test_symbol_has_67_bars_at_fixed_pitch(self) -> None:
        symbol = JapanPostBarcode("1000001", "１丁目２−３")
        layout = symbol.layout((0.0, 0.0))
        self.assertEqual(len(layout.patterns), 23)
        self.assertEqual(len(layout.rects), 67)
        pitch = mm(0.6) + mm(0.6)
        for i, rect in enumerate(layout.rects):
            self.assertAlmostEqual(rect.x, i * pitch, places=9)
            self.assertAlmostEqual(rect.width, mm(0.6), places=9)
        self.assertAlmostEqual(layout.run.advance, symbol.size[0], places=9)
        self.assertAlmostEqual(symbol.size[1], mm(3.6), places=9)

    def test_anchor_box_matches_drawn_bars(self) -> None:
        position = (50.0, 20.0)
        top_left = JapanPostBarcode("1000001", "１丁目２−３", anchor="top_left").layout(position).local_bounds()
        self.assertAlmostEqual(top_left.x, 50.0, places=9)
        self.assertAlmostEqual(top_left.y, 20.0, places=9)
        self.assertAlmostEqual(top_left.height, mm(3.6), places=9)

        centred = JapanPostBarcode("1000001", "１丁目２−３", anchor="middle_center").layout(position).local_bounds()
        self.assertAlmostEqual(centred.x + centred.width / 2 + mm(0.6) / 2, 50.0, places=9)
        self.assertAlmostEqual(centred.y + centred.height / 2, 20.0, places=9)

    def test_layout_logs_bar_and_element_counts(self) -> None:
        with self.assertLogs("barstroke_core.symbologies.base", level="DEBUG") as logs:
            layout = JapanPostBarcode("1000001").layout((0.0, 0.0))
        self.assertEqual(layout.run.end.elements, 134)
        self.assertIn("67 bars in 134 elements", "\n".join(logs.output))

    def test_start_character_bars(self) -> None:
        layout = JapanPostBarcode("1000001").layout((0.0, 0.0))
        full, descender = layout.rects[0], layout.rects[1]
        self.assertAlmostEqual(full.y, 0.0, places=9)
        self.assertAlmostEqual(full.height, mm(3.6), places=9)
        self.assertAlmostEqual(descender.y, mm(1.2), places=9)
        self.assertAlmostEqual(descender.height, mm(2.4), places=9)


if __name__ == "__main__":
    unittest.main()
