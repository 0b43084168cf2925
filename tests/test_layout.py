"""Tests for window and text height clamping."""

import math
import unittest

from tasklock import layout


class TestClamp(unittest.TestCase):
    """Test cases for the height clamps."""

    def test_clamp_window_height(self):
        cases = [
            (10.0, layout.MIN_WINDOW_HEIGHT),
            (200.0, 200.0),
            (9999.0, layout.MAX_WINDOW_HEIGHT),
            (-50.0, layout.MIN_WINDOW_HEIGHT),
            (math.inf, layout.MAX_WINDOW_HEIGHT),
            (-math.inf, layout.MIN_WINDOW_HEIGHT),
            (math.nan, layout.MIN_WINDOW_HEIGHT),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(layout.clamp_window_height(raw), expected)

    def test_clamp_text_height(self):
        cases = [
            (0.0, layout.MIN_TEXT_HEIGHT),
            (120.5, 120.5),
            (1000.0, layout.MAX_TEXT_HEIGHT),
            (math.nan, layout.MIN_TEXT_HEIGHT),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(layout.clamp_text_height(raw), expected)

    def test_clamp_is_idempotent(self):
        for raw in (-1e9, 0.0, 86.0, 300.0, 520.0, 1e9, math.nan, math.inf):
            with self.subTest(raw=raw):
                once = layout.clamp_window_height(raw)
                self.assertEqual(layout.clamp_window_height(once), once)
                text_once = layout.clamp_text_height(raw)
                self.assertEqual(layout.clamp_text_height(text_once), text_once)

    def test_non_numeric_input_raises(self):
        with self.assertRaises(ValueError):
            layout.clamp_window_height("tall")
        with self.assertRaises(TypeError):
            layout.clamp_text_height(None)


class TestEstimatedWindowHeight(unittest.TestCase):
    """Test cases for deriving the window height from the note height."""

    def test_adds_chrome_padding(self):
        self.assertEqual(layout.WINDOW_CHROME_PADDING, 106.0)
        self.assertEqual(
            layout.estimated_window_height(layout.MIN_TEXT_HEIGHT), layout.DEFAULT_WINDOW_HEIGHT
        )
        self.assertEqual(layout.estimated_window_height(100.0), 206.0)

    def test_result_is_clamped(self):
        self.assertEqual(
            layout.estimated_window_height(layout.MAX_TEXT_HEIGHT), layout.MAX_WINDOW_HEIGHT
        )
        self.assertEqual(layout.estimated_window_height(-500.0), layout.MIN_WINDOW_HEIGHT)

    def test_exceeds_epsilon(self):
        self.assertFalse(layout.exceeds_epsilon(100.4, 100.0))
        self.assertFalse(layout.exceeds_epsilon(100.5, 100.0))
        self.assertTrue(layout.exceeds_epsilon(100.6, 100.0))
        self.assertTrue(layout.exceeds_epsilon(99.0, 100.0))


if __name__ == "__main__":
    unittest.main()
