#!/usr/bin/env python3
"""
Window and note geometry bounds for TaskLock.
Pure helpers that keep heights inside the supported range.
"""

import math

# Window & text constraints
WINDOW_WIDTH = 360.0
MIN_WINDOW_HEIGHT = 86.0
MAX_WINDOW_HEIGHT = 520.0
DEFAULT_WINDOW_HEIGHT = 140.0

MIN_TEXT_HEIGHT = 34.0
MAX_TEXT_HEIGHT = 420.0

# Non-text chrome (header, padding) around the note editor
WINDOW_CHROME_PADDING = DEFAULT_WINDOW_HEIGHT - MIN_TEXT_HEIGHT

# Sub-pixel layout noise below this is not worth persisting
HEIGHT_EPSILON = 0.5

STARTUP_GRACE_PERIOD = 0.5  # seconds


def _clamp(value: float, lower: float, upper: float) -> float:
    value = float(value)
    if math.isnan(value):
        return lower
    return max(lower, min(upper, value))


def clamp_window_height(value: float) -> float:
    """Clamp a window height to [MIN_WINDOW_HEIGHT, MAX_WINDOW_HEIGHT]."""
    return _clamp(value, MIN_WINDOW_HEIGHT, MAX_WINDOW_HEIGHT)


def clamp_text_height(value: float) -> float:
    """Clamp a note text height to [MIN_TEXT_HEIGHT, MAX_TEXT_HEIGHT]."""
    return _clamp(value, MIN_TEXT_HEIGHT, MAX_TEXT_HEIGHT)


def estimated_window_height(text_height: float) -> float:
    """Window height needed to show a note of the given text height."""
    return clamp_window_height(text_height + WINDOW_CHROME_PADDING)


def exceeds_epsilon(new_value: float, old_value: float) -> bool:
    return abs(new_value - old_value) > HEIGHT_EPSILON
