#!/usr/bin/env python3
"""
Preference persistence for TaskLock.
Stores note text, pulse settings and window geometry as a JSON key/value file.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from . import layout
from .sound_effects import DEFAULT_SOUND_EFFECT_ID

logger = logging.getLogger(__name__)

PREFERENCES_FILENAME = "preferences.json"

DEFAULT_FOCUS_TEXT = "Stay locked in."
DEFAULT_PULSE_INTERVAL = 60.0
DEFAULT_PULSE_INTENSITY = 1.0
DEFAULT_PULSE_RANGE = 0.5
DEFAULT_TEXT_HEIGHT = layout.MIN_TEXT_HEIGHT


class Keys:
    FOCUS_TEXT = "focusText"
    PULSE_INTERVAL = "pulseInterval"
    PULSE_INTENSITY = "pulseIntensity"
    PULSE_RANGE = "pulseRange"
    SOUND_EFFECT_ID = "soundEffectID"
    WINDOW_HEIGHT = "windowHeight"
    TEXT_HEIGHT = "textHeight"
    WINDOW_ORIGIN_X = "windowOriginX"
    WINDOW_ORIGIN_Y = "windowOriginY"


def _as_number(value: Any) -> Optional[float]:
    """Return a finite float for numeric values, None otherwise."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _is_unit(value: float) -> bool:
    return 0 <= value <= 1


class FocusStorage:
    """Key/value preference store backed by a JSON file.

    Getters never fail: absent, malformed or out-of-range values fall back
    to the documented defaults. Each ``save_*`` call writes through.
    """

    default_focus_text = DEFAULT_FOCUS_TEXT
    default_pulse_interval = DEFAULT_PULSE_INTERVAL
    default_pulse_intensity = DEFAULT_PULSE_INTENSITY
    default_pulse_range = DEFAULT_PULSE_RANGE
    default_sound_effect_id = DEFAULT_SOUND_EFFECT_ID
    default_text_height = DEFAULT_TEXT_HEIGHT

    def __init__(self, data_dir: str, filename: str = PREFERENCES_FILENAME):
        """Initialize the store.

        Args:
            data_dir: Directory holding the preferences file
            filename: Name of the preferences file
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.preferences_file = self.data_dir / filename
        self._values = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.preferences_file.exists():
            return {}

        try:
            with open(self.preferences_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load preferences, using defaults: %s", e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed preferences file %s", self.preferences_file)
            return {}
        return data

    def _write(self) -> None:
        try:
            with open(self.preferences_file, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save preferences: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._write()

    def contains(self, key: str) -> bool:
        return key in self._values

    def _number(self, key: str, accept: Callable[[float], bool]) -> Optional[float]:
        raw = self.get(key)
        if raw is None:
            return None
        number = _as_number(raw)
        if number is None or not accept(number):
            logger.debug("Ignoring invalid %s: %r", key, raw)
            return None
        return number

    # Preferences

    @property
    def focus_text(self) -> str:
        stored = self.get(Keys.FOCUS_TEXT)
        return stored if isinstance(stored, str) else self.default_focus_text

    def save_focus_text(self, text: str) -> None:
        self.set(Keys.FOCUS_TEXT, text)

    @property
    def pulse_interval(self) -> float:
        stored = self._number(Keys.PULSE_INTERVAL, lambda v: v > 0)
        return self.default_pulse_interval if stored is None else stored

    def save_pulse_interval(self, interval: float) -> None:
        self.set(Keys.PULSE_INTERVAL, float(interval))

    @property
    def pulse_intensity(self) -> float:
        stored = self._number(Keys.PULSE_INTENSITY, _is_unit)
        return self.default_pulse_intensity if stored is None else stored

    def save_pulse_intensity(self, intensity: float) -> None:
        self.set(Keys.PULSE_INTENSITY, float(intensity))

    @property
    def pulse_range(self) -> float:
        stored = self._number(Keys.PULSE_RANGE, _is_unit)
        return self.default_pulse_range if stored is None else stored

    def save_pulse_range(self, pulse_range: float) -> None:
        self.set(Keys.PULSE_RANGE, float(pulse_range))

    @property
    def sound_effect_id(self) -> str:
        stored = self.get(Keys.SOUND_EFFECT_ID)
        return stored if isinstance(stored, str) and stored else self.default_sound_effect_id

    def save_sound_effect_id(self, identifier: str) -> None:
        self.set(Keys.SOUND_EFFECT_ID, identifier)

    # Geometry

    @property
    def stored_window_height(self) -> Optional[float]:
        return self._number(Keys.WINDOW_HEIGHT, lambda v: v > 0)

    def save_window_height(self, height: float) -> None:
        self.set(Keys.WINDOW_HEIGHT, float(height))

    @property
    def text_height(self) -> float:
        stored = self._number(Keys.TEXT_HEIGHT, lambda v: v > 0)
        return self.default_text_height if stored is None else stored

    def save_text_height(self, height: float) -> None:
        self.set(Keys.TEXT_HEIGHT, float(height))

    @property
    def window_origin(self) -> Optional[Tuple[float, float]]:
        """Saved window origin, or None unless both coordinates are stored."""
        x = self._number(Keys.WINDOW_ORIGIN_X, math.isfinite)
        y = self._number(Keys.WINDOW_ORIGIN_Y, math.isfinite)
        if x is None or y is None:
            return None
        return (x, y)

    def save_window_origin(self, x: float, y: float) -> None:
        self._values[Keys.WINDOW_ORIGIN_X] = float(x)
        self._values[Keys.WINDOW_ORIGIN_Y] = float(y)
        self._write()

    def reset(self) -> None:
        """Forget every stored preference."""
        self._values = {}
        self._write()
