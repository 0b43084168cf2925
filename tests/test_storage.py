"""Tests for JSON preference storage."""

import json
from pathlib import Path

import pytest

from tasklock.storage import (
    DEFAULT_FOCUS_TEXT,
    DEFAULT_PULSE_INTENSITY,
    DEFAULT_PULSE_INTERVAL,
    DEFAULT_PULSE_RANGE,
    DEFAULT_TEXT_HEIGHT,
    FocusStorage,
    Keys,
)


def write_preferences(temp_dir, values):
    path = Path(temp_dir) / "preferences.json"
    path.write_text(json.dumps(values), encoding="utf-8")
    return path


class TestDefaults:
    def test_empty_store_returns_defaults(self, storage):
        assert storage.focus_text == DEFAULT_FOCUS_TEXT == "Stay locked in."
        assert storage.pulse_interval == DEFAULT_PULSE_INTERVAL == 60.0
        assert storage.pulse_intensity == DEFAULT_PULSE_INTENSITY == 1.0
        assert storage.pulse_range == DEFAULT_PULSE_RANGE == 0.5
        assert storage.sound_effect_id == "glass"
        assert storage.stored_window_height is None
        assert storage.text_height == DEFAULT_TEXT_HEIGHT
        assert storage.window_origin is None

    def test_corrupt_file_falls_back_to_defaults(self, temp_dir, caplog):
        (Path(temp_dir) / "preferences.json").write_text("{not json", encoding="utf-8")

        storage = FocusStorage(temp_dir)

        assert storage.focus_text == DEFAULT_FOCUS_TEXT
        assert "Could not load preferences" in caplog.text

    def test_non_object_file_is_ignored(self, temp_dir):
        write_preferences(temp_dir, ["not", "a", "dict"])
        assert FocusStorage(temp_dir).pulse_interval == DEFAULT_PULSE_INTERVAL


class TestValidation:
    @pytest.mark.parametrize("stored", [0, -10, "60", True, None])
    def test_invalid_interval(self, temp_dir, stored):
        write_preferences(temp_dir, {Keys.PULSE_INTERVAL: stored})
        assert FocusStorage(temp_dir).pulse_interval == DEFAULT_PULSE_INTERVAL

    @pytest.mark.parametrize("stored", [-0.1, 1.5, "loud"])
    def test_invalid_intensity(self, temp_dir, stored):
        write_preferences(temp_dir, {Keys.PULSE_INTENSITY: stored})
        assert FocusStorage(temp_dir).pulse_intensity == DEFAULT_PULSE_INTENSITY

    def test_zero_intensity_is_valid(self, temp_dir):
        write_preferences(temp_dir, {Keys.PULSE_INTENSITY: 0})
        assert FocusStorage(temp_dir).pulse_intensity == 0.0

    @pytest.mark.parametrize("stored", [-1, 2])
    def test_invalid_range(self, temp_dir, stored):
        write_preferences(temp_dir, {Keys.PULSE_RANGE: stored})
        assert FocusStorage(temp_dir).pulse_range == DEFAULT_PULSE_RANGE

    @pytest.mark.parametrize("stored", ["", 42])
    def test_invalid_sound_id(self, temp_dir, stored):
        write_preferences(temp_dir, {Keys.SOUND_EFFECT_ID: stored})
        assert FocusStorage(temp_dir).sound_effect_id == "glass"

    def test_non_string_focus_text(self, temp_dir):
        write_preferences(temp_dir, {Keys.FOCUS_TEXT: 12})
        assert FocusStorage(temp_dir).focus_text == DEFAULT_FOCUS_TEXT

    def test_empty_focus_text_is_kept(self, temp_dir):
        write_preferences(temp_dir, {Keys.FOCUS_TEXT: ""})
        assert FocusStorage(temp_dir).focus_text == ""

    @pytest.mark.parametrize("stored", [0, -4, "tall"])
    def test_invalid_heights(self, temp_dir, stored):
        write_preferences(temp_dir, {Keys.WINDOW_HEIGHT: stored, Keys.TEXT_HEIGHT: stored})
        storage = FocusStorage(temp_dir)
        assert storage.stored_window_height is None
        assert storage.text_height == DEFAULT_TEXT_HEIGHT

    def test_origin_requires_both_coordinates(self, temp_dir):
        write_preferences(temp_dir, {Keys.WINDOW_ORIGIN_X: 10})
        assert FocusStorage(temp_dir).window_origin is None


class TestPersistence:
    def test_saved_values_survive_reload(self, temp_dir, storage):
        storage.save_focus_text("Write the report")
        storage.save_pulse_interval(120)
        storage.save_pulse_intensity(0.25)
        storage.save_pulse_range(0.75)
        storage.save_sound_effect_id("chime")
        storage.save_window_height(240)
        storage.save_text_height(80)
        storage.save_window_origin(12.5, -40)

        reloaded = FocusStorage(temp_dir)

        assert reloaded.focus_text == "Write the report"
        assert reloaded.pulse_interval == 120.0
        assert reloaded.pulse_intensity == 0.25
        assert reloaded.pulse_range == 0.75
        assert reloaded.sound_effect_id == "chime"
        assert reloaded.stored_window_height == 240.0
        assert reloaded.text_height == 80.0
        assert reloaded.window_origin == (12.5, -40.0)

    def test_file_uses_stable_keys(self, temp_dir, storage):
        storage.save_pulse_interval(30)
        storage.save_window_origin(1, 2)

        data = json.loads((Path(temp_dir) / "preferences.json").read_text(encoding="utf-8"))

        assert data == {"pulseInterval": 30.0, "windowOriginX": 1.0, "windowOriginY": 2.0}

    def test_contains_and_get(self, storage):
        assert not storage.contains(Keys.FOCUS_TEXT)
        storage.set(Keys.FOCUS_TEXT, "x")
        assert storage.contains(Keys.FOCUS_TEXT)
        assert storage.get(Keys.FOCUS_TEXT) == "x"
        assert storage.get("missing", "fallback") == "fallback"

    def test_reset(self, temp_dir, storage):
        storage.save_focus_text("Temporary")
        storage.reset()

        assert storage.focus_text == DEFAULT_FOCUS_TEXT
        assert FocusStorage(temp_dir).focus_text == DEFAULT_FOCUS_TEXT

    def test_creates_data_directory(self, temp_dir):
        nested = Path(temp_dir) / "a" / "b"
        FocusStorage(str(nested)).save_focus_text("hi")
        assert (nested / "preferences.json").exists()
