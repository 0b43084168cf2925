"""Tests for utils module functionality."""

import shutil
import tempfile
import unittest
from pathlib import Path

from tasklock.config import Config
from tasklock.utils import (
    BUNDLED_SOUNDS_DIR,
    SYSTEM_SOUNDS_DIR,
    get_data_directory,
    get_sound_locations,
)


class TestGetDataDirectory(unittest.TestCase):
    """Test cases for get_data_directory function."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config = Config(config_dir=self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_directory_exists_after_call(self):
        """Test that directory is created if it doesn't exist."""
        target = Path(self.temp_dir) / "data" / "nested"
        self.config.set("data_dir", str(target))

        result = get_data_directory(self.config)

        self.assertEqual(result, target)
        self.assertTrue(result.is_dir())


class TestGetSoundLocations(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config = Config(config_dir=self.temp_dir)
        self.config.set("data_dir", self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_default_order(self):
        locations = get_sound_locations(self.config)

        self.assertEqual(
            locations,
            [BUNDLED_SOUNDS_DIR, Path(self.temp_dir) / "sounds", SYSTEM_SOUNDS_DIR],
        )

    def test_configured_directories_precede_system_sounds(self):
        self.config.set("sound_directories", ["/opt/sounds"])

        locations = get_sound_locations(self.config)

        self.assertEqual(locations[2], Path("/opt/sounds"))
        self.assertEqual(locations[-1], SYSTEM_SOUNDS_DIR)


if __name__ == "__main__":
    unittest.main()
