"""Tests for NSSound playback."""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.modules.setdefault("AppKit", MagicMock())

from tasklock import playback  # noqa: E402
from tasklock.playback import SoundEffectPlayer  # noqa: E402
from tasklock.sound_effects import NONE_SOUND_EFFECT, SoundEffect, SoundEffectsLibrary  # noqa: E402


class TestSoundEffectPlayer(unittest.TestCase):
    def setUp(self):
        self.library = SoundEffectsLibrary(
            (
                NONE_SOUND_EFFECT,
                SoundEffect("chime", "Chime", Path("/sounds/chime.mp3")),
                SoundEffect("sound_10", "Sound 10", None),
            ),
            default_id="sound_10",
        )
        self.sound_patch = patch.object(playback, "NSSound")
        self.mock_nssound = self.sound_patch.start()
        self.sound = self.mock_nssound.alloc.return_value.initWithContentsOfFile_byReference_.return_value
        self.player = SoundEffectPlayer(self.library)

    def tearDown(self):
        self.sound_patch.stop()

    def test_prepare_loads_once(self):
        self.player.prepare("chime")
        self.player.prepare("chime")

        self.mock_nssound.alloc.return_value.initWithContentsOfFile_byReference_.assert_called_once_with(
            "/sounds/chime.mp3", True
        )
        self.sound.setLoops_.assert_called_once_with(False)

    def test_play_restarts_from_beginning(self):
        self.player.play("chime")

        self.sound.stop.assert_called_once()
        self.sound.setCurrentTime_.assert_called_once_with(0)
        self.sound.play.assert_called_once()

    def test_silent_entries(self):
        for effect_id in ("none", "sound_10", "ghost"):
            self.player.play(effect_id)

        self.mock_nssound.alloc.assert_not_called()

    def test_unloadable_file_is_skipped(self):
        self.mock_nssound.alloc.return_value.initWithContentsOfFile_byReference_.return_value = None

        with self.assertLogs("tasklock.playback", level="WARNING"):
            self.player.play("chime")


if __name__ == "__main__":
    unittest.main()
