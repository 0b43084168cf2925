#!/usr/bin/env python3
"""
Sound effect playback for TaskLock pulses.
"""

import logging
from typing import Dict, Optional

try:
    from AppKit import NSSound
except ImportError:
    print(
        "Error: pyobjc-framework-Cocoa not installed. "
        "Run: pip install pyobjc-framework-Cocoa"
    )
    exit(1)

from .sound_effects import NONE_SOUND_EFFECT_ID, SoundEffectsLibrary

logger = logging.getLogger(__name__)


class SoundEffectPlayer:
    """Plays catalog sounds with NSSound, caching one instance per effect id."""

    def __init__(self, library: SoundEffectsLibrary):
        self.library = library
        self._sounds: Dict[str, object] = {}

    def prepare(self, effect_id: str) -> None:
        """Load the sound ahead of its first pulse."""
        self._sound_for(effect_id)

    def play(self, effect_id: str) -> None:
        """Play from the start; "none" and unknown ids are silent."""
        sound = self._sound_for(effect_id)
        if sound is None:
            return
        sound.stop()
        sound.setCurrentTime_(0)
        sound.play()

    def _sound_for(self, effect_id: str) -> Optional[object]:
        cached = self._sounds.get(effect_id)
        if cached is not None:
            return cached

        effect = self.library.effect(effect_id)
        if effect is None or effect.id == NONE_SOUND_EFFECT_ID or effect.locator is None:
            return None

        sound = NSSound.alloc().initWithContentsOfFile_byReference_(
            str(effect.locator), True
        )
        if sound is None:
            logger.warning("Could not load sound %s", effect.locator)
            return None
        sound.setLoops_(False)
        self._sounds[effect_id] = sound
        return sound
