#!/usr/bin/env python3
"""
Filesystem helpers for TaskLock.
"""

from pathlib import Path
from typing import List, Optional

from .config import Config, get_config

SYSTEM_SOUNDS_DIR = Path("/System/Library/Sounds")
BUNDLED_SOUNDS_DIR = Path(__file__).parent / "sound_effects"


def get_data_directory(config: Optional[Config] = None) -> Path:
    """Directory for preferences, user sounds and logs; created on demand."""
    config = config or get_config()
    data_dir = config.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_sound_locations(config: Optional[Config] = None) -> List[Path]:
    """Directories scanned for pulse sounds, in priority order.

    Bundled sounds come first, then the user's ``sounds`` folder, any
    configured directories, and finally the macOS system sounds.
    """
    config = config or get_config()
    locations = [BUNDLED_SOUNDS_DIR, config.data_dir / "sounds"]
    locations.extend(config.sound_directories)
    locations.append(SYSTEM_SOUNDS_DIR)
    return locations
