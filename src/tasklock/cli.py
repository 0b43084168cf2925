#!/usr/bin/env python3
"""
Command line entry point for TaskLock.
"""

import locale
import logging
import sys
from typing import List, Optional

from .config import get_config
from .sound_effects import SoundEffectsLibrary
from .storage import FocusStorage
from .utils import get_data_directory, get_sound_locations

logger = logging.getLogger(__name__)

USAGE = """TaskLock - focus reminder for the macOS menu bar
Usage: python -m tasklock [options]
Options:
  --quiet, -q            Only log warnings and errors
  --list-sounds          List available pulse sounds and exit
  --reset                Forget saved note text, pulse settings and window geometry
  --help, -h             Show this help message"""


def list_sounds(config) -> None:
    library = SoundEffectsLibrary.from_locations(
        get_sound_locations(config), config.default_sound_effect_id
    )
    storage = FocusStorage(str(get_data_directory(config)))
    selected = library.resolve(storage.sound_effect_id)

    for effect in library:
        marker = "*" if effect.id == selected else " "
        location = effect.locator if effect.locator is not None else "-"
        print(f"{marker} {effect.id:<24} {effect.display_name:<24} {location}")


def reset_preferences(config) -> None:
    storage = FocusStorage(str(get_data_directory(config)))
    storage.reset()
    print(f"Preferences reset ({storage.preferences_file})")


KNOWN_OPTIONS = ("--quiet", "-q", "--list-sounds", "--reset", "--help", "-h")


def use_system_collation() -> None:
    """Adopt the user's collation order so sound names sort like Finder."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("Keeping default collation: %s", e)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    unknown = [arg for arg in args if arg not in KNOWN_OPTIONS]
    if unknown:
        print(f"Unknown option: {unknown[0]}")
        print(USAGE)
        sys.exit(2)

    if "--help" in args or "-h" in args:
        print(USAGE)
        return

    use_system_collation()
    config = get_config()

    if "--quiet" in args or "-q" in args:
        config.verbose_logging = False
        config.set("log_level", "WARNING")

    if "--list-sounds" in args:
        list_sounds(config)
        return

    if "--reset" in args:
        reset_preferences(config)
        return

    from .menu_bar import main as run_menu_bar

    run_menu_bar(config)


if __name__ == "__main__":
    main()
