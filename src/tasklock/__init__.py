"""
TaskLock - a focus reminder that lives in the macOS menu bar.

Keeps a short note on screen and periodically pulses (visual + sound) to
pull attention back to it, remembering the note, pulse preferences and
window geometry across launches.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .controller import EditingMode, FocusController
from .debounce import DebounceTimer
from .events import Broadcast, PulseEvent
from .pulse import PulseScheduler, PulseState
from .sound_effects import SoundEffect, SoundEffectsLibrary, resolve_sound_effect_id
from .storage import FocusStorage

__all__ = [
    "Broadcast",
    "DebounceTimer",
    "EditingMode",
    "FocusController",
    "FocusStorage",
    "PulseEvent",
    "PulseScheduler",
    "PulseState",
    "SoundEffect",
    "SoundEffectsLibrary",
    "resolve_sound_effect_id",
]
