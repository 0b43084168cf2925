#!/usr/bin/env python3
"""
Focus controller for TaskLock.
Owns note and pulse preferences, drives pulses and coalesces persistence.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from . import layout
from .debounce import (
    FOCUS_TEXT_DEBOUNCE,
    WINDOW_HEIGHT_SETTLE,
    WINDOW_POSITION_DEBOUNCE,
    DebounceTimer,
)
from .events import Broadcast, EditorRequest, PulseEvent
from .logging_utils import FocusLogger
from .pulse import PulseScheduler
from .sound_effects import SoundEffect, SoundEffectsLibrary
from .storage import (
    DEFAULT_FOCUS_TEXT,
    DEFAULT_PULSE_INTENSITY,
    DEFAULT_PULSE_INTERVAL,
    DEFAULT_PULSE_RANGE,
    FocusStorage,
)

logger = logging.getLogger(__name__)


class EditingMode(Enum):
    EDITING = "editing"
    VIEWING = "viewing"


class StartupPhase(Enum):
    STARTING_UP = "starting_up"
    STEADY = "steady"


@dataclass
class FocusPreferences:
    focus_text: str
    pulse_interval: float
    pulse_intensity: float
    pulse_range: float
    sound_effect_id: str


@dataclass
class WindowGeometry:
    view_height: float
    text_height: float
    origin: Optional[Tuple[float, float]] = None


def _clamp_unit(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


class FocusController:
    """
    Orchestrates the note, pulse and persistence components.

    All methods must be called from the thread that owns ``scheduler``
    (the main run loop in the app); timer callbacks arrive there as well.
    """

    def __init__(
        self,
        storage: FocusStorage,
        scheduler: Any,
        library: SoundEffectsLibrary,
        player: Any,
        pulse_scheduler: Optional[PulseScheduler] = None,
        verbose: bool = True,
        focus_text_debounce: float = FOCUS_TEXT_DEBOUNCE,
        window_position_debounce: float = WINDOW_POSITION_DEBOUNCE,
        window_height_settle: float = WINDOW_HEIGHT_SETTLE,
        startup_grace_period: float = layout.STARTUP_GRACE_PERIOD,
    ):
        """
        Load persisted state and wire the pulse stream.

        Args:
            storage: Preference store
            scheduler: Provides ``call_later`` and ``call_repeating``; when it also
                has ``call_soon``, pulse observers run on a later loop pass
            library: Sound effect catalog
            player: Provides ``prepare(effect_id)`` and ``play(effect_id)``
            pulse_scheduler: Recurring pulse timer; built on ``scheduler`` if omitted
            verbose (bool): Report lifecycle events through FocusLogger
            focus_text_debounce (float): Quiet period before note text is saved
            window_position_debounce (float): Quiet period before the origin is saved
            window_height_settle (float): Coalescing delay for height observers
            startup_grace_period (float): Seconds during which window heights are not saved
        """
        self.storage = storage
        self.scheduler = scheduler
        self.library = library
        self.player = player
        self.pulse_scheduler = pulse_scheduler or PulseScheduler(scheduler)
        self.focus_logger = FocusLogger(verbose=verbose)
        self.startup_grace_period = startup_grace_period

        # Pulse observers may animate or play audio; keep them off the timer tick
        self.pulse_events: Broadcast[PulseEvent] = Broadcast(
            "pulse_events", dispatch=getattr(scheduler, "call_soon", None)
        )
        self.view_height_changes: Broadcast[float] = Broadcast("view_height_changes")
        self.editor_requests: Broadcast[EditorRequest] = Broadcast("editor_requests")

        self._text_saver: DebounceTimer[str] = DebounceTimer(
            scheduler, focus_text_debounce, self._persist_focus_text, name="focus text"
        )
        self._position_saver: DebounceTimer[Tuple[float, float]] = DebounceTimer(
            scheduler,
            window_position_debounce,
            self._persist_window_origin,
            name="window position",
        )
        self._height_settler: DebounceTimer[float] = DebounceTimer(
            scheduler, window_height_settle, self.view_height_changes.emit, name="window height"
        )

        self._editing_mode = EditingMode.EDITING
        self._startup_phase = StartupPhase.STARTING_UP
        self._startup_handle: Optional[Any] = None
        self._is_pulse_active = False
        self._has_handled_initial_pulse = False
        self._started = False
        self._pulse_event_id: Optional[uuid.UUID] = None
        self._requested_focus_id = uuid.uuid4()
        self._requested_blur_id = uuid.uuid4()

        self.preferences = FocusPreferences(
            focus_text=storage.focus_text,
            pulse_interval=storage.pulse_interval,
            pulse_intensity=storage.pulse_intensity,
            pulse_range=storage.pulse_range,
            sound_effect_id=library.default_id,
        )

        text_height = layout.clamp_text_height(storage.text_height)
        stored_window_height = storage.stored_window_height
        if stored_window_height is None:
            stored_window_height = layout.estimated_window_height(text_height)
        self.geometry = WindowGeometry(
            view_height=layout.clamp_window_height(stored_window_height),
            text_height=text_height,
            origin=storage.window_origin,
        )

        stored_sound_id = storage.sound_effect_id
        resolved_sound_id = library.resolve(stored_sound_id)
        self.preferences.sound_effect_id = resolved_sound_id
        if resolved_sound_id != stored_sound_id:
            self.focus_logger.log_sound_healed(stored_sound_id, resolved_sound_id)
            storage.save_sound_effect_id(resolved_sound_id)
        player.prepare(resolved_sound_id)

        self._unsubscribe_pulses = self.pulse_scheduler.pulses.subscribe(self._handle_pulse)

    # Lifecycle

    def start(self) -> None:
        """Activate pulses and begin the startup grace period. Runs once."""
        if self._started:
            return
        self._started = True
        self._request_editor("focus")
        self.set_pulse_active(True)
        self._startup_handle = self.scheduler.call_later(
            self.startup_grace_period, self.end_startup_phase
        )
        self.focus_logger.log_startup(
            self.pulse_interval, self.sound_effect_id, len(self.library) - 1
        )

    def end_startup_phase(self) -> None:
        """Allow window height changes to be persisted from now on."""
        handle = self._startup_handle
        self._startup_handle = None
        if handle is not None:
            handle.cancel()
        if self._startup_phase is StartupPhase.STEADY:
            return
        self._startup_phase = StartupPhase.STEADY
        logger.debug("Startup grace period ended")

    def shutdown(self) -> None:
        """Stop pulses, cancel timers and write out anything still pending."""
        if self._startup_handle is not None:
            self._startup_handle.cancel()
            self._startup_handle = None
        self.set_pulse_active(False)
        self.flush_pending_focus_text_save()
        self.flush_pending_window_position_save()
        self._height_settler.cancel()
        self._unsubscribe_pulses()
        self.focus_logger.log_shutdown()

    # Read-only state

    @property
    def focus_text(self) -> str:
        return self.preferences.focus_text

    @property
    def pulse_interval(self) -> float:
        return self.preferences.pulse_interval

    @property
    def pulse_intensity(self) -> float:
        return self.preferences.pulse_intensity

    @property
    def pulse_range(self) -> float:
        return self.preferences.pulse_range

    @property
    def sound_effect_id(self) -> str:
        return self.preferences.sound_effect_id

    @property
    def sound_effects(self) -> Tuple[SoundEffect, ...]:
        return self.library.effects

    @property
    def view_height(self) -> float:
        return self.geometry.view_height

    @property
    def text_height(self) -> float:
        return self.geometry.text_height

    @property
    def window_origin(self) -> Optional[Tuple[float, float]]:
        return self.geometry.origin

    @property
    def editing_mode(self) -> EditingMode:
        return self._editing_mode

    @property
    def is_editing(self) -> bool:
        return self._editing_mode is EditingMode.EDITING

    @property
    def is_pulse_active(self) -> bool:
        return self._is_pulse_active

    @property
    def is_in_startup_phase(self) -> bool:
        return self._startup_phase is StartupPhase.STARTING_UP

    @property
    def pulse_event_id(self) -> Optional[uuid.UUID]:
        return self._pulse_event_id

    @property
    def requested_focus_id(self) -> uuid.UUID:
        return self._requested_focus_id

    @property
    def requested_blur_id(self) -> uuid.UUID:
        return self._requested_blur_id

    # Preference setters

    def set_focus_text(self, text: str) -> None:
        if text == self.preferences.focus_text:
            return
        self.preferences.focus_text = text
        self._text_saver.push(text)

    def set_pulse_interval(self, seconds: float) -> None:
        """Persist immediately and restart the pulse period if pulses are active."""
        seconds = float(seconds)
        if not math.isfinite(seconds):
            logger.warning("Ignoring non-finite pulse interval %r", seconds)
            return
        if seconds == self.preferences.pulse_interval:
            return
        self.preferences.pulse_interval = seconds
        self.storage.save_pulse_interval(seconds)
        if self._is_pulse_active:
            self.pulse_scheduler.schedule(seconds)

    def set_sound_effect_id(self, candidate: str) -> None:
        """Select a sound; unknown ids resolve through the catalog fallbacks."""
        resolved = self.library.resolve(candidate)
        if resolved == self.preferences.sound_effect_id:
            return
        self.preferences.sound_effect_id = resolved
        self.storage.save_sound_effect_id(resolved)
        self.player.prepare(resolved)

    def set_pulse_intensity(self, value: float) -> None:
        value = _clamp_unit(value)
        if value == self.preferences.pulse_intensity:
            return
        self.preferences.pulse_intensity = value
        self.storage.save_pulse_intensity(value)

    def set_pulse_range(self, value: float) -> None:
        value = _clamp_unit(value)
        if value == self.preferences.pulse_range:
            return
        self.preferences.pulse_range = value
        self.storage.save_pulse_range(value)

    def reset_defaults(self) -> None:
        """Restore built-in defaults through the regular setters."""
        self.set_pulse_interval(DEFAULT_PULSE_INTERVAL)
        self.set_pulse_intensity(DEFAULT_PULSE_INTENSITY)
        self.set_pulse_range(DEFAULT_PULSE_RANGE)
        self.set_sound_effect_id(self.library.default_id)
        self.set_focus_text(DEFAULT_FOCUS_TEXT)

    def preview_selected_sound(self) -> None:
        self.player.play(self.preferences.sound_effect_id)

    # Geometry

    def update_content_height(self, raw_height: float) -> None:
        clamped = layout.clamp_window_height(raw_height)
        if not layout.exceeds_epsilon(clamped, self.geometry.view_height):
            return
        self.geometry.view_height = clamped
        self._height_settler.push(clamped)

        # Initial layout passes settle during startup and are not user intent
        if not self.is_in_startup_phase:
            self.storage.save_window_height(clamped)

    def update_text_height_cache(self, raw_height: float) -> None:
        clamped = layout.clamp_text_height(raw_height)
        if not layout.exceeds_epsilon(clamped, self.geometry.text_height):
            return
        self.geometry.text_height = clamped
        self.storage.save_text_height(clamped)

    def save_window_position(self, x: float, y: float) -> None:
        origin = (float(x), float(y))
        self.geometry.origin = origin
        self._position_saver.push(origin)

    # Editing mode

    def begin_editing(self) -> None:
        if self._editing_mode is EditingMode.EDITING:
            return
        self._editing_mode = EditingMode.EDITING
        self._request_editor("focus")

    def commit_editing(self) -> None:
        """Leave editing mode; pending note text is saved before returning."""
        if self._editing_mode is not EditingMode.EDITING:
            return
        self._editing_mode = EditingMode.VIEWING
        self._request_editor("blur")
        self.flush_pending_focus_text_save()

    # Pulses

    def set_pulse_active(self, active: bool) -> None:
        """Resume or suspend pulses.

        The first pulse after each activation is silent; later pulses play
        the selected sound.
        """
        if active == self._is_pulse_active:
            return
        self._is_pulse_active = active
        self._has_handled_initial_pulse = False
        if active:
            self.pulse_scheduler.schedule(self.preferences.pulse_interval)
            self.pulse_scheduler.trigger_now()
        else:
            self.pulse_scheduler.cancel()
        self.focus_logger.log_pulse_activity(active, self.preferences.pulse_interval)

    def trigger_pulse(self) -> None:
        """Pulse once now without changing the schedule."""
        self.pulse_scheduler.trigger_now()

    # Persistence flushing

    def flush_pending_focus_text_save(self) -> bool:
        return self._text_saver.flush()

    def flush_pending_window_position_save(self) -> bool:
        return self._position_saver.flush()

    # Internals

    def _handle_pulse(self, event: PulseEvent) -> None:
        self._pulse_event_id = event.id
        if self._has_handled_initial_pulse:
            self.player.play(self.preferences.sound_effect_id)
            self.focus_logger.log_pulse(event.sequence, self.preferences.sound_effect_id)
        else:
            self._has_handled_initial_pulse = True
            self.focus_logger.log_pulse(event.sequence, None)
        self.pulse_events.emit(event)

    def _request_editor(self, kind: str) -> None:
        request = EditorRequest(kind)
        if kind == "focus":
            self._requested_focus_id = request.id
        else:
            self._requested_blur_id = request.id
        self.editor_requests.emit(request)

    def _persist_focus_text(self, text: str) -> None:
        self.storage.save_focus_text(text)
        self.focus_logger.log_save("focus text")

    def _persist_window_origin(self, origin: Tuple[float, float]) -> None:
        self.storage.save_window_origin(*origin)
        self.focus_logger.log_save("window position")
