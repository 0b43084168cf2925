#!/usr/bin/env python3
"""
Pulse scheduling for TaskLock.
A single recurring timer that broadcasts attention pulses.
"""

import logging
import math
from enum import Enum
from typing import Any, Optional

from .events import Broadcast, PulseEvent

logger = logging.getLogger(__name__)

MAX_TIMER_TOLERANCE = 2.0  # seconds
TIMER_TOLERANCE_RATIO = 0.05


class PulseState(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"


def timer_tolerance(interval: float) -> float:
    """Allowed firing slack for a pulse interval, so the OS can coalesce wakeups."""
    return min(MAX_TIMER_TOLERANCE, interval * TIMER_TOLERANCE_RATIO)


class PulseScheduler:
    """Owns one cancellable recurring timer and emits a PulseEvent per tick.

    Knows nothing about sound or UI; observers subscribe to ``pulses``.
    """

    def __init__(self, scheduler: Any, pulses: Optional[Broadcast[PulseEvent]] = None):
        self.scheduler = scheduler
        self.pulses: Broadcast[PulseEvent] = pulses or Broadcast("pulses")
        self.interval: Optional[float] = None
        self._timer: Optional[Any] = None

    @property
    def state(self) -> PulseState:
        return PulseState.SCHEDULED if self._timer is not None else PulseState.IDLE

    def schedule(self, interval: float) -> bool:
        """(Re)arm the recurring timer.

        A non-positive interval suspends pulses instead of firing continuously.
        Rescheduling restarts the period from now.

        Args:
            interval: Seconds between pulses

        Returns:
            True if a timer is armed
        """
        self.cancel()
        interval = float(interval)
        if math.isnan(interval) or interval <= 0:
            logger.debug("Pulse interval %s suspends scheduling", interval)
            return False

        self.interval = interval
        self._timer = self.scheduler.call_repeating(
            interval, self._tick, tolerance=timer_tolerance(interval)
        )
        logger.debug("Pulse timer armed every %.1fs", interval)
        return True

    def trigger_now(self) -> PulseEvent:
        """Emit one pulse immediately; the armed timer keeps its phase."""
        return self._emit()

    def cancel(self) -> None:
        timer = self._timer
        self._timer = None
        self.interval = None
        if timer is not None:
            timer.cancel()

    def _tick(self) -> None:
        self._emit()

    def _emit(self) -> PulseEvent:
        event = PulseEvent()
        self.pulses.emit(event)
        return event
