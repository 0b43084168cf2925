#!/usr/bin/env python3
"""
Main run loop timers for TaskLock.
Schedules callbacks with NSTimer so they run on the AppKit main thread.
"""

import logging
from typing import Callable, Optional

try:
    from Foundation import NSRunLoop, NSRunLoopCommonModes, NSTimer
except ImportError:
    print(
        "Error: pyobjc-framework-Cocoa not installed. "
        "Run: pip install pyobjc-framework-Cocoa"
    )
    exit(1)

logger = logging.getLogger(__name__)


class TimerHandle:
    """Cancellation handle for a scheduled NSTimer. ``cancel`` is idempotent."""

    def __init__(self, repeats: bool):
        self.repeats = repeats
        self._timer: Optional[object] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        self._cancelled = True
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.invalidate()


class RunLoopScheduler:
    """Schedules one-shot and repeating callbacks on the current run loop.

    Timers are added in the common modes so they keep firing while a
    status bar menu is open.
    """

    def __init__(self, run_loop=None):
        self.run_loop = run_loop or NSRunLoop.mainRunLoop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(repeats=False)

        def fire(timer):
            handle._timer = None
            if not handle.cancelled:
                self._run(callback)

        self._arm(handle, max(0.0, delay), fire, repeats=False)
        return handle

    def call_soon(self, callback: Callable[[], None]) -> TimerHandle:
        return self.call_later(0.0, callback)

    def call_repeating(
        self, interval: float, callback: Callable[[], None], tolerance: float = 0.0
    ) -> TimerHandle:
        handle = TimerHandle(repeats=True)

        def fire(timer):
            if not handle.cancelled:
                self._run(callback)

        timer = self._arm(handle, interval, fire, repeats=True)
        if tolerance > 0:
            timer.setTolerance_(tolerance)
        return handle

    def _arm(self, handle: TimerHandle, interval: float, fire, repeats: bool):
        timer = NSTimer.timerWithTimeInterval_repeats_block_(interval, repeats, fire)
        handle._timer = timer
        self.run_loop.addTimer_forMode_(timer, NSRunLoopCommonModes)
        return timer

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        # Exceptions must not propagate into the Objective-C run loop
        try:
            callback()
        except Exception:
            logger.exception("Scheduled callback %r failed", callback)
