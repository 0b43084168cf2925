#!/usr/bin/env python3
"""
Debounced delivery of rapidly changing values.
Coalesces a stream of pushes into one delivery per quiet period.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Quiet periods used by the focus controller (seconds)
FOCUS_TEXT_DEBOUNCE = 0.300
WINDOW_POSITION_DEBOUNCE = 0.350
WINDOW_HEIGHT_SETTLE = 0.016  # one animation frame


class DebounceTimer(Generic[T]):
    """Single-slot debouncer.

    Every ``push`` replaces the pending value and restarts the delay; the
    ``deliver`` callback receives the latest value once the delay elapses
    without another push. ``flush`` delivers early, ``cancel`` discards.
    """

    def __init__(
        self,
        scheduler: Any,
        delay: float,
        deliver: Callable[[T], None],
        name: str = "debounce",
    ):
        """
        Initialize the debouncer.

        Args:
            scheduler: Object providing ``call_later(delay, callback)``
            delay: Quiet period in seconds
            deliver: Receives the settled value
            name: Label used in log messages
        """
        self.scheduler = scheduler
        self.delay = max(0.0, float(delay))
        self.deliver = deliver
        self.name = name
        self._handle: Optional[Any] = None
        self._value: Optional[T] = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def pending_value(self) -> Optional[T]:
        return self._value if self._pending else None

    def push(self, value: T) -> None:
        """Record ``value`` and restart the quiet period."""
        self._cancel_handle()
        self._value = value
        self._pending = True
        self._handle = self.scheduler.call_later(self.delay, self._fire)

    def flush(self) -> bool:
        """Deliver the pending value now.

        Returns:
            True if a value was delivered
        """
        if not self._pending:
            return False
        self._cancel_handle()
        logger.debug("Flushing %s", self.name)
        self._deliver_pending()
        return True

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        self._cancel_handle()
        self._pending = False
        self._value = None

    def _fire(self) -> None:
        self._handle = None
        if not self._pending:
            return
        self._deliver_pending()

    def _deliver_pending(self) -> None:
        value = self._value
        self._pending = False
        self._value = None
        self.deliver(value)

    def _cancel_handle(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()
