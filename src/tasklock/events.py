#!/usr/bin/env python3
"""
Pulse events and the broadcast streams the UI observes.
"""

import itertools
import logging
import uuid
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_pulse_sequence = itertools.count(1)


@dataclass(frozen=True)
class PulseEvent:
    """A single attention pulse. Ordered by emission through ``sequence``."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    sequence: int = field(default_factory=lambda: next(_pulse_sequence))


@dataclass(frozen=True)
class EditorRequest:
    """Focus or blur request for the note editor."""

    kind: str  # "focus" or "blur"
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class Broadcast(Generic[T]):
    """Fan-out stream delivering each emitted value to every observer.

    Observers are called in subscription order. An observer that raises is
    logged and skipped; the remaining observers still receive the value.
    When ``dispatch`` is given, each delivery is handed to it instead of
    being called inline (e.g. to defer work to the next run loop pass).
    """

    def __init__(
        self,
        name: str = "broadcast",
        dispatch: Optional[Callable[[Callable[[], None]], object]] = None,
    ):
        self.name = name
        self.dispatch = dispatch
        self._observers: List[Callable[[T], None]] = []

    def subscribe(self, observer: Callable[[T], None]) -> Callable[[], None]:
        """Register an observer.

        Args:
            observer: Callable receiving each emitted value

        Returns:
            Callable that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def emit(self, value: T) -> None:
        for observer in list(self._observers):
            if self.dispatch is not None:
                self.dispatch(partial(self._deliver, observer, value))
            else:
                self._deliver(observer, value)

    def _deliver(self, observer: Callable[[T], None], value: T) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception("Observer of %s failed", self.name)
