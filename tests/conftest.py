"""Pytest configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from tasklock.sound_effects import NONE_SOUND_EFFECT, SoundEffect, SoundEffectsLibrary
from tasklock.storage import FocusStorage


class FakeTimerHandle:
    """Handle returned by FakeScheduler; mirrors RunLoopScheduler's TimerHandle."""

    def __init__(self, due, callback, order, interval=None, tolerance=0.0):
        self.due = due
        self.callback = callback
        self.order = order
        self.interval = interval
        self.tolerance = tolerance
        self.cancelled = False
        self.fired = False
        self.cancel_calls = 0

    @property
    def active(self):
        return not self.cancelled and not self.fired

    def cancel(self):
        self.cancel_calls += 1
        self.cancelled = True


class FakeScheduler:
    """Virtual clock scheduler; nothing runs until ``advance`` is called."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback):
        handle = FakeTimerHandle(self.now + max(0.0, delay), callback, len(self.handles))
        self.handles.append(handle)
        return handle

    def call_repeating(self, interval, callback, tolerance=0.0):
        handle = FakeTimerHandle(
            self.now + interval, callback, len(self.handles), interval, tolerance
        )
        self.handles.append(handle)
        return handle

    def call_soon(self, callback):
        return self.call_later(0.0, callback)

    @property
    def pending(self):
        return [h for h in self.handles if h.active]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.handles if h.active and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due, h.order))
            self.now = handle.due
            if handle.interval is None:
                handle.fired = True
            else:
                handle.due += handle.interval
            handle.callback()
        self.now = target


class FakePlayer:
    def __init__(self):
        self.prepared = []
        self.played = []

    def prepare(self, effect_id):
        self.prepared.append(effect_id)

    def play(self, effect_id):
        self.played.append(effect_id)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def sample_effects():
    return (
        NONE_SOUND_EFFECT,
        SoundEffect("chime", "Chime", Path("/sounds/chime.mp3")),
        SoundEffect("sound_2", "Sound 2", Path("/sounds/sound-2.mp3")),
        SoundEffect("sound_10", "Sound 10", Path("/sounds/sound-10.mp3")),
    )


@pytest.fixture
def library(sample_effects):
    return SoundEffectsLibrary(sample_effects, default_id="sound_10")


@pytest.fixture
def storage(temp_dir):
    return FocusStorage(temp_dir)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "unit: mark test as unit test")
