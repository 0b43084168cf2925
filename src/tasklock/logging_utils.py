#!/usr/bin/env python3
"""
Logging setup and lifecycle reporting for TaskLock.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "tasklock"
LOG_FILENAME = "tasklock.log"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_rotating_file_handler(
    log_dir: Path,
    filename: str = LOG_FILENAME,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
) -> logging.Handler:
    """Construct a rotating file handler in ``log_dir``."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=max(0, retention - 1),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(
    level: str = "INFO", log_dir: Optional[Path] = None, console: bool = True
) -> logging.Logger:
    """Attach console and file handlers to the package logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)

    if log_dir is not None:
        try:
            logger.addHandler(build_rotating_file_handler(log_dir))
        except OSError as e:
            logger.warning("File logging disabled: %s", e)

    logger.propagate = False
    return logger


class FocusLogger:
    """Reports controller lifecycle events when verbose output is enabled."""

    def __init__(self, verbose: bool = True, logger: Optional[logging.Logger] = None):
        self.verbose = verbose
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.focus")

    def log_startup(self, interval: float, sound_effect_id: str, effect_count: int) -> None:
        if not self.verbose:
            return
        self.logger.info(
            "TaskLock started - pulsing every %.0fs with sound %r (%d available)",
            interval,
            sound_effect_id,
            effect_count,
        )

    def log_pulse(self, sequence: int, sound_effect_id: Optional[str]) -> None:
        if not self.verbose:
            return
        if sound_effect_id is None:
            self.logger.debug("Pulse #%d (silent)", sequence)
        else:
            self.logger.debug("Pulse #%d with sound %r", sequence, sound_effect_id)

    def log_pulse_activity(self, active: bool, interval: float) -> None:
        if not self.verbose:
            return
        if active:
            self.logger.info("Pulses resumed (every %.0fs)", interval)
        else:
            self.logger.info("Pulses suspended")

    def log_sound_healed(self, stored_id: str, resolved_id: str) -> None:
        self.logger.info(
            "Stored sound %r unavailable, using %r", stored_id, resolved_id
        )

    def log_save(self, what: str) -> None:
        if self.verbose:
            self.logger.debug("Saved %s", what)

    def log_shutdown(self) -> None:
        if self.verbose:
            self.logger.info("TaskLock stopped")
