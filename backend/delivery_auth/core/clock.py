"""Injectable sources of "now".

Every component that needs the current time receives a :class:`Clock`
instead of calling :func:`datetime.now` directly, which keeps token expiry
and refresh-record usability deterministic under test.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Protocol

from flask import Flask, current_app

CLOCK_EXTENSION_KEY = "delivery_auth.clock"


class Clock(Protocol):
    """Port returning timezone-aware UTC instants."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock backed by :func:`datetime.now` in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """
    Manually driven clock for tests and scripted scenarios.

    :param start: Initial instant. Naive values are interpreted as UTC.
    :type start: datetime | None
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._lock = threading.Lock()
        self._now = _as_utc(start or datetime.now(UTC)).replace(microsecond=0)

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def set(self, instant: datetime) -> None:
        """Jump to ``instant``."""
        with self._lock:
            self._now = _as_utc(instant)

    def advance(self, seconds: float = 0, **delta: float) -> datetime:
        """
        Move the clock forward and return the new instant.

        :param seconds: Seconds to add.
        :param delta: Extra :class:`timedelta` keyword arguments (``minutes=``, ``days=``).
        :returns: The instant after advancing.
        :rtype: datetime
        """
        with self._lock:
            self._now = self._now + timedelta(seconds=seconds, **delta)
            return self._now


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def init_app(app: Flask) -> None:
    """Install the system clock unless a clock was injected beforehand."""
    app.extensions.setdefault(CLOCK_EXTENSION_KEY, SystemClock())


def get_clock() -> Clock:
    """Return the clock bound to the current application."""
    clock = current_app.extensions.get(CLOCK_EXTENSION_KEY)
    if clock is None:
        raise RuntimeError("Clock is not initialized. Call init_app() first.")
    return clock


__all__ = ["Clock", "SystemClock", "FixedClock", "init_app", "get_clock"]
