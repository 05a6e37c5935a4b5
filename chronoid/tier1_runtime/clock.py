"""
chronoid.tier1_runtime.clock
─────────────────────────────
Mockable wall-clock source. The clock sequence reads time only through a
Clock, so tests can freeze or script time instead of racing the real one.
"""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable


# ── Clock implementation ───────────────────────────────────────────────────

class Clock:
    """Mockable clock. Pass time_ns_fn to control time in tests."""

    def __init__(self, time_ns_fn: Callable[[], int] | None = None) -> None:
        self._time_ns_fn = time_ns_fn or time.time_ns

    def time_ns(self) -> int:
        """Return nanoseconds since the Unix epoch."""
        return self._time_ns_fn()

    def timestamp_ms(self) -> int:
        """Return the current Unix timestamp in milliseconds."""
        return self.time_ns() // 1_000_000

    def now(self) -> datetime:
        """Return the current UTC datetime (microsecond precision)."""
        seconds, nanos = divmod(self.time_ns(), 1_000_000_000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            microsecond=nanos // 1000
        )

    def freeze(self, at: datetime | int) -> "Clock":
        """Return a new Clock frozen at a datetime or a Unix-nanosecond value."""
        nanos = _to_nanos(at)
        return Clock(time_ns_fn=lambda: nanos)

    def advance(self, seconds: float = 0, *, nanos: int = 0) -> "Clock":
        """
        Return a new Clock running ahead of this one by *seconds* plus *nanos*.

        Integer seconds and nanos are applied exactly; a float seconds value
        is rounded to the nearest nanosecond.
        """
        if isinstance(seconds, int):
            offset = seconds * 1_000_000_000 + nanos
        else:
            offset = round(seconds * 1_000_000_000) + nanos
        return Clock(time_ns_fn=lambda: self.time_ns() + offset)


def _to_nanos(at: datetime | int) -> int:
    if isinstance(at, datetime):
        delta = at - datetime(1970, 1, 1, tzinfo=timezone.utc)
        return (
            (delta.days * 86_400 + delta.seconds) * 1_000_000_000
            + delta.microseconds * 1000
        )
    return at


# ── Module-level singleton ─────────────────────────────────────────────────

_clock = Clock()


def get_clock() -> Clock:
    """Return the global clock instance."""
    return _clock


def set_clock(clock: Clock) -> None:
    """Replace the global clock (use in tests)."""
    global _clock
    _clock = clock


def timestamp_ms() -> int:
    """Return the current Unix timestamp in milliseconds."""
    return _clock.timestamp_ms()


__all__ = ["Clock", "get_clock", "set_clock", "timestamp_ms"]
