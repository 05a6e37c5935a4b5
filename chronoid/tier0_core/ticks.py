"""
chronoid.tier0_core.ticks
──────────────────────────
Conversions between Unix time and UUID ticks. A tick is one 100-nanosecond
interval counted from the Gregorian reform, 1582-10-15T00:00:00Z, which is
the time base of version 1 UUIDs.

All conversions are exact integer arithmetic.
"""
from __future__ import annotations

# 100-ns intervals between 1582-10-15 and 1970-01-01
EPOCH_OFFSET = 0x01B21DD213814000

TICKS_PER_MILLI = 10_000
NANOS_PER_TICK = 100
TIME_MAX = (1 << 60) - 1


def to_internal_ticks(unix_millis: int) -> int:
    """Milliseconds since the Unix epoch → ticks since the UUID epoch."""
    return unix_millis * TICKS_PER_MILLI + EPOCH_OFFSET


def from_internal_ticks(ticks: int) -> int:
    """Ticks since the UUID epoch → milliseconds since the Unix epoch (floored)."""
    return (ticks - EPOCH_OFFSET) // TICKS_PER_MILLI


def ticks_from_unix_nanos(unix_nanos: int) -> int:
    """Nanoseconds since the Unix epoch → ticks, discarding the sub-tick part."""
    return unix_nanos // NANOS_PER_TICK + EPOCH_OFFSET


def last_tick_of(unix_millis: int) -> int:
    """The final tick that still falls inside the given millisecond."""
    return to_internal_ticks(unix_millis) + TICKS_PER_MILLI - 1


__all__ = [
    "EPOCH_OFFSET",
    "TICKS_PER_MILLI",
    "TIME_MAX",
    "to_internal_ticks",
    "from_internal_ticks",
    "ticks_from_unix_nanos",
    "last_tick_of",
]
