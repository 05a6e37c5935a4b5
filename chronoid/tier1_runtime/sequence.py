"""
chronoid.tier1_runtime.sequence
────────────────────────────────
Strictly increasing 60-bit tick source.

Classic version 1 generators bump a 14-bit clock-sequence field when two
UUIDs land on the same tick, and that field silently wraps under load.
Here the timestamp itself carries the disambiguation: whenever the wall
clock has not moved past the last issued tick, we issue last + 1. Under a
sustained burst the issued ticks may run ahead of real time; that drift is
unbounded in principle, but uniqueness and ordering never break.

The only shared state is the last issued tick, guarded by a threading.Lock.
The clock is read before the lock is taken, so the critical section is one
compare and one store. Waiters block on the lock instead of spinning, so
there is no retry loop to storm under contention.
"""
from __future__ import annotations

import threading

from chronoid.tier0_core.errors import ClockReadError
from chronoid.tier0_core.logging import get_logger
from chronoid.tier0_core.ticks import TICKS_PER_MILLI, ticks_from_unix_nanos
from chronoid.tier1_runtime.clock import Clock, get_clock

log = get_logger(__name__)


class ClockSequence:
    """
    Issues one tick per call; each call returns more than any earlier call.

    Usage::

        seq = ClockSequence()
        a = seq.next()
        b = seq.next()
        assert a < b
    """

    def __init__(self, clock: Clock | None = None, drift_warn_ms: int = 0) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0
        self._drift = 0
        self._drift_warn_ticks = drift_warn_ms * TICKS_PER_MILLI
        self._drifting = False

    @property
    def last(self) -> int:
        """The most recently issued tick (0 before the first call)."""
        return self._last

    @property
    def drift(self) -> int:
        """How many ticks the last issued value ran ahead of the wall clock."""
        return self._drift

    def next(self) -> int:
        observed = self._read()
        with self._lock:
            if observed > self._last:
                self._last = observed
            else:
                self._last += 1
            issued = self._last
            self._drift = issued - observed
        if self._drift_warn_ticks:
            self._check_drift(issued - observed)
        return issued

    def _read(self) -> int:
        clock = self._clock or get_clock()
        try:
            return ticks_from_unix_nanos(clock.time_ns())
        except OSError as exc:
            log.error("clock.read_failed", error=str(exc))
            raise ClockReadError("Wall clock could not be read.") from exc

    def _check_drift(self, drift: int) -> None:
        # The flag is read without the lock; at worst a warning is logged twice.
        if drift > self._drift_warn_ticks and not self._drifting:
            self._drifting = True
            log.warning(
                "clock.drift_exceeded",
                drift_ms=drift // TICKS_PER_MILLI,
                threshold_ms=self._drift_warn_ticks // TICKS_PER_MILLI,
            )
        elif drift <= self._drift_warn_ticks and self._drifting:
            self._drifting = False
            log.info("clock.drift_recovered", drift_ms=drift // TICKS_PER_MILLI)

    def __repr__(self) -> str:
        return f"ClockSequence(last={self._last})"


__all__ = ["ClockSequence"]
