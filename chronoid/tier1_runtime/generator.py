"""
chronoid.tier1_runtime.generator
─────────────────────────────────
Time-based UUID generation. A TimeUUIDGenerator owns every piece of mutable
state: the clock sequence, the node and the clock-sequence bits. The
module-level functions delegate to one lazily created default generator;
tests inject their own with set_generator().

Usage:
    from chronoid import time_based, unix_timestamp, start_of, end_of

    key = time_based()
    minted_at = unix_timestamp(key)
    rows = store.slice(start_of(t0), end_of(t1))
"""
from __future__ import annotations

import secrets
import threading
import uuid
from typing import Callable

from chronoid.tier0_core.config import BoundaryOrder, get_config
from chronoid.tier0_core.ids import CLOCK_SEQ_MAX, assemble, make_lsb, make_msb, new_uuid4
from chronoid.tier0_core.logging import get_logger
from chronoid.tier0_core.metrics import counter, gauge
from chronoid.tier0_core.node import NodeIdentifier, draw_bits
from chronoid.tier1_runtime.bounds import extract_unix_millis, lower_bound_of, upper_bound_of
from chronoid.tier1_runtime.clock import Clock
from chronoid.tier1_runtime.sequence import ClockSequence

log = get_logger(__name__)

_generated_total = counter(
    "chronoid_ids_generated_total", "Identifiers minted", ["kind"]
)
_clock_drift = gauge(
    "chronoid_clock_drift_ticks", "Ticks the last identifier ran ahead of the wall clock"
)


class TimeUUIDGenerator:
    """
    Mints version 1 UUIDs whose timestamps strictly increase.

    Node and clock-sequence bits are fixed for the generator's lifetime and
    chosen on first use; pass *node* / *clock_seq* to pin them. The clock
    sequence bits never disambiguate anything (the timestamp does), they only
    keep the layout standard.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        node: NodeIdentifier | int | None = None,
        clock_seq: int | None = None,
        entropy: Callable[[int], int] = secrets.randbits,
        drift_warn_ms: int = 0,
        boundary_order: BoundaryOrder = BoundaryOrder.UNSIGNED,
        metrics_enabled: bool = False,
    ) -> None:
        if clock_seq is not None and not 0 <= clock_seq <= CLOCK_SEQ_MAX:
            raise ValueError(f"clock_seq must fit in 14 bits, got {clock_seq}")
        if not isinstance(node, NodeIdentifier):
            node = NodeIdentifier(fixed=node, entropy=entropy)
        self._node = node
        self._clock_seq = clock_seq
        self._entropy = entropy
        self._sequence = ClockSequence(clock=clock, drift_warn_ms=drift_warn_ms)
        self.boundary_order = BoundaryOrder(boundary_order)
        self._lsb: int | None = None
        self._init_lock = threading.Lock()
        self._metrics_enabled = metrics_enabled
        if metrics_enabled:
            self._time_total = _generated_total(kind="time")
            self._random_total = _generated_total(kind="random")
            self._drift_gauge = _clock_drift()

    @classmethod
    def from_config(cls) -> "TimeUUIDGenerator":
        """Build a generator from CHRONOID_* settings."""
        cfg = get_config()
        return cls(
            node=cfg.node_id,
            clock_seq=cfg.clock_seq,
            drift_warn_ms=cfg.drift_warn_ms,
            boundary_order=cfg.boundary_order,
            metrics_enabled=cfg.metrics_enabled,
        )

    # ── Lazy state ────────────────────────────────────────────────────────────

    def _low_bits(self) -> int:
        if self._lsb is None:
            with self._init_lock:
                if self._lsb is None:
                    if self._clock_seq is None:
                        self._clock_seq = draw_bits(self._entropy, 14)
                    self._lsb = make_lsb(self._clock_seq, self._node.value())
        return self._lsb

    @property
    def node(self) -> int:
        """The 48-bit node field (forces initialisation)."""
        return self._node.value()

    @property
    def clock_seq(self) -> int:
        """The 14-bit clock-sequence field (forces initialisation)."""
        self._low_bits()
        return self._clock_seq  # type: ignore[return-value]

    @property
    def sequence(self) -> ClockSequence:
        return self._sequence

    # ── Minting ───────────────────────────────────────────────────────────────

    def time_based(self) -> uuid.UUID:
        """Return a new version 1 UUID, later than every UUID this generator has returned."""
        lsb = self._low_bits()
        ticks = self._sequence.next()
        if self._metrics_enabled:
            self._time_total.inc()
            self._drift_gauge.set(self._sequence.drift)
        return assemble(make_msb(ticks), lsb)

    def random(self) -> uuid.UUID:
        """Return a random version 4 UUID. Forces one-time initialisation."""
        self._low_bits()
        if self._metrics_enabled:
            self._random_total.inc()
        return new_uuid4()

    # ── Range boundaries ──────────────────────────────────────────────────────

    def start_of(self, unix_millis: int) -> uuid.UUID:
        return lower_bound_of(unix_millis, self.boundary_order)

    def end_of(self, unix_millis: int) -> uuid.UUID:
        return upper_bound_of(unix_millis, self.boundary_order)

    def __repr__(self) -> str:
        return (
            f"TimeUUIDGenerator(node={self._node!r}, "
            f"clock_seq={self._clock_seq}, order={self.boundary_order.value})"
        )


# ── Module-level singleton ─────────────────────────────────────────────────

_generator: TimeUUIDGenerator | None = None
_generator_lock = threading.Lock()


def get_generator() -> TimeUUIDGenerator:
    """Return the process-default generator, creating it from config on first use."""
    global _generator
    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = TimeUUIDGenerator.from_config()
                log.debug("generator.created", generator=repr(_generator))
    return _generator


def set_generator(generator: TimeUUIDGenerator | None) -> None:
    """Replace the default generator (use in tests). None drops it for lazy re-creation."""
    global _generator
    with _generator_lock:
        _generator = generator


def random() -> uuid.UUID:
    """Return a random version 4 UUID."""
    return get_generator().random()


def time_based() -> uuid.UUID:
    """Return a new time-based (version 1) UUID from the default generator."""
    return get_generator().time_based()


def unix_timestamp(identifier: uuid.UUID) -> int:
    """Return the Unix millisecond embedded in a time-based UUID."""
    return extract_unix_millis(identifier)


def start_of(unix_millis: int) -> uuid.UUID:
    """Inclusive lower range bound for identifiers minted at *unix_millis*."""
    return get_generator().start_of(unix_millis)


def end_of(unix_millis: int) -> uuid.UUID:
    """Inclusive upper range bound for identifiers minted at *unix_millis*."""
    return get_generator().end_of(unix_millis)


__all__ = [
    "TimeUUIDGenerator",
    "get_generator",
    "set_generator",
    "random",
    "time_based",
    "unix_timestamp",
    "start_of",
    "end_of",
]
