"""
chronoid.tier0_core.ids
────────────────────────
Bit layout of version 1 (time-based) UUIDs.

    time_low (32) | time_mid (16) | version (4) time_hi (12)
    | variant (2) clock_seq (14) | node (48)

The 60-bit tick count is split across the three time fields, low bits
first, so byte order does NOT sort by time; the store's comparator
reassembles the timestamp before comparing. Everything here is a pure
function of its arguments.
"""
from __future__ import annotations

import uuid

from chronoid.tier0_core.ticks import TIME_MAX

VERSION_1 = 0x1000              # version nibble in time_hi_and_version
VARIANT_RFC_4122 = 0b10 << 62     # variant bits in the lower 64 bits

CLOCK_SEQ_MAX = (1 << 14) - 1
NODE_MAX = (1 << 48) - 1


def make_msb(ticks: int) -> int:
    """Upper 64 bits: the tick count rearranged into time_low/mid/hi plus version."""
    return (
        (ticks & 0xFFFFFFFF) << 32
        | (ticks >> 32 & 0xFFFF) << 16
        | ticks >> 48 & 0x0FFF
        | VERSION_1
    )


def make_lsb(clock_seq: int, node: int) -> int:
    """Lower 64 bits: variant, clock sequence and node."""
    return VARIANT_RFC_4122 | (clock_seq & CLOCK_SEQ_MAX) << 48 | node & NODE_MAX


def assemble(msb: int, lsb: int) -> uuid.UUID:
    return uuid.UUID(int=msb << 64 | lsb)


def build(ticks: int, clock_seq: int, node: int) -> uuid.UUID:
    """
    Pack a tick count, clock sequence and node into a version 1 UUID.

    Raises ValueError if a field does not fit its width.
    """
    if not 0 <= ticks <= TIME_MAX:
        raise ValueError(f"ticks out of range (need a 60-bit value), got {ticks}")
    if not 0 <= clock_seq <= CLOCK_SEQ_MAX:
        raise ValueError(f"clock_seq out of range (need a 14-bit value), got {clock_seq}")
    if not 0 <= node <= NODE_MAX:
        raise ValueError(f"node out of range (need a 48-bit value), got {node:#x}")
    return assemble(make_msb(ticks), make_lsb(clock_seq, node))


def new_uuid4() -> uuid.UUID:
    """Generate a random version 4 UUID."""
    return uuid.uuid4()


__all__ = ["make_msb", "make_lsb", "assemble", "build", "new_uuid4"]
