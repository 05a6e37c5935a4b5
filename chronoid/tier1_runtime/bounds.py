"""
chronoid.tier1_runtime.bounds
──────────────────────────────
Range-scan sentinels. start_of(ms) and end_of(ms) are the smallest and
largest version 1 UUIDs any process could mint during that millisecond, so
a store can answer "everything between t1 and t2" with an inclusive slice.

They are fake identifiers: never hand them out as keys. A real identifier
may share their exact bits, which is harmless for inclusive bounds.

Which bits are "smallest" depends on how the store breaks time ties:

  unsigned      the low 64 bits compare as an unsigned integer; the
                bounds fill clock-seq and node with all zeros / all ones.
  signed_bytes  the low 64 bits compare byte by byte as signed values
                (the legacy Cassandra TimeUUIDType rule); 0x80 is the
                smallest byte and 0x7F the largest.

In both modes the variant bits stay 10.
"""
from __future__ import annotations

import uuid

from chronoid.tier0_core.config import BoundaryOrder
from chronoid.tier0_core.errors import InvalidIdentifierError
from chronoid.tier0_core.ids import CLOCK_SEQ_MAX, NODE_MAX, assemble, make_lsb, make_msb
from chronoid.tier0_core.ticks import from_internal_ticks, last_tick_of, to_internal_ticks

_MIN_LSB = {
    BoundaryOrder.UNSIGNED: make_lsb(0, 0),
    BoundaryOrder.SIGNED_BYTES: 0x8080808080808080,
}
_MAX_LSB = {
    BoundaryOrder.UNSIGNED: make_lsb(CLOCK_SEQ_MAX, NODE_MAX),
    BoundaryOrder.SIGNED_BYTES: 0xBF7F7F7F7F7F7F7F,
}


def lower_bound_of(
    unix_millis: int, order: BoundaryOrder = BoundaryOrder.UNSIGNED
) -> uuid.UUID:
    """Smallest identifier that could have been minted at *unix_millis*."""
    return assemble(make_msb(to_internal_ticks(unix_millis)), _MIN_LSB[BoundaryOrder(order)])


def upper_bound_of(
    unix_millis: int, order: BoundaryOrder = BoundaryOrder.UNSIGNED
) -> uuid.UUID:
    """Largest identifier that could have been minted at *unix_millis*."""
    return assemble(make_msb(last_tick_of(unix_millis)), _MAX_LSB[BoundaryOrder(order)])


def extract_unix_millis(identifier: uuid.UUID) -> int:
    """
    Return the Unix millisecond at which *identifier* was minted.

    Sub-millisecond ticks are discarded. Raises InvalidIdentifierError for
    anything but an RFC 4122 version 1 UUID, whose time field would be noise.
    """
    if identifier.variant != uuid.RFC_4122 or identifier.version != 1:
        raise InvalidIdentifierError(
            "Not a time-based (version 1) UUID.",
            identifier=str(identifier),
            version=identifier.version,
        )
    return from_internal_ticks(identifier.time)


__all__ = ["lower_bound_of", "upper_bound_of", "extract_unix_millis"]
