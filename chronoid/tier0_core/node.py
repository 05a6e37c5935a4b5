"""
chronoid.tier0_core.node
─────────────────────────
The 48-bit node field. Real version 1 UUIDs put a MAC address here; we never
read hardware. Instead the value is drawn once from a cryptographically
strong source and the multicast bit (the top bit of the 48) is set, which
RFC 4122 §4.5 reserves for exactly this case: it can never equal an
IEEE-assigned address.
"""
from __future__ import annotations

import secrets
import threading
from typing import Callable

from chronoid.tier0_core.errors import EntropyUnavailableError
from chronoid.tier0_core.logging import get_logger

log = get_logger(__name__)

NODE_BITS = 48
NODE_MASK = (1 << NODE_BITS) - 1
MULTICAST_BIT = 1 << (NODE_BITS - 1)


def draw_bits(entropy: Callable[[int], int], bits: int) -> int:
    """Read *bits* random bits, turning a failing source into EntropyUnavailableError."""
    try:
        return entropy(bits)
    except (OSError, NotImplementedError) as exc:
        log.error("entropy.unavailable", bits=bits, error=str(exc))
        raise EntropyUnavailableError(
            "No usable randomness source; refusing to mint identifiers.",
            bits=bits,
        ) from exc


class NodeIdentifier:
    """
    Lazily chosen, process-stable node value.

    The first call to value() picks the node under a lock; every later call,
    from any thread, returns the same number. Pass *fixed* to pin the node
    (deployments that assign node ids, or tests); the multicast bit is forced
    either way.
    """

    def __init__(
        self,
        fixed: int | None = None,
        entropy: Callable[[int], int] = secrets.randbits,
    ) -> None:
        if fixed is not None and not 0 <= fixed <= NODE_MASK:
            raise ValueError(f"node must fit in {NODE_BITS} bits, got {fixed:#x}")
        self._fixed = fixed
        self._entropy = entropy
        self._value: int | None = None
        self._lock = threading.Lock()

    def value(self) -> int:
        if self._value is None:
            with self._lock:
                if self._value is None:
                    self._value = self._choose()
        return self._value

    def _choose(self) -> int:
        if self._fixed is not None:
            node = self._fixed | MULTICAST_BIT
        else:
            node = draw_bits(self._entropy, NODE_BITS - 1) | MULTICAST_BIT
        log.debug("node.initialized", node=f"{node:#014x}", fixed=self._fixed is not None)
        return node

    def __repr__(self) -> str:
        shown = "unset" if self._value is None else f"{self._value:#014x}"
        return f"NodeIdentifier({shown})"


__all__ = ["NodeIdentifier", "MULTICAST_BIT", "draw_bits"]
