"""
chronoid test configuration.

Every test gets a fresh default generator, the real wall clock and an empty
config cache, so nothing minted in one test leaks state into the next.
"""
from __future__ import annotations

import os

import pytest

# ── Test environment ───────────────────────────────────────────────────────
# These must be set before any chronoid modules are imported.

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CHRONOID_LOG_LEVEL", "WARNING")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """Reset the default generator, clock and config between tests."""
    import chronoid.tier0_core.config as _config
    import chronoid.tier1_runtime.clock as _clock
    import chronoid.tier1_runtime.generator as _generator

    orig_clock = _clock._clock
    _config._reset_config()
    _generator.set_generator(None)

    yield

    _clock.set_clock(orig_clock)
    _config._reset_config()
    _generator.set_generator(None)


@pytest.fixture
def generator():
    """An isolated generator with a pinned node and clock sequence."""
    from chronoid.tier1_runtime.generator import TimeUUIDGenerator
    return TimeUUIDGenerator(node=0x0123456789AB, clock_seq=0x1234)


@pytest.fixture
def unsigned_compare():
    """
    The store's comparator: 60-bit timestamp first, then the low 64 bits
    (clock-seq and node) as an unsigned integer. Returns -1, 0 or 1.
    """
    def compare(a, b) -> int:
        ka = (a.time, a.int & 0xFFFFFFFFFFFFFFFF)
        kb = (b.time, b.int & 0xFFFFFFFFFFFFFFFF)
        return (ka > kb) - (ka < kb)
    return compare


@pytest.fixture
def signed_bytes_compare():
    """
    Legacy comparator: 60-bit timestamp first, then the low 8 bytes compared
    one by one as signed values.
    """
    def signed(u) -> list[int]:
        return [b - 256 if b > 127 else b for b in u.bytes[8:]]

    def compare(a, b) -> int:
        ka = (a.time, signed(a))
        kb = (b.time, signed(b))
        return (ka > kb) - (ka < kb)
    return compare
