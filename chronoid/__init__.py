"""
chronoid
────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from chronoid.tier0_core.logging import get_logger
from chronoid.tier0_core.errors import (
    ChronoidError,
    ConfigurationError,
    EntropyUnavailableError,
    ClockReadError,
    InvalidIdentifierError,
)
from chronoid.tier0_core.config import get_config, ChronoidConfig, BoundaryOrder
from chronoid.tier0_core.ids import build, make_msb, make_lsb
from chronoid.tier0_core.node import NodeIdentifier
from chronoid.tier0_core.ticks import to_internal_ticks, from_internal_ticks

from chronoid.tier1_runtime.clock import Clock, get_clock, set_clock
from chronoid.tier1_runtime.sequence import ClockSequence
from chronoid.tier1_runtime.bounds import (
    lower_bound_of,
    upper_bound_of,
    extract_unix_millis,
)
from chronoid.tier1_runtime.generator import (
    TimeUUIDGenerator,
    get_generator,
    set_generator,
    random,
    time_based,
    unix_timestamp,
    start_of,
    end_of,
)

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "ChronoidError", "ConfigurationError", "EntropyUnavailableError",
    "ClockReadError", "InvalidIdentifierError",
    # config
    "get_config", "ChronoidConfig", "BoundaryOrder",
    # layout
    "build", "make_msb", "make_lsb",
    # node
    "NodeIdentifier",
    # ticks
    "to_internal_ticks", "from_internal_ticks",
    # clock
    "Clock", "get_clock", "set_clock",
    # sequence
    "ClockSequence",
    # bounds
    "lower_bound_of", "upper_bound_of", "extract_unix_millis",
    # generator
    "TimeUUIDGenerator", "get_generator", "set_generator",
    "random", "time_based", "unix_timestamp", "start_of", "end_of",
]
