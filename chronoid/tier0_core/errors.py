"""
chronoid.tier0_core.errors
───────────────────────────
Error taxonomy for identifier generation. Every error carries a stable
machine-readable code so callers (a storage layer, an API) can map failures
without parsing messages.

None of these are recoverable inside the generator: a failing entropy source
or clock means no identifier can be minted safely, so the error is raised to
the caller rather than papered over with a predictable value.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ChronoidError(Exception):
    """
    Base class for all chronoid errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - detail: human-readable context
    - metadata: extra key/values, included in logs
    """

    code: str = "chronoid_error"

    def __init__(
        self,
        detail: str = "Identifier generation failed.",
        code: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.detail = detail
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                **self.metadata,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ConfigurationError(ChronoidError):
    """Misconfiguration detected when settings are loaded."""
    code = "configuration_error"


class EntropyUnavailableError(ChronoidError):
    """The cryptographic randomness source could not be read."""
    code = "entropy_unavailable"


class ClockReadError(ChronoidError):
    """The wall clock could not be read."""
    code = "clock_read_failed"


class InvalidIdentifierError(ChronoidError, ValueError):
    """An identifier that is not a version 1 (time-based) UUID was supplied."""
    code = "invalid_identifier"


__all__ = [
    "ChronoidError",
    "ConfigurationError",
    "EntropyUnavailableError",
    "ClockReadError",
    "InvalidIdentifierError",
]
