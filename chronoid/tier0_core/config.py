"""
chronoid.tier0_core.config
───────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic. Invalid values raise
ConfigurationError on first get_config(), not in the middle of minting.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronoid.tier0_core.errors import ConfigurationError
from chronoid.tier0_core.ids import CLOCK_SEQ_MAX, NODE_MAX


class BoundaryOrder(str, Enum):
    """How the store orders the low 64 bits (clock-seq + node) on time ties."""

    UNSIGNED = "unsigned"
    SIGNED_BYTES = "signed_bytes"


class ChronoidConfig(BaseSettings):
    """
    Typed chronoid configuration. Generator settings are prefixed with
    CHRONOID_; the application fields are shared with the host service.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ───────────────────────────────────────────────────────────
    app_name: str = Field(default="chronoid", alias="APP_NAME")
    environment: str = Field(default="development", alias="APP_ENV")

    # ── Generator ─────────────────────────────────────────────────────────────
    node_id: int | None = Field(default=None, alias="CHRONOID_NODE_ID")
    clock_seq: int | None = Field(default=None, alias="CHRONOID_CLOCK_SEQ")
    drift_warn_ms: int = Field(default=1000, ge=0, alias="CHRONOID_DRIFT_WARN_MS")
    boundary_order: BoundaryOrder = Field(
        default=BoundaryOrder.UNSIGNED, alias="CHRONOID_BOUNDARY_ORDER"
    )

    # ── Metrics ───────────────────────────────────────────────────────────────
    metrics_enabled: bool = Field(default=False, alias="CHRONOID_METRICS_ENABLED")

    @field_validator("environment")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if v.lower() not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("node_id", "clock_seq", mode="before")
    @classmethod
    def parse_int(cls, v: object) -> object:
        # Node ids are usually written in hex, e.g. CHRONOID_NODE_ID=0x8a1b2c3d4e5f
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            return int(v, 0)
        return v

    @field_validator("node_id")
    @classmethod
    def validate_node_id(cls, v: int | None) -> int | None:
        if v is not None and not 0 <= v <= NODE_MAX:
            raise ValueError(f"node_id must fit in 48 bits, got {v:#x}")
        return v

    @field_validator("clock_seq")
    @classmethod
    def validate_clock_seq(cls, v: int | None) -> int | None:
        if v is not None and not 0 <= v <= CLOCK_SEQ_MAX:
            raise ValueError(f"clock_seq must fit in 14 bits, got {v}")
        return v

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache(maxsize=1)
def get_config() -> ChronoidConfig:
    """
    Return the singleton chronoid config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    try:
        return ChronoidConfig()
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid chronoid configuration: {exc.error_count()} error(s)",
            errors=[
                {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
                for e in exc.errors()
            ],
        ) from exc


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["BoundaryOrder", "ChronoidConfig", "get_config"]
