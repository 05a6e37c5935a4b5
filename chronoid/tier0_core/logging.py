"""
chronoid.tier0_core.logging
────────────────────────────
Structured logs for a library that lives inside someone else's process.

chronoid never calls structlog.configure(): the global processor chain
belongs to the host application. Each logger is wrapped individually with
chronoid's own processors and routed to the "chronoid" stdlib logger, which
is the only thing we attach a handler to. Hosts that want chronoid events
in their own pipeline can remove that handler and let records propagate.

Minimal stack: structlog (stdout JSON or console)
Configure via: CHRONOID_LOG_LEVEL, CHRONOID_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Any

import structlog

ROOT_LOGGER = "chronoid"

_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", key="ts"),
    structlog.processors.StackInfoRenderer(),
]

_handler: logging.Handler | None = None
_handler_lock = threading.Lock()


def _install_handler() -> None:
    """Attach one stdout handler to the chronoid stdlib logger."""
    global _handler
    level = getattr(logging, os.getenv("CHRONOID_LOG_LEVEL", "INFO").upper(), logging.INFO)
    if os.getenv("CHRONOID_LOG_FORMAT", "json").lower() == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    ))
    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger for a chronoid module.

    Usage:
        log = get_logger(__name__)
        log.debug("node.initialized", node="0x8a1b2c3d4e5f")
        log.warning("clock.drift_exceeded", drift_ms=1250)
    """
    if _handler is None:
        with _handler_lock:
            if _handler is None:
                _install_handler()
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER),
        processors=_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )


__all__ = ["get_logger", "ROOT_LOGGER"]
