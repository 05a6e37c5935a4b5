"""
chronoid.tier0_core.metrics
────────────────────────────
Prometheus counters and gauges tagged with the host service's identity.

Metrics are registered in the default registry at import; the service/env
label values come from the validated config (APP_NAME, APP_ENV) and are
resolved when a labelled child is first requested, not at import time.

Minimal stack: prometheus-client
Configure via: CHRONOID_METRICS_ENABLED=true|false
"""
from __future__ import annotations

from typing import Callable, TypeVar

from prometheus_client import Counter, Gauge
from prometheus_client.metrics import MetricWrapperBase

from chronoid.tier0_core.config import get_config

M = TypeVar("M", bound=MetricWrapperBase)

SERVICE_LABELS = ["service", "env"]


def service_labels() -> dict[str, str]:
    """The service/env label values every chronoid metric carries."""
    cfg = get_config()
    return {"service": cfg.app_name, "env": cfg.environment}


def _labelled(metric: M) -> Callable[..., M]:
    def child(**extra_labels: str) -> M:
        return metric.labels(**service_labels(), **extra_labels)
    return child


def counter(name: str, description: str, labels: list[str] | None = None) -> Callable[..., Counter]:
    """
    Register a counter; call the result with any extra labels to get the child.

    Usage:
        generated_total = counter("chronoid_ids_generated_total", "Identifiers minted", ["kind"])
        generated_total(kind="time").inc()
    """
    return _labelled(Counter(name, description, SERVICE_LABELS + (labels or [])))


def gauge(name: str, description: str, labels: list[str] | None = None) -> Callable[..., Gauge]:
    """Register a gauge; same calling convention as counter()."""
    return _labelled(Gauge(name, description, SERVICE_LABELS + (labels or [])))


__all__ = ["counter", "gauge", "service_labels"]
