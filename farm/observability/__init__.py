"""Observability layer: in-memory metrics. No external SaaS."""

from farm.observability.metrics import MetricsCollector

__all__ = [
    "MetricsCollector",
]
