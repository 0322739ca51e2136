"""Metrics module - Table cache metrics."""

from roadtable_core.metrics.collector import (
    MetricsCollector,
    TableMetrics,
)

__all__ = [
    "MetricsCollector",
    "TableMetrics",
]
