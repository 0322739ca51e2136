"""RoadTable Metrics Collector - Table Cache Metrics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


@dataclass
class TableMetrics:
    """Snapshot of a table's cache metrics.

    Attributes:
        hits: Lookups answered from an existing index
        misses: Lookups that had to load rows first
        not_found: Lookups that ended in NoRowError
        full_loads: Whole-table loads
        row_loads: Single-row loads
        load_errors: Loader failures
        invalidations: table_updated calls
        load_seconds_total: Time spent in loaders
    """

    hits: int = 0
    misses: int = 0
    not_found: int = 0
    full_loads: int = 0
    row_loads: int = 0
    load_errors: int = 0
    invalidations: int = 0
    load_seconds_total: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    @property
    def avg_load_seconds(self) -> float:
        """Average duration of a successful load."""
        loads = self.full_loads + self.row_loads
        return self.load_seconds_total / loads if loads > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Metrics dictionary
        """
        result = asdict(self)
        result["hit_rate"] = self.hit_rate
        result["avg_load_seconds"] = self.avg_load_seconds
        return result


class MetricsCollector:
    """Collects cache metrics for one table.

    Thread-safe; global tables record from many threads at once. A disabled
    collector ignores every record call.

    Example:
        collector = MetricsCollector()
        collector.record_hit()
        collector.record_full_load(0.12)

        metrics = collector.get_metrics()
        print(f"Hit rate: {metrics.hit_rate:.2%}")
    """

    def __init__(self, enabled: bool = True):
        """Initialize collector.

        Args:
            enabled: Whether to record anything
        """
        self.enabled = enabled
        self._metrics = TableMetrics()
        self._lock = threading.RLock()
        self._exporters: List[Callable[[TableMetrics], None]] = []

    def record_hit(self) -> None:
        """Record a lookup served from cache."""
        if self.enabled:
            with self._lock:
                self._metrics.hits += 1

    def record_miss(self) -> None:
        """Record a lookup that needed a load."""
        if self.enabled:
            with self._lock:
                self._metrics.misses += 1

    def record_not_found(self) -> None:
        """Record a lookup with no row."""
        if self.enabled:
            with self._lock:
                self._metrics.not_found += 1

    def record_full_load(self, seconds: float) -> None:
        """Record a whole-table load.

        Args:
            seconds: Load duration
        """
        if self.enabled:
            with self._lock:
                self._metrics.full_loads += 1
                self._metrics.load_seconds_total += seconds

    def record_row_load(self, seconds: float) -> None:
        """Record a single-row load.

        Args:
            seconds: Load duration
        """
        if self.enabled:
            with self._lock:
                self._metrics.row_loads += 1
                self._metrics.load_seconds_total += seconds

    def record_load_error(self) -> None:
        """Record a loader failure."""
        if self.enabled:
            with self._lock:
                self._metrics.load_errors += 1

    def record_invalidation(self) -> None:
        """Record a table_updated call."""
        if self.enabled:
            with self._lock:
                self._metrics.invalidations += 1

    def get_metrics(self) -> TableMetrics:
        """Get a snapshot of the current metrics.

        Returns:
            TableMetrics copy
        """
        with self._lock:
            return TableMetrics(**asdict(self._metrics))

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._metrics = TableMetrics()

    def add_exporter(self, exporter: Callable[[TableMetrics], None]) -> None:
        """Add metrics exporter.

        Args:
            exporter: Callback to receive metrics
        """
        self._exporters.append(exporter)

    def export(self) -> None:
        """Export metrics to all exporters."""
        metrics = self.get_metrics()
        for exporter in self._exporters:
            try:
                exporter(metrics)
            except Exception as e:
                logger.error(f"Exporter error: {e}")

    def __repr__(self) -> str:
        metrics = self.get_metrics()
        return f"MetricsCollector(hits={metrics.hits}, hit_rate={metrics.hit_rate:.2%})"


__all__ = ["MetricsCollector", "TableMetrics"]
