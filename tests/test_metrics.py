"""Tests for table cache metrics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import DataSourceError, NoRowError
from roadtable_core.metrics.collector import MetricsCollector, TableMetrics


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_hit_rate(self):
        """Test hit rate calculation."""
        collector = MetricsCollector()
        collector.record_hit()
        collector.record_hit()
        collector.record_hit()
        collector.record_miss()

        assert collector.get_metrics().hit_rate == 0.75

    def test_empty_rates(self):
        """Test rates without data."""
        metrics = TableMetrics()

        assert metrics.hit_rate == 0.0
        assert metrics.avg_load_seconds == 0.0

    def test_load_times(self):
        """Test load durations are averaged."""
        collector = MetricsCollector()
        collector.record_full_load(0.3)
        collector.record_row_load(0.1)

        metrics = collector.get_metrics()
        assert metrics.full_loads == 1
        assert metrics.row_loads == 1
        assert metrics.avg_load_seconds == pytest.approx(0.2)

    def test_disabled(self):
        """Test a disabled collector records nothing."""
        collector = MetricsCollector(enabled=False)
        collector.record_hit()
        collector.record_load_error()

        assert collector.get_metrics() == TableMetrics()

    def test_snapshot_and_reset(self):
        """Test snapshots are copies and reset clears."""
        collector = MetricsCollector()
        collector.record_hit()
        snapshot = collector.get_metrics()
        collector.record_hit()

        assert snapshot.hits == 1
        collector.reset()
        assert collector.get_metrics().hits == 0

    def test_exporters(self):
        """Test exporters receive metrics and failures are isolated."""
        collector = MetricsCollector()
        received = []

        def broken(metrics):
            raise RuntimeError("exporter down")

        collector.add_exporter(broken)
        collector.add_exporter(received.append)
        collector.record_invalidation()
        collector.export()

        assert received[0].invalidations == 1

    def test_to_dict(self):
        """Test dictionary export includes derived values."""
        data = TableMetrics(hits=1, misses=1).to_dict()

        assert data["hits"] == 1
        assert data["hit_rate"] == 0.5
        assert "avg_load_seconds" in data


class TestTableMetrics:
    """Tests for metrics recorded by cached tables."""

    def test_global_counts(self, make_table):
        """Test hits, misses and not-found lookups."""
        table, _, _ = make_table([("a", 1)])
        table.get("a")
        table.get("a")
        with pytest.raises(NoRowError):
            table.get("zzz")
        table.table_updated()

        metrics = table.get_metrics()
        assert metrics.misses == 1
        assert metrics.hits == 2
        assert metrics.not_found == 1
        assert metrics.full_loads == 1
        assert metrics.invalidations == 1

    def test_row_counts(self, make_table, context):
        """Test single-row loads are recorded."""
        table, _, _ = make_table([("a", 1)], scope=CacheScope.ROW)
        table.get("a")
        table.get("a")

        metrics = table.get_metrics()
        assert metrics.row_loads == 1
        assert metrics.misses == 1
        assert metrics.hits == 1

    def test_load_errors(self, make_table):
        """Test loader failures are counted."""
        table, loader, _ = make_table([("a", 1)])
        loader.error = OSError("disk")

        with pytest.raises(DataSourceError):
            table.get_rows()

        assert table.get_metrics().load_errors == 1

    def test_metrics_disabled(self, make_table):
        """Test tables can turn metrics off."""
        table, _, _ = make_table([("a", 1)], enable_metrics=False)
        table.get("a")

        assert table.get_metrics().misses == 0
