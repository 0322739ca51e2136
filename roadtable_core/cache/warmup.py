"""RoadTable Warmup - Table Cache Preloading.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from roadtable_core.cache.context import CacheContext

if TYPE_CHECKING:
    from roadtable_core.model.model import Model
    from roadtable_core.table.table import Table

logger = logging.getLogger(__name__)


@dataclass
class WarmupConfig:
    """Configuration for table warmup.

    Attributes:
        max_workers: Parallel workers for shared tables
        include_sorted: Also build the sorted view
    """

    max_workers: int = 4
    include_sorted: bool = True


@dataclass
class WarmupStats:
    """Warmup operation statistics.

    Attributes:
        total_tables: Tables to warm
        warmed: Successfully warmed
        failed: Failed to warm
        rows_loaded: Rows across warmed tables
        errors: Table name -> error message
        duration_seconds: Total duration
        started_at: Start time
        completed_at: Completion time
    """

    total_tables: int = 0
    warmed: int = 0
    failed: int = 0
    rows_loaded: int = 0
    errors: Dict[str, str] = field(default_factory=dict)
    duration_seconds: float = 0.0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def success_rate(self) -> float:
        """Get success rate."""
        total = self.warmed + self.failed
        return self.warmed / total if total > 0 else 0.0


class TableWarmer:
    """Preloads table caches before they are needed.

    Shared (global) tables load in parallel on a thread pool. Context-scoped
    tables load one after another in the calling thread, into the given or
    active context. A failed table is counted and logged; nothing is
    retried, and the table's cache is left as it was.

    Example:
        warmer = TableWarmer()
        stats = warmer.warm_model(model)

        with CacheContext() as ctx:
            warmer.warm([orders, order_lines], ctx)
    """

    def __init__(self, config: Optional[WarmupConfig] = None):
        """Initialize warmer.

        Args:
            config: Warmup configuration
        """
        self.config = config or WarmupConfig()
        self._stats = WarmupStats()
        self._lock = threading.Lock()

    def warm(
        self,
        tables: Iterable["Table"],
        context: Optional[CacheContext] = None,
    ) -> WarmupStats:
        """Warm tables.

        Args:
            tables: Tables to warm
            context: Context for context-scoped tables

        Returns:
            Warmup statistics
        """
        tables = list(tables)
        self._stats = WarmupStats(total_tables=len(tables), started_at=datetime.now())
        start = time.perf_counter()

        logger.info(f"Starting warmup of {len(tables)} tables")

        shared: List["Table"] = [t for t in tables if not t.context_scoped]
        scoped: List["Table"] = [t for t in tables if t.context_scoped]

        if scoped:
            resolved = CacheContext.resolve(context)
            for table in scoped:
                self._record(table, lambda table=table: self._warm_table(table, resolved))

        if shared:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {executor.submit(self._warm_table, table, None): table for table in shared}
                for future in as_completed(futures):
                    table = futures[future]
                    self._record(table, future.result)

        self._stats.completed_at = datetime.now()
        self._stats.duration_seconds = time.perf_counter() - start

        logger.info(
            f"Warmup completed: {self._stats.warmed} warmed, "
            f"{self._stats.failed} failed, {self._stats.rows_loaded} rows"
        )

        return self._stats

    def warm_model(self, model: "Model", context: Optional[CacheContext] = None) -> WarmupStats:
        """Warm every table of a model.

        Args:
            model: Model to warm
            context: Context for context-scoped tables

        Returns:
            Warmup statistics
        """
        return self.warm(model.tables, context)

    def _warm_table(self, table: "Table", context: Optional[CacheContext]) -> int:
        """Load one table.

        Returns:
            Number of rows
        """
        rows = table.get_unsorted_rows(context)
        if self.config.include_sorted:
            table.get_rows(context)
        return len(rows)

    def _record(self, table: "Table", result) -> None:
        try:
            count = result()
        except Exception as e:
            logger.error(f"Warmup failed for {table.name}: {e}")
            with self._lock:
                self._stats.failed += 1
                self._stats.errors[table.name] = str(e)
            return

        with self._lock:
            self._stats.warmed += 1
            self._stats.rows_loaded += count

    def get_stats(self) -> WarmupStats:
        """Get warmup statistics.

        Returns:
            WarmupStats instance
        """
        return self._stats


__all__ = ["TableWarmer", "WarmupConfig", "WarmupStats"]
