"""RoadTable Cached Table - Read-Through Cached Table.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, Optional, TYPE_CHECKING

from roadtable_core.cache.slots import index_rows
from roadtable_core.cache.strategy import CacheScope, CacheStrategy, create_strategy
from roadtable_core.errors import ConfigurationError, DataSourceError, TableError
from roadtable_core.metrics.collector import MetricsCollector, TableMetrics
from roadtable_core.table.table import Table

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.model.model import Model

logger = logging.getLogger(__name__)


@dataclass
class TableConfig:
    """Cached table configuration.

    Attributes:
        scope: Where rows are cached
        enable_metrics: Collect cache metrics
        slow_load_seconds: Warn when a full load takes longer (None disables)
    """

    scope: CacheScope = CacheScope.GLOBAL
    enable_metrics: bool = True
    slow_load_seconds: Optional[float] = 5.0


class CachedTable(Table):
    """Table that loads rows on demand and caches them.

    Loading is external: pass ``rows_loader`` (all rows) and, for the ROW
    scope, ``row_loader`` (one row by canonical key), or override
    load_rows() / load_row() in a subclass. Caching is delegated to the
    strategy selected by ``config.scope``.

    Loader failures are re-raised as DataSourceError with the original
    exception as the cause; NoRowError and other TableErrors pass through.
    Nothing is retried and nothing is cached on failure.

    Example:
        model = Model()
        users = CachedTable(
            model,
            "users",
            rows_loader=lambda: [User(users, name) for name in db.all_names()],
            canonicalize=casefold_key,
        )
        users.get("Alice") is users.get("alice")  # True

        accounts = CachedTable(
            model,
            "accounts",
            TableConfig(scope=CacheScope.ROW),
            rows_loader=load_accounts,
            row_loader=load_account,
        )
        with CacheContext():
            accounts.get(42)
    """

    def __init__(
        self,
        model: "Model",
        name: str,
        config: Optional[TableConfig] = None,
        *,
        rows_loader: Optional[Callable[[], Iterable[Any]]] = None,
        row_loader: Optional[Callable[[Any], Any]] = None,
        canonicalize: Optional[Callable[[Any], Any]] = None,
    ):
        """Initialize cached table.

        Args:
            model: Owning model
            name: Table name
            config: Table configuration
            rows_loader: Loads every row
            row_loader: Loads one row by canonical key, raising NoRowError
            canonicalize: Key canonicalization function
        """
        super().__init__(model, name, canonicalize)
        self.config = config or TableConfig()
        self._rows_loader = rows_loader
        self._row_loader = row_loader
        self._metrics = MetricsCollector(enabled=self.config.enable_metrics)
        self._strategy: CacheStrategy = create_strategy(self.config.scope)

    @property
    def scope(self) -> CacheScope:
        """Get the cache scope."""
        return self.config.scope

    @property
    def strategy(self) -> CacheStrategy:
        """Get the cache strategy."""
        return self._strategy

    @property
    def metrics(self) -> MetricsCollector:
        """Get the metrics collector."""
        return self._metrics

    @property
    def context_scoped(self) -> bool:
        return self._strategy.context_scoped

    def get_metrics(self) -> TableMetrics:
        """Get a snapshot of the cache metrics.

        Returns:
            TableMetrics
        """
        return self._metrics.get_metrics()

    # Loading

    def load_rows(self) -> Iterable[Any]:
        """Load every row from the backing store, bypassing the cache.

        Returns:
            Rows

        Raises:
            ConfigurationError: If there is no loader
        """
        if self._rows_loader is None:
            raise ConfigurationError(f"{self.name}: no rows loader configured", self.name)
        return self._rows_loader()

    def load_row(self, canonical_key: Any) -> Any:
        """Load one row from the backing store, bypassing the cache.

        Args:
            canonical_key: Canonical key

        Returns:
            Row

        Raises:
            NoRowError: If there is no row for the key
            ConfigurationError: If there is no loader
        """
        if self._row_loader is None:
            raise ConfigurationError(f"{self.name}: no row loader configured", self.name)
        return self._row_loader(canonical_key)

    def all_rows_loaded(self, rows: FrozenSet[Any], context: Optional["CacheContext"] = None) -> None:
        """Called after every full-table load, before the rows are cached.

        Lets subclasses build extra indexes. The default does nothing.

        Args:
            rows: All loaded rows
            context: Cache context of the load
        """

    def fetch_rows(self) -> FrozenSet[Any]:
        """Run load_rows for a strategy.

        Returns:
            Frozen set of rows

        Raises:
            DuplicateKeyError: If two rows share a canonical key
            DataSourceError: If the loader fails
        """
        start = time.perf_counter()
        try:
            loaded = list(self.load_rows())
        except TableError:
            self._metrics.record_load_error()
            raise
        except Exception as e:
            self._metrics.record_load_error()
            logger.error(f"{self.name}: failed to load rows: {e}")
            raise DataSourceError(f"{self.name}: failed to load rows: {e}", self.name) from e
        duration = time.perf_counter() - start

        # Raises before a set could silently collapse equal rows
        index_rows(self, loaded)
        rows = frozenset(loaded)

        self._metrics.record_full_load(duration)
        logger.info(f"{self.name}: loaded {len(rows)} rows in {duration:.3f}s")
        slow = self.config.slow_load_seconds
        if slow is not None and duration > slow:
            logger.warning(f"{self.name}: slow full load ({duration:.3f}s > {slow}s)")
        return rows

    def fetch_row(self, canonical_key: Any) -> Any:
        """Run load_row for a strategy.

        Args:
            canonical_key: Canonical key

        Returns:
            Row

        Raises:
            NoRowError: If there is no row for the key
            DataSourceError: If the loader fails
        """
        start = time.perf_counter()
        try:
            row = self.load_row(canonical_key)
        except TableError:
            raise
        except Exception as e:
            self._metrics.record_load_error()
            logger.error(f"{self.name}: failed to load {canonical_key!r}: {e}")
            raise DataSourceError(f"{self.name}: failed to load {canonical_key!r}: {e}", self.name) from e
        if row is None:
            raise DataSourceError(f"{self.name}: row loader returned None for {canonical_key!r}", self.name)

        self._metrics.record_row_load(time.perf_counter() - start)
        logger.debug(f"{self.name}: loaded row {canonical_key!r}")
        return row

    # Table contract

    def get(self, key: Any, context: Optional["CacheContext"] = None) -> Any:
        return self._strategy.get(self, key, context)

    def get_unsorted_rows(self, context: Optional["CacheContext"] = None) -> FrozenSet[Any]:
        return self._strategy.get_unsorted_rows(self, context)

    def get_rows(self, context: Optional["CacheContext"] = None) -> tuple:
        return self._strategy.get_rows(self, context)

    def add_to_cache(self, row: Any, context: Optional["CacheContext"] = None) -> None:
        """Cache a row that became known through another code path.

        Only the ROW scope keeps single rows.

        Args:
            row: Row of this table
            context: Cache context

        Raises:
            UnsupportedOperationError: If the scope has no per-row index
        """
        self._strategy.add_to_cache(self, self.canonicalize(row.key), row, context)

    def clear_caches(self, context: Optional["CacheContext"] = None) -> None:
        """Clear the calling context's caches; global caches are kept."""
        self._strategy.clear_caches(self, context)

    def table_updated(self, context: Optional["CacheContext"] = None) -> None:
        """Invalidate cached rows so the next read reloads them."""
        self._metrics.record_invalidation()
        self._strategy.table_updated(self, context)

    def __repr__(self) -> str:
        return f"CachedTable(name={self.name!r}, scope={self.scope.name})"


__all__ = ["CachedTable", "TableConfig"]
