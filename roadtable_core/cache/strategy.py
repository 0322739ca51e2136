"""RoadTable Cache Strategy - Abstract Caching Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, FrozenSet, Optional, TYPE_CHECKING

from roadtable_core.errors import ConfigurationError, UnsupportedOperationError

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.cached import CachedTable


class CacheScope(Enum):
    """Where a table keeps its cached rows."""

    GLOBAL = auto()   # Process-wide, shared, loaded once until updated
    TABLE = auto()    # Per context, whole table loaded on first use
    ROW = auto()      # Per context, rows loaded one by one on demand


class CacheStrategy(ABC):
    """Abstract caching policy for a CachedTable.

    A strategy instance belongs to exactly one table and holds (or, for
    context-scoped strategies, locates) that table's cached rows. The table
    supplies loading and canonicalization; the strategy decides when to load
    and what to keep.

    Implementations:
    - GlobalCacheStrategy: one shared cache guarded by per-slot locks
    - TableCacheStrategy: per-context, whole table at a time
    - RowCacheStrategy: per-context, single rows with negative caching
    """

    scope: CacheScope
    context_scoped: bool = False

    @abstractmethod
    def get(self, table: "CachedTable", key: Any, context: Optional["CacheContext"] = None) -> Any:
        """Get one row by key.

        Args:
            table: Owning table
            key: Row key, canonicalized by the strategy
            context: Cache context

        Returns:
            Row

        Raises:
            NoRowError: If there is no row for the key
        """
        pass

    @abstractmethod
    def get_unsorted_rows(
        self,
        table: "CachedTable",
        context: Optional["CacheContext"] = None,
    ) -> FrozenSet[Any]:
        """Get all rows in no particular order.

        Args:
            table: Owning table
            context: Cache context

        Returns:
            Frozen set of rows
        """
        pass

    @abstractmethod
    def get_rows(self, table: "CachedTable", context: Optional["CacheContext"] = None) -> tuple:
        """Get all rows in row order.

        Args:
            table: Owning table
            context: Cache context

        Returns:
            Tuple of rows
        """
        pass

    @abstractmethod
    def table_updated(self, table: "CachedTable", context: Optional["CacheContext"] = None) -> None:
        """Invalidate cached state after the backing data changed.

        Args:
            table: Owning table
            context: Cache context
        """
        pass

    def clear_caches(self, table: "CachedTable", context: Optional["CacheContext"] = None) -> None:
        """Drop caches that are not meant to outlive a context.

        The default keeps everything.

        Args:
            table: Owning table
            context: Cache context
        """

    def add_to_cache(
        self,
        table: "CachedTable",
        canonical_key: Any,
        row: Any,
        context: Optional["CacheContext"] = None,
    ) -> None:
        """Insert a row known from elsewhere into the key index.

        Args:
            table: Owning table
            canonical_key: Canonical key of the row
            row: Row to cache
            context: Cache context

        Raises:
            UnsupportedOperationError: If the strategy has no per-row index
        """
        raise UnsupportedOperationError(
            f"{table.name}: {self.scope.name.lower()} cache does not accept single rows",
            table.name,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def create_strategy(scope: CacheScope) -> CacheStrategy:
    """Create the strategy for a scope.

    Args:
        scope: Cache scope

    Returns:
        New CacheStrategy

    Raises:
        ConfigurationError: If the scope is unknown
    """
    from roadtable_core.cache.global_cache import GlobalCacheStrategy
    from roadtable_core.cache.row_cache import RowCacheStrategy
    from roadtable_core.cache.table_cache import TableCacheStrategy

    strategies = {
        CacheScope.GLOBAL: GlobalCacheStrategy,
        CacheScope.TABLE: TableCacheStrategy,
        CacheScope.ROW: RowCacheStrategy,
    }
    strategy_class = strategies.get(scope)
    if strategy_class is None:
        raise ConfigurationError(f"Unknown cache scope: {scope!r}")
    return strategy_class()


__all__ = ["CacheScope", "CacheStrategy", "create_strategy"]
