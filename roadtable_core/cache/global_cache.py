"""RoadTable Global Cache - Process-Wide Shared Table Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, FrozenSet, Optional, TYPE_CHECKING

from roadtable_core.cache.slots import CacheSlots, index_rows
from roadtable_core.cache.strategy import CacheScope, CacheStrategy
from roadtable_core.errors import NoRowError

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.cached import CachedTable

logger = logging.getLogger(__name__)


class GlobalCacheStrategy(CacheStrategy):
    """Caches the entire table on first use, shared by every caller.

    The backing store is queried at most once until table_updated:

    1. All rows are loaded and stored unsorted
    2. all_rows_loaded is called with the unsorted rows
    3. The key index is built on the first get()
    4. Rows are sorted on the first get_rows()

    Each slot has its own lock, so sorting never waits on an index rebuild
    and the other way around. A slot lock is held for the whole
    load-and-publish sequence: callers see either the previous value or the
    fully built new one. Slots are read once without the lock and checked
    again under it.

    Contexts are ignored.
    """

    scope = CacheScope.GLOBAL

    def __init__(self):
        """Initialize strategy."""
        self._slots = CacheSlots()
        self._unsorted_lock = threading.RLock()
        self._sorted_lock = threading.RLock()
        self._index_lock = threading.RLock()

    def table_updated(self, table: "CachedTable", context: Optional["CacheContext"] = None) -> None:
        """Clear the unsorted, sorted and index slots."""
        with self._unsorted_lock:
            self._slots.unsorted_rows = None
        with self._sorted_lock:
            self._slots.sorted_rows = None
        with self._index_lock:
            self._slots.index = None
        logger.debug(f"{table.name}: global cache cleared")

    def get_unsorted_rows(
        self,
        table: "CachedTable",
        context: Optional["CacheContext"] = None,
    ) -> FrozenSet[Any]:
        rows = self._slots.unsorted_rows
        if rows is not None:
            return rows

        with self._unsorted_lock:
            rows = self._slots.unsorted_rows
            if rows is None:
                rows = table.fetch_rows()
                table.all_rows_loaded(rows, context)
                self._slots.unsorted_rows = rows
            return rows

    def get_rows(self, table: "CachedTable", context: Optional["CacheContext"] = None) -> tuple:
        rows = self._slots.sorted_rows
        if rows is not None:
            return rows

        with self._sorted_lock:
            rows = self._slots.sorted_rows
            if rows is None:
                rows = tuple(sorted(self.get_unsorted_rows(table, context)))
                self._slots.sorted_rows = rows
            return rows

    def get(self, table: "CachedTable", key: Any, context: Optional["CacheContext"] = None) -> Any:
        canonical_key = table.canonicalize(key)

        index = self._slots.index
        if index is None:
            with self._index_lock:
                index = self._slots.index
                if index is None:
                    # Load all rows in a single query
                    table.metrics.record_miss()
                    index = index_rows(table, self.get_unsorted_rows(table, context))
                    self._slots.index = index
                else:
                    table.metrics.record_hit()
        else:
            table.metrics.record_hit()

        row = index.get(canonical_key)
        if row is None:
            table.metrics.record_not_found()
            raise NoRowError(table.name, key)
        return row

    def __repr__(self) -> str:
        loaded = self._slots.unsorted_rows is not None
        return f"GlobalCacheStrategy(loaded={loaded})"


__all__ = ["GlobalCacheStrategy"]
