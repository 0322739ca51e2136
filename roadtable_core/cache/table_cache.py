"""RoadTable Table Cache - Per-Context Whole-Table Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

from roadtable_core.cache.scoped import ContextScopedStrategy
from roadtable_core.cache.slots import index_rows
from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import NoRowError

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.cached import CachedTable


class TableCacheStrategy(ContextScopedStrategy):
    """Caches the entire table on first use, once per context.

    1. All rows are loaded and stored unsorted
    2. all_rows_loaded is called with the unsorted rows
    3. The key index is built on the first get()
    4. Rows are sorted on the first get_rows()

    Each context queries the table again, and no context ever sees rows
    loaded by another.
    """

    scope = CacheScope.TABLE

    def get(self, table: "CachedTable", key: Any, context: Optional["CacheContext"] = None) -> Any:
        slots = self._slots(context)
        index = slots.index
        if index is None:
            table.metrics.record_miss()
            index = index_rows(table, self.get_unsorted_rows(table, context))
            slots.index = index
        else:
            table.metrics.record_hit()

        row = index.get(table.canonicalize(key))
        if row is None:
            table.metrics.record_not_found()
            raise NoRowError(table.name, key)
        return row


__all__ = ["TableCacheStrategy"]
