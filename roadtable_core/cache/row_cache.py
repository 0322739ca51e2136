"""RoadTable Row Cache - Per-Context Row-by-Row Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Optional, TYPE_CHECKING

from roadtable_core.cache.scoped import ContextScopedStrategy
from roadtable_core.cache.slots import CacheSlots, index_rows
from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import IntegrityError, NoRowError

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.cached import CachedTable

logger = logging.getLogger(__name__)


class _Absent:
    """Marker for a key confirmed to have no row."""

    def __repr__(self) -> str:
        return "<absent>"


ABSENT = _Absent()


class RowCacheStrategy(ContextScopedStrategy):
    """Caches rows one at a time, once per context.

    get() does not need the whole table:

    1. A cached row, or a cached "absent" marker, answers immediately
    2. Once every row is loaded for the context, an unknown key is absent
    3. Otherwise a single-row query runs; its row is cached, and a clean
       NoRowError records the key as absent

    A data source failure records nothing, so the next call queries again.
    A full-table load fills the index with every row.
    """

    scope = CacheScope.ROW

    def _index_loaded_rows(self, table: "CachedTable", rows: FrozenSet[Any]) -> Optional[Dict[Any, Any]]:
        return index_rows(table, rows)

    def _insert(self, slots: CacheSlots, table: "CachedTable", canonical_key: Any, row: Any) -> None:
        actual_key = table.canonicalize(row.key)
        if actual_key != canonical_key:
            raise IntegrityError(
                f"{table.name}: row key {row.key!r} does not match requested key {canonical_key!r}",
                table.name,
            )
        if slots.index is None:
            slots.index = {}
        slots.index[canonical_key] = row

    def add_to_cache(
        self,
        table: "CachedTable",
        canonical_key: Any,
        row: Any,
        context: Optional["CacheContext"] = None,
    ) -> None:
        """Add a single row to the calling context's index."""
        self._insert(self._slots(context), table, canonical_key, row)

    def get(self, table: "CachedTable", key: Any, context: Optional["CacheContext"] = None) -> Any:
        canonical_key = table.canonicalize(key)
        slots = self._slots(context)

        index = slots.index
        if index is not None and canonical_key in index:
            row = index[canonical_key]
            if row is ABSENT:
                table.metrics.record_not_found()
                raise NoRowError(table.name, key)
            table.metrics.record_hit()
            return row

        # Doesn't exist when all rows have been loaded
        if slots.unsorted_rows is not None:
            table.metrics.record_not_found()
            raise NoRowError(table.name, key)

        table.metrics.record_miss()
        try:
            row = table.fetch_row(canonical_key)
        except NoRowError as err:
            if slots.index is None:
                slots.index = {}
            slots.index[canonical_key] = ABSENT
            table.metrics.record_not_found()
            logger.debug(f"{table.name}: cached absent key {canonical_key!r}")
            raise NoRowError(table.name, key) from err

        self._insert(slots, table, canonical_key, row)
        return row


__all__ = ["RowCacheStrategy", "ABSENT"]
