"""RoadTable Scoped Cache - Shared Base for Context-Scoped Strategies.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Optional, TYPE_CHECKING

from roadtable_core.cache.context import CacheContext
from roadtable_core.cache.slots import CacheSlots
from roadtable_core.cache.strategy import CacheStrategy

if TYPE_CHECKING:
    from roadtable_core.table.cached import CachedTable

logger = logging.getLogger(__name__)


class ContextScopedStrategy(CacheStrategy):
    """Base for strategies that keep their caches in a CacheContext.

    Every slot lives in the caller's context, so there is no locking and
    nothing loaded in one context is ever visible from another. Subclasses
    decide how get() uses the key index and whether a full load fills it.
    """

    context_scoped = True

    def _slots(self, context: Optional[CacheContext]) -> CacheSlots:
        return CacheContext.resolve(context).slots_for(self)

    def _index_loaded_rows(
        self,
        table: "CachedTable",
        rows: FrozenSet[Any],
    ) -> Optional[Dict[Any, Any]]:
        """Build the key index at full-load time.

        The default builds it lazily in get() instead.

        Returns:
            Complete index, or None
        """
        return None

    def _reset(self, table: "CachedTable", context: Optional[CacheContext]) -> None:
        resolved = CacheContext.resolve(context, required=False)
        if resolved is not None and resolved.discard(self):
            logger.debug(f"{table.name}: caches cleared for {resolved.name}")

    def clear_caches(self, table: "CachedTable", context: Optional[CacheContext] = None) -> None:
        """Clear all caches of the calling context."""
        self._reset(table, context)

    def table_updated(self, table: "CachedTable", context: Optional[CacheContext] = None) -> None:
        """Clear all caches of the calling context."""
        self._reset(table, context)

    def get_unsorted_rows(
        self,
        table: "CachedTable",
        context: Optional[CacheContext] = None,
    ) -> FrozenSet[Any]:
        slots = self._slots(context)
        rows = slots.unsorted_rows
        if rows is None:
            rows = table.fetch_rows()
            index = self._index_loaded_rows(table, rows)
            table.all_rows_loaded(rows, context)
            # Nothing is published until the hook has succeeded
            if index is not None:
                slots.index = index
            slots.unsorted_rows = rows
        return rows

    def get_rows(self, table: "CachedTable", context: Optional[CacheContext] = None) -> tuple:
        slots = self._slots(context)
        rows = slots.sorted_rows
        if rows is None:
            rows = tuple(sorted(self.get_unsorted_rows(table, context)))
            slots.sorted_rows = rows
        return rows


__all__ = ["ContextScopedStrategy"]
