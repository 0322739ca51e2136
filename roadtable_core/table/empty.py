"""RoadTable Empty Table - A Table With No Rows.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Optional, TYPE_CHECKING

from roadtable_core.errors import NoRowError
from roadtable_core.table.table import Table

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext


class EmptyTable(Table):
    """A table that never has any rows.

    Useful as a placeholder where a table is required but nothing is
    stored. Lookups always raise NoRowError; this is normal, not an error
    state.
    """

    def get(self, key: Any, context: Optional["CacheContext"] = None) -> Any:
        raise NoRowError(self.name, key)

    def get_unsorted_rows(self, context: Optional["CacheContext"] = None) -> FrozenSet[Any]:
        return frozenset()

    def get_rows(self, context: Optional["CacheContext"] = None) -> tuple:
        return ()


__all__ = ["EmptyTable"]
