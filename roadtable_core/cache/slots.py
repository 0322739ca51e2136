"""RoadTable Cache Slots - Cached Row State and Key Indexing.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Optional, TYPE_CHECKING

from roadtable_core.errors import DuplicateKeyError

if TYPE_CHECKING:
    from roadtable_core.table.table import Table


@dataclass
class CacheSlots:
    """The three caches kept for one table in one scope.

    Attributes:
        unsorted_rows: All rows, once loaded
        sorted_rows: All rows in row order, once sorted
        index: Canonical key -> row. For whole-table strategies None means
            not built and a dict is complete. The per-row strategy keeps a
            partial dict that may hold confirmed-absent markers.
    """

    unsorted_rows: Optional[FrozenSet[Any]] = None
    sorted_rows: Optional[tuple] = None
    index: Optional[Dict[Any, Any]] = None

    def clear(self) -> None:
        """Reset every slot."""
        self.unsorted_rows = None
        self.sorted_rows = None
        self.index = None


def index_rows(table: "Table", rows: Iterable[Any]) -> Dict[Any, Any]:
    """Build a canonical key index over rows.

    Args:
        table: Table supplying canonicalization
        rows: Rows to index

    Returns:
        Dict of canonical key -> row

    Raises:
        DuplicateKeyError: If two rows share a canonical key
    """
    index: Dict[Any, Any] = {}
    for row in rows:
        canonical_key = table.canonicalize(row.key)
        if canonical_key in index:
            raise DuplicateKeyError(table.name, row.key, canonical_key)
        index[canonical_key] = row
    return index


__all__ = ["CacheSlots", "index_rows"]
