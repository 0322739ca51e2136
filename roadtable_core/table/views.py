"""RoadTable Views - Read-Only Mapping Views of a Table.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Collection, Iterator, Optional, TYPE_CHECKING

from roadtable_core.errors import NoRowError, UnsupportedOperationError

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.table import Table


class TableMap(Mapping):
    """Read-only mapping of key -> row backed by a table's cache.

    Lookups go through Table.get, so canonically equal keys find the same
    row. Every mutating method raises UnsupportedOperationError.
    """

    def __init__(self, table: "Table", context: Optional["CacheContext"] = None):
        """Initialize view.

        Args:
            table: Backing table
            context: Cache context for every read
        """
        self._table = table
        self._context = context

    @property
    def table(self) -> "Table":
        """Get the backing table."""
        return self._table

    def _rows(self) -> Collection[Any]:
        return self._table.get_unsorted_rows(self._context)

    def __getitem__(self, key: Any) -> Any:
        return self._table.get(key, self._context)

    def __contains__(self, key: object) -> bool:
        try:
            self._table.get(key, self._context)
        except NoRowError:
            return False
        return True

    def __iter__(self) -> Iterator[Any]:
        return iter([row.key for row in self._rows()])

    def __len__(self) -> int:
        return self._table.size(self._context)

    def values(self) -> Collection[Any]:
        """Get the rows themselves."""
        return self._rows()

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f"{self._table.name}: {operation} not supported on a read-only table view",
            self._table.name,
        )

    def __setitem__(self, key: Any, value: Any) -> None:
        raise self._unsupported("item assignment")

    def __delitem__(self, key: Any) -> None:
        raise self._unsupported("item deletion")

    def pop(self, key: Any, *default: Any) -> Any:
        raise self._unsupported("pop")

    def popitem(self) -> Any:
        raise self._unsupported("popitem")

    def clear(self) -> None:
        raise self._unsupported("clear")

    def update(self, *args: Any, **kwargs: Any) -> None:
        raise self._unsupported("update")

    def setdefault(self, key: Any, default: Any = None) -> Any:
        raise self._unsupported("setdefault")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table.name!r})"


class TableSortedMap(TableMap):
    """Read-only mapping that iterates keys in row order."""

    comparator = None  # Ordering comes from the rows

    def _rows(self) -> Collection[Any]:
        return self._table.get_rows(self._context)

    def first_key(self) -> Any:
        """Get the key of the first row.

        Raises:
            NoRowError: If the table is empty
        """
        rows = self._rows()
        if not rows:
            raise NoRowError(self._table.name, "first key")
        return rows[0].key

    def last_key(self) -> Any:
        """Get the key of the last row.

        Raises:
            NoRowError: If the table is empty
        """
        rows = self._rows()
        if not rows:
            raise NoRowError(self._table.name, "last key")
        return rows[-1].key


__all__ = ["TableMap", "TableSortedMap"]
