"""RoadTable Row - Keyed Table Row.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from roadtable_core.ordering.comparator import compare_text

if TYPE_CHECKING:
    from roadtable_core.model.model import Model
    from roadtable_core.table.table import Table


class Row:
    """A single row identified by exactly one key.

    Equality requires the same row class, the same model instance and equal
    canonical keys. The hash is the hash of the canonical key, consistent
    with that equality.

    Ordering follows the key. When both keys are strings the model
    comparator decides, except that equal strings are always equal.

    Subclasses add their own columns:

        class User(Row):
            def __init__(self, table, username, email):
                super().__init__(table, username)
                self.email = email
    """

    def __init__(self, table: "Table", key: Any):
        """Initialize row.

        Args:
            table: Owning table
            key: Row key
        """
        self._table = table
        self._key = key

    @property
    def key(self) -> Any:
        """Get the row key."""
        return self._key

    @property
    def table(self) -> "Table":
        """Get the owning table."""
        return self._table

    @property
    def model(self) -> "Model":
        """Get the model of the owning table."""
        return self._table.model

    @property
    def canonical_key(self) -> Any:
        """Get the canonical form of the key."""
        return self._table.canonicalize(self._key)

    def compare_to(self, other: "Row") -> int:
        """Compare with another row by key.

        Args:
            other: Row to compare with

        Returns:
            -1, 0 or 1
        """
        key1 = self._key
        key2 = other._key
        if isinstance(key1, str) and isinstance(key2, str):
            return compare_text(key1, key2, self.model.get_comparator())
        return (key1 > key2) - (key1 < key2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        if type(self) is not type(other):
            return False
        if self.model is not other.model:
            return False
        return self.canonical_key == other.canonical_key

    def __hash__(self) -> int:
        return hash(self.canonical_key)

    def __lt__(self, other: "Row") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "Row") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Row") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "Row") -> bool:
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return str(self._key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table.name!r}, key={self._key!r})"


__all__ = ["Row"]
