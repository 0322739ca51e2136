"""RoadTable Table - Abstract Table Contract.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Generic, Optional, TypeVar, TYPE_CHECKING

from roadtable_core.table.views import TableMap, TableSortedMap

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.model.model import Model

K = TypeVar("K")
R = TypeVar("R")


def identity_key(key: Any) -> Any:
    """Canonicalize a key to itself."""
    return key


def casefold_key(key: Any) -> Any:
    """Canonicalize string keys case-insensitively.

    Non-string keys are returned unchanged.
    """
    return key.casefold() if isinstance(key, str) else key


class Table(ABC, Generic[K, R]):
    """Read interface shared by every table.

    A table owns rows keyed by K. Keys are canonicalized before any lookup
    or indexing, so two keys with the same canonical form always find the
    same row. The canonicalization function must be pure and idempotent.

    Every read takes an optional CacheContext. Context-scoped tables need
    one (explicit or active); other tables ignore it.

    Example:
        row = table.get("alice")
        for row in table.get_rows():
            print(row)
        "alice" in table.get_map()
    """

    def __init__(
        self,
        model: "Model",
        name: str,
        canonicalize: Optional[Callable[[K], K]] = None,
    ):
        """Initialize table and register it with the model.

        Args:
            model: Owning model
            name: Table name, unique within the model
            canonicalize: Key canonicalization function
        """
        self.model = model
        self.name = name
        self._canonicalize = canonicalize or identity_key
        model.register_table(self)

    def canonicalize(self, key: K) -> K:
        """Get the canonical form of a key.

        Args:
            key: Any key

        Returns:
            Canonical key
        """
        return self._canonicalize(key)

    @property
    def context_scoped(self) -> bool:
        """Whether cached state lives in a CacheContext."""
        return False

    @abstractmethod
    def get(self, key: K, context: Optional["CacheContext"] = None) -> R:
        """Get a row by key.

        Args:
            key: Row key
            context: Cache context

        Returns:
            Row

        Raises:
            NoRowError: If there is no row for the key
        """
        pass

    @abstractmethod
    def get_unsorted_rows(self, context: Optional["CacheContext"] = None) -> FrozenSet[R]:
        """Get all rows in no particular order.

        Args:
            context: Cache context

        Returns:
            Frozen set of rows
        """
        pass

    @abstractmethod
    def get_rows(self, context: Optional["CacheContext"] = None) -> tuple:
        """Get all rows sorted by row order.

        Args:
            context: Cache context

        Returns:
            Tuple of rows
        """
        pass

    def get_map(self, context: Optional["CacheContext"] = None) -> TableMap:
        """Get a read-only key -> row view.

        Args:
            context: Cache context used by the view

        Returns:
            TableMap
        """
        return TableMap(self, context)

    def get_sorted_map(self, context: Optional["CacheContext"] = None) -> TableSortedMap:
        """Get a read-only key -> row view iterating in row order.

        Args:
            context: Cache context used by the view

        Returns:
            TableSortedMap
        """
        return TableSortedMap(self, context)

    def size(self, context: Optional["CacheContext"] = None) -> int:
        """Get the number of rows.

        Args:
            context: Cache context

        Returns:
            Row count
        """
        return len(self.get_unsorted_rows(context))

    def clear_caches(self, context: Optional["CacheContext"] = None) -> None:
        """Clear caches that only live as long as a context.

        The default does nothing.
        """

    def table_updated(self, context: Optional["CacheContext"] = None) -> None:
        """Signal that the backing data may have changed.

        The default does nothing.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["Table", "identity_key", "casefold_key"]
