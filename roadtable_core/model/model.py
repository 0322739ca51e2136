"""RoadTable Model - Data Model and Table Registry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

from roadtable_core.errors import ConfigurationError
from roadtable_core.ordering.comparator import Comparator, default_comparator

if TYPE_CHECKING:
    from roadtable_core.cache.context import CacheContext
    from roadtable_core.table.table import Table

logger = logging.getLogger(__name__)


class Model:
    """A family of tables sharing one text ordering.

    The model supplies the locale comparator used for row ordering and
    tuple columns, and keeps a registry of its tables so caches can be
    cleared model-wide (for example at the end of a request).

    Rows from two different model instances never compare equal, even when
    their keys do.

    Example:
        model = Model("accounts")
        users = CachedTable(model, "users", rows_loader=load_users)
        model.get_table("users") is users  # True

        # End of request
        model.clear_caches(context)
    """

    def __init__(self, name: str = "model", comparator: Optional[Comparator] = None):
        """Initialize model.

        Args:
            name: Model name
            comparator: Text comparator, defaults to the shared SmartComparator
        """
        self.name = name
        self._comparator = comparator or default_comparator()
        self._tables: Dict[str, "Table"] = {}
        self._lock = threading.RLock()

    def get_comparator(self) -> Comparator:
        """Get the comparator used for all text ordering in this model.

        Returns:
            Comparator function
        """
        return self._comparator

    def register_table(self, table: "Table") -> "Table":
        """Register a table.

        Tables register themselves on construction.

        Args:
            table: Table to register

        Returns:
            The registered table

        Raises:
            ConfigurationError: If another table already uses the name
        """
        with self._lock:
            existing = self._tables.get(table.name)
            if existing is not None and existing is not table:
                raise ConfigurationError(
                    f"Model {self.name!r} already has a table named {table.name!r}",
                    table.name,
                )
            self._tables[table.name] = table
            logger.debug(f"Model {self.name}: registered table {table.name}")
            return table

    def get_table(self, name: str) -> Optional["Table"]:
        """Get table by name.

        Args:
            name: Table name

        Returns:
            Table or None
        """
        return self._tables.get(name)

    @property
    def tables(self) -> List["Table"]:
        """Get all registered tables."""
        with self._lock:
            return list(self._tables.values())

    def clear_caches(self, context: Optional["CacheContext"] = None) -> None:
        """Clear the caches of every table.

        Global tables are left alone: only an explicit table_updated
        invalidates process-wide state.

        Args:
            context: Context whose caches are cleared
        """
        for table in self.tables:
            table.clear_caches(context)

    def table_updated(self, name: str, context: Optional["CacheContext"] = None) -> None:
        """Signal that the backing data of a table changed.

        Args:
            name: Table name
            context: Context for context-scoped tables

        Raises:
            ConfigurationError: If the table is unknown
        """
        table = self.get_table(name)
        if table is None:
            raise ConfigurationError(f"Model {self.name!r} has no table named {name!r}", name)
        table.table_updated(context)

    def __contains__(self, name: str) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator["Table"]:
        return iter(self.tables)

    def __repr__(self) -> str:
        return f"Model(name={self.name!r}, tables={len(self._tables)})"


__all__ = ["Model"]
