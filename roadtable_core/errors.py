"""RoadTable Errors - Table and Cache Error Hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

All errors raised by the table layer derive from TableError:

    TableError
    ├── NoRowError                 (also a KeyError)
    ├── IntegrityError
    │   └── DuplicateKeyError
    ├── UnsupportedOperationError  (also a TypeError)
    ├── DataSourceError
    ├── ContextError
    └── ConfigurationError
"""

from __future__ import annotations

from typing import Any, Optional


class TableError(Exception):
    """Base exception for table and cache failures.

    Attributes:
        message: Human readable message
        table_name: Name of the table involved, if any
    """

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table_name = table_name

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message
        return self.message


class NoRowError(TableError, KeyError):
    """Requested key has no corresponding row.

    This is the expected outcome of a lookup miss. It is a KeyError so the
    read-only mapping views satisfy the Mapping protocol unchanged.
    """

    def __init__(self, table_name: str, key: Any):
        super().__init__(f"{table_name} not found: {key}", table_name)
        self.key = key


class IntegrityError(TableError):
    """Loaded data breaks the canonical key contract."""


class DuplicateKeyError(IntegrityError):
    """Two loaded rows share the same canonical key."""

    def __init__(self, table_name: str, key: Any, canonical_key: Any):
        super().__init__(
            f"{table_name}: duplicate key: {key} (canonical {canonical_key!r})",
            table_name,
        )
        self.key = key
        self.canonical_key = canonical_key


class UnsupportedOperationError(TableError, TypeError):
    """Operation is not supported, e.g. mutating a read-only view."""


class DataSourceError(TableError):
    """A row loader failed.

    The original exception is always available as ``__cause__``.
    """


class ContextError(TableError):
    """No usable cache context for a context-scoped table."""


class ConfigurationError(TableError):
    """Invalid table or model configuration."""


__all__ = [
    "TableError",
    "NoRowError",
    "IntegrityError",
    "DuplicateKeyError",
    "UnsupportedOperationError",
    "DataSourceError",
    "ContextError",
    "ConfigurationError",
]
