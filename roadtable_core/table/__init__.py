"""Table module - Table contract, views and cached tables."""

from roadtable_core.table.views import (
    TableMap,
    TableSortedMap,
)
from roadtable_core.table.table import (
    Table,
    casefold_key,
    identity_key,
)
from roadtable_core.table.empty import EmptyTable
from roadtable_core.table.cached import (
    CachedTable,
    TableConfig,
)

__all__ = [
    "Table",
    "identity_key",
    "casefold_key",
    "TableMap",
    "TableSortedMap",
    "EmptyTable",
    "CachedTable",
    "TableConfig",
]
