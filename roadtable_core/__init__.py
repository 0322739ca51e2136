"""RoadTable - Cached Tabular Data Layer.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Read-through caching for keyed tables of immutable rows with:
- Global, per-context and per-row cache scopes
- Key canonicalization (e.g. case-insensitive keys)
- Deterministic locale-aware ordering of text and composite keys
- Read-only map views over table contents
- Cannot-remove reasons that merge and render counts
- Cache metrics and table warmup

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                        RoadTable System                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │   Model     │  │    Table    │  │  TableMap   │   TABLE     │
    │  │  registry   │  │  get/rows   │  │  read-only  │   LAYER     │
    │  └──────┬──────┘  └──────┬──────┘  └──────┬──────┘             │
    │         │                │                │                     │
    │  ┌──────┴────────────────┴────────────────┴──────┐             │
    │  │              Cache Strategies                  │             │
    │  │   ┌────────┐  ┌────────┐  ┌────────┐         │   CACHE     │
    │  │   │ Global │  │ Table  │  │  Row   │         │   LAYER     │
    │  │   └────────┘  └────────┘  └────────┘         │             │
    │  └──────────────────────┬────────────────────────┘             │
    │                         │                                       │
    │  ┌──────────────────────┴────────────────────────┐             │
    │  │              Cache Context                     │             │
    │  │   per-request cache slots, explicit or active  │   CONTEXT   │
    │  └──────────────────────┬────────────────────────┘             │
    │                         │                                       │
    │  ┌──────────────────────┴────────────────────────┐             │
    │  │              Ordering                          │             │
    │  │   ┌──────────┐  ┌────────┐  ┌────────┐       │   ORDER     │
    │  │   │Comparator│  │ Tuple  │  │ Reason │       │   LAYER     │
    │  │   └──────────┘  └────────┘  └────────┘       │             │
    │  └──────────────────────────────────────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from roadtable_core import CachedTable, Model, Row, casefold_key

    class User(Row):
        pass

    model = Model("app")
    users = CachedTable(
        model,
        "users",
        rows_loader=lambda: [User(users, name) for name in db.user_names()],
        canonicalize=casefold_key,
    )

    # Loaded once, shared across threads
    alice = users.get("Alice")
    assert users.get("ALICE") is alice
    names = [str(u) for u in users.get_rows()]

    # Per-request caching
    from roadtable_core import CacheContext, CacheScope, TableConfig

    accounts = CachedTable(
        model,
        "accounts",
        TableConfig(scope=CacheScope.ROW),
        rows_loader=load_accounts,
        row_loader=load_account,
    )
    with CacheContext():
        accounts.get(42)

    # After a write
    users.table_updated()
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from roadtable_core.errors import (
    TableError,
    NoRowError,
    IntegrityError,
    DuplicateKeyError,
    UnsupportedOperationError,
    DataSourceError,
    ContextError,
    ConfigurationError,
)
from roadtable_core.ordering.comparator import (
    Comparator,
    SmartComparator,
    compare_text,
    default_comparator,
)
from roadtable_core.ordering.tuples import (
    Tuple,
    Tuple2,
    Tuple3,
    TupleN,
    compare_values,
)
from roadtable_core.model.model import Model
from roadtable_core.model.row import Row
from roadtable_core.metrics.collector import (
    MetricsCollector,
    TableMetrics,
)
from roadtable_core.cache.strategy import (
    CacheScope,
    CacheStrategy,
    create_strategy,
)
from roadtable_core.cache.slots import CacheSlots, index_rows
from roadtable_core.cache.context import CacheContext
from roadtable_core.cache.global_cache import GlobalCacheStrategy
from roadtable_core.cache.table_cache import TableCacheStrategy
from roadtable_core.cache.row_cache import RowCacheStrategy
from roadtable_core.cache.warmup import (
    TableWarmer,
    WarmupConfig,
    WarmupStats,
)
from roadtable_core.table.table import (
    Table,
    casefold_key,
    identity_key,
)
from roadtable_core.table.views import TableMap, TableSortedMap
from roadtable_core.table.empty import EmptyTable
from roadtable_core.table.cached import CachedTable, TableConfig
from roadtable_core.reason.reason import (
    Reason,
    SingleReason,
    AggregateReason,
    add_reason,
    add_reasons,
    add_used_by_reason,
    sort_reasons,
)

__all__ = [
    # Errors
    "TableError",
    "NoRowError",
    "IntegrityError",
    "DuplicateKeyError",
    "UnsupportedOperationError",
    "DataSourceError",
    "ContextError",
    "ConfigurationError",
    # Ordering
    "Comparator",
    "SmartComparator",
    "compare_text",
    "default_comparator",
    "Tuple",
    "Tuple2",
    "Tuple3",
    "TupleN",
    "compare_values",
    # Model
    "Model",
    "Row",
    # Metrics
    "MetricsCollector",
    "TableMetrics",
    # Cache
    "CacheScope",
    "CacheStrategy",
    "create_strategy",
    "CacheSlots",
    "index_rows",
    "CacheContext",
    "GlobalCacheStrategy",
    "TableCacheStrategy",
    "RowCacheStrategy",
    "TableWarmer",
    "WarmupConfig",
    "WarmupStats",
    # Table
    "Table",
    "identity_key",
    "casefold_key",
    "TableMap",
    "TableSortedMap",
    "EmptyTable",
    "CachedTable",
    "TableConfig",
    # Reasons
    "Reason",
    "SingleReason",
    "AggregateReason",
    "add_reason",
    "add_reasons",
    "add_used_by_reason",
    "sort_reasons",
]
