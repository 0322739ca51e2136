"""Cache module - Table caching strategies and cache contexts.

This module provides the per-table cache strategies, the context handle
that owns context-scoped cache state, and table warmup.
"""

from roadtable_core.cache.strategy import (
    CacheScope,
    CacheStrategy,
    create_strategy,
)
from roadtable_core.cache.slots import (
    CacheSlots,
    index_rows,
)
from roadtable_core.cache.context import CacheContext
from roadtable_core.cache.global_cache import GlobalCacheStrategy
from roadtable_core.cache.scoped import ContextScopedStrategy
from roadtable_core.cache.table_cache import TableCacheStrategy
from roadtable_core.cache.row_cache import ABSENT, RowCacheStrategy
from roadtable_core.cache.warmup import (
    TableWarmer,
    WarmupConfig,
    WarmupStats,
)

__all__ = [
    "CacheScope",
    "CacheStrategy",
    "create_strategy",
    "CacheSlots",
    "index_rows",
    "CacheContext",
    "GlobalCacheStrategy",
    "ContextScopedStrategy",
    "TableCacheStrategy",
    "RowCacheStrategy",
    "ABSENT",
    "TableWarmer",
    "WarmupConfig",
    "WarmupStats",
]
