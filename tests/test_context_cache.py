"""Tests for cache contexts and the per-context table cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import threading

import pytest

from roadtable_core.cache.context import CacheContext
from roadtable_core.cache.global_cache import GlobalCacheStrategy
from roadtable_core.cache.row_cache import RowCacheStrategy
from roadtable_core.cache.strategy import CacheScope, create_strategy
from roadtable_core.cache.table_cache import TableCacheStrategy
from roadtable_core.errors import ConfigurationError, ContextError, NoRowError, UnsupportedOperationError


class TestCacheContext:
    """Tests for CacheContext."""

    def test_no_active_context(self):
        """Test current() fails outside a context."""
        with pytest.raises(ContextError):
            CacheContext.current()

    def test_with_block(self):
        """Test the with block activates and closes."""
        with CacheContext("req") as ctx:
            assert CacheContext.current() is ctx
            assert not ctx.closed

        assert ctx.closed
        with pytest.raises(ContextError):
            CacheContext.current()

    def test_nested_reentry(self):
        """Test only the outermost block closes."""
        ctx = CacheContext()
        with ctx:
            with ctx:
                pass
            assert not ctx.closed
            assert CacheContext.current() is ctx
        assert ctx.closed

    def test_activate_keeps_open(self):
        """Test activate() does not close the context."""
        ctx = CacheContext()
        with ctx.activate():
            assert CacheContext.current() is ctx

        assert not ctx.closed
        with pytest.raises(ContextError):
            CacheContext.current()

    def test_resolve(self):
        """Test explicit contexts win over the active one."""
        explicit = CacheContext()
        with CacheContext() as active:
            assert CacheContext.resolve(explicit) is explicit
            assert CacheContext.resolve() is active

        assert CacheContext.resolve(required=False) is None

    def test_closed_context(self):
        """Test a closed context holds no caches."""
        ctx = CacheContext()
        owner = object()
        ctx.slots_for(owner)
        assert len(ctx) == 1

        ctx.close()

        assert len(ctx) == 0
        with pytest.raises(ContextError):
            ctx.slots_for(owner)

    def test_slots_per_owner(self):
        """Test each owner gets its own slots."""
        ctx = CacheContext()
        a, b = object(), object()

        assert ctx.slots_for(a) is ctx.slots_for(a)
        assert ctx.slots_for(a) is not ctx.slots_for(b)
        assert ctx.discard(a)
        assert not ctx.discard(a)

    def test_threads_start_without_context(self):
        """Test a new thread does not inherit the active context."""
        seen = []

        def worker():
            seen.append(CacheContext.resolve(required=False))

        with CacheContext():
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == [None]


class TestCreateStrategy:
    """Tests for create_strategy."""

    def test_scopes(self):
        """Test each scope maps to its strategy."""
        assert isinstance(create_strategy(CacheScope.GLOBAL), GlobalCacheStrategy)
        assert isinstance(create_strategy(CacheScope.TABLE), TableCacheStrategy)
        assert isinstance(create_strategy(CacheScope.ROW), RowCacheStrategy)

    def test_unknown_scope(self):
        """Test an unknown scope is rejected."""
        with pytest.raises(ConfigurationError):
            create_strategy("forever")

    def test_fresh_instances(self):
        """Test strategies are never shared."""
        assert create_strategy(CacheScope.GLOBAL) is not create_strategy(CacheScope.GLOBAL)


class TestTableCache:
    """Tests for TableCacheStrategy."""

    def test_requires_context(self, make_table):
        """Test reads fail without a context."""
        table, _, _ = make_table([("a", 1)], scope=CacheScope.TABLE)

        assert table.context_scoped
        with pytest.raises(ContextError):
            table.get("a")

    def test_loads_once_per_context(self, make_table, context):
        """Test reads within one context share a load."""
        table, loader, _ = make_table([("a", 1), ("B", 2)], scope=CacheScope.TABLE)

        assert table.get("A").value == 1
        assert table.get("b").value == 2
        assert [r.key for r in table.get_rows()] == ["a", "B"]
        assert table.size() == 2
        assert loader.calls == 1

    def test_not_found(self, make_table, context):
        """Test a missing key raises NoRowError."""
        table, _, _ = make_table([("a", 1)], scope=CacheScope.TABLE)

        with pytest.raises(NoRowError):
            table.get("zzz")

    def test_scope_isolation(self, make_table):
        """Test one context never sees another context's rows."""
        table, loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        ctx_a = CacheContext("a")
        ctx_b = CacheContext("b")

        assert table.get("a", ctx_a).value == 1
        loader.data = [("a", 2)]

        assert table.get("a", ctx_b).value == 2
        assert table.get("a", ctx_a).value == 1
        assert loader.calls == 2

    def test_clear_caches(self, make_table):
        """Test clear_caches only affects the given context."""
        table, loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        ctx_a = CacheContext("a")
        ctx_b = CacheContext("b")
        table.get("a", ctx_a)
        table.get("a", ctx_b)

        table.clear_caches(ctx_a)
        table.get("a", ctx_a)
        table.get("a", ctx_b)

        assert loader.calls == 3

    def test_table_updated(self, make_table, context):
        """Test table_updated reloads in the active context."""
        table, loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        table.get("a")

        loader.data = [("a", 5)]
        table.table_updated()

        assert table.get("a").value == 5

    def test_clear_without_context(self, make_table):
        """Test clearing with no context is a no-op."""
        table, _, _ = make_table([("a", 1)], scope=CacheScope.TABLE)

        table.clear_caches()
        table.table_updated()

    def test_closed_context_discards(self, make_table):
        """Test closing the context drops its caches."""
        table, loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        with CacheContext() as ctx:
            table.get("a")

        with pytest.raises(ContextError):
            table.get("a", ctx)
        with CacheContext():
            table.get("a")
        assert loader.calls == 2

    def test_add_to_cache_unsupported(self, row_class, make_table, context):
        """Test single rows cannot be added to a whole-table cache."""
        table, _, _ = make_table([], scope=CacheScope.TABLE)

        with pytest.raises(UnsupportedOperationError):
            table.add_to_cache(row_class(table, "a"))
