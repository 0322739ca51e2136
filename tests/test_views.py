"""Tests for read-only table views and EmptyTable.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import NoRowError, UnsupportedOperationError
from roadtable_core.table.empty import EmptyTable


class TestTableMap:
    """Tests for TableMap."""

    def test_lookup(self, make_table):
        """Test item access goes through the table."""
        table, _, _ = make_table([("Alice", 1), ("bob", 2)])
        view = table.get_map()

        assert view["alice"].value == 1
        assert view["BOB"] is table.get("bob")
        with pytest.raises(KeyError):
            view["carol"]

    def test_contains_and_get(self, make_table):
        """Test membership and Mapping.get use canonical keys."""
        table, _, _ = make_table([("Alice", 1)])
        view = table.get_map()

        assert "ALICE" in view
        assert "carol" not in view
        assert view.get("carol") is None
        assert view.get("alice").value == 1

    def test_iteration(self, make_table):
        """Test keys, values and length."""
        table, _, _ = make_table([("a", 1), ("b", 2)])
        view = table.get_map()

        assert len(view) == 2
        assert set(view) == {"a", "b"}
        assert {row.value for row in view.values()} == {1, 2}
        assert dict(view.items())["a"].value == 1

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda view, row: view.__setitem__("c", row),
            lambda view, row: view.__delitem__("a"),
            lambda view, row: view.pop("a"),
            lambda view, row: view.popitem(),
            lambda view, row: view.clear(),
            lambda view, row: view.update({"c": row}),
            lambda view, row: view.setdefault("c", row),
        ],
    )
    def test_mutation_rejected(self, row_class, make_table, mutate):
        """Test every mutating call raises."""
        table, _, _ = make_table([("a", 1)])
        view = table.get_map()

        with pytest.raises(UnsupportedOperationError):
            mutate(view, row_class(table, "c"))

        assert len(view) == 1

    def test_uses_context(self, make_table, context):
        """Test a view reads through its context."""
        table, loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        view = table.get_map(context)

        assert "a" in view
        assert len(view) == 1
        assert loader.calls == 1


class TestTableSortedMap:
    """Tests for TableSortedMap."""

    def test_sorted_iteration(self, make_table):
        """Test keys iterate in row order."""
        table, _, _ = make_table([("item10", 1), ("item2", 2), ("Beta", 3)])
        view = table.get_sorted_map()

        assert list(view) == ["Beta", "item2", "item10"]
        assert [row.value for row in view.values()] == [3, 2, 1]
        assert view.comparator is None

    def test_first_last(self, make_table):
        """Test first and last keys."""
        table, _, _ = make_table([("b", 1), ("a", 2), ("c", 3)])
        view = table.get_sorted_map()

        assert view.first_key() == "a"
        assert view.last_key() == "c"

    def test_read_only(self, make_table):
        """Test the sorted view is read-only too."""
        table, _, _ = make_table([("a", 1)])

        with pytest.raises(UnsupportedOperationError):
            table.get_sorted_map().clear()


class TestEmptyTable:
    """Tests for EmptyTable."""

    def test_no_rows(self, model):
        """Test empty collections and failing lookups."""
        table = EmptyTable(model, "empty")

        assert table.get_unsorted_rows() == frozenset()
        assert table.get_rows() == ()
        assert table.size() == 0
        with pytest.raises(NoRowError):
            table.get("anything")

    def test_views(self, model):
        """Test views over an empty table."""
        table = EmptyTable(model, "empty")

        assert len(table.get_map()) == 0
        assert "a" not in table.get_map()
        with pytest.raises(NoRowError):
            table.get_sorted_map().first_key()
        with pytest.raises(NoRowError):
            table.get_sorted_map().last_key()

    def test_invalidation_is_noop(self, model):
        """Test cache calls are accepted."""
        table = EmptyTable(model, "empty")

        table.clear_caches()
        table.table_updated()
        assert not table.context_scoped
