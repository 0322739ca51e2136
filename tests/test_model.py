"""Tests for Model and Row.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import ConfigurationError
from roadtable_core.model.model import Model
from roadtable_core.ordering.comparator import default_comparator
from roadtable_core.table.empty import EmptyTable
from roadtable_core.table.table import identity_key


class TestModel:
    """Tests for Model."""

    def test_default_comparator(self):
        """Test the shared comparator is used by default."""
        assert Model().get_comparator() is default_comparator()

    def test_custom_comparator(self):
        """Test a custom comparator is kept."""
        comparator = lambda a, b: 0
        assert Model(comparator=comparator).get_comparator() is comparator

    def test_registry(self, model):
        """Test tables register on construction."""
        table = EmptyTable(model, "empty")

        assert "empty" in model
        assert model.get_table("empty") is table
        assert model.get_table("missing") is None
        assert model.tables == [table]
        assert len(model) == 1

    def test_duplicate_table_name(self, model):
        """Test two tables cannot share a name."""
        EmptyTable(model, "empty")

        with pytest.raises(ConfigurationError):
            EmptyTable(model, "empty")

    def test_table_updated_unknown(self, model):
        """Test table_updated on an unknown name fails."""
        with pytest.raises(ConfigurationError):
            model.table_updated("missing")

    def test_table_updated_by_name(self, model, make_table):
        """Test table_updated reloads the named table."""
        table, loader, _ = make_table([("a", 1)], name="items")
        table.get("a")

        model.table_updated("items")
        table.get("a")

        assert loader.calls == 2

    def test_clear_caches_keeps_global(self, model, make_table, context):
        """Test clear_caches drops context caches only."""
        shared, shared_loader, _ = make_table([("a", 1)])
        scoped, scoped_loader, _ = make_table([("a", 1)], scope=CacheScope.TABLE)
        shared.get("a")
        scoped.get("a")

        model.clear_caches(context)
        shared.get("a")
        scoped.get("a")

        assert shared_loader.calls == 1
        assert scoped_loader.calls == 2


class TestRow:
    """Tests for Row."""

    def test_canonical_equality(self, row_class, make_table):
        """Test rows with canonically equal keys are equal."""
        table, _, _ = make_table([])
        r1 = row_class(table, "Alice")
        r2 = row_class(table, "alice")

        assert r1 == r2
        assert hash(r1) == hash(r2)
        assert r1.canonical_key == "alice"

    def test_identity_canonicalization(self, row_class, make_table):
        """Test identity canonicalization keeps case distinct."""
        table, _, _ = make_table([], canonicalize=identity_key)

        assert row_class(table, "Alice") != row_class(table, "alice")

    def test_models_are_distinct(self, row_class, make_table):
        """Test rows of different models are never equal."""
        table, _, _ = make_table([])
        other = EmptyTable(Model("other"), "other")

        assert row_class(table, "a") != row_class(other, "a")

    def test_row_types_are_distinct(self, row_class, make_table):
        """Test rows of different classes are never equal."""

        class Other(row_class):
            pass

        table, _, _ = make_table([])
        assert row_class(table, "a") != Other(table, "a")

    def test_ordering(self, row_class, make_table):
        """Test rows order by key with the model comparator."""
        table, _, _ = make_table([])
        rows = [row_class(table, "item10"), row_class(table, "item2"), row_class(table, "alpha")]

        assert [str(r) for r in sorted(rows)] == ["alpha", "item2", "item10"]
        assert row_class(table, "b") > row_class(table, "a")
        assert row_class(table, "a").compare_to(row_class(table, "a")) == 0

    def test_non_text_keys(self, row_class, make_table):
        """Test non-text keys use natural ordering."""
        table, _, _ = make_table([], canonicalize=identity_key)

        assert row_class(table, 2) < row_class(table, 10)

    def test_properties(self, row_class, model, make_table):
        """Test row accessors."""
        table, _, _ = make_table([])
        row = row_class(table, "a", 1)

        assert row.key == "a"
        assert row.table is table
        assert row.model is model
        assert row.value == 1
        assert str(row) == "a"
