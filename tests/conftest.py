"""Shared fixtures for table tests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import threading
import time

import pytest

from roadtable_core.cache.context import CacheContext
from roadtable_core.cache.strategy import CacheScope
from roadtable_core.errors import NoRowError
from roadtable_core.model.model import Model
from roadtable_core.model.row import Row
from roadtable_core.table.cached import CachedTable, TableConfig
from roadtable_core.table.table import casefold_key


class Item(Row):
    """Row with a single value column."""

    def __init__(self, table, key, value=None):
        super().__init__(table, key)
        self.value = value


class RowsLoader:
    """Loads every row from a list of (key, value) pairs, counting calls."""

    def __init__(self, data):
        self.data = list(data)
        self.table = None
        self.error = None
        self.delay = 0.0
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return [Item(self.table, key, value) for key, value in self.data]


class RowLoader:
    """Loads one row by canonical key, recording requested keys."""

    def __init__(self, rows_loader):
        self.rows_loader = rows_loader
        self.error = None
        self.requested = []

    @property
    def calls(self):
        return len(self.requested)

    def __call__(self, canonical_key):
        self.requested.append(canonical_key)
        if self.error is not None:
            raise self.error
        table = self.rows_loader.table
        for key, value in self.rows_loader.data:
            if table.canonicalize(key) == canonical_key:
                return Item(table, key, value)
        raise NoRowError(table.name, canonical_key)


@pytest.fixture
def row_class():
    """Row class with a value column, for building rows by hand."""
    return Item


@pytest.fixture
def model():
    """Fresh model per test."""
    return Model("test")


@pytest.fixture
def context():
    """Active cache context, closed after the test."""
    with CacheContext("test") as ctx:
        yield ctx


@pytest.fixture
def make_table(model):
    """Factory for cached tables backed by counting loaders.

    Returns (table, rows_loader, row_loader).
    """
    counter = iter(range(1000))

    def factory(data, scope=CacheScope.GLOBAL, canonicalize=casefold_key, name=None, **config):
        rows_loader = RowsLoader(data)
        row_loader = RowLoader(rows_loader)
        table = CachedTable(
            model,
            name or f"table{next(counter)}",
            TableConfig(scope=scope, **config),
            rows_loader=rows_loader,
            row_loader=row_loader,
            canonicalize=canonicalize,
        )
        rows_loader.table = table
        return table, rows_loader, row_loader

    return factory
