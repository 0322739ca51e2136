"""RoadTable Tuples - Multi-Column Composite Keys.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

from roadtable_core.ordering.comparator import Comparator, compare_text, default_comparator


def compare_values(value1: Any, value2: Any, comparator: Optional[Comparator] = None) -> int:
    """Compare a single pair of columns.

    Text compares with the locale comparator. Otherwise None sorts after
    any non-null value and everything else uses its natural ordering.

    Args:
        value1: First column value
        value2: Second column value
        comparator: Text comparator

    Returns:
        -1, 0 or 1
    """
    if isinstance(value1, str) and isinstance(value2, str):
        return compare_text(value1, value2, comparator)
    if value1 is None:
        return 0 if value2 is None else 1
    if value2 is None:
        return -1
    return (value1 > value2) - (value1 < value2)


class Tuple:
    """Immutable set of columns usable as a multi-column key.

    Columns are copied into a Python tuple on construction, so later changes
    to the source sequence never reach a stored key.

    Ordering compares columns left to right and the first difference wins.
    When one tuple is a prefix of the other, the shorter sorts first.

    Example:
        Tuple(["a"]) < Tuple(["a", "b"])      # prefix first
        Tuple(["a", None]) > Tuple(["a", "b"])  # None last
    """

    __slots__ = ("_columns", "_comparator")

    def __init__(self, columns: Iterable[Any], comparator: Optional[Comparator] = None):
        """Initialize tuple.

        Args:
            columns: Column values
            comparator: Text comparator, defaults to the shared SmartComparator
        """
        self._columns = tuple(columns)
        self._comparator = comparator or default_comparator()

    @property
    def columns(self) -> tuple:
        """Get the column values."""
        return self._columns

    @property
    def comparator(self) -> Comparator:
        """Get the text comparator."""
        return self._comparator

    def compare_to(self, other: "Tuple") -> int:
        """Compare with another tuple.

        Args:
            other: Tuple to compare with

        Returns:
            -1, 0 or 1
        """
        for column1, column2 in zip(self._columns, other._columns):
            diff = compare_values(column1, column2, self._comparator)
            if diff:
                return diff
        return (len(self._columns) > len(other._columns)) - (len(self._columns) < len(other._columns))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)

    def __lt__(self, other: "Tuple") -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: "Tuple") -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Tuple") -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: "Tuple") -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._columns)

    def __getitem__(self, index: int) -> Any:
        return self._columns[index]

    def __str__(self) -> str:
        return "(" + ",".join(str(column) for column in self._columns) + ")"

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._columns!r}"


class Tuple2(Tuple):
    """A compound key with two columns."""

    __slots__ = ()

    def __init__(self, column1: Any, column2: Any, comparator: Optional[Comparator] = None):
        super().__init__((column1, column2), comparator)

    @property
    def column1(self) -> Any:
        return self._columns[0]

    @property
    def column2(self) -> Any:
        return self._columns[1]


class Tuple3(Tuple):
    """A compound key with three columns."""

    __slots__ = ()

    def __init__(
        self,
        column1: Any,
        column2: Any,
        column3: Any,
        comparator: Optional[Comparator] = None,
    ):
        super().__init__((column1, column2, column3), comparator)

    @property
    def column1(self) -> Any:
        return self._columns[0]

    @property
    def column2(self) -> Any:
        return self._columns[1]

    @property
    def column3(self) -> Any:
        return self._columns[2]


class TupleN(Tuple):
    """A compound key with any number of columns."""

    __slots__ = ()

    def __init__(self, *columns: Any, comparator: Optional[Comparator] = None):
        super().__init__(columns, comparator)


__all__ = ["Tuple", "Tuple2", "Tuple3", "TupleN", "compare_values"]
