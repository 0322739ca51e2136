"""Ordering module - Deterministic text and composite key ordering."""

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

__all__ = [
    "Comparator",
    "SmartComparator",
    "compare_text",
    "default_comparator",
    "Tuple",
    "Tuple2",
    "Tuple3",
    "TupleN",
    "compare_values",
]
