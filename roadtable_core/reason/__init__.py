"""Reason module - Cannot-remove reasons and their aggregation."""

from roadtable_core.reason.reason import (
    AggregateReason,
    Reason,
    SingleReason,
    add_reason,
    add_reasons,
    add_used_by_reason,
    sort_reasons,
)

__all__ = [
    "Reason",
    "SingleReason",
    "AggregateReason",
    "add_reason",
    "add_reasons",
    "add_used_by_reason",
    "sort_reasons",
]
