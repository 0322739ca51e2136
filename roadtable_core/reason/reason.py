"""RoadTable Reasons - Cannot-Remove Reasons and Aggregation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sized, Union

from roadtable_core.ordering.comparator import Comparator, compare_text


class Reason(ABC):
    """Why a row cannot be removed.

    Reasons merge into lists with add_reason and sort with singles first.
    """

    @abstractmethod
    def merge(self, other: "Reason") -> Optional["Reason"]:
        """Merge another reason into this one.

        Args:
            other: Reason to merge

        Returns:
            The merged reason, or None if the two cannot merge
        """
        pass

    @abstractmethod
    def compare_to(self, other: "Reason", comparator: Optional[Comparator] = None) -> int:
        """Compare for display order.

        Args:
            other: Reason to compare with
            comparator: Text comparator

        Returns:
            -1, 0 or 1
        """
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass

    def __lt__(self, other: "Reason") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "Reason") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Reason") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "Reason") -> bool:
        return self.compare_to(other) >= 0


@dataclass(frozen=True)
class SingleReason(Reason):
    """A reason with a single textual cause."""

    reason: str

    def merge(self, other: Reason) -> Optional["SingleReason"]:
        if isinstance(other, SingleReason) and self.reason == other.reason:
            return self
        return None

    def compare_to(self, other: Reason, comparator: Optional[Comparator] = None) -> int:
        if isinstance(other, SingleReason):
            return compare_text(self.reason, other.reason, comparator)
        return -1  # Singles before aggregates

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class AggregateReason(Reason):
    """A counted reason with singular and plural wording.

    Renders as ``singular_prefix + "1" + singular_suffix`` when the count is
    one and ``plural_prefix + str(count) + plural_suffix`` otherwise.
    """

    count: int
    singular_prefix: str
    plural_prefix: str
    singular_suffix: str
    plural_suffix: str

    @classmethod
    def used_by(cls, count: int, singular_name: str, plural_name: str) -> Optional["AggregateReason"]:
        """Build a "Used by N things." reason.

        Args:
            count: Number of dependents
            singular_name: Name of one dependent
            plural_name: Name of several dependents

        Returns:
            AggregateReason, or None when there are no dependents
        """
        if count <= 0:
            return None
        return cls(count, "Used by ", "Used by ", f" {singular_name}.", f" {plural_name}.")

    def _same_wording(self, other: "AggregateReason") -> bool:
        return (
            self.singular_prefix == other.singular_prefix
            and self.plural_prefix == other.plural_prefix
            and self.singular_suffix == other.singular_suffix
            and self.plural_suffix == other.plural_suffix
        )

    def merge(self, other: Reason) -> Optional["AggregateReason"]:
        if isinstance(other, AggregateReason) and self._same_wording(other):
            return AggregateReason(
                self.count + other.count,
                self.singular_prefix,
                self.plural_prefix,
                self.singular_suffix,
                self.plural_suffix,
            )
        return None

    def compare_to(self, other: Reason, comparator: Optional[Comparator] = None) -> int:
        if not isinstance(other, AggregateReason):
            return 1  # Aggregates after singles
        # Descending by count first
        if self.count != other.count:
            return -1 if self.count > other.count else 1
        return compare_text(str(self), str(other), comparator)

    def __str__(self) -> str:
        if self.count == 1:
            return f"{self.singular_prefix}1{self.singular_suffix}"
        return f"{self.plural_prefix}{self.count}{self.plural_suffix}"


def add_reason(reasons: List[Reason], new_reason: Optional[Reason]) -> List[Reason]:
    """Merge a reason into a list.

    The reason replaces the first entry it merges with, or is appended.

    Args:
        reasons: Reasons so far, modified in place
        new_reason: Reason to add; None adds nothing

    Returns:
        The list
    """
    if new_reason is None:
        return reasons
    for i, existing in enumerate(reasons):
        merged = existing.merge(new_reason)
        if merged is not None:
            reasons[i] = merged
            return reasons
    reasons.append(new_reason)
    return reasons


def add_reasons(reasons: List[Reason], new_reasons: Iterable[Reason]) -> List[Reason]:
    """Merge several reasons into a list.

    Args:
        reasons: Reasons so far, modified in place
        new_reasons: Reasons to add

    Returns:
        The list
    """
    for new_reason in new_reasons:
        add_reason(reasons, new_reason)
    return reasons


def add_used_by_reason(
    reasons: List[Reason],
    dependencies: Union[Sized, int, None],
    singular_name: str,
    plural_name: str,
) -> List[Reason]:
    """Add a "Used by" reason when there are dependents.

    Args:
        reasons: Reasons so far, modified in place
        dependencies: Dependent rows, or their count
        singular_name: Name of one dependent
        plural_name: Name of several dependents

    Returns:
        The list
    """
    # TODO: Take message keys instead of English text once reasons are localized
    if dependencies is None:
        return reasons
    count = dependencies if isinstance(dependencies, int) else len(dependencies)
    return add_reason(reasons, AggregateReason.used_by(count, singular_name, plural_name))


def sort_reasons(reasons: Iterable[Reason], comparator: Optional[Comparator] = None) -> List[Reason]:
    """Sort reasons for display.

    Args:
        reasons: Reasons to sort
        comparator: Text comparator, defaults to the shared SmartComparator

    Returns:
        New sorted list
    """
    return sorted(reasons, key=functools.cmp_to_key(lambda r1, r2: r1.compare_to(r2, comparator)))


__all__ = [
    "Reason",
    "SingleReason",
    "AggregateReason",
    "add_reason",
    "add_reasons",
    "add_used_by_reason",
    "sort_reasons",
]
