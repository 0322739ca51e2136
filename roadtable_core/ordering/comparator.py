"""RoadTable Comparator - Locale-Aware Natural String Ordering.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import locale
import re
from typing import Callable, List, Optional

Comparator = Callable[[str, str], int]

_DIGITS = re.compile(r"(\d+)")


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class SmartComparator:
    """Natural, locale-aware string comparator.

    Strings are split into runs of digits and runs of text. Digit runs
    compare by numeric value, so "item2" sorts before "item10". Text runs
    compare with the process collation (``locale.strcoll``) on case-folded
    text. Remaining ties are broken by case-sensitive collation and finally
    by code point, so two distinct strings never compare equal.

    Example:
        comparator = SmartComparator()
        sorted(names, key=functools.cmp_to_key(comparator))
    """

    def __call__(self, s1: str, s2: str) -> int:
        """Compare two strings.

        Args:
            s1: First string
            s2: Second string

        Returns:
            -1, 0 or 1
        """
        if s1 == s2:
            return 0

        diff = self._compare_runs(_DIGITS.split(s1), _DIGITS.split(s2))
        if diff:
            return diff

        diff = _sign(locale.strcoll(s1, s2))
        if diff:
            return diff

        return _sign((s1 > s2) - (s1 < s2))

    @staticmethod
    def _compare_runs(runs1: List[str], runs2: List[str]) -> int:
        """Compare split runs pairwise.

        re.split with a capture group puts text at even and digits at odd
        positions for both inputs.
        """
        for i, (run1, run2) in enumerate(zip(runs1, runs2)):
            if i % 2:
                diff = _sign(int(run1) - int(run2))
                if not diff:
                    # Fewer leading zeros first
                    diff = _sign(len(run1) - len(run2))
            else:
                diff = _sign(locale.strcoll(run1.casefold(), run2.casefold()))
            if diff:
                return diff
        return _sign(len(runs1) - len(runs2))

    def __repr__(self) -> str:
        return "SmartComparator()"


_DEFAULT_COMPARATOR = SmartComparator()


def default_comparator() -> SmartComparator:
    """Get the shared comparator.

    Returns:
        Process-wide SmartComparator
    """
    return _DEFAULT_COMPARATOR


def compare_text(s1: str, s2: str, comparator: Optional[Comparator] = None) -> int:
    """Compare two strings with a locale comparator.

    Equal strings are always 0, whatever the comparator says.

    Args:
        s1: First string
        s2: Second string
        comparator: Comparator, defaults to the shared SmartComparator

    Returns:
        -1, 0 or 1
    """
    if s1 == s2:
        return 0
    return _sign((comparator or default_comparator())(s1, s2))


__all__ = ["Comparator", "SmartComparator", "default_comparator", "compare_text"]
