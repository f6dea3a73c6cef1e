"""Ordering of achievement lists by percentage or name."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable

from sau.achievements.types import AchievementItem, SortColumn, SortOrder

Comparator = Callable[[AchievementItem, AchievementItem], int]


def _compare_percentage(a: AchievementItem, b: AchievementItem) -> int:
    # NaN compares false both ways, so it falls through to "equal".
    if a.percentage < b.percentage:
        return -1
    if a.percentage > b.percentage:
        return 1
    return 0


def _compare_name(a: AchievementItem, b: AchievementItem) -> int:
    if a.name < b.name:
        return -1
    if a.name > b.name:
        return 1
    return 0


_COMPARATORS: dict[SortColumn, Comparator] = {
    "percentage": _compare_percentage,
    "name": _compare_name,
}


def comparator(column: SortColumn, order: SortOrder) -> Comparator:
    """Return a three-way comparator for *column*, flipped for descending order."""
    base = _COMPARATORS[column]
    if order == "ascending":
        return base
    return lambda a, b: -base(a, b)


def sort_items(items: list[AchievementItem], column: SortColumn, order: SortOrder) -> None:
    """Sort *items* in place.

    The sort is stable: items that compare equal keep their relative order
    whichever direction is requested, so sorting is idempotent.
    """
    items.sort(key=cmp_to_key(comparator(column, order)))

