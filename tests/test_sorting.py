"""Tests for sau.achievements.sorting."""

from __future__ import annotations

import math

from sau.achievements.sorting import comparator, sort_items
from sau.achievements.types import AchievementItem


def _item(name: str, pct: float) -> AchievementItem:
    return AchievementItem(name=name, selected=False, unlocked=False, percentage=pct)


def _names(items: list[AchievementItem]) -> list[str]:
    return [item.name for item in items]


# ---------------------------------------------------------------------------
# Comparator
# ---------------------------------------------------------------------------


class TestComparator:
    def test_percentage_ascending(self) -> None:
        cmp = comparator("percentage", "ascending")
        assert cmp(_item("a", 1.0), _item("b", 2.0)) == -1
        assert cmp(_item("a", 2.0), _item("b", 1.0)) == 1
        assert cmp(_item("a", 2.0), _item("b", 2.0)) == 0

    def test_descending_negates(self) -> None:
        cmp = comparator("percentage", "descending")
        assert cmp(_item("a", 1.0), _item("b", 2.0)) == 1

    def test_name_is_case_sensitive(self) -> None:
        cmp = comparator("name", "ascending")
        assert cmp(_item("B", 0), _item("a", 0)) == -1

    def test_nan_compares_equal(self) -> None:
        cmp = comparator("percentage", "ascending")
        assert cmp(_item("a", math.nan), _item("b", 5.0)) == 0
        assert cmp(_item("a", 5.0), _item("b", math.nan)) == 0


# ---------------------------------------------------------------------------
# sort_items
# ---------------------------------------------------------------------------


class TestSortItems:
    def _sample(self) -> list[AchievementItem]:
        return [_item("c", 10.0), _item("a", 50.0), _item("b", 10.0), _item("d", 3.0)]

    def test_percentage_descending(self) -> None:
        items = self._sample()
        sort_items(items, "percentage", "descending")
        assert _names(items) == ["a", "c", "b", "d"]

    def test_percentage_ascending_is_stable(self) -> None:
        items = self._sample()
        sort_items(items, "percentage", "ascending")
        assert _names(items) == ["d", "c", "b", "a"]

    def test_name_ascending(self) -> None:
        items = self._sample()
        sort_items(items, "name", "ascending")
        assert _names(items) == ["a", "b", "c", "d"]

    def test_name_descending(self) -> None:
        items = self._sample()
        sort_items(items, "name", "descending")
        assert _names(items) == ["d", "c", "b", "a"]

    def test_sorting_is_idempotent(self) -> None:
        for column in ("percentage", "name"):
            for order in ("ascending", "descending"):
                items = self._sample()
                sort_items(items, column, order)
                once = _names(items)
                sort_items(items, column, order)
                assert _names(items) == once

    def test_toggling_order_twice_restores_sequence(self) -> None:
        items = self._sample()
        sort_items(items, "percentage", "descending")
        original = _names(items)
        sort_items(items, "percentage", "ascending")
        sort_items(items, "percentage", "descending")
        assert _names(items) == original

    def test_sorts_in_place(self) -> None:
        items = self._sample()
        same = items
        sort_items(items, "name", "ascending")
        assert same is items

    def test_nan_does_not_raise(self) -> None:
        items = [_item("a", math.nan), _item("b", 1.0), _item("c", 2.0)]
        sort_items(items, "percentage", "descending")
        assert sorted(_names(items)) == ["a", "b", "c"]
