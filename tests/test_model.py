"""Tests for sau.achievements.model.SelectionModel."""

from __future__ import annotations

import pytest

from sau.achievements.config import MemoryConfigStore
from sau.achievements.model import PAGE_SIZE, SelectionModel
from sau.achievements.types import AchievementItem, CatalogData, SortConfig


def _items(n: int) -> list[AchievementItem]:
    # Distinct descending percentages keep the default sort order as given.
    return [
        AchievementItem(name=f"ACH_{i}", selected=False, unlocked=False, percentage=100.0 - i)
        for i in range(n)
    ]


def _model(n: int = 5, **kwargs) -> SelectionModel:
    return SelectionModel(480, _items(n), **kwargs)


class FailingConfigStore:
    def load(self) -> SortConfig:
        return SortConfig()

    def save(self, config: SortConfig) -> None:
        raise OSError("read-only file system")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_from_catalog_sets_selected_to_unlocked(self) -> None:
        data = CatalogData(names=["A", "B"], unlocked=[True, False], percentage=[10.0, 20.0])
        model = SelectionModel.from_catalog(1, data)
        by_name = {item.name: item for item in model.items}
        assert by_name["A"].selected is True
        assert by_name["B"].selected is False
        assert all(item.status == "unchanged" for item in model.items)

    def test_items_are_sorted_on_construction(self) -> None:
        data = CatalogData(names=["A", "B", "C"], unlocked=[False] * 3, percentage=[5.0, 50.0, 20.0])
        model = SelectionModel.from_catalog(1, data)
        assert [item.name for item in model.items] == ["B", "C", "A"]

    def test_counts(self) -> None:
        items = _items(4)
        items[0].unlocked = True
        items[1].selected = True
        model = SelectionModel(1, items)
        assert model.done_count == 1
        assert model.total_count == 4
        assert model.pending_count == 2
        assert len(model) == 4


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_next_wraps_to_start(self) -> None:
        model = _model(5)
        model.current_index = 4
        model.next()
        assert model.current_index == 0

    def test_previous_wraps_to_end(self) -> None:
        model = _model(5)
        model.previous()
        assert model.current_index == 4

    def test_empty_list_navigation_is_noop(self) -> None:
        model = _model(0)
        for op in (
            model.next,
            model.previous,
            model.jump_to_top,
            model.jump_to_bottom,
            model.page_up,
            model.page_down,
            model.toggle_selection,
        ):
            op()
            assert model.current_index == 0
        model.jump_to(7)
        assert model.current_index == 0
        assert model.current_item is None

    def test_page_down_clamps(self) -> None:
        model = _model(5)
        model.page_down()
        assert model.current_index == 4

    def test_page_up_clamps(self) -> None:
        model = _model(30)
        model.current_index = 3
        model.page_up()
        assert model.current_index == 0

    def test_page_moves_by_page_size(self) -> None:
        model = _model(30)
        model.page_down()
        assert model.current_index == PAGE_SIZE
        model.page_down()
        model.page_up()
        assert model.current_index == PAGE_SIZE

    def test_jump_to_clamps(self) -> None:
        model = _model(5)
        model.jump_to(1000)
        assert model.current_index == 4
        model.jump_to(-3)
        assert model.current_index == 0

    def test_top_and_bottom(self) -> None:
        model = _model(5)
        model.jump_to_bottom()
        assert model.current_index == 4
        model.jump_to_top()
        assert model.current_index == 0


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_toggle_flips_current_item(self) -> None:
        model = _model(3)
        model.next()
        model.toggle_selection()
        assert [item.selected for item in model.items] == [False, True, False]
        model.toggle_selection()
        assert model.items[1].selected is False

    def test_select_and_deselect_all(self) -> None:
        model = _model(3)
        model.items[0].selected = True
        model.select_all()
        assert all(item.selected for item in model.items)
        model.deselect_all()
        assert not any(item.selected for item in model.items)

    def test_selection_does_not_touch_unlocked(self) -> None:
        model = _model(3)
        model.select_all()
        assert not any(item.unlocked for item in model.items)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class TestSorting:
    def test_set_sort_column_persists(self) -> None:
        store = MemoryConfigStore()
        model = _model(3, config_store=store)
        model.set_sort_column("name")
        assert store.config == SortConfig(column="name", order="descending")
        assert [item.name for item in model.items] == ["ACH_2", "ACH_1", "ACH_0"]

    def test_toggle_sort_order_persists(self) -> None:
        store = MemoryConfigStore()
        model = _model(3, config_store=store)
        model.toggle_sort_order()
        assert store.config.order == "ascending"
        assert store.saves == 1
        assert [item.name for item in model.items] == ["ACH_2", "ACH_1", "ACH_0"]

    def test_cursor_index_is_not_remapped(self) -> None:
        model = _model(5)
        model.current_index = 1
        model.toggle_sort_order()
        assert model.current_index == 1
        assert model.current_item is not None
        assert model.current_item.name == "ACH_3"

    def test_save_failure_is_ignored(self) -> None:
        model = _model(3, config_store=FailingConfigStore())
        model.set_sort_column("name")
        assert model.sort_config.column == "name"

    def test_initial_sort_config_is_used(self) -> None:
        model = _model(3, sort_config=SortConfig(column="percentage", order="ascending"))
        assert [item.name for item in model.items] == ["ACH_2", "ACH_1", "ACH_0"]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearch:
    @pytest.fixture
    def model(self) -> SelectionModel:
        names = ["ACH_WIN_ONE_GAME", "ACH_WIN_100_GAMES", "ACH_TRAVEL_FAR_ACCUM"]
        items = [
            AchievementItem(name=n, selected=False, unlocked=False, percentage=90.0 - i)
            for i, n in enumerate(names)
        ]
        return SelectionModel(480, items)

    def test_moves_cursor_to_best_match(self, model: SelectionModel) -> None:
        assert model.search_first_match("travel") is True
        assert model.current_index == 2

    def test_blank_query_is_noop(self, model: SelectionModel) -> None:
        model.current_index = 1
        assert model.search_first_match("   ") is False
        assert model.current_index == 1

    def test_no_match_keeps_cursor(self, model: SelectionModel) -> None:
        model.current_index = 1
        assert model.search_first_match("zzz") is False
        assert model.current_index == 1

    def test_shorter_name_wins(self, model: SelectionModel) -> None:
        model.current_index = 2
        assert model.search_first_match("ach_win") is True
        # Shorter name has the higher substring score.
        assert model.current_index == 0
