"""SelectionModel: the achievement list, its cursor, sort and status."""

from __future__ import annotations

import logging

from sau.achievements.config import ConfigStore
from sau.achievements.sorting import sort_items
from sau.achievements.types import (
    AchievementItem,
    CatalogData,
    SortColumn,
    SortConfig,
    Status,
)
from sau.tui.fuzzy import best_match

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class SelectionModel:
    """In-memory list of achievements for one application.

    Navigation never leaves ``current_index`` outside ``[0, len-1]`` and is a
    no-op on an empty list.  Re-sorting keeps the numeric cursor position; it
    does not follow the item that was under the cursor.
    """

    def __init__(
        self,
        app_id: int,
        items: list[AchievementItem],
        sort_config: SortConfig | None = None,
        config_store: ConfigStore | None = None,
    ) -> None:
        self.app_id = app_id
        self.items = items
        self.current_index = 0
        self.status: Status | None = None
        self.sort_config = sort_config or SortConfig()
        self._config_store = config_store
        self.sort_achievements()

    @classmethod
    def from_catalog(
        cls,
        app_id: int,
        data: CatalogData,
        sort_config: SortConfig | None = None,
        config_store: ConfigStore | None = None,
    ) -> SelectionModel:
        return cls(app_id, data.to_items(), sort_config=sort_config, config_store=config_store)

    # -- read-only views ----------------------------------------------------

    def __len__(self) -> int:
        return len(self.items)

    @property
    def current_item(self) -> AchievementItem | None:
        if not self.items:
            return None
        return self.items[self.current_index]

    @property
    def done_count(self) -> int:
        return sum(1 for item in self.items if item.unlocked)

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def pending_count(self) -> int:
        return sum(1 for item in self.items if item.changed)

    # -- navigation ---------------------------------------------------------

    def next(self) -> None:
        if self.items:
            self.current_index = (self.current_index + 1) % len(self.items)

    def previous(self) -> None:
        if self.items:
            self.current_index = (self.current_index - 1) % len(self.items)

    def jump_to(self, index: int) -> None:
        if self.items:
            self.current_index = max(0, min(index, len(self.items) - 1))

    def jump_to_top(self) -> None:
        self.jump_to(0)

    def jump_to_bottom(self) -> None:
        self.jump_to(len(self.items) - 1)

    def page_up(self) -> None:
        self.jump_to(self.current_index - PAGE_SIZE)

    def page_down(self) -> None:
        self.jump_to(self.current_index + PAGE_SIZE)

    def search_first_match(self, query: str) -> bool:
        """Move the cursor to the best fuzzy match for *query*.

        Returns ``False`` (and leaves the cursor alone) for a blank query or
        when no name matches.
        """
        index = best_match(self.items, query, lambda item: item.name)
        if index is None:
            return False
        self.jump_to(index)
        return True

    # -- selection ----------------------------------------------------------

    def toggle_selection(self) -> None:
        item = self.current_item
        if item is not None:
            item.selected = not item.selected

    def select_all(self) -> None:
        for item in self.items:
            item.selected = True

    def deselect_all(self) -> None:
        for item in self.items:
            item.selected = False

    # -- sorting ------------------------------------------------------------

    def sort_achievements(self) -> None:
        sort_items(self.items, self.sort_config.column, self.sort_config.order)

    def set_sort_column(self, column: SortColumn) -> None:
        self.sort_config = SortConfig(column=column, order=self.sort_config.order)
        self.sort_achievements()
        self._save_config()

    def toggle_sort_order(self) -> None:
        self.sort_config = self.sort_config.toggled()
        self.sort_achievements()
        self._save_config()

    def _save_config(self) -> None:
        if self._config_store is None:
            return
        try:
            self._config_store.save(self.sort_config)
        except Exception as e:
            logger.warning("Could not persist sort preference: %s", e)
