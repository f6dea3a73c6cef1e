"""Interactive event loop: render, read one key, dispatch, repeat.

The manager has three modes:

  browsing        the default: navigate, toggle, sort and commit
  editing_app_id  type another application id and load it
  searching       incremental fuzzy jump to an achievement name

Enter in browsing mode commits synchronously; the next key is only read once
the backend call has returned.  ``q``/Escape leave immediately and never
commit anything.
"""

from __future__ import annotations

import logging
from typing import Literal

from sau.achievements.catalog import AchievementCatalogClient, CatalogError, NameFetchFailedError
from sau.achievements.config import ConfigStore
from sau.achievements.diff import DiffEngine
from sau.achievements.model import SelectionModel
from sau.achievements.render import ManagerTheme, default_theme, render_screen
from sau.achievements.types import CommitSummary, SortConfig, Status
from sau.tui.keybindings import KeybindingsManager, get_keybindings
from sau.tui.keys import is_printable_input, matches_key
from sau.tui.terminal import RESIZE_EVENT, Terminal, terminal_session
from sau.tui.tui import draw_frame

logger = logging.getLogger(__name__)

Mode = Literal["browsing", "editing_app_id", "searching"]

MAX_APP_ID_DIGITS = 10
EDITING_HINT = "Editing App ID - Type the app ID and press Enter to load"


def load_achievements(
    client: AchievementCatalogClient,
    app_id: int,
    sort_config: SortConfig | None = None,
    config_store: ConfigStore | None = None,
) -> SelectionModel:
    """Fetch *app_id* and build a fresh SelectionModel.

    Catalog errors propagate unchanged; no partial model is built.
    """
    data = client.fetch(app_id)
    if not len(data.names) == len(data.unlocked) == len(data.percentage):
        logger.warning(
            "App %d returned %d names, %d unlocked flags and %d percentages",
            app_id, len(data.names), len(data.unlocked), len(data.percentage),
        )
        raise NameFetchFailedError(app_id)
    logger.info("Loaded %d achievements for app %d", len(data.names), app_id)
    return SelectionModel.from_catalog(
        app_id, data, sort_config=sort_config, config_store=config_store
    )


class AchievementManager:
    """Owns the SelectionModel and maps key input onto it."""

    def __init__(
        self,
        client: AchievementCatalogClient,
        config_store: ConfigStore,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self._client = client
        self._config_store = config_store
        self._keybindings = keybindings or get_keybindings()
        self._diff = DiffEngine(client)
        self._sort_config = config_store.load()

        self.model: SelectionModel | None = None
        self.mode: Mode = "editing_app_id"
        self.app_id_input = ""
        self.search_query = ""
        self._search_origin = 0
        # Status shown while no application is being browsed.
        self.prompt_status: Status | None = None
        self.running = True

    # -- state --------------------------------------------------------------

    @property
    def current_status(self) -> Status | None:
        if self.mode == "editing_app_id" or self.model is None:
            return self.prompt_status or Status.info(EDITING_HINT)
        return self.model.status

    @property
    def sort_config(self) -> SortConfig:
        if self.model is not None:
            return self.model.sort_config
        return self._sort_config

    def load_app(self, app_id: int) -> None:
        """Replace the current list with *app_id*'s achievements.

        Raises ``CatalogError``; on failure the current list is kept.
        """
        self.model = load_achievements(
            self._client, app_id, sort_config=self.sort_config, config_store=self._config_store
        )
        self.mode = "browsing"
        self.app_id_input = ""
        self.prompt_status = None

    # -- input dispatch -----------------------------------------------------

    def handle_input(self, data: str) -> None:
        if self.mode == "editing_app_id":
            self._handle_app_id_input(data)
        elif self.mode == "searching":
            self._handle_search_input(data)
        else:
            self._handle_browse_input(data)

    def _handle_browse_input(self, data: str) -> None:
        model = self.model
        if model is None:
            self.mode = "editing_app_id"
            return

        action = self._keybindings.action_for(data)
        if action is None:
            return

        if action == "quit":
            self.running = False
        elif action == "cursorUp":
            model.previous()
        elif action == "cursorDown":
            model.next()
        elif action == "jumpTop":
            model.jump_to_top()
        elif action == "jumpBottom":
            model.jump_to_bottom()
        elif action == "pageUp":
            model.page_up()
        elif action == "pageDown":
            model.page_down()
        elif action == "toggleSelection":
            model.toggle_selection()
        elif action == "selectAll":
            model.select_all()
        elif action == "deselectAll":
            model.deselect_all()
        elif action == "sortByPercentage":
            model.set_sort_column("percentage")
        elif action == "sortByName":
            model.set_sort_column("name")
        elif action == "toggleSortOrder":
            model.toggle_sort_order()
        elif action == "commit":
            self.commit()
        elif action == "search":
            self.mode = "searching"
            self.search_query = ""
            self._search_origin = model.current_index
        elif action == "switchApp":
            self.mode = "editing_app_id"
            self.app_id_input = ""
            self.prompt_status = None

    def commit(self) -> CommitSummary:
        if self.model is None:
            return CommitSummary()
        return self._diff.process_changes(self.model)

    def _leave_app_id_editing(self) -> None:
        if self.model is None:
            self.running = False
            return
        self.mode = "browsing"
        self.app_id_input = ""
        self.prompt_status = None

    def _handle_app_id_input(self, data: str) -> None:
        if matches_key(data, "q") or matches_key(data, "escape") or matches_key(data, "ctrl+c"):
            self._leave_app_id_editing()
        elif matches_key(data, "c") or matches_key(data, "d"):
            self.app_id_input = ""
            self.prompt_status = None
        elif matches_key(data, "backspace"):
            self.app_id_input = self.app_id_input[:-1]
            self.prompt_status = None
        elif matches_key(data, "enter"):
            self._submit_app_id()
        elif is_printable_input(data) and data.isdigit():
            if len(self.app_id_input) < MAX_APP_ID_DIGITS:
                self.app_id_input += data
                self.prompt_status = None

    def _submit_app_id(self) -> None:
        text = self.app_id_input
        if not text:
            self._leave_app_id_editing()
            return

        self.app_id_input = ""
        try:
            app_id = int(text)
        except ValueError:
            self.prompt_status = Status.error(f"Invalid App ID: {text}")
            return
        # Ids are unsigned 32-bit on the platform side.
        if app_id > 0xFFFFFFFF:
            self.prompt_status = Status.error(f"Invalid App ID: {text}")
            return

        try:
            self.load_app(app_id)
        except CatalogError as e:
            logger.warning("Loading app %d failed: %s", app_id, e)
            self.prompt_status = Status.error(str(e))

    def _handle_search_input(self, data: str) -> None:
        model = self.model
        if model is None:
            self.mode = "editing_app_id"
            return

        if matches_key(data, "escape") or matches_key(data, "ctrl+c"):
            model.jump_to(self._search_origin)
            self.mode = "browsing"
            self.search_query = ""
        elif matches_key(data, "enter"):
            self.mode = "browsing"
            self.search_query = ""
        elif matches_key(data, "backspace"):
            self.search_query = self.search_query[:-1]
            self._jump_to_search_match()
        elif is_printable_input(data):
            self.search_query += data
            self._jump_to_search_match()

    def _jump_to_search_match(self) -> None:
        model = self.model
        if model is None:
            return
        if not model.search_first_match(self.search_query):
            model.jump_to(self._search_origin)

    # -- loop ---------------------------------------------------------------

    def render(self, width: int, height: int, theme: ManagerTheme | None = None) -> list[str]:
        return render_screen(self, width, height, theme)

    def run(self, terminal: Terminal, theme: ManagerTheme | None = None) -> None:
        """Run until quit.  The terminal is restored on every exit path."""
        theme = theme or default_theme()
        with terminal_session(terminal):
            while self.running:
                draw_frame(terminal, self.render(terminal.columns, terminal.rows, theme))
                key = terminal.read_key()
                if key == RESIZE_EVENT:
                    continue
                self.handle_input(key)
