"""Keybindings manager for the achievement browser."""

from __future__ import annotations

from typing import Literal

from sau.tui.keys import KeyId, matches_key

BrowseAction = Literal[
    # Navigation
    "cursorUp",
    "cursorDown",
    "jumpTop",
    "jumpBottom",
    "pageUp",
    "pageDown",
    # Selection
    "toggleSelection",
    "selectAll",
    "deselectAll",
    # Sorting
    "sortByPercentage",
    "sortByName",
    "toggleSortOrder",
    # Session
    "commit",
    "search",
    "switchApp",
    "quit",
]

KeybindingsConfig = dict[BrowseAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[BrowseAction, KeyId | list[KeyId]] = {
    # Navigation
    "cursorUp": ["up", "k"],
    "cursorDown": ["down", "j"],
    "jumpTop": "g",
    "jumpBottom": "G",
    "pageUp": ["pageUp", "ctrl+p"],
    "pageDown": ["pageDown", "ctrl+n"],
    # Selection
    "toggleSelection": "space",
    "selectAll": "a",
    "deselectAll": "d",
    # Sorting
    "sortByPercentage": "p",
    "sortByName": "n",
    "toggleSortOrder": "o",
    # Session
    "commit": "enter",
    "search": "/",
    "switchApp": "i",
    "quit": ["q", "escape", "ctrl+c"],
}


class KeybindingsManager:
    """Maps raw key input to browse actions."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[BrowseAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: BrowseAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def action_for(self, data: str) -> BrowseAction | None:
        """Return the first action bound to *data*, in declaration order."""
        for action in self._action_to_keys:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: BrowseAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
