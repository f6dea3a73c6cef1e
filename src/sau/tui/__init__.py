"""sau-tui: small terminal UI toolkit used by the achievement manager."""

# Components (re-exported from components package)
from sau.tui.components import Column, HelpBar, Rule, Table, TableTheme

# Fuzzy matching
from sau.tui.fuzzy import best_match, fuzzy_score

# Keybindings
from sau.tui.keybindings import (
    DEFAULT_KEYBINDINGS,
    BrowseAction,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)

# Keyboard input handling
from sau.tui.keys import KeyId, matches_key, parse_key

# Input buffering
from sau.tui.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from sau.tui.terminal import ProcessTerminal, Terminal, terminal_session

# Rendering primitives
from sau.tui.tui import draw_frame

# Utilities
from sau.tui.utils import truncate_to_width, visible_width

__all__ = [
    # Components
    "Column",
    "HelpBar",
    "Rule",
    "Table",
    "TableTheme",
    # Fuzzy matching
    "best_match",
    "fuzzy_score",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "BrowseAction",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "KeyId",
    "matches_key",
    "parse_key",
    # Input buffering
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "terminal_session",
    # Rendering
    "draw_frame",
    # Utilities
    "truncate_to_width",
    "visible_width",
]
