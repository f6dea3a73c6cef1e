"""TUI components."""

from sau.tui.components.help_bar import HelpBar
from sau.tui.components.rule import Rule
from sau.tui.components.table import Column, Table, TableTheme

__all__ = [
    "Column",
    "HelpBar",
    "Rule",
    "Table",
    "TableTheme",
]
