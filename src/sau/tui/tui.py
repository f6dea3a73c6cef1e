"""Full-screen frame painting.

Components render to plain lists of lines; ``draw_frame`` paints such a list
onto a ``Terminal`` as one complete screen in a single write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sau.tui.utils import truncate_to_width

if TYPE_CHECKING:
    from sau.tui.terminal import Terminal

_CURSOR_HOME = "\x1b[H"
_CLEAR_TO_EOL = "\x1b[K"
_CLEAR_TO_EOS = "\x1b[J"
_RESET = "\x1b[0m"


def draw_frame(terminal: Terminal, lines: list[str]) -> None:
    """Paint *lines* as the whole screen, clipped to the terminal size.

    Raw mode disables output post-processing, so rows are separated with an
    explicit ``\\r\\n``.  Each row clears to end of line and the frame clears
    to end of screen, so shorter frames leave no stale text behind.
    """
    width = terminal.columns
    height = terminal.rows
    visible = [truncate_to_width(line, width, "") for line in lines[:height]]
    body = (_RESET + _CLEAR_TO_EOL + "\r\n").join(visible)
    terminal.write(_CURSOR_HOME + body + _RESET + _CLEAR_TO_EOL + _CLEAR_TO_EOS)
