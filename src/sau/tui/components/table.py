"""Table component with a highlighted cursor row and scrolling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from sau.tui.utils import pad_to_width, truncate_to_width


@dataclass
class Column:
    title: str
    width: int | None = None  # None: take the remaining width


class TableTheme(Protocol):
    header: Callable[[str], str]
    selected_row: Callable[[str], str]
    scroll_info: Callable[[str], str]
    empty: Callable[[str], str]


class Table:
    """Fixed-column table that keeps the cursor row in view.

    Cells are pre-styled strings; the table only measures, truncates and pads
    them.  The visible window is centred on the cursor where possible.
    """

    COLUMN_GAP = 1

    def __init__(
        self,
        columns: list[Column],
        max_visible: int,
        theme: TableTheme,
        empty_text: str = "  Nothing to show",
    ) -> None:
        self._columns = columns
        self._rows: list[list[str]] = []
        self._selected_index = 0
        self._max_visible = max(1, max_visible)
        self._theme = theme
        self._empty_text = empty_text

    def set_rows(self, rows: list[list[str]]) -> None:
        self._rows = rows
        self.set_selected_index(self._selected_index)

    def set_selected_index(self, index: int) -> None:
        self._selected_index = max(0, min(index, len(self._rows) - 1))

    @property
    def selected_index(self) -> int:
        return self._selected_index

    def visible_range(self) -> tuple[int, int]:
        """Return the ``[start, end)`` row window currently on screen."""
        start_index = max(
            0,
            min(
                self._selected_index - self._max_visible // 2,
                len(self._rows) - self._max_visible,
            ),
        )
        end_index = min(start_index + self._max_visible, len(self._rows))
        return start_index, end_index

    def _column_widths(self, width: int) -> list[int]:
        fixed = sum(c.width or 0 for c in self._columns)
        gaps = self.COLUMN_GAP * (len(self._columns) - 1)
        fill_columns = [c for c in self._columns if c.width is None]
        remaining = max(0, width - fixed - gaps)
        fill_width = remaining // len(fill_columns) if fill_columns else 0
        return [c.width if c.width is not None else fill_width for c in self._columns]

    def _format_row(self, cells: list[str], widths: list[int]) -> str:
        gap = " " * self.COLUMN_GAP
        parts = [
            truncate_to_width(cell, col_width, "…", pad=True)
            for cell, col_width in zip(cells, widths)
        ]
        return gap.join(parts)

    def render(self, width: int) -> list[str]:
        widths = self._column_widths(width)
        lines = [self._theme.header(self._format_row([c.title for c in self._columns], widths))]

        if not self._rows:
            lines.append(self._theme.empty(truncate_to_width(self._empty_text, width, "")))
            return lines

        start_index, end_index = self.visible_range()
        for i in range(start_index, end_index):
            line = self._format_row(self._rows[i], widths)
            if i == self._selected_index:
                line = self._theme.selected_row(pad_to_width(line, width))
            lines.append(line)

        if start_index > 0 or end_index < len(self._rows):
            scroll_text = f"  ({self._selected_index + 1}/{len(self._rows)})"
            lines.append(self._theme.scroll_info(truncate_to_width(scroll_text, width, "")))

        return lines
