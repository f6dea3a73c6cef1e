"""HelpBar component: key hints wrapped to the available width."""

from __future__ import annotations

from typing import Callable

from sau.tui.utils import visible_width

ITEM_SPACING = 2


class HelpBar:
    """Renders ``(key, description)`` pairs as ``key desc  key desc`` lines.

    Items never split across lines; an item that would run past the width
    starts a new line instead.
    """

    def __init__(
        self,
        items: list[tuple[str, str]],
        key_style: Callable[[str], str] = lambda s: s,
    ) -> None:
        self._items = items
        self._key_style = key_style

    def layout(self, width: int) -> list[list[tuple[str, str]]]:
        """Group items into lines without rendering them."""
        threshold = max(0, width)
        lines: list[list[tuple[str, str]]] = []
        current: list[tuple[str, str]] = []
        current_width = 0

        for key, desc in self._items:
            item_width = visible_width(key) + 1 + visible_width(desc)

            if current and current_width + ITEM_SPACING + item_width > threshold:
                lines.append(current)
                current = []
                current_width = 0

            if current:
                current_width += ITEM_SPACING
            current.append((key, desc))
            current_width += item_width

        if current:
            lines.append(current)
        return lines

    def render(self, width: int) -> list[str]:
        rendered: list[str] = []
        for line_items in self.layout(width):
            parts = [f"{self._key_style(key)} {desc}" for key, desc in line_items]
            rendered.append((" " * ITEM_SPACING).join(parts))
        return rendered
