"""Rule component: a horizontal separator with an optional title."""

from __future__ import annotations

from typing import Callable

from sau.tui.utils import truncate_to_width, visible_width

_LINE = "─"


class Rule:
    """Renders ``── Title ─────────`` across the full width."""

    def __init__(
        self,
        title: str = "",
        style: Callable[[str], str] = lambda s: s,
    ) -> None:
        self._title = title
        self._style = style

    def render(self, width: int) -> list[str]:
        if width <= 0:
            return [""]
        if not self._title:
            return [self._style(_LINE * width)]

        head = self._style(_LINE * 2) + " "
        title = truncate_to_width(self._title, max(0, width - 4), "…")
        used = 3 + visible_width(title) + 1
        tail = self._style(_LINE * max(0, width - used))
        return [f"{head}{title} {tail}"]
