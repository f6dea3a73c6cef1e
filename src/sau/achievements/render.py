"""Screen rendering for the achievement manager.

Everything here reads state and returns lines; nothing mutates the model.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Literal

from sau.achievements.types import AchievementItem, SortConfig, Status, StatusLevel
from sau.tui.components import Column, HelpBar, Rule, Table
from sau.tui.utils import truncate_to_width

if TYPE_CHECKING:
    from sau.achievements.app import AchievementManager

RarityTier = Literal["legendary", "epic", "rare", "uncommon", "common"]
CompletionTier = Literal["complete", "legendary", "epic", "rare", "uncommon", "common"]

TITLE = "Achievement Manager"


# ---------------------------------------------------------------------------
# Tier classification
# ---------------------------------------------------------------------------

# Upper bounds (inclusive) of global unlock percentage per tier.
RARITY_BOUNDS: list[tuple[float, RarityTier]] = [
    (1.0, "legendary"),
    (10.0, "epic"),
    (25.0, "rare"),
    (50.0, "uncommon"),
]


def rarity_tier(percentage: float) -> RarityTier:
    """Classify a global unlock percentage; rarer achievements rank higher."""
    for bound, tier in RARITY_BOUNDS:
        if percentage <= bound:
            return tier
    return "common"


def completion_tier(done: int, total: int) -> CompletionTier:
    """Classify how much of an application the user has completed."""
    if total <= 0:
        return "common"
    ratio = done / total * 100.0
    if ratio >= 100.0:
        return "complete"
    if ratio > 90.0:
        return "legendary"
    if ratio > 75.0:
        return "epic"
    if ratio > 50.0:
        return "rare"
    if ratio > 25.0:
        return "uncommon"
    return "common"


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

Style = Callable[[str], str]

_RESET = "\x1b[0m"


def _sgr(*codes: str) -> Style:
    prefix = "\x1b[" + ";".join(codes) + "m"

    def style(text: str) -> str:
        # Nested styles end in a reset; re-apply ours after each one.
        return f"{prefix}{text.replace(_RESET, _RESET + prefix)}{_RESET}"

    return style


def _identity(text: str) -> str:
    return text


@dataclass
class ManagerTheme:
    title: Style
    border: Style
    header: Style
    selected_row: Style
    scroll_info: Style
    empty: Style
    key: Style
    ok: Style
    failed: Style
    status: dict[StatusLevel, Style]
    tiers: dict[str, Style]


def ansi_theme() -> ManagerTheme:
    return ManagerTheme(
        title=_sgr("1", "36"),
        border=_sgr("90"),
        header=_sgr("1", "36"),
        selected_row=_sgr("1", "48;2;24;24;24"),
        scroll_info=_sgr("2"),
        empty=_sgr("2"),
        key=_sgr("33"),
        ok=_sgr("32"),
        failed=_sgr("31"),
        status={"info": _sgr("33"), "success": _sgr("32"), "error": _sgr("31")},
        tiers={
            "complete": _sgr("1", "31"),
            "legendary": _sgr("1", "38;2;255;128;0"),
            "epic": _sgr("1", "38;2;163;53;238"),
            "rare": _sgr("38;2;0;112;221"),
            "uncommon": _sgr("38;2;30;255;0"),
            "common": _sgr("38;2;255;255;255"),
        },
    )


def plain_theme() -> ManagerTheme:
    return ManagerTheme(
        title=_identity,
        border=_identity,
        header=_identity,
        selected_row=_identity,
        scroll_info=_identity,
        empty=_identity,
        key=_identity,
        ok=_identity,
        failed=_identity,
        status={"info": _identity, "success": _identity, "error": _identity},
        tiers={},
    )


def default_theme() -> ManagerTheme:
    """ANSI colours unless ``NO_COLOR`` is set."""
    if os.environ.get("NO_COLOR"):
        return plain_theme()
    return ansi_theme()


# ---------------------------------------------------------------------------
# Help items
# ---------------------------------------------------------------------------

BROWSE_HELP: list[tuple[str, str]] = [
    ("↑/k", "Up"),
    ("↓/j", "Down"),
    ("g", "Top"),
    ("G", "Bottom"),
    ("PgUp/PgDn/^P/^N", "Page"),
    ("Space", "Toggle"),
    ("a", "Enable All"),
    ("d", "Disable All"),
    ("p/n", "Sort Column"),
    ("o", "Order"),
    ("/", "Search"),
    ("Enter", "Process"),
    ("i", "Switch App"),
    ("q/Esc", "Quit"),
]

EDIT_APP_ID_HELP: list[tuple[str, str]] = [
    ("0-9", "Type"),
    ("c/d", "Clear"),
    ("Backspace", "Delete"),
    ("Enter", "Load"),
    ("q/Esc", "Cancel"),
]

SEARCH_HELP: list[tuple[str, str]] = [
    ("Type", "Search"),
    ("Backspace", "Delete"),
    ("Enter", "Keep"),
    ("Esc", "Cancel"),
]


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

DONE_WIDTH = 6
GLOBAL_WIDTH = 8


def table_columns(sort_config: SortConfig | None) -> list[Column]:
    indicator = ""
    if sort_config is not None:
        indicator = " ↑" if sort_config.order == "ascending" else " ↓"

    global_title = "Global"
    name_title = "Achievement Name"
    if sort_config is not None and sort_config.column == "percentage":
        global_title += indicator
    elif sort_config is not None and sort_config.column == "name":
        name_title += indicator

    return [
        Column("Done", DONE_WIDTH),
        Column(global_title, GLOBAL_WIDTH),
        Column(name_title),
    ]


def format_percentage(percentage: float) -> str:
    if math.isnan(percentage):
        return "-"
    return f"{percentage:.1f}%"


def row_cells(item: AchievementItem, theme: ManagerTheme) -> list[str]:
    """Render one achievement as ``[done, global, name]`` cells."""
    checkbox = "[✓]" if item.selected else "[ ]"
    if item.status == "failed":
        checkbox = theme.failed(checkbox)
        name = theme.failed(item.name)
    elif item.status == "success":
        checkbox = theme.ok(checkbox)
        name = theme.ok(item.name)
    else:
        if item.selected:
            checkbox = theme.ok(checkbox)
        name = item.name

    pct_text = format_percentage(item.percentage)
    if not math.isnan(item.percentage):
        pct_text = theme.tiers.get(rarity_tier(item.percentage), _identity)(pct_text)

    return [checkbox, pct_text, name]


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


def _status_line(status: Status | None, width: int, theme: ManagerTheme) -> str:
    if status is None:
        return ""
    text = truncate_to_width(status.message, width, "…")
    return theme.status[status.level](text)


def render_screen(
    manager: AchievementManager,
    width: int,
    height: int,
    theme: ManagerTheme | None = None,
) -> list[str]:
    """Lay out the whole screen for *manager* in *width* x *height* cells."""
    theme = theme or plain_theme()
    model = manager.model

    if manager.mode == "editing_app_id":
        help_items = EDIT_APP_ID_HELP
    elif manager.mode == "searching":
        help_items = SEARCH_HELP
    else:
        help_items = BROWSE_HELP
    help_bar = HelpBar(help_items, key_style=theme.key)
    help_lines = [truncate_to_width(line, width, "") for line in help_bar.render(width)]

    # Header
    if manager.mode == "editing_app_id" or model is None:
        header = f"App ID: {manager.app_id_input}_"
    else:
        header = f"{TITLE} - App ID: {model.app_id}"
    lines = [theme.title(truncate_to_width(header, width, "…"))]

    # Achievements table
    if model is not None:
        done, total = model.done_count, model.total_count
        tier_style = theme.tiers.get(completion_tier(done, total), _identity)
        title = f"Achievements {tier_style(f'{done}/{total}')}"
        if model.pending_count:
            title += f" · {model.pending_count} pending"
    else:
        title = "Achievements"
    lines.extend(Rule(title, style=theme.border).render(width))

    fixed_lines = len(lines) + 2 + 1 + len(help_lines)  # status rule + status, controls rule
    table_area = max(2, height - fixed_lines)

    table = Table(
        table_columns(model.sort_config if model is not None else None),
        max_visible=max(1, table_area - 2),
        theme=theme,
        empty_text="  No achievements loaded" if model is None else "  No achievements",
    )
    if model is not None:
        table.set_rows([row_cells(item, theme) for item in model.items])
        table.set_selected_index(model.current_index)
    table_lines = table.render(width)[:table_area]
    table_lines.extend([""] * (table_area - len(table_lines)))
    lines.extend(table_lines)

    # Status
    lines.extend(Rule("Status", style=theme.border).render(width))
    if manager.mode == "searching":
        search_status = Status.info(f"Search: {manager.search_query}_")
        lines.append(_status_line(search_status, width, theme))
    else:
        lines.append(_status_line(manager.current_status, width, theme))

    # Controls
    lines.extend(Rule("Controls", style=theme.border).render(width))
    lines.extend(help_lines)

    return lines[:height]
