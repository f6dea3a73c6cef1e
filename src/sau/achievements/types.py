"""Core type definitions for the achievement manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

AchievementStatus = Literal["unchanged", "success", "failed"]
StatusLevel = Literal["info", "success", "error"]
SortColumn = Literal["percentage", "name"]
SortOrder = Literal["ascending", "descending"]

SORT_COLUMNS: tuple[SortColumn, ...] = ("percentage", "name")
SORT_ORDERS: tuple[SortOrder, ...] = ("ascending", "descending")


@dataclass
class AchievementItem:
    """One named flag of an application.

    ``selected`` is the state the user wants, ``unlocked`` the last state the
    backend confirmed.  ``status`` only records how the last commit touching
    this item went and is never used to compute what to commit.
    """

    name: str
    selected: bool
    unlocked: bool
    percentage: float
    status: AchievementStatus = "unchanged"

    @property
    def changed(self) -> bool:
        return self.selected != self.unlocked


@dataclass
class Status:
    message: str
    level: StatusLevel = "info"

    @classmethod
    def info(cls, message: str) -> Status:
        return cls(message, "info")

    @classmethod
    def success(cls, message: str) -> Status:
        return cls(message, "success")

    @classmethod
    def error(cls, message: str) -> Status:
        return cls(message, "error")


@dataclass
class SortConfig:
    column: SortColumn = "percentage"
    order: SortOrder = "descending"

    def toggled(self) -> SortConfig:
        order: SortOrder = "descending" if self.order == "ascending" else "ascending"
        return SortConfig(column=self.column, order=order)


@dataclass
class CatalogData:
    """Achievement data for one application, as parallel lists."""

    names: list[str] = field(default_factory=list)
    unlocked: list[bool] = field(default_factory=list)
    percentage: list[float] = field(default_factory=list)

    def to_items(self) -> list[AchievementItem]:
        return [
            AchievementItem(name=name, selected=unlocked, unlocked=unlocked, percentage=pct)
            for name, unlocked, pct in zip(self.names, self.unlocked, self.percentage, strict=True)
        ]


@dataclass
class CommitResult:
    name: str
    success: bool


@dataclass
class CommitSummary:
    """Aggregate outcome of one ``process_changes`` call."""

    success_count: int = 0
    fail_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def attempted(self) -> bool:
        return self.success_count + self.fail_count > 0


def sort_config_from_dict(data: dict) -> SortConfig:
    """Deserialize a SortConfig, tolerating legacy capitalised values.

    Raises ``ValueError`` for unknown columns or orders.
    """
    column = str(data.get("sortColumn", "percentage")).lower()
    order = str(data.get("sortOrder", "descending")).lower()
    if column not in SORT_COLUMNS:
        raise ValueError(f"unknown sort column: {column!r}")
    if order not in SORT_ORDERS:
        raise ValueError(f"unknown sort order: {order!r}")
    return SortConfig(column=column, order=order)  # type: ignore[arg-type]


def sort_config_to_dict(config: SortConfig) -> dict:
    """Serialize a SortConfig to a JSON-compatible dict."""
    return {"sortColumn": config.column, "sortOrder": config.order}
