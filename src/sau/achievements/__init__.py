"""sau-achievements: interactive achievement manager built on sau.tui."""

from sau.achievements.app import AchievementManager, load_achievements
from sau.achievements.catalog import (
    AchievementCatalogClient,
    BackendUnavailableError,
    CatalogError,
    JsonCatalogClient,
    NameFetchFailedError,
    NoAchievementsError,
    NotOwnedError,
)
from sau.achievements.config import ConfigStore, JsonConfigStore, MemoryConfigStore
from sau.achievements.diff import DiffEngine, partition
from sau.achievements.model import SelectionModel
from sau.achievements.sorting import comparator, sort_items
from sau.achievements.types import (
    AchievementItem,
    CatalogData,
    CommitResult,
    CommitSummary,
    SortConfig,
    Status,
)

__all__ = [
    # Event loop
    "AchievementManager",
    "load_achievements",
    # Catalog
    "AchievementCatalogClient",
    "BackendUnavailableError",
    "CatalogError",
    "JsonCatalogClient",
    "NameFetchFailedError",
    "NoAchievementsError",
    "NotOwnedError",
    # Config
    "ConfigStore",
    "JsonConfigStore",
    "MemoryConfigStore",
    # Commit
    "DiffEngine",
    "partition",
    # Model
    "SelectionModel",
    "comparator",
    "sort_items",
    # Types
    "AchievementItem",
    "CatalogData",
    "CommitResult",
    "CommitSummary",
    "SortConfig",
    "Status",
]
