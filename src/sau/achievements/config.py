"""Sort preference persistence. Stores config at ~/.sau/config.json."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from sau.achievements.types import SortConfig, sort_config_from_dict, sort_config_to_dict

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_dir() -> Path:
    return Path(os.environ.get("SAU_CONFIG_DIR", Path.home() / ".sau"))


class ConfigStore(Protocol):
    """Opaque store for the sort preference."""

    def load(self) -> SortConfig: ...

    def save(self, config: SortConfig) -> None: ...


class JsonConfigStore:
    """ConfigStore backed by a small JSON file.

    ``load`` never fails: a missing, unreadable or malformed file yields the
    default SortConfig.  ``save`` is best effort: failures are logged and
    otherwise ignored.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return get_config_dir() / CONFIG_FILE_NAME

    def load(self) -> SortConfig:
        config_path = self.path
        if not config_path.exists():
            return SortConfig()
        try:
            data = json.loads(config_path.read_text())
            if not isinstance(data, dict):
                raise ValueError("config root is not an object")
            return sort_config_from_dict(data)
        except (OSError, ValueError) as e:
            logger.warning("Error reading config %s: %s", config_path, e)
            return SortConfig()

    def save(self, config: SortConfig) -> None:
        config_path = self.path
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(json.dumps(sort_config_to_dict(config), indent=2))
        except OSError as e:
            logger.warning("Error saving config %s: %s", config_path, e)


class MemoryConfigStore:
    """ConfigStore that keeps the preference in memory only."""

    def __init__(self, config: SortConfig | None = None) -> None:
        self.config = config or SortConfig()
        self.saves = 0

    def load(self) -> SortConfig:
        return SortConfig(column=self.config.column, order=self.config.order)

    def save(self, config: SortConfig) -> None:
        self.config = SortConfig(column=config.column, order=config.order)
        self.saves += 1
