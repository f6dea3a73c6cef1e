"""Achievement catalog: the backend that owns achievement state.

``AchievementCatalogClient`` is the boundary the manager talks to.
``JsonCatalogClient`` implements it on top of a local JSON document so the
manager can run without a platform SDK::

    {
      "apps": {
        "480": {
          "name": "Spacewar",
          "achievements": [
            {"name": "ACH_WIN_ONE_GAME", "unlocked": false, "percentage": 41.2}
          ]
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from sau.achievements.types import CatalogData, CommitResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CatalogError(Exception):
    """Base class for catalog failures."""


class NotOwnedError(CatalogError):
    def __init__(self, app_id: int) -> None:
        super().__init__(f"App {app_id} not in your library")
        self.app_id = app_id


class NoAchievementsError(CatalogError):
    def __init__(self, app_id: int) -> None:
        super().__init__(f"No achievements were found for app {app_id}")
        self.app_id = app_id


class NameFetchFailedError(CatalogError):
    def __init__(self, app_id: int) -> None:
        super().__init__(f"Failed to get achievement names for app {app_id}")
        self.app_id = app_id


class BackendUnavailableError(CatalogError):
    """The backend could not apply or persist a commit at all."""


# ---------------------------------------------------------------------------
# Client protocol
# ---------------------------------------------------------------------------


class AchievementCatalogClient(Protocol):
    def fetch(self, app_id: int) -> CatalogData:
        """Return the achievements of *app_id*.

        Raises ``NotOwnedError``, ``NoAchievementsError`` or
        ``NameFetchFailedError``; a partial list is never returned.
        """
        ...

    def commit(self, app_id: int, names: list[str], clear: bool) -> list[CommitResult]:
        """Unlock (or with *clear*, lock) *names* and persist the change.

        Returns one result per name.  Raises ``BackendUnavailableError`` when
        nothing could be applied.
        """
        ...


# ---------------------------------------------------------------------------
# JSON file implementation
# ---------------------------------------------------------------------------


def _coerce_percentage(value: Any) -> float:
    try:
        pct = float(value)
    except (TypeError, ValueError):
        return math.nan
    return pct


class JsonCatalogClient:
    """Catalog stored in a single JSON file.

    Every call re-reads the file; commits are written back atomically
    (temporary file + rename) so a crash never leaves a truncated catalog.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        data = json.loads(self.path.read_text())
        if not isinstance(data, dict):
            raise ValueError("catalog root is not an object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".catalog-", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def _app_entry(self, data: dict[str, Any], app_id: int) -> dict[str, Any] | None:
        apps = data.get("apps")
        if not isinstance(apps, dict):
            return None
        entry = apps.get(str(app_id))
        return entry if isinstance(entry, dict) else None

    def fetch(self, app_id: int) -> CatalogData:
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning("Cannot read catalog %s: %s", self.path, e)
            raise NotOwnedError(app_id) from e

        entry = self._app_entry(data, app_id)
        if entry is None:
            raise NotOwnedError(app_id)

        achievements = entry.get("achievements")
        if not isinstance(achievements, list) or not achievements:
            raise NoAchievementsError(app_id)

        result = CatalogData()
        seen: set[str] = set()
        for raw in achievements:
            name = raw.get("name") if isinstance(raw, dict) else None
            if not isinstance(name, str) or not name:
                raise NameFetchFailedError(app_id)
            if name in seen:
                logger.warning("Duplicate achievement %r for app %d", name, app_id)
                raise NameFetchFailedError(app_id)
            unlocked = raw.get("unlocked", False)
            if not isinstance(unlocked, bool):
                logger.warning("Achievement %r has non-boolean unlocked %r", name, unlocked)
                raise NameFetchFailedError(app_id)
            seen.add(name)
            result.names.append(name)
            result.unlocked.append(unlocked)
            result.percentage.append(_coerce_percentage(raw.get("percentage", 0.0)))

        logger.info("Fetched %d achievements for app %d", len(result.names), app_id)
        return result

    def commit(self, app_id: int, names: list[str], clear: bool) -> list[CommitResult]:
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            raise BackendUnavailableError(f"Catalog unavailable: {e}") from e

        entry = self._app_entry(data, app_id)
        if entry is None or not isinstance(entry.get("achievements"), list):
            raise BackendUnavailableError(f"App {app_id} is not available")

        by_name = {
            raw["name"]: raw
            for raw in entry["achievements"]
            if isinstance(raw, dict) and isinstance(raw.get("name"), str)
        }

        results: list[CommitResult] = []
        for name in names:
            raw = by_name.get(name)
            if raw is None:
                results.append(CommitResult(name=name, success=False))
                continue
            raw["unlocked"] = not clear
            results.append(CommitResult(name=name, success=True))

        try:
            self._write(data)
        except OSError as e:
            raise BackendUnavailableError(f"Failed to store stats: {e}") from e

        return results
