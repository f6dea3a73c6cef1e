"""DiffEngine: commit only the delta between desired and confirmed state."""

from __future__ import annotations

import logging

from sau.achievements.catalog import AchievementCatalogClient, BackendUnavailableError
from sau.achievements.model import SelectionModel
from sau.achievements.types import AchievementItem, CommitSummary, Status

logger = logging.getLogger(__name__)


def partition(items: list[AchievementItem]) -> tuple[list[str], list[str]]:
    """Split the outstanding delta into ``(to_set, to_clear)`` name lists.

    Items whose ``selected`` already equals ``unlocked`` are in neither list.
    """
    to_set = [item.name for item in items if item.selected and not item.unlocked]
    to_clear = [item.name for item in items if not item.selected and item.unlocked]
    return to_set, to_clear


class DiffEngine:
    """Drives commits for a SelectionModel through the catalog client."""

    def __init__(self, client: AchievementCatalogClient) -> None:
        self._client = client

    def process_changes(self, model: SelectionModel) -> CommitSummary:
        """Commit the outstanding delta of *model* and fold results back in.

        With nothing to commit this is a pure no-op: no backend call and the
        model status is left as it was.  Items that fail keep their
        ``unlocked`` value, so calling again retries exactly those.
        """
        to_set, to_clear = partition(model.items)
        summary = CommitSummary()

        if not to_set and not to_clear:
            return summary

        by_name = {item.name: item for item in model.items}

        for names, clear in ((to_set, False), (to_clear, True)):
            if names:
                self._commit_partition(model.app_id, names, clear, by_name, summary)

        if summary.fail_count == 0 and summary.success_count > 0:
            model.status = Status.success(
                f"✓ Successfully processed {summary.success_count} achievement(s)"
            )
        elif summary.fail_count > 0:
            message = f"⚠ Processed: {summary.success_count} success, {summary.fail_count} failed"
            if summary.errors:
                message += f" ({'; '.join(summary.errors)})"
            model.status = Status.error(message)

        return summary

    def _commit_partition(
        self,
        app_id: int,
        names: list[str],
        clear: bool,
        by_name: dict[str, AchievementItem],
        summary: CommitSummary,
    ) -> None:
        action = "clear" if clear else "set"
        logger.info("Committing %s of %d achievement(s) for app %d", action, len(names), app_id)

        try:
            results = self._client.commit(app_id, names, clear)
        except BackendUnavailableError as e:
            logger.warning("Commit (%s) for app %d failed: %s", action, app_id, e)
            summary.errors.append(str(e))
            for name in names:
                item = by_name.get(name)
                if item is not None:
                    item.status = "failed"
                    summary.fail_count += 1
            return

        for result in results:
            item = by_name.get(result.name)
            if item is None:
                logger.debug("Ignoring result for unknown achievement %r", result.name)
                continue
            if result.success:
                item.status = "success"
                item.unlocked = not clear
                summary.success_count += 1
            else:
                item.status = "failed"
                summary.fail_count += 1

        logger.info(
            "Commit (%s) for app %d: %d ok, %d failed",
            action,
            app_id,
            sum(1 for r in results if r.success),
            sum(1 for r in results if not r.success),
        )
