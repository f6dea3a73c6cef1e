"""Tests for sau.achievements.diff -- the commit protocol."""

from __future__ import annotations

from sau.achievements.diff import DiffEngine, partition
from sau.achievements.model import SelectionModel
from sau.achievements.types import AchievementItem, Status

from fake_catalog import FakeCatalogClient

APP = 7


def _model(rows: list[tuple[str, bool, bool]]) -> SelectionModel:
    """Build a model from ``(name, selected, unlocked)`` rows, in order."""
    items = [
        AchievementItem(name=name, selected=sel, unlocked=unl, percentage=50.0)
        for name, sel, unl in rows
    ]
    return SelectionModel(APP, items)


def _client(rows: list[tuple[str, bool, bool]]) -> FakeCatalogClient:
    return FakeCatalogClient({APP: [(name, unl, 50.0) for name, _, unl in rows]})


def _item(model: SelectionModel, name: str) -> AchievementItem:
    return next(item for item in model.items if item.name == name)


# ---------------------------------------------------------------------------
# partition
# ---------------------------------------------------------------------------


class TestPartition:
    def test_splits_set_and_clear(self) -> None:
        model = _model([("A", True, False), ("B", False, True), ("C", True, True), ("D", False, False)])
        assert partition(model.items) == (["A"], ["B"])

    def test_in_sync_items_are_excluded(self) -> None:
        model = _model([("A", True, True), ("B", False, False)])
        assert partition(model.items) == ([], [])


# ---------------------------------------------------------------------------
# process_changes
# ---------------------------------------------------------------------------


class TestProcessChanges:
    def test_nothing_to_commit_is_noop(self) -> None:
        rows = [("A", True, True), ("B", False, False)]
        model = _model(rows)
        model.status = Status.info("previous")
        client = _client(rows)

        summary = DiffEngine(client).process_changes(model)

        assert client.commit_calls == []
        assert model.status == Status.info("previous")
        assert not summary.attempted

    def test_set_and_clear_partitions_are_committed(self) -> None:
        rows = [("A", True, False), ("B", False, True), ("C", True, True)]
        model = _model(rows)
        client = _client(rows)

        summary = DiffEngine(client).process_changes(model)

        assert client.commit_calls == [(APP, ["A"], False), (APP, ["B"], True)]
        assert summary.success_count == 2
        assert summary.fail_count == 0
        assert _item(model, "A").unlocked is True
        assert _item(model, "B").unlocked is False
        assert _item(model, "A").status == "success"
        assert _item(model, "B").status == "success"
        assert _item(model, "C").status == "unchanged"
        assert model.status is not None
        assert model.status.level == "success"
        assert "2" in model.status.message

    def test_per_name_failure_is_local(self) -> None:
        rows = [("A", True, False), ("B", True, False)]
        model = _model(rows)
        client = _client(rows)
        client.fail_names = {"B"}

        summary = DiffEngine(client).process_changes(model)

        assert (summary.success_count, summary.fail_count) == (1, 1)
        assert _item(model, "A").status == "success"
        assert _item(model, "A").unlocked is True
        assert _item(model, "B").status == "failed"
        assert _item(model, "B").unlocked is False
        assert model.status is not None
        assert model.status.level == "error"
        assert "1 success" in model.status.message
        assert "1 failed" in model.status.message

    def test_whole_partition_failure(self) -> None:
        rows = [("A", True, False), ("B", False, True)]
        model = _model(rows)
        client = _client(rows)
        client.unavailable = "clear"

        summary = DiffEngine(client).process_changes(model)

        a, b = _item(model, "A"), _item(model, "B")
        assert a.status == "success"
        assert a.unlocked is True
        assert b.status == "failed"
        assert b.unlocked is True
        assert (summary.success_count, summary.fail_count) == (1, 1)
        assert summary.errors == ["Failed to store stats"]
        assert model.status is not None
        assert model.status.level == "error"
        assert "1 success, 1 failed" in model.status.message
        assert "Failed to store stats" in model.status.message

    def test_retry_only_commits_outstanding_delta(self) -> None:
        rows = [("A", True, False), ("B", False, True)]
        model = _model(rows)
        client = _client(rows)
        client.unavailable = "clear"
        engine = DiffEngine(client)
        engine.process_changes(model)

        client.unavailable = False
        client.commit_calls.clear()
        summary = engine.process_changes(model)

        assert client.commit_calls == [(APP, ["B"], True)]
        assert summary.success_count == 1
        assert _item(model, "B").unlocked is False
        assert _item(model, "B").status == "success"
        assert model.status is not None
        assert model.status.level == "success"

    def test_everything_fails(self) -> None:
        rows = [("A", True, False), ("B", True, False)]
        model = _model(rows)
        client = _client(rows)
        client.unavailable = True

        summary = DiffEngine(client).process_changes(model)

        assert summary.success_count == 0
        assert summary.fail_count == 2
        assert all(item.status == "failed" for item in model.items)
        assert model.status is not None
        assert model.status.level == "error"

    def test_second_commit_after_success_is_noop(self) -> None:
        rows = [("A", True, False)]
        model = _model(rows)
        client = _client(rows)
        engine = DiffEngine(client)
        engine.process_changes(model)
        client.commit_calls.clear()

        engine.process_changes(model)

        assert client.commit_calls == []
