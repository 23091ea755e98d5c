"""Tests for the Supabase saved-meal repository."""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from meal_scorer.adapters.supabase_meal_repository import (
    SupabaseMealSnapshotRepository,
)
from meal_scorer.domain.meals import MealSnapshot, scale_record, total_record
from tests.conftest import APPLE


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _snapshot() -> MealSnapshot:
    item = scale_record(APPLE, 150)
    return MealSnapshot(
        id=uuid4(),
        name="Lunch",
        items=[item],
        total=total_record([item]),
        score=10,
        feedback="Excellent! Very nutritious choice.",
        saved_at=datetime(2024, 5, 1, 12, 30, tzinfo=UTC),
    )


def _row(snapshot: MealSnapshot) -> dict[str, object]:
    return {
        "id": str(snapshot.id),
        "name": snapshot.name,
        "items_json": [asdict(item) for item in snapshot.items],
        "total_json": asdict(snapshot.total),
        "score": snapshot.score,
        "feedback": snapshot.feedback,
        "saved_at": snapshot.saved_at.isoformat(),
    }


def test_save_snapshot_inserts_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_snapshots")
    snapshot = _snapshot()
    table.queue("insert", [_row(snapshot)])

    SupabaseMealSnapshotRepository(client).save_snapshot(snapshot)

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["id"] == str(snapshot.id)
    assert table.last_payload["items_json"][0]["serving_g"] == 150
    assert table.last_payload["saved_at"] == "2024-05-01T12:30:00+00:00"


def test_save_snapshot_raises_when_nothing_returned() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError, match="Failed to save meal snapshot"):
        SupabaseMealSnapshotRepository(client).save_snapshot(_snapshot())


def test_list_and_get_snapshots_rebuild_records() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_snapshots")
    snapshot = _snapshot()
    table.queue("select", [_row(snapshot)])
    table.queue("select", [_row(snapshot)])

    repository = SupabaseMealSnapshotRepository(client)
    listed = repository.list_snapshots()
    fetched = repository.get_snapshot(snapshot.id)

    assert listed == [snapshot]
    assert fetched == snapshot
    assert ("id", str(snapshot.id)) in table.last_filters
    assert repository.get_snapshot(uuid4()) is None


def test_null_nutrients_load_as_zero() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_snapshots")
    snapshot = _snapshot()
    row = _row(snapshot)
    row["items_json"][0]["sodium_mg"] = None
    row["items_json"][0]["fiber_g"] = None
    row["total_json"]["protein_g"] = None
    table.queue("select", [row])

    fetched = SupabaseMealSnapshotRepository(client).get_snapshot(snapshot.id)

    assert fetched is not None
    assert fetched.items[0].sodium_mg == 0.0
    assert fetched.items[0].fiber_g == 0.0
    assert fetched.items[0].serving_g == 150
    assert fetched.total.protein_g == 0.0


def test_delete_snapshot_reports_existence() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_snapshots")
    snapshot = _snapshot()
    table.queue("delete", [{"id": str(snapshot.id)}])

    repository = SupabaseMealSnapshotRepository(client)

    assert repository.delete_snapshot(snapshot.id) is True
    assert repository.delete_snapshot(snapshot.id) is False


def test_custom_table_name() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseMealSnapshotRepository(client, table="saved_meals")

    assert repository.list_snapshots() == []
    assert "saved_meals" in client.tables
