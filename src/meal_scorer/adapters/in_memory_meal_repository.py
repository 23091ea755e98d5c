"""In-memory store for saved meals."""

import threading
from dataclasses import dataclass, field
from uuid import UUID

from meal_scorer.domain.meals import MealSnapshot
from meal_scorer.services.meals import MealSnapshotRepository


@dataclass
class InMemoryMealSnapshotRepository(MealSnapshotRepository):
    """Keeps saved meals in insertion order for the life of the process."""

    snapshots: dict[UUID, MealSnapshot] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def save_snapshot(self, snapshot: MealSnapshot) -> None:
        with self._lock:
            self.snapshots[snapshot.id] = snapshot

    def list_snapshots(self) -> list[MealSnapshot]:
        with self._lock:
            return list(self.snapshots.values())

    def get_snapshot(self, snapshot_id: UUID) -> MealSnapshot | None:
        with self._lock:
            return self.snapshots.get(snapshot_id)

    def delete_snapshot(self, snapshot_id: UUID) -> bool:
        with self._lock:
            return self.snapshots.pop(snapshot_id, None) is not None
