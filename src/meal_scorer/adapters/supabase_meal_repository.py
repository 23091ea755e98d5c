"""Supabase repository for saved meals."""

from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_scorer.domain.meals import MealSnapshot
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.services.meals import MealSnapshotRepository

_COLUMNS = "id, name, items_json, total_json, score, feedback, saved_at"


@dataclass
class SupabaseMealSnapshotRepository(MealSnapshotRepository):
    """Supabase implementation for saved meals."""

    client: Client
    table: str = "meal_snapshots"

    def save_snapshot(self, snapshot: MealSnapshot) -> None:
        """Insert a snapshot row."""
        response = (
            self.client.table(self.table)
            .insert(
                {
                    "id": str(snapshot.id),
                    "name": snapshot.name,
                    "items_json": [asdict(item) for item in snapshot.items],
                    "total_json": asdict(snapshot.total),
                    "score": snapshot.score,
                    "feedback": snapshot.feedback,
                    "saved_at": snapshot.saved_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal snapshot")

    def list_snapshots(self) -> list[MealSnapshot]:
        """Return saved meals oldest first."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .order("saved_at", desc=False)
            .execute()
        )
        return [_row_to_snapshot(row) for row in response.data or []]

    def get_snapshot(self, snapshot_id: UUID) -> MealSnapshot | None:
        """Return a saved meal by id, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", str(snapshot_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_snapshot(response.data[0])

    def delete_snapshot(self, snapshot_id: UUID) -> bool:
        """Delete a saved meal row."""
        response = (
            self.client.table(self.table).delete().eq("id", str(snapshot_id)).execute()
        )
        return bool(response.data)


def _row_to_snapshot(row: dict[str, object]) -> MealSnapshot:
    return MealSnapshot(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        items=[_to_record(item) for item in row.get("items_json") or []],
        total=_to_record(row["total_json"]),
        score=int(row["score"]),
        feedback=str(row.get("feedback") or ""),
        saved_at=datetime.fromisoformat(str(row["saved_at"])),
    )


def _to_record(payload: dict[str, object]) -> NutrientRecord:
    serving = payload.get("serving_g")
    return NutrientRecord(
        name=str(payload.get("name") or ""),
        calories=float(payload.get("calories") or 0.0),
        protein_g=float(payload.get("protein_g") or 0.0),
        fat_g=float(payload.get("fat_g") or 0.0),
        carbs_g=float(payload.get("carbs_g") or 0.0),
        sugar_g=float(payload.get("sugar_g") or 0.0),
        fiber_g=float(payload.get("fiber_g") or 0.0),
        sat_fat_g=float(payload.get("sat_fat_g") or 0.0),
        sodium_mg=float(payload.get("sodium_mg") or 0.0),
        serving_g=float(serving) if isinstance(serving, int | float) else None,
    )
