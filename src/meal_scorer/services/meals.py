"""Meal building, scoring and saved-meal history."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_scorer.domain import scoring
from meal_scorer.domain.errors import EmptyMeal, MealSnapshotNotFound
from meal_scorer.domain.meals import (
    BASELINE_GRAMS,
    Meal,
    MealScore,
    MealSnapshot,
    scale_record,
    total_record,
)
from meal_scorer.domain.records import NutrientRecord

_logger = logging.getLogger(__name__)


class MealSnapshotRepository(Protocol):
    """Persistence interface for saved meals."""

    def save_snapshot(self, snapshot: MealSnapshot) -> None:
        """Store a meal snapshot."""

    def list_snapshots(self) -> list[MealSnapshot]:
        """Return saved meals in the order they were saved."""

    def get_snapshot(self, snapshot_id: UUID) -> MealSnapshot | None:
        """Return a saved meal by id, if present."""

    def delete_snapshot(self, snapshot_id: UUID) -> bool:
        """Delete a saved meal and report whether it existed."""


def score_record(record: NutrientRecord) -> MealScore:
    """Score a single record or meal total."""
    value = scoring.score(record)
    return MealScore(
        total=record,
        score=value,
        feedback=scoring.feedback(value),
        band=scoring.score_band(value),
    )


@dataclass
class MealService:
    """Application service for session meals."""

    repository: MealSnapshotRepository

    def add_item(
        self, meal: Meal, record: NutrientRecord, serving_g: float = BASELINE_GRAMS
    ) -> NutrientRecord:
        """Scale a catalog record to a serving and append it to the meal."""
        scaled = scale_record(record, serving_g)
        meal.append(scaled)
        return scaled

    def remove_item(self, meal: Meal, position: int) -> NutrientRecord:
        """Remove the item at a zero-based position."""
        return meal.remove(position)

    def clear(self, meal: Meal) -> None:
        meal.clear()

    def score_meal(self, meal: Meal) -> MealScore:
        """Total the meal and score it, caching the result on the meal."""
        with meal.lock:
            if meal.cached_score is not None:
                return meal.cached_score
            result = score_record(total_record(meal.items))
            meal.cached_score = result
            return result

    def save_meal(self, meal: Meal, name: str | None = None) -> MealSnapshot:
        """Persist the current meal under a display name."""
        with meal.lock:
            if not meal.items:
                raise EmptyMeal()
            result = self.score_meal(meal)
            items = list(meal.items)
        display_name = (name or "").strip() or f"Meal {len(self.history()) + 1}"
        snapshot = MealSnapshot(
            id=uuid4(),
            name=display_name,
            items=items,
            total=result.total,
            score=result.score,
            feedback=result.feedback,
            saved_at=datetime.now(tz=UTC),
        )
        self.repository.save_snapshot(snapshot)
        _logger.info("Meal saved: id=%s items=%s", snapshot.id, len(items))
        return snapshot

    def load_meal(self, meal: Meal, snapshot_id: UUID) -> MealSnapshot:
        """Replace the meal contents with a saved meal."""
        snapshot = self.repository.get_snapshot(snapshot_id)
        if snapshot is None:
            raise MealSnapshotNotFound(snapshot_id)
        meal.replace_items(
            snapshot.items,
            MealScore(
                total=snapshot.total,
                score=snapshot.score,
                feedback=snapshot.feedback,
                band=scoring.score_band(snapshot.score),
            ),
        )
        return snapshot

    def delete_saved(self, snapshot_id: UUID) -> None:
        if not self.repository.delete_snapshot(snapshot_id):
            raise MealSnapshotNotFound(snapshot_id)
        _logger.info("Meal deleted: id=%s", snapshot_id)

    def history(self) -> list[MealSnapshot]:
        return self.repository.list_snapshots()
