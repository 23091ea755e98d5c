"""Meal models and aggregation of scaled records."""

import math
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from meal_scorer.domain.errors import EmptyMeal, InvalidServing, MealItemNotFound
from meal_scorer.domain.records import NUTRIENT_FIELDS, NutrientRecord

BASELINE_GRAMS = 100.0
MEAL_TOTAL_NAME = "Your Complete Meal"


def scale_record(record: NutrientRecord, serving_g: float) -> NutrientRecord:
    """Scale a per-100 g record to a serving size in grams."""
    if (
        isinstance(serving_g, bool)
        or not isinstance(serving_g, int | float)
        or not math.isfinite(serving_g)
        or serving_g <= 0
    ):
        raise InvalidServing(serving_g)
    factor = serving_g / BASELINE_GRAMS
    scaled = {name: value * factor for name, value in record.nutrients().items()}
    return replace(record, serving_g=float(serving_g), **scaled)


def total_record(items: Iterable[NutrientRecord]) -> NutrientRecord:
    """Sum the nutrients of all items into one aggregate record.

    Uses math.fsum so the total does not depend on item order.
    """
    collected = list(items)
    if not collected:
        raise EmptyMeal()
    totals = {
        name: math.fsum(getattr(item, name) for item in collected)
        for name in NUTRIENT_FIELDS
    }
    return NutrientRecord(name=MEAL_TOTAL_NAME, **totals)


@dataclass(frozen=True)
class MealScore:
    """Total nutrients of a meal with its score."""

    total: NutrientRecord
    score: int
    feedback: str
    band: str


@dataclass
class Meal:
    """Ordered scaled records owned by one session.

    The cached score is dropped on every change.
    """

    items: list[NutrientRecord] = field(default_factory=list)
    cached_score: MealScore | None = None
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.items)

    def append(self, record: NutrientRecord) -> None:
        with self.lock:
            self.items.append(record)
            self.cached_score = None

    def remove(self, position: int) -> NutrientRecord:
        with self.lock:
            if position < 0 or position >= len(self.items):
                raise MealItemNotFound(position)
            self.cached_score = None
            return self.items.pop(position)

    def clear(self) -> None:
        with self.lock:
            self.items.clear()
            self.cached_score = None

    def replace_items(
        self, items: list[NutrientRecord], cached_score: MealScore | None
    ) -> None:
        with self.lock:
            self.items = list(items)
            self.cached_score = cached_score

    def snapshot_items(self) -> list[NutrientRecord]:
        with self.lock:
            return list(self.items)


@dataclass(frozen=True)
class MealSnapshot:
    """A saved meal with its items, totals and score."""

    id: UUID
    name: str
    items: list[NutrientRecord]
    total: NutrientRecord
    score: int
    feedback: str
    saved_at: datetime
