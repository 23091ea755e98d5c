"""JSON serialization of domain values for API responses."""

from dataclasses import asdict

from meal_scorer.domain import scoring
from meal_scorer.domain.meals import Meal, MealScore, MealSnapshot
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.domain.search import SearchOutcome, StructureResult


def serialize_record(record: NutrientRecord) -> dict[str, object]:
    """Return a record with its energy in kJ and its score."""
    value = scoring.score(record)
    payload = asdict(record)
    payload["energy_kj"] = record.energy_kj
    payload["score"] = value
    payload["feedback"] = scoring.feedback(value)
    payload["band"] = scoring.score_band(value)
    return payload


def serialize_outcome(outcome: SearchOutcome) -> dict[str, object]:
    return {
        "query": outcome.query,
        "mode": outcome.mode.value,
        "hash": _serialize_result(outcome.hash_result),
        "trie": _serialize_result(outcome.trie_result),
        "comparison": outcome.comparison(),
    }


def serialize_meal(meal: Meal) -> dict[str, object]:
    items = meal.snapshot_items()
    return {
        "count": len(items),
        "items": [
            {"position": position, **asdict(item)}
            for position, item in enumerate(items)
        ],
    }


def serialize_score(result: MealScore) -> dict[str, object]:
    return {
        "total": asdict(result.total),
        "score": result.score,
        "feedback": result.feedback,
        "band": result.band,
        "negative_points": scoring.negative_points(result.total),
        "positive_points": scoring.positive_points(result.total),
    }


def serialize_snapshot(
    snapshot: MealSnapshot, *, include_items: bool = True
) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": str(snapshot.id),
        "name": snapshot.name,
        "score": snapshot.score,
        "feedback": snapshot.feedback,
        "item_count": len(snapshot.items),
        "saved_at": snapshot.saved_at.isoformat(),
    }
    if include_items:
        payload["items"] = [asdict(item) for item in snapshot.items]
        payload["total"] = asdict(snapshot.total)
    return payload


def _serialize_result(result: StructureResult | None) -> dict[str, object] | None:
    if result is None:
        return None
    return {
        "elapsed_ms": result.elapsed_ms,
        "count": len(result.records),
        "items": [serialize_record(record) for record in result.records],
    }
