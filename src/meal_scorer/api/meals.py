"""Session meal and saved-meal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from meal_scorer.api.models import AddMealItemRequest, SaveMealRequest
from meal_scorer.api.serializers import (
    serialize_meal,
    serialize_record,
    serialize_score,
    serialize_snapshot,
)

if TYPE_CHECKING:
    from meal_scorer.containers import AppContainer

router = APIRouter(tags=["meals"])


@router.get("/sessions/{session_id}/meal")
async def get_meal(session_id: str, request: Request) -> dict[str, object]:
    """Return the items of the session's meal."""
    container: AppContainer = request.app.state.container
    return serialize_meal(container.meal_sessions.get(session_id))


@router.post("/sessions/{session_id}/meal/items")
async def add_meal_item(
    session_id: str, body: AddMealItemRequest, request: Request
) -> dict[str, object]:
    """Search for a food and add the chosen match at a serving size."""
    container: AppContainer = request.app.state.container
    candidates = container.catalog_service.find_for_meal(body.query)
    if not candidates:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No foods found matching '{body.query}'",
        )
    if body.choice > len(candidates):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Choice must be between 1 and {len(candidates)}",
        )
    meal = container.meal_sessions.get(session_id)
    scaled = container.meal_service.add_item(
        meal, candidates[body.choice - 1], body.serving_g
    )
    return {"added": serialize_record(scaled), "count": len(meal)}


@router.delete("/sessions/{session_id}/meal/items/{position}")
async def remove_meal_item(
    session_id: str, position: int, request: Request
) -> dict[str, object]:
    """Remove the item at a zero-based position."""
    container: AppContainer = request.app.state.container
    meal = container.meal_sessions.get(session_id)
    removed = container.meal_service.remove_item(meal, position)
    return {"removed": removed.name, "count": len(meal)}


@router.delete("/sessions/{session_id}/meal")
async def clear_meal(session_id: str, request: Request) -> dict[str, object]:
    """Discard every item of the session's meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_sessions.get(session_id)
    container.meal_service.clear(meal)
    return {"count": 0}


@router.get("/sessions/{session_id}/meal/score")
async def score_meal(session_id: str, request: Request) -> dict[str, object]:
    """Total and score the session's meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_sessions.get(session_id)
    return serialize_score(container.meal_service.score_meal(meal))


@router.post("/sessions/{session_id}/meal/save")
async def save_meal(
    session_id: str, body: SaveMealRequest, request: Request
) -> dict[str, object]:
    """Save the session's meal to the history."""
    container: AppContainer = request.app.state.container
    meal = container.meal_sessions.get(session_id)
    snapshot = container.meal_service.save_meal(meal, body.name)
    return serialize_snapshot(snapshot)


@router.post("/sessions/{session_id}/meal/load/{meal_id}")
async def load_meal(
    session_id: str, meal_id: UUID, request: Request
) -> dict[str, object]:
    """Replace the session's meal with a saved meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_sessions.get(session_id)
    snapshot = container.meal_service.load_meal(meal, meal_id)
    return {"loaded": snapshot.name, **serialize_meal(meal)}


@router.get("/meals")
async def list_meals(request: Request) -> dict[str, object]:
    """Return saved meals in save order."""
    container: AppContainer = request.app.state.container
    return {
        "meals": [
            serialize_snapshot(snapshot, include_items=False)
            for snapshot in container.meal_service.history()
        ]
    }


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: UUID, request: Request) -> dict[str, str]:
    """Delete a saved meal."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete_saved(meal_id)
    return {"status": "deleted"}
