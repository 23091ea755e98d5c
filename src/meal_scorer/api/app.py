"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from meal_scorer.api.catalog import router as catalog_router
from meal_scorer.api.meals import router as meal_router
from meal_scorer.api.models import NutrientsRequest
from meal_scorer.api.serializers import serialize_outcome, serialize_score
from meal_scorer.app_logging import configure_logging
from meal_scorer.containers import AppContainer
from meal_scorer.domain.errors import (
    EmptyCatalog,
    EmptyMeal,
    EmptyQuery,
    IndexNotReady,
    InvalidLimit,
    InvalidServing,
    MealItemNotFound,
    MealScorerError,
    MealSnapshotNotFound,
)
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.domain.search import IndexStructure, SearchMode
from meal_scorer.services.meals import score_record

_ERROR_STATUS: dict[type[MealScorerError], int] = {
    EmptyQuery: 400,
    EmptyMeal: 400,
    InvalidLimit: 400,
    InvalidServing: 400,
    MealItemNotFound: 404,
    MealSnapshotNotFound: 404,
    EmptyCatalog: 409,
    IndexNotReady: 503,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    async def build_catalog() -> None:
        try:
            await container.catalog_service.build_in_background()
        except Exception:
            logger.exception("Failed to build the food catalog")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        build_task = None
        if container.settings.build_catalog_on_startup:
            build_task = asyncio.create_task(build_catalog())
        yield
        if build_task is not None and not build_task.done():
            build_task.cancel()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(catalog_router)
    app.include_router(meal_router)

    @app.exception_handler(MealScorerError)
    async def handle_domain_error(
        request: Request, exc: MealScorerError
    ) -> JSONResponse:
        """Translate domain errors into JSON error responses."""
        return JSONResponse(
            status_code=_ERROR_STATUS.get(type(exc), 400),
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: str,
        mode: SearchMode = SearchMode.CONTAINS,
        structure: IndexStructure = IndexStructure.BOTH,
        limit: int | None = Query(default=None, ge=1),
    ) -> dict[str, object]:
        """Search the catalog and time each index."""
        state_container: AppContainer = request.app.state.container
        outcome = state_container.catalog_service.search(q, mode, structure, limit)
        return serialize_outcome(outcome)

    @app.post("/foods/score")
    async def score_food(body: NutrientsRequest) -> dict[str, object]:
        """Score nutrients supplied by the caller."""
        record = NutrientRecord(**body.model_dump())
        return serialize_score(score_record(record))

    return app
