"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from meal_scorer.adapters.csv_catalog_reader import CsvCatalogReader
from meal_scorer.adapters.in_memory_meal_repository import (
    InMemoryMealSnapshotRepository,
)
from meal_scorer.adapters.supabase_meal_repository import (
    SupabaseMealSnapshotRepository,
)
from meal_scorer.config import Settings
from meal_scorer.services.catalog import CatalogService
from meal_scorer.services.meals import MealService, MealSnapshotRepository
from meal_scorer.services.sessions import MealSessions


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    meal_service: MealService
    meal_sessions: MealSessions


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog_service = CatalogService(
        reader=CsvCatalogReader(Path(resolved_settings.catalog_path)),
        result_limit=resolved_settings.search_result_limit,
    )
    meal_service = MealService(_build_meal_repository(resolved_settings))
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        meal_service=meal_service,
        meal_sessions=MealSessions(),
    )


def _build_meal_repository(settings: Settings) -> MealSnapshotRepository:
    if not settings.uses_supabase:
        return InMemoryMealSnapshotRepository()
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    return SupabaseMealSnapshotRepository(
        supabase_client, table=settings.meal_snapshots_table
    )
