"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from meal_scorer.adapters.in_memory_meal_repository import (
    InMemoryMealSnapshotRepository,
)
from meal_scorer.config import Settings
from meal_scorer.containers import AppContainer
from meal_scorer.domain.catalog import CatalogIndex
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.services.catalog import CatalogReader, CatalogService
from meal_scorer.services.meals import MealService
from meal_scorer.services.sessions import MealSessions

APPLE = NutrientRecord(
    name="Apple",
    calories=52,
    protein_g=0.3,
    fat_g=0.2,
    carbs_g=14,
    sugar_g=10,
    fiber_g=2.4,
    sat_fat_g=0,
    sodium_mg=1,
)


@dataclass
class StaticCatalogReader(CatalogReader):
    """Catalog reader returning a fixed list of records."""

    records: list[NutrientRecord] = field(default_factory=list)
    calls: int = 0

    def read_records(self) -> list[NutrientRecord]:
        self.calls += 1
        return list(self.records)


@pytest.fixture
def records() -> list[NutrientRecord]:
    return [
        APPLE,
        NutrientRecord(name="Apple Pie", calories=237, sugar_g=16, sat_fat_g=3.8),
        NutrientRecord(name="Pineapple", calories=50, sugar_g=10, fiber_g=1.4),
        NutrientRecord(name="apple", calories=60, sugar_g=11),
        NutrientRecord(name="Banana", calories=89, sugar_g=12, fiber_g=2.6),
        NutrientRecord(name="Chicken Breast", calories=165, protein_g=31),
        NutrientRecord(name="Applesauce", calories=42, sugar_g=9.4),
    ]


@pytest.fixture
def catalog(records: list[NutrientRecord]) -> CatalogIndex:
    return CatalogIndex.build(records)


@pytest.fixture
def catalog_reader(records: list[NutrientRecord]) -> StaticCatalogReader:
    return StaticCatalogReader(records)


@pytest.fixture
def catalog_service(catalog_reader: StaticCatalogReader) -> CatalogService:
    return CatalogService(reader=catalog_reader, result_limit=20)


@pytest.fixture
def meal_repository() -> InMemoryMealSnapshotRepository:
    return InMemoryMealSnapshotRepository()


@pytest.fixture
def meal_service(meal_repository: InMemoryMealSnapshotRepository) -> MealService:
    return MealService(meal_repository)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        catalog_path="data/foods.csv",
        build_catalog_on_startup=False,
        admin_token="admin-token",
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_service: CatalogService,
    meal_service: MealService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        meal_service=meal_service,
        meal_sessions=MealSessions(),
    )
