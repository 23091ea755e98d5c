"""Tests for the catalog service lifecycle."""

import asyncio
import threading
from dataclasses import dataclass, field

import pytest

from meal_scorer.domain.errors import EmptyCatalog, IndexNotReady, InvalidLimit
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.domain.search import IndexStructure, SearchMode
from meal_scorer.services.catalog import CatalogService
from tests.conftest import StaticCatalogReader


def test_search_before_build_is_rejected(catalog_service: CatalogService) -> None:
    status = catalog_service.status()

    assert status.ready is False
    assert status.record_count == 0
    with pytest.raises(IndexNotReady):
        catalog_service.search("apple", SearchMode.EXACT)
    with pytest.raises(IndexNotReady):
        catalog_service.find_for_meal("apple")
    with pytest.raises(IndexNotReady):
        catalog_service.stats()


def test_rebuild_reads_catalog(
    catalog_service: CatalogService, catalog_reader: StaticCatalogReader
) -> None:
    catalog_service.rebuild()

    status = catalog_service.status()
    assert catalog_reader.calls == 1
    assert status.ready is True
    assert status.building is False
    assert status.record_count == 7
    assert catalog_service.stats().distinct_names == 6


def test_rebuild_with_explicit_records(
    catalog_service: CatalogService, catalog_reader: StaticCatalogReader
) -> None:
    catalog_service.rebuild([NutrientRecord(name="Kiwi")])

    assert catalog_reader.calls == 0
    outcome = catalog_service.search("kiwi", SearchMode.EXACT, IndexStructure.HASH)
    assert [r.name for r in outcome.hash_result.records] == ["Kiwi"]


def test_failed_rebuild_leaves_service_not_ready(
    catalog_service: CatalogService,
) -> None:
    catalog_service.rebuild()

    with pytest.raises(EmptyCatalog):
        catalog_service.rebuild([])

    assert catalog_service.status().ready is False
    with pytest.raises(IndexNotReady):
        catalog_service.search("apple", SearchMode.EXACT)


@dataclass
class GatedCatalogReader(StaticCatalogReader):
    """Blocks inside read_records until released."""

    started: threading.Event = field(default_factory=threading.Event)
    release: threading.Event = field(default_factory=threading.Event)

    def read_records(self) -> list[NutrientRecord]:
        self.started.set()
        self.release.wait(timeout=5)
        return super().read_records()


def test_search_during_rebuild_is_rejected(records: list[NutrientRecord]) -> None:
    reader = GatedCatalogReader(records)
    service = CatalogService(reader=reader)
    service.rebuild(records)

    worker = threading.Thread(target=service.rebuild)
    worker.start()
    try:
        assert reader.started.wait(timeout=5)
        assert service.status().building is True
        with pytest.raises(IndexNotReady):
            service.search("apple", SearchMode.EXACT)
    finally:
        reader.release.set()
        worker.join(timeout=5)

    status = service.status()
    assert status.ready is True
    assert status.building is False
    assert status.record_count == 7


def test_zero_limit_is_not_replaced_by_default(
    catalog_service: CatalogService,
) -> None:
    catalog_service.rebuild()

    with pytest.raises(InvalidLimit):
        catalog_service.search("apple", SearchMode.EXACT, limit=0)


def test_build_in_background(catalog_service: CatalogService) -> None:
    index = asyncio.run(catalog_service.build_in_background())

    assert len(index) == 7
    assert catalog_service.status().ready is True


def test_search_uses_configured_limit(catalog_reader: StaticCatalogReader) -> None:
    service = CatalogService(reader=catalog_reader, result_limit=2)
    service.rebuild()

    default = service.search("a", SearchMode.CONTAINS)
    wider = service.search("a", SearchMode.CONTAINS, limit=10)

    assert len(default.hash_result.records) == 2
    assert len(wider.hash_result.records) == 7


def test_find_for_meal_matches_substrings(catalog_service: CatalogService) -> None:
    catalog_service.rebuild()

    names = [record.name for record in catalog_service.find_for_meal(" APPLE ")]

    assert names == ["Apple", "apple", "Apple Pie", "Applesauce", "Pineapple"]
    assert catalog_service.find_for_meal("kiwi") == []
