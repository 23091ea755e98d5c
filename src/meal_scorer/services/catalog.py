"""Catalog lifecycle: building the index and answering searches."""

import asyncio
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from meal_scorer.domain.catalog import DEFAULT_RESULT_LIMIT, CatalogIndex, IndexStats
from meal_scorer.domain.errors import IndexNotReady
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.domain.search import IndexStructure, SearchMode, SearchOutcome

_logger = logging.getLogger(__name__)


class CatalogReader(Protocol):
    """Source of catalog records."""

    def read_records(self) -> list[NutrientRecord]:
        """Return every record of the catalog."""


@dataclass(frozen=True)
class CatalogStatus:
    """Whether the index can currently answer searches."""

    ready: bool
    building: bool
    record_count: int


@dataclass
class CatalogService:
    """Owns the catalog index and rejects searches until it is built."""

    reader: CatalogReader
    result_limit: int = DEFAULT_RESULT_LIMIT
    _index: CatalogIndex | None = field(default=None, init=False, repr=False)
    _building: bool = field(default=False, init=False, repr=False)
    _build_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def rebuild(self, records: Iterable[NutrientRecord] | None = None) -> CatalogIndex:
        """Discard the current index and build a new one.

        Searches fail with IndexNotReady until the new index is published.
        When the build fails the service is left without an index.
        """
        with self._build_lock:
            _logger.info("Catalog build started")
            self._index = None
            self._building = True
            try:
                source = self.reader.read_records() if records is None else records
                index = CatalogIndex.build(source)
                self._index = index
            finally:
                self._building = False
        stats = index.stats()
        _logger.info(
            "Catalog built: records=%s names=%s hash_ms=%.1f trie_ms=%.1f",
            stats.record_count,
            stats.distinct_names,
            stats.hash_build_ms,
            stats.trie_build_ms,
        )
        return index

    async def build_in_background(self) -> CatalogIndex:
        """Build the index on a worker thread."""
        return await asyncio.to_thread(self.rebuild)

    def status(self) -> CatalogStatus:
        index = self._index
        return CatalogStatus(
            ready=index is not None,
            building=self._building,
            record_count=len(index) if index is not None else 0,
        )

    def search(
        self,
        query: str,
        mode: SearchMode,
        structure: IndexStructure = IndexStructure.BOTH,
        limit: int | None = None,
    ) -> SearchOutcome:
        """Search the built index."""
        return self._require_index().search(
            query,
            mode,
            structure,
            limit=self.result_limit if limit is None else limit,
        )

    def find_for_meal(self, query: str) -> list[NutrientRecord]:
        """Return candidate records to add to a meal."""
        outcome = self._require_index().search(
            query, SearchMode.CONTAINS, IndexStructure.HASH, limit=self.result_limit
        )
        return outcome.hash_result.records if outcome.hash_result else []

    def stats(self) -> IndexStats:
        return self._require_index().stats()

    def _require_index(self) -> CatalogIndex:
        index = self._index
        if index is None:
            raise IndexNotReady()
        return index
