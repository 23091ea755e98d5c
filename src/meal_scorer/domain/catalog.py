"""Catalog index combining the hash and trie structures."""

import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from itertools import islice

from meal_scorer.domain.errors import EmptyCatalog, EmptyQuery, InvalidLimit
from meal_scorer.domain.hash_index import HashIndex
from meal_scorer.domain.records import NutrientRecord
from meal_scorer.domain.search import (
    IndexStructure,
    SearchMode,
    SearchOutcome,
    StructureResult,
)
from meal_scorer.domain.trie_index import TrieIndex

DEFAULT_RESULT_LIMIT = 20


@dataclass(frozen=True)
class IndexStats:
    """Size and build cost of a catalog index."""

    record_count: int
    distinct_names: int
    largest_name_group: int
    trie_nodes: int
    hash_build_ms: float
    trie_build_ms: float


def normalize_query(query: str) -> str:
    """Trim and lowercase a query, rejecting blank input."""
    normalized = query.strip().lower()
    if not normalized:
        raise EmptyQuery()
    return normalized


class CatalogIndex:
    """All catalog records plus a hash index and a trie built from them.

    Instances are built once and never mutated, so they can be shared by
    concurrent readers.
    """

    def __init__(
        self,
        records: list[NutrientRecord],
        hash_index: HashIndex,
        trie_index: TrieIndex,
        hash_build_ms: float = 0.0,
        trie_build_ms: float = 0.0,
    ) -> None:
        self._records = records
        self._hash_index = hash_index
        self._trie_index = trie_index
        self._hash_build_ms = hash_build_ms
        self._trie_build_ms = trie_build_ms

    @classmethod
    def build(cls, records: Iterable[NutrientRecord]) -> "CatalogIndex":
        """Build both indexes from the full record collection."""
        collected = list(records)
        if not collected:
            raise EmptyCatalog()
        start = time.perf_counter()
        hash_index = HashIndex(collected)
        hash_build_ms = _elapsed_ms(start)
        start = time.perf_counter()
        trie_index = TrieIndex(collected)
        trie_build_ms = _elapsed_ms(start)
        return cls(collected, hash_index, trie_index, hash_build_ms, trie_build_ms)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[NutrientRecord, ...]:
        return tuple(self._records)

    def search(
        self,
        query: str,
        mode: SearchMode,
        structure: IndexStructure = IndexStructure.BOTH,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> SearchOutcome:
        """Search the catalog with one or both index structures."""
        key = normalize_query(query)
        if limit < 1:
            raise InvalidLimit(limit)
        mode = SearchMode(mode)
        structure = IndexStructure(structure)
        hash_result = None
        trie_result = None
        if structure in (IndexStructure.HASH, IndexStructure.BOTH):
            hash_result = _timed(
                IndexStructure.HASH, lambda: self._search_hash(key, mode), limit
            )
        if structure in (IndexStructure.TRIE, IndexStructure.BOTH):
            trie_result = _timed(
                IndexStructure.TRIE, lambda: self._search_trie(key, mode), limit
            )
        return SearchOutcome(
            query=key, mode=mode, hash_result=hash_result, trie_result=trie_result
        )

    def stats(self) -> IndexStats:
        return IndexStats(
            record_count=len(self._records),
            distinct_names=len(self._hash_index),
            largest_name_group=self._hash_index.largest_group(),
            trie_nodes=self._trie_index.node_count,
            hash_build_ms=self._hash_build_ms,
            trie_build_ms=self._trie_build_ms,
        )

    def _search_hash(self, key: str, mode: SearchMode) -> Iterable[NutrientRecord]:
        if mode is SearchMode.EXACT:
            return self._hash_index.exact(key)
        if mode is SearchMode.PREFIX:
            return self._hash_index.prefix(key)
        if mode is SearchMode.CONTAINS:
            return self._hash_index.contains(key)
        raise ValueError(f"Unsupported search mode: {mode}")

    def _search_trie(self, key: str, mode: SearchMode) -> Iterable[NutrientRecord]:
        if mode is SearchMode.EXACT:
            return self._trie_index.exact(key)
        if mode is SearchMode.PREFIX:
            return self._trie_index.prefix(key)
        if mode is SearchMode.CONTAINS:
            # A prefix tree has no substring path; scan every record instead.
            return self._scan_contains(key)
        raise ValueError(f"Unsupported search mode: {mode}")

    def _scan_contains(self, key: str) -> Iterator[NutrientRecord]:
        for record in self._records:
            if key in record.key:
                yield record


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _timed(
    structure: IndexStructure,
    search: Callable[[], Iterable[NutrientRecord]],
    limit: int,
) -> StructureResult:
    """Run one index search, keeping the first limit records."""
    start = time.perf_counter()
    records = list(islice(search(), limit))
    return StructureResult(
        structure=structure, records=records, elapsed_ms=_elapsed_ms(start)
    )
