"""Search modes, structures and results."""

from dataclasses import dataclass
from enum import Enum

from meal_scorer.domain.records import NutrientRecord


class SearchMode(str, Enum):
    """How the query is matched against names."""

    EXACT = "exact"
    PREFIX = "prefix"
    CONTAINS = "contains"


class IndexStructure(str, Enum):
    """Which index answers the query."""

    HASH = "hash"
    TRIE = "trie"
    BOTH = "both"


@dataclass(frozen=True)
class StructureResult:
    """Capped results from one index with the time it took."""

    structure: IndexStructure
    records: list[NutrientRecord]
    elapsed_ms: float


@dataclass(frozen=True)
class SearchOutcome:
    """Results of one search, from one or both indexes."""

    query: str
    mode: SearchMode
    hash_result: StructureResult | None = None
    trie_result: StructureResult | None = None

    def results(self) -> list[StructureResult]:
        return [
            result
            for result in (self.hash_result, self.trie_result)
            if result is not None
        ]

    def comparison(self) -> str | None:
        """Describe which index answered faster when both ran."""
        if self.hash_result is None or self.trie_result is None:
            return None
        hash_ms = self.hash_result.elapsed_ms
        trie_ms = self.trie_result.elapsed_ms
        diff = abs(hash_ms - trie_ms)
        if hash_ms < trie_ms:
            return f"HashMap was faster by {diff:.3f}ms{_speedup(trie_ms, hash_ms)}"
        if trie_ms < hash_ms:
            return f"Trie was faster by {diff:.3f}ms{_speedup(hash_ms, trie_ms)}"
        return "Both data structures performed equally!"


def _speedup(slower_ms: float, faster_ms: float) -> str:
    if faster_ms <= 0:
        return ""
    return f" ({slower_ms / faster_ms:.2f}x faster)"
