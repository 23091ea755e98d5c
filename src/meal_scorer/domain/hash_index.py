"""Hash index grouping records by lowercased name."""

from collections.abc import Iterable, Iterator

from meal_scorer.domain.records import NutrientRecord


class HashIndex:
    """Maps a lowercased name to every record sharing that name.

    Exact lookups are a single dict access. Prefix and contains queries scan
    every key; keys are visited in sorted order so results are deterministic
    and prefix results line up with the trie's pre-order traversal.
    """

    def __init__(self, records: Iterable[NutrientRecord] = ()) -> None:
        self._groups: dict[str, list[NutrientRecord]] = {}
        for record in records:
            self._groups.setdefault(record.key, []).append(record)
        self._sorted_keys = sorted(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def exact(self, key: str) -> list[NutrientRecord]:
        """Return records whose lowercased name equals key."""
        return list(self._groups.get(key, ()))

    def prefix(self, key: str) -> Iterator[NutrientRecord]:
        """Yield records whose lowercased name starts with key."""
        for name in self._sorted_keys:
            if name.startswith(key):
                yield from self._groups[name]

    def contains(self, key: str) -> Iterator[NutrientRecord]:
        """Yield records whose lowercased name contains key."""
        for name in self._sorted_keys:
            if key in name:
                yield from self._groups[name]

    def largest_group(self) -> int:
        """Return the size of the biggest same-name group."""
        return max((len(group) for group in self._groups.values()), default=0)
