"""Character trie keyed on lowercased record names."""

from collections.abc import Iterable, Iterator

from meal_scorer.domain.records import NutrientRecord


class TrieNode:
    """A trie node with child links and the records ending here."""

    __slots__ = ("children", "records")

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.records: list[NutrientRecord] = []


class TrieIndex:
    """Prefix tree supporting exact and prefix lookups natively.

    Substring queries are not answerable from a prefix tree without visiting
    every node, so callers fall back to a linear scan for those.
    """

    def __init__(self, records: Iterable[NutrientRecord] = ()) -> None:
        self.root = TrieNode()
        self._node_count = 1
        for record in records:
            self.insert(record)

    @property
    def node_count(self) -> int:
        return self._node_count

    def insert(self, record: NutrientRecord) -> None:
        node = self.root
        for char in record.key:
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
                self._node_count += 1
            node = child
        node.records.append(record)

    def exact(self, key: str) -> list[NutrientRecord]:
        """Return records whose lowercased name equals key."""
        node = self._walk(key)
        if node is None:
            return []
        return list(node.records)

    def prefix(self, key: str) -> Iterator[NutrientRecord]:
        """Yield records under the node for key, depth-first pre-order.

        Children are visited in sorted character order.
        """
        start = self._walk(key)
        if start is None:
            return
        stack = [start]
        while stack:
            node = stack.pop()
            yield from node.records
            stack.extend(
                node.children[char] for char in sorted(node.children, reverse=True)
            )

    def _walk(self, key: str) -> TrieNode | None:
        node = self.root
        for char in key:
            node = node.children.get(char)
            if node is None:
                return None
        return node
