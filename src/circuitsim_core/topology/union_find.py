# src/circuitsim_core/topology/union_find.py
import logging
from typing import Dict, Generic, Hashable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class DisjointSet(Generic[T]):
    """
    Disjoint-set forest with union by rank and full path compression.

    Elements are added lazily by `find` and `union`, so an element that was
    never merged with anything is its own singleton class.
    """

    def __init__(self):
        self._parent: Dict[T, T] = {}
        self._rank: Dict[T, int] = {}

    def add(self, item: T) -> None:
        if item not in self._parent:
            self._parent[item] = item
            self._rank[item] = 0

    def find(self, item: T) -> T:
        """Returns the representative of `item`'s class, compressing the path to it."""
        self.add(item)
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        # Second pass points every visited element directly at the root.
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: T, b: T) -> bool:
        """
        Merges the classes of `a` and `b`.

        Returns:
            True if two distinct classes were merged, False if `a` and `b` were
            already in the same class (in which case nothing changes).
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        rank_a = self._rank[root_a]
        rank_b = self._rank[root_b]
        if rank_a < rank_b:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if rank_a == rank_b:
            self._rank[root_a] += 1
        return True

    def connected(self, a: T, b: T) -> bool:
        return self.find(a) == self.find(b)

    def class_count(self) -> int:
        return sum(1 for item, parent in self._parent.items() if item == parent)

    def __contains__(self, item: object) -> bool:
        return item in self._parent

    def __iter__(self) -> Iterator[T]:
        return iter(self._parent)

    def __len__(self) -> int:
        return len(self._parent)
