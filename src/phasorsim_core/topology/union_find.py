# src/phasorsim_core/topology/union_find.py
"""
Disjoint-set forest over interned identifiers.

Keys (any hashable, in practice `ConnectionPoint`s) are interned to dense
integers in first-seen order. Unions use rank, finds compress paths, and ties
in rank keep the root that was interned first, so results never depend on
hashing or object identity.
"""
from typing import Dict, Generic, Hashable, List, TypeVar

K = TypeVar("K", bound=Hashable)


class DisjointSet(Generic[K]):
    def __init__(self):
        self._ids: Dict[K, int] = {}
        self._keys: List[K] = []
        self._parent: List[int] = []
        self._rank: List[int] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: K) -> bool:
        return key in self._ids

    def add(self, key: K) -> int:
        """Interns `key` as its own singleton set and returns its integer id."""
        idx = self._ids.get(key)
        if idx is None:
            idx = len(self._keys)
            self._ids[key] = idx
            self._keys.append(key)
            self._parent.append(idx)
            self._rank.append(0)
        return idx

    def _find_idx(self, idx: int) -> int:
        root = idx
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[idx] != root:
            self._parent[idx], idx = root, self._parent[idx]
        return root

    def find(self, key: K) -> int:
        """Returns the integer id of the root of `key`'s set. `key` must be interned."""
        return self._find_idx(self._ids[key])

    def union(self, a: K, b: K) -> int:
        """Merges the sets of `a` and `b`, interning either if needed. Returns the new root id."""
        ra = self._find_idx(self.add(a))
        rb = self._find_idx(self.add(b))
        if ra == rb:
            return ra
        if self._rank[ra] < self._rank[rb] or (self._rank[ra] == self._rank[rb] and rb < ra):
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
        return ra
