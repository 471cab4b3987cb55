"""Disjoint-set structure used to track which map sections are joined."""

from __future__ import annotations


class UnionFind:
    """Weighted quick-union with path compression over the elements 0..n-1.

    `count` is the number of disjoint sets remaining; it starts at n and drops
    by one for every union that merges two distinct sets.
    """

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"UnionFind size must be non-negative, got {n}")
        self._parent = list(range(n))
        self._size = [1] * n
        self._count = n

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return len(self._parent)

    def _validate(self, p: int) -> None:
        if not 0 <= p < len(self._parent):
            raise IndexError(
                f"Index {p} is not between 0 and {len(self._parent) - 1}"
            )

    def find(self, p: int) -> int:
        """Return the root of the set containing p."""
        self._validate(p)
        root = p
        while root != self._parent[root]:
            root = self._parent[root]
        while p != root:
            self._parent[p], p = root, self._parent[p]
        return root

    def connected(self, p: int, q: int) -> bool:
        return self.find(p) == self.find(q)

    def union(self, p: int, q: int) -> None:
        """Merge the sets containing p and q. No-op if already merged."""
        root_p = self.find(p)
        root_q = self.find(q)
        if root_p == root_q:
            return
        # Hang the smaller tree under the larger one.
        if self._size[root_p] < self._size[root_q]:
            root_p, root_q = root_q, root_p
        self._parent[root_q] = root_p
        self._size[root_p] += self._size[root_q]
        self._count -= 1
