"""Disjoint-set forest over tile ids."""

from typing import Dict, Iterable, List


class UnionFind:
    """Disjoint sets with path compression and a member index per root.

    ``union(keep, absorb)`` always leaves the root of ``keep`` in charge, so
    the surviving group id is predictable: the absorbed group takes the id of
    the group it was merged into. The member index lets callers move a whole
    group without scanning every tile.
    """

    def __init__(self, items: Iterable[int] = ()):
        self._parent: Dict[int, int] = {}
        self._members: Dict[int, List[int]] = {}
        for item in items:
            self.add(item)

    def __contains__(self, item: int) -> bool:
        return item in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def add(self, item: int) -> None:
        """Register ``item`` as a singleton set (no-op if already present)."""
        if item not in self._parent:
            self._parent[item] = item
            self._members[item] = [item]

    def find(self, item: int) -> int:
        """Return the root of ``item``'s set, compressing the path on the way."""
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, keep: int, absorb: int) -> int:
        """Merge the set of ``absorb`` into the set of ``keep``.

        Returns:
            The root of the merged set (the root of ``keep``).
        """
        keep_root = self.find(keep)
        absorb_root = self.find(absorb)
        if keep_root == absorb_root:
            return keep_root
        self._parent[absorb_root] = keep_root
        self._members[keep_root].extend(self._members.pop(absorb_root))
        return keep_root

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def members(self, item: int) -> List[int]:
        """All items in the same set as ``item`` (a copy)."""
        return list(self._members[self.find(item)])

    def groups(self) -> Dict[int, List[int]]:
        """Mapping of root -> members for every set."""
        return {root: list(members) for root, members in self._members.items()}
