"""Occupancy index over a fixed row of slots.

The reconciler lays out every position a common item can hold while the
moves are replayed, then marks slots occupied or free as items leave and
arrive.  The live list position of an item is the number of occupied slots
before its own, which a Fenwick tree answers in ``O(log n)``.
"""

from __future__ import annotations

from collections.abc import Sequence


class OccupancyIndex:
    """Fenwick tree over 0/1 occupancy flags.

    Parameters
    ----------
    occupied:
        Initial flag per slot.  Building the index is ``O(n)``.

    Examples
    --------
    >>> index = OccupancyIndex([True, False, True, True])
    >>> index.rank(3)
    2
    >>> index.vacate(0)
    >>> index.rank(3)
    1
    """

    __slots__ = ("_size", "_tree")

    def __init__(self, occupied: Sequence[bool]) -> None:
        size = len(occupied)
        tree = [0] * (size + 1)
        for i, flag in enumerate(occupied, 1):
            if flag:
                tree[i] += 1
            parent = i + (i & -i)
            if parent <= size:
                tree[parent] += tree[i]
        self._size = size
        self._tree = tree

    def __len__(self) -> int:
        return self._size

    def rank(self, slot: int) -> int:
        """Number of occupied slots strictly before *slot*."""
        total = 0
        i = slot
        while i > 0:
            total += self._tree[i]
            i -= i & -i
        return total

    def occupy(self, slot: int) -> None:
        self._add(slot, 1)

    def vacate(self, slot: int) -> None:
        self._add(slot, -1)

    def _add(self, slot: int, delta: int) -> None:
        if not 0 <= slot < self._size:
            raise IndexError(f"slot {slot} out of range for {self._size} slots")
        i = slot + 1
        while i <= self._size:
            self._tree[i] += delta
            i += i & -i
