# MIT License (see LICENSE)
"""
Index arena for point storage.

Points are stored in a list of slots addressed by integer key. Removing a
point vacates its slot and pushes the key onto a free list; the next insert
reuses the most recently vacated slot. Keys therefore stay small and stable
for as long as a point is alive, which is what the editor holds on to while
a drag is in progress.
"""
from __future__ import annotations
from typing import Iterator

from .types import Point


class PointArena:
    """
    Slot storage with a LIFO free list.

    Iteration (items(), keys(), values()) is in ascending key order.

    Example:
        arena = PointArena()
        k = arena.insert(Point((0, 0)))
        arena.remove(k)
        assert arena.insert(Point((1, 1))) == k
    """

    def __init__(self) -> None:
        self._slots: list[Point | None] = []
        self._free: list[int] = []
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def get(self, key) -> Point | None:
        """Point stored under key, or None for a vacant or unknown key."""
        if not isinstance(key, int) or key < 0 or key >= len(self._slots):
            return None
        return self._slots[key]

    def insert(self, point: Point) -> int:
        """Store point and return its key."""
        if self._free:
            key = self._free.pop()
            self._slots[key] = point
        else:
            key = len(self._slots)
            self._slots.append(point)
        self._len += 1
        return key

    def remove(self, key: int) -> Point | None:
        """Vacate a slot. Returns the removed point, or None if none was there."""
        point = self.get(key)
        if point is None:
            return None
        self._slots[key] = None
        self._free.append(key)
        self._len -= 1
        return point

    def items(self) -> Iterator[tuple[int, Point]]:
        for key, point in enumerate(self._slots):
            if point is not None:
                yield key, point

    def keys(self) -> Iterator[int]:
        for key, _ in self.items():
            yield key

    def values(self) -> Iterator[Point]:
        for _, point in self.items():
            yield point

    def copy(self) -> "PointArena":
        """Deep copy: every point is copied, free list order is preserved."""
        other = PointArena()
        other._slots = [p.copy() if p is not None else None for p in self._slots]
        other._free = list(self._free)
        other._len = self._len
        return other
