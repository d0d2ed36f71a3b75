"""
Position lists backed by a shared linked-list arena.

Every open component of a sweep owns a PositionList. All lists of one build
share a single PositionArena holding one "next" link per array position, so:
- append is O(1): link the new position after the tail
- merge is O(1): link the other list's head after the tail

A link is only ever written at a list's tail, and written once. A snapshot
(head, size) of a list therefore replays the same positions forever, no
matter what is appended or merged afterwards. Tree nodes keep such
snapshots (PositionListView) instead of copies of the positions.
"""

from __future__ import annotations

from collections.abc import Iterator
from math import prod

import numpy as np

from componenttree.errors import CapacityError, PositionListError
from localtypes import FlatIndex, Position, Shape

END = -1


class PositionArena:
    """
    Storage for the links of every position list of one build.

    Args:
        shape: Shape of the swept array; one link per position.
        index_dtype: Signed integer dtype of the links. Defaults to int32
                     when it can address every position, int64 otherwise.

    Raises:
        TypeError: If index_dtype is not a signed integer dtype (links hold
                   the END marker, -1).
        CapacityError: If index_dtype cannot address every position.
    """

    def __init__(self, shape: Shape, index_dtype: np.dtype | type | None = None):
        self.shape: Shape = tuple(int(extent) for extent in shape)
        self.capacity = prod(self.shape)
        if index_dtype is None:
            fits_int32 = self.capacity <= np.iinfo(np.int32).max
            index_dtype = np.int32 if fits_int32 else np.int64
        self.index_dtype = np.dtype(index_dtype)
        if self.index_dtype.kind != "i":
            raise TypeError(f"Links need a signed integer dtype, got {self.index_dtype}")
        if self.capacity > np.iinfo(self.index_dtype).max:
            raise CapacityError(
                f"{self.capacity} positions exceed the range of {self.index_dtype}"
            )
        self.links = np.full(self.capacity, END, dtype=self.index_dtype)

    def coordinates(self, index: FlatIndex) -> Position:
        return tuple(int(c) for c in np.unravel_index(index, self.shape))

    def walk(self, head: FlatIndex, size: int) -> Iterator[FlatIndex]:
        """Yield size flat indices following the links from head."""
        current = head
        for _ in range(size):
            yield current
            current = int(self.links[current])


class PositionList:
    """
    Append-only, mergeable list of positions, in append order.

    Merging is destructive and one-shot: after `a.merge(b)`, b is dead and
    any further use of it raises PositionListError.
    """

    __slots__ = ("arena", "_head", "_tail", "_size", "_alive")

    def __init__(self, arena: PositionArena):
        self.arena = arena
        self._head = END
        self._tail = END
        self._size = 0
        self._alive = True

    def __len__(self) -> int:
        return self._size

    @property
    def alive(self) -> bool:
        return self._alive

    def _check_alive(self) -> None:
        if not self._alive:
            raise PositionListError("Position list was merged into another list")

    def append(self, index: FlatIndex) -> None:
        self._check_alive()
        if self._size == 0:
            self._head = index
        else:
            self.arena.links[self._tail] = index
        self._tail = index
        self._size += 1

    def merge(self, other: PositionList) -> None:
        """Move every position of other to the end of this list, killing other."""
        self._check_alive()
        other._check_alive()
        if other is self:
            raise PositionListError("Cannot merge a position list into itself")
        if other._size > 0:
            if self._size == 0:
                self._head = other._head
            else:
                self.arena.links[self._tail] = other._head
            self._tail = other._tail
            self._size += other._size
        other._head = other._tail = END
        other._size = 0
        other._alive = False

    def snapshot(self) -> PositionListView:
        """Immutable view of the positions currently in the list."""
        self._check_alive()
        return PositionListView(self.arena, self._head, self._size)


class PositionListView:
    """Replayable, immutable sequence of the positions of a region."""

    __slots__ = ("arena", "head", "size")

    def __init__(self, arena: PositionArena, head: FlatIndex, size: int):
        self.arena = arena
        self.head = head
        self.size = size

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Position]:
        for index in self.arena.walk(self.head, self.size):
            yield self.arena.coordinates(index)

    def __contains__(self, position: object) -> bool:
        return any(position == member for member in self)

    def __repr__(self) -> str:
        return f"PositionListView(size={self.size})"

    def indices(self) -> np.ndarray:
        """Flat indices of the positions, in list order."""
        return np.fromiter(
            self.arena.walk(self.head, self.size), dtype=np.int64, count=self.size
        )

    def mask(self) -> np.ndarray:
        """Boolean array of the arena's shape, True at the member positions."""
        mask = np.zeros(self.arena.capacity, dtype=bool)
        mask[self.indices()] = True
        return mask.reshape(self.arena.shape)
