"""Tests for componenttree/pixellist.py"""

import numpy as np
import pytest

from componenttree import (
    CapacityError,
    ComponentTreeError,
    PositionArena,
    PositionList,
    PositionListError,
)


def filled(arena: PositionArena, *indices: int) -> PositionList:
    positions = PositionList(arena)
    for index in indices:
        positions.append(index)
    return positions


class TestPositionArena:
    def test_default_dtype(self):
        arena = PositionArena((4, 5))
        assert arena.capacity == 20
        assert arena.index_dtype == np.int32
        assert arena.links.shape == (20,)

    def test_explicit_dtype(self):
        arena = PositionArena((127,), index_dtype=np.int8)
        assert arena.index_dtype == np.int8

    @pytest.mark.parametrize("dtype", [np.uint32, np.uint8, np.float64])
    def test_unsigned_or_float_dtype_rejected(self, dtype):
        with pytest.raises(TypeError):
            PositionArena((4,), index_dtype=dtype)

    def test_capacity_exceeded(self):
        with pytest.raises(CapacityError):
            PositionArena((200,), index_dtype=np.int8)

    def test_capacity_error_hierarchy(self):
        with pytest.raises(ComponentTreeError):
            PositionArena((10, 20), index_dtype=np.int8)
        with pytest.raises(OverflowError):
            PositionArena((10, 20), index_dtype=np.int8)

    def test_coordinates(self):
        arena = PositionArena((2, 3))
        assert arena.coordinates(0) == (0, 0)
        assert arena.coordinates(4) == (1, 1)
        assert arena.coordinates(5) == (1, 2)


class TestPositionList:
    def test_append_order(self):
        arena = PositionArena((2, 3))
        positions = filled(arena, 4, 1, 5)
        assert len(positions) == 3
        assert list(positions.snapshot()) == [(1, 1), (0, 1), (1, 2)]

    def test_merge(self):
        arena = PositionArena((10,))
        a = filled(arena, 0, 1)
        b = filled(arena, 5, 6)
        a.merge(b)
        assert len(a) == 4
        assert list(a.snapshot()) == [(0,), (1,), (5,), (6,)]
        assert len(b) == 0

    def test_merge_into_empty(self):
        arena = PositionArena((10,))
        a = PositionList(arena)
        b = filled(arena, 3, 2)
        a.merge(b)
        assert list(a.snapshot()) == [(3,), (2,)]
        a.append(9)
        assert list(a.snapshot()) == [(3,), (2,), (9,)]

    def test_merge_empty(self):
        arena = PositionArena((10,))
        a = filled(arena, 4)
        a.merge(PositionList(arena))
        assert list(a.snapshot()) == [(4,)]

    def test_merged_list_is_dead(self):
        arena = PositionArena((10,))
        a = filled(arena, 0)
        b = filled(arena, 1)
        a.merge(b)
        assert a.alive
        assert not b.alive
        with pytest.raises(PositionListError):
            b.append(2)
        with pytest.raises(PositionListError):
            b.snapshot()
        with pytest.raises(PositionListError):
            a.merge(b)
        with pytest.raises(PositionListError):
            b.merge(a)

    def test_merge_into_itself(self):
        arena = PositionArena((10,))
        a = filled(arena, 0, 1)
        with pytest.raises(PositionListError):
            a.merge(a)
        assert a.alive
        assert len(a) == 2


class TestPositionListView:
    def test_snapshot_is_stable(self):
        arena = PositionArena((10,))
        a = filled(arena, 0, 1)
        view = a.snapshot()
        a.append(2)
        a.merge(filled(arena, 7, 8))
        assert list(view) == [(0,), (1,)]
        assert len(view) == 2
        assert len(a.snapshot()) == 5

    def test_snapshot_of_absorbed_list(self):
        arena = PositionArena((10,))
        a = filled(arena, 0)
        b = filled(arena, 4, 5)
        view = b.snapshot()
        a.merge(b)
        a.append(9)
        assert list(view) == [(4,), (5,)]

    def test_contains(self):
        arena = PositionArena((3, 3))
        view = filled(arena, 0, 8).snapshot()
        assert (0, 0) in view
        assert (2, 2) in view
        assert (1, 1) not in view

    def test_indices(self):
        arena = PositionArena((3, 3))
        view = filled(arena, 8, 0, 4).snapshot()
        np.testing.assert_array_equal(view.indices(), [8, 0, 4])
        assert view.indices().dtype == np.int64

    def test_mask(self):
        arena = PositionArena((2, 3))
        mask = filled(arena, 1, 5).snapshot().mask()
        np.testing.assert_array_equal(
            mask, [[False, True, False], [False, False, True]]
        )

    def test_empty_view(self):
        arena = PositionArena((2, 2))
        view = PositionList(arena).snapshot()
        assert list(view) == []
        assert not view.mask().any()
