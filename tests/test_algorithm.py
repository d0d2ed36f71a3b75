"""
Tests for the sweep driver (componenttree/algorithm.py) and sweep orders.
"""

import numpy as np
import pytest

from componenttree import (
    BRIGHT_TO_DARK,
    DARK_TO_BRIGHT,
    as_levels,
    sweep_components,
    sweep_order,
)
from componenttree.component import Component, ComponentGenerator
from componenttree.pixellist import PositionArena
from decomposition import Connectivity


class RecordingHandler:
    """Records (value, size, number of children, emitted before) per emission."""

    def __init__(self):
        self.records = []
        self.positions = []

    def emit(self, component):
        self.records.append(
            (component.value, len(component), len(component.children), component.emitted)
        )
        self.positions.append(sorted(component.positions.snapshot()))


def sweep(image, dark_to_bright=True, connectivity=Connectivity.TOWER):
    levels = as_levels(image)
    generator = ComponentGenerator(PositionArena(levels.shape), Component)
    handler = RecordingHandler()
    count = sweep_components(
        levels, generator, handler, sweep_order(dark_to_bright), connectivity
    )
    return count, handler


class TestSweepOrder:
    def test_ascending_ties(self):
        order = DARK_TO_BRIGHT.argsort(np.array([1, 0, 1]))
        assert order.tolist() == [1, 0, 2]

    def test_descending_ties(self):
        order = BRIGHT_TO_DARK.argsort(np.array([1, 0, 1]))
        assert order.tolist() == [0, 2, 1]

    def test_descending_many_ties(self):
        levels = np.array([3, 5, 3, 5, 1, 3])
        assert BRIGHT_TO_DARK.argsort(levels).tolist() == [1, 3, 0, 2, 5, 4]

    def test_is_after(self):
        assert DARK_TO_BRIGHT.is_after(5, 4)
        assert not DARK_TO_BRIGHT.is_after(4, 4)
        assert BRIGHT_TO_DARK.is_after(4, 5)
        assert not BRIGHT_TO_DARK.is_after(5, 4)

    def test_minus_delta(self):
        assert DARK_TO_BRIGHT.minus_delta(10, 3) == 7
        assert BRIGHT_TO_DARK.minus_delta(10, 3) == 13

    def test_sweep_order(self):
        assert sweep_order(True) is DARK_TO_BRIGHT
        assert sweep_order(False) is BRIGHT_TO_DARK
        assert str(BRIGHT_TO_DARK) == "bright-to-dark"


class TestAsLevels:
    def test_bool_promoted(self):
        levels = as_levels(np.array([True, False]))
        assert levels.dtype == np.uint8
        assert levels.tolist() == [1, 0]

    def test_numeric_unchanged(self):
        image = np.array([[0.5, 1.5]])
        assert as_levels(image) is image

    def test_lists_accepted(self):
        assert as_levels([[1, 2], [3, 4]]).shape == (2, 2)

    def test_complex_rejected(self):
        with pytest.raises(TypeError):
            as_levels(np.zeros(3, dtype=complex))


class TestSweep:
    def test_valley_ascending(self):
        count, handler = sweep(np.array([0, 1, 2, 1, 0]))
        assert count == 5
        assert handler.records == [
            (0, 1, 0, False),
            (0, 1, 0, False),
            (1, 2, 0, True),
            (1, 2, 0, True),
            (2, 5, 1, True),
        ]
        assert handler.positions[-1] == [(0,), (1,), (2,), (3,), (4,)]

    def test_peak_descending(self):
        count, handler = sweep(np.array([0, 1, 2, 1, 0]), dark_to_bright=False)
        assert count == 3
        assert [(value, size) for value, size, _, _ in handler.records] == [
            (2, 1),
            (1, 3),
            (0, 5),
        ]

    def test_flat_array(self):
        count, handler = sweep(np.full((4, 4), 7))
        assert count == 1
        assert handler.records == [(7, 16, 0, False)]

    def test_empty_array(self):
        count, handler = sweep(np.zeros((0, 3)))
        assert count == 0
        assert handler.records == []

    def test_single_position(self):
        count, handler = sweep(np.array([[3]]))
        assert count == 1
        assert handler.positions == [[(0, 0)]]

    def test_first_touch_order(self):
        count, handler = sweep(np.array([1, 1, 5, 1, 1]))
        assert count == 3
        assert handler.positions[0] == [(0,), (1,)]
        assert handler.positions[1] == [(3,), (4,)]
        assert handler.records[2] == (5, 5, 1, True)

    def test_connectivity_matters(self):
        image = np.array([[0, 1], [1, 0]])
        tower_count, _ = sweep(image, connectivity=Connectivity.TOWER)
        king_count, king = sweep(image, connectivity=Connectivity.KING)
        assert tower_count == 3
        assert king_count == 2
        assert king.records[0][1] == 2

    def test_bool_input(self):
        count, handler = sweep(np.array([True, False, True]))
        assert count == 2
        assert handler.records[-1][:2] == (1, 3)

    def test_every_position_emitted_in_last_root(self):
        rng = np.random.default_rng(3)
        image = rng.integers(0, 6, size=(9, 7))
        _, handler = sweep(image)
        # A grid is connected, so the last emission covers everything
        assert handler.records[-1][1] == image.size
        assert len(set(handler.positions[-1])) == image.size

    def test_values_follow_sweep_order(self):
        rng = np.random.default_rng(11)
        image = rng.integers(0, 4, size=(6, 6))
        _, handler = sweep(image, dark_to_bright=False)
        values = [value for value, _, _, _ in handler.records]
        assert values == sorted(values, reverse=True)
