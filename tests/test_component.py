"""Tests for componenttree/component.py"""

import numpy as np

from componenttree.component import (
    ActiveComponentTable,
    Component,
    ComponentGenerator,
    MserComponent,
)
from componenttree.pixellist import PositionArena


def make_component(arena, value, *indices, component_type=Component):
    component = ComponentGenerator(arena, component_type).create_component(value)
    for index in indices:
        component.add_position(index)
    return component


class TestComponent:
    def test_generator(self):
        arena = PositionArena((3,))
        component = ComponentGenerator(arena, Component).create_component(4)
        assert component.value == 4
        assert len(component) == 0
        assert component.children == []
        assert not component.emitted
        assert component.positions.arena is arena

    def test_merge_fresh_component(self):
        arena = PositionArena((10,))
        a = make_component(arena, 1, 0, 1)
        b = make_component(arena, 1, 2)
        a.merge(b)
        assert len(a) == 3
        assert a.children == []
        assert not b.positions.alive

    def test_merge_emitted_component(self):
        arena = PositionArena((10,))
        a = make_component(arena, 1, 0)
        b = make_component(arena, 1, 1)
        b.emitted = True
        a.merge(b)
        assert a.children == [b]

    def test_pending_children_are_inherited(self):
        arena = PositionArena((10,))
        a = make_component(arena, 2, 0)
        b = make_component(arena, 2, 1)
        c = make_component(arena, 1, 2)
        c.emitted = True
        b.merge(c)
        a.merge(b)
        # b was never emitted: only its pending child moves up
        assert a.children == [c]
        assert b.children == []
        assert len(a) == 3


class TestMserComponent:
    def test_moments(self):
        arena = PositionArena((3, 3))
        component = make_component(arena, 0, 0, 4, component_type=MserComponent)
        mean, cov = component.moments()
        np.testing.assert_allclose(mean, [0.5, 0.5])
        np.testing.assert_allclose(cov, [0.25, 0.25, 0.25])

    def test_moments_after_merge(self):
        arena = PositionArena((7,))
        a = make_component(arena, 0, 2, component_type=MserComponent)
        b = make_component(arena, 0, 3, 4, component_type=MserComponent)
        a.merge(b)
        mean, cov = a.moments()
        np.testing.assert_allclose(mean, [3.0])
        np.testing.assert_allclose(cov, [2 / 3])

    def test_covariance_layout_3d(self):
        arena = PositionArena((2, 2, 2))
        component = make_component(arena, 0, *range(8), component_type=MserComponent)
        mean, cov = component.moments()
        np.testing.assert_allclose(mean, [0.5, 0.5, 0.5])
        # xx, xy, xz, yy, yz, zz
        np.testing.assert_allclose(cov, [0.25, 0, 0, 0.25, 0, 0.25], atol=1e-12)


class TestActiveComponentTable:
    def test_open_and_attach(self):
        arena = PositionArena((10,))
        table = ActiveComponentTable()
        a = make_component(arena, 0, 0)
        table.open(0, a)
        table.attach(1, 0)
        assert 0 in table
        assert 1 in table
        assert 2 not in table
        assert table.component_of(1) is a
        assert len(table) == 1

    def test_merge(self):
        arena = PositionArena((10,))
        table = ActiveComponentTable()
        a = make_component(arena, 0, 0)
        b = make_component(arena, 0, 5)
        table.open(0, a)
        table.open(5, b)
        table.attach(6, 5)
        assert len(table) == 2

        table.merge(0, 6)
        assert len(table) == 1
        for index in (0, 5, 6):
            assert table.component_of(index) is a
