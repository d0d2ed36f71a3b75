"""
Open components of a sweep.

A Component is a connected region that is still growing: it has a current
threshold value, the positions reached so far, and the components merged
into it since it was last emitted. Variants attach what their tree builder
needs to remember between two emissions:

    Component
    ├── NodeComponent - the tree node produced at the last emission
    └── MserComponent - the last evaluation node, plus coordinate moments

The ActiveComponentTable maps every reached position to its open component.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Protocol, Self, TypeVar

import numpy as np

from componenttree.pixellist import PositionArena, PositionList
from localtypes import FlatIndex, Value
from utils.union_find import UnionFind

if TYPE_CHECKING:
    from componenttree.mser.evaluation import EvaluationNode
    from componenttree.tree import TreeNode


class Component:
    """
    A region of the sweep that has not been closed yet.

    Attributes:
        value: Threshold at which the region was last extended.
        positions: Positions of the region, owned by this component.
        children: Components emitted earlier and merged in since the last emit.
        emitted: Whether the component was emitted at least once.
    """

    def __init__(self, value: Value, positions: PositionList):
        self.value = value
        self.positions = positions
        self.children: list[Self] = []
        self.emitted = False

    def __len__(self) -> int:
        return len(self.positions)

    def add_position(self, index: FlatIndex) -> None:
        self.positions.append(index)

    def merge(self, other: Self) -> None:
        """
        Absorb other: its positions move here and other is dead afterwards.

        A component that was emitted before becomes a child of this one.
        Its own pending children are inherited in any case, since they were
        never attached to an emission of other.
        """
        self.positions.merge(other.positions)
        if other.emitted:
            self.children.append(other)
        self.children.extend(other.children)
        other.children = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self.value}, size={len(self)})"


class NodeComponent(Component):
    """Component remembering the tree node built from its last emission."""

    def __init__(self, value: Value, positions: PositionList):
        super().__init__(value, positions)
        self.node: TreeNode | None = None


class MserComponent(Component):
    """
    Component remembering its last MSER evaluation node.

    Also accumulates the first and second moments of its coordinates, so that
    the mean and covariance of a region are available at every emission
    without replaying its positions.
    """

    def __init__(self, value: Value, positions: PositionList):
        super().__init__(value, positions)
        ndim = len(positions.arena.shape)
        self._upper = np.triu_indices(ndim)
        self.coordinate_sum = np.zeros(ndim)
        self.product_sum = np.zeros(len(self._upper[0]))
        self.evaluation: EvaluationNode | None = None

    def add_position(self, index: FlatIndex) -> None:
        super().add_position(index)
        x = np.array(self.positions.arena.coordinates(index), dtype=float)
        self.coordinate_sum += x
        self.product_sum += np.outer(x, x)[self._upper]

    def merge(self, other: Self) -> None:
        super().merge(other)
        self.coordinate_sum += other.coordinate_sum
        self.product_sum += other.product_sum

    def moments(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Mean and covariance of the coordinates of the region.

        The covariance is returned as its independent (upper triangular)
        elements: xx, xy, xz, ..., yy, yz, ..., zz, ...
        """
        size = len(self)
        mean = self.coordinate_sum / size
        cov = self.product_sum / size - np.outer(mean, mean)[self._upper]
        return mean, cov


C = TypeVar("C", bound=Component)


class ComponentGenerator(Generic[C]):
    """Creates empty components whose positions live in a shared arena."""

    def __init__(self, arena: PositionArena, component_type: type[C]):
        self.arena = arena
        self.component_type = component_type

    def create_component(self, value: Value) -> C:
        return self.component_type(value, PositionList(self.arena))


class ComponentHandler(Protocol[C]):
    """Receives every component the sweep closes at a threshold."""

    def emit(self, component: C) -> None: ...


class ActiveComponentTable(Generic[C]):
    """
    Open components keyed by the representative of their position set.

    Membership of a position in the table means the sweep has reached it.
    """

    def __init__(self) -> None:
        self._sets = UnionFind[FlatIndex]()
        self._components: dict[FlatIndex, C] = {}

    def __contains__(self, index: object) -> bool:
        return index in self._sets

    def __len__(self) -> int:
        """Number of open components."""
        return len(self._components)

    def component_of(self, index: FlatIndex) -> C:
        return self._components[self._sets.find(index)]

    def open(self, index: FlatIndex, component: C) -> None:
        """Register index as the first position of a new component."""
        self._sets.add(index)
        self._components[index] = component

    def attach(self, index: FlatIndex, member: FlatIndex) -> None:
        """Add a newly reached index to the component containing member."""
        self._sets.add(index)
        self._join(member, index)

    def merge(self, survivor: FlatIndex, absorbed: FlatIndex) -> None:
        """
        Merge the component containing absorbed into the one containing survivor.

        Only the table is updated; merging the components themselves is the
        caller's job.
        """
        self._join(survivor, absorbed)

    def _join(self, survivor: FlatIndex, other: FlatIndex) -> None:
        survivor_root = self._sets.find(survivor)
        other_root = self._sets.find(other)
        component = self._components[survivor_root]
        root = self._sets.union(survivor_root, other_root)
        for old_root in (survivor_root, other_root):
            if old_root != root:
                self._components.pop(old_root, None)
        self._components[root] = component
