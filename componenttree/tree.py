"""
Tree nodes and the forests that own them.

Every build owns one NodeArena: an indexed collection holding the nodes of
the build. Parent and child links are arena indices, so a node can navigate
both ways without owning its parent. Indices are never reused: a node
released from the arena (once pruned) leaves a hole behind it.

Hierarchy:
    TreeNode                - value, positions, parent, children
    ├── PixelListNode       - node of the full component tree (full/)
    ├── FilteredNode        - min/max value and size (filtered/)
    └── MserNode            - score, mean, covariance (mser/)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from componenttree.pixellist import PositionListView
from localtypes import Position, Value
from utils.algorithms.tree import breadth_first_preorder

if TYPE_CHECKING:
    from rich.tree import Tree


@dataclass(eq=False)
class TreeNode:
    """
    A component kept in a tree.

    Attributes:
        value: Threshold at which the component was recorded.
        positions: Replayable view of the member positions.
        index: Position of the node in its arena.
        parent_index: Arena index of the parent, None for a root.
        child_indices: Arena indices of the children.
        pruned: Whether the node was removed from its forest.
    """

    value: Value
    positions: PositionListView
    index: int = field(default=-1, init=False)
    parent_index: int | None = field(default=None, init=False, repr=False)
    child_indices: list[int] = field(default_factory=list, init=False, repr=False)
    pruned: bool = field(default=False, init=False, repr=False)
    _arena: NodeArena | None = field(default=None, init=False, repr=False)

    @property
    def size(self) -> int:
        return len(self.positions)

    @property
    def parent(self) -> TreeNode | None:
        if self.parent_index is None or self._arena is None:
            return None
        return self._arena[self.parent_index]

    @property
    def children(self) -> tuple[TreeNode, ...]:
        if self._arena is None:
            return ()
        return tuple(self._arena[i] for i in self.child_indices)

    def __iter__(self) -> Iterator[Position]:
        """Iterate over the member positions."""
        return iter(self.positions)

    def describe(self) -> str:
        return f"value={self.value} size={self.size}"


N = TypeVar("N", bound=TreeNode)


class NodeArena(Generic[N]):
    """
    Owning collection of the nodes of one build, keyed by stable indices.

    Released indices stay unused, so parent and child links never need
    remapping.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, N] = {}
        self._next_index = 0

    def __len__(self) -> int:
        """Number of nodes currently held."""
        return len(self._nodes)

    def __contains__(self, index: object) -> bool:
        return index in self._nodes

    def __getitem__(self, index: int) -> N:
        return self._nodes[index]

    def __iter__(self) -> Iterator[N]:
        return iter(self._nodes.values())

    def add(self, node: N) -> N:
        node.index = self._next_index
        node._arena = self
        self._nodes[node.index] = node
        self._next_index += 1
        return node

    def link(self, parent: N, child: N) -> None:
        child.parent_index = parent.index
        parent.child_indices.append(child.index)

    def release(self, node: N) -> None:
        """Drop an unlinked node; it keeps its value and positions."""
        del self._nodes[node.index]
        node._arena = None


class ComponentForest(Generic[N]):
    """
    Forest of component nodes.

    Exposes the roots (in the order they became roots) and the flat,
    build-order sequence of all nodes currently in the forest.
    """

    def __init__(self) -> None:
        self.arena: NodeArena[N] = NodeArena()
        self._roots: dict[int, N] = {}
        self._nodes: list[N] = []

    @property
    def roots(self) -> tuple[N, ...]:
        return tuple(self._roots.values())

    @property
    def nodes(self) -> tuple[N, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[N]:
        return iter(self._nodes)

    def walk(self) -> Iterator[N]:
        """Yield every node breadth-first, root by root."""
        for root in self._roots.values():
            yield from breadth_first_preorder(lambda node: node.children, root)

    def _add_node(self, node: N, children: list[N]) -> N:
        """Register a new root adopting the given (former root) nodes."""
        self.arena.add(node)
        for child in children:
            self.arena.link(node, child)
            self._roots.pop(child.index, None)
        self._roots[node.index] = node
        self._nodes.append(node)
        return node

    def __rich__(self) -> Tree:
        from utils.display import render_forest

        return render_forest(self, title=type(self).__name__)
