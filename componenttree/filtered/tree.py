"""
Size-filtered component tree.

Only components whose size lies in [min_size, max_size] are kept, and a
linear run of nested components collapses into one node: the component with
the highest accepted threshold right before a topological branch. The tree
therefore contains one node per branch, plus one per branch point.

Emission rules for a component of accepted size:
- exactly one node among {its own last node, its merged children's nodes}:
  that node is updated in place to the new threshold and positions;
- otherwise (a fresh component, or a branch point): a new node is created
  and adopts all those nodes as children.
A component of rejected size is dropped along with its pending children.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from componenttree.algorithm import as_levels, build_component_tree
from componenttree.component import ComponentGenerator, NodeComponent
from componenttree.config import FilteredParameters
from componenttree.ordering import sweep_order
from componenttree.pixellist import PositionArena
from componenttree.tree import ComponentForest, TreeNode
from decomposition import DEFAULT_CONNECTIVITY, Connectivity
from localtypes import Value

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class FilteredNode(TreeNode):
    """
    A run of nested components, from its smallest to its largest region.

    `value` and `positions` describe the largest region (maximum threshold);
    `min_value` and `min_size` record the region the run started with.
    """

    min_value: Value = field(default=0, kw_only=True)
    min_size: int = field(default=0, kw_only=True)

    @property
    def max_value(self) -> Value:
        return self.value

    @property
    def max_size(self) -> int:
        return self.size

    def update(self, component: NodeComponent) -> None:
        """Extend the run to a larger region of the same branch."""
        self.value = component.value
        self.positions = component.positions.snapshot()
        component.node = self

    def describe(self) -> str:
        return (
            f"value={self.min_value}..{self.max_value} "
            f"size={self.min_size}..{self.max_size}"
        )


class FilteredComponentTree(ComponentForest[FilteredNode]):
    def __init__(self, parameters: FilteredParameters):
        super().__init__()
        self.parameters = parameters

    def emit(self, component: NodeComponent) -> None:
        size = len(component)
        if not self.parameters.min_size <= size <= self.parameters.max_size:
            component.children.clear()
            return

        emitted = [
            c.node for c in [component, *component.children] if c.node is not None
        ]
        if len(emitted) == 1:
            emitted[0].update(component)
            return

        positions = component.positions.snapshot()
        node = FilteredNode(
            component.value, positions, min_value=component.value, min_size=size
        )
        component.node = self._add_node(node, emitted)


def build_filtered_component_tree(
    image: np.ndarray,
    min_size: int,
    max_size: int,
    dark_to_bright: bool,
    connectivity: Connectivity = DEFAULT_CONNECTIVITY,
) -> FilteredComponentTree:
    """
    Build the size-filtered component tree of an array.

    Args:
        image: Scalar array of any dimension.
        min_size: Minimum size (in positions) of an accepted component.
        max_size: Maximum size (in positions) of an accepted component.
        dark_to_bright: Apply thresholds from dark to bright (True) or
                        bright to dark (False).
        connectivity: Adjacency between positions.

    Raises:
        ConfigurationError: If the size window is invalid.
    """
    parameters = FilteredParameters(min_size, max_size, dark_to_bright)
    levels = as_levels(image)
    generator = ComponentGenerator(PositionArena(levels.shape), NodeComponent)
    tree = FilteredComponentTree(parameters)
    build_component_tree(
        levels, generator, tree, sweep_order(dark_to_bright), connectivity
    )
    logger.info(
        f"Filtered component tree: {len(tree)} nodes, {len(tree.roots)} root(s)"
    )
    return tree
