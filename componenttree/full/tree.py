"""
The full component tree: one node per component per threshold level.

Every component the sweep emits becomes a node. Its children are the node
the same component produced at its previous level and the nodes of all the
components merged into it since. Nothing is filtered, so the root of each
connected region contains every one of its positions.
"""

import logging
from dataclasses import dataclass

import numpy as np

from componenttree.algorithm import as_levels, build_component_tree as sweep
from componenttree.component import ComponentGenerator, NodeComponent
from componenttree.ordering import sweep_order
from componenttree.pixellist import PositionArena
from componenttree.tree import ComponentForest, TreeNode
from decomposition import DEFAULT_CONNECTIVITY, Connectivity

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PixelListNode(TreeNode):
    """A connected component of the array thresholded at `value`."""


class PixelListComponentTree(ComponentForest[PixelListNode]):
    """Collects every emitted component as a node."""

    def emit(self, component: NodeComponent) -> None:
        previous = [] if component.node is None else [component.node]
        merged = [child.node for child in component.children if child.node is not None]
        node = PixelListNode(component.value, component.positions.snapshot())
        component.node = self._add_node(node, previous + merged)


def build_component_tree(
    image: np.ndarray,
    dark_to_bright: bool,
    connectivity: Connectivity = DEFAULT_CONNECTIVITY,
) -> PixelListComponentTree:
    """
    Build the complete component tree of an array.

    Args:
        image: Scalar array of any dimension.
        dark_to_bright: Apply thresholds from dark to bright (True) or
                        bright to dark (False).
        connectivity: Adjacency between positions.
    """
    levels = as_levels(image)
    generator = ComponentGenerator(PositionArena(levels.shape), NodeComponent)
    tree = PixelListComponentTree()
    sweep(levels, generator, tree, sweep_order(dark_to_bright), connectivity)
    logger.info(f"Component tree: {len(tree)} nodes, {len(tree.roots)} root(s)")
    return tree
