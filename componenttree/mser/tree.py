"""
MSER tree of an array.

Maximally Stable Extremal Regions (MSER) are selected from the component
tree as follows. For each component, an instability score is computed as

    s(R_i) = |R_i \\ R_{i-delta}| / |R_i|

Regions whose score is a local minimum along their branch are MSER
candidates (see evaluation.py). A candidate is discarded if its size is
outside [min_size, max_size] or its score is above max_var.

A tree is built of the remaining candidates. Finally, candidates too similar
to their parent are pruned (see pruning.py). Pruning also runs every
`prune_interval` accepted candidates to bound the number of live nodes.
Pruned nodes are released from the arena right away. This is safe
mid-sweep: candidates waiting to be adopted by a later region are always
roots, and roots are never pruned, so nothing refers to a pruned node.
"""

import logging

import numpy as np

from componenttree.algorithm import as_levels, build_component_tree
from componenttree.component import ComponentGenerator, MserComponent
from componenttree.config import MserParameters
from componenttree.ordering import SweepOrder, sweep_order
from componenttree.pixellist import PositionArena
from componenttree.pruning import prune_similar_children
from componenttree.tree import ComponentForest
from constants import PRUNE_AFTER_N_MINIMA
from decomposition import DEFAULT_CONNECTIVITY, Connectivity

from .evaluation import EvaluationNode
from .node import MserNode

logger = logging.getLogger(__name__)


class MserTree(ComponentForest[MserNode]):
    """
    Collects MSER candidates from emitted components into a tree.

    Used both to build the tree (as the sweep's component handler) and to
    represent it afterwards.
    """

    def __init__(self, parameters: MserParameters):
        super().__init__()
        self.parameters = parameters
        self.order: SweepOrder = sweep_order(parameters.dark_to_bright)
        self.minima_since_last_prune = 0

    def emit(self, component: MserComponent) -> None:
        EvaluationNode.from_component(
            component, self.order, self.parameters.delta, self.found_new_minimum
        )

    def accepts(self, candidate: EvaluationNode) -> bool:
        p = self.parameters
        return (
            p.min_size <= candidate.size <= p.max_size
            and candidate.score is not None
            and candidate.score <= p.max_var
        )

    def found_new_minimum(self, candidate: EvaluationNode) -> None:
        """Turn a local minimum into a node, if it passes the filters."""
        if not self.accepts(candidate):
            logger.debug(f"Rejected MSER candidate {candidate}")
            return

        node = MserNode(
            candidate.value,
            candidate.positions,
            score=candidate.score,
            mean=candidate.mean,
            cov=candidate.cov,
        )
        self._add_node(node, list(candidate.msers))
        candidate.msers[:] = [node]

        self.minima_since_last_prune += 1
        if self.minima_since_last_prune == self.parameters.prune_interval:
            self.minima_since_last_prune = 0
            self.prune_duplicates()

    def prune_duplicates(self) -> int:
        """
        Remove nodes too similar to their parent.

        Returns:
            Number of nodes removed.
        """
        removed = 0
        for root in self.roots:
            for node in prune_similar_children(root, self.parameters.min_diversity):
                self.arena.release(node)
                removed += 1
        if removed:
            self._nodes = [node for node in self._nodes if not node.pruned]
        logger.info(f"Pruned {removed} near-duplicate region(s), {len(self)} left")
        return removed


def build_mser_tree(
    image: np.ndarray,
    delta: float,
    min_size: int,
    max_size: int,
    max_var: float,
    min_diversity: float,
    dark_to_bright: bool,
    connectivity: Connectivity = DEFAULT_CONNECTIVITY,
    prune_interval: int = PRUNE_AFTER_N_MINIMA,
) -> MserTree:
    """
    Build the MSER tree of an array.

    Args:
        image: Scalar array of any dimension.
        delta: Delta for computing the instability score.
        min_size: Minimum size (in positions) of an accepted MSER.
        max_size: Maximum size (in positions) of an accepted MSER.
        max_var: Maximum instability score of an accepted MSER.
        min_diversity: Minimal diversity of adjacent accepted MSERs.
        dark_to_bright: Apply thresholds from dark to bright (True) or
                        bright to dark (False).
        connectivity: Adjacency between positions.
        prune_interval: Accepted MSERs between two intermediate prunings.

    Raises:
        ConfigurationError: If the parameters are invalid.
        CapacityError: If the array has more positions than can be addressed.
    """
    parameters = MserParameters(
        delta,
        min_size,
        max_size,
        max_var,
        min_diversity,
        dark_to_bright,
        prune_interval=prune_interval,
    )
    levels = as_levels(image)
    generator = ComponentGenerator(PositionArena(levels.shape), MserComponent)
    tree = MserTree(parameters)
    build_component_tree(levels, generator, tree, tree.order, connectivity)
    tree.prune_duplicates()
    logger.info(f"MSER tree: {len(tree)} regions, {len(tree.roots)} root(s)")
    return tree
