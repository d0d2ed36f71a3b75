"""
Maximally stable extremal regions.

**Evaluation** (evaluation.py)
    Region histories, instability scores and local-minimum detection.

**Tree** (tree.py)
    Accepted regions assembled into a pruned tree.
    - build_mser_tree(image, delta, min_size, max_size, max_var,
      min_diversity, dark_to_bright) -> MserTree
"""

from .evaluation import EvaluationNode, Trend
from .node import MserNode
from .tree import MserTree, build_mser_tree

__all__ = [
    "EvaluationNode",
    "Trend",
    "MserNode",
    "MserTree",
    "build_mser_tree",
]
