"""
Component trees and maximally stable extremal regions of n-dimensional arrays.

Every builder sweeps the positions of an array in threshold order, growing
and merging connected components, and hands each component to a handler
when its threshold level is closed. The handlers differ in what they keep:

**Full tree** (full/)
    Every component at every level.
    - build_component_tree(image, dark_to_bright) -> PixelListComponentTree

**Filtered tree** (filtered/)
    One node per branch, within a size window.
    - build_filtered_component_tree(image, min_size, max_size, dark_to_bright)

**MSER tree** (mser/)
    Maximally stable extremal regions, pruned of near duplicates.
    - build_mser_tree(image, delta, min_size, max_size, max_var,
      min_diversity, dark_to_bright) -> MserTree

Building blocks: pixellist.py (position lists), component.py (open
components), algorithm.py (the sweep), tree.py (node arena and forests),
pruning.py (near-duplicate removal), ordering.py (sweep direction).
"""

from .algorithm import as_levels, build_component_tree as sweep_components
from .config import FilteredParameters, MserParameters
from .errors import (
    CapacityError,
    ComponentTreeError,
    ConfigurationError,
    PositionListError,
)
from .filtered import FilteredComponentTree, FilteredNode, build_filtered_component_tree
from .full import PixelListComponentTree, PixelListNode, build_component_tree
from .mser import MserNode, MserTree, build_mser_tree
from .ordering import BRIGHT_TO_DARK, DARK_TO_BRIGHT, SweepOrder, sweep_order
from .pixellist import PositionArena, PositionList, PositionListView
from .pruning import diversity, prune_similar_children
from .tree import ComponentForest, NodeArena, TreeNode

__all__ = [
    # Sweep
    "as_levels",
    "sweep_components",
    "SweepOrder",
    "DARK_TO_BRIGHT",
    "BRIGHT_TO_DARK",
    "sweep_order",
    # Configuration and errors
    "FilteredParameters",
    "MserParameters",
    "ComponentTreeError",
    "ConfigurationError",
    "CapacityError",
    "PositionListError",
    # Positions
    "PositionArena",
    "PositionList",
    "PositionListView",
    # Trees
    "TreeNode",
    "NodeArena",
    "ComponentForest",
    "PixelListNode",
    "PixelListComponentTree",
    "build_component_tree",
    "FilteredNode",
    "FilteredComponentTree",
    "build_filtered_component_tree",
    "MserNode",
    "MserTree",
    "build_mser_tree",
    # Pruning
    "diversity",
    "prune_similar_children",
]
