"""
Size-filtered component tree (one node per branch).
"""

from .tree import FilteredComponentTree, FilteredNode, build_filtered_component_tree

__all__ = [
    "FilteredNode",
    "FilteredComponentTree",
    "build_filtered_component_tree",
]
