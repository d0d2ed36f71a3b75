"""
Full component tree (every component at every threshold level).
"""

from .tree import PixelListComponentTree, PixelListNode, build_component_tree

__all__ = [
    "PixelListNode",
    "PixelListComponentTree",
    "build_component_tree",
]
