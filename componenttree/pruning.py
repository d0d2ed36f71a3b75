"""
Removal of near-duplicate nodes.

A child whose region is almost its parent's adds nothing to a tree. With
B a parent and A one of its children, A is removed when

    (|B| - |A|) / |B| <= min_diversity

and A's own children are spliced under B, where they are examined against
B in turn. Only nodes are removed: positions stay with the regions that
own them, and releasing a removed node from its arena is left to the
forest that owns it.

Pruning is idempotent: after a pass every remaining edge has a diversity
strictly above min_diversity.
"""

from collections import deque

from componenttree.tree import TreeNode
from utils.algorithms.tree import depth_first_preorder


def diversity(parent: TreeNode, child: TreeNode) -> float:
    """Fraction of the parent's positions not covered by the child."""
    return (parent.size - child.size) / parent.size


def prune_similar_children(root: TreeNode, min_diversity: float) -> list[TreeNode]:
    """
    Remove, below root, every node too similar to its (new) parent.

    Returns:
        The removed nodes, in the order they were removed.
    """
    removed: list[TreeNode] = []

    def keep_diverse_children(parent: TreeNode) -> tuple[TreeNode, ...]:
        candidates = deque(parent.children)
        kept: list[TreeNode] = []
        while candidates:
            child = candidates.popleft()
            if diversity(parent, child) > min_diversity:
                kept.append(child)
                continue
            candidates.extend(child.children)
            child.child_indices.clear()
            child.parent_index = None
            child.pruned = True
            removed.append(child)
        parent.child_indices[:] = [child.index for child in kept]
        for child in kept:
            child.parent_index = parent.index
        return tuple(kept)

    for _ in depth_first_preorder(keep_diverse_children, root):
        pass
    return removed
