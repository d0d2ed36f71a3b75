"""
Rendering of component forests for inspection.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from rich.console import Console
from rich.tree import Tree

from utils.algorithms.tree import depth_first_preorder

if TYPE_CHECKING:
    from componenttree.tree import ComponentForest, TreeNode


def render_forest(forest: ComponentForest, title: str = "components") -> Tree:
    """Build a rich Tree with one branch per node, roots under the title."""
    tree = Tree(f"[bold]{title}[/bold] ({len(forest)} nodes)")
    branches: dict[int, Tree] = {}

    def after(node: TreeNode) -> tuple[TreeNode, ...]:
        return node.children

    for root in forest.roots:
        for node in depth_first_preorder(after, root):
            above = tree if node.parent_index is None else branches[node.parent_index]
            branches[node.index] = above.add(node.describe())
    return tree


def format_forest(
    forest: ComponentForest, title: str = "components", width: int = 100
) -> str:
    """Render a forest to plain text."""
    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(render_forest(forest, title))
    return console.export_text()


def print_forest(forest: ComponentForest, title: str = "components") -> None:
    Console().print(render_forest(forest, title))
