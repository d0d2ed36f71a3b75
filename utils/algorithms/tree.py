"""
Tree traversal utilities.

Traversals:
    breadth_first_preorder(after, root) - BFS yielding nodes level by level
    depth_first_preorder(after, root)   - DFS yielding parent before children

`after(node)` returns the children of a node. It is called only once the node
itself has been yielded, so callers may restructure a node's children
while it is being visited (the pruner relies on this).

Note: For graphs with cycles, add `seen = set()` to avoid infinite loops.
"""

from collections import deque
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")


def breadth_first_preorder(
    after: Callable[[T], Iterable[T]], root: T | None
) -> Iterator[T]:
    """Yields nodes level by level, root first."""
    if root is None:
        return
    queue = deque([root])
    while queue:
        current = queue.popleft()
        yield current
        for child in after(current):
            queue.append(child)


def depth_first_preorder(
    after: Callable[[T], Iterable[T]], root: T | None
) -> Iterator[T]:
    """Yields parent before children, depth-first."""
    if root is None:
        return
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        children = list(after(current))
        stack.extend(reversed(children))
