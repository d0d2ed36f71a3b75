"""
Union-Find (Disjoint Set Union) data structure.

Tracks the sets of array positions already reached by a sweep:
- add(x): Open a new singleton set - O(1)
- find(x): Which set contains x? - O(α(n)) amortized
- union(x, y): Merge sets containing x and y - O(α(n)) amortized
- x in uf: Has x been added yet? - O(1)

Where α(n) is the inverse Ackermann function (effectively constant ≤ 4).

Unlike a lazily initialized union-find, membership is meaningful here:
an element is only known once it has been explicitly added, which lets
the sweep use the structure as its "visited" marker.
"""

from typing import Generic, TypeVar

Element = TypeVar("Element")


class UnionFind(Generic[Element]):
    """
    Union-Find with path compression and union by rank.

    Example:
        >>> uf = UnionFind[int]()
        >>> for i in (1, 2, 3, 4):
        ...     uf.add(i)
        >>> _ = uf.union(1, 2)
        >>> _ = uf.union(2, 3)
        >>> uf.connected(1, 3)
        True
        >>> uf.connected(1, 4)
        False
    """

    def __init__(self) -> None:
        self._parent: dict[Element, Element] = {}
        self._rank: dict[Element, int] = {}

    def __contains__(self, element: object) -> bool:
        return element in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def add(self, element: Element) -> None:
        """Open a singleton set for element. Adding twice is an error."""
        if element in self._parent:
            raise KeyError(f"Element already present: {element!r}")
        self._parent[element] = element
        self._rank[element] = 0

    def find(self, element: Element) -> Element:
        """
        Find the representative (root) of the set containing element.

        Uses path compression: flattens the tree by pointing all nodes
        along the path directly to the root.
        """
        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        # Path compression: point all nodes to root
        current = element
        while self._parent[current] != root:
            next_node = self._parent[current]
            self._parent[current] = root
            current = next_node

        return root

    def union(self, x: Element, y: Element) -> Element:
        """
        Merge the sets containing x and y.

        Uses union by rank: attaches the shorter tree under the taller one
        to keep trees balanced.

        Returns the representative of the merged set.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return root_x

        # Attach smaller tree under larger tree
        if self._rank[root_x] < self._rank[root_y]:
            self._parent[root_x] = root_y
            return root_y
        elif self._rank[root_x] > self._rank[root_y]:
            self._parent[root_y] = root_x
            return root_x
        else:
            self._parent[root_y] = root_x
            self._rank[root_x] += 1
            return root_x

    def connected(self, x: Element, y: Element) -> bool:
        """Check if x and y are in the same set."""
        return self.find(x) == self.find(y)
