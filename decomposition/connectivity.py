"""
Connectivity definitions for n-dimensional grids.

A connectivity defines which positions are "neighbors" of each other,
and therefore which positions the sweep may union into one component.
Different connectivities produce different component trees of the same array.

Named after the chess pieces moving one step:
- TOWER: face neighbors only, 2·n per position (4-connectivity in 2D)
- KING: face, edge and corner neighbors, 3^n - 1 per position (8-connectivity in 2D)
"""

from collections.abc import Iterator
from enum import Enum
from itertools import product
from math import prod

from localtypes import FlatIndex, IndexNeighborFunc, Offset, Shape


class Connectivity(Enum):
    TOWER = "tower"
    KING = "king"


def neighbor_offsets(ndim: int, connectivity: Connectivity) -> tuple[Offset, ...]:
    """
    Relative moves to the neighbors of a position, in a fixed order.

    TOWER offsets go axis by axis, the negative step before the positive one.
    KING offsets are every non-zero vector of {-1, 0, 1}^ndim in lexicographic order.

    Example:
        >>> neighbor_offsets(2, Connectivity.TOWER)
        ((-1, 0), (1, 0), (0, -1), (0, 1))
    """
    match connectivity:
        case Connectivity.TOWER:
            return tuple(
                tuple(step if axis == moved else 0 for axis in range(ndim))
                for moved in range(ndim)
                for step in (-1, 1)
            )
        case Connectivity.KING:
            return tuple(
                offset
                for offset in product((-1, 0, 1), repeat=ndim)
                if any(offset)
            )
    raise ValueError(f"Unknown connectivity: {connectivity}")


def c_order_strides(shape: Shape) -> tuple[int, ...]:
    """Flat-index distance of a unit step along each axis (C order)."""
    return tuple(prod(shape[axis + 1 :]) for axis in range(len(shape)))


def make_index_neighbors(
    shape: Shape, connectivity: Connectivity = Connectivity.TOWER
) -> IndexNeighborFunc:
    """
    Create a neighbor function over C-order flat indices of an array.

    The returned function yields, for a flat index, the flat indices of its
    neighbors that lie inside the array bounds. The order is the one of
    `neighbor_offsets`, which makes every sweep deterministic.

    Args:
        shape: Extent of every axis of the (zero-origin) array.
        connectivity: Which moves count as adjacency.

    Returns:
        A function flat_index -> iterator of neighboring flat indices.

    Example:
        >>> neighbors = make_index_neighbors((2, 3))
        >>> list(neighbors(1))
        [4, 0, 2]
    """
    strides = c_order_strides(shape)
    moves = tuple(
        (offset, sum(step * stride for step, stride in zip(offset, strides)))
        for offset in neighbor_offsets(len(shape), connectivity)
    )

    def unravel(index: FlatIndex) -> list[int]:
        coords = []
        for stride in strides:
            coord, index = divmod(index, stride)
            coords.append(coord)
        return coords

    def neighbors(index: FlatIndex) -> Iterator[FlatIndex]:
        coords = unravel(index)
        for offset, jump in moves:
            if all(
                0 <= coord + step < extent
                for coord, step, extent in zip(coords, offset, shape)
            ):
                yield index + jump

    return neighbors


# Face connectivity is what the sweep uses unless told otherwise
DEFAULT_CONNECTIVITY = Connectivity.TOWER
