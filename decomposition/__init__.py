"""
Adjacency primitives for decomposing arrays into components.

**Connectivity** (connectivity.py)
    Defines which array positions are neighbors. Different connectivities
    produce different component trees of the same data.
    - Connectivity.TOWER: face neighbors (2·n per position)
    - Connectivity.KING: face, edge and corner neighbors (3^n - 1 per position)
    - make_index_neighbors(shape, connectivity) -> flat index neighbor function

The component tree builders themselves live in componenttree/.
"""

from .connectivity import (
    DEFAULT_CONNECTIVITY,
    Connectivity,
    c_order_strides,
    make_index_neighbors,
    neighbor_offsets,
)

__all__ = [
    "Connectivity",
    "DEFAULT_CONNECTIVITY",
    "neighbor_offsets",
    "c_order_strides",
    "make_index_neighbors",
]
