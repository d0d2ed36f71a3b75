"""
Type definitions shared by the component tree builders.

This module contains the custom types used throughout the library,
organized by their primary use cases.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Callable, TypeAlias

# Array geometry
Shape: TypeAlias = tuple[int, ...]  # Extent of every axis, zero-origin
Position: TypeAlias = tuple[int, ...]  # n-dimensional coordinate, one entry per axis
Offset: TypeAlias = tuple[int, ...]  # Relative move between two positions

# Positions are stored as C-order flat indices inside the sweep
FlatIndex = int

# Threshold values (pixel values converted to Python scalars)
Value: TypeAlias = int | float

# Graph traversal
IndexNeighborFunc: TypeAlias = Callable[[FlatIndex], Iterator[FlatIndex]]


__all__ = [
    # Geometry
    "Shape",
    "Position",
    "Offset",
    "FlatIndex",
    # Values
    "Value",
    # Graph types
    "IndexNeighborFunc",
]
