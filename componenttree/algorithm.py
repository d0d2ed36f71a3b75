"""
Sweep driver shared by every component tree variant.

Positions are visited once each, in sweep order. A visited position either
starts a new component, extends the component of its visited neighbors, or
merges several neighboring components into one. Once every position of a
threshold level has been visited, each component touched at that level is
closed and handed to a ComponentHandler, which decides what to keep.

The sweep is sequential: the fate of a position depends on every position
visited before it.
"""

import logging

import numpy as np

from componenttree.component import (
    ActiveComponentTable,
    C,
    ComponentGenerator,
    ComponentHandler,
)
from componenttree.ordering import SweepOrder
from decomposition import DEFAULT_CONNECTIVITY, Connectivity, make_index_neighbors

logger = logging.getLogger(__name__)


def as_levels(image: object) -> np.ndarray:
    """
    Validate an input array and return it as a numeric numpy array.

    Boolean arrays are promoted to uint8.

    Raises:
        TypeError: If the array is not boolean, integer or floating point.
    """
    levels = np.asarray(image)
    if levels.dtype.kind == "b":
        return levels.astype(np.uint8)
    if levels.dtype.kind not in "iuf":
        raise TypeError(f"Cannot sweep an array of dtype {levels.dtype}")
    return levels


def _emit_pending(pending: dict[int, C], handler: ComponentHandler[C]) -> int:
    for component in pending.values():
        handler.emit(component)
        component.children.clear()
        component.emitted = True
    count = len(pending)
    pending.clear()
    return count


def build_component_tree(
    levels: np.ndarray,
    generator: ComponentGenerator[C],
    handler: ComponentHandler[C],
    order: SweepOrder,
    connectivity: Connectivity = DEFAULT_CONNECTIVITY,
) -> int:
    """
    Sweep an array and emit its components level by level.

    Args:
        levels: Array of threshold values (see as_levels).
        generator: Creates the components the sweep opens.
        handler: Receives each component when its level is closed.
        order: Dark-to-bright or bright-to-dark.
        connectivity: Adjacency between positions.

    Returns:
        Number of emitted components.
    """
    if levels.size == 0:
        logger.debug("Empty array, nothing to sweep")
        return 0

    logger.debug(f"Sweeping {levels.size} positions of shape {levels.shape} ({order})")
    flat_levels = levels.ravel()
    values = flat_levels.tolist()
    neighbors = make_index_neighbors(levels.shape, connectivity)
    table: ActiveComponentTable[C] = ActiveComponentTable()

    # Components touched at the current level, in first-touch order
    pending: dict[int, C] = {}
    current_level = None
    emitted = 0

    for index in order.argsort(flat_levels).tolist():
        level = values[index]
        if pending and level != current_level:
            emitted += _emit_pending(pending, handler)
        current_level = level

        component = None
        anchor = index
        for neighbor in neighbors(index):
            if neighbor not in table:
                continue
            other = table.component_of(neighbor)
            if component is None:
                component, anchor = other, neighbor
            elif other is not component:
                component.merge(other)
                table.merge(anchor, neighbor)
                pending.pop(id(other), None)

        if component is None:
            component = generator.create_component(level)
            table.open(index, component)
        else:
            component.value = level
            table.attach(index, anchor)
        component.add_position(index)
        pending[id(component)] = component

    emitted += _emit_pending(pending, handler)
    logger.debug(
        f"Sweep emitted {emitted} components, {len(table)} connected region(s) at the end"
    )
    return emitted
