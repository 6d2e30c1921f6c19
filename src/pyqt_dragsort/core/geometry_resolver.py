"""
Drag direction resolution for fixed-column grids.

Classifies the dragged item's displacement into one of eight octants and
maps the octant to a neighbouring index. Octant boundaries sit at
22.5 + k * 45 degrees; a slope exactly on a boundary belongs to the
diagonal octant in every quadrant.
"""

import logging
from typing import List, Optional

from .geometry import DraggableRange, ItemPosition, Octant, Point

logger = logging.getLogger(__name__)

TAN_22_5 = 0.414
TAN_67_5 = 2.414

# Replaces a zero horizontal displacement so the slope stays finite
_ZERO_DX = 0.001

_DIAGONALS = {
    (True, True): Octant.UP_LEFT,
    (True, False): Octant.UP_RIGHT,
    (False, True): Octant.DOWN_LEFT,
    (False, False): Octant.DOWN_RIGHT,
}


def classify_octant(dx: float, dy: float) -> Octant:
    """
    Classify a displacement vector (screen coordinates, y grows downward).

    Args:
        dx: Horizontal displacement
        dy: Vertical displacement

    Returns:
        The octant the vector points into
    """
    if dx == 0:
        dx = _ZERO_DX
    slope = abs(dy / dx)
    if slope < TAN_22_5:
        return Octant.LEFT if dx < 0 else Octant.RIGHT
    if slope > TAN_67_5:
        return Octant.UP if dy < 0 else Octant.DOWN
    return _DIAGONALS[(dy < 0, dx < 0)]


def build_swap_chain(dragged_index: int, target_index: int) -> List[int]:
    """
    Indices that shift one slot to vacate target_index for the dragged item.

    Starts at target_index and steps toward dragged_index, excluding it.
    """
    if dragged_index == target_index:
        return []
    step = 1 if dragged_index > target_index else -1
    return list(range(target_index, dragged_index, step))


class GeometryResolver:
    """Maps drag displacement to a target index and swap chain."""

    def __init__(self, columns_per_row: int = 4, dead_zone_ratio: float = 0.1):
        if columns_per_row < 1:
            raise ValueError(f"columns_per_row must be >= 1, got {columns_per_row}")
        self.columns_per_row = columns_per_row
        self.dead_zone_ratio = dead_zone_ratio

    def resolve_octant(self, dragged: ItemPosition, translation: Point) -> Optional[Octant]:
        """
        Octant of the overlay's displacement from the dragged item's layout slot.

        Returns None while the displacement is inside the dead zone on both axes.
        """
        dx = translation.x - dragged.left
        dy = translation.y - dragged.top
        if abs(dx) < self.dead_zone_ratio * dragged.width and abs(dy) < self.dead_zone_ratio * dragged.height:
            return None
        if dx == 0 and dy == 0:
            return None
        return classify_octant(dx, dy)

    def resolve_target(self, dragged: ItemPosition, translation: Point, item_count: int,
                       draggable_range: Optional[DraggableRange] = None) -> Optional[int]:
        """
        Candidate target index for the current displacement, or None.

        Targets outside the collection or outside draggable_range are
        not candidates.
        """
        if dragged.position < 0:
            return None
        octant = self.resolve_octant(dragged, translation)
        if octant is None:
            return None

        target = dragged.position + octant.index_delta(self.columns_per_row)
        logger.debug(f"[GeometryResolver] octant={octant.name} position={dragged.position} target={target}")

        if not 0 <= target < item_count:
            return None
        if draggable_range is not None and not draggable_range.contains(target):
            return None
        return target

    def find_swap_targets(self, dragged: ItemPosition, translation: Point, item_count: int,
                          draggable_range: Optional[DraggableRange] = None) -> List[int]:
        """Swap chain for this frame; empty when no swap should occur."""
        target = self.resolve_target(dragged, translation, item_count, draggable_range)
        if target is None:
            return []
        return build_swap_chain(dragged.position, target)
