"""Live lookups against a ListHost. Results are valid for one call only."""

from typing import Hashable, Optional, Tuple

from pyqt_dragsort.protocols.list_host import ListHost

from .geometry import DraggableRange, ItemPosition


def find_visible_item(host: ListHost, item_id: Hashable) -> Optional[ItemPosition]:
    """Laid-out item with the given identity, or None if it is not laid out."""
    for item in host.visible_items():
        if item.item_id == item_id:
            return item
    return None


def find_first_child_position(host: ListHost) -> Optional[int]:
    """Adapter position of the first child, or None for an empty list."""
    items = host.visible_items()
    return items[0].position if items else None


def range_bounds(host: ListHost, draggable_range: DraggableRange) -> Optional[Tuple[float, float, float, float]]:
    """(left, top, right, bottom) spanning every laid-out item inside the range."""
    bounds = None
    for item in host.visible_items():
        if not draggable_range.contains(item.position):
            continue
        if bounds is None:
            bounds = (item.left, item.top, item.right, item.bottom)
        else:
            bounds = (min(bounds[0], item.left), min(bounds[1], item.top),
                      max(bounds[2], item.right), max(bounds[3], item.bottom))
    return bounds
