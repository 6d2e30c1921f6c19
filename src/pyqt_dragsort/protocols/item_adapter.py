"""Draggable item adapter contract.

Applications subclass DraggableItemAdapter to expose their collection to
the drag-sort controller. The controller never touches storage directly:
every structural change goes through on_move_item().

Example:
    class TaskAdapter(DraggableItemAdapter):
        def __init__(self, tasks):
            self._tasks = tasks

        def get_item_count(self):
            return len(self._tasks)

        def get_item_id(self, position):
            return self._tasks[position].uuid

        def on_move_item(self, from_position, to_position):
            self._tasks.insert(to_position, self._tasks.pop(from_position))
"""

from abc import ABC, abstractmethod
from typing import Hashable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pyqt_dragsort.core.geometry import DraggableRange


class DraggableItemAdapter(ABC):
    """ABC for collections whose items can be reordered by dragging."""

    @abstractmethod
    def get_item_count(self) -> int:
        """Return the number of items in the collection."""
        ...

    @abstractmethod
    def get_item_id(self, position: int) -> Hashable:
        """Return the stable identity of the item at position."""
        ...

    @abstractmethod
    def on_move_item(self, from_position: int, to_position: int) -> None:
        """Relocate one item. A single move, not a sequence of adjacent swaps."""
        ...

    def on_check_can_start_drag(self, position: int, x: float, y: float) -> bool:
        """Whether the item at position may be dragged from item-local (x, y)."""
        return True

    def on_get_item_draggable_range(self, position: int) -> Optional["DraggableRange"]:
        """Draggable range for the item at position, or None for the whole collection."""
        return None
