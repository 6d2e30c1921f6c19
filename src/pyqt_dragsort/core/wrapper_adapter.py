"""
Adapter wrapper that tracks drag state on behalf of the host list.

The host installs the wrapper (not the application's adapter) so that
drag-time positions and per-item state flags stay in one place.
"""

import logging
from typing import Callable, Dict, Hashable, List, Optional

from pyqt_dragsort.protocols.item_adapter import DraggableItemAdapter

from .drag_state_flags import DragStateFlags
from .geometry import DraggableRange, NO_POSITION

logger = logging.getLogger(__name__)

MoveObserver = Callable[[int, int], None]


class DraggableItemWrapper:
    """
    Wraps a DraggableItemAdapter with drag bookkeeping.

    Emits a structural-move notification to every registered observer
    after each relocation.
    """

    def __init__(self, adapter: DraggableItemAdapter):
        if not isinstance(adapter, DraggableItemAdapter):
            raise TypeError(f"{type(adapter).__name__} does not implement DraggableItemAdapter")
        self._adapter = adapter
        self._move_observers: List[MoveObserver] = []
        self._dragging_item_id: Optional[Hashable] = None
        self._draggable_range: Optional[DraggableRange] = None
        self._initial_position = NO_POSITION
        self._current_position = NO_POSITION
        self._applied_flags: Dict[Hashable, DragStateFlags] = {}

    @property
    def adapter(self) -> DraggableItemAdapter:
        return self._adapter

    # ========== COLLECTION ==========

    def get_item_count(self) -> int:
        return self._adapter.get_item_count()

    def get_item_id(self, position: int) -> Hashable:
        return self._adapter.get_item_id(position)

    def can_start_drag(self, position: int, x: float, y: float) -> bool:
        return self._adapter.on_check_can_start_drag(position, x, y)

    def get_item_draggable_range(self, position: int) -> Optional[DraggableRange]:
        return self._adapter.on_get_item_draggable_range(position)

    def add_move_observer(self, observer: MoveObserver) -> None:
        self._move_observers.append(observer)

    def remove_move_observer(self, observer: MoveObserver) -> None:
        if observer in self._move_observers:
            self._move_observers.remove(observer)

    def move_item(self, from_position: int, to_position: int) -> None:
        """Relocate one item and notify observers."""
        if from_position == to_position:
            return
        self._adapter.on_move_item(from_position, to_position)
        if self._dragging_item_id is not None and from_position == self._current_position:
            self._current_position = to_position
        for observer in list(self._move_observers):
            observer(from_position, to_position)

    # ========== DRAG BOOKKEEPING ==========

    def is_dragging(self) -> bool:
        return self._dragging_item_id is not None

    @property
    def dragging_item_initial_position(self) -> int:
        return self._initial_position

    @property
    def dragging_item_current_position(self) -> int:
        return self._current_position

    def on_drag_item_started(self, item_id: Hashable, position: int, draggable_range: DraggableRange) -> None:
        self._dragging_item_id = item_id
        self._draggable_range = draggable_range
        self._initial_position = position
        self._current_position = position

    def on_drag_item_finished(self) -> None:
        self._dragging_item_id = None
        self._draggable_range = None
        self._initial_position = NO_POSITION
        self._current_position = NO_POSITION

    def get_drag_state_flags(self, position: int) -> DragStateFlags:
        """Flags describing how the item at position relates to the current drag."""
        if self._dragging_item_id is None:
            return DragStateFlags.NONE
        flags = DragStateFlags.DRAGGING
        if self.get_item_id(position) == self._dragging_item_id:
            flags |= DragStateFlags.IS_ACTIVE
        if self._draggable_range is not None and self._draggable_range.contains(position):
            flags |= DragStateFlags.IS_IN_RANGE
        return flags

    def consume_drag_state_flags(self, position: int) -> DragStateFlags:
        """
        Flags for a renderer about to bind the item at position.

        IS_UPDATED is set when the flags differ from the ones last consumed
        for the same item.
        """
        item_id = self.get_item_id(position)
        flags = self.get_drag_state_flags(position)
        if self._applied_flags.get(item_id, DragStateFlags.NONE) != flags:
            self._applied_flags[item_id] = flags
            return flags | DragStateFlags.IS_UPDATED
        return flags
