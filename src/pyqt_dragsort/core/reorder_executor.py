"""
Commits reorders into the backing collection.

A resolved swap chain is executed only once the dragged item's overlay has
crossed the midpoint between its slot and the first chain item. Far jumps
skip that test. After a move the scroll offset is compensated when the
first child took part in the move, so the list's own anchoring does not
make the content jump.
"""

import logging
from typing import List

from pyqt_dragsort.protocols.list_host import ListHost

from .geometry import ItemPosition, bounding_span
from .host_queries import find_first_child_position, find_visible_item
from .session import DragSession
from .wrapper_adapter import DraggableItemWrapper

logger = logging.getLogger(__name__)


class ReorderExecutor:
    """Executes swap chains and undoes them on cancellation."""

    def __init__(self, host: ListHost, wrapper: DraggableItemWrapper, near_field_distance: int = 4):
        self._host = host
        self._wrapper = wrapper
        self.near_field_distance = near_field_distance

    @staticmethod
    def crossed_midpoint(dragged: ItemPosition, target: ItemPosition, session: DragSession) -> bool:
        """
        Whether the overlay has crossed the midpoint of dragged + target.

        The axis is whichever one the combined extent spans further.
        """
        left, top, right, bottom = bounding_span(dragged, target)
        delta_x = right - left
        delta_y = bottom - top
        overlay = session.overlay_translation

        if delta_x > delta_y:
            mid_items = left + delta_x * 0.5
            mid_overlay = overlay.x + session.item_width * 0.5
        else:
            mid_items = top + delta_y * 0.5
            mid_overlay = overlay.y + session.item_height * 0.5

        if target.position < dragged.position:
            return mid_overlay < mid_items
        return mid_overlay > mid_items

    def swap_items(self, session: DragSession, swap_chain: List[int]) -> bool:
        """
        Move the dragged item to the head of swap_chain if the move is confirmed.

        Returns:
            True if the collection was changed
        """
        if not swap_chain:
            return False
        dragged = find_visible_item(self._host, session.dragged_item_id)
        if dragged is None:
            return False

        from_position = dragged.position
        to_position = swap_chain[0]
        if from_position < 0 or to_position < 0:
            return False

        if self._wrapper.get_item_id(from_position) != session.dragged_item_id:
            logger.debug("[ReorderExecutor] List state has not been synced to data yet")
            return False

        distance = abs(from_position - to_position)
        target = self._host.find_item_for_position(to_position)

        if distance == 0:
            return False
        if distance <= self.near_field_distance:
            if target is None or not self.crossed_midpoint(dragged, target, session):
                return False

        prev_first_position = find_first_child_position(self._host)

        logger.debug(f"[ReorderExecutor] item swap (from: {from_position}, to: {to_position})")
        self._wrapper.move_item(from_position, to_position)
        session.current_position = to_position
        self._host.end_animations()

        if from_position == prev_first_position:
            extent = (target.height + target.margins.vertical) if target is not None else \
                (session.item_height + session.item_margins.vertical)
            self._compensate_scroll(-extent)
        elif to_position == prev_first_position:
            self._compensate_scroll(-(session.item_height + session.item_margins.vertical))

        self._host.end_animations()
        return True

    def revert(self, session: DragSession) -> bool:
        """Move the dragged item back to where the drag started."""
        initial = self._wrapper.dragging_item_initial_position
        current = self._wrapper.dragging_item_current_position
        if initial < 0 or current < 0 or initial == current:
            return False
        if self._wrapper.get_item_id(current) != session.dragged_item_id:
            logger.warning(f"[ReorderExecutor] Cannot revert: item at {current} is no longer the dragged item")
            return False
        self._wrapper.move_item(current, initial)
        session.current_position = initial
        return True

    def _compensate_scroll(self, amount: float) -> float:
        scrolled = self._host.scroll_by(0, amount)
        if not scrolled:
            logger.debug(f"[ReorderExecutor] Scroll compensation of {amount} had no effect")
        return scrolled
