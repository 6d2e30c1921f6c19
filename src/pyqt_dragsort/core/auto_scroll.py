"""
Edge-triggered auto-scroll while dragging.

ScrollOnDraggingProcess is the per-frame loop. It holds only a weak
reference to its owner and stops by itself once the owner is gone or the
loop is stopped. AutoScrollController does the work of one tick.
"""

import logging
import math
import weakref
from typing import Optional

from pyqt_dragsort.protocols.list_host import ListHost
from pyqt_dragsort.protocols.scheduler import ScheduledTask

from .position_decorator import DraggingItemDecorator
from .session import DragSession, ScrollDirection

logger = logging.getLogger(__name__)


class ScrollOnDraggingProcess:
    """
    Self-rescheduling frame callback.

    The owner must expose a `scheduler` attribute and a
    `handle_scroll_on_dragging()` method.
    """

    def __init__(self, owner):
        self._owner_ref: Optional[weakref.ref] = weakref.ref(owner)
        self._task: Optional[ScheduledTask] = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def _owner(self):
        return self._owner_ref() if self._owner_ref is not None else None

    def start(self) -> None:
        if self._started:
            return
        owner = self._owner()
        if owner is None or owner.scheduler is None:
            return
        self._task = owner.scheduler.post_on_animation(self.run)
        self._started = True

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._started = False

    def release(self) -> None:
        self.stop()
        self._owner_ref = None

    def run(self) -> None:
        self._task = None
        owner = self._owner()
        if owner is None or not self._started:
            self._started = False
            return

        owner.handle_scroll_on_dragging()

        # the tick may have finished the drag
        if self._started and owner.scheduler is not None:
            self._task = owner.scheduler.post_on_animation(self.run)
        else:
            self._started = False


class AutoScrollController:
    """Computes and applies one frame of edge auto-scroll."""

    def __init__(self, host: ListHost, scroll_threshold: float = 0.3,
                 scroll_amount_coeff: float = 25.0, display_density: float = 1.0):
        if not 0.0 < scroll_threshold < 0.5:
            raise ValueError(f"scroll_threshold must be in (0, 0.5), got {scroll_threshold}")
        self._host = host
        self.scroll_threshold = scroll_threshold
        self.scroll_amount_coeff = scroll_amount_coeff
        self.display_density = display_density

    def compute_scroll_amount(self, touch_y: float, height: float) -> int:
        """
        Signed per-frame scroll for a pointer at touch_y.

        Zero while the pointer is outside the edge zones; grows linearly
        to scroll_amount_coeff * density at the very edge.
        """
        if height <= 0:
            return 0
        threshold = self.scroll_threshold
        center_offset = touch_y / height - 0.5
        acceleration = max(0.0, threshold - (0.5 - abs(center_offset))) / threshold
        if center_offset == 0:
            return 0
        magnitude = int(self.scroll_amount_coeff * self.display_density * acceleration + 0.5)
        return int(math.copysign(magnitude, center_offset))

    @staticmethod
    def apply_direction_mask(amount: int, mask: ScrollDirection) -> int:
        if amount > 0 and not (mask & ScrollDirection.BOTTOM):
            return 0
        if amount < 0 and not (mask & ScrollDirection.TOP):
            return 0
        return amount

    def tick(self, session: DragSession, dragging_decorator: DraggingItemDecorator) -> float:
        """
        Scroll one frame if the pointer is in an edge zone.

        Returns:
            Distance actually scrolled
        """
        height = self._host.height()
        if height == 0:
            return 0

        amount = self.compute_scroll_amount(session.current_touch.y, height)
        amount = self.apply_direction_mask(amount, session.scroll_direction_mask)

        draggable_range = session.draggable_range
        first_visible = self._host.first_completely_visible_position()
        last_visible = self._host.last_completely_visible_position()

        reached_top_soft = reached_top_hard = False
        reached_bottom_soft = reached_bottom_hard = False

        if first_visible is not None:
            reached_top_soft = first_visible <= draggable_range.start
            reached_top_hard = first_visible <= draggable_range.start - 1
        if last_visible is not None:
            reached_bottom_soft = last_visible >= draggable_range.end
            reached_bottom_hard = last_visible >= draggable_range.end + 1

        scrolled = 0
        if (amount < 0 and not reached_top_hard) or (amount > 0 and not reached_bottom_hard):
            self._host.end_animations()
            scrolled = self._host.scroll_by(0, amount)
            logger.debug(f"[AutoScroll] requested={amount} scrolled={scrolled}")

            session.is_scrolling = not (reached_top_soft if amount < 0 else reached_bottom_soft)
            dragging_decorator.set_is_scrolling(session.is_scrolling)
            dragging_decorator.refresh()
        else:
            session.is_scrolling = False
            dragging_decorator.set_is_scrolling(False)

        return scrolled
