"""
Drag session state.

DragSession is the single mutable record describing an in-progress drag.
It is owned by DragSessionController; the resolver, decorators and the
auto-scroll controller receive it for the duration of one call only.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Hashable, Optional

from pyqt_dragsort.protocols.touch_event import TouchEvent

from .geometry import DraggableRange, Margins, NO_MARGINS, Point


class DragState(Enum):
    IDLE = "idle"
    ARMED = "armed"            # long-press timer pending
    DRAGGING = "dragging"
    FINISHING = "finishing"


class ScrollDirection(IntFlag):
    NONE = 0
    TOP = 1 << 0
    BOTTOM = 1 << 1


@dataclass
class PressState:
    """What was pressed before a drag is confirmed."""
    initial_touch: Point
    item_id: Hashable
    down_event: Optional[TouchEvent] = None


@dataclass
class DragSession:
    """
    Mutable record of one drag.

    Touch extrema are tracked from the drag start and feed the
    auto-scroll direction mask.
    """
    dragged_item_id: Hashable
    draggable_range: DraggableRange
    grab_offset: Point
    initial_touch: Point
    initial_position: int
    item_width: float
    item_height: float
    item_margins: Margins = NO_MARGINS
    current_position: int = -1
    current_touch: Point = field(default=None)
    min_touch: Point = field(default=None)
    max_touch: Point = field(default=None)
    scroll_direction_mask: ScrollDirection = ScrollDirection.NONE
    is_scrolling: bool = False

    def __post_init__(self):
        # auto scrolling is disabled until the user moves the item
        if self.current_touch is None:
            self.current_touch = self.initial_touch
        self.min_touch = self.initial_touch
        self.max_touch = self.initial_touch
        if self.current_position < 0:
            self.current_position = self.initial_position

    def update_touch(self, touch: Point) -> None:
        self.current_touch = touch
        self.min_touch = Point(min(self.min_touch.x, touch.x), min(self.min_touch.y, touch.y))
        self.max_touch = Point(max(self.max_touch.x, touch.x), max(self.max_touch.y, touch.y))

    def update_direction_mask(self, scroll_touch_slop: float) -> ScrollDirection:
        """
        Permit a scroll direction once the pointer travelled scroll_touch_slop that way.

        A permitted direction stays permitted for the rest of the session.
        """
        start, low, high, last = self.initial_touch, self.min_touch, self.max_touch, self.current_touch
        if (start.y - low.y) > scroll_touch_slop or (high.y - last.y) > scroll_touch_slop:
            self.scroll_direction_mask |= ScrollDirection.TOP
        if (high.y - start.y) > scroll_touch_slop or (last.y - low.y) > scroll_touch_slop:
            self.scroll_direction_mask |= ScrollDirection.BOTTOM
        return self.scroll_direction_mask

    @property
    def overlay_translation(self) -> Point:
        """Top-left of the dragged item's overlay, unclamped."""
        return self.current_touch - self.grab_offset
