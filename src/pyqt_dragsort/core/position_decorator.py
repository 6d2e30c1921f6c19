"""
Translations for the dragged item and the items displaced around it.

DraggingItemDecorator follows the pointer, clamped to the list's padded
viewport and to the laid-out part of the draggable range.

SwapTargetDecorator slides the current swap chain toward the slots it
will occupy after the swap. The slide amount is a translation phase in
[0, 1] that is smoothed from frame to frame.
"""

import logging
from typing import Callable, Hashable, List, Optional

from pyqt_dragsort.protocols.drag_config import Interpolator
from pyqt_dragsort.protocols.list_host import ListHost

from .exceptions import DragStateError
from .geometry import DraggableRange, ItemPosition, ORIGIN, Point
from .geometry_resolver import GeometryResolver
from .host_queries import find_visible_item, range_bounds
from .interpolators import smooth_phase

logger = logging.getLogger(__name__)


class DraggingItemDecorator:
    """Tracks the dragged item's on-screen translation."""

    def __init__(self, host: ListHost, item_id: Hashable, draggable_range: DraggableRange):
        self._host = host
        self._item_id: Optional[Hashable] = item_id
        self._range: Optional[DraggableRange] = draggable_range
        self._grab_offset = ORIGIN
        self._touch = ORIGIN
        self._item_size = ORIGIN
        self._translation = ORIGIN
        self._start_limit = ORIGIN
        self._end_limit = ORIGIN
        self._is_scrolling = False
        self._started = False

    @property
    def translation(self) -> Point:
        """Top-left of the dragged item in list coordinates, clamped."""
        return self._translation

    @property
    def is_scrolling(self) -> bool:
        return self._is_scrolling

    @property
    def item_id(self) -> Optional[Hashable]:
        return self._item_id

    def start(self, item: ItemPosition, touch: Point, grab_offset: Point) -> None:
        if self._started:
            return
        self._grab_offset = grab_offset
        self._item_size = Point(item.width, item.height)
        self._started = True
        self.update(touch)

    def update(self, touch: Point) -> None:
        self._touch = touch
        self.refresh()

    def refresh(self) -> None:
        self._update_translation_limits()
        x = self._touch.x - self._grab_offset.x
        y = self._touch.y - self._grab_offset.y
        x = min(max(x, self._start_limit.x), self._end_limit.x)
        y = min(max(y, self._start_limit.y), self._end_limit.y)
        self._translation = Point(x, y)
        self._apply_translation()

    def set_is_scrolling(self, is_scrolling: bool) -> None:
        self._is_scrolling = is_scrolling

    def _update_translation_limits(self) -> None:
        padding = self._host.padding()
        if not self._host.visible_items():
            self._start_limit = self._end_limit = Point(padding.left, padding.top)
            return

        end_x = max(0.0, self._host.width() - padding.right - self._item_size.x)
        end_y = max(0.0, self._host.height() - padding.bottom - self._item_size.y)
        start_x, start_y = padding.left, padding.top

        if not self._is_scrolling and self._range is not None:
            bounds = range_bounds(self._host, self._range)
            if bounds is not None:
                left, top, right, bottom = bounds
                end_x = min(end_x, max(left, right - self._item_size.x))
                end_y = min(end_y, max(top, bottom - self._item_size.y))
                start_x = min(end_x, left)
                start_y = min(end_y, top)

        self._start_limit = Point(min(start_x, end_x), min(start_y, end_y))
        self._end_limit = Point(end_x, end_y)

    def _apply_translation(self) -> None:
        if self._item_id is None:
            return
        item = find_visible_item(self._host, self._item_id)
        if item is None:
            return
        self._host.set_item_translation(self._item_id,
                                        self._translation.x - item.left,
                                        self._translation.y - item.top)

    def invalidate_dragging_item(self) -> None:
        """Forget the bound item (it was recycled by the host)."""
        self._item_id = None

    def set_dragging_item(self, item_id: Hashable) -> None:
        """Bind a freshly laid-out item for the dragged identity."""
        if self._item_id is not None:
            raise DragStateError("A new dragging item was assigned before invalidating the older one")
        self._item_id = item_id
        self._apply_translation()

    def finish(self, animate: bool, duration_ms: int = 0, interpolator: Optional[Interpolator] = None) -> None:
        """Settle the dragged item back into its slot and reset."""
        self._host.end_animations()
        self._host.stop_scroll()

        if self._item_id is not None:
            self._apply_translation()
            self._host.animate_item_to_rest(self._item_id, duration_ms if animate else 0, interpolator)

        self._item_id = None
        self._range = None
        self._grab_offset = self._touch = self._translation = ORIGIN
        self._start_limit = self._end_limit = self._item_size = ORIGIN
        self._is_scrolling = False
        self._started = False


class SwapTargetDecorator:
    """Slides displaced items toward their post-swap slots."""

    def __init__(self, host: ListHost, item_id: Hashable, draggable_range: DraggableRange,
                 resolver: GeometryResolver, item_count: Callable[[], int],
                 smoothing: float = 0.3, snap_epsilon: float = 0.01,
                 interpolator: Optional[Interpolator] = None):
        self._host = host
        self._item_id = item_id
        self._range = draggable_range
        self._resolver = resolver
        self._item_count = item_count
        self._smoothing = smoothing
        self._snap_epsilon = snap_epsilon
        self._interpolator = interpolator
        self._translation = ORIGIN
        self._target_ids: List[Hashable] = []
        self._req_phase = 0.0
        self._cur_phase = 0.0
        self._started = False

    @property
    def current_phase(self) -> float:
        return self._cur_phase

    @property
    def requested_phase(self) -> float:
        return self._req_phase

    @property
    def target_ids(self) -> List[Hashable]:
        return list(self._target_ids)

    def set_interpolator(self, interpolator: Optional[Interpolator]) -> None:
        self._interpolator = interpolator

    def start(self) -> None:
        self._started = True

    def update(self, translation: Point) -> None:
        """Record the dragged item's translation and advance one frame."""
        self._translation = translation
        if self._started:
            self._on_frame()

    def _on_frame(self) -> None:
        dragged = find_visible_item(self._host, self._item_id)
        if dragged is None:
            return

        chain = self._resolver.find_swap_targets(dragged, self._translation, self._item_count(), self._range)
        targets = [item for item in (self._host.find_item_for_position(p) for p in chain) if item is not None]
        target_ids = [item.item_id for item in targets]

        for stale_id in self._target_ids:
            if stale_id not in target_ids:
                self._host.set_item_translation(stale_id, 0.0, 0.0)

        if targets:
            # phase is computed from the first target only; the rest of the chain moves in step
            self._req_phase = self.calculate_translation_phase(dragged, targets[0])
            if target_ids != self._target_ids:
                self._cur_phase = self._req_phase
            else:
                self._cur_phase = smooth_phase(self._cur_phase, self._req_phase,
                                               self._smoothing, self._snap_epsilon)
            for target in targets:
                self._update_swap_target_translation(dragged, target, self._cur_phase)

        self._target_ids = target_ids

    def calculate_translation_phase(self, dragged: ItemPosition, target: ItemPosition) -> float:
        """Displacement of the dragged item relative to the target's extent, clamped to [0, 1]."""
        extent = target.outer_width
        offset = max(abs(dragged.left - self._translation.x), abs(dragged.top - self._translation.y))
        phase = (offset / extent) if extent != 0 else 0.0
        return min(max(phase, 0.0), 1.0)

    def swap_target_translation(self, dragged: ItemPosition, target: ItemPosition, phase: float) -> Point:
        """
        Translation of one displaced item at the given phase.

        Items at a row boundary wrap to the neighbouring row: they move one
        row vertically and a full row width horizontally.
        """
        columns = self._resolver.columns_per_row
        step_x = dragged.outer_width
        step_y = dragged.outer_height

        if self._interpolator is not None:
            phase = self._interpolator(phase)

        if dragged.position > target.position:
            # dragged item travels backward, target shifts forward
            if (target.position + 1) % columns != 0:
                return Point(phase * step_x, 0.0)
            return Point(-phase * step_x * columns, phase * step_y)

        if target.position % columns != 0:
            return Point(-phase * step_x, 0.0)
        return Point(phase * step_x * columns, -phase * step_y)

    def _update_swap_target_translation(self, dragged: ItemPosition, target: ItemPosition, phase: float) -> None:
        offset = self.swap_target_translation(dragged, target, phase)
        self._host.set_item_translation(target.item_id, offset.x, offset.y)

    def finish(self, animate: bool, duration_ms: int = 0, interpolator: Optional[Interpolator] = None) -> None:
        """Settle every displaced item back into place and reset."""
        self._host.end_animations()
        self._host.stop_scroll()

        dragged = find_visible_item(self._host, self._item_id)
        for target_id in self._target_ids:
            target = find_visible_item(self._host, target_id)
            if dragged is not None and target is not None:
                self._update_swap_target_translation(dragged, target, self._cur_phase)
            self._host.animate_item_to_rest(target_id, duration_ms if animate else 0, interpolator)

        self._target_ids = []
        self._translation = ORIGIN
        self._cur_phase = 0.0
        self._req_phase = 0.0
        self._started = False
