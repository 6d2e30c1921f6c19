"""
Touch-driven drag-to-reorder controller.

States: IDLE -> ARMED -> DRAGGING -> FINISHING -> IDLE. ARMED only exists
while a long-press timer is pending.

Usage:
    controller = DragSessionController(scheduler=QtScheduler())
    wrapper = controller.create_wrapped_adapter(MyAdapter(items))
    host = MyGridHost(adapter=wrapper)
    controller.attach(host)
    controller.set_on_item_drag_event_listener(listener)

    # from the host's input handling:
    intercepted = controller.handle_touch_event(event)

    # teardown:
    controller.release()

Everything runs on the host's UI thread. Within one input event the
geometry resolution, decorator updates and swap execution happen in that
order before the handler returns; the frame loop never overlaps an event.
"""

import logging
from typing import Optional

from pyqt_dragsort.protocols.drag_config import DragSortConfig, Interpolator, get_dragsort_config
from pyqt_dragsort.protocols.drag_listener import OnItemDragEventListener
from pyqt_dragsort.protocols.item_adapter import DraggableItemAdapter
from pyqt_dragsort.protocols.list_host import ListHost, OverScrollMode
from pyqt_dragsort.protocols.scheduler import ScheduledTask, Scheduler
from pyqt_dragsort.protocols.touch_event import TouchAction, TouchEvent

from .auto_scroll import AutoScrollController, ScrollOnDraggingProcess
from .exceptions import DragStateError
from .geometry import DraggableRange, ItemPosition, Point
from .geometry_resolver import GeometryResolver
from .host_queries import find_visible_item
from .position_decorator import DraggingItemDecorator, SwapTargetDecorator
from .reorder_executor import ReorderExecutor
from .session import DragSession, DragState, PressState
from .wrapper_adapter import DraggableItemWrapper

logger = logging.getLogger(__name__)


class DragSessionController:
    """Owns the drag session and orchestrates resolver, decorators, executor and auto-scroll."""

    def __init__(self, config: Optional[DragSortConfig] = None, scheduler: Optional[Scheduler] = None):
        self._config = config or get_dragsort_config()
        self.scheduler: Optional[Scheduler] = scheduler

        self._host: Optional[ListHost] = None
        self._wrapper: Optional[DraggableItemWrapper] = None
        self._listener: Optional[OnItemDragEventListener] = None
        self._released = False

        self._initiate_on_long_press = self._config.initiate_on_long_press
        self._initiate_on_move = self._config.initiate_on_move
        self._settle_duration_ms = self._config.settle_duration_ms
        self._settle_interpolator = self._config.settle_interpolator
        self._swap_target_interpolator = self._config.swap_target_interpolator

        self._touch_slop = self._config.touch_slop
        self._scroll_touch_slop = self._config.scroll_touch_slop

        self._resolver = GeometryResolver(self._config.columns_per_row, self._config.dead_zone_ratio)
        self._scroll_process = ScrollOnDraggingProcess(self)
        self._auto_scroll: Optional[AutoScrollController] = None
        self._executor: Optional[ReorderExecutor] = None

        self._state = DragState.IDLE
        self._press: Optional[PressState] = None
        self._session: Optional[DragSession] = None
        self._dragging_decorator: Optional[DraggingItemDecorator] = None
        self._swap_decorator: Optional[SwapTargetDecorator] = None
        self._orig_overscroll_mode: Optional[OverScrollMode] = None

        self._long_press_task: Optional[ScheduledTask] = None
        self._deferred_cancel_task: Optional[ScheduledTask] = None
        self._check_swapping_task: Optional[ScheduledTask] = None

    # ========== LIFECYCLE ==========

    def create_wrapped_adapter(self, adapter: DraggableItemAdapter) -> DraggableItemWrapper:
        """
        Wrap the application's adapter; the host must install the returned wrapper.

        Raises:
            DragStateError: If this controller already wrapped an adapter
        """
        if self._wrapper is not None:
            raise DragStateError("already have a wrapped adapter")
        self._wrapper = DraggableItemWrapper(adapter)
        return self._wrapper

    def is_released(self) -> bool:
        return self._released

    def attach(self, host: ListHost) -> None:
        """
        Attach to a list host whose adapter is this controller's wrapper.

        Raises:
            ValueError: If host is None
            DragStateError: If released, already attached, or the adapter is not the wrapper
        """
        if host is None:
            raise ValueError("host cannot be None")
        if self._released:
            raise DragStateError("Accessing released object")
        if self._host is not None:
            raise DragStateError("List host instance has already been set")
        if self._wrapper is None or host.get_adapter() is not self._wrapper:
            raise DragStateError("adapter is not set properly")

        if self.scheduler is None:
            from pyqt_dragsort.qt.scheduler import QtScheduler
            self.scheduler = QtScheduler(self._config.frame_ms)

        self._host = host
        host_slop = host.scaled_touch_slop()
        if host_slop is not None:
            self._touch_slop = host_slop
            self._scroll_touch_slop = int(host_slop * self._config.scroll_touch_slop_multiply + 0.5)

        self._executor = ReorderExecutor(host, self._wrapper, self._config.near_field_distance)
        self._auto_scroll = AutoScrollController(
            host,
            scroll_threshold=self._config.scroll_threshold,
            scroll_amount_coeff=self._config.scroll_amount_coeff,
            display_density=host.display_density() * self._config.display_density,
        )
        logger.debug(f"[DragSession] Attached to {type(host).__name__}")

    def detach(self) -> None:
        """Cancel any drag and drop the host. Safe to call when already detached."""
        if self._host is None:
            return
        self.cancel_drag(immediate=True)
        self._cancel_long_press_detection()
        self._press = None
        self._host = None
        self._executor = None
        self._auto_scroll = None

    def release(self) -> None:
        """Detach and release every held reference. Safe to call twice."""
        if self._released:
            return
        self.detach()
        self._scroll_process.release()
        self._listener = None
        self._swap_target_interpolator = None
        self._released = True

    def is_dragging(self) -> bool:
        """True while a session is alive and no deferred cancel is pending."""
        return self._session is not None and self._deferred_cancel_task is None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def wrapped_adapter(self) -> Optional[DraggableItemWrapper]:
        return self._wrapper

    # ========== CONFIGURATION ==========

    def set_on_item_drag_event_listener(self, listener: Optional[OnItemDragEventListener]) -> None:
        self._listener = listener

    def get_on_item_drag_event_listener(self) -> Optional[OnItemDragEventListener]:
        return self._listener

    def is_initiate_on_long_press_enabled(self) -> bool:
        return self._initiate_on_long_press

    def set_initiate_on_long_press(self, enabled: bool) -> None:
        self._initiate_on_long_press = enabled

    def is_initiate_on_move_enabled(self) -> bool:
        return self._initiate_on_move

    def set_initiate_on_move(self, enabled: bool) -> None:
        self._initiate_on_move = enabled

    def get_item_settle_back_into_place_animation_duration(self) -> int:
        return self._settle_duration_ms

    def set_item_settle_back_into_place_animation_duration(self, duration_ms: int) -> None:
        self._settle_duration_ms = duration_ms

    def get_item_settle_back_into_place_animation_interpolator(self) -> Optional[Interpolator]:
        return self._settle_interpolator

    def set_item_settle_back_into_place_animation_interpolator(self, interpolator: Optional[Interpolator]) -> None:
        self._settle_interpolator = interpolator

    def get_swap_target_translation_interpolator(self) -> Optional[Interpolator]:
        return self._swap_target_interpolator

    def set_swap_target_translation_interpolator(self, interpolator: Optional[Interpolator]) -> None:
        self._swap_target_interpolator = interpolator
        if self._swap_decorator is not None:
            self._swap_decorator.set_interpolator(interpolator)

    # ========== INPUT ==========

    def handle_touch_event(self, event: TouchEvent) -> bool:
        """
        Dispatch one input event.

        Returns:
            True if the event was consumed by dragging
        """
        if event.action is TouchAction.DOWN:
            if not self.is_dragging():
                self.on_press(event)
            return False
        if event.action is TouchAction.MOVE:
            return self.on_move(event)
        return self.on_release(event, cancelled=event.action is TouchAction.CANCEL)

    def on_press(self, event: TouchEvent) -> bool:
        """Record the pressed item if it is drag-eligible."""
        host = self._require_host()
        if self.is_dragging():
            return False

        item = host.find_item_under(event.x, event.y)
        if not self._check_touched_item_state(item):
            return False

        self._press = PressState(initial_touch=Point(event.x, event.y), item_id=item.item_id)
        if self._initiate_on_long_press:
            self._start_long_press_detection(event)
        return True

    def on_move(self, event: TouchEvent) -> bool:
        if self._session is not None:
            if self._deferred_cancel_task is not None:
                return False
            self._handle_move_while_dragging(event)
            return True
        if self._initiate_on_move:
            return self._check_condition_and_start_dragging(event, check_touch_slop=True)
        return False

    def on_release(self, event: Optional[TouchEvent] = None, cancelled: bool = False) -> bool:
        """Finish the drag; success unless cancelled."""
        self._cancel_long_press_detection()
        self._press = None

        if self.is_dragging():
            logger.debug(f"[DragSession] dragging finished --- success = {not cancelled}")
            self._finish_dragging(success=not cancelled)
            return True
        return False

    def on_request_disallow_intercept(self, disallow: bool) -> None:
        """A parent claimed the gesture."""
        if disallow:
            self.cancel_drag(immediate=True)

    def cancel_drag(self, immediate: bool = False) -> None:
        """
        Cancel dragging.

        A non-immediate cancel is posted so an in-flight event dispatch
        completes first; a second cancel before it runs is a no-op.
        """
        if immediate:
            self._finish_dragging(success=False)
            return
        if self.is_dragging() and self._deferred_cancel_task is None:
            self._deferred_cancel_task = self.scheduler.post(self._run_deferred_cancel)

    def _run_deferred_cancel(self) -> None:
        self._deferred_cancel_task = None
        self._finish_dragging(success=False)

    # ========== RECYCLING ==========

    def on_dragging_item_recycled(self) -> None:
        """The host recycled the dragged item's view."""
        if self._dragging_decorator is not None:
            self._dragging_decorator.invalidate_dragging_item()

    def on_new_dragging_item_bound(self, item_id) -> None:
        """The host laid out the dragged identity again."""
        if self._session is None or item_id != self._session.dragged_item_id:
            return
        self._dragging_decorator.set_dragging_item(item_id)

    # ========== LONG PRESS ==========

    def _start_long_press_detection(self, event: TouchEvent) -> None:
        self._cancel_long_press_detection()
        self._press.down_event = event
        delay = max(0, int(event.down_time + self._config.long_press_timeout_ms - event.event_time))
        self._long_press_task = self.scheduler.post_delayed(self._handle_on_long_press, delay)
        self._state = DragState.ARMED

    def _cancel_long_press_detection(self) -> None:
        if self._long_press_task is not None:
            self._long_press_task.cancel()
            self._long_press_task = None
        if self._press is not None:
            self._press.down_event = None
        if self._state is DragState.ARMED:
            self._state = DragState.IDLE

    def _handle_on_long_press(self) -> None:
        self._long_press_task = None
        press = self._press
        if press is None or press.down_event is None:
            return
        down_event = press.down_event
        press.down_event = None
        if self._state is DragState.ARMED:
            self._state = DragState.IDLE
        if self._initiate_on_long_press and self._host is not None:
            self._check_condition_and_start_dragging(down_event, check_touch_slop=False)

    # ========== DRAG START ==========

    def _check_touched_item_state(self, item: Optional[ItemPosition]) -> bool:
        if item is None or not item.draggable:
            return False
        if not 0 <= item.position < self._wrapper.get_item_count():
            return False
        return item.item_id == self._wrapper.get_item_id(item.position)

    def _check_condition_and_start_dragging(self, event: TouchEvent, check_touch_slop: bool) -> bool:
        if self._session is not None or self._press is None:
            return False
        host = self._require_host()
        press = self._press

        if check_touch_slop:
            moved = max(abs(event.x - press.initial_touch.x), abs(event.y - press.initial_touch.y))
            if not moved > self._touch_slop:
                return False

        item = host.find_item_under(event.x, event.y)
        if not self._check_touched_item_state(item) or item.item_id != press.item_id:
            logger.debug("[DragSession] Touched item changed since press, resetting gesture")
            self._cancel_long_press_detection()
            self._press = None
            return False

        view_x = event.x - (item.left + item.translation.x)
        view_y = event.y - (item.top + item.translation.y)
        if not self._wrapper.can_start_drag(item.position, view_x, view_y):
            return False

        item_count = self._wrapper.get_item_count()
        draggable_range = self._wrapper.get_item_draggable_range(item.position)
        if draggable_range is None:
            draggable_range = DraggableRange.full(item_count)
        draggable_range.verify(item.position, item_count)

        self._start_dragging(event, item, draggable_range)
        return True

    def _start_dragging(self, event: TouchEvent, item: ItemPosition, draggable_range: DraggableRange) -> None:
        if self._session is not None:
            raise DragStateError("A drag session is already active")
        host = self._host
        host.end_animations()
        self._cancel_long_press_detection()

        touch = Point(event.x, event.y)
        self._session = DragSession(
            dragged_item_id=item.item_id,
            draggable_range=draggable_range,
            grab_offset=Point(touch.x - item.left, touch.y - item.top),
            initial_touch=touch,
            initial_position=item.position,
            item_width=item.width,
            item_height=item.height,
            item_margins=item.margins,
        )
        self._state = DragState.DRAGGING

        self._orig_overscroll_mode = host.get_overscroll_mode()
        host.set_overscroll_mode(OverScrollMode.NEVER)
        host.request_disallow_intercept(True)

        self._scroll_process.start()

        self._wrapper.on_drag_item_started(item.item_id, item.position, draggable_range)
        host.invalidate()

        self._dragging_decorator = DraggingItemDecorator(host, item.item_id, draggable_range)
        self._dragging_decorator.start(item, touch, self._session.grab_offset)

        self._swap_decorator = SwapTargetDecorator(
            host, item.item_id, draggable_range, self._resolver, self._wrapper.get_item_count,
            smoothing=self._config.phase_smoothing,
            snap_epsilon=self._config.phase_snap_epsilon,
            interpolator=self._swap_target_interpolator,
        )
        self._swap_decorator.start()
        self._swap_decorator.update(self._dragging_decorator.translation)

        logger.info(f"[DragSession] dragging started at position {item.position} (range = {draggable_range})")
        if self._listener is not None:
            self._listener.on_dragging_started(self._wrapper.dragging_item_initial_position)

    # ========== WHILE DRAGGING ==========

    def _handle_move_while_dragging(self, event: TouchEvent) -> None:
        session = self._session
        session.update_touch(Point(event.x, event.y))
        session.update_direction_mask(self._scroll_touch_slop)

        if not self._dragged_item_in_sync():
            logger.warning("[DragSession] Dragged item no longer matches the collection, cancelling drag")
            self.cancel_drag(immediate=True)
            return

        self._dragging_decorator.update(session.current_touch)
        self._swap_decorator.update(self._dragging_decorator.translation)
        self._check_item_swapping()

    def _dragged_item_in_sync(self) -> bool:
        session = self._session
        position = session.current_position
        if not 0 <= position < self._wrapper.get_item_count():
            return False
        return self._wrapper.get_item_id(position) == session.dragged_item_id

    def _check_item_swapping(self) -> None:
        self._check_swapping_task = None
        session = self._session
        if session is None or self._host is None:
            return
        dragged = find_visible_item(self._host, session.dragged_item_id)
        if dragged is None:
            return
        swap_chain = self._resolver.find_swap_targets(
            dragged, session.overlay_translation, self._wrapper.get_item_count(), session.draggable_range)
        if swap_chain:
            self._executor.swap_items(session, swap_chain)

    def handle_scroll_on_dragging(self) -> None:
        """
        One frame while dragging; called by the frame loop.

        Scrolls at the edges, then advances the displaced items' phase so
        they keep converging while the pointer holds still.
        """
        session = self._session
        if session is None or self._host is None or self._deferred_cancel_task is not None:
            return
        self._auto_scroll.tick(session, self._dragging_decorator)
        self._swap_decorator.update(self._dragging_decorator.translation)
        if self._check_swapping_task is None:
            self._check_swapping_task = self.scheduler.post_on_animation(self._check_item_swapping)

    # ========== FINISH ==========

    def _finish_dragging(self, success: bool) -> None:
        if self._deferred_cancel_task is not None:
            self._deferred_cancel_task.cancel()
            self._deferred_cancel_task = None
        if self._check_swapping_task is not None:
            self._check_swapping_task.cancel()
            self._check_swapping_task = None

        session = self._session
        if session is None:
            return
        host = self._host
        self._state = DragState.FINISHING

        if self._orig_overscroll_mode is not None:
            host.set_overscroll_mode(self._orig_overscroll_mode)
            self._orig_overscroll_mode = None

        if not success:
            self._executor.revert(session)

        self._dragging_decorator.finish(True, self._settle_duration_ms, self._settle_interpolator)
        self._swap_decorator.finish(True, self._settle_duration_ms, self._settle_interpolator)

        self._scroll_process.stop()
        host.request_disallow_intercept(False)

        from_position = self._wrapper.dragging_item_initial_position
        to_position = self._wrapper.dragging_item_current_position
        self._wrapper.on_drag_item_finished()
        host.invalidate()

        self._session = None
        self._dragging_decorator = None
        self._swap_decorator = None
        self._state = DragState.IDLE

        logger.info(f"[DragSession] dragging finished (from: {from_position}, to: {to_position}, success: {success})")
        if self._listener is not None:
            self._listener.on_dragging_finished(from_position, to_position, success)

    def _require_host(self) -> ListHost:
        if self._released:
            raise DragStateError("Accessing released object")
        if self._host is None:
            raise DragStateError("No list host attached")
        return self._host
