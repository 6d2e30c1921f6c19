"""Tests for edge auto-scroll."""

import gc

import pytest

from pyqt_dragsort.core import (
    AutoScrollController,
    DraggableRange,
    DraggingItemDecorator,
    DragSession,
    Point,
    ScrollDirection,
    ScrollOnDraggingProcess,
)


@pytest.mark.parametrize("touch_y, expected", [
    (500, 0),
    (600, 0),
    (900, 17),
    (100, -17),
    (1000, 25),
    (0, -25),
])
def test_compute_scroll_amount(grid_host, touch_y, expected):
    controller = AutoScrollController(grid_host())
    assert controller.compute_scroll_amount(touch_y, 1000) == expected


def test_scroll_amount_scales_with_density(grid_host):
    controller = AutoScrollController(grid_host(), display_density=2.0)
    assert controller.compute_scroll_amount(1000, 1000) == 50


def test_invalid_scroll_threshold(grid_host):
    with pytest.raises(ValueError):
        AutoScrollController(grid_host(), scroll_threshold=0.5)


def test_direction_mask_gates_amount():
    assert AutoScrollController.apply_direction_mask(17, ScrollDirection.NONE) == 0
    assert AutoScrollController.apply_direction_mask(17, ScrollDirection.BOTTOM) == 17
    assert AutoScrollController.apply_direction_mask(-17, ScrollDirection.BOTTOM) == 0
    assert AutoScrollController.apply_direction_mask(-17, ScrollDirection.TOP | ScrollDirection.BOTTOM) == -17


# ========== DIRECTION MASK ==========

def _session(initial=Point(150, 62), draggable_range=None, item_id="item-1"):
    return DragSession(
        dragged_item_id=item_id,
        draggable_range=draggable_range or DraggableRange(0, 39),
        grab_offset=Point(50, 50),
        initial_touch=initial,
        initial_position=1,
        item_width=100,
        item_height=100,
    )


def test_direction_mask_starts_empty():
    session = _session()
    assert session.scroll_direction_mask == ScrollDirection.NONE

    session.update_touch(Point(150, 70))
    assert session.update_direction_mask(12) == ScrollDirection.NONE


def test_direction_mask_hysteresis():
    """Backing off from the bottom edge by less than the slop does not permit scrolling up."""
    session = _session()

    session.update_touch(Point(150, 290))
    session.update_direction_mask(12)
    session.update_touch(Point(150, 282))
    session.update_direction_mask(12)
    assert session.scroll_direction_mask == ScrollDirection.BOTTOM

    session.update_touch(Point(150, 250))
    session.update_direction_mask(12)
    assert session.scroll_direction_mask == ScrollDirection.TOP | ScrollDirection.BOTTOM


def test_direction_mask_only_accumulates():
    session = _session()
    session.update_touch(Point(150, 20))
    session.update_direction_mask(12)
    session.update_touch(Point(150, 62))
    session.update_direction_mask(12)

    assert session.scroll_direction_mask == ScrollDirection.TOP | ScrollDirection.BOTTOM


# ========== TICK ==========

def _tick_setup(grid_host, draggable_range, touch):
    host = grid_host(item_count=40)
    host.scroll_y = 100.0
    item = host.find_item_for_position(5)
    session = _session(initial=Point(150, 50), draggable_range=draggable_range, item_id=item.item_id)
    session.update_touch(touch)
    session.update_direction_mask(12)
    decorator = DraggingItemDecorator(host, item.item_id, draggable_range)
    decorator.start(item, touch, session.grab_offset)
    return host, session, decorator, AutoScrollController(host)


def test_tick_stops_at_hard_bottom_limit(grid_host):
    host, session, decorator, controller = _tick_setup(grid_host, DraggableRange(0, 11), Point(150, 290))

    assert controller.tick(session, decorator) == 0
    assert host.scroll_calls == []
    assert not session.is_scrolling


def test_tick_soft_limit_scrolls_without_scrolling_flag(grid_host):
    host, session, decorator, controller = _tick_setup(grid_host, DraggableRange(0, 15), Point(150, 290))

    assert controller.tick(session, decorator) == 22
    assert host.scroll_y == 122.0
    assert not session.is_scrolling


def test_tick_scrolls_down_inside_range(grid_host):
    host, session, decorator, controller = _tick_setup(grid_host, DraggableRange(0, 39), Point(150, 290))

    controller.tick(session, decorator)

    assert host.scroll_y == 122.0
    assert session.is_scrolling
    assert decorator.is_scrolling


def test_tick_stops_at_hard_top_limit(grid_host):
    host, session, decorator, controller = _tick_setup(grid_host, DraggableRange(8, 39), Point(150, 10))

    assert controller.tick(session, decorator) == 0
    assert host.scroll_y == 100.0


def test_tick_scrolls_up(grid_host):
    host, session, decorator, controller = _tick_setup(grid_host, DraggableRange(0, 39), Point(150, 10))

    controller.tick(session, decorator)

    assert host.scroll_y == 78.0
    assert session.is_scrolling


def test_tick_needs_permitted_direction(grid_host):
    """Auto-scroll stays off until the pointer has moved past the scroll slop."""
    host = grid_host(item_count=40)
    item = host.find_item_for_position(9)
    session = _session(initial=Point(150, 280), item_id=item.item_id)
    decorator = DraggingItemDecorator(host, item.item_id, session.draggable_range)
    decorator.start(item, session.current_touch, session.grab_offset)

    assert AutoScrollController(host).tick(session, decorator) == 0
    assert host.scroll_calls == []


# ========== FRAME LOOP ==========

class _Owner:
    def __init__(self, scheduler):
        self.scheduler = scheduler
        self.ticks = 0
        self.process = None

    def handle_scroll_on_dragging(self):
        self.ticks += 1


def test_scroll_process_reschedules_each_frame(manual_scheduler):
    owner = _Owner(manual_scheduler)
    process = ScrollOnDraggingProcess(owner)

    process.start()
    process.start()
    assert manual_scheduler.pending_frames == 1

    manual_scheduler.run_frame()
    manual_scheduler.run_frame()
    assert owner.ticks == 2
    assert manual_scheduler.pending_frames == 1

    process.stop()
    manual_scheduler.run_frame()
    assert owner.ticks == 2
    assert not process.started


def test_scroll_process_stop_during_tick(manual_scheduler):
    owner = _Owner(manual_scheduler)
    process = ScrollOnDraggingProcess(owner)
    owner.handle_scroll_on_dragging = process.stop

    process.start()
    manual_scheduler.run_frame()

    assert manual_scheduler.pending_frames == 0
    assert not process.started


def test_scroll_process_does_not_keep_owner_alive(manual_scheduler):
    owner = _Owner(manual_scheduler)
    process = ScrollOnDraggingProcess(owner)
    process.start()

    del owner
    gc.collect()
    manual_scheduler.run_frame()

    assert not process.started
    assert manual_scheduler.pending_frames == 0


def test_released_scroll_process_cannot_restart(manual_scheduler):
    owner = _Owner(manual_scheduler)
    process = ScrollOnDraggingProcess(owner)
    process.release()

    process.start()
    assert not process.started
    assert manual_scheduler.pending_frames == 0
