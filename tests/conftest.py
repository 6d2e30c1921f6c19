"""pytest configuration and fixtures for pyqt-dragsort tests."""

import math
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from pyqt_dragsort.core import DragSessionController, ItemPosition, Margins, Point
from pyqt_dragsort.protocols import (
    DragSortConfig,
    DraggableItemAdapter,
    ListHost,
    OnItemDragEventListener,
    OverScrollMode,
    ScheduledTask,
    Scheduler,
    TouchAction,
    TouchEvent,
)


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


class ListAdapter(DraggableItemAdapter):
    """In-memory adapter over a list of item ids."""

    def __init__(self, items, draggable_range=None, can_drag=None):
        self.items = list(items)
        self.draggable_range = draggable_range
        self.can_drag = can_drag
        self.moves = []

    def get_item_count(self):
        return len(self.items)

    def get_item_id(self, position):
        return self.items[position]

    def on_move_item(self, from_position, to_position):
        self.items.insert(to_position, self.items.pop(from_position))
        self.moves.append((from_position, to_position))

    def on_check_can_start_drag(self, position, x, y):
        if self.can_drag is None:
            return True
        return self.can_drag(position, x, y)

    def on_get_item_draggable_range(self, position):
        return self.draggable_range


class FakeGridHost(ListHost):
    """Fixed-column grid of equally sized cells, scrolled vertically."""

    def __init__(self, adapter, columns=4, cell_width=100, cell_height=100, viewport_height=300,
                 touch_slop=None):
        self._adapter = adapter
        self.columns = columns
        self.cell_width = cell_width
        self.cell_height = cell_height
        self._width = columns * cell_width
        self._height = viewport_height
        self._touch_slop = touch_slop
        self.scroll_y = 0.0
        self.translations = {}
        self.settled = []
        self.scroll_calls = []
        self.non_draggable = set()
        self.overscroll_mode = OverScrollMode.ALWAYS
        self.disallow_intercept = []
        self.invalidations = 0

    def get_adapter(self):
        return self._adapter

    def width(self):
        return self._width

    def height(self):
        return self._height

    def padding(self):
        return Margins()

    def scaled_touch_slop(self):
        return self._touch_slop

    def _item(self, position):
        row, column = divmod(position, self.columns)
        item_id = self._adapter.get_item_id(position)
        dx, dy = self.translations.get(item_id, (0.0, 0.0))
        return ItemPosition(
            position=position,
            item_id=item_id,
            left=column * self.cell_width,
            top=row * self.cell_height - self.scroll_y,
            width=self.cell_width,
            height=self.cell_height,
            translation=Point(dx, dy),
            draggable=item_id not in self.non_draggable,
        )

    def _is_visible(self, item):
        return item.bottom > 0 and item.top < self._height

    def visible_items(self):
        items = (self._item(p) for p in range(self._adapter.get_item_count()))
        return [item for item in items if self._is_visible(item)]

    def find_item_under(self, x, y):
        for item in self.visible_items():
            if item.contains(x, y):
                return item
        return None

    def find_item_for_position(self, position):
        if not 0 <= position < self._adapter.get_item_count():
            return None
        item = self._item(position)
        return item if self._is_visible(item) else None

    def first_completely_visible_position(self):
        complete = [i.position for i in self.visible_items() if i.top >= 0 and i.bottom <= self._height]
        return min(complete) if complete else None

    def last_completely_visible_position(self):
        complete = [i.position for i in self.visible_items() if i.top >= 0 and i.bottom <= self._height]
        return max(complete) if complete else None

    def scroll_by(self, dx, dy):
        self.scroll_calls.append(dy)
        rows = math.ceil(self._adapter.get_item_count() / self.columns)
        max_scroll = max(0.0, rows * self.cell_height - self._height)
        old = self.scroll_y
        self.scroll_y = min(max(old + dy, 0.0), max_scroll)
        return self.scroll_y - old

    def set_item_translation(self, item_id, dx, dy):
        self.translations[item_id] = (dx, dy)

    def animate_item_to_rest(self, item_id, duration_ms, interpolator):
        self.settled.append((item_id, duration_ms))
        self.translations.pop(item_id, None)

    def invalidate(self):
        self.invalidations += 1

    def get_overscroll_mode(self):
        return self.overscroll_mode

    def set_overscroll_mode(self, mode):
        self.overscroll_mode = mode

    def request_disallow_intercept(self, disallow):
        self.disallow_intercept.append(disallow)


class ManualScheduler(Scheduler):
    """Scheduler driven explicitly by tests."""

    def __init__(self):
        self.now = 0
        self.posted = []
        self.delayed = []
        self.frames = []

    def post(self, callback):
        task = ScheduledTask(callback)
        self.posted.append(task)
        return task

    def post_delayed(self, callback, delay_ms):
        task = ScheduledTask(callback)
        self.delayed.append((self.now + delay_ms, task))
        return task

    def post_on_animation(self, callback):
        task = ScheduledTask(callback)
        self.frames.append(task)
        return task

    @property
    def pending_frames(self):
        return sum(1 for task in self.frames if task.pending)

    def run_posted(self):
        tasks, self.posted = self.posted, []
        for task in tasks:
            task.run()

    def advance(self, ms):
        self.now += ms
        due = [task for when, task in self.delayed if when <= self.now]
        self.delayed = [(when, task) for when, task in self.delayed if when > self.now]
        for task in due:
            task.run()

    def run_frame(self):
        tasks, self.frames = self.frames, []
        for task in tasks:
            task.run()


class RecordingListener(OnItemDragEventListener):
    def __init__(self):
        self.started = []
        self.finished = []

    def on_dragging_started(self, position):
        self.started.append(position)

    def on_dragging_finished(self, from_position, to_position, success):
        self.finished.append((from_position, to_position, success))


class DragGrid:
    """Controller wired to a fake grid, with input helpers."""

    def __init__(self, item_count=12, columns=4, viewport_height=300, draggable_range=None, **config):
        config.setdefault("frame_ms", 16)
        config.setdefault("columns_per_row", columns)
        self.config = DragSortConfig(**config)
        self.scheduler = ManualScheduler()
        self.listener = RecordingListener()
        self.controller = DragSessionController(self.config, scheduler=self.scheduler)
        self.adapter = ListAdapter([f"item-{i}" for i in range(item_count)], draggable_range)
        self.wrapper = self.controller.create_wrapped_adapter(self.adapter)
        self.host = FakeGridHost(self.wrapper, columns=columns, viewport_height=viewport_height)
        self.controller.attach(self.host)
        self.controller.set_on_item_drag_event_listener(self.listener)
        self.time = 0.0

    @property
    def items(self):
        return self.adapter.items

    def press(self, x, y):
        self.time = float(self.scheduler.now)
        return self.controller.handle_touch_event(
            TouchEvent(TouchAction.DOWN, x, y, down_time=self.time, event_time=self.time))

    def move(self, x, y):
        return self.controller.handle_touch_event(
            TouchEvent(TouchAction.MOVE, x, y, down_time=self.time, event_time=float(self.scheduler.now)))

    def release(self, x, y, cancelled=False):
        action = TouchAction.CANCEL if cancelled else TouchAction.UP
        return self.controller.handle_touch_event(
            TouchEvent(action, x, y, down_time=self.time, event_time=float(self.scheduler.now)))

    def start_drag(self, x, y, dx=12, dy=0):
        """Press at (x, y) and move past the touch slop."""
        self.press(x, y)
        self.move(x + dx, y + dy)
        assert self.controller.is_dragging()
        return self.controller.session


@pytest.fixture
def drag_grid():
    """Factory for controllers attached to a fake grid host."""
    def factory(**kwargs):
        return DragGrid(**kwargs)
    return factory


@pytest.fixture
def grid_host():
    """Fake 4-column grid host over a plain adapter (no controller)."""
    def factory(item_count=12, columns=4, viewport_height=300):
        adapter = ListAdapter([f"item-{i}" for i in range(item_count)])
        return FakeGridHost(adapter, columns=columns, viewport_height=viewport_height)
    return factory


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()
