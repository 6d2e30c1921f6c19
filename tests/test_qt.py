"""Tests for the PyQt6 bindings."""

import pytest
from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtTest import QTest


def _mouse_event(event_type, x, y, button=Qt.MouseButton.LeftButton, buttons=Qt.MouseButton.LeftButton):
    point = QPointF(x, y)
    return QMouseEvent(event_type, point, point, button, buttons, Qt.KeyboardModifier.NoModifier)


def test_qt_scheduler_post(qapp):
    """Test QtScheduler runs posted callbacks from the event loop."""
    from pyqt_dragsort.qt import QtScheduler

    scheduler = QtScheduler(frame_ms=5)
    called = []
    scheduler.post(lambda: called.append("post"))
    scheduler.post_delayed(lambda: called.append("delayed"), 10)
    scheduler.post_on_animation(lambda: called.append("frame"))
    assert called == []
    assert scheduler.pending_count == 3

    QTest.qWait(100)

    assert sorted(called) == ["delayed", "frame", "post"]
    assert scheduler.pending_count == 0


def test_qt_scheduler_cancel(qapp):
    from pyqt_dragsort.qt import QtScheduler

    scheduler = QtScheduler()
    called = []
    task = scheduler.post_delayed(lambda: called.append(1), 10)
    task.cancel()
    task.cancel()

    QTest.qWait(50)

    assert called == []
    assert task.cancelled
    assert scheduler.pending_count == 0


def test_qt_scheduler_default_frame(qapp):
    from pyqt_dragsort.qt import QtScheduler

    assert QtScheduler().frame_ms == 16


def test_drag_event_signals(qapp):
    """Test DragEventSignals re-emits listener callbacks."""
    from pyqt_dragsort.protocols import OnItemDragEventListener
    from pyqt_dragsort.qt import DragEventSignals

    signals = DragEventSignals()
    assert isinstance(signals, OnItemDragEventListener)

    started, finished, reordered = [], [], []
    signals.dragging_started.connect(started.append)
    signals.dragging_finished.connect(lambda f, t, ok: finished.append((f, t, ok)))
    signals.items_reordered.connect(lambda f, t: reordered.append((f, t)))

    signals.on_dragging_started(2)
    signals.on_dragging_finished(2, 5, True)
    signals.on_dragging_finished(2, 2, True)
    signals.on_dragging_finished(2, 5, False)

    assert started == [2]
    assert finished == [(2, 5, True), (2, 2, True), (2, 5, False)]
    assert reordered == [(2, 5)]


def test_drag_event_signals_with_controller(qapp, drag_grid):
    from pyqt_dragsort.qt import DragEventSignals

    grid = drag_grid()
    signals = DragEventSignals()
    reordered = []
    signals.items_reordered.connect(lambda f, t: reordered.append((f, t)))
    grid.controller.set_on_item_drag_event_listener(signals)

    grid.start_drag(150, 150)
    grid.move(222, 150)
    grid.release(222, 150)

    assert reordered == [(5, 6)]


def test_easing_interpolator_matches_decelerate(qapp):
    from PyQt6.QtCore import QEasingCurve

    from pyqt_dragsort.core import DecelerateInterpolator
    from pyqt_dragsort.qt import easing_interpolator

    out_quad = easing_interpolator(QEasingCurve.Type.OutQuad)
    decelerate = DecelerateInterpolator()
    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        assert out_quad(t) == pytest.approx(decelerate(t))


def test_touch_event_filter_translates_mouse_events(qapp, drag_grid):
    from pyqt_dragsort.protocols import TouchAction
    from pyqt_dragsort.qt import TouchEventFilter

    event_filter = TouchEventFilter(drag_grid().controller)

    press = event_filter.to_touch_event(_mouse_event(QEvent.Type.MouseButtonPress, 10, 20))
    move = event_filter.to_touch_event(_mouse_event(QEvent.Type.MouseMove, 15, 25, button=Qt.MouseButton.NoButton))
    release = event_filter.to_touch_event(_mouse_event(QEvent.Type.MouseButtonRelease, 15, 25,
                                                       buttons=Qt.MouseButton.NoButton))

    assert (press.action, press.x, press.y) == (TouchAction.DOWN, 10.0, 20.0)
    assert move.action is TouchAction.MOVE
    assert release.action is TouchAction.UP


def test_touch_event_filter_ignores_other_buttons(qapp, drag_grid):
    from pyqt_dragsort.qt import TouchEventFilter

    event_filter = TouchEventFilter(drag_grid().controller)

    right_press = _mouse_event(QEvent.Type.MouseButtonPress, 10, 20, button=Qt.MouseButton.RightButton,
                               buttons=Qt.MouseButton.RightButton)
    hover = _mouse_event(QEvent.Type.MouseMove, 10, 20, button=Qt.MouseButton.NoButton,
                         buttons=Qt.MouseButton.NoButton)
    right_release = _mouse_event(QEvent.Type.MouseButtonRelease, 10, 20, button=Qt.MouseButton.RightButton,
                                 buttons=Qt.MouseButton.NoButton)

    assert event_filter.to_touch_event(right_press) is None
    assert event_filter.to_touch_event(hover) is None
    assert event_filter.to_touch_event(right_release) is None


def test_touch_event_filter_drives_controller(qapp, drag_grid):
    """Mouse input delivered to the widget reorders the grid."""
    from PyQt6.QtWidgets import QApplication, QWidget

    from pyqt_dragsort.qt import TouchEventFilter

    grid = drag_grid()
    widget = QWidget()
    event_filter = TouchEventFilter(grid.controller)
    event_filter.install(widget)

    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseButtonPress, 150, 150))
    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseMove, 162, 150, button=Qt.MouseButton.NoButton))
    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseMove, 222, 150, button=Qt.MouseButton.NoButton))
    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseButtonRelease, 222, 150,
                                                buttons=Qt.MouseButton.NoButton))

    assert grid.items[6] == "item-5"
    assert grid.listener.finished == [(5, 6, True)]

    event_filter.uninstall()
    event_filter.uninstall()


def test_right_button_release_keeps_drag_alive(qapp, drag_grid):
    """Only releasing the left button ends a drag."""
    from PyQt6.QtWidgets import QApplication, QWidget

    from pyqt_dragsort.qt import TouchEventFilter

    grid = drag_grid()
    widget = QWidget()
    event_filter = TouchEventFilter(grid.controller)
    event_filter.install(widget)

    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseButtonPress, 150, 150))
    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseMove, 162, 150, button=Qt.MouseButton.NoButton))
    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseButtonRelease, 162, 150,
                                                button=Qt.MouseButton.RightButton))

    assert grid.controller.is_dragging()
    assert grid.listener.finished == []

    QApplication.sendEvent(widget, _mouse_event(QEvent.Type.MouseButtonRelease, 162, 150,
                                                buttons=Qt.MouseButton.NoButton))

    assert not grid.controller.is_dragging()
    event_filter.uninstall()
