"""Translate Qt mouse events into drag controller touch events."""

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtWidgets import QWidget

from pyqt_dragsort.core.drag_session_controller import DragSessionController
from pyqt_dragsort.protocols.touch_event import TouchAction, TouchEvent

_ACTIONS = {
    QEvent.Type.MouseButtonPress: TouchAction.DOWN,
    QEvent.Type.MouseMove: TouchAction.MOVE,
    QEvent.Type.MouseButtonRelease: TouchAction.UP,
}


class TouchEventFilter(QObject):
    """
    Event filter feeding left-button mouse input to a DragSessionController.

    Install on the list's viewport; coordinates are taken in that widget's
    frame. Events are consumed only while dragging.
    """

    def __init__(self, controller: DragSessionController, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._controller = controller
        self._widget: Optional[QWidget] = None
        self._down_time = 0.0

    def install(self, widget: QWidget) -> None:
        if self._widget is not None:
            self.uninstall()
        self._widget = widget
        widget.installEventFilter(self)

    def uninstall(self) -> None:
        """Remove the filter. Safe to call when not installed."""
        if self._widget is None:
            return
        self._widget.removeEventFilter(self)
        self._widget = None

    def to_touch_event(self, event) -> Optional[TouchEvent]:
        action = _ACTIONS.get(event.type())
        if action is None:
            return None
        if action is not TouchAction.MOVE and event.button() != Qt.MouseButton.LeftButton:
            return None
        if action is TouchAction.MOVE and not (event.buttons() & Qt.MouseButton.LeftButton):
            return None

        timestamp = float(event.timestamp())
        if action is TouchAction.DOWN:
            self._down_time = timestamp
        pos = event.position()
        return TouchEvent(action, pos.x(), pos.y(), down_time=self._down_time, event_time=timestamp)

    def eventFilter(self, obj, event):
        if obj is not self._widget:
            return super().eventFilter(obj, event)

        touch = self.to_touch_event(event)
        if touch is None:
            return super().eventFilter(obj, event)

        return self._controller.handle_touch_event(touch)
