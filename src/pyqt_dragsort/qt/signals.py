"""Qt signal bridge for drag lifecycle events."""

from abc import ABCMeta

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_dragsort.protocols.drag_listener import OnItemDragEventListener

# PyQt metaclass combined with ABCMeta so QObject subclasses can implement ABCs
_QtMetaclass = type(QObject)


class PyQtABCMeta(_QtMetaclass, ABCMeta):
    """Metaclass for QObjects that implement drag-sort ABCs."""
    pass


class DragEventSignals(QObject, OnItemDragEventListener, metaclass=PyQtABCMeta):
    """Listener that re-emits drag lifecycle events as Qt signals.

    Usage:
        signals = DragEventSignals()
        signals.dragging_finished.connect(self._on_reordered)
        controller.set_on_item_drag_event_listener(signals)
    """

    dragging_started = pyqtSignal(int)                 # position
    dragging_finished = pyqtSignal(int, int, bool)     # from_position, to_position, success
    items_reordered = pyqtSignal(int, int)             # from_index, to_index

    def on_dragging_started(self, position: int) -> None:
        self.dragging_started.emit(position)

    def on_dragging_finished(self, from_position: int, to_position: int, success: bool) -> None:
        self.dragging_finished.emit(from_position, to_position, success)
        # Only emit reorder if position actually changed
        if success and from_position != to_position:
            self.items_reordered.emit(from_position, to_position)
