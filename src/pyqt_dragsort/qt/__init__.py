"""
PyQt6 bindings for the drag-sort core.

QTimer-backed scheduling, Qt signals for drag lifecycle events, a mouse
event filter and QEasingCurve interpolators.
"""

from .scheduler import QtScheduler, QtScheduledTask
from .signals import DragEventSignals, PyQtABCMeta
from .event_filter import TouchEventFilter
from .easing import easing_interpolator

__all__ = [
    "QtScheduler",
    "QtScheduledTask",
    "DragEventSignals",
    "PyQtABCMeta",
    "TouchEventFilter",
    "easing_interpolator",
]
