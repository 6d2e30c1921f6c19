"""
Host contracts and configuration.

ABC-based contracts for every collaborator the drag controller talks to,
eliminating duck typing in favor of explicit, fail-loud inheritance.
"""

from .drag_config import DragSortConfig, Interpolator, set_dragsort_config, get_dragsort_config
from .item_adapter import DraggableItemAdapter
from .list_host import ListHost, OverScrollMode
from .drag_listener import OnItemDragEventListener
from .scheduler import Scheduler, ScheduledTask
from .touch_event import TouchAction, TouchEvent

__all__ = [
    "DragSortConfig",
    "Interpolator",
    "set_dragsort_config",
    "get_dragsort_config",
    "DraggableItemAdapter",
    "ListHost",
    "OverScrollMode",
    "OnItemDragEventListener",
    "Scheduler",
    "ScheduledTask",
    "TouchAction",
    "TouchEvent",
]
