"""
Drag-sort interaction core.

Headless components driving touch reordering of a scrollable grid:
direction resolution, smoothed displacement of neighbours, edge
auto-scroll, reorder commits and the session state machine that ties
them together. Hosts plug in through the ABCs in pyqt_dragsort.protocols.
"""

from .exceptions import DragSortError, InvalidDraggableRangeError, DragStateError
from .geometry import (
    NO_POSITION,
    Point,
    Margins,
    ItemPosition,
    DraggableRange,
    Octant,
)
from .geometry_resolver import GeometryResolver, classify_octant, build_swap_chain
from .session import DragSession, DragState, ScrollDirection
from .drag_state_flags import DragStateFlags
from .interpolators import BasicSwapTargetTranslationInterpolator, DecelerateInterpolator, smooth_phase
from .position_decorator import DraggingItemDecorator, SwapTargetDecorator
from .auto_scroll import AutoScrollController, ScrollOnDraggingProcess
from .reorder_executor import ReorderExecutor
from .wrapper_adapter import DraggableItemWrapper
from .drag_session_controller import DragSessionController

__all__ = [
    "DragSortError",
    "InvalidDraggableRangeError",
    "DragStateError",
    "NO_POSITION",
    "Point",
    "Margins",
    "ItemPosition",
    "DraggableRange",
    "Octant",
    "GeometryResolver",
    "classify_octant",
    "build_swap_chain",
    "DragSession",
    "DragState",
    "ScrollDirection",
    "DragStateFlags",
    "BasicSwapTargetTranslationInterpolator",
    "DecelerateInterpolator",
    "smooth_phase",
    "DraggingItemDecorator",
    "SwapTargetDecorator",
    "AutoScrollController",
    "ScrollOnDraggingProcess",
    "ReorderExecutor",
    "DraggableItemWrapper",
    "DragSessionController",
]
