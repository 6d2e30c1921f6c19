"""
pyqt-dragsort: touch drag-to-reorder for scrollable PyQt6 grids.

Press and hold (or press and move) an item, drag it across the list, let
the grid reflow around it, release to commit or cancel.

Architecture:
- Tier 1 (Protocols): Host ABCs, input events and configuration
- Tier 2 (Core): Headless session state machine, geometry, smoothing, auto-scroll
- Tier 3 (Qt): QTimer scheduling, Qt signals, mouse event filter, easing curves

Key Features:
- Eight-direction target resolution on fixed-column grids
- Midpoint hysteresis so swaps do not oscillate at slot boundaries
- Smoothed neighbour displacement that converges without micro-jitter
- Edge auto-scroll with directional hysteresis and range limits
- Cancel reverts the collection to its pre-drag order
"""

__version__ = "0.1.0"

from pyqt_dragsort.core import DragSessionController, DraggableRange, DragStateFlags
from pyqt_dragsort.protocols import (
    DragSortConfig,
    DraggableItemAdapter,
    ListHost,
    OnItemDragEventListener,
    TouchAction,
    TouchEvent,
)

__all__ = [
    "__version__",
    "DragSessionController",
    "DraggableRange",
    "DragStateFlags",
    "DragSortConfig",
    "DraggableItemAdapter",
    "ListHost",
    "OnItemDragEventListener",
    "TouchAction",
    "TouchEvent",
]
