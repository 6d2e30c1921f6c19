"""Per-item drag state flags consumed by rendering code."""

from enum import IntFlag


class DragStateFlags(IntFlag):
    NONE = 0
    DRAGGING = 1 << 0        # a drag is in progress somewhere in the list
    IS_ACTIVE = 1 << 1       # this item is the one being dragged
    IS_IN_RANGE = 1 << 2     # this item lies inside the draggable range
    IS_UPDATED = 1 << 31     # flags changed since the renderer last applied them
