"""Drag-sort exceptions."""


class DragSortError(Exception):
    """Base class for all drag-sort errors."""


class InvalidDraggableRangeError(DragSortError, ValueError):
    """Raised when a draggable range is inconsistent with the collection."""


class DragStateError(DragSortError, RuntimeError):
    """Raised on programming errors: double wrap/attach, released controller, rebinding."""
