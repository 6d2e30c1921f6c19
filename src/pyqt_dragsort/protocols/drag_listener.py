"""Drag lifecycle listener contract."""

from abc import ABC, abstractmethod


class OnItemDragEventListener(ABC):
    """ABC for receiving drag lifecycle events."""

    @abstractmethod
    def on_dragging_started(self, position: int) -> None:
        """
        Called when dragging starts.

        Args:
            position: Adapter position of the dragged item
        """
        ...

    @abstractmethod
    def on_dragging_finished(self, from_position: int, to_position: int, success: bool) -> None:
        """
        Called when dragging finishes.

        Args:
            from_position: Position of the item when dragging started
            to_position: Position of the item when dragging finished
            success: False when the drag was cancelled
        """
        ...
