"""Cancellable task scheduling contract.

Everything the drag controller defers runs on the host's UI thread through
a Scheduler. Each scheduled callback is wrapped in a ScheduledTask so a
callback that fires after cancel() is a guaranteed no-op.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


class ScheduledTask:
    """Handle for a deferred callback. Cancelling it turns the callback into a no-op."""

    def __init__(self, callback: Callable[[], None]):
        self._callback: Optional[Callable[[], None]] = callback
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._callback is None and not self._done

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def cancel(self) -> None:
        self._callback = None

    def run(self) -> None:
        """Invoke the callback once, unless cancelled."""
        callback = self._callback
        if callback is None:
            return
        self._callback = None
        self._done = True
        callback()


class Scheduler(ABC):
    """ABC for the host's event-loop primitives."""

    @abstractmethod
    def post(self, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback on the next idle turn of the event queue."""
        ...

    @abstractmethod
    def post_delayed(self, callback: Callable[[], None], delay_ms: int) -> ScheduledTask:
        """Run callback after delay_ms."""
        ...

    @abstractmethod
    def post_on_animation(self, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback once before the next repaint."""
        ...
