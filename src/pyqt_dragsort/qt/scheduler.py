"""QTimer-backed scheduler for the drag controller."""

import logging
from typing import Callable, Optional, Set

from PyQt6.QtCore import QObject, QTimer, Qt

from pyqt_dragsort.protocols.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_FRAME_MS = 16


class QtScheduledTask(ScheduledTask):
    """ScheduledTask that owns its single-shot QTimer."""

    def __init__(self, callback: Callable[[], None], delay_ms: int,
                 timer_type: Qt.TimerType = Qt.TimerType.CoarseTimer,
                 parent: Optional[QObject] = None,
                 on_done: Optional[Callable[["QtScheduledTask"], None]] = None):
        super().__init__(callback)
        self._on_done = on_done
        self._timer: Optional[QTimer] = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(timer_type)
        self._timer.timeout.connect(self._fire)
        self._timer.start(max(0, int(delay_ms)))

    def _fire(self) -> None:
        self._release_timer()
        self.run()

    def cancel(self) -> None:
        super().cancel()
        self._release_timer()

    def _release_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            # deleteLater: the timer may be mid-emission of its own timeout
            self._timer.deleteLater()
            self._timer = None
        if self._on_done is not None:
            on_done, self._on_done = self._on_done, None
            on_done(self)


class QtScheduler(Scheduler):
    """
    Scheduler running callbacks from the Qt event loop.

    Usage:
        scheduler = QtScheduler(frame_ms=16)
        task = scheduler.post_delayed(self._on_long_press, 500)
        task.cancel()  # callback will never run
    """

    def __init__(self, frame_ms: Optional[int] = None):
        self._frame_ms = frame_ms or DEFAULT_FRAME_MS
        # Timers are parented here so Qt owns them until deleteLater()
        self._timer_parent = QObject()
        # Pending tasks are referenced here so their callbacks stay alive
        self._pending: Set[QtScheduledTask] = set()

    @property
    def frame_ms(self) -> int:
        return self._frame_ms

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _schedule(self, callback: Callable[[], None], delay_ms: int, timer_type: Qt.TimerType) -> QtScheduledTask:
        task = QtScheduledTask(callback, delay_ms, timer_type, self._timer_parent, on_done=self._pending.discard)
        self._pending.add(task)
        logger.debug(f"[QtScheduler] scheduled in {delay_ms}ms ({len(self._pending)} pending)")
        return task

    def post(self, callback: Callable[[], None]) -> ScheduledTask:
        return self._schedule(callback, 0, Qt.TimerType.CoarseTimer)

    def post_delayed(self, callback: Callable[[], None], delay_ms: int) -> ScheduledTask:
        return self._schedule(callback, delay_ms, Qt.TimerType.CoarseTimer)

    def post_on_animation(self, callback: Callable[[], None]) -> ScheduledTask:
        return self._schedule(callback, self._frame_ms, Qt.TimerType.PreciseTimer)
