"""Declarative configuration for drag-sort sessions.

Provides hooks for applications to tune drag initiation, auto-scroll and
swap smoothing. Defaults mirror the values the interaction was tuned with.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

Interpolator = Callable[[float], float]


FALLBACK_FPS = 60


def _screen_frame_ms(max_fps: Optional[int]) -> int:
    """Frame interval for the primary screen, never faster than max_fps."""
    from PyQt6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    screen = app.primaryScreen() if app is not None else None
    fps = int(screen.refreshRate()) if screen is not None else 0
    if fps <= 0:
        logger.debug(f"[DragSortConfig] No screen refresh rate available, assuming {FALLBACK_FPS}Hz")
        fps = FALLBACK_FPS
    if max_fps is not None:
        fps = min(fps, max_fps)
    return 1000 // fps


def _default_settle_interpolator() -> Interpolator:
    from pyqt_dragsort.core.interpolators import DecelerateInterpolator
    return DecelerateInterpolator()


def _default_swap_target_interpolator() -> Interpolator:
    from pyqt_dragsort.core.interpolators import BasicSwapTargetTranslationInterpolator
    return BasicSwapTargetTranslationInterpolator()


@dataclass
class DragSortConfig:
    """Drag-sort tuning knobs.

    Attributes:
        initiate_on_long_press: Start dragging when a press is held for long_press_timeout_ms
        initiate_on_move: Start dragging once a press moves past touch_slop
        long_press_timeout_ms: Long-press delay, measured from the down event
        touch_slop: Distance a press must travel before move-initiation (px)
        scroll_touch_slop_multiply: Auto-scroll direction slop as a multiple of touch_slop
        scroll_threshold: Edge zone, as a fraction of list height, that triggers auto-scroll
        scroll_amount_coeff: Per-frame scroll at full acceleration (density-independent px)
        display_density: Density multiplier applied to scroll_amount_coeff
        columns_per_row: Width of the fixed-column grid
        dead_zone_ratio: Fraction of the item size below which no target is resolved
        near_field_distance: Largest index distance that still requires the midpoint test
        phase_smoothing: Weight of the requested phase in each smoothing step
        phase_snap_epsilon: Distance at which the smoothed phase snaps to the request
        settle_duration_ms: Duration of the settle-back-into-place animation
        settle_interpolator: Easing for the settle-back animation
        swap_target_interpolator: Reshapes the swap phase before it is applied (None = linear)
    """

    initiate_on_long_press: bool = False
    initiate_on_move: bool = True
    long_press_timeout_ms: int = 500
    touch_slop: float = 8.0
    scroll_touch_slop_multiply: float = 1.5
    scroll_threshold: float = 0.3
    scroll_amount_coeff: float = 25.0
    display_density: float = 1.0
    columns_per_row: int = 4
    dead_zone_ratio: float = 0.1
    near_field_distance: int = 4
    phase_smoothing: float = 0.3
    phase_snap_epsilon: float = 0.01
    settle_duration_ms: int = 200
    settle_interpolator: Optional[Interpolator] = field(default_factory=_default_settle_interpolator)
    swap_target_interpolator: Optional[Interpolator] = field(default_factory=_default_swap_target_interpolator)

    # Frame rate configuration
    frame_ms: Optional[int] = None  # Auto-calculated from the screen refresh rate if not specified
    max_fps: Optional[int] = 60

    def __post_init__(self):
        """Validate knobs and resolve frame_ms."""
        if not 0.0 < self.scroll_threshold < 0.5:
            raise ValueError(f"scroll_threshold must be in (0, 0.5), got {self.scroll_threshold}")
        if self.columns_per_row < 1:
            raise ValueError(f"columns_per_row must be >= 1, got {self.columns_per_row}")
        if self.settle_duration_ms < 0 or self.long_press_timeout_ms < 0:
            raise ValueError("durations must be non-negative")
        if not 0.0 < self.phase_smoothing <= 1.0:
            raise ValueError(f"phase_smoothing must be in (0, 1], got {self.phase_smoothing}")
        if self.max_fps is not None and self.max_fps < 1:
            raise ValueError(f"max_fps must be >= 1, got {self.max_fps}")

        if self.frame_ms is not None:
            return

        self.frame_ms = _screen_frame_ms(self.max_fps)
        logger.debug(f"[DragSortConfig] Using {self.frame_ms}ms frame interval for auto-scroll")

    @property
    def scroll_touch_slop(self) -> int:
        """Slop the pointer must travel before a scroll direction is permitted."""
        return int(self.touch_slop * self.scroll_touch_slop_multiply + 0.5)


# Global config instance (set by application)
_dragsort_config: Optional[DragSortConfig] = None


def set_dragsort_config(config: DragSortConfig) -> None:
    """Set the global drag-sort configuration.

    Args:
        config: DragSortConfig instance
    """
    global _dragsort_config
    _dragsort_config = config


def get_dragsort_config() -> DragSortConfig:
    """Get the current drag-sort configuration.

    Returns:
        Current DragSortConfig or default if not set
    """
    if _dragsort_config is None:
        return DragSortConfig()
    return _dragsort_config
