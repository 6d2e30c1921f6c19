"""Interpolators for swap-target translation and settle-back animations.

An interpolator is any callable mapping a progress value in [0, 1] to an
eased value. Qt easing curves can be used through
pyqt_dragsort.qt.easing_interpolator().
"""


class BasicSwapTargetTranslationInterpolator:
    """
    Holds displaced items still until the phase passes threshold.

    Below threshold the output is 0, above 1 - threshold it is 1, and in
    between it ramps linearly. This keeps neighbours from twitching while
    the pointer is still close to the origin slot.
    """

    def __init__(self, threshold: float = 0.3):
        if not 0.0 <= threshold < 0.5:
            raise ValueError(f"Invalid threshold range: {threshold}")
        valid_range = 1.0 - 2.0 * threshold
        self._threshold = threshold
        self._half_valid_range = valid_range * 0.5
        self._inv_valid_range = 1.0 / valid_range

    @property
    def threshold(self) -> float:
        return self._threshold

    def __call__(self, value: float) -> float:
        if abs(value - 0.5) < self._half_valid_range:
            return (value - self._threshold) * self._inv_valid_range
        return 0.0 if value < 0.5 else 1.0


class DecelerateInterpolator:
    """Starts fast and decelerates: 1 - (1 - t)^(2 * factor)."""

    def __init__(self, factor: float = 1.0):
        self._factor = factor

    def __call__(self, value: float) -> float:
        if self._factor == 1.0:
            return 1.0 - (1.0 - value) * (1.0 - value)
        return 1.0 - pow(1.0 - value, 2.0 * self._factor)


def smooth_phase(current: float, requested: float, smoothing: float = 0.3, snap_epsilon: float = 0.01) -> float:
    """
    One exponential smoothing step toward requested.

    Snaps to requested once within snap_epsilon so the phase converges
    instead of creeping forever.
    """
    value = current * (1.0 - smoothing) + requested * smoothing
    return requested if abs(value - requested) < snap_epsilon else value
