"""Qt easing curves as drag-sort interpolators."""

from PyQt6.QtCore import QEasingCurve

from pyqt_dragsort.protocols.drag_config import Interpolator


def easing_interpolator(curve_type: QEasingCurve.Type = QEasingCurve.Type.OutQuad) -> Interpolator:
    """
    Wrap a QEasingCurve so it can be used as an interpolator.

    OutQuad matches DecelerateInterpolator(1.0).
    """
    curve = QEasingCurve(curve_type)

    def interpolate(value: float) -> float:
        return curve.valueForProgress(value)

    return interpolate
