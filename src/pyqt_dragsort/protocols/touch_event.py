"""Pointer input events consumed by the drag controller."""

from dataclasses import dataclass
from enum import Enum


class TouchAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class TouchEvent:
    """Single-pointer input event in list coordinates.

    Attributes:
        action: What happened
        x, y: Pointer position in list coordinates
        down_time: Timestamp (ms) of the DOWN that started this gesture
        event_time: Timestamp (ms) of this event
    """
    action: TouchAction
    x: float
    y: float
    down_time: float = 0.0
    event_time: float = 0.0
