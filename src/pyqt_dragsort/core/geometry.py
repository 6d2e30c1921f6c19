"""
Geometry value types shared by the drag-sort core.

All types are immutable snapshots. Item geometry is queried live from the
host each time it is needed and must never be cached across frames.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Tuple

from .exceptions import InvalidDraggableRangeError

NO_POSITION = -1


@dataclass(frozen=True)
class Point:
    """2D point or vector in list coordinates."""
    x: float = 0.0
    y: float = 0.0

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Margins:
    """Left/top/right/bottom insets (layout margins or decoration offsets)."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


NO_MARGINS = Margins()


@dataclass(frozen=True)
class ItemPosition:
    """
    Ephemeral snapshot of one laid-out item.

    Attributes:
        position: Adapter position of the item
        item_id: Stable identity of the item
        left, top, width, height: Untranslated layout bounds
        margins: Layout margins around the bounds
        decoration: Layout-manager decoration offsets
        translation: Current visual translation applied by the host
        draggable: Whether the item implements the drag capability
    """
    position: int
    item_id: Hashable
    left: float
    top: float
    width: float
    height: float
    margins: Margins = NO_MARGINS
    decoration: Margins = NO_MARGINS
    translation: Point = ORIGIN
    draggable: bool = True

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def outer_width(self) -> float:
        """Width including margins and decoration offsets."""
        return self.width + self.margins.horizontal + self.decoration.horizontal

    @property
    def outer_height(self) -> float:
        """Height including margins and decoration offsets."""
        return self.height + self.margins.vertical + self.decoration.vertical

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


@dataclass(frozen=True)
class DraggableRange:
    """Inclusive index interval an item may move within during one drag."""
    start: int
    end: int

    def contains(self, position: int) -> bool:
        return self.start <= position <= self.end

    def verify(self, position: int, item_count: int) -> None:
        """
        Fail fast on an inconsistent range.

        Args:
            position: Current position of the item about to be dragged
            item_count: Number of items in the backing collection

        Raises:
            InvalidDraggableRangeError: If start > end, start < 0,
                end >= item_count, or the range excludes position
        """
        last = max(0, item_count - 1)
        if self.start > self.end:
            raise InvalidDraggableRangeError(f"Invalid range specified --- start > end (range = {self})")
        if self.start < 0:
            raise InvalidDraggableRangeError(f"Invalid range specified --- start < 0 (range = {self})")
        if self.end > last:
            raise InvalidDraggableRangeError(f"Invalid range specified --- end >= count (range = {self})")
        if not self.contains(position):
            raise InvalidDraggableRangeError(
                f"Invalid range specified --- does not contain drag target item "
                f"(range = {self}, position = {position})"
            )

    @classmethod
    def full(cls, item_count: int) -> "DraggableRange":
        return cls(0, max(0, item_count - 1))

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"


class Octant(Enum):
    """Drag direction bucket; value is (row_delta, column_delta)."""
    UP_LEFT = (-1, -1)
    UP = (-1, 0)
    UP_RIGHT = (-1, 1)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    DOWN_LEFT = (1, -1)
    DOWN = (1, 0)
    DOWN_RIGHT = (1, 1)

    @property
    def row_delta(self) -> int:
        return self.value[0]

    @property
    def column_delta(self) -> int:
        return self.value[1]

    def index_delta(self, columns_per_row: int) -> int:
        """Index offset of the neighbour in this direction for a fixed-column grid."""
        return self.row_delta * columns_per_row + self.column_delta


def bounding_span(a: ItemPosition, b: ItemPosition) -> Tuple[float, float, float, float]:
    """Return (left, top, right, bottom) spanning both items including margins."""
    left = min(a.left - a.margins.left, b.left - b.margins.left)
    right = max(a.right + a.margins.right, b.right + b.margins.right)
    top = min(a.top - a.margins.top, b.top - b.margins.top)
    bottom = max(a.bottom + a.margins.bottom, b.bottom + b.margins.bottom)
    return left, top, right, bottom
