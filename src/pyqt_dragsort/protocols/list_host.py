"""List host contract.

The host is the scrollable list view the controller is attached to. It
answers geometry queries live and applies the visual side effects the
controller decides on. Implementations must not hand out snapshots that
outlive a single call; the controller re-queries every time it needs
geometry.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Hashable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pyqt_dragsort.core.geometry import ItemPosition, Margins


class OverScrollMode(Enum):
    ALWAYS = "always"
    IF_CONTENT_SCROLLS = "if_content_scrolls"
    NEVER = "never"


class ListHost(ABC):
    """ABC for the list view driven by a DragSessionController."""

    # ========== GEOMETRY ==========

    @abstractmethod
    def get_adapter(self):
        """Return the adapter currently installed on the list."""
        ...

    @abstractmethod
    def width(self) -> float:
        ...

    @abstractmethod
    def height(self) -> float:
        ...

    @abstractmethod
    def padding(self) -> "Margins":
        ...

    @abstractmethod
    def find_item_under(self, x: float, y: float) -> Optional["ItemPosition"]:
        """Item whose untranslated bounds contain (x, y), or None."""
        ...

    @abstractmethod
    def find_item_for_position(self, position: int) -> Optional["ItemPosition"]:
        """Laid-out item at adapter position, or None if not laid out."""
        ...

    @abstractmethod
    def visible_items(self) -> List["ItemPosition"]:
        """Laid-out items in child order; the first entry is the first child."""
        ...

    @abstractmethod
    def first_completely_visible_position(self) -> Optional[int]:
        ...

    @abstractmethod
    def last_completely_visible_position(self) -> Optional[int]:
        ...

    def display_density(self) -> float:
        return 1.0

    def scaled_touch_slop(self) -> Optional[float]:
        """Platform touch slop, or None to use the configured value."""
        return None

    # ========== SIDE EFFECTS ==========

    @abstractmethod
    def scroll_by(self, dx: float, dy: float) -> float:
        """Scroll the list and return the distance actually scrolled along y."""
        ...

    @abstractmethod
    def set_item_translation(self, item_id: Hashable, dx: float, dy: float) -> None:
        ...

    @abstractmethod
    def animate_item_to_rest(self, item_id: Hashable, duration_ms: int,
                             interpolator: Optional[Callable[[float], float]]) -> None:
        """Animate the item's translation back to zero."""
        ...

    def end_animations(self) -> None:
        pass

    def stop_scroll(self) -> None:
        pass

    def invalidate(self) -> None:
        pass

    def get_overscroll_mode(self) -> OverScrollMode:
        return OverScrollMode.IF_CONTENT_SCROLLS

    def set_overscroll_mode(self, mode: OverScrollMode) -> None:
        pass

    def request_disallow_intercept(self, disallow: bool) -> None:
        """Ask the parent to stop (or resume) stealing touch events."""
        pass
