"""
Scroll offsets and content extent.

The content extent is recomputed from the host's blocks:
- height follows the lowest block plus a fixed margin: recomputed exactly
  whenever the number of blocks changes, and otherwise only raised when a
  block moved below it
- width only ever grows, following the widest `children_width` seen

The host element's rendered size comes from a measure callable supplied by
the host; it seeds the extent on mount and is re-read on resize.
"""

import logging
import math
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .config import ViewportConfig
from .models import Block, Point, ViewportState

logger = logging.getLogger(__name__)

# Returns the host element's rendered (width, height)
Measure = Callable[[], tuple[float, float]]


class ViewBox(BaseModel):
    """Visible coordinate window of the connection overlay."""
    model_config = ConfigDict(frozen=True)

    left: float
    top: float
    width: float
    height: float

    def __str__(self) -> str:
        return f"{self.left:g} {self.top:g} {self.width:g} {self.height:g}"


class ScrollController:
    """Owns the scroll offsets and content extent on the shared viewport state."""

    def __init__(self, state: ViewportState, config: ViewportConfig, measure: Measure):
        self._state = state
        self._config = config
        self._measure = measure
        self.client_width = 0.0
        self.client_height = 0.0
        self._block_count = 0
        self._children_widths: dict[str, float] = {}

    # --- Measurement ---

    def mount(self):
        """Seed the content extent from the host element's rendered size."""
        width, height = self._measure()
        self.client_width, self.client_height = float(width), float(height)
        self._state.content_width = self.client_width
        self._state.content_height = self.client_height
        logger.debug("mounted at %gx%g", self.client_width, self.client_height)

    def resize(self) -> bool:
        """Re-measure the host element. The extent grows to fit, never shrinks."""
        width, height = self._measure()
        before = (self.client_width, self.client_height,
                  self._state.content_width, self._state.content_height)
        self.client_width, self.client_height = float(width), float(height)
        self._state.content_width = max(self._state.content_width, self.client_width)
        self._state.content_height = max(self._state.content_height, self.client_height)
        return before != (self.client_width, self.client_height,
                          self._state.content_width, self._state.content_height)

    # --- Content extent ---

    def sync_blocks(self, blocks: Iterable[Block]) -> bool:
        """
        Recompute the content extent after a host model change.

        Height is recomputed when the block count changed and raised when
        a block moved lower; with no blocks the measured height is kept.
        Width only changes when some block's children_width changed.

        Returns:
            True if the content extent changed
        """
        blocks = list(blocks)
        before = (self._state.content_width, self._state.content_height)

        lowest = max((block.y for block in blocks), default=0.0) + self._config.height_margin
        if len(blocks) != self._block_count:
            self._block_count = len(blocks)
            self._state.content_height = lowest if blocks else self.client_height
        elif blocks and lowest > self._state.content_height:
            self._state.content_height = lowest

        widths = {
            block.id: block.children_width
            for block in blocks
            if block.children_width is not None and not math.isnan(block.children_width)
        }
        if widths != self._children_widths:
            self._children_widths = widths
            widest = max(widths.values(), default=0.0)
            if widest > self._state.content_width:
                self._state.content_width = widest

        return before != (self._state.content_width, self._state.content_height)

    # --- Scrolling ---

    @property
    def scroll_left(self) -> float:
        return self._state.scroll_left

    @property
    def scroll_top(self) -> float:
        return self._state.scroll_top

    @property
    def offset(self) -> Point:
        return Point(x=self._state.scroll_left, y=self._state.scroll_top)

    def scroll_to(self, left: Optional[float] = None, top: Optional[float] = None) -> bool:
        """Set the scroll offsets (world units). Negative offsets are clamped to 0."""
        before = (self._state.scroll_left, self._state.scroll_top)
        if left is not None:
            self._state.scroll_left = max(0.0, float(left))
        if top is not None:
            self._state.scroll_top = max(0.0, float(top))
        return before != (self._state.scroll_left, self._state.scroll_top)

    def scroll_by(self, dx: float = 0.0, dy: float = 0.0) -> bool:
        return self.scroll_to(self._state.scroll_left + dx, self._state.scroll_top + dy)

    def view_box(self) -> ViewBox:
        left = self._state.scroll_left if self._config.horizontal_pan_in_viewbox else 0.0
        return ViewBox(
            left=left,
            top=self._state.scroll_top,
            width=self._state.content_width,
            height=self._state.content_height,
        )
