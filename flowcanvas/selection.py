"""
Marquee-based multi-selection.

A pointer-down on the blank canvas starts a marquee. On release the
selection becomes exactly the blocks whose bounds intersect the marquee
(touching edges count). A press and release on the background without movement is a click: it
clears the selection and notifies the host. The same click on a block edge
leaves the selection alone.
"""

import logging
from typing import Iterable

from .callbacks import HostCallbacks
from .config import ViewportConfig
from .events import TargetKind
from .models import Block, Point, Rect
from .state import IDLE, Idle, Marqueeing

logger = logging.getLogger(__name__)


def blocks_in_rect(blocks: Iterable[Block], rect: Rect) -> set[str]:
    """IDs of the blocks whose bounding box intersects `rect`."""
    return {block.id for block in blocks if block.bounds().intersects(rect)}


class SelectionController:
    """Owns the set of selected block IDs."""

    def __init__(self, callbacks: HostCallbacks, config: ViewportConfig):
        self._callbacks = callbacks
        self._config = config
        self._selected: set[str] = set()

    @property
    def selected(self) -> frozenset[str]:
        return frozenset(self._selected)

    def __contains__(self, block_id: str) -> bool:
        return block_id in self._selected

    # --- Direct manipulation ---

    def replace(self, block_ids: Iterable[str]):
        self._selected = set(block_ids)

    def clear(self):
        self._selected.clear()

    def prune(self, valid_ids: set[str]) -> bool:
        """Drop IDs of blocks the host no longer has. Returns True if any were dropped."""
        stale = self._selected - valid_ids
        if stale:
            logger.debug("dropping removed blocks from selection: %s", sorted(stale))
            self._selected -= stale
        return bool(stale)

    # --- Marquee gesture ---

    def begin(self, world: Point, screen: Point, origin: TargetKind = TargetKind.BACKGROUND) -> Marqueeing:
        logger.debug("marquee started at %s on %s", world, origin.value)
        return Marqueeing(
            anchor=world,
            screen_anchor=screen,
            rect=Rect(x=world.x, y=world.y),
            origin=origin,
        )

    def update(self, state: Marqueeing, world: Point, screen: Point) -> Marqueeing:
        moved = state.moved or screen.distance_to(state.screen_anchor) > self._config.click_tolerance
        return state.model_copy(update={"rect": Rect.from_corners(state.anchor, world), "moved": moved})

    def finish(self, state: Marqueeing, world: Point, screen: Point, blocks: Iterable[Block]) -> Idle:
        state = self.update(state, world, screen)
        if not state.moved:
            # Only a click on the canvas itself deselects
            if state.origin == TargetKind.BACKGROUND:
                self.clear()
                self._callbacks.invoke("on_container_mouse_click")
            return IDLE

        self._selected = blocks_in_rect(blocks, state.rect)
        logger.debug("marquee %s selected %d blocks", state.rect, len(self._selected))
        return IDLE
