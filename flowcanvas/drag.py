"""
Dragging one or many blocks.

Pressing on a selected block drags the whole selection; pressing on any
other block selects it alone and drags it. Each pointer move proposes new
positions to the host through `on_block_move`. The host decides whether
to apply them, so nothing is buffered for a revert on cancel.
"""

import logging
from typing import Union

from .callbacks import HostCallbacks
from .graph import GraphIndex
from .models import Point
from .selection import SelectionController
from .state import IDLE, DraggingBlocks, Idle

logger = logging.getLogger(__name__)


class DragController:

    def __init__(self, callbacks: HostCallbacks, selection: SelectionController):
        self._callbacks = callbacks
        self._selection = selection

    def begin(self, block_id: str, world: Point, graph: GraphIndex) -> DraggingBlocks:
        if block_id not in self._selection:
            self._selection.replace([block_id])

        ids = frozenset(bid for bid in self._selection.selected if graph.has_block(bid))
        start_positions = {bid: graph.block(bid).position for bid in ids}
        logger.debug("dragging %d blocks from %s", len(ids), world)
        return DraggingBlocks(ids=ids, origin=world, start_positions=start_positions)

    def update(self, state: DraggingBlocks, world: Point, graph: GraphIndex) -> Union[DraggingBlocks, Idle]:
        state = self.prune(state, graph)
        if isinstance(state, Idle):
            return state

        delta = world - state.origin
        if delta == state.last_delta:
            return state

        # Sorted so the host sees a stable notification order
        for block_id in sorted(state.ids):
            self._callbacks.invoke("on_block_move", block_id, state.start_positions[block_id] + delta)
        return state.model_copy(update={"last_delta": delta})

    def finish(self, state: DraggingBlocks, world: Point, graph: GraphIndex) -> Idle:
        self.update(state, world, graph)
        logger.debug("drag finished")
        return IDLE

    def prune(self, state: DraggingBlocks, graph: GraphIndex) -> Union[DraggingBlocks, Idle]:
        """Drop blocks the host removed mid-drag; abort when none are left."""
        remaining = frozenset(bid for bid in state.ids if graph.has_block(bid))
        if remaining == state.ids:
            return state
        if not remaining:
            logger.debug("all dragged blocks were removed, aborting drag")
            return IDLE
        logger.debug("dragged blocks removed: %s", sorted(state.ids - remaining))
        return state.model_copy(update={
            "ids": remaining,
            "start_positions": {bid: state.start_positions[bid] for bid in remaining},
        })
