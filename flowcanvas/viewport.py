"""
Viewport - the interaction core of the flow editor.

This module implements:
- One InteractionState shared by all pointer gestures
- Dispatch of raw pointer events to the controller that owns the gesture,
  chosen by where the pointer went down (canvas, block, pin)
- Scroll, zoom and content extent of the diagram
- Change listeners for the rendering adapter

The viewport never owns the graph. The host hands it blocks, pins and
connections through `update_graph` and receives proposed mutations through
HostCallbacks.
"""

import functools
import logging
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from . import geometry
from .callbacks import HostCallbacks
from .config import ViewportConfig
from .connections import ConnectionRouter
from .drag import DragController
from .events import HitTarget, PointerButton, PointerEvent, TargetKind
from .graph import GraphIndex
from .models import Block, Connection, Pin, Point, Rect, ViewportState
from .scroll import Measure, ScrollController, ViewBox
from .selection import SelectionController
from .state import (
    IDLE,
    DraggingBlocks,
    DraggingConnection,
    Idle,
    InteractionState,
    Marqueeing,
    Panning,
)
from .validation import IssueSeverity, validate_graph
from .zoom import TransformStyle, ZoomController

logger = logging.getLogger(__name__)


class ViewportSnapshot(BaseModel):
    """Everything the rendering adapter needs to paint the current frame."""
    model_config = ConfigDict(frozen=True)

    viewport: ViewportState
    view_box: ViewBox
    transform: TransformStyle
    selection: frozenset[str]
    interaction: InteractionState


def _notifies(method):
    """Notify listeners if the call changed what the renderer would show."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        before = self.snapshot()
        result = method(self, *args, **kwargs)
        after = self.snapshot()
        if after != before:
            self._notify_change(after)
        return result
    return wrapper


class Viewport:
    """
    Aggregate of the scroll, zoom, selection, drag and connection
    controllers. All events are handled synchronously, in delivery order,
    and each one causes at most one interaction state transition.
    """

    def __init__(
        self,
        measure: Measure,
        callbacks: Optional[HostCallbacks] = None,
        config: Optional[ViewportConfig] = None,
        blocks: Iterable[Block] = (),
        pins: Iterable[Pin] = (),
        connections: Iterable[Connection] = (),
    ):
        self.config = config or ViewportConfig()
        self.callbacks = callbacks or HostCallbacks()
        self.state = ViewportState()
        self.graph = GraphIndex()
        self.interaction: InteractionState = IDLE
        self._listeners: list[Callable[[ViewportSnapshot], None]] = []

        self.zoom = ZoomController(self.state, self.config)
        self.scroll = ScrollController(self.state, self.config, measure)
        self.selection = SelectionController(self.callbacks, self.config)
        self.drag = DragController(self.callbacks, self.selection)
        self.router = ConnectionRouter(self.callbacks)

        self.scroll.mount()
        if self.config.horizontal_pan_in_viewbox:
            logger.debug("horizontal scroll offset is applied to the connection viewBox")
        self.update_graph(blocks, pins, connections)

    # --- Change listeners ---

    def subscribe(self, listener: Callable[[ViewportSnapshot], None]) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify_change(self, snapshot: ViewportSnapshot):
        for listener in list(self._listeners):
            listener(snapshot)

    # --- Derived descriptors ---

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            viewport=self.state.model_copy(),
            view_box=self.view_box(),
            transform=self.transform_style(),
            selection=self.selection.selected,
            interaction=self.interaction,
        )

    def view_box(self) -> ViewBox:
        return self.scroll.view_box()

    def transform_style(self) -> TransformStyle:
        return self.zoom.transform_style()

    @property
    def selected(self) -> frozenset[str]:
        return self.selection.selected

    def marquee(self) -> Optional[Rect]:
        if isinstance(self.interaction, Marqueeing):
            return self.interaction.rect
        return None

    def reconnector(self) -> Optional[tuple[Point, Point]]:
        if isinstance(self.interaction, DraggingConnection):
            return self.router.preview(self.interaction, self.graph)
        return None

    def to_world(self, point: Point) -> Point:
        return geometry.to_world(point, self.state)

    def to_screen(self, point: Point) -> Point:
        return geometry.to_screen(point, self.state)

    # --- Host model ---

    @_notifies
    def update_graph(
        self,
        blocks: Iterable[Block],
        pins: Iterable[Pin] = (),
        connections: Iterable[Connection] = (),
    ):
        """Model-change notification: the host's graph now looks like this."""
        blocks, pins, connections = list(blocks), list(pins), list(connections)
        for issue in validate_graph(blocks, pins, connections):
            if issue.severity == IssueSeverity.ERROR:
                logger.warning("host graph: %s (%s)", issue.message, issue.to_dict())
            else:
                logger.debug("host graph: %s", issue.message)

        self.graph = GraphIndex(blocks, pins, connections)
        self.selection.prune(self.graph.block_ids)
        self.scroll.sync_blocks(self.graph.blocks)

        if isinstance(self.interaction, DraggingBlocks):
            self.interaction = self.drag.prune(self.interaction, self.graph)
        elif isinstance(self.interaction, DraggingConnection):
            self.interaction = self.router.prune(self.interaction, self.graph)

    @_notifies
    def resize(self):
        self.scroll.resize()

    # --- Pointer events ---

    @_notifies
    def pointer_down(self, event: PointerEvent):
        if not isinstance(self.interaction, Idle):
            # A gesture already owns the pointer
            return

        screen = event.position
        world = self.to_world(screen)

        if event.button == PointerButton.MIDDLE:
            self.interaction = Panning(anchor=screen, scroll_origin=self.scroll.offset)
            return
        if event.button != PointerButton.PRIMARY:
            return

        target = event.target
        if target.is_pin or target.kind == TargetKind.CONNECTION_HANDLE:
            started = self.router.begin(target, world, self.graph)
            if started is not None:
                self.interaction = started
        elif target.kind == TargetKind.BLOCK and self._inside_block(target, world):
            self.interaction = self.drag.begin(target.id, world, self.graph)
        elif target.kind in (TargetKind.BACKGROUND, TargetKind.BLOCK):
            self.interaction = self.selection.begin(world, screen, target.kind)

    def _inside_block(self, target: HitTarget, world: Point) -> bool:
        # Presses on a block's edge start a marquee, not a drag
        block = self.graph.block(target.id) if target.id else None
        return block is not None and block.bounds().contains(world, strict=True)

    @_notifies
    def pointer_move(self, event: PointerEvent):
        state = self.interaction
        screen = event.position

        if isinstance(state, Panning):
            delta = geometry.delta_to_world(screen - state.anchor, self.state)
            self.scroll.scroll_to(state.scroll_origin.x - delta.x, state.scroll_origin.y - delta.y)
        elif isinstance(state, Marqueeing):
            self.interaction = self.selection.update(state, self.to_world(screen), screen)
        elif isinstance(state, DraggingBlocks):
            self.interaction = self.drag.update(state, self.to_world(screen), self.graph)
        elif isinstance(state, DraggingConnection):
            self.interaction = self.router.update(state, self.to_world(screen))

    @_notifies
    def pointer_up(self, event: PointerEvent):
        state = self.interaction
        screen = event.position
        world = self.to_world(screen)

        if isinstance(state, Panning):
            self.interaction = IDLE
        elif isinstance(state, Marqueeing):
            self.interaction = self.selection.finish(state, world, screen, self.graph.blocks)
        elif isinstance(state, DraggingBlocks):
            self.interaction = self.drag.finish(state, world, self.graph)
        elif isinstance(state, DraggingConnection):
            self.interaction = self.router.finish(state, event.target, world, self.graph)

    @_notifies
    def cancel(self):
        """Abandon the active gesture. Nothing is reported to the host."""
        if not isinstance(self.interaction, Idle):
            logger.debug("cancelled %s", self.interaction.kind)
        self.interaction = IDLE

    def pointer_leave(self):
        self.cancel()

    def context_menu(self, event: PointerEvent) -> bool:
        """Whether the host should show its context menu for this event."""
        if event.target.is_pin or isinstance(self.interaction, DraggingConnection):
            return False
        return True

    # --- Wheel and keyboard ---

    @_notifies
    def wheel(self, delta_y: float, zoom_modifier: bool = False, delta_x: float = 0.0):
        """Zoom with the modifier held, otherwise scroll."""
        if zoom_modifier:
            self.zoom.zoom_by_wheel(delta_y)
        else:
            delta = geometry.delta_to_world(Point(x=delta_x, y=delta_y), self.state)
            self.scroll.scroll_by(delta.x, delta.y)

    @_notifies
    def set_zoom(self, level: float):
        self.zoom.set_zoom(level)

    @_notifies
    def scroll_to(self, left: Optional[float] = None, top: Optional[float] = None):
        """User-driven scroll reported by the host, in world units."""
        self.scroll.scroll_to(left, top)

    @_notifies
    def key_press(self, key: str, ctrl: bool = False):
        key = key.lower()
        if key == "escape":
            if isinstance(self.interaction, Idle):
                self.selection.clear()
            else:
                self.interaction = IDLE
        elif key in ("delete", "backspace"):
            if isinstance(self.interaction, Idle):
                for block_id in sorted(self.selection.selected):
                    self.request_delete(block_id)
        elif key == "a" and ctrl:
            if isinstance(self.interaction, Idle):
                self.selection.replace(self.graph.block_ids)
        elif ctrl and key in ("+", "="):
            self.zoom.zoom_in()
        elif ctrl and key == "-":
            self.zoom.zoom_out()
        elif ctrl and key == "0":
            self.zoom.reset()

    # --- Pass-through requests ---

    def request_delete(self, block_id: str) -> bool:
        block = self.graph.block(block_id)
        if block is None:
            return False
        return self.callbacks.invoke("on_delete_block", block)

    def request_edit(self, block_id: str) -> bool:
        if not self.graph.has_block(block_id):
            return False
        return self.callbacks.invoke("on_element_edit", block_id)
