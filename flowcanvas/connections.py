"""
Connection routing gestures.

Three things can happen when a connection is dragged:
- an unconnected output is dragged onto an input: a new connection
- the loose end of an existing connection is dragged onto another input:
  the connection is rerouted, its output end stays fixed
- either of the above is dropped on the blank canvas: the host is asked
  to add a new block at the drop point and connect it

Releasing anywhere else cancels the gesture without calling the host.
"""

import logging
from typing import Optional, Union

from .callbacks import HostCallbacks
from .events import HitTarget, TargetKind
from .graph import GraphIndex
from .models import Connection, Pin, Point
from .state import IDLE, DraggingConnection, Idle, RouteMode

logger = logging.getLogger(__name__)


class ConnectionRouter:

    def __init__(self, callbacks: HostCallbacks):
        self._callbacks = callbacks

    # --- Start ---

    def begin(self, target: HitTarget, world: Point, graph: GraphIndex) -> Optional[DraggingConnection]:
        """
        Start a connection drag from a pin or a connection's reroute handle.

        Returns:
            The new state, or None if no drag can start from `target`
        """
        if target.kind == TargetKind.CONNECTION_HANDLE:
            connection = graph.connection(target.id)
            if connection is None:
                return None
            return self._begin_reroute(connection, world, graph)

        pin = graph.pin(target.id) if target.id else None
        if pin is None or graph.pin_position(pin) is None:
            return None

        if pin.is_output:
            if pin.connected:
                logger.debug("output %s is already connected, not starting a drag", pin.id)
                return None
            logger.debug("new connection drag from %s", pin.id)
            return DraggingConnection(origin_pin=pin, cursor=world, mode=RouteMode.NEW)

        # Input pin: grabbing a connected input detaches that end
        if not pin.connected:
            return None
        for connection in graph.connections_for_pin(pin.id):
            if connection.to_pin == pin.id:
                return self._begin_reroute(connection, world, graph)
        return None

    def _begin_reroute(self, connection: Connection, world: Point, graph: GraphIndex) -> Optional[DraggingConnection]:
        fixed = graph.pin(connection.from_pin)
        if fixed is None or graph.pin_position(fixed) is None:
            return None
        logger.debug("rerouting %s from %s", connection.id, fixed.id)
        return DraggingConnection(
            origin_pin=fixed,
            cursor=world,
            mode=RouteMode.REROUTE,
            connection=connection,
        )

    # --- Move ---

    def update(self, state: DraggingConnection, world: Point) -> DraggingConnection:
        return state.model_copy(update={"cursor": world, "moved": state.moved or world != state.cursor})

    def preview(self, state: DraggingConnection, graph: GraphIndex) -> Optional[tuple[Point, Point]]:
        """Start and end points of the transient connection, in world space."""
        start = graph.pin_position(state.origin_pin)
        if start is None:
            return None
        return start, state.cursor

    # --- Finish ---

    def finish(self, state: DraggingConnection, target: HitTarget, world: Point, graph: GraphIndex) -> Idle:
        state = self.update(state, world)
        # The host may have updated the pin since the drag started
        origin = graph.pin(state.origin_pin.id)
        if origin is None:
            logger.debug("origin pin %s disappeared, cancelling", state.origin_pin.id)
            return IDLE

        if target.kind == TargetKind.INPUT_PIN:
            self._drop_on_input(state, origin, graph.pin(target.id) if target.id else None)
        elif target.kind == TargetKind.BACKGROUND:
            self._drop_on_canvas(state, origin, world)
        else:
            logger.debug("connection dropped on %s, cancelling", target.kind.value)
        return IDLE

    def _drop_on_input(self, state: DraggingConnection, origin: Pin, target: Optional[Pin]):
        if target is None or not target.is_input:
            logger.debug("drop target is not a known input pin, cancelling")
            return
        if state.mode == RouteMode.NEW:
            # Hosts written against the reroute handler alone get creations there too
            name = "on_connect_pins" if self._callbacks.provides("on_connect_pins") else "on_reconnecting_pins"
            self._callbacks.invoke(name, origin, target)
            return
        if target.id == state.connection.to_pin:
            logger.debug("connection %s dropped back on its own input", state.connection.id)
            return
        self._callbacks.invoke("on_reconnecting_pins", origin, target)

    def _drop_on_canvas(self, state: DraggingConnection, origin: Pin, world: Point):
        if not state.moved:
            return
        if state.mode == RouteMode.NEW:
            if origin.connected:
                logger.debug("output %s got connected mid-drag, not adding a block", origin.id)
                return
            self._callbacks.invoke("on_connect_to_new_block", origin, world)
        else:
            self._callbacks.invoke("on_add_new_element", origin, world)

    def prune(self, state: DraggingConnection, graph: GraphIndex) -> Union[DraggingConnection, Idle]:
        """Abort when the host removed the origin pin or the rerouted connection."""
        if graph.pin(state.origin_pin.id) is None:
            return IDLE
        if state.connection is not None and graph.connection(state.connection.id) is None:
            return IDLE
        return state
