"""
Indexed, read-only view over the host's graph model.

The host owns blocks, pins and connections. The viewport keeps one
GraphIndex built from the latest model-change notification and uses it
for O(1) lookups while handling pointer events. Nothing here mutates the
host's objects.
"""

from typing import Iterable, Optional

from .models import Block, Connection, Pin, Point


class GraphIndex:
    """
    O(1) lookups over blocks, pins and connections.

    Block order is preserved (it is the host's paint order) so hit tests
    can prefer the topmost block.
    """

    def __init__(
        self,
        blocks: Iterable[Block] = (),
        pins: Iterable[Pin] = (),
        connections: Iterable[Connection] = (),
    ):
        self._blocks: dict[str, Block] = {}
        self._pins: dict[str, Pin] = {}
        self._connections: dict[str, Connection] = {}
        self._connections_by_pin: dict[str, list[str]] = {}  # pin_id -> connection ids

        for block in blocks:
            self._blocks[block.id] = block
        for pin in pins:
            self._pins[pin.id] = pin
        for connection in connections:
            self._connections[connection.id] = connection
            for pin_id in (connection.from_pin, connection.to_pin):
                self._connections_by_pin.setdefault(pin_id, []).append(connection.id)

    # --- Collections ---

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks.values())

    @property
    def pins(self) -> list[Pin]:
        return list(self._pins.values())

    @property
    def connections(self) -> list[Connection]:
        return list(self._connections.values())

    @property
    def block_ids(self) -> set[str]:
        return set(self._blocks)

    # --- Lookups ---

    def block(self, block_id: str) -> Optional[Block]:
        return self._blocks.get(block_id)

    def pin(self, pin_id: str) -> Optional[Pin]:
        return self._pins.get(pin_id)

    def connection(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def has_block(self, block_id: str) -> bool:
        return block_id in self._blocks

    def connections_for_pin(self, pin_id: str) -> list[Connection]:
        """Connections with `pin_id` as either endpoint, in host order."""
        return [self._connections[cid] for cid in self._connections_by_pin.get(pin_id, [])]

    # --- Geometry ---

    def pin_position(self, pin: Pin) -> Optional[Point]:
        """World position of a pin: owner block position plus the pin offset."""
        block = self._blocks.get(pin.block_id)
        if block is None:
            return None
        return block.position + pin.offset
