"""
Input events delivered by the host.

The host's renderer performs hit testing (it knows which DOM/scene item is
under the pointer) and tags every pointer event with a HitTarget. Positions
are screen-space, relative to the viewport element's top-left corner.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .models import Point


class TargetKind(str, Enum):
    """Where a pointer event originated."""
    BACKGROUND = "background"          # Blank canvas (the multi-selection layer)
    BLOCK = "block"                    # A block body
    OUTPUT_PIN = "output_pin"
    INPUT_PIN = "input_pin"
    CONNECTION_HANDLE = "connection_handle"  # Reroute handle drawn on a connection
    OTHER = "other"                    # Anything else (toolbars, overlays, ...)


class PointerButton(str, Enum):
    PRIMARY = "primary"
    MIDDLE = "middle"
    SECONDARY = "secondary"


class HitTarget(BaseModel):
    """What the pointer is over. `id` is the block, pin or connection ID."""
    model_config = ConfigDict(frozen=True)

    kind: TargetKind = TargetKind.BACKGROUND
    id: Optional[str] = None

    @property
    def is_pin(self) -> bool:
        return self.kind in (TargetKind.OUTPUT_PIN, TargetKind.INPUT_PIN)


class PointerEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    button: PointerButton = PointerButton.PRIMARY
    target: HitTarget = HitTarget()

    @property
    def position(self) -> Point:
        return Point(x=self.x, y=self.y)


BACKGROUND = HitTarget()


def block(block_id: str) -> HitTarget:
    return HitTarget(kind=TargetKind.BLOCK, id=block_id)


def output_pin(pin_id: str) -> HitTarget:
    return HitTarget(kind=TargetKind.OUTPUT_PIN, id=pin_id)


def input_pin(pin_id: str) -> HitTarget:
    return HitTarget(kind=TargetKind.INPUT_PIN, id=pin_id)


def connection_handle(connection_id: str) -> HitTarget:
    return HitTarget(kind=TargetKind.CONNECTION_HANDLE, id=connection_id)


OTHER = HitTarget(kind=TargetKind.OTHER)
