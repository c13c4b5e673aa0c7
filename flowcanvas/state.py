"""
Interaction state of the viewport.

Exactly one variant is active at a time. Variants are frozen; a transition
replaces the whole value, so no handler ever sees a half-updated state.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .events import TargetKind
from .models import Connection, Pin, Point, Rect


class RouteMode(str, Enum):
    """What a connection drag will do when it completes."""
    NEW = "new"          # Create a connection from an unconnected output
    REROUTE = "reroute"  # Re-aim the loose end of an existing connection


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class Idle(_State):
    kind: Literal["idle"] = "idle"


class Panning(_State):
    kind: Literal["panning"] = "panning"
    anchor: Point          # Screen position of the pointer-down
    scroll_origin: Point   # Scroll offsets at pointer-down


class Marqueeing(_State):
    kind: Literal["marqueeing"] = "marqueeing"
    anchor: Point          # World position of the pointer-down
    screen_anchor: Point   # Screen position, used for click detection
    rect: Rect
    moved: bool = False
    origin: TargetKind = TargetKind.BACKGROUND  # What the press landed on


class DraggingBlocks(_State):
    kind: Literal["dragging_blocks"] = "dragging_blocks"
    ids: frozenset[str]
    origin: Point                        # World position of the pointer-down
    last_delta: Point = Point()
    start_positions: dict[str, Point] = Field(default_factory=dict)


class DraggingConnection(_State):
    kind: Literal["dragging_connection"] = "dragging_connection"
    origin_pin: Pin     # The fixed end of the preview
    cursor: Point       # World position of the loose end
    mode: RouteMode = RouteMode.NEW
    connection: Optional[Connection] = None  # Set when rerouting
    moved: bool = False


InteractionState = Annotated[
    Union[Idle, Panning, Marqueeing, DraggingBlocks, DraggingConnection],
    Field(discriminator="kind"),
]

IDLE = Idle()
