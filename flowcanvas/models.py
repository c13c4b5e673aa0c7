"""
Core data models for the flow canvas.

These models describe what the interaction core reads from the host and
what it exposes back to the renderer:
- Points and rectangles in world or screen space
- Blocks, pins and connections (owned by the host, read-only here)
- The viewport state (scroll offsets, content extent, zoom level)

Coordinate spaces are never mixed implicitly: a Point is world-space or
screen-space depending on where it came from, and conversions go through
`flowcanvas.geometry`.
"""

from enum import Enum
from typing import Optional
import math

from pydantic import BaseModel, ConfigDict, Field


class PinKind(str, Enum):
    """Direction of a pin on a block."""
    OUTPUT = "output"
    INPUT = "input"


class Point(BaseModel):
    """A 2D coordinate."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(x=self.x - other.x, y=self.y - other.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class Rect(BaseModel):
    """Axis-aligned rectangle. Width and height are never negative."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rect":
        """Rectangle spanned by two corners given in any order."""
        return cls(
            x=min(a.x, b.x),
            y=min(a.y, b.y),
            width=abs(a.x - b.x),
            height=abs(a.y - b.y),
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: "Rect") -> bool:
        """Overlap test; rectangles that only touch along an edge intersect."""
        return (
            self.x <= other.right
            and other.x <= self.right
            and self.y <= other.bottom
            and other.y <= self.bottom
        )

    def contains(self, point: Point, strict: bool = True) -> bool:
        if strict:
            return self.x < point.x < self.right and self.y < point.y < self.bottom
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom


class Block(BaseModel):
    """A block on the canvas, as supplied by the host."""
    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = 150.0
    height: float = 80.0
    # Width needed to lay out the block's children; None when not measured yet
    children_width: Optional[float] = None

    @property
    def position(self) -> Point:
        return Point(x=self.x, y=self.y)

    def bounds(self) -> Rect:
        """Get the bounding box in world space."""
        return Rect(x=self.x, y=self.y, width=self.width, height=self.height)


class Pin(BaseModel):
    """
    A named connection point attached to exactly one block.

    `offset` is relative to the owning block's top-left corner; the pin's
    world position is derived from the block. `connected` is computed by
    the host and taken as given.
    """
    id: str
    block_id: str
    kind: PinKind
    offset: Point = Field(default_factory=Point)
    connected: bool = False

    @property
    def is_output(self) -> bool:
        return self.kind == PinKind.OUTPUT

    @property
    def is_input(self) -> bool:
        return self.kind == PinKind.INPUT


class Connection(BaseModel):
    """A directed link from an output pin to an input pin."""
    id: str
    from_pin: str  # Output pin ID
    to_pin: str    # Input pin ID

    def other_end(self, pin_id: str) -> Optional[str]:
        """Pin ID at the opposite end from `pin_id`, if it is an endpoint."""
        if pin_id == self.from_pin:
            return self.to_pin
        if pin_id == self.to_pin:
            return self.from_pin
        return None


class ViewportState(BaseModel):
    """
    Scroll offsets, content extent and zoom level of the viewport.

    Scroll offsets are in world units; the zoom level is a percentage.
    """
    scroll_left: float = 0.0
    scroll_top: float = 0.0
    content_width: float = 0.0
    content_height: float = 0.0
    zoom_level: int = 100

    @property
    def scale(self) -> float:
        return self.zoom_level / 100
