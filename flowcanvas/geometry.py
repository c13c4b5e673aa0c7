"""
Coordinate transforms between world space and screen space.

Screen = (world - scroll) * scale, with the transform origin fixed at the
top-left corner. There is no recentering around the cursor, so the two
functions below are exact algebraic inverses.
"""

from typing import TYPE_CHECKING

from .models import Point

if TYPE_CHECKING:
    from .models import ViewportState


def to_screen(point: Point, viewport: "ViewportState") -> Point:
    """Map a world-space point to screen space."""
    scale = viewport.scale
    return Point(
        x=(point.x - viewport.scroll_left) * scale,
        y=(point.y - viewport.scroll_top) * scale,
    )


def to_world(point: Point, viewport: "ViewportState") -> Point:
    """Map a screen-space point to world space."""
    scale = viewport.scale
    return Point(
        x=point.x / scale + viewport.scroll_left,
        y=point.y / scale + viewport.scroll_top,
    )


def delta_to_world(delta: Point, viewport: "ViewportState") -> Point:
    """Scale a screen-space displacement into world units (no offset)."""
    scale = viewport.scale
    return Point(x=delta.x / scale, y=delta.y / scale)
