"""
Zoom level management.

The zoom level is an integer percentage clamped to the configured range.
Changing it never touches the scroll offsets.
"""

import logging

from pydantic import BaseModel, ConfigDict

from .config import ViewportConfig
from .models import Point, ViewportState

logger = logging.getLogger(__name__)

# Wheel delta reported for one notch of a standard mouse wheel
WHEEL_NOTCH = 120


class TransformStyle(BaseModel):
    """Size and scale transform applied to the content surface."""
    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    scale: float
    origin: Point = Point()

    def css(self) -> str:
        return (
            f"left: {self.origin.x:g}px; top: {self.origin.y:g}px; "
            f"width:{self.width:g}px; height:{self.height:g}px; "
            f"transform-origin: 0 0; transform: scale({self.scale:g});"
        )

    def __str__(self) -> str:
        return self.css()


class ZoomController:
    """Owns `zoom_level` on the shared viewport state."""

    def __init__(self, state: ViewportState, config: ViewportConfig):
        self._state = state
        self._config = config
        self._state.zoom_level = self.clamp(config.default_zoom)
        self._wheel_remainder = 0.0  # Fractional zoom percent from small wheel deltas

    @property
    def zoom_level(self) -> int:
        return self._state.zoom_level

    @property
    def scale(self) -> float:
        return self._state.scale

    def clamp(self, level: float) -> int:
        return int(max(self._config.min_zoom, min(round(level), self._config.max_zoom)))

    def set_zoom(self, level: float) -> bool:
        """Set the zoom level. Returns True if it changed."""
        clamped = self.clamp(level)
        if clamped == self._state.zoom_level:
            return False
        logger.debug("zoom %d%% -> %d%%", self._state.zoom_level, clamped)
        self._state.zoom_level = clamped
        return True

    def zoom_in(self, steps: float = 1) -> bool:
        return self.set_zoom(self._state.zoom_level + steps * self._config.zoom_step)

    def zoom_out(self, steps: float = 1) -> bool:
        return self.set_zoom(self._state.zoom_level - steps * self._config.zoom_step)

    def zoom_by_wheel(self, delta_y: float) -> bool:
        """
        Zoom in for a negative (away from user) wheel delta, out for positive.

        One WHEEL_NOTCH is one zoom step. Smaller deltas, as sent by
        trackpads, add up until they amount to a whole percent.
        """
        self._wheel_remainder -= delta_y * self._config.zoom_step / WHEEL_NOTCH
        whole = int(self._wheel_remainder)
        if not whole:
            return False
        self._wheel_remainder -= whole
        return self.set_zoom(self._state.zoom_level + whole)

    def reset(self) -> bool:
        return self.set_zoom(self._config.default_zoom)

    def transform_style(self) -> TransformStyle:
        return TransformStyle(
            width=self._state.content_width,
            height=self._state.content_height,
            scale=self.scale,
        )
