"""
Viewport configuration.

Defaults match the stock editor behaviour. Every field can be overridden
from the environment with a FLOWCANVAS_ prefix, e.g. FLOWCANVAS_MAX_ZOOM=300.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, model_validator

ENV_PREFIX = "FLOWCANVAS_"


class ViewportConfig(BaseModel):
    """Tunable limits and policies for a Viewport."""
    min_zoom: int = Field(default=25, gt=0)
    max_zoom: int = Field(default=400, gt=0)
    default_zoom: int = 100
    zoom_step: int = Field(default=10, gt=0)  # Percentage points per wheel notch
    height_margin: float = Field(default=400.0, ge=0)  # Below the lowest block
    # Whether scroll_left shifts the connection overlay's viewBox.
    # Off by default: the overlay spans the full content width and scrolls
    # together with the blocks, so only the vertical offset is applied.
    horizontal_pan_in_viewbox: bool = False
    # Max pointer travel (screen px) for a press/release to count as a click
    click_tolerance: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def check_zoom_range(self) -> "ViewportConfig":
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) exceeds max_zoom ({self.max_zoom})")
        if not self.min_zoom <= self.default_zoom <= self.max_zoom:
            raise ValueError(
                f"default_zoom {self.default_zoom} outside [{self.min_zoom}, {self.max_zoom}]"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ViewportConfig":
        """Build a config from FLOWCANVAS_* variables, then explicit overrides."""
        if environ is None:
            environ = os.environ
        data = {}
        for name in cls.model_fields:
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                data[name] = value
        data.update(overrides)
        return cls(**data)
