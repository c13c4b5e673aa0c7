"""
Flow Canvas - Interaction core of a node/flow diagram editor.

Pan, zoom, marquee selection, block dragging and connection routing over
a host-owned graph. The host supplies blocks, pins and connections and a
measure capability; the core reports proposed mutations through optional
callbacks and exposes descriptors for the renderer.
"""

from .models import (
    # Enums
    PinKind,
    # Geometry values
    Point,
    Rect,
    # Host model
    Block,
    Pin,
    Connection,
    ViewportState,
)

from .callbacks import HostCallbacks
from .config import ViewportConfig
from .errors import FlowCanvasError, ScriptError
from .events import HitTarget, PointerButton, PointerEvent, TargetKind
from .geometry import to_screen, to_world
from .graph import GraphIndex
from .scroll import ScrollController, ViewBox
from .selection import SelectionController, blocks_in_rect
from .state import (
    DraggingBlocks,
    DraggingConnection,
    Idle,
    InteractionState,
    Marqueeing,
    Panning,
    RouteMode,
)
from .validation import validate_graph, validation_summary, ValidationIssue, IssueSeverity
from .viewport import Viewport, ViewportSnapshot
from .zoom import TransformStyle, ZoomController
from .drag import DragController
from .connections import ConnectionRouter

__all__ = [
    # Enums
    "PinKind",
    "TargetKind",
    "PointerButton",
    "RouteMode",
    # Models
    "Point",
    "Rect",
    "Block",
    "Pin",
    "Connection",
    "ViewportState",
    # Events
    "HitTarget",
    "PointerEvent",
    # Interaction state
    "InteractionState",
    "Idle",
    "Panning",
    "Marqueeing",
    "DraggingBlocks",
    "DraggingConnection",
    # Geometry
    "to_screen",
    "to_world",
    # Controllers
    "Viewport",
    "ViewportSnapshot",
    "ZoomController",
    "ScrollController",
    "SelectionController",
    "DragController",
    "ConnectionRouter",
    "GraphIndex",
    "blocks_in_rect",
    # Descriptors
    "ViewBox",
    "TransformStyle",
    # Host integration
    "HostCallbacks",
    "ViewportConfig",
    # Validation
    "validate_graph",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
    # Errors
    "FlowCanvasError",
    "ScriptError",
]
