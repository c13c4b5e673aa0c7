"""Exceptions raised by flowcanvas.

Interaction outcomes (refused gestures, invalid drops) are never errors;
these are only for programmer mistakes and malformed input files.
"""


class FlowCanvasError(Exception):
    """Base class for flowcanvas errors."""


class ScriptError(FlowCanvasError):
    """A replay script could not be parsed or contains an unknown event."""
