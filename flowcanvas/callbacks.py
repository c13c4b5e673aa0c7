"""
Optional host callbacks.

The viewport never mutates the host model; it proposes mutations through
these handlers. Every handler is optional. Calling one the host did not
supply is a no-op.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from .models import Block, Pin, Point

logger = logging.getLogger(__name__)


@dataclass
class HostCallbacks:
    on_container_mouse_click: Optional[Callable[[], Any]] = None
    on_add_new_element: Optional[Callable[[Pin, Point], Any]] = None
    on_connect_to_new_block: Optional[Callable[[Pin, Point], Any]] = None
    on_connect_pins: Optional[Callable[[Pin, Pin], Any]] = None
    on_reconnecting_pins: Optional[Callable[[Pin, Pin], Any]] = None
    on_delete_block: Optional[Callable[[Block], Any]] = None
    on_element_edit: Optional[Callable[[str], Any]] = None
    on_block_move: Optional[Callable[[str, Point], Any]] = None

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def provides(self, name: str) -> bool:
        return getattr(self, name) is not None

    def invoke(self, name: str, *args) -> bool:
        """
        Call handler `name` if the host supplied it.

        Exceptions raised by the handler propagate to the caller.

        Returns:
            True if a handler was called
        """
        handler = getattr(self, name)
        if handler is None:
            logger.debug("no %s handler, skipping", name)
            return False
        handler(*args)
        return True
