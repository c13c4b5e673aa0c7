import pytest

from flowcanvas import Block, Connection, HostCallbacks, Pin, PinKind, Point, Viewport, ViewportConfig
from flowcanvas.events import BACKGROUND, PointerButton, PointerEvent


class CallLog:
    """Records every host callback invocation as (name, args)."""

    def __init__(self):
        self.calls = []

    def callbacks(self, *omit) -> HostCallbacks:
        handlers = {
            name: self._handler(name)
            for name in HostCallbacks.names()
            if name not in omit
        }
        return HostCallbacks(**handlers)

    def _handler(self, name):
        def record(*args):
            self.calls.append((name, args))
        return record

    def named(self, name):
        return [args for called, args in self.calls if called == name]


def make_block(block_id, x, y, width=150, height=80, children_width=None):
    return Block(id=block_id, x=x, y=y, width=width, height=height, children_width=children_width)


def make_pin(pin_id, block_id, kind, dx, dy, connected=False):
    return Pin(id=pin_id, block_id=block_id, kind=kind, offset=Point(x=dx, y=dy), connected=connected)


def press(x, y, target=BACKGROUND, button=PointerButton.PRIMARY):
    return PointerEvent(x=x, y=y, target=target, button=button)


@pytest.fixture
def log():
    return CallLog()


@pytest.fixture
def graph():
    """
    Three blocks: a (source), b and c (targets).

    a.out is unconnected; b.in and c.in are unconnected inputs.
    """
    blocks = [
        make_block("a", 0, 0),
        make_block("b", 300, 0),
        make_block("c", 300, 200),
    ]
    pins = [
        make_pin("a.out", "a", PinKind.OUTPUT, 150, 40),
        make_pin("b.in", "b", PinKind.INPUT, 0, 40),
        make_pin("c.in", "c", PinKind.INPUT, 0, 40),
    ]
    return blocks, pins, []


@pytest.fixture
def connected_graph():
    """a.out -> b.in is connected; c.in is free."""
    blocks = [
        make_block("a", 0, 0),
        make_block("b", 300, 0),
        make_block("c", 300, 200),
    ]
    pins = [
        make_pin("a.out", "a", PinKind.OUTPUT, 150, 40, connected=True),
        make_pin("b.in", "b", PinKind.INPUT, 0, 40, connected=True),
        make_pin("c.in", "c", PinKind.INPUT, 0, 40),
    ]
    connections = [Connection(id="c1", from_pin="a.out", to_pin="b.in")]
    return blocks, pins, connections


@pytest.fixture
def make_viewport(log):
    def factory(graph=((), (), ()), size=(800, 600), callbacks=None, **config):
        blocks, pins, connections = graph
        return Viewport(
            measure=lambda: size,
            callbacks=callbacks if callbacks is not None else log.callbacks(),
            config=ViewportConfig(**config),
            blocks=blocks,
            pins=pins,
            connections=connections,
        )
    return factory
