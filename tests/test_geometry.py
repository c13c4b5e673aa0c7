import pytest

from flowcanvas import Point, ViewportState, to_screen, to_world
from flowcanvas.geometry import delta_to_world


VIEWPORTS = [
    ViewportState(),
    ViewportState(scroll_left=120, scroll_top=45.5, zoom_level=100),
    ViewportState(scroll_left=0, scroll_top=300, zoom_level=25),
    ViewportState(scroll_left=33.3, scroll_top=7, zoom_level=175),
    ViewportState(scroll_left=1000, scroll_top=2000, zoom_level=400),
]

POINTS = [Point(x=0, y=0), Point(x=-50, y=12.25), Point(x=1234.5, y=987.1)]


@pytest.mark.parametrize("viewport", VIEWPORTS)
def test_to_world_inverts_to_screen(viewport):
    for p in POINTS:
        back = to_world(to_screen(p, viewport), viewport)
        assert back.x == pytest.approx(p.x)
        assert back.y == pytest.approx(p.y)


def test_to_screen_subtracts_scroll_then_scales():
    viewport = ViewportState(scroll_left=10, scroll_top=20, zoom_level=200)

    assert to_screen(Point(x=60, y=70), viewport) == Point(x=100, y=100)
    assert to_world(Point(x=100, y=100), viewport) == Point(x=60, y=70)


def test_origin_is_fixed_at_top_left():
    viewport = ViewportState(zoom_level=300)

    assert to_screen(Point(x=0, y=0), viewport) == Point(x=0, y=0)


def test_delta_to_world_ignores_scroll():
    viewport = ViewportState(scroll_left=500, scroll_top=500, zoom_level=50)

    assert delta_to_world(Point(x=10, y=-20), viewport) == Point(x=20, y=-40)
