from conftest import make_block
from flowcanvas import ScrollController, ViewportConfig, ViewportState


def make_scroll(size=(800, 600), **config):
    state = ViewportState()
    measured = list(size)
    scroll = ScrollController(state, ViewportConfig(**config), lambda: tuple(measured))
    scroll.mount()
    return state, scroll, measured


def test_mount_seeds_extent_from_measured_size():
    state, scroll, _ = make_scroll((800, 600))

    assert (state.scroll_left, state.scroll_top) == (0, 0)
    assert (state.content_width, state.content_height) == (800, 600)


def test_content_height_follows_lowest_block():
    state, scroll, _ = make_scroll()

    scroll.sync_blocks([make_block("a", 0, 100), make_block("b", 0, 500)])
    assert state.content_height == 900

    scroll.sync_blocks([make_block("a", 0, 100), make_block("b", 0, 500), make_block("c", 0, 1000)])
    assert state.content_height == 1400


def test_content_height_grows_when_a_block_moves_lower():
    state, scroll, _ = make_scroll()
    scroll.sync_blocks([make_block("a", 0, 100)])

    scroll.sync_blocks([make_block("a", 0, 2000)])

    assert state.content_height == 2400


def test_content_height_kept_when_a_block_moves_higher():
    state, scroll, _ = make_scroll()
    scroll.sync_blocks([make_block("a", 0, 700)])

    scroll.sync_blocks([make_block("a", 0, 100)])

    assert state.content_height == 1100


def test_removing_every_block_falls_back_to_measured_height():
    state, scroll, _ = make_scroll((800, 600))
    scroll.sync_blocks([make_block("a", 0, 900)])
    assert state.content_height == 1300

    scroll.sync_blocks([])

    assert state.content_height == 600


def test_content_width_never_shrinks():
    state, scroll, _ = make_scroll()

    scroll.sync_blocks([make_block("a", 0, 0, children_width=1200)])
    assert state.content_width == 1200

    scroll.sync_blocks([make_block("a", 0, 0, children_width=900)])
    assert state.content_width == 1200


def test_unmeasured_children_width_is_ignored():
    state, scroll, _ = make_scroll()

    scroll.sync_blocks([make_block("a", 0, 0, children_width=float("nan")), make_block("b", 0, 0)])

    assert state.content_width == 800


def test_resize_grows_extent():
    state, scroll, measured = make_scroll((800, 600))
    measured[:] = [1024, 768]

    assert scroll.resize()

    assert (scroll.client_width, scroll.client_height) == (1024, 768)
    assert (state.content_width, state.content_height) == (1024, 768)


def test_scroll_offsets_are_never_negative():
    state, scroll, _ = make_scroll()

    scroll.scroll_to(-10, 50)
    assert (state.scroll_left, state.scroll_top) == (0, 50)

    scroll.scroll_by(dy=-80)
    assert state.scroll_top == 0


def test_view_box_ignores_horizontal_scroll_by_default():
    state, scroll, _ = make_scroll()
    scroll.scroll_to(50, 30)

    view_box = scroll.view_box()

    assert (view_box.left, view_box.top) == (0, 30)
    assert str(view_box) == "0 30 800 600"


def test_view_box_follows_horizontal_scroll_when_enabled():
    state, scroll, _ = make_scroll(horizontal_pan_in_viewbox=True)
    scroll.scroll_to(50, 30)

    assert str(scroll.view_box()) == "50 30 800 600"
