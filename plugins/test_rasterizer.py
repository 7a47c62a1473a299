"""Tests for the rasterizer: traversal order, determinism and state snapshots."""

import numpy as np

from texture_explorer.explorer import TextureExplorer
from texture_explorer.formulas import OFF
from texture_explorer.rasterizer import Pixel


def _all_off(width=2, height=2, domain=(0, 1, 0, 1)):
    return TextureExplorer(width, height, domain=domain, red=OFF, green=OFF, blue=OFF)


def test_two_by_two_all_off_is_black():
    explorer = _all_off()
    pixels = list(explorer.pixels())
    assert pixels == [
        Pixel(0.0, 0.0, (0.0, 0.0, 0.0)),
        Pixel(0.0, 0.5, (0.0, 0.0, 0.0)),
        Pixel(0.5, 0.0, (0.0, 0.0, 0.0)),
        Pixel(0.5, 0.5, (0.0, 0.0, 0.0)),
    ]


def test_pixel_count_and_column_major_order():
    explorer = TextureExplorer(7, 5, domain=(0, 7, 0, 5))
    pixels = list(explorer.pixels())
    assert len(pixels) == 7 * 5
    coords = [(p.x, p.y) for p in pixels]
    assert coords == [(float(c), float(r)) for c in range(7) for r in range(5)]


def test_pixels_are_lazy_and_restartable():
    explorer = TextureExplorer(3, 3, domain=(0, 3, 0, 3))
    stream = explorer.pixels()
    first = next(stream)
    assert first.x == 0.0 and first.y == 0.0
    # A new pass starts from the first cell again
    assert list(explorer.pixels())[0] == first
    assert len(list(stream)) == 8


def test_colors_are_not_clamped():
    explorer = TextureExplorer(2, 2, domain=(0, 1, 0, 1))
    explorer.set_texture(2)
    pixels = list(explorer.pixels())
    # green 2 is 37x + y
    assert pixels[3].color[1] == 19.0
    assert pixels[0].color[1] == 0.0


def test_determinism():
    explorer = TextureExplorer(16, 12)
    explorer.set_channel("red", 7)
    explorer.set_channel("green", 4)
    explorer.set_channel("blue", 9)
    a = list(explorer.pixels())
    b = list(explorer.pixels())
    assert a == b
    assert explorer.render_float().tobytes() == explorer.render_float().tobytes()


def test_render_matches_pixel_stream():
    explorer = TextureExplorer(6, 4, domain=(-2, 2, -1, 3))
    explorer.set_channel("red", 1)
    explorer.set_channel("green", 8)
    explorer.set_channel("blue", 5)
    frame = explorer.render_float()
    assert frame.shape == (4, 6, 3)
    for i, pixel in enumerate(explorer.pixels()):
        col, row = divmod(i, 4)
        assert tuple(frame[row, col]) == pixel.color


def test_state_is_snapshotted_per_pass():
    """Mutations made mid-pass only affect the next pass."""
    explorer = _all_off()
    stream = explorer.pixels()
    next(stream)
    explorer.set_channel("red", 2)
    explorer.set_domain(10, 20, 10, 20)
    rest = list(stream)
    assert all(p.color == (0.0, 0.0, 0.0) for p in rest)
    assert [(p.x, p.y) for p in rest] == [(0.0, 0.5), (0.5, 0.0), (0.5, 0.5)]

    fresh = list(explorer.pixels())
    assert fresh[0].x == 10.0
    assert any(p.color[0] != 0.0 for p in fresh)


def test_frame_values_are_finite():
    explorer = TextureExplorer(50, 50)
    for index in range(10):
        explorer.set_texture(index)
        assert np.isfinite(explorer.render_float()).all()
