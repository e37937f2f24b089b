import numpy as np
import pytest

from mandelbrot_canvas.colormaps import colorize
from mandelbrot_canvas.compute import evaluate, map_pixel_to_complex
from mandelbrot_canvas.renderer import MandelbrotRenderer, render
from mandelbrot_canvas.viewport import Viewport


def reference_pixels(viewport, width, height, max_iter):
    """Per-pixel map -> evaluate -> colorize, in row-major order."""
    out = []
    for py in range(height):
        for px in range(width):
            x0, y0 = map_pixel_to_complex(px, py, width, height, viewport.center_x,
                                          viewport.center_y, viewport.zoom)
            out.extend(colorize(evaluate(x0, y0, max_iter), max_iter))
            out.append(255)
    return np.array(out, dtype=np.uint8)


def test_two_by_two_default_view():
    buf = render(Viewport(-0.75, 0.0, 1.0), 2, 2, 500)
    assert buf.dtype == np.uint8
    assert len(buf) == 16
    assert list(buf[3::4]) == [255, 255, 255, 255]


def test_default_max_iter():
    v = Viewport(-0.75, 0.0, 1.0)
    assert np.array_equal(render(v, 3, 2), render(v, 3, 2, 500))


@pytest.mark.parametrize("width,height", [(1, 1), (2, 2), (7, 3), (3, 7), (32, 24)])
def test_buffer_length(width, height):
    assert render(Viewport(), width, height, 20).size == width * height * 4


def test_matches_per_pixel_reference():
    v = Viewport(-0.5, 0.1, 1.3)
    buf = render(v, 12, 9, 60)
    assert np.array_equal(buf, reference_pixels(v, 12, 9, 60))


def test_deep_interior_is_black():
    buf = render(Viewport(0.0, 0.0, 1e6), 4, 3, 100).reshape(3, 4, 4)
    assert not buf[..., :3].any()
    assert (buf[..., 3] == 255).all()


def test_far_exterior_is_colored():
    buf = render(Viewport(10.0, 10.0, 1e6), 2, 2, 100).reshape(2, 2, 4)
    # escapes on the first update -> colorize(1, 100)
    assert tuple(buf[0, 0, :3]) == colorize(1, 100)


def test_render_is_repeatable():
    v = Viewport(-0.75, 0.0, 2.0)
    assert np.array_equal(render(v, 16, 16, 80), render(v, 16, 16, 80))


def test_render_does_not_touch_viewport():
    v = Viewport(-0.75, 0.0, 2.0)
    render(v, 8, 8, 30)
    assert v == Viewport(-0.75, 0.0, 2.0)


def test_renderer_matches_function():
    v = Viewport(-0.75, 0.0, 1.0)
    r = MandelbrotRenderer(10, 6, max_iter=40)
    assert np.array_equal(r.render(v), render(v, 10, 6, 40))
    assert r.last_render_ms is not None


def test_renderer_overwrites_buffer():
    r = MandelbrotRenderer(6, 6, max_iter=40)
    first = r.render(Viewport(0.0, 0.0, 1e6)).copy()
    second = r.render(Viewport(10.0, 10.0, 1e6))
    assert not np.array_equal(first, second)
    assert np.array_equal(second, render(Viewport(10.0, 10.0, 1e6), 6, 6, 40))


def test_renderer_resize():
    r = MandelbrotRenderer(4, 4, max_iter=10)
    assert r.resize(4, 4) is False
    assert r.resize(8, 3) is True
    assert r.render(Viewport()).size == 8 * 3 * 4

