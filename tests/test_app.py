import numpy as np
import pygame
import pytest

from mandelbrot_canvas.app import MandelbrotApp
from mandelbrot_canvas.renderer import render
from mandelbrot_canvas.settings import DEFAULTS
from mandelbrot_canvas.viewport import DRAGGING, IDLE, Viewport

WIDTH, HEIGHT, MAX_ITER = 40, 30, 50


@pytest.fixture
def app(monkeypatch):
    """An app running against SDL's dummy video driver (no window)."""
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    app = MandelbrotApp(WIDTH, HEIGHT, MAX_ITER, Viewport(-0.75, 0.0, 1.0),
                        settings=dict(DEFAULTS))
    app._init_pygame()
    pygame.event.clear()
    app._redraw()
    app.running = True
    yield app
    pygame.quit()


def send(app, event_type, **attrs):
    pygame.event.post(pygame.event.Event(event_type, **attrs))
    app._handle_events()


def shown(app):
    """The buffer currently on screen equals a fresh render of the view."""
    expected = render(app.viewport, app.width, app.height, MAX_ITER)
    return np.array_equal(app.renderer.buffer, expected)


def test_scroll_up_zooms_in(app):
    send(app, pygame.MOUSEWHEEL, x=0, y=1, flipped=False)
    assert app.viewport.zoom == pytest.approx(1 / 0.9)
    assert shown(app)


def test_scroll_down_zooms_out(app):
    send(app, pygame.MOUSEWHEEL, x=0, y=-1, flipped=False)
    assert app.viewport.zoom == pytest.approx(1 / 1.1)
    assert shown(app)


def test_drag_pans_and_rerenders(app):
    send(app, pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1)
    assert app.controller.state == DRAGGING

    send(app, pygame.MOUSEMOTION, pos=(20, 10), rel=(10, 0), buttons=(1, 0, 0))
    assert app.viewport.center_x == pytest.approx(-0.75 - 10 * 2 / WIDTH)
    assert app.viewport.center_y == 0.0
    assert shown(app)

    send(app, pygame.MOUSEBUTTONUP, pos=(20, 10), button=1)
    assert app.controller.state == IDLE


def test_right_button_does_not_drag(app):
    send(app, pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=3)
    assert app.controller.state == IDLE


def test_leaving_window_ends_drag(app):
    send(app, pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1)
    send(app, pygame.WINDOWLEAVE)
    assert app.controller.state == IDLE

    send(app, pygame.MOUSEMOTION, pos=(30, 25), rel=(20, 15), buttons=(0, 0, 0))
    assert app.viewport == Viewport(-0.75, 0.0, 1.0)


def test_resize_reallocates_and_rerenders(app):
    send(app, pygame.VIDEORESIZE, w=50, h=20, size=(50, 20))
    assert (app.width, app.height) == (50, 20)
    assert app.controller.width == 50
    assert app.renderer.buffer.size == 50 * 20 * 4
    assert shown(app)


def test_reset_key(app):
    send(app, pygame.MOUSEWHEEL, x=0, y=1, flipped=False)
    send(app, pygame.KEYDOWN, key=pygame.K_r, mod=0, unicode='r', scancode=0)
    assert app.viewport == Viewport(-0.75, 0.0, 1.0)
    assert shown(app)


def test_quit_stops_loop(app):
    send(app, pygame.QUIT)
    assert app.running is False
