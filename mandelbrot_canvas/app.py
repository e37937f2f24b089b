"""
Main application module for the Mandelbrot canvas.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- User input (wheel zoom, drag pan, keyboard)
- Resizing the canvas with the window
- Drawing the rendered buffer to the screen

Every input that changes the view triggers one full, synchronous render.
"""

import logging
import os
from datetime import datetime

import pygame

from .compute import warmup_jit
from .renderer import MandelbrotRenderer
from .settings import load_settings
from .viewport import PanZoomController, Viewport

logger = logging.getLogger(__name__)


CAPTION = "Mandelbrot Set - Scroll to zoom, drag to pan, R to reset, S to save"


def make_surface(buffer, width, height):
    """Wrap an RGBA buffer in a pygame surface (shares memory with buffer)."""
    return pygame.image.frombuffer(buffer, (width, height), 'RGBA')


def save_frame(buffer, width, height, filename):
    """Write an RGBA buffer to an image file (format from the extension)."""
    surface = make_surface(buffer, width, height)
    pygame.image.save(surface, filename)
    logger.info("Image saved to: %s", filename)
    return filename


class MandelbrotApp:
    """
    Main application class for the Mandelbrot canvas.

    Handles the pygame window and event loop, and feeds input to the
    PanZoomController and the resulting viewport to the renderer.
    """

    def __init__(self, width=None, height=None, max_iter=None, viewport=None,
                 settings=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default from settings.json)
            height: Window height in pixels (default from settings.json)
            max_iter: Maximum iteration count (default from settings.json)
            viewport: Starting Viewport (default from settings.json)
            settings: Settings dict (default: load_settings())
        """
        self.settings = settings or load_settings()
        self.width = width or self.settings['width']
        self.height = height or self.settings['height']
        self.max_iter = max_iter if max_iter is not None else self.settings['max_iterations']

        if viewport is None:
            viewport = Viewport(
                self.settings['center_x'],
                self.settings['center_y'],
                self.settings['zoom'],
            )
        self.controller = PanZoomController(
            viewport, self.width,
            zoom_in_factor=self.settings['zoom_in_factor'],
            zoom_out_factor=self.settings['zoom_out_factor'],
        )

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        self.renderer = MandelbrotRenderer(self.width, self.height, self.max_iter)
        self.current_surface = None

        self.running = False

    @property
    def viewport(self):
        return self.controller.viewport

    def run(self):
        """Run the application main loop."""
        self._init_pygame()

        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        self._redraw()

        self.running = True
        while self.running:
            self._handle_events()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            need_render = False
            if event.type == pygame.MOUSEWHEEL:
                # pygame reports scroll-up as positive y, the reverse of a DOM wheel delta
                need_render = self.controller.wheel(-event.y)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.controller.pointer_down(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.controller.pointer_up()
            elif event.type == pygame.MOUSEMOTION:
                need_render = self.controller.pointer_move(*event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                self.controller.pointer_leave()
            elif event.type == pygame.VIDEORESIZE:
                need_render = self._resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                need_render = self._handle_key(event)

            if need_render:
                self._redraw()

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            return self.controller.reset()
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_s:
            self._save_image()
        return False

    def _resize(self, width, height):
        """Follow the window size; the buffer is reallocated to match."""
        if width <= 0 or height <= 0:
            return False
        self.width = width
        self.height = height
        self.controller.resize(width)
        self.screen = pygame.display.get_surface()
        return self.renderer.resize(width, height)

    def _redraw(self):
        """Render the current viewport and put it on screen."""
        pygame.display.set_caption("Computing...")
        buffer = self.renderer.render(self.viewport)
        self.current_surface = make_surface(buffer, self.width, self.height)
        self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()
        pygame.display.set_caption(CAPTION)

    def _save_image(self):
        """Save the frame currently on screen as a timestamped PNG."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        save_frame(self.renderer.buffer, self.width, self.height, filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)} - Mandelbrot Set")


def run(width=None, height=None, max_iter=None, viewport=None, settings=None):
    """
    Run the Mandelbrot canvas.

    Args:
        width: Window width
        height: Window height
        max_iter: Maximum iterations
        viewport: Starting Viewport
        settings: Settings dict (default: load_settings())
    """
    app = MandelbrotApp(width, height, max_iter, viewport, settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
