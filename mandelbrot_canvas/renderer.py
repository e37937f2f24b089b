"""
Synchronous Mandelbrot renderer.

render() is the entrypoint: given a viewport and canvas size it returns a
fresh RGBA buffer (row-major, top-left origin, 4 bytes per pixel).

MandelbrotRenderer wraps the same computation for the interactive app:
it keeps the buffer and palette for the current canvas size so they are
reallocated only on resize or when settings change. Every call still
recomputes every pixel; there is no incremental or cached path.
"""

import logging
import time

import numpy as np

from .colormaps import build_palette
from .compute import render_rgba

logger = logging.getLogger(__name__)


DEFAULT_MAX_ITER = 500


def render(viewport, width, height, max_iter=DEFAULT_MAX_ITER):
    """
    Render the Mandelbrot set for a viewport.

    Args:
        viewport: Viewport (center_x, center_y, zoom > 0)
        width, height: Canvas dimensions, both > 0
        max_iter: Maximum iteration count, >= 0

    Returns:
        Flat uint8 numpy array of length width * height * 4
    """
    out = np.empty(width * height * 4, dtype=np.uint8)
    _render_into(out, viewport, width, height, max_iter, build_palette(max_iter))
    return out


def _render_into(out, viewport, width, height, max_iter, palette):
    render_rgba(
        out, width, height,
        float(viewport.center_x), float(viewport.center_y), float(viewport.zoom),
        max_iter, palette
    )


class MandelbrotRenderer:
    """
    Owns the pixel buffer for the current canvas size.

    Usage:
        renderer = MandelbrotRenderer(800, 600, max_iter=500)
        buffer = renderer.render(viewport)
        renderer.resize(1024, 768)

    Attributes:
        width, height: Canvas dimensions
        max_iter: Maximum iteration count
        buffer: Flat RGBA uint8 array, overwritten by every render
    """

    def __init__(self, width, height, max_iter=DEFAULT_MAX_ITER):
        self.width = width
        self.height = height
        self.max_iter = max_iter
        self.palette = build_palette(max_iter)
        self.buffer = np.zeros(width * height * 4, dtype=np.uint8)
        self.last_render_ms = None

    def resize(self, width, height):
        """Reallocate the buffer for a new canvas size."""
        if (width, height) == (self.width, self.height):
            return False
        logger.debug("resize %dx%d -> %dx%d", self.width, self.height, width, height)
        self.width = width
        self.height = height
        self.buffer = np.zeros(width * height * 4, dtype=np.uint8)
        return True

    def render(self, viewport):
        """Recompute the whole canvas for viewport and return the buffer."""
        start = time.perf_counter()
        _render_into(self.buffer, viewport, self.width, self.height,
                     self.max_iter, self.palette)
        self.last_render_ms = (time.perf_counter() - start) * 1000
        logger.debug("rendered %dx%d (max_iter=%d) in %.1f ms",
                     self.width, self.height, self.max_iter, self.last_render_ms)
        return self.buffer

