"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains the performance-critical pieces of a render:
- Mapping a pixel of the canvas to a point c of the complex plane
- The escape-time iteration z <- z^2 + c
- The full-buffer render loop writing RGBA bytes

The loops are compiled with Numba but deliberately run on a single
thread and without fastmath: every pixel must come out bit-identical
to the plain float64 reference computation.
"""

import numpy as np
from numba import jit

from .colormaps import build_palette


ESCAPE_RADIUS_SQ = 4.0  # |z|^2 > 4  <=>  |z| > 2


@jit(nopython=True, cache=True)
def pixel_scale(width, zoom):
    """Size of one pixel in complex-plane units (same on both axes)."""
    return 2.0 / (width * zoom)


@jit(nopython=True, cache=True)
def map_pixel_to_complex(px, py, width, height, center_x, center_y, zoom):
    """
    Convert pixel coordinates to a point on the complex plane.

    Zoom is defined against the canvas width: at zoom 1 the visible real
    axis spans 2 units whatever the canvas size. The vertical axis uses
    the same per-pixel scale so the aspect ratio is preserved.

    Args:
        px, py: Pixel coordinates (top-left origin)
        width, height: Canvas dimensions in pixels
        center_x, center_y: Complex point shown at the canvas center
        zoom: Zoom level, must be > 0

    Returns:
        (x0, y0): Real and imaginary parts of c
    """
    scale = pixel_scale(width, zoom)
    x0 = (px - width / 2) * scale + center_x
    y0 = (py - height / 2) * scale + center_y
    return x0, y0


@jit(nopython=True, cache=True)
def evaluate(x0, y0, max_iter):
    """
    Run the escape-time iteration for c = x0 + i*y0.

    Returns:
        Number of iterations performed before |z| exceeded 2, or max_iter
        if the point never escaped (treated as inside the set).
    """
    x = 0.0
    y = 0.0
    iteration = 0
    while x * x + y * y <= ESCAPE_RADIUS_SQ and iteration < max_iter:
        xtemp = x * x - y * y + x0
        y = 2 * x * y + y0
        x = xtemp
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def render_rgba(out, width, height, center_x, center_y, zoom, max_iter, palette):
    """
    Compute every pixel of the canvas and write it into an RGBA buffer.

    Args:
        out: Flat uint8 array of length width * height * 4 (modified in place)
        width, height: Canvas dimensions
        center_x, center_y, zoom: Viewport
        max_iter: Maximum iteration count
        palette: Table from colormaps.build_palette(max_iter)
    """
    for py in range(height):
        for px in range(width):
            x0, y0 = map_pixel_to_complex(px, py, width, height, center_x, center_y, zoom)
            n = evaluate(x0, y0, max_iter)

            idx = (py * width + px) * 4
            out[idx] = palette[n, 0]
            out[idx + 1] = palette[n, 1]
            out[idx + 2] = palette[n, 2]
            out[idx + 3] = 255  # opaque


def warmup_jit():
    """
    Warm up JIT compilation with a tiny canvas.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first interactive frame.
    """
    palette = build_palette(10)
    dummy = np.zeros(4 * 4 * 4, dtype=np.uint8)
    render_rgba(dummy, 4, 4, -0.75, 0.0, 1.0, 10, palette)
