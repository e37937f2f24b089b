"""
Escape-time coloring for Mandelbrot renders.

Points that never escape are painted black. Escaping points get a hue
proportional to how many iterations they survived, at full saturation
and 50% lightness, so the hue wheel is swept exactly once between 0 and
max_iter.

Because the color depends only on the iteration count, build_palette()
precomputes one RGB row per count and the render loop just indexes it.
"""

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def hue_to_rgb(p, q, t):
    """One channel of the HSL -> RGB conversion, t being the shifted hue."""
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


@jit(nopython=True, cache=True)
def _to_byte(v):
    # Round half up, like the browser's Math.round
    return int(np.floor(v * 255 + 0.5))


@jit(nopython=True, cache=True)
def hsl_to_rgb(h, s, l):
    """
    Convert HSL (each 0-1) to RGB (each 0-255).

    Args:
        h: Hue as a fraction of the full circle
        s: Saturation
        l: Lightness

    Returns:
        (r, g, b) tuple of ints
    """
    if s == 0:
        # achromatic
        r = g = b = l * 1.0
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = hue_to_rgb(p, q, h + 1 / 3)
        g = hue_to_rgb(p, q, h)
        b = hue_to_rgb(p, q, h - 1 / 3)
    return _to_byte(r), _to_byte(g), _to_byte(b)


@jit(nopython=True, cache=True)
def colorize(iteration_count, max_iter):
    """
    Map an escape-time iteration count to an RGB color.

    Args:
        iteration_count: Value returned by compute.evaluate
        max_iter: Iteration cap used for that evaluation

    Returns:
        (r, g, b) tuple of ints in [0, 255]. Points in the set are black.
    """
    if iteration_count == max_iter:
        r = g = b = 0
    else:
        hue = (iteration_count * 360 / max_iter) % 360
        r, g, b = hsl_to_rgb(hue / 360, 1.0, 0.5)
    return r, g, b


@jit(nopython=True, cache=True)
def build_palette(max_iter):
    """
    Build the lookup table used by the render loop.

    Returns:
        uint8 array of shape (max_iter + 1, 3); row n is colorize(n, max_iter).
        The last row is the inside color (black).
    """
    palette = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for n in range(max_iter):
        r, g, b = colorize(n, max_iter)
        palette[n, 0] = r
        palette[n, 1] = g
        palette[n, 2] = b
    return palette
