"""
Mandelbrot Canvas Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled computation.

Quick Start:
    from mandelbrot_canvas import render, Viewport
    rgba = render(Viewport(-0.75, 0.0, 1.0), 800, 600)

Or from command line:
    python -m mandelbrot_canvas

Package Structure:
    - compute.py: JIT-compiled pixel mapping, escape-time iteration, render loop
    - colormaps.py: HSL hue coloring of iteration counts
    - viewport.py: View state and the pan/zoom interaction state machine
    - renderer.py: render() entrypoint and buffer-owning renderer
    - settings.py: Defaults loaded from settings.json
    - app.py: Pygame window and event loop

Controls:
    - Scroll: Zoom in/out
    - Drag: Pan around
    - R: Reset to default view
    - S: Save the current frame as PNG
    - ESC: Quit
"""

from .compute import map_pixel_to_complex, evaluate
from .colormaps import colorize, hsl_to_rgb, build_palette
from .renderer import render, MandelbrotRenderer
from .viewport import Viewport, PanZoomController

__version__ = "1.0.0"
__all__ = [
    "render",
    "MandelbrotRenderer",
    "Viewport",
    "PanZoomController",
    "map_pixel_to_complex",
    "evaluate",
    "colorize",
    "hsl_to_rgb",
    "build_palette",
]
