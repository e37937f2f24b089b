"""
View state and pan/zoom interaction.

The Viewport is the only state shared between renders. It is passed to
the renderer explicitly and changed only by the PanZoomController, which
turns pointer and wheel input into viewport updates.

Controller states:
    IDLE      -- no drag in progress
    DRAGGING  -- pointer is down; moves pan the view

    IDLE --pointer_down--> DRAGGING --pointer_up / pointer_leave--> IDLE
"""

import logging
from dataclasses import dataclass

from .compute import pixel_scale

logger = logging.getLogger(__name__)


IDLE = 'idle'
DRAGGING = 'dragging'

# Wheel zoom factors: zoom is divided by these
ZOOM_IN_FACTOR = 0.9
ZOOM_OUT_FACTOR = 1.1


@dataclass
class Viewport:
    """
    Center and zoom of the view on the complex plane.

    zoom must stay strictly positive; the renderer does not check it.
    """

    center_x: float = -0.75
    center_y: float = 0.0
    zoom: float = 1.0

    def pan(self, dx, dy, width):
        """Move the view by a pixel delta, the way dragging the image would."""
        scale = pixel_scale(width, self.zoom)
        self.center_x -= dx * scale
        self.center_y -= dy * scale

    def zoom_by(self, factor):
        """Divide the zoom level by factor (> 1 zooms out, < 1 zooms in)."""
        self.zoom /= factor

    def copy(self):
        return Viewport(self.center_x, self.center_y, self.zoom)


class PanZoomController:
    """
    Two-state machine translating pointer input into viewport changes.

    Every handler that changes the view returns True so the caller knows
    a new render is needed.

    Usage:
        controller = PanZoomController(Viewport(), width=800)
        controller.pointer_down(10, 10)
        if controller.pointer_move(30, 10):
            buffer = render(controller.viewport, 800, 600)
        controller.pointer_up()
    """

    def __init__(self, viewport, width, zoom_in_factor=ZOOM_IN_FACTOR,
                 zoom_out_factor=ZOOM_OUT_FACTOR):
        self.viewport = viewport
        self.width = width
        self.zoom_in_factor = zoom_in_factor
        self.zoom_out_factor = zoom_out_factor
        self.home = viewport.copy()

        self.state = IDLE
        self.start_x = None
        self.start_y = None

    @property
    def dragging(self):
        return self.state == DRAGGING

    def pointer_down(self, x, y):
        self.state = DRAGGING
        self.start_x = x
        self.start_y = y

    def pointer_move(self, x, y):
        """Pan by the distance moved since the last event; ignored unless dragging."""
        if self.state != DRAGGING:
            return False
        dx = x - self.start_x
        dy = y - self.start_y
        self.viewport.pan(dx, dy, self.width)
        self.start_x = x
        self.start_y = y
        return True

    def pointer_up(self):
        self._end_drag()

    def pointer_leave(self):
        self._end_drag()

    def _end_drag(self):
        self.state = IDLE
        self.start_x = None
        self.start_y = None

    def wheel(self, delta_y):
        """Scrolling down (positive delta) zooms out, up zooms in."""
        factor = self.zoom_out_factor if delta_y > 0 else self.zoom_in_factor
        return self.zoom_by(factor)

    def zoom_by(self, factor):
        self.viewport.zoom_by(factor)
        logger.debug("zoom -> %g", self.viewport.zoom)
        return True

    def pan_by(self, dx, dy):
        self.viewport.pan(dx, dy, self.width)
        return True

    def resize(self, width):
        self.width = width

    def reset(self):
        """Go back to the view the controller started with."""
        self.viewport.center_x = self.home.center_x
        self.viewport.center_y = self.home.center_y
        self.viewport.zoom = self.home.zoom
        self._end_drag()
        return True
