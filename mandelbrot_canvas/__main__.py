"""
Command line entry point: python -m mandelbrot_canvas

Without --output, opens the interactive window. With --output, renders
the requested view once and writes it to an image file.
"""

import logging
from argparse import ArgumentParser, ArgumentTypeError

from .settings import load_settings
from .viewport import Viewport

logger = logging.getLogger(__name__)


def _positive_int(value):
    n = int(value)
    if n <= 0:
        raise ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def _non_negative_int(value):
    n = int(value)
    if n < 0:
        raise ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return n


def _positive_float(value):
    x = float(value)
    if not x > 0:
        raise ArgumentTypeError(f"expected a positive number, got {value}")
    return x


def build_parser(settings):
    parser = ArgumentParser(prog='mandelbrot_canvas',
                            description='Explore the Mandelbrot set: scroll to zoom, drag to pan.')
    parser.add_argument('--width', type=_positive_int, default=settings['width'],
                        help='canvas width in pixels (default: %(default)s)')
    parser.add_argument('--height', type=_positive_int, default=settings['height'],
                        help='canvas height in pixels (default: %(default)s)')
    parser.add_argument('--max-iterations', type=_non_negative_int,
                        default=settings['max_iterations'],
                        help='iterations before a point counts as inside the set (default: %(default)s)')
    parser.add_argument('--center-x', type=float, default=settings['center_x'],
                        help='real part of the view center (default: %(default)s)')
    parser.add_argument('--center-y', type=float, default=settings['center_y'],
                        help='imaginary part of the view center (default: %(default)s)')
    parser.add_argument('--zoom', type=_positive_float, default=settings['zoom'],
                        help='zoom level, 1 shows 2 units across the width (default: %(default)s)')
    parser.add_argument('--output', type=str, default=None,
                        help='render once to this image file instead of opening a window')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging (render timings)')
    return parser


def main(argv=None):
    settings = load_settings()
    opt = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if opt.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    viewport = Viewport(opt.center_x, opt.center_y, opt.zoom)

    if opt.output:
        from .app import save_frame
        from .renderer import render

        logger.debug("rendering %s at %dx%d", viewport, opt.width, opt.height)
        buffer = render(viewport, opt.width, opt.height, opt.max_iterations)
        save_frame(buffer, opt.width, opt.height, opt.output)
        return 0

    from .app import run
    run(opt.width, opt.height, opt.max_iterations, viewport, settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
