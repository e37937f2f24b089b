"""
Default settings for the Mandelbrot canvas.

Values come from settings.json next to this module. A missing or broken
file is not fatal: a warning is logged and the built-in defaults are used.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULTS = {
    'width': 800,
    'height': 600,
    'max_iterations': 500,
    'center_x': -0.75,
    'center_y': 0.0,
    'zoom': 1.0,
    'zoom_in_factor': 0.9,
    'zoom_out_factor': 1.1,
}


def load_settings(path=None):
    """
    Load settings from a JSON file, merged over DEFAULTS.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        dict with every key of DEFAULTS. Unknown keys in the file are ignored.
    """
    settings = dict(DEFAULTS)
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return settings

    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return settings

    for key, default in DEFAULTS.items():
        if key not in loaded:
            continue
        value = _coerce(loaded[key], type(default))
        if value is None:
            logger.warning("Ignoring %s in %s: expected %s, got %r",
                           key, path, type(default).__name__, loaded[key])
            continue
        settings[key] = value
    return settings


def _coerce(value, expected):
    """Return value as the expected type, or None if it is the wrong kind."""
    # bool is an int subclass, never a valid number here
    if isinstance(value, bool):
        return None
    if isinstance(value, expected):
        return value
    # "zoom": 2 is a valid float setting
    if expected is float and isinstance(value, int):
        return float(value)
    return None
