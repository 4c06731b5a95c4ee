"""
Problem Text Extraction
=======================
Pulls simulation parameters out of a plain-English physics problem, e.g.

    "A ball is thrown at 15 m/s at an angle of 30 degrees
     from a height of 2 meters."

The result is a *partial* parameter mapping (only the fields that were
found), ready to be folded onto a complete set with
``parameters.merge_parameters``. This is keyword and pattern matching, not
language understanding: the first match of each pattern wins.
"""

import logging
import re
from typing import Dict, Union

from .parameters import PROJECTILE, FREE_FALL


logger = logging.getLogger(__name__)

_NUMBER = r'(\d+(?:\.\d+)?)'

# m/s² forms; a bare 2 only counts when it touches the unit
_SQUARED = r'(?:\s*\^\s*2|\s*²|2(?!\d))'

# m/s but not m/s² (that one is gravity)
VELOCITY_PATTERN = re.compile(
    _NUMBER + r'\s*(?:m/s(?!' + _SQUARED + r')|meters per second(?! squared)|meter/s)',
    re.IGNORECASE)
ANGLE_PATTERN = re.compile(_NUMBER + r'\s*(?:degrees|°)', re.IGNORECASE)
HEIGHT_PATTERNS = (
    re.compile(_NUMBER + r'\s*(?:m|meters) (?:high|height|tall)', re.IGNORECASE),
    re.compile(r'height of\s*' + _NUMBER + r'\s*(?:m\b|meters)', re.IGNORECASE),
)
GRAVITY_PATTERN = re.compile(
    _NUMBER + r'\s*(?:m/s' + _SQUARED + r'|meters per second squared)',
    re.IGNORECASE)

PROJECTILE_KEYWORDS = ('projectile', 'launch', 'throw', 'angle')
FREE_FALL_KEYWORDS = ('drop', 'fall', 'free fall')


def _first_float(pattern, text):
    match = pattern.search(text)
    return float(match.group(1)) if match else None


def detect_mode(text: str):
    """Projectile keywords take precedence over free-fall ones."""
    lowered = text.lower()
    if any(word in lowered for word in PROJECTILE_KEYWORDS):
        return PROJECTILE
    if any(word in lowered for word in FREE_FALL_KEYWORDS):
        return FREE_FALL
    return None


def extract_parameters(text: str) -> Dict[str, Union[float, str]]:
    """
    Extract a partial parameter set from ``text``.

    Returns an empty dict when nothing recognisable is found.
    """
    params: Dict[str, Union[float, str]] = {}

    velocity = _first_float(VELOCITY_PATTERN, text)
    if velocity is not None:
        params['initial_velocity'] = velocity

    angle = _first_float(ANGLE_PATTERN, text)
    if angle is not None:
        params['angle'] = angle

    for pattern in HEIGHT_PATTERNS:
        height = _first_float(pattern, text)
        if height is not None:
            params['initial_height'] = height
            break

    gravity = _first_float(GRAVITY_PATTERN, text)
    if gravity is not None:
        params['gravity'] = gravity

    mode = detect_mode(text)
    if mode is not None:
        params['mode'] = mode

    if params:
        logger.debug("Extracted %s from problem text", params)
    else:
        logger.info("No parameters found in problem text")
    return params
