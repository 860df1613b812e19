"""Named constants exposed to sketch scripts."""

import math

from ..shared.coordinates import AngleMode, CoordinateMode

TOP_LEFT = CoordinateMode.TOP_LEFT
BOTTOM_LEFT = CoordinateMode.BOTTOM_LEFT
DEGREES = AngleMode.DEGREES
RADIANS = AngleMode.RADIANS

LEFT = "left"
RIGHT = "right"
CENTER = "center"
TOP = "top"
BOTTOM = "bottom"
BASELINE = "alphabetic"

CORNER = "corner"
CORNERS = "corners"
RADIUS = "radius"

CLOSE = "close"

GRAY = "gray"
INVERT = "invert"
THRESHOLD = "threshold"

ARROW = "arrow"
CROSS = "cross"
HAND = "hand"
TEXT = "text"
WAIT = "wait"
MOVE = "move"
NONE = "none"

PI = math.pi
HALF_PI = math.pi / 2
QUARTER_PI = math.pi / 4
TWO_PI = 2 * math.pi
TAU = 2 * math.pi

__all__ = [
    "TOP_LEFT",
    "BOTTOM_LEFT",
    "DEGREES",
    "RADIANS",
    "LEFT",
    "RIGHT",
    "CENTER",
    "TOP",
    "BOTTOM",
    "BASELINE",
    "CORNER",
    "CORNERS",
    "RADIUS",
    "CLOSE",
    "GRAY",
    "INVERT",
    "THRESHOLD",
    "ARROW",
    "CROSS",
    "HAND",
    "TEXT",
    "WAIT",
    "MOVE",
    "NONE",
    "PI",
    "HALF_PI",
    "QUARTER_PI",
    "TWO_PI",
    "TAU",
]
