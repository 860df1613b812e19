"""Math and coordinate helpers shared by the renderkit and the sketch runtime."""

from .coordinates import AngleMode, CoordinateMode, PointerFrame, parse_mode
from .math2d import Vec2, linmap

__all__ = ["AngleMode", "CoordinateMode", "PointerFrame", "Vec2", "linmap", "parse_mode"]
