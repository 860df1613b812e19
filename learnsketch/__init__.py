"""Classroom drawing conveniences on top of PyQt6."""

from .errors import LearnError
from .session import SketchSession
from .renderkit.graphics import Graphics
from .shared.coordinates import AngleMode, CoordinateMode

__version__ = "0.1.0"

__all__ = [
    "AngleMode",
    "CoordinateMode",
    "Graphics",
    "LearnError",
    "SketchSession",
    "__version__",
]
