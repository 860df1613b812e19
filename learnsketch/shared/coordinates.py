"""Bottom-left coordinate system.

The host painter uses a top-left origin with y growing downward. In
``BOTTOM_LEFT`` mode the canvas is Quadrant I from math class: the origin sits
at the bottom-left corner and y grows upward. The mode is one affine transform,
``translate(0, H) * scale(1, -1)``, that has to be re-applied whenever the
painter is reset (every frame) or the canvas height changes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Tuple

from PyQt6 import QtCore, QtGui

from ..errors import LearnError


class CoordinateMode(str, Enum):
    TOP_LEFT = "top-left"
    BOTTOM_LEFT = "bottom-left"


class AngleMode(str, Enum):
    DEGREES = "degrees"
    RADIANS = "radians"


def parse_mode(value: Any) -> CoordinateMode:
    if isinstance(value, CoordinateMode):
        return value
    try:
        return CoordinateMode(value)
    except (ValueError, TypeError):
        raise LearnError(
            "coordinate_mode() was expecting TOP_LEFT|BOTTOM_LEFT for the first parameter, "
            f"received {value!r} instead"
        ) from None


def parse_angle_mode(value: Any) -> AngleMode:
    if isinstance(value, AngleMode):
        return value
    try:
        return AngleMode(value)
    except (ValueError, TypeError):
        raise LearnError(
            f"angle_mode() was expecting DEGREES|RADIANS for the first parameter, received {value!r} instead"
        ) from None


def apply_bottom_left(painter: QtGui.QPainter, height: float) -> None:
    painter.translate(0, height)
    painter.scale(1, -1)


def apply_top_left(painter: QtGui.QPainter, height: float) -> None:
    painter.scale(1, -1)
    painter.translate(0, -height)


def switch_mode(
    painter: QtGui.QPainter,
    current: CoordinateMode,
    requested: Any,
    height: float,
) -> CoordinateMode:
    """Apply the transform that moves ``painter`` from ``current`` to ``requested``."""
    mode = parse_mode(requested)
    if mode == current:
        return current
    if mode == CoordinateMode.TOP_LEFT:
        apply_top_left(painter, height)
    else:
        apply_bottom_left(painter, height)
    return mode


@dataclass
class TouchPoint:
    identifier: int
    x: float
    y: float


@dataclass
class PointerFrame:
    """Maps raw widget pointer positions into the active coordinate mode."""

    mode: CoordinateMode = CoordinateMode.BOTTOM_LEFT
    width_px: int = 1
    height_px: int = 1
    touches: List[TouchPoint] = field(default_factory=list)

    def fit(self, width_px: int, height_px: int) -> None:
        self.width_px = max(1, int(width_px))
        self.height_px = max(1, int(height_px))

    def remap(self, x: float, y: float) -> Tuple[float, float]:
        if self.mode == CoordinateMode.BOTTOM_LEFT:
            return x, self.height_px - y
        return x, y

    def remap_delta(self, dx: float, dy: float) -> Tuple[float, float]:
        if self.mode == CoordinateMode.BOTTOM_LEFT:
            return dx, -dy
        return dx, dy

    def remap_touches(self, points: Iterable[Tuple[int, float, float]]) -> List[TouchPoint]:
        self.touches = []
        for identifier, x, y in points:
            tx, ty = self.remap(x, y)
            self.touches.append(TouchPoint(identifier, tx, ty))
        return list(self.touches)


def local_pointer(
    transform: QtGui.QTransform,
    mouse_x: float,
    mouse_y: float,
    height: float,
    mode: CoordinateMode,
) -> QtCore.QPointF:
    """Pointer position expressed in the frame left behind by the user's transforms.

    ``mouse_x``/``mouse_y`` are already reported in ``mode``.
    """
    a, b = transform.m11(), transform.m12()
    c, d = transform.m21(), transform.m22()
    e, f = transform.dx(), transform.dy()
    mx = mouse_x - e
    my = mouse_y - f
    if mode == CoordinateMode.BOTTOM_LEFT:
        my = height - mouse_y - f
    return QtCore.QPointF(mx * a + my * b, mx * c + my * d)


def to_radians(angle: float, mode: AngleMode) -> float:
    if mode == AngleMode.DEGREES:
        return math.radians(angle)
    return angle


def from_radians(angle_rad: float, mode: AngleMode) -> float:
    if mode == AngleMode.DEGREES:
        return math.degrees(angle_rad)
    return angle_rad
