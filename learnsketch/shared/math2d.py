from __future__ import annotations

import math
from dataclasses import dataclass

from PyQt6 import QtCore


@dataclass(frozen=True)
class Vec2:
    """Small immutable 2D vector with basic math helpers."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def mag(self) -> float:
        return self.length()

    def heading(self) -> float:
        """Angle of the vector in radians, measured from +x."""
        return math.atan2(self.y, self.x)

    def normalized(self) -> "Vec2":
        length = self.length()
        if length <= 1e-9:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def to_point(self) -> QtCore.QPointF:
        return QtCore.QPointF(self.x, self.y)

    @classmethod
    def from_angle(cls, angle_rad: float, length: float = 1.0) -> "Vec2":
        return cls(length * math.cos(angle_rad), length * math.sin(angle_rad))


def linmap(
    value: float,
    start1: float,
    stop1: float,
    start2: float,
    stop2: float,
    within_bounds: bool = False,
) -> float:
    """Re-map value from [start1, stop1] onto [start2, stop2]."""
    span = stop1 - start1
    if span == 0:
        mapped = start2
    else:
        mapped = start2 + (value - start1) * (stop2 - start2) / span
    if not within_bounds:
        return mapped
    low, high = min(start2, stop2), max(start2, stop2)
    return max(low, min(high, mapped))


def fract(value: float) -> float:
    return value - math.floor(value)


def dist(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def wrapped_radians(degrees: float) -> float:
    # math.fmod keeps the sign of the dividend, matching JS `%`.
    return math.fmod(degrees, 360.0) * (math.pi / 180.0)
