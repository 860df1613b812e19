from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence

from PyQt6 import QtCore, QtGui

from ..errors import LearnError
from . import constants

_RGB_RE = re.compile(
    r"^\s*rgba?\(\s*([-\d.]+%?)\s*,\s*([-\d.]+%?)\s*,\s*([-\d.]+%?)\s*(?:,\s*([-\d.]+%?)\s*)?\)\s*$",
    re.IGNORECASE,
)


def _channel(token: str) -> int:
    if token.endswith("%"):
        return _clamp_byte(float(token[:-1]) * 2.55)
    return _clamp_byte(float(token))


def _alpha(token: str) -> int:
    if token.endswith("%"):
        return _clamp_byte(float(token[:-1]) * 2.55)
    return _clamp_byte(float(token) * 255)


def _clamp_byte(value: float) -> int:
    return max(0, min(255, int(round(value))))


def parse_color(value: Any, *rest: Any) -> QtGui.QColor:
    """Build a QColor from the forms sketch authors use.

    Accepts an existing QColor, a gray level, ``(gray, alpha)``, ``(r, g, b)``,
    ``(r, g, b, a)``, CSS names, ``#hex`` and ``rgb()``/``rgba()`` strings.
    """
    if rest:
        return parse_color((value, *rest))
    if isinstance(value, QtGui.QColor):
        return QtGui.QColor(value)
    if isinstance(value, bool):
        raise LearnError(f"cannot interpret {value!r} as a color")
    if isinstance(value, (int, float)):
        gray = _clamp_byte(value)
        return QtGui.QColor(gray, gray, gray)
    if isinstance(value, (tuple, list)):
        return _color_from_sequence(value)
    if isinstance(value, str):
        match = _RGB_RE.match(value)
        if match:
            r, g, b, a = match.groups()
            color = QtGui.QColor(_channel(r), _channel(g), _channel(b))
            if a is not None:
                color.setAlpha(_alpha(a))
            return color
        color = QtGui.QColor(value.strip())
        if color.isValid():
            return color
    raise LearnError(f"cannot interpret {value!r} as a color")


def _color_from_sequence(values: Sequence[Any]) -> QtGui.QColor:
    if not values or len(values) > 4:
        raise LearnError(f"cannot interpret {tuple(values)!r} as a color")
    try:
        nums = [float(v) for v in values]
    except (TypeError, ValueError):
        raise LearnError(f"cannot interpret {tuple(values)!r} as a color") from None
    if len(nums) == 1:
        return parse_color(nums[0])
    if len(nums) == 2:
        color = parse_color(nums[0])
        color.setAlpha(_clamp_byte(nums[1]))
        return color
    color = QtGui.QColor(_clamp_byte(nums[0]), _clamp_byte(nums[1]), _clamp_byte(nums[2]))
    if len(nums) == 4:
        color.setAlpha(_clamp_byte(nums[3]))
    return color


@dataclass
class Style:
    """Drawing state saved by push() and restored by pop()."""

    fill: Optional[QtGui.QColor] = field(default_factory=lambda: QtGui.QColor(255, 255, 255))
    stroke: Optional[QtGui.QColor] = field(default_factory=lambda: QtGui.QColor(0, 0, 0))
    stroke_weight: float = 1.0
    dash: Optional[List[float]] = None
    text_size: float = 12.0
    text_align_h: str = constants.LEFT
    text_align_v: str = constants.BASELINE
    rect_mode: str = constants.CORNER
    ellipse_mode: str = constants.CENTER
    font_family: Optional[str] = None

    def copy(self) -> "Style":
        return replace(
            self,
            fill=QtGui.QColor(self.fill) if self.fill is not None else None,
            stroke=QtGui.QColor(self.stroke) if self.stroke is not None else None,
            dash=list(self.dash) if self.dash is not None else None,
        )

    def pen(self) -> QtGui.QPen:
        if self.stroke is None:
            pen = QtGui.QPen()
            pen.setStyle(QtCore.Qt.PenStyle.NoPen)
            return pen
        pen = QtGui.QPen(self.stroke)
        pen.setWidthF(max(0.0, float(self.stroke_weight)))
        if self.dash:
            # QPen dash lengths are in units of the pen width and need an even count.
            width = max(1.0, float(self.stroke_weight))
            pattern = list(self.dash)
            if len(pattern) % 2:
                pattern = pattern * 2
            pen.setDashPattern([max(1e-3, float(d) / width) for d in pattern])
        return pen

    def brush(self) -> QtGui.QBrush:
        if self.fill is None:
            return QtGui.QBrush()
        return QtGui.QBrush(self.fill)

    def font(self, base: Optional[QtGui.QFont] = None) -> QtGui.QFont:
        font = QtGui.QFont(base) if base is not None else QtGui.QFont()
        if self.font_family:
            font.setFamily(self.font_family)
        font.setPixelSize(max(1, int(round(self.text_size))))
        return font
