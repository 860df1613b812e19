from __future__ import annotations

import logging
import math
from typing import Any, List, Optional, Sequence, Union

from PyQt6 import QtCore, QtGui, QtWidgets

from ..errors import LearnError
from ..session import SketchSession
from ..shared import coordinates
from ..shared.coordinates import AngleMode, CoordinateMode
from ..shared.math2d import Vec2, dist
from . import constants
from .assets import AssetHandle, unwrap
from .style import Style, parse_color

logger = logging.getLogger(__name__)

ImageLike = Union[QtGui.QImage, QtGui.QPixmap]


class Graphics:
    """Adapter over a QPainter that adds the classroom coordinate system.

    The painter is only bound while a frame is being drawn (see ``begin``).
    Style (fill, stroke, text settings) outlives a frame; the transform does
    not, which is why the coordinate mode is re-applied on every ``begin``.
    """

    def __init__(self, session: Optional[SketchSession] = None):
        self.session = session or SketchSession()
        self._painter: Optional[QtGui.QPainter] = None
        self._buffer: Optional[QtGui.QImage] = None
        self._style = Style()
        self._style_stack: List[Style] = []
        self._vertices: Optional[List[QtCore.QPointF]] = None

    # -- frame binding -----------------------------------------------------
    def begin(self, painter: QtGui.QPainter, buffer: Optional[QtGui.QImage] = None) -> None:
        self._painter = painter
        self._buffer = buffer
        self._style_stack = []
        self._vertices = None
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QtGui.QPainter.RenderHint.TextAntialiasing)
        self.apply_coordinate_mode()

    def end(self) -> None:
        while self._style_stack:
            self.pop()
        self._painter = None
        self._buffer = None

    @property
    def painter(self) -> QtGui.QPainter:
        if self._painter is None:
            raise LearnError("drawing functions can only be called while the canvas is drawing")
        return self._painter

    @property
    def drawing(self) -> bool:
        return self._painter is not None

    @property
    def width(self) -> int:
        return self.session.width

    @property
    def height(self) -> int:
        return self.session.height

    @property
    def frame_count(self) -> int:
        return self.session.frame_count

    @property
    def mouse_x(self) -> float:
        return self.session.pointer.mouse_x

    @property
    def mouse_y(self) -> float:
        return self.session.pointer.mouse_y

    @property
    def mouse_is_pressed(self) -> bool:
        return self.session.pointer.mouse_is_pressed

    # -- coordinate mode ---------------------------------------------------
    def coordinate_mode(self, mode: Any = None) -> CoordinateMode:
        if mode is None:
            return self.session.mode
        current = self.session.mode
        if self._painter is not None:
            new_mode = coordinates.switch_mode(self._painter, current, mode, self.height)
        else:
            new_mode = coordinates.parse_mode(mode)
        if new_mode != current:
            logger.debug("coordinate mode %s -> %s", current.value, new_mode.value)
        self.session.mode = new_mode
        return new_mode

    def apply_coordinate_mode(self) -> None:
        """Pre-draw hook: put the freshly reset painter into the session's mode."""
        if self.session.mode == CoordinateMode.BOTTOM_LEFT:
            coordinates.apply_bottom_left(self.painter, self.height)

    def angle_mode(self, mode: Any = None) -> AngleMode:
        if mode is not None:
            self.session.angle_mode = coordinates.parse_angle_mode(mode)
        return self.session.angle_mode

    def base_transform(self) -> QtGui.QTransform:
        if self.session.mode == CoordinateMode.BOTTOM_LEFT:
            return QtGui.QTransform(1.0, 0.0, 0.0, -1.0, 0.0, float(self.height))
        return QtGui.QTransform()

    def get_transform(self) -> QtGui.QTransform:
        if self._painter is None:
            return self.base_transform()
        return self._painter.worldTransform()

    # -- style -------------------------------------------------------------
    def color(self, *args: Any) -> QtGui.QColor:
        return parse_color(*args)

    def fill(self, *args: Any) -> None:
        self._style.fill = parse_color(*args)

    def no_fill(self) -> None:
        self._style.fill = None

    def stroke(self, *args: Any) -> None:
        self._style.stroke = parse_color(*args)

    def no_stroke(self) -> None:
        self._style.stroke = None

    def stroke_weight(self, weight: float) -> None:
        self._style.stroke_weight = float(weight)

    def line_dash(self, pattern: Optional[Sequence[float]]) -> None:
        self._style.dash = [float(v) for v in pattern] if pattern else None

    def text_size(self, size: Optional[float] = None) -> float:
        if size is not None:
            self._style.text_size = float(size)
        return self._style.text_size

    def text_align(self, horizontal: str, vertical: Optional[str] = None) -> None:
        if horizontal not in (constants.LEFT, constants.CENTER, constants.RIGHT):
            raise LearnError(f"text_align() was expecting LEFT|CENTER|RIGHT, received {horizontal!r} instead")
        self._style.text_align_h = horizontal
        if vertical is not None:
            if vertical not in (constants.TOP, constants.CENTER, constants.BOTTOM, constants.BASELINE):
                raise LearnError(
                    f"text_align() was expecting TOP|CENTER|BOTTOM|BASELINE, received {vertical!r} instead"
                )
            self._style.text_align_v = vertical

    def text_font(self, font: Any, size: Optional[float] = None) -> None:
        family = unwrap(font, self.session.assets)
        if isinstance(family, QtGui.QFont):
            family = family.family()
        self._style.font_family = str(family) if family else None
        if size is not None:
            self._style.text_size = float(size)

    def rect_mode(self, mode: str) -> None:
        if mode not in (constants.CORNER, constants.CORNERS, constants.CENTER, constants.RADIUS):
            raise LearnError(f"rect_mode() was expecting CORNER|CORNERS|CENTER|RADIUS, received {mode!r} instead")
        self._style.rect_mode = mode

    def ellipse_mode(self, mode: str) -> None:
        if mode not in (constants.CORNER, constants.CORNERS, constants.CENTER, constants.RADIUS):
            raise LearnError(
                f"ellipse_mode() was expecting CORNER|CORNERS|CENTER|RADIUS, received {mode!r} instead"
            )
        self._style.ellipse_mode = mode

    def background(self, *args: Any) -> None:
        color = parse_color(*args)
        painter = self.painter
        painter.save()
        painter.resetTransform()
        painter.fillRect(QtCore.QRectF(0, 0, self.width, self.height), color)
        painter.restore()

    def clear(self) -> None:
        painter = self.painter
        painter.save()
        painter.resetTransform()
        painter.setCompositionMode(QtGui.QPainter.CompositionMode.CompositionMode_Clear)
        painter.fillRect(QtCore.QRectF(0, 0, self.width, self.height), QtCore.Qt.GlobalColor.transparent)
        painter.restore()

    # -- transforms --------------------------------------------------------
    def push(self) -> None:
        self.painter.save()
        self._style_stack.append(self._style.copy())

    def pop(self) -> None:
        if not self._style_stack:
            logger.warning("pop() called without a matching push()")
            return
        self._style = self._style_stack.pop()
        self.painter.restore()

    def translate(self, x: float, y: float) -> None:
        self.painter.translate(float(x), float(y))

    def rotate(self, angle: float) -> None:
        rad = coordinates.to_radians(float(angle), self.session.angle_mode)
        self.painter.rotate(math.degrees(rad))

    def scale(self, sx: float, sy: Optional[float] = None) -> None:
        self.painter.scale(float(sx), float(sx if sy is None else sy))

    def reset_matrix(self) -> None:
        self.painter.resetTransform()
        self.apply_coordinate_mode()

    # -- shapes ------------------------------------------------------------
    def _prepare(self) -> QtGui.QPainter:
        painter = self.painter
        painter.setPen(self._style.pen())
        painter.setBrush(self._style.brush())
        return painter

    def point(self, x: float, y: float) -> None:
        self._prepare().drawPoint(QtCore.QPointF(x, y))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        painter = self._prepare()
        painter.drawLine(QtCore.QPointF(x1, y1), QtCore.QPointF(x2, y2))

    def _box(self, mode: str, a: float, b: float, c: float, d: float) -> QtCore.QRectF:
        if mode == constants.CENTER:
            rect = QtCore.QRectF(a - c / 2.0, b - d / 2.0, c, d)
        elif mode == constants.RADIUS:
            rect = QtCore.QRectF(a - c, b - d, 2 * c, 2 * d)
        elif mode == constants.CORNERS:
            rect = QtCore.QRectF(QtCore.QPointF(a, b), QtCore.QPointF(c, d))
        else:
            rect = QtCore.QRectF(a, b, c, d)
        return rect.normalized()

    def rect(self, x: float, y: float, w: float, h: Optional[float] = None, radius: float = 0.0) -> None:
        h = w if h is None else h
        rect = self._box(self._style.rect_mode, x, y, w, h)
        painter = self._prepare()
        if radius:
            painter.drawRoundedRect(rect, radius, radius)
        else:
            painter.drawRect(rect)

    def square(self, x: float, y: float, size: float, radius: float = 0.0) -> None:
        self.rect(x, y, size, size, radius)

    def ellipse(self, x: float, y: float, w: float, h: Optional[float] = None) -> None:
        h = w if h is None else h
        self._prepare().drawEllipse(self._box(self._style.ellipse_mode, x, y, w, h))

    def circle(self, x: float, y: float, d: float) -> None:
        self.ellipse(x, y, d, d)

    def triangle(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        poly = QtGui.QPolygonF([QtCore.QPointF(x1, y1), QtCore.QPointF(x2, y2), QtCore.QPointF(x3, y3)])
        self._prepare().drawPolygon(poly)

    def quad(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float, x4: float, y4: float
    ) -> None:
        poly = QtGui.QPolygonF(
            [QtCore.QPointF(x1, y1), QtCore.QPointF(x2, y2), QtCore.QPointF(x3, y3), QtCore.QPointF(x4, y4)]
        )
        self._prepare().drawPolygon(poly)

    def begin_shape(self) -> None:
        self._vertices = []

    def vertex(self, x: float, y: float) -> None:
        if self._vertices is None:
            raise LearnError("vertex() must be called between begin_shape() and end_shape()")
        self._vertices.append(QtCore.QPointF(x, y))

    def end_shape(self, mode: Optional[str] = None) -> None:
        vertices = self._vertices or []
        self._vertices = None
        if not vertices:
            return
        poly = QtGui.QPolygonF(vertices)
        painter = self.painter
        if self._style.fill is not None:
            painter.setPen(QtCore.Qt.PenStyle.NoPen)
            painter.setBrush(self._style.brush())
            painter.drawPolygon(poly)
        painter.setPen(self._style.pen())
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        if mode == constants.CLOSE:
            painter.drawPolygon(poly)
        else:
            painter.drawPolyline(poly)

    # -- text --------------------------------------------------------------
    def text(self, value: Any, x: float, y: float) -> None:
        """Draw text upright in either coordinate mode."""
        if self.session.mode == CoordinateMode.BOTTOM_LEFT:
            painter = self.painter
            painter.save()
            painter.scale(1, -1)
            self.raw_text(value, x, -y)
            painter.restore()
        else:
            self.raw_text(value, x, y)

    def raw_text(self, value: Any, x: float, y: float) -> None:
        """Draw text in the painter's current frame with no orientation fix-up."""
        painter = self.painter
        if self._style.fill is None:
            return
        text = str(value)
        font = self._style.font(painter.font())
        painter.setFont(font)
        metrics = QtGui.QFontMetricsF(font)
        width = metrics.horizontalAdvance(text)
        h_align = self._style.text_align_h
        v_align = self._style.text_align_v
        if h_align == constants.CENTER:
            x -= width / 2.0
        elif h_align == constants.RIGHT:
            x -= width
        if v_align == constants.TOP:
            y += metrics.ascent()
        elif v_align == constants.CENTER:
            y += (metrics.ascent() - metrics.descent()) / 2.0
        elif v_align == constants.BOTTOM:
            y -= metrics.descent()
        painter.setPen(QtGui.QPen(self._style.fill))
        painter.drawText(QtCore.QPointF(x, y), text)

    def text_width(self, value: Any) -> float:
        return QtGui.QFontMetricsF(self._style.font()).horizontalAdvance(str(value))

    # -- images ------------------------------------------------------------
    def image(
        self,
        img: Any,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
        sx: Optional[float] = None,
        sy: Optional[float] = None,
        s_width: Optional[float] = None,
        s_height: Optional[float] = None,
    ) -> None:
        """Draw ``img`` (an image, a load handle or a registry key) with its corner at x, y.

        Handles that have not loaded yet draw nothing.
        """
        img = unwrap(img, self.session.assets)
        if not isinstance(img, (QtGui.QImage, QtGui.QPixmap)) or img.isNull():
            return
        if self.session.mode == CoordinateMode.BOTTOM_LEFT:
            painter = self.painter
            coordinates.apply_top_left(painter, self.height)
            try:
                draw_h = img.height() if height is None else height
                self._raw_image(img, x, self.height - y - draw_h, width, height, sx, sy, s_width, s_height)
            finally:
                coordinates.apply_bottom_left(painter, self.height)
        else:
            self._raw_image(img, x, y, width, height, sx, sy, s_width, s_height)

    def _raw_image(
        self,
        img: ImageLike,
        x: float,
        y: float,
        width: Optional[float],
        height: Optional[float],
        sx: Optional[float],
        sy: Optional[float],
        s_width: Optional[float],
        s_height: Optional[float],
    ) -> None:
        target = QtCore.QRectF(
            x,
            y,
            img.width() if width is None else width,
            img.height() if height is None else height,
        )
        src_x = 0.0 if sx is None else sx
        src_y = 0.0 if sy is None else sy
        source = QtCore.QRectF(
            src_x,
            src_y,
            img.width() - src_x if s_width is None else s_width,
            img.height() - src_y if s_height is None else s_height,
        )
        if isinstance(img, QtGui.QPixmap):
            self.painter.drawPixmap(target, img, source)
        else:
            self.painter.drawImage(target, img, source)

    # -- pointer -----------------------------------------------------------
    def mouse(self) -> Vec2:
        """Pointer position in the frame left behind by the current transforms."""
        pointer = self.session.pointer
        pt = coordinates.local_pointer(
            self.get_transform(),
            pointer.mouse_x,
            pointer.mouse_y,
            self.height,
            self.session.mode,
        )
        return Vec2(pt.x(), pt.y())

    def position(self, widget: QtWidgets.QWidget, x: float, y: float) -> None:
        if self.session.mode == CoordinateMode.BOTTOM_LEFT:
            y = self.height - y
        widget.move(int(round(x)), int(round(y)))

    def cursor(self, kind: str = constants.ARROW) -> None:
        self.session.set_cursor(kind)

    # -- assets ------------------------------------------------------------
    @property
    def assets(self):
        return self.session.assets

    def assets_loaded(self) -> bool:
        return self.session.assets_loaded()

    def load_image(self, path: str, key: str) -> AssetHandle:
        return self.session.assets.load_image(path, key)

    def load_sound(self, path: str, key: str) -> AssetHandle:
        return self.session.assets.load_sound(path, key)

    def load_font(self, path: str, key: str) -> AssetHandle:
        return self.session.assets.load_font(path, key)

    # -- math --------------------------------------------------------------
    def random(self, low: Any = None, high: Optional[float] = None) -> Any:
        rng = self.session.rng
        if low is None:
            return rng.random()
        if isinstance(low, (list, tuple)):
            return rng.choice(low) if low else None
        if high is None:
            return rng.uniform(0.0, float(low))
        return rng.uniform(float(low), float(high))

    def dist(self, x1: float, y1: float, x2: float, y2: float) -> float:
        return dist(x1, y1, x2, y2)

    def atan2(self, y: float, x: float) -> float:
        return coordinates.from_radians(math.atan2(y, x), self.session.angle_mode)

    # -- canvas pixels -----------------------------------------------------
    def filter_canvas(self, kind: str, value: Optional[float] = None) -> None:
        if kind not in (constants.GRAY, constants.INVERT, constants.THRESHOLD):
            raise LearnError(f"filter_canvas() was expecting GRAY|INVERT|THRESHOLD, received {kind!r} instead")
        if self._buffer is None:
            raise LearnError("filter_canvas() needs a canvas to filter")
        filtered = apply_filter(self._buffer.copy(), kind, value)
        painter = self.painter
        painter.save()
        painter.resetTransform()
        painter.setCompositionMode(QtGui.QPainter.CompositionMode.CompositionMode_Source)
        painter.drawImage(QtCore.QPointF(0, 0), filtered)
        painter.restore()


def apply_filter(image: QtGui.QImage, kind: str, value: Optional[float] = None) -> QtGui.QImage:
    fmt = QtGui.QImage.Format.Format_ARGB32_Premultiplied
    if kind == constants.INVERT:
        out = image.convertToFormat(fmt)
        out.invertPixels(QtGui.QImage.InvertMode.InvertRgb)
        return out
    gray = image.convertToFormat(QtGui.QImage.Format.Format_Grayscale8)
    if kind == constants.GRAY:
        return gray.convertToFormat(fmt)
    level = 0.5 if value is None else max(0.0, min(1.0, float(value)))
    cutoff = int(round(level * 255))
    lut = bytes(255 if i >= cutoff else 0 for i in range(256))
    ptr = gray.constBits()
    ptr.setsize(gray.sizeInBytes())
    data = bytes(ptr).translate(lut)
    out = QtGui.QImage(data, gray.width(), gray.height(), gray.bytesPerLine(), QtGui.QImage.Format.Format_Grayscale8)
    return out.convertToFormat(fmt)
