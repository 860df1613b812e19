from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from .renderkit import constants
from .renderkit.graphics import Graphics
from .session import SketchSession

logger = logging.getLogger(__name__)

SketchFn = Callable[[Graphics], None]

HANDLER_NAMES = (
    "mouse_pressed",
    "mouse_released",
    "mouse_moved",
    "mouse_dragged",
    "key_pressed",
    "key_released",
    "touch_started",
    "touch_moved",
    "touch_ended",
)

_CURSORS = {
    constants.ARROW: QtCore.Qt.CursorShape.ArrowCursor,
    constants.CROSS: QtCore.Qt.CursorShape.CrossCursor,
    constants.HAND: QtCore.Qt.CursorShape.PointingHandCursor,
    constants.TEXT: QtCore.Qt.CursorShape.IBeamCursor,
    constants.WAIT: QtCore.Qt.CursorShape.WaitCursor,
    constants.MOVE: QtCore.Qt.CursorShape.SizeAllCursor,
    constants.NONE: QtCore.Qt.CursorShape.BlankCursor,
}


class SketchCanvas(QtWidgets.QWidget):
    """Fixed-size canvas that owns the frame loop and feeds pointer input to the session.

    Frames are painted into a persistent back buffer, so anything not covered
    by ``background()`` carries over to the next frame.
    """

    def __init__(
        self,
        session: Optional[SketchSession] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self.session = session or SketchSession()
        self.graphics = Graphics(self.session)
        self.setup_fn: Optional[SketchFn] = None
        self.draw_fn: Optional[SketchFn] = None
        self.handlers: Dict[str, Callable[[], None]] = {}
        self.pre_frame_hooks: List[Callable[[], None]] = []
        self.pre_event_hooks: List[Callable[[], None]] = []
        self.last_error: Optional[BaseException] = None
        self._buffer = QtGui.QImage()
        self._painter: Optional[QtGui.QPainter] = None
        self._needs_setup = True
        self._last_raw = QtCore.QPointF(0.0, 0.0)

        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(self._interval_ms(self.session.frame_rate))
        self.timer.timeout.connect(self.redraw)

        self.session.cursor_hook = self._apply_cursor
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.create_canvas(self.session.width, self.session.height)

    # -- canvas ------------------------------------------------------------
    def create_canvas(self, width: int, height: int) -> None:
        old = self._buffer
        self.session.resize(width, height)
        buffer = QtGui.QImage(
            self.session.width,
            self.session.height,
            QtGui.QImage.Format.Format_ARGB32_Premultiplied,
        )
        buffer.fill(QtCore.Qt.GlobalColor.transparent)
        if not old.isNull() and self._painter is None:
            copier = QtGui.QPainter(buffer)
            copier.drawImage(0, 0, old)
            copier.end()
        self._buffer = buffer
        self.setFixedSize(self.session.width, self.session.height)
        if self._painter is not None:
            # Called from inside setup()/draw(): move the frame onto the new buffer.
            self.graphics.end()
            self._painter.end()
            self._begin_painter()
        logger.info("canvas created width=%d height=%d", self.session.width, self.session.height)

    def resize_canvas(self, width: int, height: int) -> None:
        self.create_canvas(width, height)

    @property
    def buffer(self) -> QtGui.QImage:
        return self._buffer

    def place(self, widget: QtWidgets.QWidget, x: float, y: float) -> None:
        widget.setParent(self)
        self.graphics.position(widget, x, y)
        widget.show()

    # -- loop --------------------------------------------------------------
    def start(self) -> None:
        self.timer.start()
        self.redraw()

    def loop(self) -> None:
        self.timer.start()

    def no_loop(self) -> None:
        self.timer.stop()

    def is_looping(self) -> bool:
        return self.timer.isActive()

    def frame_rate(self, fps: Optional[float] = None) -> int:
        if fps is not None:
            self.session.frame_rate = max(1, int(fps))
            self.timer.setInterval(self._interval_ms(self.session.frame_rate))
        return self.session.frame_rate

    def _interval_ms(self, fps: int) -> int:
        return max(1, int(1000 / max(1, fps)))

    def redraw(self) -> bool:
        """Render one frame unless assets are still loading."""
        if not self.session.assets_loaded():
            return False
        self._render_frame()
        self.update()
        return True

    def _begin_painter(self) -> None:
        self._painter = QtGui.QPainter(self._buffer)
        self.graphics.begin(self._painter, self._buffer)

    def _render_frame(self) -> None:
        self._begin_painter()
        try:
            for hook in list(self.pre_frame_hooks):
                hook()
            if self._needs_setup:
                self._needs_setup = False
                if self.setup_fn is not None:
                    self.setup_fn(self.graphics)
                self.graphics.reset_matrix()
            self.session.frame_count += 1
            for hook in list(self.pre_frame_hooks):
                hook()
            if self.draw_fn is not None:
                self.draw_fn(self.graphics)
        except Exception as exc:
            self.last_error = exc
            logger.exception("sketch raised during frame %d; loop stopped", self.session.frame_count)
            self.no_loop()
        finally:
            self.graphics.end()
            if self._painter is not None:
                self._painter.end()
            self._painter = None

    def reset_sketch(self, setup_fn: Optional[SketchFn], draw_fn: Optional[SketchFn]) -> None:
        self.setup_fn = setup_fn
        self.draw_fn = draw_fn
        self.handlers = {}
        self.pre_frame_hooks = []
        self.pre_event_hooks = []
        self.last_error = None
        self._needs_setup = True
        self.session.frame_count = 0
        self.session.confetti.clear()
        self.session.release_listeners.clear()
        self.session.any_moving = False

    # -- QWidget -----------------------------------------------------------
    def paintEvent(self, _: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor(255, 255, 255))
        painter.drawImage(0, 0, self._buffer)
        painter.end()

    def _track(self, raw: QtCore.QPointF) -> None:
        frame = self.session.pointer_frame()
        x, y = frame.remap(raw.x(), raw.y())
        dx, dy = frame.remap_delta(raw.x() - self._last_raw.x(), raw.y() - self._last_raw.y())
        self._last_raw = QtCore.QPointF(raw)
        self.session.pointer.move_to(x, y, dx, dy)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        self._track(event.position())
        if self.session.pointer.mouse_is_pressed:
            self._fire("mouse_dragged")
        else:
            self._fire("mouse_moved")
        event.accept()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        self._track(event.position())
        pointer = self.session.pointer
        pointer.mouse_is_pressed = True
        pointer.mouse_button = _button_name(event.button())
        self._fire("mouse_pressed")
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:
        self._track(event.position())
        self.session.notify_mouse_released()
        self._fire("mouse_released")
        event.accept()

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:
        self.session.notify_key_pressed(event.text(), int(event.key()))
        self._fire("key_pressed")
        event.accept()

    def keyReleaseEvent(self, event: QtGui.QKeyEvent) -> None:
        self.session.key_is_pressed = False
        self._fire("key_released")
        event.accept()

    def event(self, event: QtCore.QEvent) -> bool:  # type: ignore[override]
        kind = event.type()
        touch_events = {
            QtCore.QEvent.Type.TouchBegin: "touch_started",
            QtCore.QEvent.Type.TouchUpdate: "touch_moved",
            QtCore.QEvent.Type.TouchEnd: "touch_ended",
        }
        if kind in touch_events and isinstance(event, QtGui.QTouchEvent):
            points = [(p.id(), p.position().x(), p.position().y()) for p in event.points()]
            touches = self.session.pointer_frame().remap_touches(points)
            self.session.pointer.touches = touches
            if points:
                self._track(QtCore.QPointF(points[0][1], points[0][2]))
            if kind == QtCore.QEvent.Type.TouchEnd:
                self.session.pointer.touches = []
            self._fire(touch_events[kind])
            event.accept()
            return True
        return super().event(event)

    def _fire(self, name: str) -> None:
        handler = self.handlers.get(name)
        if handler is None:
            return
        try:
            for hook in list(self.pre_event_hooks):
                hook()
            handler()
        except Exception as exc:
            self.last_error = exc
            logger.exception("sketch %s handler raised", name)

    def _apply_cursor(self, kind: str) -> None:
        shape = _CURSORS.get(str(kind).lower())
        if shape is None:
            logger.warning("unknown cursor kind %r", kind)
            return
        self.setCursor(QtGui.QCursor(shape))


def _button_name(button: QtCore.Qt.MouseButton) -> Optional[str]:
    if button == QtCore.Qt.MouseButton.LeftButton:
        return constants.LEFT
    if button == QtCore.Qt.MouseButton.RightButton:
        return constants.RIGHT
    if button == QtCore.Qt.MouseButton.MiddleButton:
        return constants.CENTER
    return None
