from __future__ import annotations

from PyQt6 import QtCore, QtGui

from learnsketch.canvas import SketchCanvas
from learnsketch.shared.coordinates import CoordinateMode, PointerFrame, TouchPoint
from learnsketch.shared.math2d import Vec2


def _mouse(kind: QtCore.QEvent.Type, x: float, y: float) -> QtGui.QMouseEvent:
    pos = QtCore.QPointF(x, y)
    return QtGui.QMouseEvent(
        kind,
        pos,
        pos,
        QtCore.Qt.MouseButton.LeftButton,
        QtCore.Qt.MouseButton.LeftButton,
        QtCore.Qt.KeyboardModifier.NoModifier,
    )


def test_pointer_frame_flips_y_in_bottom_left() -> None:
    frame = PointerFrame(mode=CoordinateMode.BOTTOM_LEFT)
    frame.fit(200, 100)
    assert frame.remap(10, 30) == (10, 70)
    assert frame.remap_delta(4, -6) == (4, 6)


def test_pointer_frame_passes_through_in_top_left() -> None:
    frame = PointerFrame(mode=CoordinateMode.TOP_LEFT)
    frame.fit(200, 100)
    assert frame.remap(10, 30) == (10, 30)
    assert frame.remap_delta(4, -6) == (4, -6)


def test_touches_are_remapped() -> None:
    frame = PointerFrame(mode=CoordinateMode.BOTTOM_LEFT)
    frame.fit(200, 100)
    touches = frame.remap_touches([(1, 5, 0), (2, 50, 100)])
    assert touches == [TouchPoint(1, 5, 100), TouchPoint(2, 50, 0)]


def test_canvas_reports_mouse_in_bottom_left(qapp, sketch_session) -> None:
    canvas = SketchCanvas(sketch_session)
    canvas.mousePressEvent(_mouse(QtCore.QEvent.Type.MouseButtonPress, 10, 30))
    pointer = sketch_session.pointer
    assert (pointer.mouse_x, pointer.mouse_y) == (10, 70)
    assert pointer.mouse_is_pressed is True
    assert pointer.mouse_button == "left"

    canvas.mouseMoveEvent(_mouse(QtCore.QEvent.Type.MouseMove, 15, 20))
    assert (pointer.mouse_x, pointer.mouse_y) == (15, 80)
    assert (pointer.pmouse_x, pointer.pmouse_y) == (10, 70)
    assert (pointer.moved_x, pointer.moved_y) == (5, 10)


def test_canvas_release_clears_drag_lock(qapp, sketch_session) -> None:
    canvas = SketchCanvas(sketch_session)
    released = []
    sketch_session.on_mouse_released(lambda: released.append(True))
    canvas.mousePressEvent(_mouse(QtCore.QEvent.Type.MouseButtonPress, 1, 1))
    sketch_session.any_moving = True
    canvas.mouseReleaseEvent(_mouse(QtCore.QEvent.Type.MouseButtonRelease, 1, 1))
    assert sketch_session.any_moving is False
    assert sketch_session.pointer.mouse_is_pressed is False
    assert released == [True]


def test_canvas_reports_mouse_in_top_left(qapp, sketch_session) -> None:
    sketch_session.mode = CoordinateMode.TOP_LEFT
    canvas = SketchCanvas(sketch_session)
    canvas.mouseMoveEvent(_mouse(QtCore.QEvent.Type.MouseMove, 10, 30))
    assert (sketch_session.pointer.mouse_x, sketch_session.pointer.mouse_y) == (10, 30)


def test_mouse_helper_follows_translation(graphics, sketch_session) -> None:
    sketch_session.pointer.mouse_x = 60
    sketch_session.pointer.mouse_y = 40
    assert graphics.mouse() == Vec2(60, 40)
    graphics.translate(50, 30)
    local = graphics.mouse()
    assert round(local.x, 6) == 10
    assert round(local.y, 6) == 10
