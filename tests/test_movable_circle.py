from __future__ import annotations

import gc

import pytest

from learnsketch.errors import LearnError
from learnsketch.movable import DRAGGING, FREE, HOVERED, IDLE, MovableCircle, create_movable_circle


def _point(session, x, y, pressed=False):
    session.pointer.mouse_x = x
    session.pointer.mouse_y = y
    session.pointer.mouse_is_pressed = pressed


def test_states(graphics, sketch_session) -> None:
    circle = create_movable_circle(graphics, 50, 50, 20)
    _point(sketch_session, 150, 80)
    assert circle.state == IDLE
    _point(sketch_session, 55, 50)
    assert circle.state == HOVERED
    _point(sketch_session, 55, 50, pressed=True)
    circle.draw()
    assert circle.state == DRAGGING


def test_hover_uses_radius(graphics, sketch_session) -> None:
    circle = MovableCircle(graphics, 50, 50, 20)
    _point(sketch_session, 59.9, 50)
    assert circle.is_mouse_hovering()
    _point(sketch_session, 60, 50)
    assert not circle.is_mouse_hovering()


def test_only_one_circle_drags(graphics, sketch_session) -> None:
    first = MovableCircle(graphics, 50, 50, 20)
    second = MovableCircle(graphics, 52, 50, 20)
    _point(sketch_session, 51, 50, pressed=True)
    first.draw()
    second.draw()
    assert first.is_movable
    assert not second.is_movable
    assert sketch_session.any_moving


def test_dragging_follows_mouse(graphics, sketch_session) -> None:
    circle = MovableCircle(graphics, 50, 50, 20)
    _point(sketch_session, 50, 50, pressed=True)
    circle.draw()
    _point(sketch_session, 120, 30, pressed=True)
    circle.draw()
    assert (circle.x, circle.y) == (120, 30)


def test_release_frees_every_circle(graphics, sketch_session) -> None:
    first = MovableCircle(graphics, 50, 50, 20)
    second = MovableCircle(graphics, 150, 50, 20)
    _point(sketch_session, 50, 50, pressed=True)
    first.draw()
    sketch_session.notify_mouse_released()
    assert not first.is_movable
    assert not sketch_session.any_moving

    _point(sketch_session, 150, 50, pressed=True)
    first.draw()
    second.draw()
    assert second.is_movable
    assert not first.is_movable


def test_locked_axis_stays_put(graphics, sketch_session) -> None:
    circle = MovableCircle(graphics, 50, 50, 20)
    circle.lock("x", 40)
    assert circle.x == 40
    assert circle.locked["x"] == 40
    _point(sketch_session, 40, 50, pressed=True)
    circle.draw()
    _point(sketch_session, 90, 70, pressed=True)
    circle.draw()
    assert (circle.x, circle.y) == (40, 70)

    circle.unlock("x")
    assert circle.locked["x"] == FREE
    circle.draw()
    assert circle.x == 90


@pytest.mark.parametrize("axis", ["z", "X", ""])
def test_bad_axis_raises(graphics, axis) -> None:
    circle = MovableCircle(graphics, 50, 50, 20)
    with pytest.raises(LearnError):
        circle.lock(axis, 1)
    with pytest.raises(LearnError):
        circle.unlock(axis)


def test_discarded_circles_stop_listening(graphics, sketch_session) -> None:
    keep = MovableCircle(graphics, 50, 50, 20)
    for _ in range(50):
        MovableCircle(graphics, 10, 10, 5).draw()
    gc.collect()
    MovableCircle(graphics, 10, 10, 5)
    assert len(sketch_session.release_listeners) <= 2

    keep.is_movable = True
    sketch_session.notify_mouse_released()
    assert not keep.is_movable
    assert len(sketch_session.release_listeners) == 1
