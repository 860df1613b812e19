from __future__ import annotations

from typing import Any, Dict, Union

from .errors import LearnError
from .renderkit.graphics import Graphics
from .shared.math2d import dist

FREE = "free"

IDLE = "idle"
HOVERED = "hovered"
DRAGGING = "dragging"

AxisLock = Union[str, float]


class MovableCircle:
    """A circle the user can drag around the canvas with the mouse.

    Only one circle per session can be dragged at a time; the session's
    ``any_moving`` flag is the lock, and any mouse release frees it.
    """

    def __init__(self, g: Graphics, x: float, y: float, d: float, clr: Any = "red"):
        self.g = g
        self.x = x
        self.y = y
        self.d = d
        self.clr = clr
        self.is_movable = False
        self.locked: Dict[str, AxisLock] = {"x": FREE, "y": FREE}
        g.session.on_mouse_released(self._release, weak=True)

    def _release(self) -> None:
        self.g.session.any_moving = False
        self.is_movable = False

    @property
    def state(self) -> str:
        if self.is_movable:
            return DRAGGING
        if self.is_mouse_hovering():
            return HOVERED
        return IDLE

    def draw(self) -> None:
        g = self.g
        g.push()
        if self.is_movable or self.is_mouse_hovering():
            g.fill(self.clr)
        if self.is_movable:
            pos = g.mouse()
            if self.locked["x"] == FREE:
                self.x = pos.x
            if self.locked["y"] == FREE:
                self.y = pos.y
        g.circle(self.x, self.y, self.d)
        self.make_movable()
        g.pop()

    def is_mouse_hovering(self) -> bool:
        pos = self.g.mouse()
        return dist(pos.x, pos.y, self.x, self.y) < self.d / 2

    def make_movable(self) -> None:
        session = self.g.session
        if session.any_moving or not session.pointer.mouse_is_pressed:
            return
        if self.is_mouse_hovering():
            session.any_moving = True
            self.is_movable = True

    def lock(self, coordinate: str, value: float) -> None:
        if coordinate not in self.locked:
            raise LearnError(f"lock() was expecting 'x' or 'y' for the first parameter, received {coordinate!r} instead")
        self.locked[coordinate] = value
        setattr(self, coordinate, value)

    def unlock(self, coordinate: str) -> None:
        if coordinate not in self.locked:
            raise LearnError(
                f"unlock() was expecting 'x' or 'y' for the first parameter, received {coordinate!r} instead"
            )
        self.locked[coordinate] = FREE


def create_movable_circle(g: Graphics, x: float, y: float, d: float, clr: Any = "red") -> MovableCircle:
    return MovableCircle(g, x, y, d, clr)
