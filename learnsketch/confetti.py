from __future__ import annotations

import math
from typing import List, Optional

from PyQt6 import QtGui

from .renderkit import constants
from .renderkit.graphics import Graphics
from .shared.coordinates import CoordinateMode

CONFETTI_COLORS = ("#00aeef", "#ec008c", "#72c8b6", "#e6dd6a", "#8641bf", "#42d4be")
GRAVITY_STEP = 8 / 200
TIME_STEP = 0.1


class Confetti:
    """One falling piece of confetti."""

    def __init__(self, g: Graphics, x: float, y: float, speed: float):
        rng = g.session.rng
        self.g = g
        self.x = x
        self.y = y
        self.speed = speed
        self.time = rng.uniform(0, 100)
        self.color = QtGui.QColor(rng.choice(CONFETTI_COLORS))
        self.amp = rng.uniform(2, 30)
        self.phase = rng.uniform(0.5, 2)
        self.size = rng.uniform(g.width / 25, g.height / 50)
        self.form = round(rng.uniform(0, 1))

    @classmethod
    def spawn(cls, g: Graphics) -> "Confetti":
        rng = g.session.rng
        return cls(
            g,
            rng.uniform(0, g.width),
            rng.uniform(-g.height, 0),
            rng.uniform(-1, 1),
        )

    def display(self) -> None:
        g = self.g
        g.fill(self.color)
        g.no_stroke()
        g.push()
        g.translate(self.x, self.y)
        g.translate(
            self.amp * math.sin(self.time * self.phase),
            self.speed * math.cos(2 * self.time * self.phase),
        )
        g.painter.rotate(math.degrees(self.time))
        g.rect_mode(constants.CENTER)
        g.scale(math.cos(self.time / 4), math.sin(self.time / 4))
        if self.form == 0:
            g.rect(0, 0, self.size, self.size / 2)
        else:
            g.ellipse(0, 0, self.size)
        g.pop()
        self.step()

    def step(self) -> None:
        self.time += TIME_STEP
        self.speed += GRAVITY_STEP
        self.y += self.speed


def create_confetti(g: Graphics, amount: int) -> List[Confetti]:
    pieces = [Confetti.spawn(g) for _ in range(amount)]
    g.session.confetti[:] = pieces
    return g.session.confetti


def recycle(g: Graphics, index: int) -> Confetti:
    """Respawn piece ``index`` above the canvas once it has fallen past the bottom."""
    pieces = g.session.confetti
    if pieces[index].y > g.height:
        pieces[index] = Confetti.spawn(g)
    return pieces[index]


def celebrate(g: Graphics, amount: Optional[int] = None) -> None:
    """Rain confetti over the canvas; call once per frame."""
    previous_mode = g.session.mode
    g.push()
    g.coordinate_mode(CoordinateMode.TOP_LEFT)
    pieces = g.session.confetti
    if not pieces:
        pieces = create_confetti(g, g.session.confetti_count if amount is None else amount)
    half = len(pieces) / 2
    first = range(0, math.ceil(half))
    second = range(math.floor(half + 0.5), len(pieces))
    for group in (first, second):
        for i in group:
            pieces[i].display()
            recycle(g, i)
    g.coordinate_mode(previous_mode)
    g.pop()
