from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PyQt6 import QtCore, QtGui, QtWidgets  # noqa: E402

from learnsketch.renderkit.assets import AssetRegistry, AssetResolver  # noqa: E402
from learnsketch.renderkit.graphics import Graphics  # noqa: E402
from learnsketch.session import SketchSession  # noqa: E402

CANVAS_W = 200
CANVAS_H = 100


class ManualScheduler:
    """Collects asset completions so a test decides when they run."""

    def __init__(self) -> None:
        self.queue: List[Callable[[], None]] = []

    def __call__(self, callback: Callable[[], None]) -> None:
        self.queue.append(callback)

    def run_all(self) -> int:
        ran = 0
        while self.queue:
            self.queue.pop(0)()
            ran += 1
        return ran


def blank_image(width: int = CANVAS_W, height: int = CANVAS_H) -> QtGui.QImage:
    image = QtGui.QImage(width, height, QtGui.QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(QtCore.Qt.GlobalColor.transparent)
    return image


@pytest.fixture(scope="session")
def qapp() -> Iterator[QtWidgets.QApplication]:
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def sketch_session(tmp_path, scheduler) -> SketchSession:
    registry = AssetRegistry(AssetResolver(tmp_path), schedule=scheduler)
    return SketchSession(width=CANVAS_W, height=CANVAS_H, assets=registry)


@pytest.fixture()
def graphics(qapp, sketch_session) -> Iterator[Graphics]:
    """A Graphics adapter in the middle of a frame, painting into a QImage."""
    image = blank_image(sketch_session.width, sketch_session.height)
    painter = QtGui.QPainter(image)
    g = Graphics(sketch_session)
    g.begin(painter, image)
    yield g
    g.end()
    painter.end()


@pytest.fixture()
def render(qapp, sketch_session) -> Callable[[Callable[[Graphics], None]], QtGui.QImage]:
    """Run one frame of ``fn`` and return the finished image."""

    def _render(fn: Callable[[Graphics], None]) -> QtGui.QImage:
        image = blank_image(sketch_session.width, sketch_session.height)
        painter = QtGui.QPainter(image)
        g = Graphics(sketch_session)
        g.begin(painter, image)
        try:
            fn(g)
        finally:
            g.end()
            painter.end()
        return image

    return _render


def is_red(image: QtGui.QImage, x: int, y: int) -> bool:
    color = image.pixelColor(x, y)
    return color.red() > 200 and color.green() < 60 and color.blue() < 60 and color.alpha() > 200


def is_empty(image: QtGui.QImage, x: int, y: int) -> bool:
    return image.pixelColor(x, y).alpha() == 0
