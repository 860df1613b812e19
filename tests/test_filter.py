from __future__ import annotations

import pytest
from PyQt6 import QtGui

from learnsketch.errors import LearnError
from learnsketch.renderkit import constants
from learnsketch.renderkit.graphics import Graphics, apply_filter

from conftest import blank_image


def _two_pixels() -> QtGui.QImage:
    image = QtGui.QImage(2, 1, QtGui.QImage.Format.Format_ARGB32)
    image.setPixelColor(0, 0, QtGui.QColor(255, 0, 0))
    image.setPixelColor(1, 0, QtGui.QColor(255, 255, 255))
    return image


def _rgb(image: QtGui.QImage, x: int):
    color = image.pixelColor(x, 0)
    return color.red(), color.green(), color.blue()


def test_invert(qapp) -> None:
    out = apply_filter(_two_pixels(), constants.INVERT)
    assert _rgb(out, 0) == (0, 255, 255)
    assert _rgb(out, 1) == (0, 0, 0)


def test_gray(qapp) -> None:
    out = apply_filter(_two_pixels(), constants.GRAY)
    r, g, b = _rgb(out, 0)
    assert r == g == b
    assert 0 < r < 255
    assert _rgb(out, 1) == (255, 255, 255)


def test_threshold(qapp) -> None:
    out = apply_filter(_two_pixels(), constants.THRESHOLD, 0.5)
    assert _rgb(out, 0) == (0, 0, 0)
    assert _rgb(out, 1) == (255, 255, 255)
    low = apply_filter(_two_pixels(), constants.THRESHOLD, 0.0)
    assert _rgb(low, 0) == (255, 255, 255)


def test_filter_canvas_rewrites_buffer(render) -> None:
    def draw(g):
        g.background(255, 0, 0)
        g.filter_canvas(constants.INVERT)

    image = render(draw)
    color = image.pixelColor(10, 10)
    assert (color.red(), color.green(), color.blue()) == (0, 255, 255)


def test_unknown_filter_raises(graphics) -> None:
    with pytest.raises(LearnError):
        graphics.filter_canvas("blur")


def test_filter_needs_a_buffer(qapp, sketch_session) -> None:
    image = blank_image()
    painter = QtGui.QPainter(image)
    g = Graphics(sketch_session)
    g.begin(painter)
    try:
        with pytest.raises(LearnError):
            g.filter_canvas(constants.GRAY)
    finally:
        g.end()
        painter.end()
