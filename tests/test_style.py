from __future__ import annotations

import pytest
from PyQt6 import QtCore, QtGui

from learnsketch.errors import LearnError
from learnsketch.renderkit.style import Style, parse_color


def _rgba(color: QtGui.QColor):
    return color.red(), color.green(), color.blue(), color.alpha()


@pytest.mark.parametrize(
    "args, expected",
    [
        ((128,), (128, 128, 128, 255)),
        ((300,), (255, 255, 255, 255)),
        ((255, 0, 0), (255, 0, 0, 255)),
        ((0, 0, 255, 10), (0, 0, 255, 10)),
        (((20, 120),), (20, 20, 20, 120)),
        (("rgb(20,45,217)",), (20, 45, 217, 255)),
        (("rgba(255, 255, 255, 0.6)",), (255, 255, 255, 153)),
        (("#00aeef",), (0, 174, 239, 255)),
        (("white",), (255, 255, 255, 255)),
    ],
)
def test_parse_color(args, expected) -> None:
    assert _rgba(parse_color(*args)) == expected


@pytest.mark.parametrize("value", [True, "not-a-colour", [], [1, 2, 3, 4, 5], object()])
def test_parse_color_rejects(value) -> None:
    with pytest.raises(LearnError):
        parse_color(value)


def test_parse_color_copies_qcolor() -> None:
    source = QtGui.QColor(1, 2, 3)
    copy = parse_color(source)
    copy.setRed(200)
    assert source.red() == 1


def test_no_stroke_means_no_pen() -> None:
    style = Style(stroke=None)
    assert style.pen().style() == QtCore.Qt.PenStyle.NoPen


def test_odd_dash_pattern_is_doubled() -> None:
    style = Style(stroke_weight=2, dash=[6])
    assert style.pen().dashPattern() == [3.0, 3.0]


def test_copy_is_independent() -> None:
    style = Style(dash=[1, 2])
    clone = style.copy()
    clone.fill.setRed(0)
    clone.dash.append(3)
    assert style.fill.red() == 255
    assert style.dash == [1, 2]


def test_font_uses_pixel_size() -> None:
    assert Style(text_size=20).font().pixelSize() == 20
