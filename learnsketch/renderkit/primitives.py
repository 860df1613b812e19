"""Classroom drawing helpers.

Each helper takes the ``Graphics`` adapter first, issues a fixed sequence of
primitive calls, and leaves style and transform state as it found them.
"""

from __future__ import annotations

import math
import time
from typing import Any, Optional, Sequence, Union

from ..errors import LearnError
from ..shared.coordinates import CoordinateMode
from ..shared.math2d import Vec2, fract, linmap, wrapped_radians
from . import constants
from .graphics import Graphics

VectorLike = Union[Vec2, Sequence[float]]

DIE_PIP_SPACING = 15


def radians(degrees: float) -> float:
    return wrapped_radians(degrees)


def unix_time() -> int:
    return round(time.time())


def bounce(g: Graphics, min_num: float, max_num: float, speed: float) -> float:
    """Triangle wave between min_num and max_num driven by the frame counter."""
    span = abs(max_num - min_num)
    if span == 0:
        return min_num
    v = (g.frame_count * speed) / span / 2
    return linmap(1 - abs(1 - fract(v) * 2), 0, 1, min_num, max_num)


def wave(g: Graphics, min_num: float, max_num: float, speed: float) -> float:
    """Cosine wave between min_num and max_num driven by the frame counter."""
    span = abs(max_num - min_num)
    if span == 0:
        return min_num
    v = (g.frame_count * speed) / span / 2
    return linmap(-math.cos(v * constants.TAU), -1, 1, min_num, max_num)


def star(g: Graphics, x: float, y: float, size: float) -> None:
    angle = 90 if g.session.mode == CoordinateMode.BOTTOM_LEFT else -90
    g.begin_shape()
    for _ in range(5):
        g.vertex(
            x + (math.cos(radians(angle)) * size) / 2,
            y + (math.sin(radians(angle)) * size) / 2,
        )
        angle += 36
        g.vertex(
            x + (math.cos(radians(angle)) * size) / 6,
            y + (math.sin(radians(angle)) * size) / 6,
        )
        angle += 36
    g.end_shape()


def responsive_text(g: Graphics, value: Any, x: float, y: float) -> None:
    """Draw text upright whatever the signs of the current transform's axes."""
    transform = g.get_transform()
    x_scale = math.copysign(1.0, transform.m11()) if transform.m11() else 0.0
    y_scale = math.copysign(1.0, transform.m22()) if transform.m22() else 0.0
    g.push()
    g.scale(x_scale, y_scale)
    g.raw_text(value, x, -y)
    g.pop()


def draw_tick_axes(
    g: Graphics,
    scale_factor: float = 1,
    spacing: float = 50,
    axis_color: Any = "rgb(20,45,217)",
    grid_color: Any = "rgba(255,255,255,0.6)",
    label_color: Any = "white",
    label_size: float = 12,
    axis_thickness: float = 5,
    tick_thickness: float = 3,
    grid_thickness: float = 0.25,
) -> None:
    """Draw x and y axes through the origin with tick marks, labels, and gridlines."""
    if scale_factor <= 0 or spacing <= 0:
        raise LearnError("draw_tick_axes() needs a positive scale_factor and spacing")
    g.push()
    g.text_size(label_size / scale_factor)
    g.text_align(constants.CENTER, constants.CENTER)
    y_dir = -1 if g.session.mode == CoordinateMode.TOP_LEFT else 1
    tick = 5 / scale_factor
    step = spacing / scale_factor
    x_extent = g.width / scale_factor
    y_extent = g.height / scale_factor

    y = 0.0
    while y < y_extent:
        g.stroke(axis_color)
        g.stroke_weight(tick_thickness / scale_factor)
        g.line(tick, y, -tick, y)
        g.line(tick, -y, -tick, -y)

        if y != 0:
            g.fill(label_color)
            g.no_stroke()
            responsive_text(g, _tick_label(y), 2 * g.text_size(), y * y_dir)
            responsive_text(g, _tick_label(-y), 2 * g.text_size(), -y * y_dir)

        g.stroke_weight(grid_thickness / scale_factor)
        g.stroke(grid_color)
        g.line(-x_extent, y, x_extent, y)
        g.line(-x_extent, -y, x_extent, -y)
        y += step

    x = 0.0
    while x < x_extent:
        g.stroke(axis_color)
        g.stroke_weight(tick_thickness / scale_factor)
        g.line(x, tick, x, -tick)
        g.line(-x, tick, -x, -tick)

        if x != 0:
            g.fill(label_color)
            g.no_stroke()
            responsive_text(g, _tick_label(x), x, y_dir * 1.5 * g.text_size())
            responsive_text(g, _tick_label(-x), -x, 1.5 * g.text_size())

        g.stroke_weight(grid_thickness / scale_factor)
        g.stroke(grid_color)
        g.line(x, -g.height, x, g.height)
        g.line(-x, -g.height, -x, g.height)
        x += step

    g.stroke(axis_color)
    g.stroke_weight(axis_thickness / scale_factor)
    g.line(-x_extent, 0, x_extent, 0)
    g.line(0, y_extent, 0, -y_extent)
    # origin
    g.fill(label_color)
    g.no_stroke()
    responsive_text(g, 0, g.text_size(), g.text_size())
    g.pop()


def _tick_label(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def arrow(g: Graphics, tail_x: float, tail_y: float, head_x: float, head_y: float) -> None:
    """Line from tail to head finished with a small triangular head."""
    x = head_x - tail_x
    y = head_y - tail_y
    arrow_size = 7
    g.push()
    g.translate(tail_x, tail_y)
    g.line(0, 0, x, y)
    g.painter.rotate(math.degrees(math.atan2(y, x)))
    g.translate(math.hypot(x, y) - arrow_size, 0)
    g.triangle(0, arrow_size / 2, 0, -arrow_size / 2, arrow_size, 0)
    g.pop()


def draw_vector(
    g: Graphics,
    origin_x: float,
    origin_y: float,
    v: VectorLike,
    dash: Union[bool, Sequence[float]] = False,
) -> None:
    """Draw vector ``v`` with its tail at (origin_x, origin_y).

    ``dash`` is False for a solid line or a dash sequence such as ``[5, 5]``.
    """
    vec = v if isinstance(v, Vec2) else Vec2(float(v[0]), float(v[1]))
    g.push()
    if dash is not False and dash:
        g.line_dash(dash)
    g.line(origin_x, origin_y, origin_x + vec.x, origin_y + vec.y)
    g.no_stroke()
    g.translate(origin_x, origin_y)
    g.painter.rotate(math.degrees(vec.heading()))
    g.translate(vec.mag() - 10, 0)
    g.triangle(0, 5, 0, -5, 10, 0)
    g.pop()


def die(
    g: Graphics,
    roll: int,
    x: float,
    y: float,
    primary: Any = "white",
    secondary: Any = "black",
) -> None:
    """Draw one die face showing ``roll`` pips."""
    if isinstance(roll, bool) or not isinstance(roll, int) or roll not in range(1, 7):
        raise LearnError("roll must be an integer from 1 to 6")
    s = DIE_PIP_SPACING
    g.push()
    g.fill(primary)
    g.no_stroke()
    g.rect_mode(constants.CENTER)
    g.square(x, y, 4 * s, 6)
    g.fill(secondary)
    for dx, dy in die_pips(roll):
        g.circle(x + dx * s, y + dy * s, s)
    g.pop()


def die_pips(roll: int) -> Sequence[tuple]:
    """Pip offsets, in pip-spacing units, for a die face."""
    if roll == 1:
        return [(0, 0)]
    if roll == 2:
        return [(1, -1), (-1, 1)]
    if roll == 3:
        return [(0, 0), (1, -1), (-1, 1)]
    if roll == 4:
        return [(1, -1), (-1, 1), (1, 1), (-1, -1)]
    if roll == 5:
        return [(0, 0), (1, -1), (-1, 1), (1, 1), (-1, -1)]
    if roll == 6:
        return [(1, -1.2), (-1, 1.2), (1, 1.2), (-1, -1.2), (-1, 0), (1, 0)]
    raise LearnError("roll must be an integer from 1 to 6")


def draw_bar_graph(
    g: Graphics,
    data: Sequence[float],
    labels: Optional[Sequence[Any]] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    bar_scale: Optional[float] = None,
) -> None:
    """Draw a bar graph with its origin at the current translation."""
    if not data:
        return
    transform = g.get_transform()
    ox = transform.dx()
    oy = transform.dy()
    graph_w = width if width else g.width - ox - 16
    graph_h = height if height else oy - 16
    scale = bar_scale if bar_scale else 5
    bar_width = (graph_w - 2) / (2 * len(data))

    g.push()
    g.text_align(constants.CENTER, constants.CENTER)
    # Axes
    g.push()
    g.no_fill()
    g.line(0, 0, graph_w, 0)
    g.triangle(graph_w, 10, graph_w, -10, graph_w + 15, 0)
    g.line(0, 0, 0, graph_h)
    g.triangle(-10, graph_h, 10, graph_h, 0, graph_h + 15)
    g.pop()
    # Labels
    g.no_stroke()
    for i in range(len(data)):
        label = labels[i] if labels and i < len(labels) else i + 1
        g.text(label, bar_width + 2 * i * bar_width, -g.text_size())
    # Bars
    g.push()
    g.no_stroke()
    for i, value in enumerate(data):
        g.rect(2 * i * bar_width + 1, 1, 2 * bar_width, value * scale)
    g.pop()
    g.pop()


def crosshair(g: Graphics, color: Any = "white", thickness: float = 1, font_size: float = 20) -> None:
    """Guide lines through the pointer plus a readout of its coordinates."""
    x = g.mouse_x
    y = g.mouse_y
    g.push()
    g.cursor(constants.NONE)
    g.fill(color)
    g.stroke(color)
    g.stroke_weight(thickness)
    g.text_size(font_size)
    g.line(0, y, g.width, y)

    g.push()
    g.no_stroke()
    g.fill("black")
    g.rect(x + 16, y + 16, 140, 50, 30)
    g.pop()

    g.fill(color)
    g.text(f"x: {_tick_label(x)}, y: {_tick_label(y)}", x + 32, y + 32)
    g.line(x, 0, x, g.height)
    g.stroke_weight(thickness * 3)
    g.stroke("red")
    g.line(x - 10, y, x + 10, y)
    g.line(x, y - 10, x, y + 10)
    g.pop()


def vertical_line(g: Graphics, x: float, start: Optional[float] = None, stop: Optional[float] = None) -> None:
    g.push()
    g.line(x, start if start else 0, x, stop if stop else g.height)
    g.pop()


def horizontal_line(g: Graphics, y: float, start: Optional[float] = None, stop: Optional[float] = None) -> None:
    g.push()
    g.line(start if start else 0, y, stop if stop else g.width, y)
    g.pop()
