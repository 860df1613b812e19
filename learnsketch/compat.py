"""Namespace a sketch script is executed in.

Sketches may use camelCase names (``drawTickAxes()``, ``mouseX``) or
snake_case ones (``draw_tick_axes()``, ``mouse_x``), so every name is
published under both spellings.
"""

from __future__ import annotations

import functools
import math
from typing import Any, Callable, Dict, Iterable, Optional

from . import confetti, movable
from .renderkit import constants, primitives
from .renderkit.graphics import Graphics
from .shared.coordinates import to_radians
from .shared.math2d import Vec2, linmap

GRAPHICS_METHODS = (
    "angle_mode",
    "assets_loaded",
    "atan2",
    "background",
    "begin_shape",
    "circle",
    "clear",
    "color",
    "coordinate_mode",
    "cursor",
    "dist",
    "ellipse",
    "ellipse_mode",
    "end_shape",
    "fill",
    "filter_canvas",
    "get_transform",
    "image",
    "line",
    "line_dash",
    "load_font",
    "load_image",
    "load_sound",
    "mouse",
    "no_fill",
    "no_stroke",
    "point",
    "pop",
    "position",
    "push",
    "quad",
    "random",
    "rect",
    "rect_mode",
    "reset_matrix",
    "rotate",
    "scale",
    "square",
    "stroke",
    "stroke_weight",
    "text",
    "text_align",
    "text_font",
    "text_size",
    "text_width",
    "translate",
    "triangle",
    "vertex",
)

GRAPHICS_HELPERS = (
    "arrow",
    "bounce",
    "crosshair",
    "die",
    "draw_bar_graph",
    "draw_tick_axes",
    "draw_vector",
    "horizontal_line",
    "responsive_text",
    "star",
    "vertical_line",
    "wave",
)

CANVAS_METHODS = (
    "create_canvas",
    "frame_rate",
    "loop",
    "no_loop",
    "place",
    "redraw",
    "resize_canvas",
)

FRAME_VALUES = (
    "mouse_x",
    "mouse_y",
    "pmouse_x",
    "pmouse_y",
    "moved_x",
    "moved_y",
    "mouse_is_pressed",
    "mouse_button",
    "touches",
)


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _publish(ns: Dict[str, Any], name: str, value: Any) -> None:
    ns[name] = value
    alias = camel_case(name)
    if alias != name:
        ns[alias] = value


def _publish_all(ns: Dict[str, Any], items: Iterable[tuple]) -> None:
    for name, value in items:
        _publish(ns, name, value)


def constrain(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp(start: float, stop: float, amount: float) -> float:
    return start + (stop - start) * amount


def _angle_functions(g: Graphics) -> Dict[str, Callable[[float], float]]:
    def sin(angle: float) -> float:
        return math.sin(to_radians(angle, g.session.angle_mode))

    def cos(angle: float) -> float:
        return math.cos(to_radians(angle, g.session.angle_mode))

    def tan(angle: float) -> float:
        return math.tan(to_radians(angle, g.session.angle_mode))

    return {"sin": sin, "cos": cos, "tan": tan}


def build_namespace(
    g: Graphics,
    canvas: Optional[Any] = None,
    extras: Optional[Dict[str, Callable[..., Any]]] = None,
) -> Dict[str, Any]:
    """Build the globals dict for a sketch script bound to ``g``.

    ``canvas`` contributes loop control and canvas sizing when given; ``extras``
    adds host-level callables (``table``, ``create_manager``) under both
    spellings.
    """
    ns: Dict[str, Any] = {"__name__": "__sketch__", "__builtins__": __builtins__}

    for name in constants.__all__:
        ns[name] = getattr(constants, name)

    _publish_all(ns, ((name, getattr(g, name)) for name in GRAPHICS_METHODS))
    _publish_all(
        ns,
        ((name, functools.partial(getattr(primitives, name), g)) for name in GRAPHICS_HELPERS),
    )
    _publish_all(
        ns,
        (
            ("radians", primitives.radians),
            ("unix_time", primitives.unix_time),
            ("linmap", linmap),
            ("constrain", constrain),
            ("lerp", lerp),
            ("sqrt", math.sqrt),
            ("floor", math.floor),
            ("ceil", math.ceil),
            ("celebrate", functools.partial(confetti.celebrate, g)),
            ("create_movable_circle", functools.partial(movable.create_movable_circle, g)),
            ("create_vector", Vec2),
            ("Vec2", Vec2),
        ),
    )
    ns.update(_angle_functions(g))

    if canvas is not None:
        _publish_all(ns, ((name, getattr(canvas, name)) for name in CANVAS_METHODS))
    if extras:
        _publish_all(ns, extras.items())

    refresh_namespace(ns, g)
    return ns


def refresh_namespace(ns: Dict[str, Any], g: Graphics) -> None:
    """Copy the per-frame values (size, pointer, keys, counters) into ``ns``."""
    session = g.session
    pointer = session.pointer
    _publish(ns, "width", session.width)
    _publish(ns, "height", session.height)
    _publish(ns, "frame_count", session.frame_count)
    for name in FRAME_VALUES:
        _publish(ns, name, getattr(pointer, name))
    _publish(ns, "key", session.key)
    _publish(ns, "key_code", session.key_code)
    _publish(ns, "key_is_pressed", session.key_is_pressed)
    _publish(ns, "assets", session.assets)
