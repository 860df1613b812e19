from __future__ import annotations

import random
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .renderkit.assets import AssetRegistry
from .shared.coordinates import AngleMode, CoordinateMode, PointerFrame, TouchPoint


@dataclass
class PointerState:
    """Pointer values as sketch code sees them, already in the active coordinate mode."""

    mouse_x: float = 0.0
    mouse_y: float = 0.0
    pmouse_x: float = 0.0
    pmouse_y: float = 0.0
    moved_x: float = 0.0
    moved_y: float = 0.0
    mouse_is_pressed: bool = False
    mouse_button: Optional[str] = None
    touches: List[TouchPoint] = field(default_factory=list)

    def move_to(self, x: float, y: float, dx: float, dy: float) -> None:
        self.pmouse_x, self.pmouse_y = self.mouse_x, self.mouse_y
        self.mouse_x, self.mouse_y = x, y
        self.moved_x, self.moved_y = dx, dy


@dataclass
class SketchSession:
    """Process-wide sketch state made explicit.

    One session belongs to one canvas. Everything the drawing helpers share
    between calls (coordinate mode, loaded assets, the drag lock, confetti,
    pointer and frame counters) lives here.
    """

    width: int = 400
    height: int = 400
    mode: CoordinateMode = CoordinateMode.BOTTOM_LEFT
    angle_mode: AngleMode = AngleMode.DEGREES
    assets: AssetRegistry = field(default_factory=AssetRegistry)
    pointer: PointerState = field(default_factory=PointerState)
    frame_count: int = 0
    frame_rate: int = 60
    any_moving: bool = False
    confetti: List[Any] = field(default_factory=list)
    confetti_count: int = 100
    readouts: Dict[str, str] = field(default_factory=dict)
    rng: random.Random = field(default_factory=random.Random)
    key: str = ""
    key_code: int = 0
    key_is_pressed: bool = False
    release_listeners: List[Callable[[], Optional[Callable[[], None]]]] = field(default_factory=list)
    key_listeners: List[Callable[[str, int], None]] = field(default_factory=list)
    cursor_hook: Optional[Callable[[str], None]] = None
    readout_hook: Optional[Callable[[str, str], None]] = None

    def pointer_frame(self) -> PointerFrame:
        frame = PointerFrame(mode=self.mode)
        frame.fit(self.width, self.height)
        return frame

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))

    def assets_loaded(self) -> bool:
        return self.assets.assets_loaded()

    def on_mouse_released(self, listener: Callable[[], None], weak: bool = False) -> None:
        """Call ``listener`` on every mouse release.

        With ``weak`` set, a bound method is held through ``weakref.WeakMethod``
        and dropped once its object is collected.
        """
        self.release_listeners[:] = [ref for ref in self.release_listeners if ref() is not None]
        if weak:
            self.release_listeners.append(weakref.WeakMethod(listener))  # type: ignore[arg-type]
        else:
            self.release_listeners.append(lambda: listener)

    def on_key_pressed(self, listener: Callable[[str, int], None]) -> None:
        self.key_listeners.append(listener)

    def notify_mouse_released(self) -> None:
        self.pointer.mouse_is_pressed = False
        self.any_moving = False
        for ref in list(self.release_listeners):
            listener = ref()
            if listener is not None:
                listener()
        self.release_listeners[:] = [ref for ref in self.release_listeners if ref() is not None]

    def notify_key_pressed(self, key: str, key_code: int) -> None:
        self.key = key
        self.key_code = key_code
        self.key_is_pressed = True
        for listener in list(self.key_listeners):
            listener(key, key_code)

    def set_readout(self, label: str, value: Any) -> None:
        text = f"{label}: {value}"
        self.readouts[str(label)] = text
        if self.readout_hook is not None:
            self.readout_hook(str(label), text)

    def set_cursor(self, kind: str) -> None:
        if self.cursor_hook is not None:
            self.cursor_hook(kind)
