from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from PyQt6 import QtCore, QtWidgets

from .canvas import HANDLER_NAMES, SketchCanvas
from .compat import build_namespace, camel_case, refresh_namespace
from .session import SketchSession

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SketchWindow(QtWidgets.QWidget):
    """Canvas on the left, live ``table()`` readouts on the right."""

    def __init__(self, session: Optional[SketchSession] = None, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.session = session or SketchSession()
        self.canvas = SketchCanvas(self.session, self)
        self._labels: Dict[str, QtWidgets.QLabel] = {}

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.addWidget(self.canvas, 0, QtCore.Qt.AlignmentFlag.AlignTop)

        self.readout_panel = QtWidgets.QWidget()
        self.readout_layout = QtWidgets.QVBoxLayout(self.readout_panel)
        self.readout_layout.setContentsMargins(4, 0, 4, 0)
        self.readout_layout.addStretch()
        self.readout_panel.setVisible(False)
        layout.addWidget(self.readout_panel)

        self.session.readout_hook = self._show_readout

    def table(self, label: Any, value: Any) -> None:
        self.session.set_readout(str(label), value)

    def readout_text(self, label: str) -> Optional[str]:
        widget = self._labels.get(label)
        return widget.text() if widget is not None else None

    def clear_readouts(self) -> None:
        for widget in self._labels.values():
            widget.deleteLater()
        self._labels.clear()
        self.session.readouts.clear()
        self.readout_panel.setVisible(False)

    def _show_readout(self, label: str, text: str) -> None:
        widget = self._labels.get(label)
        if widget is None:
            widget = QtWidgets.QLabel()
            widget.setStyleSheet("font-family: monospace;")
            # keep the trailing stretch last
            self.readout_layout.insertWidget(self.readout_layout.count() - 1, widget)
            self._labels[label] = widget
            self.readout_panel.setVisible(True)
        widget.setText(text)


class SketchRunner:
    """Loads sketch scripts into a window and swaps them on demand.

    A script is plain Python executed in the namespace from
    ``compat.build_namespace``. It may define ``preload``, ``setup``, ``draw``
    and any of the event handlers in ``canvas.HANDLER_NAMES`` (either
    spelling).
    """

    def __init__(self, window: SketchWindow):
        self.window = window
        self.canvas = window.canvas
        self.session = window.session
        self.current_path: Optional[Path] = None
        self.namespace: Dict[str, Any] = {}
        self._milestones: Optional[MilestoneManager] = None
        self.session.on_key_pressed(self._on_key)

    def run(self, path: PathLike) -> bool:
        script = Path(path)
        self.canvas.no_loop()
        self.canvas.reset_sketch(None, None)
        self.window.clear_readouts()
        self.current_path = script
        g = self.canvas.graphics
        ns = build_namespace(g, self.canvas, extras=self._extras(g))
        self.namespace = ns
        try:
            source = script.read_text(encoding="utf-8")
            exec(compile(source, str(script), "exec"), ns)
        except Exception:
            logger.exception("sketch %s failed to load", script)
            return False

        self.canvas.setup_fn = _frame_call(ns, "setup")
        self.canvas.draw_fn = _frame_call(ns, "draw")
        self.canvas.pre_frame_hooks.append(lambda: refresh_namespace(ns, g))
        # Handlers run between frames and must see the event's own pointer and key.
        self.canvas.pre_event_hooks.append(lambda: refresh_namespace(ns, g))
        for name in HANDLER_NAMES:
            handler = ns.get(name) or ns.get(camel_case(name))
            if callable(handler):
                self.canvas.handlers[name] = handler

        preload = ns.get("preload")
        if callable(preload):
            self.session.assets.preloading = True
            try:
                preload()
            except Exception:
                logger.exception("sketch %s preload() raised", script)
                return False
            finally:
                self.session.assets.preloading = False

        self.window.setWindowTitle(f"learnsketch: {script.stem}")
        logger.info("sketch started path=%s", script)
        self.canvas.start()
        return True

    def create_manager(self, num_milestones: int, path: str = "milestones", prefix: str = "m") -> "MilestoneManager":
        base = self.current_path.parent if self.current_path is not None else Path(".")
        self._milestones = MilestoneManager(self, int(num_milestones), base / path, prefix)
        return self._milestones

    def _on_key(self, key: str, _key_code: int) -> None:
        if self._milestones is not None:
            self._milestones.handle_key(key)

    def _extras(self, g) -> Dict[str, Callable[..., Any]]:
        canvas = self.canvas

        def create_canvas(width: int, height: int) -> None:
            canvas.create_canvas(width, height)
            refresh_namespace(self.namespace, g)

        def resize_canvas(width: int, height: int) -> None:
            canvas.resize_canvas(width, height)
            refresh_namespace(self.namespace, g)

        return {
            "create_canvas": create_canvas,
            "resize_canvas": resize_canvas,
            "table": self.window.table,
            "create_manager": self.create_manager,
        }


class MilestoneManager:
    """Number keys 1..N swap in ``<folder>/<prefix><n>.py``."""

    def __init__(self, runner: SketchRunner, count: int, folder: Path, prefix: str):
        self.runner = runner
        self.count = count
        self.folder = folder
        self.prefix = prefix
        self.defer: Callable[[Callable[[], None]], None] = _next_tick

    def path_for(self, key: str) -> Optional[Path]:
        if not key.isdecimal():
            return None
        index = int(key)
        if not 1 <= index <= self.count:
            return None
        return self.folder / f"{self.prefix}{index}.py"

    def handle_key(self, key: str) -> bool:
        path = self.path_for(key)
        if path is None:
            return False
        logger.info("switching to milestone %s", path)
        # Leave the key event before tearing down the running sketch.
        self.defer(lambda: self.runner.run(path))
        return True


def _next_tick(callback: Callable[[], None]) -> None:
    QtCore.QTimer.singleShot(0, callback)


def _frame_call(ns: Dict[str, Any], name: str) -> Optional[Callable[[Any], None]]:
    fn = ns.get(name)
    if not callable(fn):
        return None

    def _call(_g: Any) -> None:
        fn()

    return _call


def run_sketch(path: PathLike, session: Optional[SketchSession] = None) -> SketchRunner:
    """Open a window for ``path`` and start it. A ``QApplication`` must exist."""
    window = SketchWindow(session)
    runner = SketchRunner(window)
    runner.run(path)
    window.show()
    return runner
