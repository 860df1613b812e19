from __future__ import annotations

import textwrap
from pathlib import Path

from PyQt6 import QtCore, QtGui

from learnsketch.canvas import SketchCanvas
from learnsketch.host import SketchRunner, SketchWindow

SKETCH = """
count = 0

def setup():
    create_canvas(120, 80)
    background(0)

def draw():
    global count
    count += 1
    table("frames", frameCount)
"""

PRELOAD_SKETCH = """
started = []

def preload():
    load_image("dot.png", "dot")

def setup():
    started.append(assets["dot"].width())
"""


def _write(path: Path, source: str) -> Path:
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def _runner(sketch_session) -> SketchRunner:
    return SketchRunner(SketchWindow(sketch_session))


def test_run_calls_setup_then_draw(qapp, tmp_path, sketch_session) -> None:
    runner = _runner(sketch_session)
    assert runner.run(_write(tmp_path / "sketch.py", SKETCH))
    runner.canvas.no_loop()
    ns = runner.namespace
    assert ns["count"] == 1
    assert (sketch_session.width, sketch_session.height) == (120, 80)
    assert ns["width"] == 120
    assert runner.window.readout_text("frames") == "frames: 1"

    runner.canvas.redraw()
    assert ns["count"] == 2
    assert runner.window.readout_text("frames") == "frames: 2"


def test_preload_holds_setup_until_assets_arrive(qapp, tmp_path, sketch_session, scheduler) -> None:
    image = QtGui.QImage(5, 5, QtGui.QImage.Format.Format_ARGB32)
    image.fill(QtGui.QColor(0, 0, 255))
    image.save(str(tmp_path / "dot.png"), "PNG")

    runner = _runner(sketch_session)
    assert runner.run(_write(tmp_path / "sketch.py", PRELOAD_SKETCH))
    runner.canvas.no_loop()
    assert runner.namespace["started"] == []
    assert sketch_session.assets.preload_pending == 1

    scheduler.run_all()
    assert runner.canvas.redraw()
    assert runner.namespace["started"] == [5]


def test_draw_error_stops_loop(qapp, tmp_path, sketch_session) -> None:
    source = "def draw():\n    raise ValueError('boom')\n"
    runner = _runner(sketch_session)
    assert runner.run(_write(tmp_path / "broken.py", source))
    assert isinstance(runner.canvas.last_error, ValueError)
    assert not runner.canvas.is_looping()


def test_syntax_error_is_reported(qapp, tmp_path, sketch_session) -> None:
    runner = _runner(sketch_session)
    assert not runner.run(_write(tmp_path / "bad.py", "def draw(:\n"))


def test_handlers_accept_either_spelling(qapp, tmp_path, sketch_session) -> None:
    source = """
    pressed = []

    def mousePressed():
        pressed.append("camel")

    def key_pressed():
        pressed.append(key)
    """
    runner = _runner(sketch_session)
    runner.run(_write(tmp_path / "events.py", source))
    runner.canvas.no_loop()
    assert set(runner.canvas.handlers) == {"mouse_pressed", "key_pressed"}
    runner.canvas.handlers["mouse_pressed"]()
    assert runner.namespace["pressed"] == ["camel"]


def test_milestone_paths(qapp, tmp_path, sketch_session) -> None:
    runner = _runner(sketch_session)
    runner.run(_write(tmp_path / "main.py", "create_manager(3)\n"))
    runner.canvas.no_loop()
    manager = runner._milestones
    assert manager is not None
    assert manager.path_for("2") == tmp_path / "milestones" / "m2.py"
    assert manager.path_for("0") is None
    assert manager.path_for("4") is None
    assert manager.path_for("a") is None


def test_milestone_key_runs_script(qapp, tmp_path, sketch_session, monkeypatch) -> None:
    runner = _runner(sketch_session)
    runner.run(_write(tmp_path / "main.py", "createManager(2, 'steps', 'step')\n"))
    runner.canvas.no_loop()
    ran = []
    monkeypatch.setattr(runner, "run", lambda path: ran.append(path))
    runner._milestones.defer = lambda fn: fn()
    sketch_session.notify_key_pressed("2", 50)
    assert ran == [tmp_path / "steps" / "step2.py"]


def test_window_readouts(qapp, sketch_session) -> None:
    window = SketchWindow(sketch_session)
    assert isinstance(window.canvas, SketchCanvas)
    window.table("speed", 3)
    window.table("speed", 4)
    assert window.readout_text("speed") == "speed: 4"
    assert sketch_session.readouts == {"speed": "speed: 4"}
    window.clear_readouts()
    assert window.readout_text("speed") is None


def test_handlers_see_the_event_they_are_answering(qapp, tmp_path, sketch_session) -> None:
    source = """
    seen = []

    def mousePressed():
        seen.append(("mouse", mouseX, mouseY, mouseIsPressed))

    def keyPressed():
        seen.append(("key", key))
    """
    runner = _runner(sketch_session)
    runner.run(_write(tmp_path / "events.py", source))
    runner.canvas.no_loop()

    pos = QtCore.QPointF(10, 30)
    press = QtGui.QMouseEvent(
        QtCore.QEvent.Type.MouseButtonPress,
        pos,
        pos,
        QtCore.Qt.MouseButton.LeftButton,
        QtCore.Qt.MouseButton.LeftButton,
        QtCore.Qt.KeyboardModifier.NoModifier,
    )
    runner.canvas.mousePressEvent(press)
    key = QtGui.QKeyEvent(
        QtCore.QEvent.Type.KeyPress, QtCore.Qt.Key.Key_A.value, QtCore.Qt.KeyboardModifier.NoModifier, "a"
    )
    runner.canvas.keyPressEvent(key)

    # 100 px tall canvas in bottom-left mode: raw y 30 is y 70.
    assert runner.namespace["seen"] == [("mouse", 10, 70, True), ("key", "a")]


def test_milestone_ignores_non_ascii_digits(qapp, tmp_path, sketch_session) -> None:
    runner = _runner(sketch_session)
    runner.run(_write(tmp_path / "main.py", "create_manager(3)\n"))
    runner.canvas.no_loop()
    manager = runner._milestones
    assert manager.path_for("²") is None
    assert manager.handle_key("²") is False
