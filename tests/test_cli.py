from __future__ import annotations

from pathlib import Path

from learnsketch import __main__ as cli
from learnsketch import config
from learnsketch.shared.coordinates import AngleMode, CoordinateMode


def test_parse_args_defaults() -> None:
    args = cli._parse_args(["sketch.py"])
    assert args.sketch == Path("sketch.py")
    assert args.width is None
    assert args.mode is None
    assert args.log_dir is None


def test_parse_args_overrides(tmp_path) -> None:
    args = cli._parse_args(
        ["s.py", "--width", "300", "--height", "200", "--fps", "24", "--mode", "top-left", "--log-dir", str(tmp_path)]
    )
    assert (args.width, args.height, args.fps) == (300, 200, 24)
    assert args.mode == "top-left"
    assert args.log_dir == tmp_path


def test_build_session_merges_config_and_flags(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "sketch_config.json")
    config.save_sketch_config({"canvas_width": 640, "canvas_height": 480, "angle_mode": "radians", "asset_root": "art"})
    sketch = tmp_path / "demo.py"
    sketch.write_text("", encoding="utf-8")

    session = cli.build_session(cli._parse_args([str(sketch), "--height", "360", "--mode", "top-left"]))
    assert (session.width, session.height) == (640, 360)
    assert session.mode is CoordinateMode.TOP_LEFT
    assert session.angle_mode is AngleMode.RADIANS
    assert session.frame_rate == 60
    assert session.confetti_count == 100
    assert session.assets.resolver.asset_root == (tmp_path / "art").resolve()


def test_missing_sketch_returns_error(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: {})
    code = cli.main([str(tmp_path / "nope.py"), "--log-dir", str(tmp_path)])
    assert code == 2
    assert "no such sketch file" in capsys.readouterr().err
