from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PyQt6 import QtWidgets

from . import config
from .diagnostics import configure_logging
from .host import SketchRunner, SketchWindow
from .renderkit.assets import AssetRegistry, AssetResolver
from .session import SketchSession
from .shared.coordinates import parse_angle_mode, parse_mode

logger = logging.getLogger("learnsketch.cli")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="learnsketch", description="Run a classroom sketch script")
    parser.add_argument("sketch", type=Path, help="Path to the sketch .py file")
    parser.add_argument("--width", type=int, default=None, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Canvas height in pixels")
    parser.add_argument("--fps", type=int, default=None, help="Frames per second")
    parser.add_argument(
        "--mode",
        choices=("top-left", "bottom-left"),
        default=None,
        help="Initial coordinate mode",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for logs/learnsketch.log")
    return parser.parse_args(argv)


def build_session(args: argparse.Namespace) -> SketchSession:
    width, height = config.get_canvas_size()
    asset_root = config.get_asset_root()
    if not asset_root.is_absolute():
        asset_root = args.sketch.resolve().parent / asset_root
    session = SketchSession(
        width=args.width or width,
        height=args.height or height,
        mode=parse_mode(args.mode or config.get_default_mode()),
        angle_mode=parse_angle_mode(config.get_angle_mode()),
        assets=AssetRegistry(AssetResolver(asset_root)),
        frame_rate=args.fps or config.get_frame_rate(),
        confetti_count=config.get_confetti_count(),
    )
    return session


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_dir, logger_name="learnsketch")
    if not args.sketch.is_file():
        print(f"learnsketch: no such sketch file: {args.sketch}", file=sys.stderr)
        return 2

    app = QtWidgets.QApplication(sys.argv[:1])
    session = build_session(args)
    window = SketchWindow(session)
    runner = SketchRunner(window)
    if not runner.run(args.sketch):
        logger.error("sketch %s could not be started", args.sketch)
        return 1
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
