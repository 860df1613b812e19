# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("data/roaming/sketch_config.json")
COORDINATE_MODES = ["bottom-left", "top-left"]
ANGLE_MODES = ["degrees", "radians"]
_DEFAULT_SKETCH_CONFIG = {
    "coordinate_mode": "bottom-left",
    "angle_mode": "degrees",
    "frame_rate": 60,
    "canvas_width": 400,
    "canvas_height": 400,
    "confetti_count": 100,
    "asset_root": ".",
}


# === [NAV-10] Config loading (defaults/roaming) ===============================
def load_sketch_config() -> Dict:
    path = CONFIG_PATH
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_DEFAULT_SKETCH_CONFIG, indent=2), encoding="utf-8")
        return _DEFAULT_SKETCH_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("sketch config unreadable at %s: %s", path, exc)
        return _DEFAULT_SKETCH_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_SKETCH_CONFIG.copy()
    for key, value in _DEFAULT_SKETCH_CONFIG.items():
        data.setdefault(key, value)
    return data


def save_sketch_config(data: Dict) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")


# === [NAV-20] Public getters ==================================================
def get_frame_rate() -> int:
    config = load_sketch_config()
    try:
        rate = int(config.get("frame_rate", 60))
    except (TypeError, ValueError):
        return 60
    return max(1, min(rate, 240))


def get_default_mode() -> str:
    mode = load_sketch_config().get("coordinate_mode")
    if mode in COORDINATE_MODES:
        return mode
    return COORDINATE_MODES[0]


def get_angle_mode() -> str:
    mode = load_sketch_config().get("angle_mode")
    if mode in ANGLE_MODES:
        return mode
    return ANGLE_MODES[0]


def get_canvas_size() -> Tuple[int, int]:
    config = load_sketch_config()
    try:
        width = int(config.get("canvas_width", 400))
        height = int(config.get("canvas_height", 400))
    except (TypeError, ValueError):
        return 400, 400
    return max(1, width), max(1, height)


def get_confetti_count() -> int:
    try:
        return max(0, int(load_sketch_config().get("confetti_count", 100)))
    except (TypeError, ValueError):
        return 100


def get_asset_root() -> Path:
    return Path(str(load_sketch_config().get("asset_root") or "."))


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "COORDINATE_MODES",
    "ANGLE_MODES",
    "load_sketch_config",
    "save_sketch_config",
    "get_frame_rate",
    "get_default_mode",
    "get_angle_mode",
    "get_canvas_size",
    "get_confetti_count",
    "get_asset_root",
]
