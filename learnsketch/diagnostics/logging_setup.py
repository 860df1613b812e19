from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

_CONFIGURED = False
_HANDLER: Optional[logging.Handler] = None

_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"
ROOT_LOGGER = "learnsketch"


def configure_logging(
    base_dir: Optional[Path] = None,
    level: int = logging.INFO,
    logger_name: Optional[str] = None,
) -> Dict[str, str]:
    """Attach a key-value file handler under ``<base_dir>/logs/learnsketch.log``.

    Without ``base_dir`` the package logger writes to ``data/roaming`` and is
    configured once per process. An explicit ``base_dir`` targets the
    ``learnsketch.test`` logger unless ``logger_name`` says otherwise.
    """
    global _CONFIGURED, _HANDLER
    root = base_dir or Path("data/roaming")
    log_dir = root / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "learnsketch.log"

    if logger_name is None:
        logger_name = ROOT_LOGGER if base_dir is None else f"{ROOT_LOGGER}.test"
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False

    if logger_name == ROOT_LOGGER:
        if not _CONFIGURED:
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
            _HANDLER = handler
            _CONFIGURED = True
    elif not logger.handlers:
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": logger_name,
    }


def get_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER)
