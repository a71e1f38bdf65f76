"""
Logging setup for the popup runtime.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
DEFAULT_LOG_DIR = Path.home() / ".popup" / "logs"
LOG_FILE_NAME = "popup.log"


def default_log_path() -> Path:
    log_dir = os.environ.get("POPUP_LOG_DIR")
    return (Path(log_dir) if log_dir else DEFAULT_LOG_DIR) / LOG_FILE_NAME


def configure(log_path: Optional[Path] = None) -> None:
    """
    Configure loguru for the application.

    Runs once per process: a console sink at ``POPUP_LOG_LEVEL`` (INFO by
    default) and a rotating file sink that records everything down to DEBUG.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or default_log_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    if sys.stderr is not None:
        level = os.environ.get("POPUP_LOG_LEVEL", "INFO").upper()
        _logger.add(sys.stderr, level=level, enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
