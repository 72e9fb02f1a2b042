"""
Logging sinks for the userhub backend.

Every module logs through loguru's shared ``logger``; this module only decides
where the records go: JSON files for errors and for everything, plus a short
console format outside production.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import Settings, get_settings

CONSOLE_FORMAT = "{time:HH:mm:ss} | {level} | {message} | {extra}"


def configure_logging(settings: Optional[Settings] = None) -> Path:
    """Replace loguru's default sink with the service sinks. Returns the log directory."""
    settings = settings or get_settings()
    log_dir = Path(settings.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(log_dir / "error.log", level="ERROR", serialize=True, backtrace=False)
    logger.add(log_dir / "combined.log", level=settings.log_level, serialize=True, backtrace=False)
    if settings.log_console:
        logger.add(sys.stderr, level=settings.log_level, format=CONSOLE_FORMAT)
    return log_dir
