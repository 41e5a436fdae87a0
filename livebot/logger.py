"""Logging setup for the command-line entry point."""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import get_settings


def setup_logger(
    name: str = "livebot",
    log_dir: Optional[str | Path] = None,
    log_level: Optional[str] = None,
    console_output: bool = True,
    file_output: bool = False,
) -> logging.Logger:
    """Configure the root logger and return the named logger.

    Args:
        name: logger name
        log_dir: directory for the dated log file
        log_level: DEBUG, INFO, WARNING or ERROR (defaults to settings)
        console_output: log to stdout
        file_output: also log to ``log_dir/livebot_YYYYMMDD.log``

    Returns:
        the configured logger
    """
    if log_level is None:
        log_level = get_settings().log_level
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    root_logger.handlers.clear()
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if file_output:
        if log_dir is None:
            log_dir = Path.cwd() / "logs"
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        file_handler = logging.FileHandler(
            log_dir / f"livebot_{timestamp}.log",
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        # the file always gets request/response bodies
        file_handler.setLevel(logging.DEBUG)
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    return logger
