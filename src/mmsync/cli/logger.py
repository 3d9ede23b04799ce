"""Logging helpers for the mmsync CLI."""

from __future__ import annotations

import logging
import os
import sys

import colorlog

LOG_COLORS = {
    "DEBUG": "bold_cyan",
    "INFO": "bold_green",
    "WARNING": "bold_yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red,bg_white",
}

_DATEFMT = "%Y-%m-%d %H:%M:%S"
_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s: %(message)s"


def _use_color() -> bool:
    return os.getenv("NO_COLOR") is None and sys.stderr.isatty()


def configure_logging(verbose: bool) -> None:
    """Log to stderr, with colors when stderr is a terminal."""
    level = logging.DEBUG if verbose else logging.INFO
    if not _use_color():
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT, force=True)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt="%(log_color)s[%(asctime)s] <%(name)s> %(levelname)s:%(reset)s %(message)s",
            log_colors=LOG_COLORS,
            datefmt=_DATEFMT,
        )
    )
    logging.basicConfig(level=level, handlers=[handler], force=True)
