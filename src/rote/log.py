from __future__ import annotations

import logging
import sys
from typing import Optional

from . import config

FORMAT = "%(levelname)s | %(name)s | %(message)s"

_handler: Optional[logging.StreamHandler] = None


def level_for(verbosity: int, quiet: bool = False) -> int:
    """Map -q / -v counts onto a logging level."""
    if quiet:
        return logging.ERROR
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure(verbosity: int = 0, quiet: bool = False) -> None:
    global _handler
    level = level_for(verbosity, quiet)
    if config.LOG_LEVEL and not quiet and verbosity == 0:
        level = getattr(logging, config.LOG_LEVEL.upper(), level)

    root = logging.getLogger("rote")
    root.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(FORMAT))
        root.addHandler(_handler)
    else:
        # stderr may have been swapped since the first call
        _handler.setStream(sys.stderr)


def get_logger(name: str) -> logging.Logger:
    if not name.startswith("rote"):
        name = f"rote.{name}"
    return logging.getLogger(name)
