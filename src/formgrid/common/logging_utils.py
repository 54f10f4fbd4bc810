"""
Logging utilities for allocator consumers.

`configure_logging()` sets up console logging for scripts and tests so
layout warnings (row overflow) and ignored commands become visible.
"""
from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConsoleHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging()."""


def configure_logging(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Attach a stream handler to the `formgrid` logger.

    Calling this twice does not add a second handler; the level and
    format of the existing one are updated instead.

    Args:
        level: Log level for the package logger.
        fmt: Format string for the handler.

    Returns:
        The `formgrid` package logger.
    """
    logger = logging.getLogger("formgrid")
    logger.setLevel(level)
    handler = next((h for h in logger.handlers if isinstance(h, ConsoleHandler)), None)
    if handler is None:
        handler = ConsoleHandler()
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt))
    return logger
