"""Logging setup for applications embedding the layout engine."""

import logging
import sys

# Package logger; modules log through logging.getLogger(__name__) children
logger = logging.getLogger("slidelayout")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "WARNING", stream=None) -> logging.Logger:
    """Attach a stream handler to the slidelayout logger.

    The library never configures the root logger; callers opt in here.

    Args:
        level: Logging level name or number.
        stream: Output stream, defaults to stderr.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Replace a handler installed by an earlier call
    for handler in list(logger.handlers):
        if getattr(handler, "_slidelayout", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._slidelayout = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
