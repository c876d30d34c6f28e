"""Logging setup for voxlife."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

logger = logging.getLogger("voxlife")


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling it again only changes the level.

    Args:
        level: Level name, e.g. "DEBUG".

    Returns:
        The package logger.
    """
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
