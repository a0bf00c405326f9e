"""Logging setup for orbitsim.

The package logs under the ``orbitsim`` logger and installs a NullHandler, so
nothing is printed unless the application configures logging. Scripts can call
:func:`configure_logging` to get a console handler; the level comes from the
argument or the ``LOG_LEVEL`` environment variable.

Example:
    >>> from orbitsim.log import configure_logging
    >>> configure_logging("DEBUG")
"""

import logging
import os

LOGGER_NAME = "orbitsim"
LOG_FORMAT = "%(levelname)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the package logger or one of its children."""
    if name is None:
        return logger
    return logger.getChild(name)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Args:
        level: Level name or number. Falls back to ``LOG_LEVEL`` and then WARNING.

    Returns:
        The configured ``orbitsim`` logger
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        levels_by_name = logging.getLevelNamesMapping()
        level = levels_by_name[level.upper()]

    logger.setLevel(level)
    logger.propagate = False

    # Re-configuring replaces the previous console handler
    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
