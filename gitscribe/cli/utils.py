"""Shared utility functions for CLI commands."""

import logging
import sys

LOGGER_NAME = "gitscribe"
LOG_FORMAT = "[gitscribe] %(levelname)s %(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Set up the stderr logger handed to each component.

    Args:
        verbose: Log at DEBUG level instead of WARNING.

    Returns:
        The configured root logger for gitscribe.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
