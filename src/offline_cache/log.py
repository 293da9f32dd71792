"""Logging configuration for the application."""

import logging
import sys

from offline_cache.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure application-wide logging.

    Level comes from LOG_LEVEL unless given explicitly.
    Output goes to stdout.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
