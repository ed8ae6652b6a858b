"""Logging configuration shared by all tools."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%X]"


def setup_logger(name: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Configure a logger with a rich console handler.

    Args:
        name: Logger name (None configures the root logger)
        level: Log level name, e.g. "DEBUG" or "INFO"

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    # Avoid stacking handlers when a CLI is invoked more than once in-process
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        # Log to stderr so machine-readable output on stdout stays clean
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
