"""Logging configuration for text-anchor.

The library logs through loguru's global logger: capture and fallback
decisions at DEBUG, unresolvable occurrences at WARNING. Hosts that do not
configure loguru themselves call :func:`configure_logging` once at startup.
"""

import sys

from loguru import logger

LOG_FORMAT = "{level.icon} {name}:{function}: {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr; ``verbose`` includes the fallback trace."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
