"""Logging configuration for the GitHub browser.

This module provides a pre-configured logger for the library.
Applications can customize logging by configuring the 'github_browser' logger.

Example:
    >>> import logging
    >>> logging.getLogger("github_browser").setLevel(logging.DEBUG)

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Create library logger
logger = logging.getLogger("github_browser")

# Set default level to WARNING to avoid noise
logger.setLevel(logging.WARNING)

# Add a null handler to prevent "No handler found" warnings
logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Configure logging for the GitHub browser library.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
        format_string: Custom format string for log messages.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The installed handler.

    Example:
        >>> from github_browser.utils.logger import configure_logging
        >>> configure_logging(level=logging.DEBUG)

    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if stream is None:
        stream = sys.stderr

    for existing in list(logger.handlers):
        if getattr(existing, "_github_browser", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(format_string))
    handler._github_browser = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
