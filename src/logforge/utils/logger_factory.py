"""
Logger Factory - Convenience wrapper for LoggingService.

Provides a simple get_logger() function that wraps LoggingService.get_logger()
for convenient structured logging access throughout the package.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

import structlog

from logforge.config import settings
from logforge.logging_service import LoggingService


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a module/component-specific logger.

    Logger names typically follow Python module path convention:
    "logforge.formatters.builders"

    Args:
        name: Logger name (typically module path or __name__)

    Returns:
        BoundLogger instance

    Raises:
        ValueError: If name is empty or exceeds maximum length (200 chars)

    Example:
        ```python
        from logforge.utils import get_logger

        logger = get_logger(__name__)
        logger.debug("product_built", builder="uid", option_keys=["length"])
        ```
    """
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure structured logging infrastructure.

    Convenience wrapper for LoggingService.configure_logging() that
    falls back to settings.log_level / settings.log_format.

    Args:
        level: Log level name. If None, uses settings.log_level.
        format: Output format ("json" or "console"). If None, uses settings.log_format.

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured
    """
    if level is None:
        level = settings.log_level

    if format is None:
        format = settings.log_format

    LoggingService.configure_logging(level=level, format=format)
