"""
LoggingService - Centralized structured logging for logforge.

Provides consistent, context-enriched, machine-readable logging
across all modules using structlog.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from logforge.levels import LEVELS, standard_level


@dataclass
class LoggingConfig:
    """
    Configuration for LoggingService.

    Attributes:
        level: Log level (DEBUG, INFO, NOTICE, WARNING, ERROR, CRITICAL, ...)
        format: Output format ("json" or "console" for dev)
        output_stream: Output destination (default: sys.stderr)
        sensitive_keys: Set of option keys to redact (e.g., "password", "api-key")

    Example:
        config = LoggingConfig(
            level="INFO",
            format="json",
            sensitive_keys={"password", "api-key"}
        )
    """

    level: str = "INFO"
    format: str = "json"  # "json" or "console"
    output_stream: Any = sys.stderr
    sensitive_keys: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.sensitive_keys:
            self.sensitive_keys = {
                "password",
                "passwd",
                "pwd",
                "api_key",
                "api-key",
                "apikey",
                "key",
                "token",
                "access_token",
                "secret",
                "auth",
                "authorization",
            }


class LoggingService:
    """
    Centralized structured logging service using structlog.

    Builders log the products they assemble at debug level through loggers
    obtained here. Outputs JSON logs to stderr by default.

    Example:
        # Setup logging once at startup
        LoggingService.configure_logging(level="INFO", format="json")

        # Get logger for a module
        logger = LoggingService.get_logger("logforge.formatters")

        logger.debug("product_built", builder="line", option_keys=["format"])
    """

    # Class-level state
    _configured: bool = False
    _log_level: str = "INFO"
    _config: Optional[LoggingConfig] = None
    _loggers: dict[str, structlog.BoundLogger] = {}
    _sensitive_keys: set[str] = LoggingConfig().sensitive_keys

    @classmethod
    def configure_logging(
        cls, level: str = "INFO", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Configure global structured logging infrastructure.

        Sets up structlog with JSON (or console) output, configures log level,
        and initializes processors for context enrichment.

        This should be called ONCE at application startup before any logging.

        Args:
            level: Log level name
            format: Output format ("json" or "console")
            config: Optional LoggingConfig for advanced configuration

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If called after logging already configured
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        if config is not None:
            cfg = config
        else:
            level_upper = level.upper()
            if level_upper.lower() not in LEVELS:
                raise ValueError(
                    f"Invalid log level: {level}. Must be one of: {', '.join(LEVELS)}"
                )

            format_lower = format.lower()
            if format_lower not in ["json", "console"]:
                raise ValueError(f"Invalid format: {format}. Must be 'json' or 'console'")

            cfg = LoggingConfig(level=level_upper, format=format_lower)

        cls._config = cfg
        cls._log_level = cfg.level
        cls._sensitive_keys = cfg.sensitive_keys

        processors = cls._setup_processors()
        # structlog only filters on the standard levels; notice filters like info
        min_level = standard_level(LEVELS[cfg.level.lower()])

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> structlog.BoundLogger:
        """
        Get a module/component-specific logger.

        Returns a cached logger if already created. Before
        configure_logging() has run, an uncached logger wrapping the
        standard library logger ``name`` is returned, so the host
        application's logging configuration decides what is written.

        Args:
            name: Logger name (typically module path)

        Returns:
            BoundLogger instance

        Raises:
            ValueError: If name is empty or too long
        """
        if not name:
            raise ValueError("Logger name cannot be empty")

        if len(name) > 200:
            raise ValueError("Logger name exceeds maximum length (200)")

        if not cls._configured:
            return structlog.wrap_logger(
                logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
            )

        if name in cls._loggers:
            return cls._loggers[name]

        logger = structlog.get_logger(name)
        cls._loggers[name] = logger

        return logger

    @classmethod
    def sanitize_metadata(cls, data: Any) -> Any:
        """
        Sanitize sensitive data from metadata before logging.

        Replaces values for sensitive keys with "[REDACTED]".
        Recursively processes nested dictionaries and lists.

        Args:
            data: Metadata dictionary to sanitize

        Returns:
            Sanitized copy of metadata

        Example:
            sanitized = LoggingService.sanitize_metadata(
                {"username": "alice", "password": "secret123"}
            )
            # {"username": "alice", "password": "[REDACTED]"}
        """
        if not isinstance(data, dict):
            return data

        sanitized: Dict[str, Any] = {}

        for key, value in data.items():
            if isinstance(key, str) and key.lower() in cls._sensitive_keys:
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = cls.sanitize_metadata(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    cls.sanitize_metadata(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                sanitized[key] = value

        return sanitized

    @classmethod
    def _setup_processors(cls) -> list[Processor]:
        """
        Setup structlog processors based on configuration.

        Processors (in order):
            1. add_log_level: Add log level to context
            2. TimeStamper: Add ISO timestamp
            3. StackInfoRenderer: Render stack info if requested
            4. format_exc_info: Format exception info
            5. JSONRenderer or ConsoleRenderer: Final output format
        """
        processors: list[Processor] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if cls._config and cls._config.format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors
