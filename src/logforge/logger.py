"""
LoggerBuilder - assembles a configured ``logging.Logger``.

The logger is created outside the global logging manager, so building
one never changes ``logging.getLogger`` results and two builds with the
same name give two independent loggers.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.config import settings
from logforge.exceptions import ConfigurationError, ServiceNotFoundError
from logforge.handlers.attach import ProcessorFilter, get_registry
from logforge.levels import to_level
from logforge.registry import HANDLER_REGISTRY, PROCESSOR_REGISTRY


class LoggerOptions(BuilderOptions):
    name: str
    handlers: Any = None
    processors: Any = None
    level: Optional[Union[int, str]] = None
    propagate: bool = False


class LoggerBuilder(Builder[logging.Logger, LoggerOptions]):
    """
    Builds a logger from ``{name, handlers, processors, level, propagate}``.

    A NullHandler is always attached first. ``handlers`` entries are
    handler objects or mappings naming a registered handler type under
    ``name``; the mapping itself is the handler's options. ``processors``
    entries are callables or ``{name, enabled, parameters}`` mappings.

    Example:
        >>> logger = LoggerBuilder()(container, "app", {
        ...     "name": "app",
        ...     "handlers": [{"name": "stream", "stream": "ext://sys.stderr"}],
        ...     "processors": [{"name": "uid", "parameters": {"length": 12}}],
        ... })
    """

    options_model = LoggerOptions

    def validate(self, options: Any) -> LoggerOptions:
        if not isinstance(options, Mapping) or "name" not in options:
            raise ConfigurationError(
                message="The name for the logger is missing",
                details={"options_type": type(options).__name__},
            )
        return super().validate(options)

    def assemble(self, lookup: ServiceLookup, options: LoggerOptions) -> logging.Logger:
        logger = logging.Logger(options.name)
        level = options.level if options.level is not None else settings.default_level
        logger.setLevel(to_level(level))
        logger.propagate = options.propagate
        logger.addHandler(logging.NullHandler())

        if options.handlers is not None:
            self.add_handlers(lookup, logger, options.handlers)

        if options.processors is not None:
            self.add_processors(lookup, logger, options.processors)

        return logger

    def add_handlers(self, lookup: ServiceLookup, logger: logging.Logger, handlers: Any) -> None:
        if isinstance(handlers, (str, bytes, Mapping)) or not isinstance(handlers, Iterable):
            raise ConfigurationError(
                message="Handlers must be iterable",
                error_code="CFG_002",
                details={"handlers_type": type(handlers).__name__},
            )

        for config in handlers:
            if isinstance(config, logging.Handler):
                logger.addHandler(config)
                continue
            if not isinstance(config, Mapping):
                raise ConfigurationError(
                    message="HandlerConfig must be a mapping",
                    error_code="CFG_002",
                    details={"handler_type": type(config).__name__},
                )
            if "enabled" in config and not config["enabled"]:
                continue
            if not config.get("name"):
                raise ConfigurationError(message="Options must contain a name for the handler")

            registry = get_registry(lookup, HANDLER_REGISTRY)
            try:
                handler = registry.get(config["name"], config)
            except ServiceNotFoundError as exc:
                raise ServiceNotFoundError(
                    message=f"Could not find service {config['name']}",
                    details={"handler": config["name"]},
                    original_exception=exc,
                ) from exc
            logger.addHandler(handler)

    def add_processors(self, lookup: ServiceLookup, logger: logging.Logger, processors: Any) -> None:
        if not isinstance(processors, (list, tuple)):
            raise ConfigurationError(
                message="Processors must be a list",
                error_code="CFG_002",
                details={"processors_type": type(processors).__name__},
            )

        for config in processors:
            processor = self.create_processor(lookup, config)
            if processor is not None:
                logger.addFilter(ProcessorFilter(processor))

    def create_processor(self, lookup: ServiceLookup, config: Any) -> Any:
        if callable(config):
            return config
        if not isinstance(config, Mapping):
            raise ConfigurationError(
                message="Options must be a mapping",
                error_code="CFG_002",
                details={"processor_type": type(config).__name__},
            )
        if "enabled" in config and not config["enabled"]:
            return None
        if "name" not in config:
            raise ConfigurationError(message="Options must contain a name for the processor")

        registry = get_registry(lookup, PROCESSOR_REGISTRY)
        try:
            return registry.get(config["name"], config.get("parameters") or {})
        except ServiceNotFoundError as exc:
            raise ServiceNotFoundError(
                message=f"Could not find service {config['name']}",
                details={"processor": config["name"]},
                original_exception=exc,
            ) from exc
