"""
Builders for the handler family.

Every handler configuration may carry ``level``, ``formatter`` and
``processors`` next to the handler specific keys. Wrapping handlers
(``buffer``, ``fingers_crossed``) take a nested ``handler`` configuration
of the form ``{type, enabled, options}``.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import logging.handlers
import sys
from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Optional, Union

from logforge.activation.strategies import ActivationStrategy
from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.defaults import DEFAULT_BUFFER_LIMIT, DEFAULT_LEVEL, DEFAULT_MAX_FILES
from logforge.exceptions import (
    ConfigurationError,
    LogforgeError,
    ServiceNotCreatedError,
    ServiceNotFoundError,
)
from logforge.handlers.attach import (
    attach_processors,
    get_registry,
    resolve_formatter,
    resolve_processors,
    set_formatter,
)
from logforge.handlers.buffering import BufferHandler, FingersCrossedHandler
from logforge.levels import to_level
from logforge.registry import ACTIVATION_STRATEGY_REGISTRY, HANDLER_REGISTRY

STANDARD_STREAMS = {
    "ext://sys.stdout": lambda: sys.stdout,
    "ext://sys.stderr": lambda: sys.stderr,
}


class HandlerOptions(BuilderOptions):
    """Keys every handler accepts."""

    level: Union[int, str] = DEFAULT_LEVEL
    formatter: Any = None
    processors: Any = None


class StreamHandlerOptions(HandlerOptions):
    stream: Any
    encoding: Optional[str] = None
    delay: bool = False


class RotatingFileHandlerOptions(HandlerOptions):
    filename: str
    max_files: int = DEFAULT_MAX_FILES
    encoding: Optional[str] = None
    delay: bool = False


class BufferHandlerOptions(HandlerOptions):
    handler: Any
    buffer_limit: int = DEFAULT_BUFFER_LIMIT
    flush_on_overflow: bool = True


class FingersCrossedHandlerOptions(HandlerOptions):
    handler: Any
    activation_strategy: Any = None
    buffer_size: int = 0
    stop_buffering: bool = True
    passthru_level: Optional[Union[int, str]] = None


class HandlerBuilder(Builder[logging.Handler, HandlerOptions]):
    """
    Base for handler builders: applies level, formatter and processors.

    Level, formatter and processors are resolved before the handler is
    created, so a configuration error never leaves an opened file behind.
    """

    options_model = HandlerOptions

    def assemble(self, lookup: ServiceLookup, options: HandlerOptions) -> logging.Handler:
        level = to_level(options.level)
        formatter = resolve_formatter(lookup, options.formatter)
        processors = resolve_processors(lookup, options.processors)

        handler = self.create_handler(lookup, options)
        handler.setLevel(level)
        set_formatter(handler, formatter)
        attach_processors(handler, processors)
        return handler

    @abstractmethod
    def create_handler(self, lookup: ServiceLookup, options: Any) -> logging.Handler:
        """Create the bare handler from validated options."""


class StreamHandlerBuilder(HandlerBuilder):
    """
    Builds a stream handler.

    ``stream`` is resolved in this order: a service name known to the
    lookup, ``ext://sys.stdout`` / ``ext://sys.stderr``, any other string
    as a file path, or an object with a ``write`` method.

    Raises:
        ConfigurationError: "The required stream is missing"
        ServiceNotFoundError: "invalid stream given" for other values
    """

    options_model = StreamHandlerOptions
    requires_options = True
    required_keys = (("stream", "The required stream is missing"),)

    def create_handler(self, lookup: ServiceLookup, options: StreamHandlerOptions) -> logging.Handler:
        stream = self.get_stream(lookup, options.stream)
        if isinstance(stream, str):
            return logging.FileHandler(stream, encoding=options.encoding, delay=options.delay)
        return logging.StreamHandler(stream)

    def get_stream(self, lookup: ServiceLookup, stream: Any) -> Any:
        if isinstance(stream, str):
            if lookup is not None and lookup.has(stream):
                try:
                    stream = lookup.get(stream)
                except Exception as exc:
                    raise ServiceNotFoundError(
                        message="Could not load stream",
                        details={"service": stream},
                        original_exception=exc,
                    ) from exc
            elif stream in STANDARD_STREAMS:
                return STANDARD_STREAMS[stream]()

        if isinstance(stream, str) or callable(getattr(stream, "write", None)):
            return stream

        raise ServiceNotFoundError(
            message="invalid stream given",
            details={"stream_type": type(stream).__name__},
        )


class RotatingFileHandlerBuilder(HandlerBuilder):
    """Builds a file handler rotating at midnight, keeping ``maxFiles`` backups."""

    options_model = RotatingFileHandlerOptions
    requires_options = True
    required_keys = (("filename", "No filename provided"),)

    def create_handler(
        self, lookup: ServiceLookup, options: RotatingFileHandlerOptions
    ) -> logging.Handler:
        return logging.handlers.TimedRotatingFileHandler(
            options.filename,
            when="midnight",
            backupCount=options.max_files,
            encoding=options.encoding,
            delay=options.delay,
        )


class WrappingHandlerBuilder(HandlerBuilder):
    """Base for builders wrapping a nested handler configuration."""

    requires_options = True
    required_keys = (("handler", "No handler provided"),)

    def get_handler(self, lookup: ServiceLookup, config: Any) -> logging.Handler:
        """
        Build the wrapped handler from ``{type, enabled, options}``.

        Raises:
            ConfigurationError: If the config is not a mapping, lacks
                ``type``, or is disabled
            ServiceNotFoundError: If the handler type is unknown
        """
        if not isinstance(config, Mapping):
            raise ConfigurationError(
                message="HandlerConfig must be a mapping",
                error_code="CFG_002",
                details={"handler_type": type(config).__name__},
            )
        if "type" not in config:
            raise ConfigurationError(message="Options must contain a type for the handler")
        if "enabled" in config and not config["enabled"]:
            raise ConfigurationError(
                message="No active handler specified",
                error_code="CFG_002",
                details={"type": config["type"]},
            )

        registry = get_registry(lookup, HANDLER_REGISTRY)
        try:
            return registry.get(config["type"], config.get("options") or {})
        except ServiceNotFoundError as exc:
            raise ServiceNotFoundError(
                message=f"Could not load handler class {config['type']}",
                details={"type": config["type"]},
                original_exception=exc,
            ) from exc


class BufferHandlerBuilder(WrappingHandlerBuilder):
    options_model = BufferHandlerOptions

    def create_handler(self, lookup: ServiceLookup, options: BufferHandlerOptions) -> logging.Handler:
        target = self.get_handler(lookup, options.handler)
        return BufferHandler(target, options.buffer_limit, options.flush_on_overflow)


class FingersCrossedHandlerBuilder(WrappingHandlerBuilder):
    """
    Builds a FingersCrossedHandler.

    ``activationStrategy`` accepts None, a level number, a strategy object,
    a ``{type, options}`` mapping or a name registered as activation
    strategy, and finally a level name.
    """

    options_model = FingersCrossedHandlerOptions

    def create_handler(
        self, lookup: ServiceLookup, options: FingersCrossedHandlerOptions
    ) -> logging.Handler:
        strategy = self.get_activation_strategy(lookup, options.activation_strategy)
        passthru_level = None
        if options.passthru_level is not None:
            passthru_level = to_level(options.passthru_level)

        target = self.get_handler(lookup, options.handler)
        return FingersCrossedHandler(
            target,
            strategy,
            options.buffer_size,
            options.stop_buffering,
            passthru_level,
        )

    def get_activation_strategy(
        self, lookup: ServiceLookup, value: Any
    ) -> Optional[Union[ActivationStrategy, int]]:
        if value is None:
            return None
        if (isinstance(value, int) and not isinstance(value, bool)) or isinstance(
            value, ActivationStrategy
        ):
            return value

        registry = get_registry(lookup, ACTIVATION_STRATEGY_REGISTRY)

        if isinstance(value, Mapping):
            if "type" not in value:
                raise ConfigurationError(
                    message="Options must contain a type for the ActivationStrategy"
                )
            return self._load_strategy(registry, value["type"], value.get("options") or {})

        if isinstance(value, str) and registry.has(value):
            return self._load_strategy(registry, value, {})

        try:
            return to_level(value)
        except ValueError:
            pass

        raise ServiceNotCreatedError(
            message="Could not find Class for ActivationStrategy",
            details={"value_type": type(value).__name__},
        )

    def _load_strategy(self, registry: Any, name: str, options: Mapping) -> ActivationStrategy:
        try:
            return registry.get(name, options)
        except LogforgeError as exc:
            raise ServiceNotFoundError(
                message="Could not load ActivationStrategy class",
                details={"type": name},
                original_exception=exc,
            ) from exc


class NullHandlerBuilder(HandlerBuilder):
    def create_handler(self, lookup: ServiceLookup, options: HandlerOptions) -> logging.Handler:
        return logging.NullHandler()
