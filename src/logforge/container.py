"""
ServiceContainer - minimal service lookup holding named services.

Services are registered either as ready instances or as factories.
A factory is called with the container on first ``get`` and its result
is kept for later calls. ``create_container`` returns a container with
the builder registries of every product family registered.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from logforge.activation import (
    ChannelLevelActivationStrategyBuilder,
    ErrorLevelActivationStrategyBuilder,
)
from logforge.builder import ServiceLookup
from logforge.clients import AsyncElasticsearchClientBuilder, ElasticsearchClientBuilder
from logforge.exceptions import ServiceNotCreatedError, ServiceNotFoundError
from logforge.formatters import (
    ElasticsearchFormatterBuilder,
    FlowdockFormatterBuilder,
    FluentdFormatterBuilder,
    GelfMessageFormatterBuilder,
    JsonFormatterBuilder,
    LineFormatterBuilder,
    LogglyFormatterBuilder,
    LogmaticFormatterBuilder,
    LogstashFormatterBuilder,
    MongoDBFormatterBuilder,
    NormalizerFormatterBuilder,
    StreamFormatterBuilder,
)
from logforge.handlers import (
    BufferHandlerBuilder,
    FingersCrossedHandlerBuilder,
    NullHandlerBuilder,
    RotatingFileHandlerBuilder,
    StreamHandlerBuilder,
)
from logforge.processors import (
    GitProcessorBuilder,
    MemoryUsageProcessorBuilder,
    PsrLogMessageProcessorBuilder,
    UidProcessorBuilder,
    WebProcessorBuilder,
)
from logforge.registry import (
    ACTIVATION_STRATEGY_REGISTRY,
    CLIENT_REGISTRY,
    FORMATTER_REGISTRY,
    HANDLER_REGISTRY,
    PROCESSOR_REGISTRY,
    BuilderRegistry,
)
from logforge.utils import get_logger

logger = get_logger(__name__)

Factory = Callable[["ServiceContainer"], Any]


class ServiceContainer:
    """
    Named services, created lazily and shared.

    Example:
        >>> container = ServiceContainer()
        >>> container.set("request.environ", {"REQUEST_URI": "/"})
        >>> container.set_factory("clock", lambda c: Clock())
        >>> container.get("clock") is container.get("clock")
        True
    """

    def __init__(self) -> None:
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Factory] = {}

    def set(self, name: str, service: Any) -> None:
        self._factories.pop(name, None)
        self._services[name] = service

    def set_factory(self, name: str, factory: Factory) -> None:
        self._services.pop(name, None)
        self._factories[name] = factory

    def has(self, name: str) -> bool:
        return name in self._services or name in self._factories

    def get(self, name: str) -> Any:
        """
        Return the service registered as ``name``.

        Raises:
            ServiceNotFoundError: If nothing is registered under ``name``
            ServiceNotCreatedError: If the factory fails; the failure is
                chained as the cause
        """
        if name in self._services:
            return self._services[name]

        factory = self._factories.get(name)
        if factory is None:
            raise ServiceNotFoundError(
                message=f"Service {name} is not registered",
                details={"service": name},
            )

        try:
            service = factory(self)
        except Exception as exc:
            raise ServiceNotCreatedError(
                message=f"Service {name} could not be created",
                details={"service": name},
                original_exception=exc,
            ) from exc

        self._services[name] = service
        logger.debug("service_created", service=name, service_type=type(service).__name__)
        return service


# ========================================
# FAMILY REGISTRIES
# ========================================


def formatter_registry(lookup: Optional[ServiceLookup] = None) -> BuilderRegistry:
    return BuilderRegistry(
        "formatter",
        {
            "normalizer": NormalizerFormatterBuilder(),
            "elasticsearch": ElasticsearchFormatterBuilder(),
            "gelf": GelfMessageFormatterBuilder(),
            "json": JsonFormatterBuilder(),
            "line": LineFormatterBuilder(),
            "stream": StreamFormatterBuilder(),
            "loggly": LogglyFormatterBuilder(),
            "logmatic": LogmaticFormatterBuilder(),
            "logstash": LogstashFormatterBuilder(),
            "fluentd": FluentdFormatterBuilder(),
            "flowdock": FlowdockFormatterBuilder(),
            "mongodb": MongoDBFormatterBuilder(),
        },
        aliases={
            "NormalizerFormatter": "normalizer",
            "ElasticsearchFormatter": "elasticsearch",
            "GelfMessageFormatter": "gelf",
            "JsonFormatter": "json",
            "LineFormatter": "line",
            "StreamFormatter": "stream",
            "LogglyFormatter": "loggly",
            "LogmaticFormatter": "logmatic",
            "LogstashFormatter": "logstash",
            "FluentdFormatter": "fluentd",
            "FlowdockFormatter": "flowdock",
            "MongoDBFormatter": "mongodb",
        },
        lookup=lookup,
    )


def processor_registry(lookup: Optional[ServiceLookup] = None) -> BuilderRegistry:
    return BuilderRegistry(
        "processor",
        {
            "git": GitProcessorBuilder(),
            "memory_usage": MemoryUsageProcessorBuilder(),
            "psr_log_message": PsrLogMessageProcessorBuilder(),
            "uid": UidProcessorBuilder(),
            "web": WebProcessorBuilder(),
        },
        aliases={
            "GitProcessor": "git",
            "MemoryUsageProcessor": "memory_usage",
            "memoryusage": "memory_usage",
            "PsrLogMessageProcessor": "psr_log_message",
            "psrlogmessage": "psr_log_message",
            "UidProcessor": "uid",
            "WebProcessor": "web",
        },
        lookup=lookup,
    )


def activation_strategy_registry(lookup: Optional[ServiceLookup] = None) -> BuilderRegistry:
    return BuilderRegistry(
        "activation strategy",
        {
            "error_level": ErrorLevelActivationStrategyBuilder(),
            "channel_level": ChannelLevelActivationStrategyBuilder(),
        },
        aliases={
            "ErrorLevelActivationStrategy": "error_level",
            "errorlevel": "error_level",
            "ChannelLevelActivationStrategy": "channel_level",
            "channellevel": "channel_level",
        },
        lookup=lookup,
    )


def handler_registry(lookup: Optional[ServiceLookup] = None) -> BuilderRegistry:
    return BuilderRegistry(
        "handler",
        {
            "stream": StreamHandlerBuilder(),
            "rotating": RotatingFileHandlerBuilder(),
            "buffer": BufferHandlerBuilder(),
            "fingers_crossed": FingersCrossedHandlerBuilder(),
            "null": NullHandlerBuilder(),
        },
        aliases={
            "StreamHandler": "stream",
            "RotatingFileHandler": "rotating",
            "BufferHandler": "buffer",
            "FingersCrossedHandler": "fingers_crossed",
            "fingerscrossed": "fingers_crossed",
            "NullHandler": "null",
        },
        lookup=lookup,
    )


def client_registry(lookup: Optional[ServiceLookup] = None) -> BuilderRegistry:
    return BuilderRegistry(
        "client",
        {
            "elasticsearch": ElasticsearchClientBuilder(),
            "async_elasticsearch": AsyncElasticsearchClientBuilder(),
        },
        aliases={
            "Elasticsearch": "elasticsearch",
            "AsyncElasticsearch": "async_elasticsearch",
        },
        lookup=lookup,
    )


def create_container(services: Optional[Mapping[str, Any]] = None) -> ServiceContainer:
    """
    Create a container with every family registry registered.

    Args:
        services: Additional services (for example server data or streams)
            that options may refer to by name

    Returns:
        ServiceContainer

    Example:
        >>> container = create_container({"request.environ": environ})
        >>> registry = container.get(PROCESSOR_REGISTRY)
        >>> processor = registry.get("web", {"serverData": "request.environ"})
    """
    container = ServiceContainer()
    container.set_factory(FORMATTER_REGISTRY, formatter_registry)
    container.set_factory(PROCESSOR_REGISTRY, processor_registry)
    container.set_factory(ACTIVATION_STRATEGY_REGISTRY, activation_strategy_registry)
    container.set_factory(HANDLER_REGISTRY, handler_registry)
    container.set_factory(CLIENT_REGISTRY, client_registry)

    for name, service in (services or {}).items():
        container.set(name, service)

    return container
