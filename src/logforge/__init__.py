"""
logforge - configuration-driven builders for logging components.

Turns declarative option mappings into configured formatters, processors,
activation strategies, handlers, loggers and Elasticsearch clients.
Contains:
- Builder contract and option validation
- Default table
- Service lookup helper
- Builder registries and a minimal service container
- Exception hierarchy, configuration and logging service

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from .builder import Builder, BuilderOptions, ServiceLookup, require_key, require_mapping
from .config import LogforgeSettings, get_config_summary, settings
from .container import ServiceContainer, create_container
from .exceptions import (
    ConfigurationError,
    LogforgeError,
    ServiceNotCreatedError,
    ServiceNotFoundError,
)
from .logger import LoggerBuilder
from .logging_service import LoggingConfig, LoggingService
from .lookup import Absent, Inline, Reference, classify, resolve_service
from .registry import (
    ACTIVATION_STRATEGY_REGISTRY,
    CLIENT_REGISTRY,
    FORMATTER_REGISTRY,
    HANDLER_REGISTRY,
    PROCESSOR_REGISTRY,
    BuilderRegistry,
)

__version__ = "0.1.0"

__all__ = [
    "ACTIVATION_STRATEGY_REGISTRY",
    "Absent",
    "Builder",
    "BuilderOptions",
    "BuilderRegistry",
    "CLIENT_REGISTRY",
    "ConfigurationError",
    "FORMATTER_REGISTRY",
    "HANDLER_REGISTRY",
    "Inline",
    "LogforgeError",
    "LogforgeSettings",
    "LoggerBuilder",
    "LoggingConfig",
    "LoggingService",
    "PROCESSOR_REGISTRY",
    "Reference",
    "ServiceContainer",
    "ServiceLookup",
    "ServiceNotCreatedError",
    "ServiceNotFoundError",
    "classify",
    "create_container",
    "get_config_summary",
    "require_key",
    "require_mapping",
    "resolve_service",
    "settings",
]
