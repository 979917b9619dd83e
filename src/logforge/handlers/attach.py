"""
Attaching formatters and processors to handlers.

Handler configurations may carry a ``formatter`` and a list of
``processors``. Both accept ready objects or ``{type, enabled, options}``
mappings resolved through the family registries in the service lookup.

Processors follow structlog's processor protocol. ProcessorFilter runs one
against a ``logging.LogRecord``: the record's message becomes the event,
its user attributes the event's keys, and keys added by the processor are
stored in ``record.extra``.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

import structlog

from logforge.builder import ServiceLookup
from logforge.exceptions import ConfigurationError, ServiceNotFoundError
from logforge.formatters.normalizer import record_context, record_extra
from logforge.registry import FORMATTER_REGISTRY, PROCESSOR_REGISTRY, BuilderRegistry

Processor = Callable[[Any, str, Any], Any]


class ProcessorFilter(logging.Filter):
    """
    Runs a structlog processor against log records.

    A processor raising ``structlog.DropEvent`` drops the record.
    """

    def __init__(self, processor: Processor) -> None:
        super().__init__()
        self.processor = processor

    def filter(self, record: logging.LogRecord) -> bool:
        context = record_context(record)
        context.pop("exception", None)
        message = record.getMessage()

        event_dict = {**context, **record_extra(record), "event": message}
        try:
            result = self.processor(None, record.levelname.lower(), event_dict)
        except structlog.DropEvent:
            return False

        event = result.pop("event", message)
        if event != message:
            record.msg = event
            record.args = ()

        extra = record_extra(record)
        for key in context:
            if key not in result:
                delattr(record, key)
        for key, value in result.items():
            if key in context:
                setattr(record, key, value)
            else:
                extra[key] = value

        record.extra = extra
        return True


def get_registry(lookup: ServiceLookup, name: str) -> BuilderRegistry:
    """
    Fetch a family registry from the lookup.

    Raises:
        ServiceNotFoundError: If the registry is not available
    """
    if lookup is None or not lookup.has(name):
        raise ServiceNotFoundError(
            message=f"Could not find service {name}",
            details={"service": name},
        )
    return lookup.get(name)


def _build(lookup: ServiceLookup, registry_name: str, config: Mapping, kind: str) -> Any:
    if "enabled" in config and not config["enabled"]:
        return None
    if "type" not in config:
        raise ConfigurationError(
            message=f"Options must contain a type for the {kind}",
            details={"kind": kind},
        )
    registry = get_registry(lookup, registry_name)
    try:
        return registry.get(config["type"], config.get("options") or {})
    except ServiceNotFoundError as exc:
        raise ServiceNotFoundError(
            message=f"Could not find service {config['type']}",
            details={"kind": kind, "type": config["type"]},
            original_exception=exc,
        ) from exc


def create_formatter(config: Any, lookup: ServiceLookup) -> Optional[logging.Formatter]:
    """Return the formatter for ``config``, or None when it is disabled."""
    if isinstance(config, logging.Formatter):
        return config
    return _build(lookup, FORMATTER_REGISTRY, config, "formatter")


def create_processor(config: Any, lookup: ServiceLookup) -> Optional[Processor]:
    """Return the processor for ``config``, or None when it is disabled."""
    if callable(config):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            message="Options must be a mapping",
            error_code="CFG_002",
            details={"kind": "processor", "options_type": type(config).__name__},
        )
    return _build(lookup, PROCESSOR_REGISTRY, config, "processor")


def resolve_formatter(lookup: ServiceLookup, formatter: Any) -> Optional[logging.Formatter]:
    """
    Return the configured formatter, or None when there is none.

    Raises:
        ConfigurationError: If the value is neither a mapping nor a formatter,
            or a mapping lacks ``type``
        ServiceNotFoundError: If the formatter type is unknown
    """
    if formatter is None:
        return None
    if not isinstance(formatter, (Mapping, logging.Formatter)):
        raise ConfigurationError(
            message="Formatter must be a mapping or an instance of logging.Formatter",
            error_code="CFG_002",
            details={"formatter_type": type(formatter).__name__},
        )
    return create_formatter(formatter, lookup)


def resolve_processors(lookup: ServiceLookup, processors: Any) -> List[Processor]:
    """
    Return the configured processors in order, skipping disabled ones.

    Raises:
        ConfigurationError: If ``processors`` is not a list, or an entry is
            malformed
        ServiceNotFoundError: If a processor type is unknown
    """
    if processors is None:
        return []
    if not isinstance(processors, (list, tuple)):
        raise ConfigurationError(
            message="Processors must be a list",
            error_code="CFG_002",
            details={"processors_type": type(processors).__name__},
        )
    created: List[Processor] = []
    for config in processors:
        processor = create_processor(config, lookup)
        if processor is not None:
            created.append(processor)
    return created


def set_formatter(handler: logging.Handler, formatter: Optional[logging.Formatter]) -> None:
    """
    Set ``formatter`` on ``handler``.

    Formatters end their output with a newline themselves, so stream
    handlers given one write no terminator of their own.
    """
    if formatter is None:
        return
    handler.setFormatter(formatter)
    if isinstance(handler, logging.StreamHandler):
        handler.terminator = ""


def attach_processors(target: logging.Filterer, processors: List[Processor]) -> None:
    for processor in processors:
        target.addFilter(ProcessorFilter(processor))


def add_formatter(lookup: ServiceLookup, handler: logging.Handler, formatter: Any) -> None:
    """Resolve the configured formatter and set it on ``handler``."""
    set_formatter(handler, resolve_formatter(lookup, formatter))


def add_processors(lookup: ServiceLookup, target: logging.Filterer, processors: Any) -> None:
    """Attach the configured processors to ``target`` (a handler or logger)."""
    attach_processors(target, resolve_processors(lookup, processors))
