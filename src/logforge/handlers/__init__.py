"""
Handler builders, buffering handlers and processor/formatter attachment.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from logforge.handlers.attach import (
    ProcessorFilter,
    add_formatter,
    add_processors,
    create_formatter,
    create_processor,
    resolve_formatter,
    resolve_processors,
)
from logforge.handlers.buffering import BufferHandler, FingersCrossedHandler
from logforge.handlers.builders import (
    BufferHandlerBuilder,
    FingersCrossedHandlerBuilder,
    NullHandlerBuilder,
    RotatingFileHandlerBuilder,
    StreamHandlerBuilder,
)

__all__ = [
    "BufferHandler",
    "BufferHandlerBuilder",
    "FingersCrossedHandler",
    "FingersCrossedHandlerBuilder",
    "NullHandlerBuilder",
    "ProcessorFilter",
    "RotatingFileHandlerBuilder",
    "StreamHandlerBuilder",
    "add_formatter",
    "add_processors",
    "create_formatter",
    "create_processor",
    "resolve_formatter",
    "resolve_processors",
]
