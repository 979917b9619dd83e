"""
Processors (structlog processor protocol) and their builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from logforge.processors.builders import (
    GitProcessorBuilder,
    MemoryUsageProcessorBuilder,
    PsrLogMessageProcessorBuilder,
    UidProcessorBuilder,
    WebProcessorBuilder,
)
from logforge.processors.request import PsrLogMessageProcessor, WebProcessor
from logforge.processors.runtime import GitProcessor, MemoryUsageProcessor, UidProcessor

__all__ = [
    "GitProcessor",
    "GitProcessorBuilder",
    "MemoryUsageProcessor",
    "MemoryUsageProcessorBuilder",
    "PsrLogMessageProcessor",
    "PsrLogMessageProcessorBuilder",
    "UidProcessor",
    "UidProcessorBuilder",
    "WebProcessor",
    "WebProcessorBuilder",
]
