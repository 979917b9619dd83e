"""
Formatter products and their builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from logforge.formatters.builders import (
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
from logforge.formatters.documents import (
    ElasticsearchFormatter,
    FlowdockFormatter,
    FluentdFormatter,
    GelfMessageFormatter,
    LogstashFormatter,
    MongoDBFormatter,
)
from logforge.formatters.json_formatter import JsonFormatter, LogglyFormatter, LogmaticFormatter
from logforge.formatters.line import LineFormatter, StreamFormatter
from logforge.formatters.normalizer import NormalizerFormatter

__all__ = [
    "ElasticsearchFormatter",
    "ElasticsearchFormatterBuilder",
    "FlowdockFormatter",
    "FlowdockFormatterBuilder",
    "FluentdFormatter",
    "FluentdFormatterBuilder",
    "GelfMessageFormatter",
    "GelfMessageFormatterBuilder",
    "JsonFormatter",
    "JsonFormatterBuilder",
    "LineFormatter",
    "LineFormatterBuilder",
    "LogglyFormatter",
    "LogglyFormatterBuilder",
    "LogmaticFormatter",
    "LogmaticFormatterBuilder",
    "LogstashFormatter",
    "LogstashFormatterBuilder",
    "MongoDBFormatter",
    "MongoDBFormatterBuilder",
    "NormalizerFormatter",
    "NormalizerFormatterBuilder",
    "StreamFormatter",
    "StreamFormatterBuilder",
]
