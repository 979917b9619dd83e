"""
Builders for the formatter family.

Every builder reads its camelCase option keys through a typed options
model and hands the values to the formatter constructor and setters.
Formatters derived from NormalizerFormatter also accept the shared
normalization keys (maxNormalizeDepth, maxNormalizeItemCount, prettyPrint).

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

from pydantic import Field

from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.defaults import (
    BATCH_MODE_JSON,
    BATCH_MODE_NEWLINES,
    DEFAULT_CONTEXT_PREFIX,
    DEFAULT_LOGSTASH_CONTEXT_KEY,
    DEFAULT_LOGSTASH_EXTRA_KEY,
    DEFAULT_MONGODB_NESTING_LEVEL,
    DEFAULT_NORMALIZER_DEPTH,
    DEFAULT_NORMALIZER_ITEM_COUNT,
    DEFAULT_PRETTY_PRINT,
    DEFAULT_TABLE_STYLE,
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

# ========================================
# OPTIONS
# ========================================


class NormalizerOptions(BuilderOptions):
    """Normalization keys shared by the NormalizerFormatter family."""

    max_normalize_depth: int = DEFAULT_NORMALIZER_DEPTH
    max_normalize_item_count: int = DEFAULT_NORMALIZER_ITEM_COUNT
    pretty_print: bool = DEFAULT_PRETTY_PRINT


class NormalizerFormatterOptions(NormalizerOptions):
    date_format: Optional[str] = None


class ElasticsearchFormatterOptions(NormalizerOptions):
    index: str
    doc_type: str = Field(default="", alias="type")


class GelfMessageFormatterOptions(NormalizerOptions):
    system_name: Optional[str] = None
    extra_prefix: Optional[str] = None
    context_prefix: str = DEFAULT_CONTEXT_PREFIX
    max_length: Optional[int] = None


class JsonFormatterOptions(BuilderOptions):
    batch_mode: int = BATCH_MODE_JSON
    append_newline: bool = True
    ignore_empty_context_and_extra: bool = False
    include_stacktraces: Optional[bool] = None


class LineFormatterOptions(BuilderOptions):
    format: Optional[str] = None
    date_format: Optional[str] = None
    allow_inline_line_breaks: bool = False
    ignore_empty_context_and_extra: bool = False
    include_stacktraces: Optional[bool] = None


class StreamFormatterOptions(NormalizerOptions):
    format: Optional[str] = None
    table_style: str = DEFAULT_TABLE_STYLE
    date_format: Optional[str] = None
    allow_inline_line_breaks: bool = False
    include_stacktraces: bool = False


class LogglyFormatterOptions(BuilderOptions):
    batch_mode: int = BATCH_MODE_NEWLINES
    append_newline: bool = True


class LogmaticFormatterOptions(BuilderOptions):
    batch_mode: int = BATCH_MODE_JSON
    append_newline: bool = True
    hostname: Optional[str] = None
    app_name: Optional[str] = None


class LogstashFormatterOptions(BuilderOptions):
    application_name: str
    system_name: Optional[str] = None
    extra_prefix: str = DEFAULT_LOGSTASH_EXTRA_KEY
    context_prefix: str = DEFAULT_LOGSTASH_CONTEXT_KEY


class FluentdFormatterOptions(BuilderOptions):
    level_tag: bool = False


class FlowdockFormatterOptions(BuilderOptions):
    source: str
    source_email: str


class MongoDBFormatterOptions(BuilderOptions):
    max_nesting_level: int = DEFAULT_MONGODB_NESTING_LEVEL
    exception_trace_as_string: bool = True


def apply_normalizer_options(formatter: NormalizerFormatter, options: NormalizerOptions) -> None:
    """Apply the shared normalization settings to ``formatter``."""
    formatter.set_max_normalize_depth(options.max_normalize_depth)
    formatter.set_max_normalize_item_count(options.max_normalize_item_count)
    formatter.set_json_pretty_print(options.pretty_print)


# ========================================
# BUILDERS
# ========================================


class NormalizerFormatterBuilder(Builder[NormalizerFormatter, NormalizerFormatterOptions]):
    options_model = NormalizerFormatterOptions

    def assemble(
        self, lookup: ServiceLookup, options: NormalizerFormatterOptions
    ) -> NormalizerFormatter:
        formatter = NormalizerFormatter(options.date_format)
        apply_normalizer_options(formatter, options)
        return formatter


class ElasticsearchFormatterBuilder(Builder[ElasticsearchFormatter, ElasticsearchFormatterOptions]):
    """Builds an ElasticsearchFormatter; ``index`` is required."""

    options_model = ElasticsearchFormatterOptions
    requires_options = True
    required_keys = (("index", "No index provided"),)

    def assemble(
        self, lookup: ServiceLookup, options: ElasticsearchFormatterOptions
    ) -> ElasticsearchFormatter:
        formatter = ElasticsearchFormatter(options.index, options.doc_type)
        apply_normalizer_options(formatter, options)
        return formatter


class GelfMessageFormatterBuilder(Builder[GelfMessageFormatter, GelfMessageFormatterOptions]):
    options_model = GelfMessageFormatterOptions

    def assemble(
        self, lookup: ServiceLookup, options: GelfMessageFormatterOptions
    ) -> GelfMessageFormatter:
        formatter = GelfMessageFormatter(
            options.system_name,
            options.extra_prefix,
            options.context_prefix,
            options.max_length,
        )
        apply_normalizer_options(formatter, options)
        return formatter


class JsonFormatterBuilder(Builder[JsonFormatter, JsonFormatterOptions]):
    """
    Builds a JsonFormatter.

    ``includeStacktraces`` is applied only when configured, leaving the
    formatter's own default in place otherwise.
    """

    options_model = JsonFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: JsonFormatterOptions) -> JsonFormatter:
        formatter = JsonFormatter(
            options.batch_mode,
            options.append_newline,
            options.ignore_empty_context_and_extra,
        )
        if options.include_stacktraces is not None:
            formatter.include_stacktraces(options.include_stacktraces)
        return formatter


class LineFormatterBuilder(Builder[LineFormatter, LineFormatterOptions]):
    options_model = LineFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: LineFormatterOptions) -> LineFormatter:
        formatter = LineFormatter(
            options.format,
            options.date_format,
            options.allow_inline_line_breaks,
            options.ignore_empty_context_and_extra,
        )
        if options.include_stacktraces is not None:
            formatter.include_stacktraces(options.include_stacktraces)
        return formatter


class StreamFormatterBuilder(Builder[StreamFormatter, StreamFormatterOptions]):
    options_model = StreamFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: StreamFormatterOptions) -> StreamFormatter:
        formatter = StreamFormatter(
            options.format,
            options.table_style,
            options.date_format,
            options.allow_inline_line_breaks,
            options.include_stacktraces,
        )
        apply_normalizer_options(formatter, options)
        return formatter


class LogglyFormatterBuilder(Builder[LogglyFormatter, LogglyFormatterOptions]):
    options_model = LogglyFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: LogglyFormatterOptions) -> LogglyFormatter:
        return LogglyFormatter(options.batch_mode, options.append_newline)


class LogmaticFormatterBuilder(Builder[LogmaticFormatter, LogmaticFormatterOptions]):
    options_model = LogmaticFormatterOptions

    def assemble(
        self, lookup: ServiceLookup, options: LogmaticFormatterOptions
    ) -> LogmaticFormatter:
        formatter = LogmaticFormatter(options.batch_mode, options.append_newline)
        if options.hostname is not None:
            formatter.set_hostname(options.hostname)
        if options.app_name is not None:
            formatter.set_appname(options.app_name)
        return formatter


class LogstashFormatterBuilder(Builder[LogstashFormatter, LogstashFormatterOptions]):
    """Builds a LogstashFormatter; ``applicationName`` is required."""

    options_model = LogstashFormatterOptions
    requires_options = True
    required_keys = (("applicationName", "No applicationName provided"),)

    def assemble(
        self, lookup: ServiceLookup, options: LogstashFormatterOptions
    ) -> LogstashFormatter:
        return LogstashFormatter(
            options.application_name,
            options.system_name,
            options.extra_prefix,
            options.context_prefix,
        )


class FluentdFormatterBuilder(Builder[FluentdFormatter, FluentdFormatterOptions]):
    options_model = FluentdFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: FluentdFormatterOptions) -> FluentdFormatter:
        return FluentdFormatter(options.level_tag)


class FlowdockFormatterBuilder(Builder[FlowdockFormatter, FlowdockFormatterOptions]):
    """Builds a FlowdockFormatter; ``source`` and ``sourceEmail`` are required."""

    options_model = FlowdockFormatterOptions
    requires_options = True
    required_keys = (
        ("source", "No source provided"),
        ("sourceEmail", "No sourceEmail provided"),
    )

    def assemble(
        self, lookup: ServiceLookup, options: FlowdockFormatterOptions
    ) -> FlowdockFormatter:
        return FlowdockFormatter(options.source, options.source_email)


class MongoDBFormatterBuilder(Builder[MongoDBFormatter, MongoDBFormatterOptions]):
    options_model = MongoDBFormatterOptions

    def assemble(self, lookup: ServiceLookup, options: MongoDBFormatterOptions) -> MongoDBFormatter:
        return MongoDBFormatter(options.max_nesting_level, options.exception_trace_as_string)
