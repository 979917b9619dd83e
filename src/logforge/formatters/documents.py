"""
Formatters producing documents for log shipping services.

Each formatter builds a service-specific structure in ``normalize_record``
and renders it as JSON in ``format``.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import json
import logging
import socket
import traceback
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, List, Optional

from logforge.defaults import (
    DEFAULT_CONTEXT_PREFIX,
    DEFAULT_GELF_MAX_LENGTH,
    DEFAULT_LOGSTASH_CONTEXT_KEY,
    DEFAULT_LOGSTASH_EXTRA_KEY,
    DEFAULT_MONGODB_NESTING_LEVEL,
)
from logforge.formatters.normalizer import NormalizerFormatter, record_to_dict
from logforge.levels import syslog_severity


class ElasticsearchFormatter(NormalizerFormatter):
    """
    Formats records as Elasticsearch documents.

    Attributes:
        index: Target index name, added as ``_index``
        doc_type: Document type, added as ``_type``
    """

    def __init__(self, index: str, doc_type: str = "") -> None:
        super().__init__()
        self.index = index
        self.doc_type = doc_type

    def get_index(self) -> str:
        return self.index

    def get_type(self) -> str:
        return self.doc_type

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        document = super().normalize_record(record)
        document["_index"] = self.index
        document["_type"] = self.doc_type
        return document


class GelfMessageFormatter(NormalizerFormatter):
    """
    Formats records as GELF 1.1 messages.

    Attributes:
        system_name: Value of ``host`` (default: this machine's host name)
        extra_prefix: Prefix for additional fields built from ``extra``
        context_prefix: Prefix for additional fields built from ``context``
        max_length: Maximum length of the short message and field values
    """

    def __init__(
        self,
        system_name: Optional[str] = None,
        extra_prefix: Optional[str] = None,
        context_prefix: str = DEFAULT_CONTEXT_PREFIX,
        max_length: Optional[int] = None,
    ) -> None:
        super().__init__("%Y-%m-%dT%H:%M:%S.%f%z")
        self.system_name = system_name or socket.gethostname()
        self.extra_prefix = extra_prefix or ""
        self.context_prefix = context_prefix
        self.max_length = DEFAULT_GELF_MAX_LENGTH if max_length is None else max_length

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        data = super().normalize_record(record)
        message_text = str(data["message"])

        message: Dict[str, Any] = {
            "version": "1.1",
            "host": self.system_name,
            "short_message": message_text[: self.max_length],
            "timestamp": round(record.created, 3),
            "level": syslog_severity(record.levelno),
            "_facility": data["channel"],
        }
        if len(message_text) > self.max_length:
            message["full_message"] = message_text

        for prefix, section in ((self.extra_prefix, "extra"), (self.context_prefix, "context")):
            for key, value in data[section].items():
                encoded = value if isinstance(value, (str, int, float)) else self.to_json(value)
                if isinstance(encoded, str):
                    encoded = encoded[: self.max_length]
                message[f"_{prefix}{key}"] = encoded

        exception = data["context"].get("exception")
        if isinstance(exception, Mapping) and "file" in exception:
            file_name, _, line = str(exception["file"]).rpartition(":")
            message["_file"] = file_name
            message["_line"] = line
            if record.exc_info:
                message["full_message"] = "".join(traceback.format_exception(*record.exc_info))

        return message


class LogstashFormatter(NormalizerFormatter):
    """
    Formats records for Logstash's JSON codec.

    Attributes:
        application_name: Value of ``type``
        system_name: Value of ``host`` (default: this machine's host name)
        extra_key: Key under which ``extra`` is nested
        context_key: Key under which ``context`` is nested
    """

    def __init__(
        self,
        application_name: str,
        system_name: Optional[str] = None,
        extra_key: str = DEFAULT_LOGSTASH_EXTRA_KEY,
        context_key: str = DEFAULT_LOGSTASH_CONTEXT_KEY,
    ) -> None:
        super().__init__("%Y-%m-%dT%H:%M:%S.%f%z")
        self.application_name = application_name
        self.system_name = system_name or socket.gethostname()
        self.extra_key = extra_key
        self.context_key = context_key

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        data = super().normalize_record(record)
        message: Dict[str, Any] = {
            "@timestamp": data["datetime"],
            "@version": 1,
            "host": self.system_name,
            "message": data["message"],
            "type": self.application_name,
            "channel": data["channel"],
            "level": data["level_name"],
            "monolog_level": data["level"],
        }
        if data["extra"]:
            message[self.extra_key] = data["extra"]
        if data["context"]:
            message[self.context_key] = data["context"]
        return message

    def format(self, record: logging.LogRecord) -> str:
        return self.to_json(self.normalize_record(record)) + "\n"


class FluentdFormatter(NormalizerFormatter):
    """
    Formats records as Fluentd ``[tag, time, record]`` entries.

    Attributes:
        level_tag: Append the lower-cased level name to the tag instead of
            embedding the level in the record
    """

    def __init__(self, level_tag: bool = False) -> None:
        super().__init__()
        self.level_tag = bool(level_tag)

    def is_using_level_in_tag(self) -> bool:
        return self.level_tag

    def format(self, record: logging.LogRecord) -> str:
        data = super().normalize_record(record)
        tag = data["channel"]
        if self.level_tag:
            tag += "." + str(data["level_name"]).lower()

        message: Dict[str, Any] = {
            "message": data["message"],
            "context": data["context"],
            "extra": data["extra"],
        }
        if not self.level_tag:
            message["level"] = data["level"]
            message["level_name"] = data["level_name"]

        return self.to_json([tag, int(record.created), message])


class FlowdockFormatter(NormalizerFormatter):
    """
    Formats records as Flowdock team inbox messages.

    Attributes:
        source: Human readable source of the message
        source_email: Sender address
    """

    SHORT_MESSAGE_LENGTH = 45

    def __init__(self, source: str, source_email: str) -> None:
        super().__init__()
        self.source = source
        self.source_email = source_email

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        data = super().normalize_record(record)
        tags: List[str] = ["#logs", f"#{str(data['level_name']).lower()}", f"#{data['channel']}"]
        for value in data["extra"].values():
            tags.append(f"#{value}")

        subject = f"in {self.source}: {data['level_name']} - {self.short_message(data['message'])}"
        return {
            "source": self.source,
            "from_address": self.source_email,
            "subject": subject,
            "content": data["message"],
            "tags": tags,
            "project": self.source,
        }

    def short_message(self, message: str) -> str:
        if len(message) > self.SHORT_MESSAGE_LENGTH:
            return message[: self.SHORT_MESSAGE_LENGTH - 3] + "..."
        return message


class MongoDBFormatter(logging.Formatter):
    """
    Formats records as MongoDB documents.

    Datetimes stay ``datetime`` objects so drivers can store them natively.

    Attributes:
        max_nesting_level: Depth after which values are replaced by "[...]";
            0 disables the limit
        exception_trace_as_string: Render exception traces as one string
            instead of a list of frames
    """

    def __init__(
        self,
        max_nesting_level: int = DEFAULT_MONGODB_NESTING_LEVEL,
        exception_trace_as_string: bool = True,
    ) -> None:
        super().__init__()
        self.max_nesting_level = max(max_nesting_level, 0)
        self.exception_trace_as_string = exception_trace_as_string

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.normalize_record(record), ensure_ascii=False, default=str)

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        return self.format_value(record_to_dict(record), 0)

    def format_value(self, value: Any, nesting_level: int) -> Any:
        if self.max_nesting_level and nesting_level > self.max_nesting_level:
            return "[...]"
        if isinstance(value, Mapping):
            return {str(k): self.format_value(v, nesting_level + 1) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.format_value(v, nesting_level + 1) for v in value]
        if isinstance(value, BaseException):
            return self.format_exception_value(value, nesting_level)
        if value is None or isinstance(value, (bool, int, float, str, datetime)):
            return value
        return {f"{type(value).__module__}.{type(value).__qualname__}": str(value)}

    def format_exception_value(self, exc: BaseException, nesting_level: int) -> Dict[str, Any]:
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        document: Dict[str, Any] = {
            "class": f"{type(exc).__module__}.{type(exc).__qualname__}",
            "message": str(exc),
        }
        if frames:
            document["file"] = frames[-1].filename
            document["line"] = frames[-1].lineno
            if self.exception_trace_as_string:
                document["trace"] = "".join(traceback.format_list(frames))
            else:
                document["trace"] = [f"{frame.filename}:{frame.lineno}" for frame in frames]
        return document
