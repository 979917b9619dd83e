"""
JSON formatters: plain JSON plus the Loggly and Logmatic flavours.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from logforge.defaults import BATCH_MODE_JSON, BATCH_MODE_NEWLINES
from logforge.formatters.normalizer import NormalizerFormatter


class JsonFormatter(NormalizerFormatter):
    """
    Encodes each record as one JSON document.

    Attributes:
        batch_mode: BATCH_MODE_JSON renders a batch as one JSON array,
            BATCH_MODE_NEWLINES as newline separated documents
        append_newline: Terminate each document with a newline
        ignore_empty_context_and_extra: Drop empty ``context``/``extra`` keys
    """

    BATCH_MODE_JSON = BATCH_MODE_JSON
    BATCH_MODE_NEWLINES = BATCH_MODE_NEWLINES

    def __init__(
        self,
        batch_mode: int = BATCH_MODE_JSON,
        append_newline: bool = True,
        ignore_empty_context_and_extra: bool = False,
        include_stacktraces: bool = False,
    ) -> None:
        super().__init__()
        self.batch_mode = batch_mode
        self.append_newline = append_newline
        self.ignore_empty_context_and_extra = ignore_empty_context_and_extra
        self._include_stacktraces = include_stacktraces

    def include_stacktraces(self, include: bool = True) -> "JsonFormatter":
        self._include_stacktraces = include
        return self

    @property
    def includes_stacktraces(self) -> bool:
        return self._include_stacktraces

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        normalized = super().normalize_record(record)
        if self.ignore_empty_context_and_extra:
            for key in ("context", "extra"):
                if not normalized.get(key):
                    normalized.pop(key, None)
        return normalized

    def format(self, record: logging.LogRecord) -> str:
        encoded = self.to_json(self.normalize_record(record))
        return encoded + "\n" if self.append_newline else encoded

    def format_batch(self, records: Iterable[logging.LogRecord]) -> str:
        if self.batch_mode == BATCH_MODE_NEWLINES:
            return "\n".join(self.to_json(self.normalize_record(r)) for r in records)
        documents: List[Dict[str, Any]] = [self.normalize_record(r) for r in records]
        return self.to_json(documents)


class LogglyFormatter(JsonFormatter):
    """JSON formatter using Loggly's ``timestamp`` field."""

    def __init__(self, batch_mode: int = BATCH_MODE_NEWLINES, append_newline: bool = True) -> None:
        super().__init__(batch_mode, append_newline)

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        normalized = super().normalize_record(record)
        if "datetime" in normalized:
            normalized["timestamp"] = normalized.pop("datetime")
        return normalized


class LogmaticFormatter(JsonFormatter):
    """JSON formatter adding Logmatic's hostname, appname and marker fields."""

    MARKERS = ["sourcecode", "python"]

    def __init__(self, batch_mode: int = BATCH_MODE_JSON, append_newline: bool = True) -> None:
        super().__init__(batch_mode, append_newline)
        self.hostname = ""
        self.appname = ""

    def set_hostname(self, hostname: str) -> "LogmaticFormatter":
        self.hostname = hostname
        return self

    def set_appname(self, appname: str) -> "LogmaticFormatter":
        self.appname = appname
        return self

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        normalized = super().normalize_record(record)
        if self.hostname:
            normalized["hostname"] = self.hostname
        if self.appname:
            normalized["appname"] = self.appname
        normalized["@marker"] = list(self.MARKERS)
        return normalized
