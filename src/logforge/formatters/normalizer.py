"""
NormalizerFormatter - base for all structured formatters.

Turns a ``logging.LogRecord`` into a plain structure of JSON-compatible
values, bounded in depth and item count, and renders it as JSON.

Record layout produced by :func:`record_to_dict`:

    message     record.getMessage()
    context     attributes passed through ``extra=`` (plus the exception)
    level       numeric level
    level_name  level name
    channel     logger name
    datetime    timezone-aware creation time
    extra       fields added by processors (``record.extra``)

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import json
import logging
import math
import traceback
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from logforge.defaults import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_NORMALIZER_DEPTH,
    DEFAULT_NORMALIZER_ITEM_COUNT,
    DEFAULT_PRETTY_PRINT,
)

RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra", "taskName"}


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the user-supplied attributes of a record."""
    context = {
        key: value
        for key, value in vars(record).items()
        if key not in RESERVED_ATTRS and not key.startswith("_")
    }
    if record.exc_info and record.exc_info[1] is not None:
        context["exception"] = record.exc_info[1]
    return context


def record_extra(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the processor-added fields of a record."""
    extra = getattr(record, "extra", None)
    return dict(extra) if isinstance(extra, Mapping) else {}


def record_to_dict(record: logging.LogRecord) -> Dict[str, Any]:
    """Convert a record into the structure every formatter works on."""
    return {
        "message": record.getMessage(),
        "context": record_context(record),
        "level": record.levelno,
        "level_name": record.levelname,
        "channel": record.name,
        "datetime": datetime.fromtimestamp(record.created).astimezone(),
        "extra": record_extra(record),
    }


class NormalizerFormatter(logging.Formatter):
    """
    Normalizes records into JSON-compatible structures.

    Nested values deeper than ``max_normalize_depth`` and containers with
    more than ``max_normalize_item_count`` entries are cut short with a
    marker string instead of being rendered.

    Attributes:
        date_format: strftime pattern for datetimes
        max_normalize_depth: Maximum nesting depth rendered
        max_normalize_item_count: Maximum entries rendered per container
        json_pretty_print: Indent JSON output

    Example:
        >>> formatter = NormalizerFormatter("%Y-%m-%d")
        >>> formatter.set_max_normalize_depth(3).set_json_pretty_print(True)
        >>> handler.setFormatter(formatter)
    """

    def __init__(self, date_format: str | None = None) -> None:
        super().__init__()
        self.date_format = date_format or DEFAULT_DATE_FORMAT
        self.max_normalize_depth = DEFAULT_NORMALIZER_DEPTH
        self.max_normalize_item_count = DEFAULT_NORMALIZER_ITEM_COUNT
        self.json_pretty_print = DEFAULT_PRETTY_PRINT
        self._include_stacktraces = True

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_max_normalize_depth(self, depth: int) -> "NormalizerFormatter":
        self.max_normalize_depth = depth
        return self

    def set_max_normalize_item_count(self, count: int) -> "NormalizerFormatter":
        self.max_normalize_item_count = count
        return self

    def set_json_pretty_print(self, enable: bool) -> "NormalizerFormatter":
        self.json_pretty_print = bool(enable)
        return self

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self, record: logging.LogRecord) -> str:
        return self.to_json(self.normalize_record(record))

    def format_batch(self, records: Iterable[logging.LogRecord]) -> str:
        return self.to_json([self.normalize_record(record) for record in records])

    def normalize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Return the normalized structure for ``record``."""
        return self.normalize(record_to_dict(record))

    def normalize(self, data: Any, depth: int = 0) -> Any:
        """
        Normalize ``data`` into JSON-compatible values.

        Args:
            data: Any value
            depth: Current nesting depth

        Returns:
            Normalized value
        """
        if depth > self.max_normalize_depth:
            return f"Over {self.max_normalize_depth} levels deep, aborting normalization"

        if data is None or isinstance(data, (bool, int, str)):
            return data

        if isinstance(data, float):
            if math.isinf(data):
                return ("-" if data < 0 else "") + "INF"
            if math.isnan(data):
                return "NaN"
            return data

        if isinstance(data, Mapping):
            normalized: Dict[str, Any] = {}
            for count, (key, value) in enumerate(data.items()):
                if count >= self.max_normalize_item_count:
                    normalized["..."] = self._over_items(len(data))
                    break
                normalized[str(key)] = self.normalize(value, depth + 1)
            return normalized

        if isinstance(data, (Sequence, set, frozenset)) and not isinstance(
            data, (bytes, bytearray)
        ):
            items: List[Any] = []
            for count, value in enumerate(data):
                if count >= self.max_normalize_item_count:
                    items.append(self._over_items(len(data)))
                    break
                items.append(self.normalize(value, depth + 1))
            return items

        if isinstance(data, (datetime, date)):
            return self.format_date(data)

        if isinstance(data, BaseException):
            return self.normalize_exception(data, depth)

        if isinstance(data, (bytes, bytearray)):
            return data.decode("utf-8", errors="replace")

        return {f"{type(data).__module__}.{type(data).__qualname__}": str(data)}

    def normalize_exception(self, exc: BaseException, depth: int = 0) -> Any:
        """Describe an exception, including its chained cause."""
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        data: Dict[str, Any] = {
            "class": f"{type(exc).__module__}.{type(exc).__qualname__}",
            "message": str(exc),
        }
        if frames:
            data["file"] = f"{frames[-1].filename}:{frames[-1].lineno}"
            if self._include_stacktraces:
                data["trace"] = [f"{frame.filename}:{frame.lineno}" for frame in frames]

        previous = exc.__cause__ or exc.__context__
        if previous is not None and depth < self.max_normalize_depth:
            data["previous"] = self.normalize_exception(previous, depth + 1)

        return data

    def format_date(self, value: date) -> str:
        return value.strftime(self.date_format)

    def to_json(self, data: Any) -> str:
        return json.dumps(
            data,
            ensure_ascii=False,
            indent=4 if self.json_pretty_print else None,
            default=str,
        )

    def _over_items(self, total: int) -> str:
        return (
            f"Over {self.max_normalize_item_count} items ({total} total), "
            "aborting normalization"
        )
