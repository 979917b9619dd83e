"""
Line-oriented formatters.

LineFormatter fills ``%placeholder%`` slots of a format string with the
record's fields; StreamFormatter prints that line followed by a table of
the record's context and extra fields.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import json
import logging
import re
import traceback
from typing import Any, Dict, List, Optional, Tuple

from logforge.defaults import DEFAULT_LINE_FORMAT, DEFAULT_TABLE_STYLE
from logforge.formatters.normalizer import NormalizerFormatter

_LEFTOVER_PLACEHOLDER = re.compile(r"%(?:extra|context)\..+?%")


class LineFormatter(NormalizerFormatter):
    """
    Formats a record into a single line of text.

    Placeholders: ``%datetime%``, ``%channel%``, ``%level_name%``,
    ``%level%``, ``%message%``, ``%context%``, ``%extra%`` and
    ``%context.<key>%`` / ``%extra.<key>%`` for single fields.

    Example:
        >>> formatter = LineFormatter("%level_name%: %message%\\n", "%H:%M:%S")
        >>> handler.setFormatter(formatter)
    """

    SIMPLE_FORMAT = DEFAULT_LINE_FORMAT

    def __init__(
        self,
        format: Optional[str] = None,
        date_format: Optional[str] = None,
        allow_inline_line_breaks: bool = False,
        ignore_empty_context_and_extra: bool = False,
        include_stacktraces: bool = False,
    ) -> None:
        super().__init__(date_format)
        self.line_format = format if format is not None else self.SIMPLE_FORMAT
        self.allow_inline_line_breaks = allow_inline_line_breaks
        self.ignore_empty_context_and_extra = ignore_empty_context_and_extra
        self._include_stacktraces = False
        self.include_stacktraces(include_stacktraces)

    def include_stacktraces(self, include: bool = True) -> "LineFormatter":
        self._include_stacktraces = include
        if include:
            self.allow_inline_line_breaks = True
        return self

    @property
    def includes_stacktraces(self) -> bool:
        return self._include_stacktraces

    def format(self, record: logging.LogRecord) -> str:
        fields = self.normalize_record(record)
        output = self.line_format

        for section in ("extra", "context"):
            values = dict(fields.get(section) or {})
            for key, value in list(values.items()):
                placeholder = f"%{section}.{key}%"
                if placeholder in output:
                    output = output.replace(placeholder, self.stringify(value))
                    del values[key]
            fields[section] = values

        if self.ignore_empty_context_and_extra:
            for section in ("context", "extra"):
                if not fields[section]:
                    output = output.replace(f"%{section}%", "")
                    del fields[section]

        for key, value in fields.items():
            placeholder = f"%{key}%"
            if placeholder in output:
                output = output.replace(placeholder, self.stringify(value))

        return _LEFTOVER_PLACEHOLDER.sub("", output)

    def stringify(self, value: Any) -> str:
        return self.replace_newlines(self.convert_to_string(value))

    def convert_to_string(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, str)):
            return str(value)
        return json.dumps(value, ensure_ascii=False, default=str)

    def replace_newlines(self, text: str) -> str:
        if self.allow_inline_line_breaks:
            return text
        return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")

    def normalize_exception(self, exc: BaseException, depth: int = 0) -> Any:
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        location = f" at {frames[-1].filename}:{frames[-1].lineno}" if frames else ""
        text = f"[object] ({type(exc).__qualname__}: {exc}{location})"

        previous = exc.__cause__ or exc.__context__
        if previous is not None and depth < self.max_normalize_depth:
            text += "\n[previous exception] " + str(self.normalize_exception(previous, depth + 1))

        if self._include_stacktraces and frames:
            text += "\n[stacktrace]\n" + "".join(traceback.format_list(frames))

        return text


TABLE_STYLES: Dict[str, Tuple[str, str, str]] = {
    # (horizontal, vertical, crossing)
    "box": ("─", "│", "┼"),
    "default": ("-", "|", "+"),
    "compact": ("", " ", ""),
}


class StreamFormatter(LineFormatter):
    """
    Formats a record as a headline followed by a table of its fields.

    Attributes:
        table_style: One of "box", "default" or "compact"

    Raises:
        ValueError: If ``table_style`` is unknown
    """

    SIMPLE_FORMAT = "[%datetime%] %channel%.%level_name%: %message%\n"

    def __init__(
        self,
        format: Optional[str] = None,
        table_style: str = DEFAULT_TABLE_STYLE,
        date_format: Optional[str] = None,
        allow_inline_line_breaks: bool = False,
        include_stacktraces: bool = False,
    ) -> None:
        if table_style not in TABLE_STYLES:
            raise ValueError(
                f"Unknown table style {table_style!r}, use one of: {', '.join(TABLE_STYLES)}"
            )
        super().__init__(
            format,
            date_format,
            allow_inline_line_breaks,
            ignore_empty_context_and_extra=True,
            include_stacktraces=include_stacktraces,
        )
        self.table_style = table_style

    def format(self, record: logging.LogRecord) -> str:
        fields = self.normalize_record(record)
        headline = super().format(record)

        rows: List[Tuple[str, str]] = []
        for section in ("context", "extra"):
            for key, value in (fields.get(section) or {}).items():
                rows.append((f"{section}.{key}", self.stringify(value)))

        if not rows:
            return headline

        return headline + self._render_table(rows)

    def _render_table(self, rows: List[Tuple[str, str]]) -> str:
        horizontal, vertical, crossing = TABLE_STYLES[self.table_style]
        key_width = max(len(key) for key, _ in rows)
        value_width = max(len(value) for _, value in rows)

        lines = []
        rule = ""
        if horizontal:
            rule = (
                crossing
                + horizontal * (key_width + 2)
                + crossing
                + horizontal * (value_width + 2)
                + crossing
            )
            lines.append(rule)
        for key, value in rows:
            lines.append(
                f"{vertical} {key.ljust(key_width)} {vertical} {value.ljust(value_width)} {vertical}"
            )
        if rule:
            lines.append(rule)
        return "\n".join(lines) + "\n"
