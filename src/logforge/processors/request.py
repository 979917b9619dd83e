"""
Processors working on the request and on the event message.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import json
import os
import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Dict, Iterable, MutableMapping, Optional, Union

EventDict = MutableMapping[str, Any]

_PLACEHOLDER = re.compile(r"\{([A-Za-z0-9_.]+)\}")


class WebProcessor:
    """
    Adds request information taken from a CGI/WSGI style server mapping.

    Events are only annotated when the mapping carries ``REQUEST_URI``.

    Args:
        server_data: Mapping of server variables (default: ``os.environ``)
        extra_fields: Field names to keep out of the defaults, or a mapping
            of field name to server variable

    Example:
        >>> processor = WebProcessor({"REQUEST_URI": "/", "REMOTE_ADDR": "10.0.0.1"})
        >>> processor(None, "info", {"event": "hit"})["ip"]
        '10.0.0.1'
    """

    DEFAULT_FIELDS: Dict[str, str] = {
        "url": "REQUEST_URI",
        "ip": "REMOTE_ADDR",
        "http_method": "REQUEST_METHOD",
        "server": "SERVER_NAME",
        "referrer": "HTTP_REFERER",
        "user_agent": "HTTP_USER_AGENT",
    }

    def __init__(
        self,
        server_data: Optional[Mapping] = None,
        extra_fields: Optional[Union[Mapping[str, str], Iterable[str]]] = None,
    ) -> None:
        self.server_data = server_data if server_data is not None else os.environ
        self.extra_fields: Dict[str, str] = dict(self.DEFAULT_FIELDS)
        self.extra_fields.pop("user_agent")

        if isinstance(extra_fields, Mapping):
            self.extra_fields = {str(k): str(v) for k, v in extra_fields.items()}
        elif extra_fields is not None:
            wanted = list(extra_fields)
            self.extra_fields = {
                name: server_key
                for name, server_key in self.DEFAULT_FIELDS.items()
                if name in wanted
            }

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        if "REQUEST_URI" not in self.server_data:
            return event_dict

        for name, server_key in self.extra_fields.items():
            event_dict[name] = self.server_data.get(server_key)

        if "UNIQUE_ID" in self.server_data:
            event_dict["unique_id"] = self.server_data["UNIQUE_ID"]

        return event_dict

    def add_extra_field(self, name: str, server_key: str) -> "WebProcessor":
        self.extra_fields[name] = server_key
        return self


class PsrLogMessageProcessor:
    """
    Interpolates ``{key}`` placeholders in the event with event values.

    Args:
        date_format: strftime pattern for dates (default: ISO 8601)
        remove_used_context_fields: Drop values that were interpolated
    """

    def __init__(
        self, date_format: Optional[str] = None, remove_used_context_fields: bool = False
    ) -> None:
        self.date_format = date_format
        self.remove_used_context_fields = remove_used_context_fields

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        message = event_dict.get("event")
        if not isinstance(message, str) or "{" not in message:
            return event_dict

        used = set()

        def replace(match: "re.Match[str]") -> str:
            key = match.group(1)
            if key == "event" or key not in event_dict:
                return match.group(0)
            used.add(key)
            return self.stringify(event_dict[key])

        event_dict["event"] = _PLACEHOLDER.sub(replace, message)

        if self.remove_used_context_fields:
            for key in used:
                event_dict.pop(key, None)

        return event_dict

    def stringify(self, value: Any) -> str:
        if value is None:
            return "[null]"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, date):
            if self.date_format:
                return value.strftime(self.date_format)
            return value.isoformat()
        if isinstance(value, (Mapping, list, tuple)):
            return "array" + json.dumps(value, ensure_ascii=False, default=str)
        return str(value)
