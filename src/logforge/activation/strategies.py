"""
Activation strategies deciding when a FingersCrossedHandler flushes.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
from collections.abc import Mapping
from typing import Dict, Optional, Protocol, Union, runtime_checkable

from logforge.defaults import DEFAULT_LEVEL
from logforge.levels import to_level


@runtime_checkable
class ActivationStrategy(Protocol):
    """Decides whether a buffered handler should flush on ``record``."""

    def is_handler_activated(self, record: logging.LogRecord) -> bool: ...


class ErrorLevelActivationStrategy:
    """Activates on records at or above ``action_level``."""

    def __init__(self, action_level: Union[int, str] = DEFAULT_LEVEL) -> None:
        self.action_level = to_level(action_level)

    def is_handler_activated(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.action_level


class ChannelLevelActivationStrategy:
    """
    Activates on records at or above a per-channel level.

    The channel is the record's logger name. Channels missing from
    ``channel_to_action_level`` use ``default_action_level``.

    Example:
        >>> strategy = ChannelLevelActivationStrategy("error", {"db": "debug"})
    """

    def __init__(
        self,
        default_action_level: Union[int, str] = DEFAULT_LEVEL,
        channel_to_action_level: Optional[Mapping[str, Union[int, str]]] = None,
    ) -> None:
        self.default_action_level = to_level(default_action_level)
        self.channel_to_action_level: Dict[str, int] = {
            channel: to_level(level) for channel, level in (channel_to_action_level or {}).items()
        }

    def is_handler_activated(self, record: logging.LogRecord) -> bool:
        level = self.channel_to_action_level.get(record.name, self.default_action_level)
        return record.levelno >= level
