"""
Log level names and conversion.

Extends the standard library's numeric levels with the syslog-style names
(notice, alert, emergency) that logging configuration commonly uses.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
from typing import Dict, Union

NOTICE = 25
ALERT = 55
EMERGENCY = 60

LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": ALERT,
    "emergency": EMERGENCY,
}

# Syslog severities (RFC 5424), used by GELF messages
SYSLOG_SEVERITIES: Dict[int, int] = {
    logging.DEBUG: 7,
    logging.INFO: 6,
    NOTICE: 5,
    logging.WARNING: 4,
    logging.ERROR: 3,
    logging.CRITICAL: 2,
    ALERT: 1,
    EMERGENCY: 0,
}

for _name, _value in (("NOTICE", NOTICE), ("ALERT", ALERT), ("EMERGENCY", EMERGENCY)):
    if logging.getLevelName(_value) == f"Level {_value}":
        logging.addLevelName(_value, _name)


def to_level(value: Union[int, str]) -> int:
    """
    Convert a level name or number to a numeric level.

    Args:
        value: Level name (case-insensitive) or integer level

    Returns:
        Numeric level

    Raises:
        ValueError: If the name is unknown or the value is neither int nor str
    """
    if isinstance(value, bool):
        raise ValueError(f"Level must be a name or an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        level = LEVELS.get(value.strip().lower())
        if level is not None:
            return level
        if value.strip().isdigit():
            return int(value.strip())
    raise ValueError(f"Level {value!r} is not defined, use one of: {', '.join(LEVELS)}")


def level_name(level: int) -> str:
    """Return the upper-case name for a numeric level."""
    return logging.getLevelName(level)


def syslog_severity(level: int) -> int:
    """Map a numeric level to the closest syslog severity."""
    for threshold in sorted(SYSLOG_SEVERITIES, reverse=True):
        if level >= threshold:
            return SYSLOG_SEVERITIES[threshold]
    return SYSLOG_SEVERITIES[logging.DEBUG]

STANDARD_LEVELS = (
    logging.NOTSET,
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)


def standard_level(level: int) -> int:
    """Return the highest standard library level not above ``level``."""
    return max((value for value in STANDARD_LEVELS if value <= level), default=logging.NOTSET)
