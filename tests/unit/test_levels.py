"""
Unit tests for level names and conversion.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging

import pytest

from logforge.levels import (
    ALERT,
    EMERGENCY,
    NOTICE,
    level_name,
    standard_level,
    syslog_severity,
    to_level,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("notice", NOTICE),
        ("warn", logging.WARNING),
        ("emergency", EMERGENCY),
        (" error ", logging.ERROR),
        ("30", 30),
        (15, 15),
    ],
)
def test_to_level(value, expected):
    assert to_level(value) == expected


@pytest.mark.parametrize("value", ["verbose", "", None, True, 1.5])
def test_to_level_rejects_unknown_values(value):
    with pytest.raises(ValueError):
        to_level(value)


def test_custom_level_names_registered():
    assert level_name(NOTICE) == "NOTICE"
    assert level_name(ALERT) == "ALERT"
    assert level_name(EMERGENCY) == "EMERGENCY"


@pytest.mark.parametrize(
    "level, severity",
    [
        (logging.DEBUG, 7),
        (logging.INFO, 6),
        (NOTICE, 5),
        (logging.WARNING, 4),
        (logging.ERROR, 3),
        (logging.CRITICAL, 2),
        (ALERT, 1),
        (EMERGENCY, 0),
        (5, 7),
        (45, 3),
    ],
)
def test_syslog_severity(level, severity):
    assert syslog_severity(level) == severity


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.NOTSET, logging.NOTSET),
        (logging.INFO, logging.INFO),
        (NOTICE, logging.INFO),
        (ALERT, logging.CRITICAL),
        (EMERGENCY, logging.CRITICAL),
        (5, logging.NOTSET),
    ],
)
def test_standard_level(level, expected):
    assert standard_level(level) == expected
