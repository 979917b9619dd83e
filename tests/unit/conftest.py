"""
Unit test fixtures.

Isolates unit tests from environment variables (.env file) and provides
record and lookup helpers shared by the builder tests.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import os
from unittest.mock import MagicMock

import pytest

from logforge.container import create_container

# Environment variables that affect LogforgeSettings defaults
CONFIG_ENV_VARS = [
    "LOGFORGE_LOG_LEVEL",
    "LOGFORGE_LOG_FORMAT",
    "LOGFORGE_DEFAULT_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove all config-related environment variables and change working
    directory to avoid loading .env file.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)


@pytest.fixture
def lookup():
    """Service lookup that knows no services."""
    mock = MagicMock()
    mock.has.return_value = False
    return mock


@pytest.fixture
def container():
    """Container with every family registry registered."""
    return create_container()


@pytest.fixture
def make_record():
    """Factory for LogRecords as a logger would create them."""

    def _make(
        msg="hello world",
        level=logging.INFO,
        name="app",
        args=(),
        extra=None,
        exc_info=None,
    ):
        return logging.Logger(name).makeRecord(
            name, level, __file__, 42, msg, args, exc_info, extra=extra
        )

    return _make
