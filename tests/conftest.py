"""
Pytest configuration and fixtures for all tests.

Provides shared setup/teardown for the logging service.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

from logforge.logging_service import LoggingConfig, LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService._configured = False
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before each test."""
    # Reset class-level state
    LoggingService._configured = False
    LoggingService._log_level = "INFO"
    LoggingService._config = None
    LoggingService._loggers = {}
    LoggingService._sensitive_keys = LoggingConfig().sensitive_keys

    # Configure for tests
    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    # Cleanup after test
    LoggingService._configured = False
    LoggingService._loggers = {}
