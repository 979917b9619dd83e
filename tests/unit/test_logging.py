"""
Unit tests for LoggingService.

Tests logging configuration, logger creation and sensitive data
sanitization.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
from io import StringIO
from unittest.mock import patch

import pytest

from logforge.logging_service import LoggingConfig, LoggingService
from logforge.processors import UidProcessorBuilder

# ============================================================
# FIXTURES
# ============================================================


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Start every test with unconfigured logging."""
    LoggingService._configured = False
    LoggingService._log_level = "INFO"
    LoggingService._config = None
    LoggingService._loggers = {}
    LoggingService._sensitive_keys = LoggingConfig().sensitive_keys
    yield
    LoggingService._configured = False
    LoggingService._loggers = {}


# ============================================================
# CONFIGURATION TESTS
# ============================================================


def test_configure_logging_success():
    """Test successful logging configuration."""
    LoggingService.configure_logging(level="info", format="json")

    assert LoggingService._configured is True
    assert LoggingService._log_level == "INFO"


def test_configure_logging_with_config_object():
    """Test configuration with LoggingConfig object."""
    stream = StringIO()
    config = LoggingConfig(level="DEBUG", format="console", output_stream=stream)

    LoggingService.configure_logging(config=config)

    assert LoggingService._config is config
    assert LoggingService._log_level == "DEBUG"


def test_configure_logging_accepts_custom_levels():
    LoggingService.configure_logging(level="notice")

    assert LoggingService._log_level == "NOTICE"


def test_configure_logging_custom_level_filters_at_nearest_standard_level():
    stream = StringIO()
    LoggingService.configure_logging(config=LoggingConfig(level="ALERT", output_stream=stream))

    logger = LoggingService.get_logger("logforge.test")
    logger.error("dropped")
    logger.critical("kept")

    assert "dropped" not in stream.getvalue()
    assert "kept" in stream.getvalue()


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        LoggingService.configure_logging(level="LOUD")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid format"):
        LoggingService.configure_logging(level="INFO", format="xml")


def test_configure_logging_already_configured():
    LoggingService.configure_logging()

    with pytest.raises(RuntimeError, match="already configured"):
        LoggingService.configure_logging()


# ============================================================
# LOGGER TESTS
# ============================================================


def test_get_logger_caches_loggers():
    LoggingService.configure_logging()

    first = LoggingService.get_logger("logforge.test")
    second = LoggingService.get_logger("logforge.test")

    assert first is second


def test_get_logger_not_configured_falls_back():
    """Before configuration a default logger is returned, uncached."""
    logger = LoggingService.get_logger("logforge.test")

    assert logger is not None
    assert LoggingService._loggers == {}


def test_get_logger_not_configured_uses_stdlib_logging(capsys, caplog):
    with caplog.at_level(logging.DEBUG, logger="logforge.test"):
        LoggingService.get_logger("logforge.test").debug("product_built", builder="X")

    assert capsys.readouterr().out == ""
    assert [record.name for record in caplog.records] == ["logforge.test"]
    assert "product_built" in caplog.records[0].getMessage()


def test_build_without_configured_logging_writes_nothing_to_stdout(capsys, caplog):
    fallback = LoggingService.get_logger("logforge.builder")

    with patch("logforge.builder.logger", fallback):
        with caplog.at_level(logging.DEBUG, logger="logforge.builder"):
            processor = UidProcessorBuilder()(None, "uid", {"length": 3})

    assert len(processor.get_uid()) == 3
    assert capsys.readouterr().out == ""
    assert "product_built" in caplog.text


def test_get_logger_empty_name():
    with pytest.raises(ValueError, match="cannot be empty"):
        LoggingService.get_logger("")


def test_get_logger_very_long_name():
    with pytest.raises(ValueError, match="maximum length"):
        LoggingService.get_logger("x" * 201)


# ============================================================
# SANITIZATION TESTS
# ============================================================


def test_sanitize_metadata_sensitive_keys():
    sanitized = LoggingService.sanitize_metadata(
        {"username": "user", "password": "pass", "api-key": "k", "hosts": ["a"]}
    )

    assert sanitized == {
        "username": "user",
        "password": "[REDACTED]",
        "api-key": "[REDACTED]",
        "hosts": ["a"],
    }


def test_sanitize_metadata_nested_dicts_and_lists():
    sanitized = LoggingService.sanitize_metadata(
        {"handler": {"options": {"Token": "t"}}, "items": [{"secret": "s"}, 1]}
    )

    assert sanitized["handler"]["options"]["Token"] == "[REDACTED]"
    assert sanitized["items"] == [{"secret": "[REDACTED]"}, 1]


def test_sanitize_metadata_does_not_mutate_input():
    data = {"password": "pass"}

    LoggingService.sanitize_metadata(data)

    assert data == {"password": "pass"}


def test_sanitize_metadata_non_dict_passthrough():
    assert LoggingService.sanitize_metadata(["password"]) == ["password"]
