"""
Unit tests for the handler builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import io
import logging
import logging.handlers
import re
import sys
from unittest.mock import MagicMock

import pytest

from logforge.activation import ChannelLevelActivationStrategy, ErrorLevelActivationStrategy
from logforge.exceptions import ConfigurationError, ServiceNotCreatedError, ServiceNotFoundError
from logforge.formatters import LineFormatter
from logforge.handlers import (
    BufferHandler,
    BufferHandlerBuilder,
    FingersCrossedHandler,
    FingersCrossedHandlerBuilder,
    NullHandlerBuilder,
    RotatingFileHandlerBuilder,
    StreamHandlerBuilder,
)
from logforge.handlers.builders import HandlerBuilder

# ============================================================
# STREAM
# ============================================================


class TestStreamHandlerBuilder:
    def setup_method(self):
        self.builder = StreamHandlerBuilder()

    def test_standard_stream(self, lookup):
        handler = self.builder(lookup, "stream", {"stream": "ext://sys.stderr"})

        assert type(handler) is logging.StreamHandler
        assert handler.stream is sys.stderr
        assert handler.level == logging.DEBUG

    def test_stream_object(self, lookup):
        buffer = io.StringIO()

        handler = self.builder(lookup, "stream", {"stream": buffer, "level": "error"})

        assert handler.stream is buffer
        assert handler.level == logging.ERROR

    def test_stream_service(self, container):
        buffer = io.StringIO()
        container.set("log.buffer", buffer)

        handler = self.builder(container, "stream", {"stream": "log.buffer"})

        assert handler.stream is buffer

    def test_stream_service_fails(self):
        lookup = MagicMock()
        lookup.has.return_value = True
        lookup.get.side_effect = RuntimeError("closed")

        with pytest.raises(ServiceNotFoundError, match="Could not load stream"):
            self.builder(lookup, "stream", {"stream": "log.buffer"})

    def test_file_path(self, lookup, tmp_path):
        path = tmp_path / "app.log"

        handler = self.builder(lookup, "stream", {"stream": str(path), "delay": True})

        assert isinstance(handler, logging.FileHandler)
        assert handler.baseFilename == str(path)
        handler.close()

    @pytest.mark.parametrize("stream", [42, {"path": "app.log"}, object()])
    def test_invalid_stream(self, lookup, stream):
        with pytest.raises(ServiceNotFoundError, match="invalid stream given"):
            self.builder(lookup, "stream", {"stream": stream})

    def test_stream_required(self, lookup):
        with pytest.raises(ConfigurationError, match="The required stream is missing"):
            self.builder(lookup, "stream", {"level": "info"})

    def test_options_required(self, lookup):
        with pytest.raises(ConfigurationError, match="Options must be a mapping"):
            self.builder(lookup, "stream", None)

    def test_formatter_and_processors(self, container):
        buffer = io.StringIO()
        handler = self.builder(
            container,
            "stream",
            {
                "stream": buffer,
                "formatter": {"type": "line", "options": {"format": "%message% %extra.uid%\n"}},
                "processors": [{"type": "uid", "options": {"length": 4}}],
            },
        )
        logger = logging.Logger("app")
        logger.addHandler(handler)

        logger.info("hello")

        assert isinstance(handler.formatter, LineFormatter)
        assert re.fullmatch(r"hello [0-9a-f]{4}\n", buffer.getvalue())

    def test_formatter_controls_line_ending(self, container):
        buffer = io.StringIO()
        handler = self.builder(
            container, "stream", {"stream": buffer, "formatter": {"type": "json"}}
        )
        logger = logging.Logger("app")
        logger.addHandler(handler)

        logger.info("first")
        logger.info("second")

        assert handler.terminator == ""
        assert len(buffer.getvalue().splitlines()) == 2
        assert buffer.getvalue().endswith("}\n")

    def test_default_terminator_without_formatter(self, lookup):
        handler = self.builder(lookup, "stream", {"stream": io.StringIO()})

        assert handler.terminator == "\n"

    def test_invalid_formatter_opens_no_file(self, container, tmp_path):
        path = tmp_path / "app.log"

        with pytest.raises(ConfigurationError, match="Options must contain a type for the formatter"):
            self.builder(container, "stream", {"stream": str(path), "formatter": {"options": {}}})

        assert not path.exists()

    def test_invalid_processors_open_no_file(self, container, tmp_path):
        path = tmp_path / "app.log"

        with pytest.raises(ServiceNotFoundError, match="Could not find service sampling"):
            self.builder(
                container, "stream", {"stream": str(path), "processors": [{"type": "sampling"}]}
            )

        assert not path.exists()

    def test_invalid_level_opens_no_file(self, lookup, tmp_path):
        path = tmp_path / "app.log"

        with pytest.raises(ValueError):
            self.builder(lookup, "stream", {"stream": str(path), "level": "loud"})

        assert not path.exists()

    def test_invalid_formatter(self, lookup):
        with pytest.raises(ConfigurationError) as exc_info:
            self.builder(lookup, "stream", {"stream": io.StringIO(), "formatter": "line"})

        assert exc_info.value.error_code == "CFG_002"

    def test_invalid_processors(self, lookup):
        with pytest.raises(ConfigurationError, match="Processors must be a list"):
            self.builder(lookup, "stream", {"stream": io.StringIO(), "processors": "uid"})


# ============================================================
# ROTATING FILE / NULL
# ============================================================


class TestRotatingFileHandlerBuilder:
    def test_builds(self, lookup, tmp_path):
        path = tmp_path / "app.log"

        handler = RotatingFileHandlerBuilder()(
            lookup, "rotating", {"filename": str(path), "maxFiles": 7, "delay": True}
        )

        assert isinstance(handler, logging.handlers.TimedRotatingFileHandler)
        assert handler.backupCount == 7
        assert handler.when == "MIDNIGHT"
        handler.close()

    def test_filename_required(self, lookup):
        with pytest.raises(ConfigurationError, match="No filename provided"):
            RotatingFileHandlerBuilder()(lookup, "rotating", {"maxFiles": 7})


class TestNullHandlerBuilder:
    def test_builds(self, lookup):
        handler = NullHandlerBuilder()(lookup, "null")

        assert isinstance(handler, logging.NullHandler)
        assert handler.level == logging.DEBUG


def test_handler_builder_requires_create_handler():
    with pytest.raises(TypeError):
        HandlerBuilder()


# ============================================================
# WRAPPING HANDLERS
# ============================================================


class TestBufferHandlerBuilder:
    def setup_method(self):
        self.builder = BufferHandlerBuilder()
        self.buffer = io.StringIO()

    def test_builds(self, container):
        handler = self.builder(
            container,
            "buffer",
            {
                "handler": {"type": "stream", "options": {"stream": self.buffer}},
                "bufferLimit": 5,
                "flushOnOverflow": False,
            },
        )

        assert isinstance(handler, BufferHandler)
        assert isinstance(handler.target, logging.StreamHandler)
        assert handler.target.stream is self.buffer
        assert handler.buffer_limit == 5
        assert handler.flush_on_overflow is False

    def test_handler_required(self, container):
        with pytest.raises(ConfigurationError, match="No handler provided"):
            self.builder(container, "buffer", {"bufferLimit": 5})

    def test_handler_must_be_mapping(self, container):
        with pytest.raises(ConfigurationError, match="HandlerConfig must be a mapping"):
            self.builder(container, "buffer", {"handler": "stream"})

    def test_handler_type_required(self, container):
        with pytest.raises(ConfigurationError, match="Options must contain a type for the handler"):
            self.builder(container, "buffer", {"handler": {"options": {}}})

    def test_disabled_handler(self, container):
        with pytest.raises(ConfigurationError, match="No active handler specified"):
            self.builder(
                container,
                "buffer",
                {"handler": {"type": "stream", "enabled": False, "options": {}}},
            )

    def test_unknown_handler_type(self, container):
        with pytest.raises(ServiceNotFoundError, match="Could not load handler class syslog"):
            self.builder(container, "buffer", {"handler": {"type": "syslog"}})

    def test_inner_handler_errors_propagate(self, container):
        with pytest.raises(ConfigurationError, match="The required stream is missing"):
            self.builder(container, "buffer", {"handler": {"type": "stream", "options": {}}})


class TestFingersCrossedHandlerBuilder:
    def setup_method(self):
        self.builder = FingersCrossedHandlerBuilder()
        self.inner = {"type": "null"}

    def build(self, container, **options):
        return self.builder(container, "fingers_crossed", {"handler": self.inner, **options})

    def test_defaults(self, container):
        handler = self.build(container)

        assert isinstance(handler, FingersCrossedHandler)
        assert isinstance(handler.target, logging.NullHandler)
        assert handler.activation_strategy.action_level == logging.WARNING
        assert handler.buffer_size == 0
        assert handler.stop_buffering is True
        assert handler.passthru_level is None

    def test_options(self, container):
        handler = self.build(container, bufferSize=10, stopBuffering=False, passthruLevel="error")

        assert handler.buffer_size == 10
        assert handler.stop_buffering is False
        assert handler.passthru_level == logging.ERROR

    def test_level_number(self, container):
        handler = self.build(container, activationStrategy=40)

        assert handler.activation_strategy.action_level == 40

    def test_level_name(self, container):
        handler = self.build(container, activationStrategy="critical")

        assert handler.activation_strategy.action_level == logging.CRITICAL

    def test_strategy_object(self, container):
        strategy = ChannelLevelActivationStrategy("error")

        assert self.build(container, activationStrategy=strategy).activation_strategy is strategy

    def test_strategy_mapping(self, container):
        handler = self.build(
            container,
            activationStrategy={
                "type": "channel_level",
                "options": {"defaultActionLevel": "error", "channelToActionLevel": {"db": "info"}},
            },
        )

        strategy = handler.activation_strategy
        assert isinstance(strategy, ChannelLevelActivationStrategy)
        assert strategy.channel_to_action_level == {"db": logging.INFO}

    def test_strategy_name(self, container):
        handler = self.build(container, activationStrategy="error_level")

        assert isinstance(handler.activation_strategy, ErrorLevelActivationStrategy)
        assert handler.activation_strategy.action_level == logging.DEBUG

    def test_strategy_mapping_without_type(self, container):
        with pytest.raises(
            ConfigurationError, match="Options must contain a type for the ActivationStrategy"
        ):
            self.build(container, activationStrategy={"options": {}})

    def test_unknown_strategy_type(self, container):
        with pytest.raises(ServiceNotFoundError, match="Could not load ActivationStrategy class"):
            self.build(container, activationStrategy={"type": "sampling"})

    @pytest.mark.parametrize("value", ["sometimes", ["error"], 1.5])
    def test_unresolvable_strategy(self, container, value):
        with pytest.raises(
            ServiceNotCreatedError, match="Could not find Class for ActivationStrategy"
        ):
            self.build(container, activationStrategy=value)

    def test_invalid_strategy_opens_no_file(self, container, tmp_path):
        path = tmp_path / "app.log"
        self.inner = {"type": "stream", "options": {"stream": str(path)}}

        with pytest.raises(ServiceNotCreatedError):
            self.build(container, activationStrategy="sometimes")

        assert not path.exists()

    def test_invalid_passthru_level_opens_no_file(self, container, tmp_path):
        path = tmp_path / "app.log"
        self.inner = {"type": "stream", "options": {"stream": str(path)}}

        with pytest.raises(ValueError):
            self.build(container, passthruLevel="loud")

        assert not path.exists()

    def test_activates_wrapped_handler(self, container):
        buffer = io.StringIO()
        self.inner = {"type": "stream", "options": {"stream": buffer}}
        logger = logging.Logger("app")
        logger.addHandler(self.build(container, activationStrategy="error"))

        logger.info("queued")
        assert buffer.getvalue() == ""

        logger.error("failed")
        assert buffer.getvalue() == "queued\nfailed\n"
