"""
Unit tests for the processors.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import subprocess
from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from logforge.processors import (
    GitProcessor,
    MemoryUsageProcessor,
    PsrLogMessageProcessor,
    UidProcessor,
    WebProcessor,
)
from logforge.processors.runtime import method_level

# ============================================================
# UID
# ============================================================


class TestUidProcessor:
    def test_default_length(self):
        processor = UidProcessor()

        assert len(processor.get_uid()) == 7
        int(processor.get_uid(), 16)

    @pytest.mark.parametrize("length", [1, 2, 31, 32])
    def test_accepted_lengths(self, length):
        assert len(UidProcessor(length).get_uid()) == length

    @pytest.mark.parametrize("length", [0, 33, -1, "7", 7.0, True])
    def test_rejected_lengths(self, length):
        with pytest.raises(
            ValueError, match="The uid length must be an integer between 1 and 32"
        ):
            UidProcessor(length)

    def test_adds_uid(self):
        processor = UidProcessor()

        event_dict = processor(None, "info", {"event": "hello"})

        assert event_dict == {"event": "hello", "uid": processor.get_uid()}

    def test_uid_stable_until_reset(self):
        processor = UidProcessor(32)
        first = processor.get_uid()

        assert processor(None, "info", {})["uid"] == first

        processor.reset()
        assert processor.get_uid() != first
        assert len(processor.get_uid()) == 32


# ============================================================
# MEMORY USAGE
# ============================================================


class TestMemoryUsageProcessor:
    def setup_method(self):
        self.process = MagicMock()
        self.process.memory_info.return_value = MagicMock(rss=3 * 1024 * 1024, vms=2048)
        self.patcher = patch(
            "logforge.processors.runtime.psutil.Process", return_value=self.process
        )
        self.patcher.start()

    def teardown_method(self):
        self.patcher.stop()

    def test_real_usage_formatted(self):
        event_dict = MemoryUsageProcessor()(None, "info", {})

        assert event_dict["memory_usage"] == "3.0 MB"

    def test_virtual_usage_formatted(self):
        event_dict = MemoryUsageProcessor(real_usage=False)(None, "info", {})

        assert event_dict["memory_usage"] == "2.0 KB"

    def test_raw_bytes(self):
        event_dict = MemoryUsageProcessor(use_formatting=False)(None, "info", {})

        assert event_dict["memory_usage"] == 3 * 1024 * 1024

    def test_format_bytes(self):
        processor = MemoryUsageProcessor()

        assert processor.format_bytes(512) == "512 B"
        assert processor.format_bytes(1536) == "1.5 KB"


# ============================================================
# GIT
# ============================================================


class TestGitProcessor:
    OUTPUT = "  main     0123abcd initial\n* feature  89abcdef add git processor\n"

    def test_method_level(self):
        assert method_level("info") == 20
        assert method_level("exception") == 40
        assert method_level("unknown") == 0

    @patch("logforge.processors.runtime.subprocess.run")
    def test_adds_branch_and_commit(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=self.OUTPUT)

        event_dict = GitProcessor()(None, "info", {"event": "hello"})

        assert event_dict["git"] == {"branch": "feature", "commit": "89abcdef"}
        assert mock_run.call_args.args[0] == ["git", "branch", "-v", "--no-abbrev"]

    @patch("logforge.processors.runtime.subprocess.run")
    def test_git_called_once(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=self.OUTPUT)
        processor = GitProcessor()

        processor(None, "info", {})
        processor(None, "error", {})

        assert mock_run.call_count == 1

    @patch("logforge.processors.runtime.subprocess.run")
    def test_below_level_untouched(self, mock_run):
        event_dict = GitProcessor("error")(None, "info", {"event": "hello"})

        assert event_dict == {"event": "hello"}
        mock_run.assert_not_called()

    @patch("logforge.processors.runtime.subprocess.run")
    def test_outside_repository(self, mock_run):
        mock_run.return_value = MagicMock(returncode=128, stdout="")

        assert "git" not in GitProcessor()(None, "info", {})

    @patch("logforge.processors.runtime.subprocess.run")
    def test_git_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError("git")

        assert "git" not in GitProcessor()(None, "info", {})

    @patch("logforge.processors.runtime.subprocess.run")
    def test_git_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired("git", 5)

        assert GitProcessor().get_git_info() == {}

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            GitProcessor("verbose")


# ============================================================
# WEB
# ============================================================


class TestWebProcessor:
    SERVER = {
        "REQUEST_URI": "/cart",
        "REMOTE_ADDR": "10.0.0.1",
        "REQUEST_METHOD": "POST",
        "SERVER_NAME": "shop.example.com",
        "HTTP_REFERER": "https://example.com/",
        "HTTP_USER_AGENT": "curl/8.0",
    }

    def test_default_fields(self):
        event_dict = WebProcessor(self.SERVER)(None, "info", {"event": "hit"})

        assert event_dict == {
            "event": "hit",
            "url": "/cart",
            "ip": "10.0.0.1",
            "http_method": "POST",
            "server": "shop.example.com",
            "referrer": "https://example.com/",
        }

    def test_selected_fields(self):
        processor = WebProcessor(self.SERVER, ["url", "user_agent", "unknown"])

        assert processor.extra_fields == {"url": "REQUEST_URI", "user_agent": "HTTP_USER_AGENT"}
        assert processor(None, "info", {})["user_agent"] == "curl/8.0"

    def test_field_mapping_replaces_defaults(self):
        processor = WebProcessor(self.SERVER, {"agent": "HTTP_USER_AGENT"})

        assert processor(None, "info", {}) == {"agent": "curl/8.0"}

    def test_add_extra_field(self):
        processor = WebProcessor(self.SERVER, {}).add_extra_field("host", "SERVER_NAME")

        assert processor(None, "info", {}) == {"host": "shop.example.com"}

    def test_missing_values_are_none(self):
        event_dict = WebProcessor({"REQUEST_URI": "/"})(None, "info", {})

        assert event_dict["url"] == "/"
        assert event_dict["ip"] is None

    def test_unique_id(self):
        server = {**self.SERVER, "UNIQUE_ID": "XyZ"}

        assert WebProcessor(server)(None, "info", {})["unique_id"] == "XyZ"

    def test_skipped_outside_request(self):
        assert WebProcessor({"REMOTE_ADDR": "10.0.0.1"})(None, "info", {"event": "x"}) == {
            "event": "x"
        }

    def test_defaults_to_environment(self, monkeypatch):
        monkeypatch.setenv("REQUEST_URI", "/from-env")

        assert WebProcessor()(None, "info", {})["url"] == "/from-env"


# ============================================================
# PSR LOG MESSAGE
# ============================================================


class TestPsrLogMessageProcessor:
    def test_interpolates_values(self):
        event_dict = PsrLogMessageProcessor()(
            None, "info", {"event": "User {user} bought {count} items", "user": "bob", "count": 3}
        )

        assert event_dict["event"] == "User bob bought 3 items"
        assert event_dict["user"] == "bob"

    def test_unknown_placeholders_kept(self):
        event_dict = PsrLogMessageProcessor()(None, "info", {"event": "Hello {name}"})

        assert event_dict["event"] == "Hello {name}"

    def test_remove_used_fields(self):
        processor = PsrLogMessageProcessor(remove_used_context_fields=True)

        event_dict = processor(None, "info", {"event": "Hi {user}", "user": "bob", "id": 1})

        assert event_dict == {"event": "Hi bob", "id": 1}

    def test_non_string_event_untouched(self):
        event_dict = {"event": 42, "user": "bob"}

        assert PsrLogMessageProcessor()(None, "info", dict(event_dict)) == event_dict

    def test_stringify(self):
        processor = PsrLogMessageProcessor()

        assert processor.stringify(None) == "[null]"
        assert processor.stringify(True) == "true"
        assert processor.stringify(False) == "false"
        assert processor.stringify({"a": 1}) == 'array{"a": 1}'
        assert processor.stringify([1, 2]) == "array[1, 2]"
        assert processor.stringify(date(2024, 5, 17)) == "2024-05-17"

    def test_date_format(self):
        processor = PsrLogMessageProcessor(date_format="%d.%m.%Y")

        event_dict = processor(
            None, "info", {"event": "On {when}", "when": datetime(2024, 5, 17, 10, 30)}
        )

        assert event_dict["event"] == "On 17.05.2024"
