"""
Processors adding information about the running process.

All processors follow structlog's processor protocol:
``processor(logger, method_name, event_dict) -> event_dict``.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import secrets
import subprocess
from typing import Any, Dict, MutableMapping, Optional, Union

import psutil

from logforge.defaults import DEFAULT_LEVEL, DEFAULT_UID_LENGTH, MAX_UID_LENGTH, MIN_UID_LENGTH
from logforge.levels import LEVELS, to_level

EventDict = MutableMapping[str, Any]


def method_level(method_name: str) -> int:
    """Numeric level of a structlog method name ("exception" counts as error)."""
    if method_name == "exception":
        return LEVELS["error"]
    return LEVELS.get(method_name.lower(), 0)


class UidProcessor:
    """
    Adds a unique identifier to every event as ``uid``.

    The identifier stays the same for the lifetime of the processor, so all
    events of one request share it. Call ``reset()`` to draw a new one.

    Args:
        length: Number of hex characters, between 1 and 32

    Raises:
        ValueError: If ``length`` is not an integer between 1 and 32
    """

    def __init__(self, length: int = DEFAULT_UID_LENGTH) -> None:
        if (
            isinstance(length, bool)
            or not isinstance(length, int)
            or not MIN_UID_LENGTH <= length <= MAX_UID_LENGTH
        ):
            raise ValueError(
                f"The uid length must be an integer between {MIN_UID_LENGTH} and {MAX_UID_LENGTH}"
            )
        self.length = length
        self.uid = self._generate()

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["uid"] = self.uid
        return event_dict

    def get_uid(self) -> str:
        return self.uid

    def reset(self) -> None:
        self.uid = self._generate()

    def _generate(self) -> str:
        return secrets.token_hex((self.length + 1) // 2)[: self.length]


class MemoryUsageProcessor:
    """
    Adds the current memory usage of the process as ``memory_usage``.

    Args:
        real_usage: Report the resident set size; otherwise the virtual
            memory size
        use_formatting: Render as "12.5 MB" instead of a byte count
    """

    def __init__(self, real_usage: bool = True, use_formatting: bool = True) -> None:
        self.real_usage = real_usage
        self.use_formatting = use_formatting
        self._process = psutil.Process()

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        memory_info = self._process.memory_info()
        usage = memory_info.rss if self.real_usage else memory_info.vms
        event_dict["memory_usage"] = self.format_bytes(usage) if self.use_formatting else usage
        return event_dict

    def format_bytes(self, size: int) -> str:
        if size > 1024 * 1024:
            return f"{round(size / 1024 / 1024, 2)} MB"
        if size > 1024:
            return f"{round(size / 1024, 2)} KB"
        return f"{size} B"


class GitProcessor:
    """
    Adds the current git branch and commit as ``git``.

    Repository information is read once per processor. Outside a repository,
    or without a git executable, the event is left unchanged.

    Args:
        level: Minimum level of events to annotate (name or number)
        cwd: Directory to run git in (default: current directory)
    """

    def __init__(self, level: Union[int, str] = DEFAULT_LEVEL, cwd: Optional[str] = None) -> None:
        self.level = to_level(level)
        self.cwd = cwd
        self._cache: Optional[Dict[str, str]] = None

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        if method_level(method_name) < self.level:
            return event_dict

        git = self.get_git_info()
        if git:
            event_dict["git"] = git
        return event_dict

    def get_git_info(self) -> Dict[str, str]:
        if self._cache is not None:
            return self._cache

        self._cache = {}
        try:
            result = subprocess.run(
                ["git", "branch", "-v", "--no-abbrev"],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError):
            return self._cache

        if result.returncode != 0:
            return self._cache

        for line in result.stdout.splitlines():
            if not line.startswith("* "):
                continue
            parts = line[2:].split()
            if len(parts) >= 2:
                self._cache = {"branch": parts[0], "commit": parts[1]}
            break

        return self._cache
