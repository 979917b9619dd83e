"""
Handlers that buffer records before passing them to a wrapped handler.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import logging.handlers
from typing import List, Optional, Union

from logforge.activation.strategies import ActivationStrategy, ErrorLevelActivationStrategy
from logforge.defaults import DEFAULT_BUFFER_LIMIT
from logforge.levels import to_level


class BufferHandler(logging.handlers.MemoryHandler):
    """
    Buffers records and hands them to ``target`` on flush or close.

    Args:
        target: Wrapped handler
        buffer_limit: Maximum number of buffered records, 0 for no limit
        flush_on_overflow: Flush when the limit is reached; otherwise the
            oldest record is discarded
    """

    def __init__(
        self,
        target: logging.Handler,
        buffer_limit: int = DEFAULT_BUFFER_LIMIT,
        flush_on_overflow: bool = True,
    ) -> None:
        super().__init__(capacity=buffer_limit, target=target, flushOnClose=True)
        self.buffer_limit = buffer_limit
        self.flush_on_overflow = flush_on_overflow

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        if self.buffer_limit <= 0 or len(self.buffer) < self.buffer_limit:
            return False
        if self.flush_on_overflow:
            return True
        while len(self.buffer) > self.buffer_limit:
            self.buffer.pop(0)
        return False

    def close(self) -> None:
        # MemoryHandler.close flushes and then forgets the target
        target = self.target
        try:
            super().close()
        finally:
            if target is not None:
                target.close()


class FingersCrossedHandler(logging.Handler):
    """
    Buffers records until one activates the strategy, then replays them.

    Args:
        target: Wrapped handler
        activation_strategy: Strategy object, or a level; None activates
            on WARNING and above
        buffer_size: Records kept before activation, 0 for no limit
        stop_buffering: After activation pass records straight through
            instead of buffering again
        passthru_level: On close, records at or above this level are
            passed to ``target`` even without activation

    Example:
        >>> handler = FingersCrossedHandler(stream_handler, "error", buffer_size=50)
        >>> logger.addHandler(handler)
    """

    def __init__(
        self,
        target: logging.Handler,
        activation_strategy: Optional[Union[ActivationStrategy, int, str]] = None,
        buffer_size: int = 0,
        stop_buffering: bool = True,
        passthru_level: Optional[Union[int, str]] = None,
    ) -> None:
        super().__init__()
        self.target = target
        if activation_strategy is None:
            activation_strategy = ErrorLevelActivationStrategy(logging.WARNING)
        elif not isinstance(activation_strategy, ActivationStrategy):
            activation_strategy = ErrorLevelActivationStrategy(activation_strategy)
        self.activation_strategy = activation_strategy
        self.buffer_size = buffer_size
        self.stop_buffering = stop_buffering
        self.passthru_level = None if passthru_level is None else to_level(passthru_level)
        self.buffering = True
        self.buffer: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        if not self.buffering:
            self.target.handle(record)
            return

        self.buffer.append(record)
        if self.buffer_size > 0 and len(self.buffer) > self.buffer_size:
            self.buffer.pop(0)

        if self.activation_strategy.is_handler_activated(record):
            self.activate()

    def activate(self) -> None:
        if self.stop_buffering:
            self.buffering = False
        self.acquire()
        try:
            pending, self.buffer = self.buffer, []
        finally:
            self.release()
        for record in pending:
            self.target.handle(record)

    def clear(self) -> None:
        self.buffer = []
        self.buffering = True

    def close(self) -> None:
        if self.passthru_level is not None:
            for record in self.buffer:
                if record.levelno >= self.passthru_level:
                    self.target.handle(record)
        self.buffer = []
        self.target.close()
        super().close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.target!r} ({len(self.buffer)} buffered)>"
