"""Levelled logging to standard output and standard error."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


class Logger:
    """Writes messages at or above a threshold level."""

    def __init__(self, level: LogLevel) -> None:
        self.level = LogLevel(level)

    def log(self, level: LogLevel, msg: str) -> None:
        """Write a message; warnings and above go to standard error."""
        level = LogLevel(level)
        if level < self.level:
            return
        stream = sys.stdout if level < LogLevel.WARN else sys.stderr
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")
        print(f"{stamp} [{level.name}]: {msg}", file=stream, flush=True)