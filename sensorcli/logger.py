"""Levelled logging to stdout or a file, plus device-operation helpers."""

from __future__ import annotations

import sys
import time
from enum import IntEnum
from typing import Optional, TextIO


class Level(IntEnum):
    """Log severity, ordered from most to least verbose."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


class Logger:
    """Writes messages at or above a threshold level to a stream."""

    def __init__(self, level: Level = Level.INFO, stream: Optional[TextIO] = None) -> None:
        self.level = level
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, level: Level, fmt: str, *args: object) -> None:
        """Write one formatted line if ``level`` passes the threshold."""
        if level < self.level:
            return
        now = time.localtime()
        prefix = time.strftime("%Y/%m/%d %H:%M:%S", now)
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", now)
        message = fmt % args if args else fmt
        stream = self.stream
        stream.write(f"{prefix} [{stamp}] {Level(level).name}: {message}\n")
        stream.flush()


_default: Optional[Logger] = None


def init(level: Level, log_file: Optional[str] = None) -> None:
    """Set up the default logger, appending to ``log_file`` or writing to stdout."""
    global _default
    stream = open(log_file, "a", encoding="utf-8") if log_file else None
    _default = Logger(level, stream)


def set_level(level: Level) -> None:
    """Change the default logger's threshold."""
    if _default is not None:
        _default.level = level


def debug(fmt: str, *args: object) -> None:
    if _default is not None:
        _default.log(Level.DEBUG, fmt, *args)


def info(fmt: str, *args: object) -> None:
    if _default is not None:
        _default.log(Level.INFO, fmt, *args)


def warn(fmt: str, *args: object) -> None:
    if _default is not None:
        _default.log(Level.WARN, fmt, *args)


def error(fmt: str, *args: object) -> None:
    if _default is not None:
        _default.log(Level.ERROR, fmt, *args)


class DeviceLogger:
    """Logs register operations for one device through the default logger."""

    def __init__(self, bus: int, addr: int) -> None:
        self.bus = bus
        self.addr = addr

    def log_read(self, reg: int, value: int, err: Optional[BaseException]) -> None:
        if err is not None:
            error("device 0x%02X (bus %d) read register 0x%02X failed: %s",
                  self.addr, self.bus, reg, err)
        else:
            debug("device 0x%02X (bus %d) read register 0x%02X: 0x%02X",
                  self.addr, self.bus, reg, value)

    def log_write(self, reg: int, value: int, err: Optional[BaseException]) -> None:
        if err is not None:
            error("device 0x%02X (bus %d) write register 0x%02X failed: %s",
                  self.addr, self.bus, reg, err)
        else:
            debug("device 0x%02X (bus %d) write register 0x%02X: 0x%02X",
                  self.addr, self.bus, reg, value)

    def log_scan(self, found: bool) -> None:
        if found:
            info("scan found device: 0x%02X (bus %d)", self.addr, self.bus)
        else:
            debug("scan address 0x%02X (bus %d): no device", self.addr, self.bus)