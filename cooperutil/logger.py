"""Line-oriented logger with levels, pluggable output and per-index sinks."""

from __future__ import annotations

import enum
import os
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from types import FrameType
from typing import Any

from cooperutil.date import MICRO_SECONDS_PER_SEC, Date
from cooperutil.log_stream import LogStream

OutputFunction = Callable[[str], Any]
FlushFunction = Callable[[], Any]


class LogLevel(enum.IntEnum):
    """Severity of a log message; higher is more severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


_LEVEL_TEXT = {
    LogLevel.TRACE: " TRACE ",
    LogLevel.DEBUG: " DEBUG ",
    LogLevel.INFO: " INFO  ",
    LogLevel.WARN: " WARN  ",
    LogLevel.ERROR: " ERROR ",
    LogLevel.FATAL: " FATAL ",
}

# Levels that are written only when the configured level lets them through.
_GATED_LEVELS = (LogLevel.TRACE, LogLevel.DEBUG, LogLevel.INFO)
# Levels whose messages carry the name of the calling function.
_WITH_FUNC_LEVELS = (LogLevel.TRACE, LogLevel.DEBUG)


def _default_output(msg: str) -> None:
    sys.stdout.write(msg)


def _default_flush() -> None:
    sys.stdout.flush()


@dataclass
class _Config:
    level: LogLevel = LogLevel.DEBUG
    display_local_time: bool = False
    output: OutputFunction | None = _default_output
    flush: FlushFunction | None = _default_flush
    outputs: list[OutputFunction | None] = field(default_factory=list)
    flushes: list[FlushFunction | None] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)


_config = _Config()
_thread_cache = threading.local()


def _output_for(index: int) -> OutputFunction | None:
    if index < 0:
        return _config.output
    with _config.lock:
        while index >= len(_config.outputs):
            _config.outputs.append(_config.output)
        return _config.outputs[index]


def _flush_for(index: int) -> FlushFunction | None:
    if index < 0:
        return _config.flush
    with _config.lock:
        while index >= len(_config.flushes):
            _config.flushes.append(_config.flush)
        return _config.flushes[index]


def source_basename(filename: str | None) -> str | None:
    """Return the part of ``filename`` after its last '/', or None."""
    if filename is None:
        return None
    return filename.rsplit("/", 1)[-1]


def strerror_tl(saved_errno: int) -> str:
    """Return the system message for an error number."""
    return os.strerror(saved_errno)


def _current_errno() -> int:
    exc = sys.exc_info()[1]
    if isinstance(exc, OSError) and exc.errno:
        return exc.errno
    return 0


def _time_prefix(date: Date, local: bool) -> str:
    seconds = date.seconds_since_epoch()
    micro = date.micro_seconds_since_epoch() - date.round_second().micro_seconds_since_epoch()
    key = (seconds, local)
    if getattr(_thread_cache, "key", None) != key:
        _thread_cache.key = key
        if local:
            _thread_cache.text = date.to_formatted_string_local(False)
        else:
            _thread_cache.text = date.to_formatted_string(False)
    suffix = ".%06d " % micro if local else ".%06d UTC " % micro
    return _thread_cache.text + suffix


class Logger:
    """One log message: header on creation, trailer and output on finish.

    Use as a context manager to write the message when the block ends, or
    call :meth:`finish`.
    """

    def __init__(
        self,
        level: LogLevel | int = LogLevel.INFO,
        source_file: str | None = None,
        line: int = 0,
        func: str | None = None,
        sys_error: bool | int = False,
        index: int = -1,
    ) -> None:
        errno_value = 0
        if sys_error is not False:
            level = LogLevel.FATAL
            errno_value = _current_errno() if sys_error is True else int(sys_error)
        self._level = LogLevel(level)
        self._source_file = source_basename(source_file)
        self._line = line
        self._index = index
        self._done = False
        self._date = Date.now()
        self._stream = LogStream()
        self._format_time()
        self._stream << _LEVEL_TEXT[self._level]
        if func is not None:
            self._stream << "[" << func << "] "
        if errno_value != 0:
            self._stream << strerror_tl(errno_value) << " (errno=" << errno_value << ") "

    def _format_time(self) -> None:
        local = _config.display_local_time
        self._stream << _time_prefix(self._date, local)
        self._stream << threading.get_native_id()

    def stream(self) -> LogStream:
        """The stream the message body is written to."""
        return self._stream

    def finish(self) -> None:
        """Add the trailer and hand the message to the output; runs once."""
        if self._done:
            return
        self._done = True
        if self._source_file is not None:
            self._stream << " - " << self._source_file << ":" << self._line << "\n"
        else:
            self._stream << "\n"
        output = _output_for(self._index)
        if output is None:
            return
        output(self._stream.data())
        if self._level >= LogLevel.ERROR:
            flush = _flush_for(self._index)
            if flush is not None:
                flush()

    def __enter__(self) -> LogStream:
        return self._stream

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()

    @staticmethod
    def set_output_function(
        output_func: OutputFunction | None,
        flush_func: FlushFunction | None,
        index: int = -1,
    ) -> None:
        """Set where messages go; a negative index sets the default sink."""
        if index < 0:
            _config.output = output_func
            _config.flush = flush_func
            return
        _output_for(index)
        _flush_for(index)
        with _config.lock:
            _config.outputs[index] = output_func
            _config.flushes[index] = flush_func

    @staticmethod
    def set_log_level(level: LogLevel | int) -> None:
        """Messages below ``level`` are not written by the gated helpers."""
        _config.level = LogLevel(level)

    @staticmethod
    def log_level() -> LogLevel:
        return _config.level

    @staticmethod
    def display_local_time() -> bool:
        """True if times are shown in local time rather than UTC."""
        return _config.display_local_time

    @staticmethod
    def set_display_local_time(show_local_time: bool) -> None:
        _config.display_local_time = bool(show_local_time)


class RawLogger:
    """A message written to the output exactly as streamed, with no header."""

    def __init__(self, index: int = -1) -> None:
        self._index = index
        self._stream = LogStream()
        self._done = False

    def stream(self) -> LogStream:
        return self._stream

    def finish(self) -> None:
        """Hand the text to the output; runs once."""
        if self._done:
            return
        self._done = True
        output = _output_for(self._index)
        if output is None:
            return
        output(self._stream.data())

    def __enter__(self) -> LogStream:
        return self._stream

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()


def _frame_location(frame: FrameType | None) -> tuple[str | None, int, str | None]:
    if frame is None:
        return None, 0, None
    filename = frame.f_code.co_filename.replace(os.sep, "/")
    return filename, frame.f_lineno, frame.f_code.co_name


def _emit(level: LogLevel, args: tuple[Any, ...], frame: FrameType | None) -> None:
    level = LogLevel(level)
    if level in _GATED_LEVELS and Logger.log_level() > level:
        return
    filename, line, func = _frame_location(frame)
    if level not in _WITH_FUNC_LEVELS:
        func = None
    with Logger(level, filename, line, func) as stream:
        for arg in args:
            stream << arg


def log(level: LogLevel | int, *args: Any) -> None:
    """Write one message at ``level`` made of ``args``."""
    _emit(LogLevel(level), args, sys._getframe(1))


def trace(*args: Any) -> None:
    _emit(LogLevel.TRACE, args, sys._getframe(1))


def debug(*args: Any) -> None:
    _emit(LogLevel.DEBUG, args, sys._getframe(1))


def info(*args: Any) -> None:
    _emit(LogLevel.INFO, args, sys._getframe(1))


def warn(*args: Any) -> None:
    _emit(LogLevel.WARN, args, sys._getframe(1))


def error(*args: Any) -> None:
    _emit(LogLevel.ERROR, args, sys._getframe(1))


def fatal(*args: Any) -> None:
    _emit(LogLevel.FATAL, args, sys._getframe(1))


def syserr(*args: Any) -> None:
    """Write a fatal message naming the OSError being handled, if any."""
    filename, line, _ = _frame_location(sys._getframe(1))
    with Logger(LogLevel.FATAL, filename, line, sys_error=True) as stream:
        for arg in args:
            stream << arg


def raw(*args: Any) -> None:
    """Write ``args`` to the output with no header or trailing newline."""
    with RawLogger() as stream:
        for arg in args:
            stream << arg