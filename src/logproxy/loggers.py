"""Concrete loggers - where sanitized lines end up."""
from __future__ import annotations

import sys
from datetime import datetime
from typing import IO, Any

from logproxy import config as config_log
from logproxy._backend import LoggerProxy
from logproxy._logger import Logger
from logproxy.clock import Clock, system_clock
from logproxy.encoder import get_day_millis, output_time
from logproxy.exceptions import LoggerError
from logproxy.formatters import format_cause
from logproxy.levels import Level
from logproxy.listeners import LogListeners
from logproxy.multiline import split_lines
from logproxy.sinks import StreamSink

__all__ = ['ProxyLogger', 'FormattingLogger', 'ConsoleLogger', 'NullLogger']


class ProxyLogger(Logger):
    """Logger bound to a backend through a LoggerProxy.

    The backend handle is opened once, here; a BackendError from ``open``
    propagates so the factory can fall back for this logger.
    """

    def __init__(
        self,
        name: str,
        level: Level,
        clock: Clock,
        proxy: LoggerProxy,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(name, level, clock, listeners)
        self._proxy = proxy
        self._handle = proxy.open(name)

    @property
    def proxy(self) -> LoggerProxy:
        return self._proxy

    @property
    def handle(self) -> Any:
        return self._handle

    def is_enabled(self, level: Level) -> bool:
        return super().is_enabled(level) and self._proxy.is_enabled(self._handle, level)

    def _emit(self, time: datetime, level: Level, text: str, cause: BaseException | None) -> None:
        if cause is None:
            for line in split_lines(text):
                self._proxy.emit(self._handle, level, line)
            return
        # the cause goes with the last line only
        previous = None
        for line in split_lines(text):
            if previous is not None:
                self._proxy.emit(self._handle, level, previous)
            previous = line
        self._proxy.emit_with_cause(self._handle, previous, cause)


class FormattingLogger(Logger):
    """Logger that renders through a StreamSink (formatter + stream)."""

    def __init__(
        self,
        name: str,
        sink: StreamSink,
        level: Level = Level.INFO,
        clock: Clock = system_clock,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(name, level, clock, listeners)
        self._sink = sink

    @property
    def sink(self) -> StreamSink:
        return self._sink

    @property
    def formatter(self):
        return self._sink.formatter

    def _emit(self, time: datetime, level: Level, text: str, cause: BaseException | None) -> None:
        self._sink.output(time, self, level, text, cause)


class ConsoleLogger(Logger):
    """Plain console logger: ``hh:mm:ss.mmm|name|LEVEL| line``.

    The separator defaults to ``|``. With no stream, ``sys.stdout`` is
    looked up at each write.
    """

    def __init__(
        self,
        name: str,
        level: Level = Level.INFO,
        clock: Clock = system_clock,
        stream: IO[str] | None = None,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(name, level, clock, listeners)
        self._stream = stream
        self.separator = config_log.console.separator or '|'

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, time: datetime, level: Level, text: str, cause: BaseException | None) -> None:
        day_millis = get_day_millis(time)
        self._output_multi(day_millis, level, text)
        if cause is not None:
            self._output_multi(day_millis, level, format_cause(cause))

    def _output_multi(self, day_millis: int, level: Level, text: str) -> None:
        sep = self.separator
        stream = self.stream
        for line in split_lines(text):
            parts: list[str] = []
            output_time(day_millis, parts.append)
            parts.extend((sep, self.name, sep, level.name, sep, ' ', line, '\n'))
            try:
                stream.write(''.join(parts))
                stream.flush()
            except (OSError, ValueError) as exc:
                raise LoggerError('Error writing ConsoleLogger') from exc


class NullLogger(Logger):
    """Logger that is never enabled; suppliers are never called."""

    def __init__(self, name: str, listeners: LogListeners | None = None) -> None:
        super().__init__(name, Level.ERROR, system_clock, listeners)

    def is_enabled(self, level: Level) -> bool:
        return False

    def _emit(self, time: datetime, level: Level, text: str, cause: BaseException | None) -> None:
        pass
