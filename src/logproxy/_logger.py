"""Logger facade - the interface callers code against.

Concrete loggers (``logproxy.loggers``) only decide where the sanitized lines
go; gating, supplier resolution and listener broadcast happen here.
"""
from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from logproxy.clock import Clock, system_clock
from logproxy.levels import Level
from logproxy.listeners import LogItem, LogListeners, log_listeners

__all__ = ['Logger']

Message = Any | Callable[[], Any]


class Logger(ABC):
    """Logging facade.

    A message is any object (rendered with ``str``) or a zero-argument
    callable that produces one; the callable is only invoked when the call
    passes the level gate.

    Every logging method takes an optional keyword ``time``, the event time
    to record instead of reading the clock, for replaying or forwarding
    events that carry their own timestamp.

    All public logging methods call ``_output`` directly, so the number of
    frames between the caller and a backend is the same for each of them.
    """

    def __init__(
        self,
        name: str,
        level: Level = Level.INFO,
        clock: Clock = system_clock,
        listeners: LogListeners | None = None,
    ) -> None:
        self._name = name
        self._level = level
        self._clock = clock
        self._listeners = listeners if listeners is not None else log_listeners

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> Level:
        return self._level

    @level.setter
    def level(self, level: Level) -> None:
        self.set_level(level)

    def set_level(self, level: Level) -> None:
        if not isinstance(level, Level):
            raise TypeError(f'level must be a Level, not {type(level).__name__}')
        self._level = level

    @property
    def clock(self) -> Clock:
        return self._clock

    def is_enabled(self, level: Level) -> bool:
        return level >= self._level

    def is_trace_enabled(self) -> bool:
        return self.is_enabled(Level.TRACE)

    def is_debug_enabled(self) -> bool:
        return self.is_enabled(Level.DEBUG)

    def is_info_enabled(self) -> bool:
        return self.is_enabled(Level.INFO)

    def is_warn_enabled(self) -> bool:
        return self.is_enabled(Level.WARN)

    def is_error_enabled(self) -> bool:
        return self.is_enabled(Level.ERROR)

    def trace(self, message: Message, *, time: datetime | None = None) -> None:
        self._output(Level.TRACE, message, None, time)

    def debug(self, message: Message, *, time: datetime | None = None) -> None:
        self._output(Level.DEBUG, message, None, time)

    def info(self, message: Message, *, time: datetime | None = None) -> None:
        self._output(Level.INFO, message, None, time)

    def warn(self, message: Message, *, time: datetime | None = None) -> None:
        self._output(Level.WARN, message, None, time)

    def error(
        self,
        message: Message,
        cause: BaseException | None = None,
        *,
        time: datetime | None = None,
    ) -> None:
        self._output(Level.ERROR, message, cause, time)

    def exception(self, message: Message, *, time: datetime | None = None) -> None:
        """Log an error with the exception currently being handled as cause."""
        self._output(Level.ERROR, message, sys.exc_info()[1], time)

    def log(self, level: Level, message: Message, *, time: datetime | None = None) -> None:
        self._output(level, message, None, time)

    # Aliases
    warning = warn

    def _output(
        self,
        level: Level,
        message: Message,
        cause: BaseException | None,
        time: datetime | None,
    ) -> None:
        if not self.is_enabled(level):
            return
        if callable(message):
            message = message()
        text = str(message)
        if time is None:
            time = self._clock.now()
        if self._listeners.present():
            self._listeners.invoke_all(LogItem(time, self._name, level, text, cause))
        self._emit(time, level, text, cause)

    @abstractmethod
    def _emit(self, time: datetime, level: Level, text: str, cause: BaseException | None) -> None:
        """Write an event that has passed the gate."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._name!r}, {self._level.name})'
