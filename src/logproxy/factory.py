"""Logger factories - name validation, caching and backend selection."""
from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from typing import IO, Generic, TypeVar

from logproxy._backend import BackendResolver, get_resolver
from logproxy._logger import Logger
from logproxy.clock import Clock, system_clock
from logproxy.exceptions import BackendError, ConfigurationError
from logproxy.levels import Level
from logproxy.listeners import LogListeners, log_listeners
from logproxy.loggers import ConsoleLogger, FormattingLogger, NullLogger
from logproxy.loggers import ProxyLogger
from logproxy.sinks import StreamSink

__all__ = [
    'LoggerFactory',
    'DynamicLoggerFactory',
    'FormattingLoggerFactory',
    'ConsoleLoggerFactory',
    'NullLoggerFactory',
    'validate_logger_name',
    'logger_name_for',
]

L = TypeVar('L', bound=Logger)

_PACKAGE = __name__.partition('.')[0]


def validate_logger_name(name: str) -> str:
    """Return ``name`` if usable as a logger name, else raise ConfigurationError.

    A name must be a non-empty string of printable ASCII characters.
    """
    if not isinstance(name, str):
        raise ConfigurationError(f'Logger name must be a string, not {type(name).__name__}')
    if not name:
        raise ConfigurationError('Logger name must not be empty')
    if not (name.isascii() and name.isprintable()):
        raise ConfigurationError(f'Illegal character in logger name - {name!r}')
    return name


def _caller_module() -> str:
    """``__name__`` of the first calling module outside this package."""
    frame = sys._getframe(1)
    while frame is not None:
        module = frame.f_globals.get('__name__', '')
        if module != _PACKAGE and not module.startswith(_PACKAGE + '.'):
            return module
        frame = frame.f_back
    return '__main__'


def logger_name_for(source: str | type | None) -> str:
    """Logger name for a string, a class (``module.QualName``) or the caller."""
    if source is None:
        return _caller_module()
    if isinstance(source, type):
        return f'{source.__module__}.{source.__qualname__}'
    return source


class LoggerFactory(ABC, Generic[L]):
    """Base factory keeping one logger per name.

    A cached logger is reused only while its level and clock match the
    request; otherwise a new logger replaces it in the cache.
    """

    def __init__(
        self,
        default_level: Level = Level.INFO,
        default_clock: Clock = system_clock,
        listeners: LogListeners | None = None,
    ) -> None:
        self.default_level = default_level
        self.default_clock = default_clock
        self.listeners = listeners if listeners is not None else log_listeners
        self._cache: dict[str, L] = {}
        self._lock = threading.Lock()

    def get_logger(
        self,
        name: str | type | None = None,
        level: Level | None = None,
        clock: Clock | None = None,
    ) -> L:
        name = validate_logger_name(logger_name_for(name))
        if level is None:
            level = self.default_level
        if clock is None:
            clock = self.default_clock
        logger = self._get_cached(name)
        if logger is not None and self._matches(logger, level, clock):
            return logger
        logger = self._create_logger(name, level, clock)
        self._put_cached(name, logger)
        return logger

    def _matches(self, logger: L, level: Level, clock: Clock) -> bool:
        return logger.level == level and logger.clock == clock

    def _get_cached(self, name: str) -> L | None:
        with self._lock:
            return self._cache.get(name)

    def _put_cached(self, name: str, logger: L) -> None:
        with self._lock:
            self._cache[name] = logger

    def clear(self) -> None:
        """Drop every cached logger."""
        with self._lock:
            self._cache.clear()

    @abstractmethod
    def _create_logger(self, name: str, level: Level, clock: Clock) -> L:
        ...


class FormattingLoggerFactory(LoggerFactory[FormattingLogger]):
    """Factory for loggers sharing one StreamSink."""

    def __init__(
        self,
        sink: StreamSink,
        default_level: Level = Level.INFO,
        default_clock: Clock = system_clock,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(default_level, default_clock, listeners)
        self.sink = sink

    def _create_logger(self, name: str, level: Level, clock: Clock) -> FormattingLogger:
        return FormattingLogger(name, self.sink, level, clock, self.listeners)

    @classmethod
    def basic(cls, stream: IO[str] | None = None, **kwargs) -> FormattingLoggerFactory:
        """Factory writing ``hh:mm:ss.mmm LEVEL name: text`` to ``stream``."""
        return cls(StreamSink.basic(stream), **kwargs)


class ConsoleLoggerFactory(LoggerFactory[ConsoleLogger]):
    """Factory for ConsoleLoggers writing to one stream (stdout by default)."""

    def __init__(
        self,
        default_level: Level = Level.INFO,
        default_clock: Clock = system_clock,
        stream: IO[str] | None = None,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(default_level, default_clock, listeners)
        self.stream = stream

    def _create_logger(self, name: str, level: Level, clock: Clock) -> ConsoleLogger:
        return ConsoleLogger(name, level, clock, self.stream, self.listeners)


class NullLoggerFactory(LoggerFactory[NullLogger]):
    """Factory for loggers that output nothing."""

    def _matches(self, logger: NullLogger, level: Level, clock: Clock) -> bool:
        return True

    def _create_logger(self, name: str, level: Level, clock: Clock) -> NullLogger:
        return NullLogger(name, self.listeners)


class DynamicLoggerFactory(LoggerFactory[Logger]):
    """Factory driving whichever backend the resolver picked.

    With no backend, or when the backend cannot open a logger for a name,
    loggers come from a basic FormattingLoggerFactory writing to stdout.
    The fallback applies to that logger only.
    """

    def __init__(
        self,
        default_level: Level = Level.INFO,
        default_clock: Clock = system_clock,
        resolver: BackendResolver | None = None,
        listeners: LogListeners | None = None,
    ) -> None:
        super().__init__(default_level, default_clock, listeners)
        self._resolver = resolver
        self._fallback: FormattingLoggerFactory | None = None
        self._fallback_lock = threading.Lock()

    @property
    def resolver(self) -> BackendResolver:
        if self._resolver is None:
            self._resolver = get_resolver()
        return self._resolver

    def _create_logger(self, name: str, level: Level, clock: Clock) -> Logger:
        proxy = self.resolver.proxy
        if proxy is not None:
            try:
                return ProxyLogger(name, level, clock, proxy, self.listeners)
            except BackendError as exc:
                logger = self.fallback_factory.get_logger(name, level, clock)
                logger.warn(f'{proxy.name} could not open logger {name}, using console output ({exc.__cause__!r})')
                return logger
        return self.fallback_factory.get_logger(name, level, clock)

    @property
    def fallback_factory(self) -> FormattingLoggerFactory:
        with self._fallback_lock:
            if self._fallback is None:
                self._fallback = FormattingLoggerFactory.basic(listeners=self.listeners)
            return self._fallback
