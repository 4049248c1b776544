"""Backend adapters - internal implementation detail.

Each adapter drives one logging implementation behind the LoggerProxy
capability. Adapters import their backend in ``__init__``, so constructing
one is also the availability probe: an ImportError means the backend is not
installed. To support another backend, add an adapter here and a candidate
to DEFAULT_CANDIDATES.
"""
from __future__ import annotations

import logging
import logging.config
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Any

from logproxy import config as config_log
from logproxy.exceptions import BackendError
from logproxy.levels import Level

__all__ = [
    'LoggerProxy',
    'LoguruProxy',
    'StructlogProxy',
    'StdlibProxy',
    'BackendResolver',
    'configured_stdlib_proxy',
    'get_resolver',
]

# Frames between a proxy method and the facade caller:
# proxy method <- Logger._emit <- Logger._output <- Logger.info <- caller
_CALLER_DEPTH = 4

TRACE_LEVEL_NO = 5


@contextmanager
def _backend_errors(backend: str) -> Iterator[None]:
    """Re-raise anything a backend throws as BackendError."""
    try:
        yield
    except BackendError:
        raise
    except Exception as exc:
        raise BackendError(backend) from exc


class LoggerProxy(ABC):
    """Uniform capability over one backend.

    ``open`` returns the backend's own logger object (the handle); the other
    methods take that handle back. Lines passed in have already been through
    the sanitizer.
    """

    name: str = 'backend'

    @abstractmethod
    def open(self, name: str) -> Any:
        ...

    @abstractmethod
    def is_enabled(self, handle: Any, level: Level) -> bool:
        ...

    @abstractmethod
    def emit(self, handle: Any, level: Level, line: str) -> None:
        ...

    @abstractmethod
    def emit_with_cause(self, handle: Any, line: str, cause: BaseException) -> None:
        """Emit an ERROR line with an attached exception."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class LoguruProxy(LoggerProxy):
    """loguru backend.

    Levels map one to one (WARN is loguru's WARNING); loguru's SUCCESS and
    CRITICAL tiers are never used. loguru has no public per-logger threshold,
    so ``is_enabled`` is always true and filtering is left to its sinks. The
    facade's own threshold is then the only gate: when every loguru sink sits
    above it, suppliers are still called and listeners still receive the
    event, and the sinks drop the lines. Raise the logger's level to match
    the sinks to avoid that work.
    """

    name = 'loguru'

    def __init__(self) -> None:
        from loguru import logger as _loguru
        self._loguru = _loguru
        self._levels = {
            Level.TRACE: 'TRACE',
            Level.DEBUG: 'DEBUG',
            Level.INFO: 'INFO',
            Level.WARN: 'WARNING',
            Level.ERROR: 'ERROR',
        }

    def open(self, name: str) -> Any:
        with _backend_errors(self.name):
            return self._loguru.bind(logger_name=name)

    def is_enabled(self, handle: Any, level: Level) -> bool:
        return True

    def emit(self, handle: Any, level: Level, line: str) -> None:
        with _backend_errors(self.name):
            handle.opt(depth=_CALLER_DEPTH).log(self._levels[level], line)

    def emit_with_cause(self, handle: Any, line: str, cause: BaseException) -> None:
        with _backend_errors(self.name):
            handle.opt(depth=_CALLER_DEPTH, exception=cause).log('ERROR', line)


class StructlogProxy(LoggerProxy):
    """structlog backend.

    structlog has no trace tier: TRACE and DEBUG both go to ``debug``. The
    enabled check uses the bound logger's ``is_enabled_for`` when the
    configured wrapper class has one, and is otherwise true.
    """

    name = 'structlog'

    _methods = {
        Level.TRACE: 'debug',
        Level.DEBUG: 'debug',
        Level.INFO: 'info',
        Level.WARN: 'warning',
        Level.ERROR: 'error',
    }
    _level_nos = {
        Level.TRACE: logging.DEBUG,
        Level.DEBUG: logging.DEBUG,
        Level.INFO: logging.INFO,
        Level.WARN: logging.WARNING,
        Level.ERROR: logging.ERROR,
    }

    def __init__(self) -> None:
        import structlog
        self._get_logger = structlog.get_logger

    def open(self, name: str) -> Any:
        with _backend_errors(self.name):
            return self._get_logger(name, logger_name=name)

    def is_enabled(self, handle: Any, level: Level) -> bool:
        with _backend_errors(self.name):
            check = getattr(handle, 'is_enabled_for', None)
            return True if check is None else bool(check(self._level_nos[level]))

    def emit(self, handle: Any, level: Level, line: str) -> None:
        with _backend_errors(self.name):
            getattr(handle, self._methods[level])(line)

    def emit_with_cause(self, handle: Any, line: str, cause: BaseException) -> None:
        with _backend_errors(self.name):
            handle.error(line, exc_info=cause)


class StdlibProxy(LoggerProxy):
    """Standard library ``logging`` backend.

    TRACE has no stdlib level; it is sent at level 5, registered under the
    name TRACE unless something already named that level.
    """

    name = 'logging'

    def __init__(self) -> None:
        if logging.getLevelName(TRACE_LEVEL_NO) == f'Level {TRACE_LEVEL_NO}':
            logging.addLevelName(TRACE_LEVEL_NO, 'TRACE')
        self._levels = {
            Level.TRACE: TRACE_LEVEL_NO,
            Level.DEBUG: logging.DEBUG,
            Level.INFO: logging.INFO,
            Level.WARN: logging.WARNING,
            Level.ERROR: logging.ERROR,
        }

    def open(self, name: str) -> logging.Logger:
        with _backend_errors(self.name):
            return logging.getLogger(name)

    def is_enabled(self, handle: logging.Logger, level: Level) -> bool:
        with _backend_errors(self.name):
            return handle.isEnabledFor(self._levels[level])

    def emit(self, handle: logging.Logger, level: Level, line: str) -> None:
        with _backend_errors(self.name):
            handle.log(self._levels[level], line, stacklevel=_CALLER_DEPTH + 1)

    def emit_with_cause(self, handle: logging.Logger, line: str, cause: BaseException) -> None:
        with _backend_errors(self.name):
            handle.log(logging.ERROR, line, exc_info=cause, stacklevel=_CALLER_DEPTH + 1)


def configured_stdlib_proxy() -> StdlibProxy | None:
    """Stdlib proxy if stdlib logging has been set up, else None.

    A logging config file named by CONFIG_LOG_CONFIG_FILE is applied when it
    exists; otherwise the root logger must already have handlers.
    """
    config_file = config_log.log.config_file
    if config_file and Path(config_file).is_file():
        logging.config.fileConfig(config_file, disable_existing_loggers=False)
        return StdlibProxy()
    if logging.root.handlers:
        return StdlibProxy()
    return None


Candidate = Callable[[], LoggerProxy | None]

DEFAULT_CANDIDATES: tuple[Candidate, ...] = (
    LoguruProxy,
    StructlogProxy,
    configured_stdlib_proxy,
)


class BackendResolver:
    """Picks the proxy to use, once, on first access.

    Candidates are tried in order. One that returns None or raises is
    skipped: a missing optional backend is not an error. ``proxy`` is None
    when nothing is available, meaning the console fallback.
    """

    def __init__(self, candidates: Sequence[Candidate] | None = None) -> None:
        self._candidates = tuple(DEFAULT_CANDIDATES if candidates is None else candidates)
        self._lock = threading.Lock()
        self._resolved = False
        self._proxy: LoggerProxy | None = None

    @property
    def proxy(self) -> LoggerProxy | None:
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    self._proxy = self._probe()
                    self._resolved = True
        return self._proxy

    def _probe(self) -> LoggerProxy | None:
        for candidate in self._candidates:
            with suppress(Exception):
                proxy = candidate()
                if proxy is not None:
                    return proxy
        return None

    def reset(self) -> None:
        """Forget the resolved proxy so the next access probes again."""
        with self._lock:
            self._resolved = False
            self._proxy = None


# Singleton resolver instance
_resolver: BackendResolver | None = None
_resolver_lock = threading.Lock()


def get_resolver() -> BackendResolver:
    """Get the process-wide resolver."""
    global _resolver
    with _resolver_lock:
        if _resolver is None:
            _resolver = BackendResolver()
        return _resolver
