"""Logging facade over whichever backend the host process has.

Public API - users should only import from this module.

Usage:
    import logproxy

    # Logger named after the calling module
    log = logproxy.get_logger()
    log.info('Application started')

    # Named logger, explicit level
    db_log = logproxy.get_logger('database', logproxy.Level.DEBUG)
    db_log.debug(lambda: f'Query plan: {expensive_plan()}')

    # Event replayed with its own timestamp
    log.info('Imported record', time=record_time)

    # Error with cause
    try:
        connect()
    except OSError as exc:
        db_log.error('Connection failed', exc)

    # Module-level logging (logger named after the caller's module)
    logproxy.warn('Disk nearly full')

    # Capture events in tests
    with logproxy.LogList() as log_list:
        log.info('Hello')
    assert log_list.to_list()[0].text == 'Hello'

The backend (loguru, structlog, configured stdlib logging, or the built-in
console output) is picked on first use; see logproxy._backend.
"""
from datetime import datetime

from logproxy._logger import Logger
from logproxy.clock import Clock, FixedClock, SystemClock, system_clock
from logproxy.exceptions import BackendError, ConfigurationError, LoggerError
from logproxy.factory import ConsoleLoggerFactory, DynamicLoggerFactory
from logproxy.factory import FormattingLoggerFactory, LoggerFactory
from logproxy.factory import NullLoggerFactory, logger_name_for
from logproxy.formatters import BasicFormatter
from logproxy.levels import Level
from logproxy.listeners import LogItem, LogList, LogListener, LogListeners
from logproxy.listeners import log_listeners
from logproxy.loggers import ConsoleLogger, FormattingLogger, NullLogger
from logproxy.loggers import ProxyLogger
from logproxy.multiline import split_lines
from logproxy.setup import class_logger, get_default_factory, log_exception
from logproxy.setup import set_default_factory, set_level
from logproxy.sinks import StreamSink


def get_logger(name: str | type | None = None, level: Level | None = None,
               clock: Clock | None = None) -> Logger:
    """Get a logger from the default factory.

    Args:
        name: Logger name, or a class (named ``module.QualName``); defaults
              to the calling module's ``__name__``
        level: Threshold, defaults to the factory's default level
        clock: Time source, defaults to the factory's default clock

    Returns
        Logger instance, cached per name

    Examples
        >>> log = get_logger('mymodule')
        >>> log.info('Hello')
    """
    return get_default_factory().get_logger(logger_name_for(name), level, clock)


def _get_module_logger() -> Logger:
    """Get the logger for the module calling a module-level function."""
    return get_default_factory().get_logger(logger_name_for(None))


# Module-level convenience functions
def trace(message, *, time: datetime | None = None) -> None:
    """Log a trace message."""
    _get_module_logger().trace(message, time=time)


def debug(message, *, time: datetime | None = None) -> None:
    """Log a debug message."""
    _get_module_logger().debug(message, time=time)


def info(message, *, time: datetime | None = None) -> None:
    """Log an info message."""
    _get_module_logger().info(message, time=time)


def warn(message, *, time: datetime | None = None) -> None:
    """Log a warning message."""
    _get_module_logger().warn(message, time=time)


def error(message, cause: BaseException | None = None, *, time: datetime | None = None) -> None:
    """Log an error message, optionally with its cause."""
    _get_module_logger().error(message, cause, time=time)


def exception(message, *, time: datetime | None = None) -> None:
    """Log an error message with the exception being handled."""
    _get_module_logger().exception(message, time=time)


# Aliases
warning = warn


__all__ = [
    # Configuration
    'get_default_factory',
    'set_default_factory',
    'set_level',
    'Level',
    # Logger access
    'get_logger',
    'Logger',
    'LoggerFactory',
    'DynamicLoggerFactory',
    'FormattingLoggerFactory',
    'ConsoleLoggerFactory',
    'NullLoggerFactory',
    'ProxyLogger',
    'FormattingLogger',
    'ConsoleLogger',
    'NullLogger',
    # Logging methods
    'trace',
    'debug',
    'info',
    'warn',
    'warning',
    'error',
    'exception',
    # Output
    'BasicFormatter',
    'StreamSink',
    'split_lines',
    # Time
    'Clock',
    'SystemClock',
    'FixedClock',
    'system_clock',
    # Listeners
    'LogItem',
    'LogListener',
    'LogListeners',
    'LogList',
    'log_listeners',
    # Errors
    'LoggerError',
    'ConfigurationError',
    'BackendError',
    # Utilities
    'class_logger',
    'log_exception',
]
