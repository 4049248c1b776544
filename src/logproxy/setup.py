"""Default factory lifecycle and logging helpers.
"""
from __future__ import annotations

import importlib
import threading
from collections.abc import Callable
from functools import wraps
from typing import Any

from logproxy import config as config_log
from logproxy._logger import Logger
from logproxy.exceptions import ConfigurationError
from logproxy.factory import DynamicLoggerFactory, LoggerFactory
from logproxy.levels import Level

__all__ = [
    'get_default_factory',
    'set_default_factory',
    'default_level',
    'set_level',
    'class_logger',
    'log_exception',
]

_SETUP_LOGGER_NAME = 'logproxy.setup'

_default_factory: LoggerFactory | None = None
_lock = threading.RLock()


def default_level() -> Level:
    """Level named by CONFIG_LOG_LEVEL, INFO when unset.

    Raises ConfigurationError when the override does not name a level.
    """
    if not config_log.log.level:
        return Level.INFO
    return Level.parse(config_log.log.level)


def _load_factory(path: str, level: Level) -> LoggerFactory:
    """Instantiate the factory class at dotted ``path`` with ``level``."""
    parts = path.rsplit('.', 1)
    if len(parts) != 2:
        raise ConfigurationError(f'Factory must be a dotted class path - {path!r}')
    module_name, class_name = parts
    module = importlib.import_module(module_name)
    factory_class = getattr(module, class_name)
    factory = factory_class(default_level=level)
    if not isinstance(factory, LoggerFactory):
        raise ConfigurationError(f'{path} is not a LoggerFactory')
    return factory


def _create_default_factory() -> LoggerFactory:
    level_error = None
    try:
        level = default_level()
    except ConfigurationError as exc:
        level, level_error = Level.INFO, exc

    factory = None
    factory_path = config_log.log.factory
    if factory_path:
        try:
            factory = _load_factory(factory_path, level)
        except Exception as exc:
            factory = DynamicLoggerFactory(level)
            factory.get_logger(_SETUP_LOGGER_NAME).error(
                f'Unable to instantiate LoggerFactory - {factory_path}', exc)
    if factory is None:
        factory = DynamicLoggerFactory(level)

    if level_error is not None:
        factory.get_logger(_SETUP_LOGGER_NAME).error(
            f'Invalid default Level - {config_log.log.level}', level_error)
    return factory


def get_default_factory() -> LoggerFactory:
    """Get the process-wide factory, creating it from the config on first use."""
    global _default_factory
    with _lock:
        if _default_factory is None:
            _default_factory = _create_default_factory()
        return _default_factory


def set_default_factory(factory: LoggerFactory | None) -> None:
    """Replace the process-wide factory. None recreates it on next use."""
    global _default_factory
    with _lock:
        _default_factory = factory


def set_level(level: Level | str) -> None:
    """Set the default factory's default level.

    Loggers created from then on use it; loggers already handed out keep
    their own level (use ``Logger.set_level`` for those).
    """
    if isinstance(level, str):
        level = Level.parse(level)
    get_default_factory().default_level = level


def class_logger(cls: type) -> type:
    """Class decorator adding a ``logger`` attribute named ``module.QualName``.
    """
    cls.logger = get_default_factory().get_logger(cls)
    return cls


def log_exception(logger: Logger) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that logs exceptions (with cause) and re-raises them.
    """
    def wrapper(fn: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(fn)
        def wrapped_fn(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                logger.error(str(exc), exc)
                raise
        return wrapped_fn
    return wrapper
