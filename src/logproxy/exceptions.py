"""Exceptions raised by the logging facade."""
from __future__ import annotations

__all__ = ['LoggerError', 'ConfigurationError', 'BackendError']


class LoggerError(RuntimeError):
    """Base class for errors raised from a log call or logger lookup."""


class ConfigurationError(LoggerError):
    """The caller misused the API (bad logger name, unknown level name)."""


class BackendError(LoggerError):
    """A present backend failed while opening a logger or emitting a line.
    """

    def __init__(self, backend: str, message: str | None = None) -> None:
        self.backend = backend
        super().__init__(message or f'Error accessing {backend} logger')
