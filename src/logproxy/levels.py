"""Severity levels shared by every logger and backend."""
from __future__ import annotations

from enum import IntEnum

from logproxy.exceptions import ConfigurationError

__all__ = ['Level', 'is_enabled_at']


class Level(IntEnum):
    """Ordered severity. The integer value is the rank used for gating.
    """
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @property
    def rank(self) -> int:
        return self.value

    @classmethod
    def parse(cls, name: str) -> Level:
        """Look up a level by name (case-insensitive, WARNING accepted).

        Raises ConfigurationError for anything else; the caller decides
        the fallback.
        """
        key = (name or '').strip().upper()
        if key == 'WARNING':
            key = 'WARN'
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(f'Invalid level - {name!r}') from None

    def __str__(self) -> str:
        return self.name


def is_enabled_at(threshold: Level, level: Level) -> bool:
    return level.rank >= threshold.rank
