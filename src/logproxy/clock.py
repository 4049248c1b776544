"""Clock protocol + implementations.

Loggers read the time from a clock so that tests can pin it.
"""
from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Protocol

__all__ = ['Clock', 'SystemClock', 'FixedClock', 'system_clock']


class Clock(Protocol):
    """Source of the current time as an aware datetime in the clock's zone."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock. With no zone, the local zone in effect at each call is used.
    """

    def __init__(self, zone: tzinfo | None = None) -> None:
        self.zone = zone

    def now(self) -> datetime:
        if self.zone is None:
            return datetime.now().astimezone()
        return datetime.now(self.zone)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SystemClock):
            return NotImplemented
        return self.zone == other.zone

    def __hash__(self) -> int:
        return hash((SystemClock, self.zone))

    def __repr__(self) -> str:
        return f'SystemClock(zone={self.zone!r})'


class FixedClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        if fixed.tzinfo is None:
            fixed = fixed.astimezone()
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)

    def __repr__(self) -> str:
        return f'FixedClock({self._fixed.isoformat()})'


system_clock = SystemClock()
