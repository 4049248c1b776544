"""Listener broadcast - observers of every emitted log event.

Intended for tests: register a listener (``with LogList() as log_list:``)
and every log call that passes its gate is reported to it, whichever backend
the logger is bound to.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, tzinfo

from logproxy.encoder import get_day_millis, output_time
from logproxy.levels import Level

__all__ = ['LogItem', 'LogListener', 'LogListeners', 'LogList', 'log_listeners']


@dataclass(frozen=True)
class LogItem:
    """One log event as seen by listeners, before line splitting."""
    time: datetime
    name: str
    level: Level
    text: str
    cause: BaseException | None = None

    def to_string(self, zone: tzinfo | None = None) -> str:
        """Render as ``hh:mm:ss.mmm name LEVEL text``."""
        parts: list[str] = []
        output_time(get_day_millis(self.time, zone), parts.append)
        parts.extend((' ', self.name, ' ', self.level.name, ' ', self.text))
        return ''.join(parts)

    def __str__(self) -> str:
        return self.to_string()


class LogListeners:
    """Registry of listeners.

    Mutation happens under a lock. ``invoke_all`` snapshots the listeners
    under the lock and calls them outside it, in registration order, on the
    calling thread.
    """

    def __init__(self) -> None:
        self._listeners: list[LogListener] = []
        self._lock = threading.Lock()

    def add(self, listener: LogListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove(self, listener: LogListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    def present(self) -> bool:
        """Unlocked size check, used to skip building a LogItem."""
        return len(self._listeners) > 0

    def invoke_all(self, item: LogItem) -> None:
        single = None
        snapshot: tuple[LogListener, ...] = ()
        with self._lock:
            n = len(self._listeners)
            if n == 1:
                single = self._listeners[0]
            elif n > 1:
                snapshot = tuple(self._listeners)
        if single is not None:
            single.receive(item)
            return
        for listener in snapshot:
            listener.receive(item)

    def __len__(self) -> int:
        return len(self._listeners)


log_listeners = LogListeners()


class LogListener(ABC):
    """Observer of log events.

    Used as a context manager it registers itself on entry and removes
    itself on exit.
    """

    def __init__(self, registry: LogListeners | None = None) -> None:
        self.registry = registry if registry is not None else log_listeners

    @abstractmethod
    def receive(self, item: LogItem) -> None:
        ...

    def open(self) -> None:
        self.registry.add(self)

    def close(self) -> None:
        self.registry.remove(self)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class LogList(LogListener):
    """Listener that keeps every item it receives."""

    def __init__(self, registry: LogListeners | None = None) -> None:
        super().__init__(registry)
        self._items: list[LogItem] = []
        self._items_lock = threading.Lock()

    def receive(self, item: LogItem) -> None:
        with self._items_lock:
            self._items.append(item)

    def to_list(self) -> list[LogItem]:
        with self._items_lock:
            return list(self._items)

    def __iter__(self) -> Iterator[LogItem]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self._items)
