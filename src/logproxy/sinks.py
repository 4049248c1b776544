"""Sinks - write formatted events to a text stream."""
from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import IO, TYPE_CHECKING

from libb import stream_is_tty
from logproxy.exceptions import LoggerError
from logproxy.formatters import BasicFormatter, LogFormatter
from logproxy.levels import Level

if TYPE_CHECKING:
    from logproxy._logger import Logger

if sys.platform == 'win32':
    try:
        import colorama
        colorama.just_fix_windows_console()
    except ImportError:
        pass

__all__ = ['StreamSink']


class StreamSink:
    """Formats events with a LogFormatter and writes them to a stream.

    With no stream, ``sys.stdout`` is looked up at each write. Output is
    written one complete line at a time and an event's lines are written
    under a lock, so events from different threads do not interleave.
    """

    def __init__(self, formatter: LogFormatter, stream: IO[str] | None = None) -> None:
        self.formatter = formatter
        self._stream = stream
        self._lock = threading.Lock()
        self._pending: list[str] = []

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def output(
        self,
        time: datetime,
        logger: Logger,
        level: Level,
        text: str,
        cause: BaseException | None,
    ) -> None:
        with self._lock:
            try:
                self.formatter.format(time, logger, level, text, cause, self._accept)
            finally:
                self._pending.clear()

    def _accept(self, piece: str) -> None:
        self._pending.append(piece)
        if piece == '\n':
            line = ''.join(self._pending)
            self._pending.clear()
            stream = self.stream
            try:
                stream.write(line)
                stream.flush()
            except (OSError, ValueError) as exc:
                raise LoggerError(f'Error writing {type(self).__name__}') from exc

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()

    @classmethod
    def basic(cls, stream: IO[str] | None = None) -> StreamSink:
        """Sink with a BasicFormatter, coloured when the stream is a TTY."""
        target = stream if stream is not None else sys.stdout
        return cls(BasicFormatter(coloured_level=stream_is_tty(target)), stream)
