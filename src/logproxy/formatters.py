"""Formatters for the built-in console output."""
from __future__ import annotations

import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from logproxy import config as config_log
from logproxy.encoder import Out, get_day_millis, output_level5
from logproxy.encoder import output_level5_coloured, output_name_with_limit
from logproxy.encoder import output_time
from logproxy.levels import Level
from logproxy.multiline import split_lines

if TYPE_CHECKING:
    from logproxy._logger import Logger

__all__ = ['LogFormatter', 'BasicFormatter', 'format_cause']

MIN_NAME_LENGTH_LIMIT = 8


def format_cause(cause: BaseException) -> str:
    """Traceback text of an exception."""
    return ''.join(traceback.format_exception(type(cause), cause, cause.__traceback__))


class LogFormatter(Protocol):
    """Renders one event as complete lines (each ending in ``\\n``) to ``out``."""

    def format(
        self,
        time: datetime,
        logger: Logger,
        level: Level,
        text: str,
        cause: BaseException | None,
        out: Out,
    ) -> None: ...


class BasicFormatter:
    """``hh:mm:ss.mmm LEVEL name: line`` per sanitized line.

    The level is padded to 5 characters and optionally ANSI coloured. Names
    longer than ``name_length_limit`` are shortened from the left. A cause
    is written as its traceback, one line per traceback line, with the same
    prefix.
    """

    default_name_length_limit = 40

    def __init__(self, coloured_level: bool = True, name_length_limit: int | None = None) -> None:
        self.coloured_level = coloured_level
        if name_length_limit is None:
            name_length_limit = config_log.console.name_limit or self.default_name_length_limit
        self.name_length_limit = name_length_limit

    @property
    def name_length_limit(self) -> int:
        return self._name_length_limit

    @name_length_limit.setter
    def name_length_limit(self, limit: int) -> None:
        self._name_length_limit = max(limit, MIN_NAME_LENGTH_LIMIT)

    def format(
        self,
        time: datetime,
        logger: Logger,
        level: Level,
        text: str,
        cause: BaseException | None,
        out: Out,
    ) -> None:
        day_millis = get_day_millis(time)
        self._output_message(day_millis, logger.name, level, text, out)
        if cause is not None:
            self._output_message(day_millis, logger.name, level, format_cause(cause), out)

    def _output_message(self, day_millis: int, name: str, level: Level, text: str, out: Out) -> None:
        for line in split_lines(text):
            output_time(day_millis, out)
            out(' ')
            if self.coloured_level:
                output_level5_coloured(level, out)
            else:
                output_level5(level, out)
            out(' ')
            output_name_with_limit(self._name_length_limit, name, out)
            out(': ')
            out(line)
            out('\n')
