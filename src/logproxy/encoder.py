"""Time, level and name encoding for the console formatters.

Every function writes text pieces to ``out``, a callable accepting a str
(``list.append``, ``io.StringIO.write``, a sink's accept method). Times are
encoded from integer arithmetic on milliseconds since midnight so that no
strftime/calendar formatting is done per log event.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo

from logproxy.levels import Level

__all__ = [
    'ANSI_FG_MAGENTA',
    'ANSI_FG_BLUE',
    'ANSI_FG_GREEN',
    'ANSI_FG_YELLOW',
    'ANSI_FG_RED',
    'ANSI_RESET',
    'Out',
    'get_day_millis',
    'output_time',
    'output_level',
    'output_level_coloured',
    'output_level5',
    'output_level5_coloured',
    'output_name_with_limit',
    'output_ansi_colour',
    'output_text',
]

Out = Callable[[str], object]

ANSI_FG_MAGENTA = 35
ANSI_FG_BLUE = 34
ANSI_FG_GREEN = 32
ANSI_FG_YELLOW = 33
ANSI_FG_RED = 31
ANSI_RESET = 0

LEVEL_COLOURS = {
    Level.TRACE: ANSI_FG_MAGENTA,
    Level.DEBUG: ANSI_FG_BLUE,
    Level.INFO: ANSI_FG_GREEN,
    Level.WARN: ANSI_FG_YELLOW,
    Level.ERROR: ANSI_FG_RED,
}

_TWO_DIGITS = tuple(f'{i:02d}' for i in range(100))
_MILLIS_PER_DAY = 86_400_000


def get_day_millis(time: datetime, zone: tzinfo | None = None) -> int:
    """Milliseconds since midnight of an aware datetime, in ``zone`` if given."""
    if zone is not None:
        time = time.astimezone(zone)
    seconds = (time.hour * 60 + time.minute) * 60 + time.second
    return seconds * 1000 + time.microsecond // 1000


def output_time(day_millis: int, out: Out) -> None:
    """Write ``hh:mm:ss.mmm``."""
    total_seconds, millis = divmod(day_millis % _MILLIS_PER_DAY, 1000)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)
    out(_TWO_DIGITS[hours])
    out(':')
    out(_TWO_DIGITS[minutes])
    out(':')
    out(_TWO_DIGITS[seconds])
    out('.')
    out(chr(48 + millis // 100))
    out(_TWO_DIGITS[millis % 100])


def output_text(text: str, out: Out) -> None:
    out(text)


def output_ansi_colour(code: int, out: Out) -> None:
    out('\x1b[')
    out(str(code))
    out('m')


def output_level(level: Level, out: Out) -> None:
    out(level.name)


def output_level_coloured(level: Level, out: Out) -> None:
    output_ansi_colour(LEVEL_COLOURS[level], out)
    out(level.name)
    output_ansi_colour(ANSI_RESET, out)


def output_level5(level: Level, out: Out) -> None:
    """Write the level name padded to 5 characters."""
    out(level.name)
    if level in {Level.INFO, Level.WARN}:
        out(' ')


def output_level5_coloured(level: Level, out: Out) -> None:
    """Coloured 5-character level; the padding sits inside the colour."""
    output_ansi_colour(LEVEL_COLOURS[level], out)
    output_level5(level, out)
    output_ansi_colour(ANSI_RESET, out)


def output_name_with_limit(limit: int, name: str, out: Out) -> None:
    """Write ``name``, or ``...`` and its tail when longer than ``limit``.

    Below a limit of 3 there is no room for ``...``; the last ``limit``
    characters are written instead.
    """
    if len(name) <= limit:
        out(name)
    elif limit < 3:
        out(name[len(name) - max(limit, 0):])
    else:
        out('...')
        out(name[len(name) - limit + 3:])
