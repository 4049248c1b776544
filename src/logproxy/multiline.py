"""Multi-line message sanitizer.

A message may come from anywhere, including an attacker. Before it reaches
a line-oriented log stream it is split into lines that cannot carry line
breaks or control characters, so a single log call can never produce
something that looks like a second, fabricated log record.
"""
from __future__ import annotations

from collections.abc import Iterator

__all__ = ['TAB_WIDTH', 'split_lines', 'is_plain', 'escape_char']

TAB_WIDTH = 4

_BREAKS = '\n\r'


def is_plain(text: str) -> bool:
    """True when every character is printable ASCII (0x20 to 0x7E)."""
    return text.isascii() and text.isprintable()


def escape_char(ch: str) -> str:
    """Render a character as ``\\uXXXX``, lowercase hex, always 4 digits.

    Characters outside the BMP become their UTF-16 surrogate pair.
    """
    code = ord(ch)
    if code > 0xFFFF:
        code -= 0x10000
        return f'\\u{0xD800 + (code >> 10):04x}\\u{0xDC00 + (code & 0x3FF):04x}'
    return f'\\u{code:04x}'


def _trimmed(line: list[str]) -> str:
    return ''.join(line).rstrip(' ')


def split_lines(text: str) -> Iterator[str]:
    """Yield the safe lines of ``text``.

    - ``\\n``, ``\\r``, ``\\r\\n`` and ``\\n\\r`` each count as one break;
      a break at the very end does not start another line
    - tabs expand to the next multiple of TAB_WIDTH
    - other control characters and anything from 0x7F up are escaped
    - trailing spaces are trimmed

    Empty text yields one empty line.
    """
    if not text or (is_plain(text) and text[-1] != ' '):
        yield text
        return
    line: list[str] = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        i += 1
        if ch in _BREAKS:
            yield _trimmed(line)
            line = []
            if i < n and text[i] in _BREAKS and text[i] != ch:
                i += 1
            if i == n:
                return
        elif ' ' <= ch < '\x7f':
            line.append(ch)
        elif ch == '\t':
            line.extend(' ' * (TAB_WIDTH - len(line) % TAB_WIDTH))
        else:
            line.extend(escape_char(ch))
    yield _trimmed(line)
