"""Small text helpers: word splitting, integer parsing, trimming and line reading."""

from __future__ import annotations

from collections.abc import Iterator
from typing import AnyStr, IO

BUFFER_SIZE = 42

_C_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty words."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does.

    Leading C whitespace is skipped, one optional sign is accepted, and
    parsing stops at the first character that is not an ASCII digit.
    A string with no digits yields 0.
    """
    rest = text.lstrip(_C_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if char not in _DIGITS:
            break
        value = value * 10 + (ord(char) - ord("0"))
    return sign * value


def trim(text: str, charset: str) -> str:
    """Remove every character found in ``charset`` from both ends of ``text``."""
    if charset is None or text is None:
        raise TypeError("text and charset must be strings")
    if not charset:
        return text
    return text.strip(charset)


def read_lines(stream: IO[AnyStr]) -> Iterator[AnyStr]:
    """Yield the lines of ``stream`` one at a time, each keeping its newline.

    The stream is read in chunks of ``BUFFER_SIZE``; a final line without a
    trailing newline is yielded as is, and nothing is yielded for an empty
    remainder. Works with both text and binary streams.
    """
    pending = None
    newline = None
    while True:
        chunk = stream.read(BUFFER_SIZE)
        if not chunk:
            break
        if pending is None:
            pending = chunk
            newline = b"\n" if isinstance(chunk, bytes) else "\n"
        else:
            pending += chunk
        while True:
            index = pending.find(newline)
            if index < 0:
                break
            yield pending[: index + 1]
            pending = pending[index + 1 :]
    if pending:
        yield pending