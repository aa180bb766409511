"""A small printf supporting the conversions c, s, p, d, i, u, x, X and %."""

from __future__ import annotations

import operator
import sys
from collections.abc import Callable, Iterator
from typing import Any

_HEX_LOWER = "0123456789abcdef"
_HEX_UPPER = "0123456789ABCDEF"
_UINT_MASK = 0xFFFFFFFF
_ULONG_MASK = 0xFFFFFFFFFFFFFFFF


def format_hex(value: int, uppercase: bool = False) -> str:
    """Render ``value`` as an unsigned 64-bit hexadecimal number without prefix."""
    number = operator.index(value) & _ULONG_MASK
    if number == 0:
        return "0"
    digits = _HEX_UPPER if uppercase else _HEX_LOWER
    out = []
    while number:
        number, rem = divmod(number, 16)
        out.append(digits[rem])
    return "".join(reversed(out))


def _as_int32(value: Any) -> int:
    number = operator.index(value) & _UINT_MASK
    return number - (1 << 32) if number >= (1 << 31) else number


def _as_uint32(value: Any) -> int:
    return operator.index(value) & _UINT_MASK


def _char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c expects a single character")
        return value
    return chr(operator.index(value) & 0xFF)


def _string(value: Any) -> str:
    return "(null)" if value is None else str(value)


def _pointer(value: Any) -> str:
    if value is None:
        return "(nil)"
    address = value if isinstance(value, int) else id(value)
    if address == 0:
        return "(nil)"
    return "0x" + format_hex(address)


_Handler = Callable[[Any], str]

_HANDLERS: dict[str, _Handler] = {
    "c": _char,
    "s": _string,
    "p": _pointer,
    "d": lambda v: str(_as_int32(v)),
    "i": lambda v: str(_as_int32(v)),
    "u": lambda v: str(_as_uint32(v)),
    "x": lambda v: format_hex(_as_uint32(v)),
    "X": lambda v: format_hex(_as_uint32(v), uppercase=True),
}


def _next_arg(args: Iterator[Any], conversion: str) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{conversion}") from None


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``fmt`` with ``args`` and return the resulting text.

    Unknown conversions are emitted literally, percent sign included; a lone
    trailing percent sign is emitted as is. Missing arguments raise TypeError.
    """
    pieces: list[str] = []
    remaining = iter(args)
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            pieces.append(char)
            continue
        conversion = next(chars, None)
        if conversion is None:
            pieces.append("%")
            break
        if conversion == "%":
            pieces.append("%")
            continue
        handler = _HANDLERS.get(conversion)
        if handler is None:
            pieces.append("%" + conversion)
            continue
        pieces.append(handler(_next_arg(remaining, conversion)))
    return "".join(pieces)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its length."""
    text = sprintf(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)