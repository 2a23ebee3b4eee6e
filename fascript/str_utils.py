"""Decoding of quoted string literals."""

from __future__ import annotations

import enum

_HEX_DIGITS = "0123456789ABCDEF0123456789abcdef"

_ESCAPES = {
    "\\": "\\",
    "r": "\r",
    "n": "\n",
    "t": "\t",
    "0": "\0",
}


class _State(enum.Enum):
    NORMAL = enum.auto()
    ESCAPE = enum.auto()
    HEX1 = enum.auto()
    HEX2 = enum.auto()


def _hex_value(ch: str) -> int:
    index = _HEX_DIGITS.find(ch)
    if index < 0:
        raise ValueError(f"invalid hex digit in escape: {ch!r}")
    return index % 16


def code_to_str(code: str) -> str:
    """Strip the quotes from a string literal and decode its escapes.

    Once an escape has been seen, later characters keep being read in
    escape mode until a ``\\x`` sequence completes.
    """
    if len(code) < 2:
        raise ValueError("string literal must be enclosed in quotes")
    out: list[str] = []
    state = _State.NORMAL
    hex_value = 0
    for ch in code[1:-1]:
        if state is _State.NORMAL and ch == "\\":
            state = _State.ESCAPE
        elif state is _State.ESCAPE and ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif state is _State.ESCAPE and ch == "x":
            state = _State.HEX1
        elif state is _State.HEX1:
            hex_value = _hex_value(ch) * 16
            state = _State.HEX2
        elif state is _State.HEX2:
            hex_value += _hex_value(ch)
            out.append(chr(hex_value))
            state = _State.NORMAL
        else:
            out.append(ch)
    return "".join(out)