"""Classification and precedence of binary operators."""

from __future__ import annotations

ASSIGN_OPS = frozenset(
    {
        "=", "+=", "-=", "*=", "/=", "**=", "%=", "|=", "&=", "^=",
        "&&=", "||=", "<<=", ">>=", "??=",
    }
)

CALC_OPS = frozenset(
    {
        "+", "-", "*", "/", "**", "%", "|", "&", "^", "&&", "||",
        "<<", ">>", ">", ">=", "<", "<=", "==", "!=", "??",
    }
)

_PRIORITIES = {
    "||": 0,
    "&&": 1,
    ">": 2,
    ">=": 2,
    "<": 2,
    "<=": 2,
    "==": 3,
    "!=": 3,
    "??": 4,
    "&": 5,
    "|": 5,
    "^": 5,
    "<<": 6,
    ">>": 6,
    "+": 7,
    "-": 7,
    "*": 8,
    "/": 8,
    "%": 8,
    "**": 9,
}


def is_assign_op2(op: str) -> bool:
    """True for assignment operators such as ``=`` and ``+=``."""
    return op in ASSIGN_OPS


def is_calc_op2(op: str) -> bool:
    """True for binary calculation and comparison operators."""
    return op in CALC_OPS


def op2_priority(op: str) -> int:
    """Binding strength of a binary operator; higher binds tighter."""
    try:
        return _PRIORITIES[op]
    except KeyError:
        raise ValueError(f"unknown binary operator: {op!r}") from None