"""Evaluation of binary operators on script values."""

from __future__ import annotations

import math

from fascript.types import TypeKind
from fascript.values import FasValue, ValueKind

_FLOAT_EPSILON = 0.000001
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


def _bool(value: bool) -> FasValue:
    return FasValue(ValueKind.BOOL, value)


def _unknown(op: str, what: str) -> ValueError:
    return ValueError(f"operator {op!r} is not defined for {what}")


def _check_i64(n: int) -> int:
    if not _I64_MIN <= n <= _I64_MAX:
        raise OverflowError("integer overflow")
    return n


def _wrap_i64(n: int) -> int:
    n &= (1 << 64) - 1
    return n - (1 << 64) if n >> 63 else n


def _trunc_div(left: int, right: int) -> int:
    if right == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(left) // abs(right)
    return _check_i64(quotient if (left < 0) == (right < 0) else -quotient)


def _float_div(left: float, right: float) -> float:
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(1.0, left) * math.copysign(1.0, right) * math.inf


def _powf(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        return math.inf if base == 0 else math.nan


def _calc_array(left: list, op: str, right: list) -> FasValue:
    if op == "+":
        left = left + right
    elif op in ("-", "&"):
        left = [item for item in left if item not in right]
    elif op == "|":
        left = left + [item for item in right if item not in left]
    elif op == "^":
        left = [item for item in left if item not in right]
        left = left + [item for item in right if item not in left]
    elif op == "==":
        return _bool(left == right)
    elif op == "!=":
        return _bool(left != right)
    elif op == "??":
        return FasValue(ValueKind.ARRAY, left if left else right)
    return FasValue(ValueKind.ARRAY, left)


def calc_bool(left: bool, op: str, right: bool) -> FasValue:
    """Logical and equality operators on booleans."""
    if op == "&&":
        return _bool(left and right)
    if op == "||":
        return _bool(left or right)
    if op == "==":
        return _bool(left == right)
    if op == "!=":
        return _bool(left != right)
    raise _unknown(op, "bool")


def calc_float(left: float, op: str, right: float) -> FasValue:
    """Arithmetic and tolerant comparisons on floats."""
    if op == "+":
        return FasValue(ValueKind.FLOAT, left + right)
    if op == "-":
        return FasValue(ValueKind.FLOAT, left - right)
    if op == "*":
        return FasValue(ValueKind.FLOAT, left * right)
    if op == "/":
        return FasValue(ValueKind.FLOAT, _float_div(left, right))
    if op == "**":
        return FasValue(ValueKind.FLOAT, _powf(left, right))
    if op == ">":
        return _bool(left > right - _FLOAT_EPSILON)
    if op == ">=":
        return _bool(left >= right - _FLOAT_EPSILON)
    if op == "<":
        return _bool(left < right + _FLOAT_EPSILON)
    if op == "<=":
        return _bool(left <= right + _FLOAT_EPSILON)
    if op == "==":
        return _bool(abs(left - right) <= _FLOAT_EPSILON)
    if op == "!=":
        return _bool(abs(left - right) > _FLOAT_EPSILON)
    raise _unknown(op, "float")


def calc_int(left: int, op: str, right: int) -> FasValue:
    """Arithmetic, bitwise and comparison operators on 64-bit integers."""

    def result(n: int) -> FasValue:
        return FasValue(ValueKind.INT, _check_i64(n))

    if op == "+":
        return result(left + right)
    if op == "-":
        return result(left - right)
    if op == "*":
        return result(left * right)
    if op == "/":
        return result(_trunc_div(left, right))
    if op == "%":
        return result(left - right * _trunc_div(left, right))
    if op == "**":
        if right < 0:
            return FasValue(ValueKind.FLOAT, _powf(float(left), float(right)))
        if abs(left) > 1 and right > 63:
            raise OverflowError("integer overflow")
        return result(left**right)
    if op == "|":
        return result(left | right)
    if op == "&":
        return result(left & right)
    if op == "^":
        return result(left ^ right)
    if op in ("<<", ">>"):
        if not 0 <= right < 64:
            raise OverflowError("shift amount out of range")
        return result(_wrap_i64(left << right) if op == "<<" else left >> right)
    if op == ">":
        return _bool(left > right)
    if op == ">=":
        return _bool(left >= right)
    if op == "<":
        return _bool(left < right)
    if op == "<=":
        return _bool(left <= right)
    if op == "==":
        return _bool(left == right)
    if op == "!=":
        return _bool(left != right)
    raise _unknown(op, "int")


def calc_string(left: str, op: str, right: str) -> FasValue:
    """Concatenation and equality on strings."""
    if op == "+":
        return FasValue(ValueKind.STRING, left + right)
    if op == "==":
        return _bool(left == right)
    if op == "!=":
        return _bool(left != right)
    raise _unknown(op, "string")


def calc_string_repeat(left: str, op: str, right: int) -> FasValue:
    """``string ** int`` repeats the string."""
    if op != "**":
        raise _unknown(op, "string and int")
    if right < 0:
        raise ValueError("repeat count must not be negative")
    return FasValue(ValueKind.STRING, left * right)


def calc(left: FasValue, op: str, right: FasValue) -> FasValue:
    """Apply binary operator ``op`` to two values."""
    left_type = left.get_type()
    right_type = right.get_type()
    lk, rk = left_type.kind, right_type.kind
    if lk is TypeKind.NONE or rk is TypeKind.NONE:
        raise TypeError("operands of unknown type")
    if lk is TypeKind.ARRAY and rk is TypeKind.ARRAY and left_type == right_type:
        base = left_type.base_type
        return _calc_array(left.as_array(base), op, right.as_array(base))
    if lk is TypeKind.BOOL and rk is TypeKind.BOOL:
        return calc_bool(left.as_bool(), op, right.as_bool())
    numeric = (TypeKind.FLOAT, TypeKind.INT)
    if lk in numeric and rk in numeric:
        if lk is TypeKind.INT and rk is TypeKind.INT:
            return calc_int(left.as_int(), op, right.as_int())
        return calc_float(left.as_float(), op, right.as_float())
    if lk is TypeKind.STRING and rk is TypeKind.STRING:
        return calc_string(left.as_str(), op, right.as_str())
    if lk is TypeKind.STRING and rk is TypeKind.INT:
        return calc_string_repeat(left.as_str(), op, right.as_int())
    if lk is TypeKind.VOID and op == "??":
        return right
    raise TypeError(
        f"operator {op!r} is not defined for {lk.value} and {rk.value}"
    )