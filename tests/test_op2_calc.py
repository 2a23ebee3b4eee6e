import math
import operator

import pytest

from fascript.op2_calc import (
    calc,
    calc_bool,
    calc_float,
    calc_int,
    calc_string,
    calc_string_repeat,
)
from fascript.values import FasValue, ValueKind


def v(x):
    return FasValue.from_python(x)


def arr(*items):
    return FasValue(ValueKind.ARRAY, [v(x) for x in items])


def ints(value):
    return [item.value for item in value.value]


@pytest.mark.parametrize(
    "op,func", [("+", operator.add), ("-", operator.sub), ("*", operator.mul)]
)
@pytest.mark.parametrize("a,b", [(17, 5), (-31000, 99999), (0, -4)])
def test_int_arithmetic(op, func, a, b):
    result = calc(v(a), op, v(b))
    assert result.kind is ValueKind.INT
    assert result.value == func(a, b)


@pytest.mark.parametrize("a,b", [(7, 2), (-7, 2), (7, -2), (-7, -2), (100000, -3)])
def test_int_division_truncates_toward_zero(a, b):
    quotient = calc_int(a, "/", b).value
    assert abs(quotient) == abs(a) // abs(b)
    assert (quotient > 0) == ((a > 0) == (b > 0))


@pytest.mark.parametrize("a,b", [(7, 2), (-7, 2), (7, -2), (-7, -2), (9, 3)])
def test_int_remainder_matches_division(a, b):
    quotient = calc_int(a, "/", b).value
    rest = calc_int(a, "%", b).value
    assert b * quotient + rest == a
    assert abs(rest) < abs(b)
    assert rest == 0 or (rest > 0) == (a > 0)


def test_int_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        calc_int(5, "/", 0)


def test_int_overflow_raises():
    with pytest.raises(OverflowError):
        calc_int(2**62, "*", 4)


def test_int_power():
    assert calc_int(3, "**", 4).value == 3**4


def test_int_negative_power_gives_float():
    result = calc_int(2, "**", -1)
    assert result.kind is ValueKind.FLOAT
    assert result.value == 0.5


def test_int_comparisons():
    assert calc_int(3, "<", 5).as_bool()
    assert not calc_int(5, "<", 3).as_bool()
    assert calc_int(5, ">=", 5).as_bool()
    assert calc_int(4, "!=", 5).as_bool()


def test_shift_left_wraps_to_64_bits():
    assert calc_int(1, "<<", 63).value == -(1 << 63)


def test_shift_round_trip():
    shifted = calc_int(5, "<<", 3).value
    assert calc_int(shifted, ">>", 3).value == 5


def test_shift_out_of_range():
    with pytest.raises(OverflowError):
        calc_int(1, "<<", 64)


def test_int_unknown_operator():
    with pytest.raises(ValueError):
        calc(v(1), "??", v(2))


def test_float_equality_tolerance():
    assert calc_float(1.0, "==", 1.0 + 1e-7).as_bool()
    assert calc_float(1.0, "!=", 1.0 + 1e-3).as_bool()
    assert calc_float(1.0, ">", 1.0 + 1e-7).as_bool()


def test_float_division_by_zero():
    positive = calc_float(1.0, "/", 0.0)
    assert positive.kind is ValueKind.FLOAT
    assert positive.value == math.inf
    negative = calc_float(-1.0, "/", 0.0)
    assert negative.value == -math.inf
    undefined = calc_float(0.0, "/", 0.0)
    assert undefined.kind is ValueKind.FLOAT
    assert str(undefined.value) == "nan"


def test_float_power_of_negative_base_is_nan():
    result = calc_float(-8.0, "**", 0.5)
    assert result.kind is ValueKind.FLOAT
    assert str(result.value) == "nan"


def test_mixed_int_float_gives_float():
    result = calc(v(1), "+", v(0.5))
    assert result.kind is ValueKind.FLOAT
    assert result.value == 1 + 0.5


def test_string_operators():
    assert calc(v("ab"), "+", v("cd")) == v("ab" + "cd")
    assert calc(v("ab"), "==", v("ab")).as_bool()
    assert calc_string("ab", "!=", "cd").as_bool()
    with pytest.raises(ValueError):
        calc(v("ab"), "-", v("a"))


def test_string_repeat():
    assert calc(v("ab"), "**", v(3)) == v("ab" * 3)
    with pytest.raises(ValueError):
        calc_string_repeat("ab", "**", -1)


def test_bool_operators():
    assert not calc(v(True), "&&", v(False)).as_bool()
    assert calc(v(True), "||", v(False)).as_bool()
    assert calc_bool(False, "==", False).as_bool()
    with pytest.raises(ValueError):
        calc_bool(True, "+", True)


def test_array_concat_and_difference():
    assert ints(calc(arr(1, 2), "+", arr(3))) == [1, 2] + [3]
    assert ints(calc(arr(1, 2), "-", arr(2))) == [1]


def test_array_and_removes_shared_items():
    assert calc(arr(1, 2, 3), "&", arr(2)) == calc(arr(1, 2, 3), "-", arr(2))


def test_array_equality():
    assert calc(arr(1, 2), "==", arr(1, 2)).as_bool()
    assert calc(arr(1, 2), "!=", arr(2, 1)).as_bool()


def test_array_coalesce():
    empty = FasValue(ValueKind.ARRAY, [])
    assert calc(empty, "??", empty) == empty
    assert calc(arr(4), "??", arr(5)) == arr(4)


def test_array_other_operator_keeps_left():
    assert calc(arr(1, 2), "*", arr(3)) == arr(1, 2)


def test_array_type_mismatch():
    with pytest.raises(TypeError):
        calc(arr(1), "+", arr(1.5))


def test_void_coalesce_returns_right():
    assert calc(FasValue(), "??", v(4)) == v(4)


def test_void_other_operator_raises():
    with pytest.raises(TypeError):
        calc(FasValue(), "+", v(4))


def test_bool_and_int_mismatch():
    with pytest.raises(TypeError):
        calc(v(True), "+", v(1))