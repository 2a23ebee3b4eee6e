import pytest

from fascript.oper_utils import is_assign_op2, is_calc_op2, op2_priority

ASSIGN = ["=", "+=", "-=", "*=", "/=", "**=", "%=", "|=", "&=", "^=", "&&=", "||=", "<<=", ">>=", "??="]
CALC = ["+", "-", "*", "/", "**", "%", "|", "&", "^", "&&", "||", "<<", ">>", ">", ">=", "<", "<=", "==", "!=", "??"]


@pytest.mark.parametrize("op", ASSIGN)
def test_assign_ops(op):
    assert is_assign_op2(op) is True
    assert is_calc_op2(op) is False


@pytest.mark.parametrize("op", CALC)
def test_calc_ops(op):
    assert is_calc_op2(op) is True
    assert is_assign_op2(op) is False


@pytest.mark.parametrize("op", CALC)
def test_every_calc_op_has_priority(op):
    assert 0 <= op2_priority(op) <= 9


def test_pinned_priorities():
    assert op2_priority("||") == 0
    assert op2_priority("&&") == 1
    assert op2_priority("**") == 9


def test_priority_ordering():
    assert op2_priority("*") > op2_priority("+")
    assert op2_priority("+") > op2_priority("<<")
    assert op2_priority("==") > op2_priority("<")
    assert op2_priority("+") == op2_priority("-")


def test_unknown_operator():
    assert is_calc_op2("=>") is False
    assert is_assign_op2("=>") is False
    with pytest.raises(ValueError):
        op2_priority("=")