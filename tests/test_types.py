import pytest

from fascript.types import (
    AstType,
    TypeKind,
    array_type,
    func_type,
    map_type,
    parse_type_name,
    tuple_type,
)

INT = AstType(TypeKind.INT)
FLOAT = AstType(TypeKind.FLOAT)
STRING = AstType(TypeKind.STRING)


def test_array_types_compare_by_base_type():
    assert array_type(INT) == array_type(INT)
    assert array_type(INT) != array_type(FLOAT)
    assert array_type(INT).kind is TypeKind.ARRAY
    assert array_type(INT).base_type == INT


def test_func_types_compare_by_arg_count():
    assert func_type(2) == func_type(2)
    assert func_type(1) != func_type(2)
    assert func_type(3).arg_count == 3


def test_map_types_compare_by_key_and_value():
    assert map_type(STRING, INT) == map_type(STRING, INT)
    assert map_type(STRING, INT) != map_type(INT, INT)
    assert map_type(STRING, INT) != map_type(STRING, FLOAT)


def test_tuple_types_compare_by_items():
    assert tuple_type([INT, FLOAT]) == tuple_type((INT, FLOAT))
    assert tuple_type([INT, FLOAT]) != tuple_type([FLOAT, INT])
    assert tuple_type([INT]).items == (INT,)


def test_types_are_hashable():
    seen = {array_type(INT), array_type(INT), INT}
    assert len(seen) == 2


def test_default_type_is_none():
    assert AstType().kind is TypeKind.NONE


@pytest.mark.parametrize(
    "name, kind",
    [
        ("void", TypeKind.VOID),
        ("bool", TypeKind.BOOL),
        ("dynamic", TypeKind.DYNAMIC),
        ("float", TypeKind.FLOAT),
        ("int", TypeKind.INT),
        ("string", TypeKind.STRING),
        ("task", TypeKind.TASK),
    ],
)
def test_parse_type_name(name, kind):
    assert parse_type_name(name) == AstType(kind)


def test_parse_unknown_type_name_raises():
    with pytest.raises(ValueError):
        parse_type_name("integer")