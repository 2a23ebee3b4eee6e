"""Static type descriptors for script values."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TypeKind(enum.Enum):
    """The shape of a script type."""

    NONE = "none"
    ARRAY = "array"
    BOOL = "bool"
    DYNAMIC = "dynamic"
    FLOAT = "float"
    FUNC = "func"
    INDEX = "index"
    INT = "int"
    MAP = "map"
    STRING = "string"
    TUPLE = "tuple"
    VOID = "void"
    TASK = "task"


@dataclass(frozen=True)
class AstType:
    """A script type; compound kinds carry their component types."""

    kind: TypeKind = TypeKind.NONE
    base_type: AstType | None = None
    key_type: AstType | None = None
    val_type: AstType | None = None
    arg_count: int = 0
    items: tuple[AstType, ...] = ()


def array_type(base_type: AstType) -> AstType:
    """Array of ``base_type``."""
    return AstType(TypeKind.ARRAY, base_type=base_type)


def func_type(arg_count: int) -> AstType:
    """Function taking ``arg_count`` arguments."""
    return AstType(TypeKind.FUNC, arg_count=arg_count)


def map_type(key_type: AstType, val_type: AstType) -> AstType:
    """Map from ``key_type`` to ``val_type``."""
    return AstType(TypeKind.MAP, key_type=key_type, val_type=val_type)


def tuple_type(items) -> AstType:
    """Tuple of the given item types."""
    return AstType(TypeKind.TUPLE, items=tuple(items))


_TYPE_NAMES = {
    "void": TypeKind.VOID,
    "bool": TypeKind.BOOL,
    "dynamic": TypeKind.DYNAMIC,
    "float": TypeKind.FLOAT,
    "int": TypeKind.INT,
    "string": TypeKind.STRING,
    "task": TypeKind.TASK,
}


def parse_type_name(type_name: str) -> AstType:
    """Return the basic type named by ``type_name``."""
    try:
        return AstType(_TYPE_NAMES[type_name])
    except KeyError:
        raise ValueError(f"unknown type name: {type_name!r}") from None