"""Wrapping of Python callables as script functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, MutableMapping, Sequence, Union

from fascript.ast_exprs import FuncExpr
from fascript.types import AstType, TypeKind, func_type
from fascript.values import FasValue, ValueKind

ArgType = Union[AstType, TypeKind]

_CONVERTERS: dict[TypeKind, Callable[[FasValue], Any]] = {
    TypeKind.BOOL: FasValue.as_bool,
    TypeKind.INT: FasValue.as_int,
    TypeKind.FLOAT: FasValue.as_float,
    TypeKind.STRING: FasValue.as_str,
    TypeKind.DYNAMIC: lambda value: value,
    TypeKind.VOID: lambda value: None,
    TypeKind.NONE: lambda value: None,
}


def _kind_of(arg_type: ArgType) -> TypeKind:
    if isinstance(arg_type, TypeKind):
        kind = arg_type
    elif isinstance(arg_type, AstType):
        kind = arg_type.kind
    else:
        raise TypeError(f"not a script type: {arg_type!r}")
    if kind not in _CONVERTERS:
        raise TypeError(f"native functions cannot take {kind.value} arguments")
    return kind


@dataclass(frozen=True)
class NativeFunc:
    """A Python callable exposed to scripts.

    Each argument is converted to the Python type named by ``arg_types``
    before the call; ``dynamic`` arguments are passed as script values.
    The result is wrapped back into a script value.
    """

    func: Callable[..., Any]
    arg_types: tuple = ()
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "arg_types", tuple(_kind_of(arg_type) for arg_type in self.arg_types)
        )

    def call(self, args: Sequence[FasValue]) -> FasValue:
        """Call the wrapped function with script values."""
        if len(args) < len(self.arg_types):
            raise TypeError(
                f"{self.name or 'native function'} takes {len(self.arg_types)} "
                f"arguments, {len(args)} given"
            )
        converted = [
            _CONVERTERS[kind](arg) for kind, arg in zip(self.arg_types, args)
        ]
        return FasValue.from_python(self.func(*converted))

    def get_type(self) -> AstType:
        return func_type(len(self.arg_types))

    def to_fas_value(self) -> FasValue:
        """This function as a callable script value."""
        return FasValue(ValueKind.FUNC, FuncExpr(self))


def add_func(
    module: MutableMapping[str, FasValue],
    func_name: str,
    func: Callable[..., Any],
    arg_types: Iterable[ArgType] = (),
) -> None:
    """Store ``func`` in ``module`` under ``func_name`` as a script function."""
    module[func_name] = NativeFunc(func, tuple(arg_types), func_name).to_fas_value()