"""Expression nodes of the script syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from fascript.oper_utils import is_assign_op2, is_calc_op2, op2_priority
from fascript.types import AstType, TypeKind
from fascript.values import FasValue

_COMPARISON_OPS = frozenset({">", ">=", "<", "<=", "==", "!="})


@dataclass
class ValueExpr:
    """A literal or precomputed value."""

    value: FasValue

    def get_type(self) -> AstType:
        return self.value.get_type()


@dataclass
class TempExpr:
    """A reference to a variable; dotted names reach into maps."""

    name: str


@dataclass
class FuncExpr:
    """A function, task or native callable used as a value."""

    func: Any

    def get_type(self) -> AstType:
        return self.func.get_type()


@dataclass
class IndexExpr:
    """A range ``left..right``; either bound may be missing."""

    left: Optional[Expr] = None
    right: Optional[Expr] = None

    def get_type(self) -> AstType:
        return AstType(TypeKind.INDEX)


@dataclass
class InvokeExpr:
    """A call of ``func`` with ``arguments``."""

    func: Expr
    arguments: list = field(default_factory=list)


@dataclass
class Op1Expr:
    """A unary operator applied as prefix or suffix."""

    left: Expr
    op: str
    is_prefix: bool


@dataclass
class Op2Expr:
    """A binary calculation or assignment."""

    left: Optional[Expr]
    op: str
    right: Optional[Expr]

    def get_type(self) -> AstType:
        """Static type of the result."""
        left_type = _expr_type(self.left)
        right_type = _expr_type(self.right)
        if is_assign_op2(self.op):
            return left_type
        if is_calc_op2(self.op):
            if self.op in _COMPARISON_OPS:
                return AstType(TypeKind.BOOL)
            if self.op == "??":
                return right_type
            return left_type
        raise ValueError(f"unknown binary operator: {self.op!r}")


@dataclass
class SwitchExpr:
    """Select the value whose condition matches ``expr``."""

    expr: Expr
    conds: list = field(default_factory=list)
    values: list = field(default_factory=list)


@dataclass
class TypeWrapExpr:
    """A type used in expression position."""

    item_type: AstType


Expr = Union[
    ValueExpr,
    TempExpr,
    FuncExpr,
    IndexExpr,
    InvokeExpr,
    Op1Expr,
    Op2Expr,
    SwitchExpr,
    TypeWrapExpr,
]


def _expr_type(expr: Optional[Expr]) -> AstType:
    if expr is None:
        return AstType(TypeKind.NONE)
    get_type = getattr(expr, "get_type", None)
    if get_type is None:
        raise TypeError(f"type of {type(expr).__name__} is not known statically")
    return get_type()


def build_op2_expr(exprs: Sequence[Expr], ops: Sequence[str]) -> Expr:
    """Combine operands and the operators between them into one tree.

    The split happens at the first operator of the highest priority, so
    that operator ends up at the root of the tree.
    """
    if len(exprs) != len(ops) + 1:
        raise ValueError("need exactly one more operand than operators")
    if not ops:
        return exprs[0]
    split = 0
    level = op2_priority(ops[0])
    for index, op in enumerate(ops):
        new_level = op2_priority(op)
        if new_level > level:
            level = new_level
            split = index
    left = build_op2_expr(exprs[: split + 1], ops[:split])
    right = build_op2_expr(exprs[split + 1 :], ops[split + 1 :])
    return Op2Expr(left, ops[split], right)