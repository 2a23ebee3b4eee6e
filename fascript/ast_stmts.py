"""Statement nodes, function blocks and programs of the script syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from fascript.ast_exprs import Expr, FuncExpr
from fascript.types import AstType, func_type

ANNOTATION_TYPES = frozenset({"pause", "resume", "degradation", "rollback", "retry"})


@dataclass
class BreakStmt:
    """Leave the loop carrying ``label``; an empty label means the innermost."""

    label: str = ""


@dataclass
class ContinueStmt:
    """Skip to the next round of the loop carrying ``label``."""

    label: str = ""


@dataclass
class DefVarItem:
    """One variable defined by a definition statement."""

    var_name: str
    init_value: Optional[Expr] = None


@dataclass
class DefVarStmt:
    """Define one or more variables in the current scope."""

    def_vars: list[DefVarItem] = field(default_factory=list)


@dataclass
class DoWhileStmt:
    """Run ``stmts``, then repeat while ``cond_expr`` holds."""

    label: str = ""
    cond_expr: Optional[Expr] = None
    stmts: list = field(default_factory=list)


@dataclass
class ExprStmt:
    """Evaluate an expression for its effect."""

    expr: Expr


@dataclass
class ForStmt:
    """Bind ``iter_name`` to each item of ``iter_items`` and run ``stmts``."""

    label: str = ""
    iter_name: str = ""
    iter_items: Optional[Expr] = None
    stmts: list = field(default_factory=list)


@dataclass
class IfStmt:
    """Conditional branches.

    ``stmtss[i]`` runs when ``con_exprs[i]`` is the first true condition;
    one extra entry in ``stmtss`` is the ``else`` branch.
    """

    con_exprs: list = field(default_factory=list)
    stmtss: list = field(default_factory=list)


@dataclass
class ReturnStmt:
    """Return the value of ``expr`` from the current function."""

    expr: Expr


@dataclass
class WhileStmt:
    """Repeat ``stmts`` while ``cond_expr`` holds."""

    label: str = ""
    cond_expr: Optional[Expr] = None
    stmts: list = field(default_factory=list)


Stmt = Union[
    BreakStmt,
    ContinueStmt,
    DefVarStmt,
    DoWhileStmt,
    ExprStmt,
    ForStmt,
    IfStmt,
    ReturnStmt,
    WhileStmt,
]


@dataclass
class AnnoPart:
    """An ``@type = expr`` annotation attached to a task."""

    anno_type: str
    anno_expr: Optional[Expr] = None

    def __post_init__(self) -> None:
        if self.anno_type not in ANNOTATION_TYPES:
            raise ValueError(f"unknown annotation: {self.anno_type!r}")


@dataclass
class FasFunc:
    """A function written in the script."""

    name: str = ""
    arg_names: list[str] = field(default_factory=list)
    body_stmts: list = field(default_factory=list)

    def get_type(self) -> AstType:
        return func_type(len(self.arg_names))


@dataclass
class FasTask:
    """A task written in the script, with its annotations."""

    annotations: list[AnnoPart] = field(default_factory=list)
    name: str = ""
    arg_names: list[str] = field(default_factory=list)
    body_stmts: list = field(default_factory=list)

    def get_type(self) -> AstType:
        return func_type(len(self.arg_names))


@dataclass
class AstProgram:
    """A whole program: its top-level statements in order."""

    stmts: list = field(default_factory=list)


def define_func(func: Union[FasFunc, FasTask]) -> DefVarStmt:
    """The statement that binds a function or task to its own name."""
    return DefVarStmt([DefVarItem(func.name, FuncExpr(func))])