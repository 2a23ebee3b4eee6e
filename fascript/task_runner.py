"""Tree-walking evaluation of statements and expressions."""

from __future__ import annotations

import enum
import threading
from typing import Optional, Sequence

from fascript.ast_exprs import (
    FuncExpr,
    IndexExpr,
    InvokeExpr,
    Op1Expr,
    Op2Expr,
    SwitchExpr,
    TempExpr,
    TypeWrapExpr,
    ValueExpr,
)
from fascript.ast_stmts import (
    BreakStmt,
    ContinueStmt,
    DefVarStmt,
    DoWhileStmt,
    ExprStmt,
    FasFunc,
    FasTask,
    ForStmt,
    IfStmt,
    ReturnStmt,
    WhileStmt,
)
from fascript.native import NativeFunc
from fascript.op2_calc import calc
from fascript.oper_utils import is_assign_op2, is_calc_op2
from fascript.runtime_base import RuntimeBase, Variables, VariablesType
from fascript.types import TypeKind
from fascript.values import FasValue, TaskResult, ValueKind, create_task_channel


class LoopControl(enum.Enum):
    """Pending change of control flow raised by a statement."""

    NONE = "none"
    CONTINUE = "continue"
    BREAK = "break"
    RETURN = "return"


def _none() -> FasValue:
    return FasValue(ValueKind.NONE)


class TaskRunner:
    """Evaluates a program against a shared global scope.

    Local scopes live on a stack; statements at the top level write to the
    global scope and record the value of the last expression statement.
    """

    def __init__(self, base: Optional[RuntimeBase] = None) -> None:
        self.base = base if base is not None else RuntimeBase()
        self._stack: list[Variables] = []
        self._ret_value: Optional[FasValue] = None
        self._loop_ctrl = LoopControl.NONE
        self._loop_label = ""

    # statements

    def eval_stmt(self, stmt) -> None:
        """Execute one statement."""
        if self._loop_ctrl is not LoopControl.NONE:
            return
        if not self._stack:
            self._ret_value = None
        match stmt:
            case BreakStmt(label=label):
                self._loop_ctrl, self._loop_label = LoopControl.BREAK, label
            case ContinueStmt(label=label):
                self._loop_ctrl, self._loop_label = LoopControl.CONTINUE, label
            case DefVarStmt(def_vars=def_vars):
                for item in def_vars:
                    self._set_var(item.var_name, self.eval_expr(item.init_value))
            case DoWhileStmt():
                while True:
                    if self._run_round(stmt.stmts, stmt.label):
                        break
                    if not self.eval_expr(stmt.cond_expr).as_bool():
                        break
            case ExprStmt(expr=expr):
                value = self.eval_expr(expr)
                if not self._stack:
                    self._ret_value = value
            case ForStmt():
                self._eval_for(stmt)
            case IfStmt():
                self._eval_if(stmt)
            case ReturnStmt(expr=expr):
                self._ret_value = self.eval_expr(expr)
                self._loop_ctrl = LoopControl.RETURN
            case WhileStmt():
                while self.eval_expr(stmt.cond_expr).as_bool():
                    if self._run_round(stmt.stmts, stmt.label):
                        break
            case _:
                raise TypeError(f"not a statement: {type(stmt).__name__}")

    def eval_stmts(self, stmts: Sequence) -> None:
        """Execute statements in order until one yields a return value."""
        for stmt in stmts:
            self.eval_stmt(stmt)
            if self._ret_value is not None:
                break

    def _eval_for(self, stmt: ForStmt) -> None:
        items = stmt.iter_items
        if not isinstance(items, IndexExpr):
            raise TypeError("for loops can only iterate over a range")
        if items.left is None or items.right is None:
            raise ValueError("for loop range needs both bounds")
        start = self.eval_expr(items.left).as_int()
        stop = self.eval_expr(items.right).as_int()
        for i in range(start, stop):
            if self._run_round(stmt.stmts, stmt.label, (stmt.iter_name, i)):
                break

    def _eval_if(self, stmt: IfStmt) -> None:
        for cond, body in zip(stmt.con_exprs, stmt.stmtss):
            if self.eval_expr(cond).as_bool():
                self.eval_stmts(body)
                return
        if len(stmt.stmtss) > len(stmt.con_exprs):
            self.eval_stmts(stmt.stmtss[-1])

    def _run_round(self, stmts: Sequence, label: str, binding=None) -> bool:
        """Run one round of a loop body; True means leave the loop."""
        self._add_level()
        try:
            if binding is not None:
                name, index = binding
                self._set_var(name, FasValue(ValueKind.INT, index))
            self.eval_stmts(stmts)
        finally:
            self._sub_level()
        ctrl = self._loop_ctrl
        if ctrl is LoopControl.CONTINUE:
            if self._loop_label == label:
                self._loop_ctrl = LoopControl.NONE
            return False
        if ctrl is LoopControl.BREAK:
            if self._loop_label == label:
                self._loop_ctrl = LoopControl.NONE
            return True
        return ctrl is LoopControl.RETURN

    # expressions

    def eval_expr(self, expr) -> FasValue:
        """Evaluate an expression to a value."""
        match expr:
            case None:
                raise ValueError("missing expression")
            case ValueExpr(value=value):
                return value
            case FuncExpr():
                return FasValue(ValueKind.FUNC, expr)
            case IndexExpr():
                raise TypeError("a range cannot be used as a value")
            case InvokeExpr():
                return self._eval_invoke(expr)
            case Op1Expr():
                return self._eval_op1(expr)
            case Op2Expr():
                return self._eval_op2(expr)
            case SwitchExpr():
                return self._eval_switch(expr)
            case TempExpr(name=name):
                value = self._get_var(name)
                return value if value is not None else _none()
            case TypeWrapExpr():
                raise TypeError("a type cannot be used as a value")
            case _:
                raise TypeError(f"not an expression: {type(expr).__name__}")

    def _eval_invoke(self, expr: InvokeExpr) -> FasValue:
        func = self.eval_expr(expr.func)
        if func.kind is not ValueKind.FUNC:
            raise TypeError(f"{func.kind.value} value is not callable")
        return self.invoke_func(func.value.func, expr.arguments)

    def _eval_op1(self, expr: Op1Expr) -> FasValue:
        operand = self.eval_expr(expr.left)
        if not expr.is_prefix:
            raise ValueError(f"unsupported suffix operator: {expr.op!r}")
        kind = operand.get_type().kind
        if expr.op == "-" and kind is TypeKind.INT:
            return FasValue(ValueKind.INT, -operand.as_int())
        if expr.op == "-" and kind is TypeKind.FLOAT:
            return FasValue(ValueKind.FLOAT, -operand.as_float())
        if expr.op == "~" and kind is TypeKind.INT:
            return FasValue(ValueKind.INT, -1 - operand.as_int())
        if expr.op == "!" and kind is TypeKind.BOOL:
            return FasValue(ValueKind.BOOL, not operand.as_bool())
        raise TypeError(f"operator {expr.op!r} is not defined for {kind.value}")

    def _eval_op2(self, expr: Op2Expr) -> FasValue:
        op = expr.op
        if is_assign_op2(op):
            if op == "=":
                if not isinstance(expr.left, TempExpr):
                    raise TypeError("can only assign to a variable")
                self._set_var(expr.left.name, self.eval_expr(expr.right))
                return _none()
            value = self.eval_expr(Op2Expr(expr.left, op[:-1], expr.right))
            return self.eval_expr(Op2Expr(expr.left, "=", ValueExpr(value)))
        if is_calc_op2(op):
            left = self.eval_expr(expr.left)
            right = self.eval_expr(expr.right)
            return calc(left, op, right)
        raise ValueError(f"unknown binary operator: {op!r}")

    def _eval_switch(self, expr: SwitchExpr) -> FasValue:
        subject = self.eval_expr(expr.expr)
        for cond, value in zip(expr.conds, expr.values):
            if self.eval_expr(cond) == subject:
                return self.eval_expr(value)
        raise ValueError("no branch matches the value")

    # calls

    def invoke_func(self, func, args: Sequence) -> FasValue:
        """Call a native function, script function or task with argument expressions."""
        if isinstance(func, NativeFunc):
            return func.call([self.eval_expr(arg) for arg in args])
        if isinstance(func, FasFunc):
            return self.call_fas_func(func, args)
        if isinstance(func, FasTask):
            values = self._eval_args(func.name, func.arg_names, args)
            handle, shadow = create_task_channel()
            thread = threading.Thread(
                target=_run_task, args=(self.base, func, values, shadow), daemon=True
            )
            thread.start()
            return FasValue(ValueKind.TASK, handle)
        raise TypeError(f"not a callable: {type(func).__name__}")

    def call_fas_func(self, func: FasFunc, args: Sequence) -> FasValue:
        """Run a script function in a fresh call scope and return its result."""
        values = self._eval_args(func.name, func.arg_names, args)
        return self._call(func.arg_names, values, func.body_stmts)

    def _eval_args(self, name: str, arg_names: Sequence[str], args: Sequence) -> list:
        if len(args) < len(arg_names):
            raise TypeError(
                f"{name or 'function'} takes {len(arg_names)} arguments, {len(args)} given"
            )
        return [self.eval_expr(arg) for arg in args[: len(arg_names)]]

    def _call(self, arg_names: Sequence[str], values: Sequence[FasValue], body) -> FasValue:
        saved = (self._loop_ctrl, self._loop_label)
        self._loop_ctrl, self._loop_label = LoopControl.NONE, ""
        arguments = Variables(VariablesType.INVOKE_ARGUMENTS)
        for name, value in zip(arg_names, values):
            arguments.set_var(name, value)
        self._stack.append(arguments)
        self._stack.append(Variables(VariablesType.INDENT_VARIABLES))
        try:
            self.eval_stmts(body)
            result = self.take_return_value()
        finally:
            self._sub_level()
            self._loop_ctrl, self._loop_label = saved
        return result if result is not None else _none()

    # state

    def take_return_value(self) -> Optional[FasValue]:
        """Hand over the pending return value and clear it."""
        value, self._ret_value = self._ret_value, None
        return value

    def set_global_value(self, name: str, value: FasValue) -> None:
        """Bind ``name`` in the global scope."""
        self.base.set_var(name, value)

    def _add_level(self) -> None:
        self._stack.append(Variables(VariablesType.INDENT_VARIABLES))

    def _sub_level(self) -> None:
        self._stack.pop()
        if self._stack and self._stack[-1].var_type is VariablesType.INVOKE_ARGUMENTS:
            self._stack.pop()

    def _set_var(self, name: str, value: FasValue) -> None:
        scope = self._stack[-1] if self._stack else self.base
        if not scope.set_var(name, value):
            raise NameError(f"undefined variable: {name}")

    def _get_var(self, name: str) -> Optional[FasValue]:
        for scope in reversed(self._stack):
            value = scope.get_var(name)
            if value is not None:
                return value
        return self.base.get_var(name)


def _run_task(base: RuntimeBase, task: FasTask, values, shadow) -> None:
    runner = TaskRunner(base)
    result = runner._call(task.arg_names, values, task.body_stmts)
    shadow.results.put(TaskResult(TaskResult.Kind.FINISH, result))