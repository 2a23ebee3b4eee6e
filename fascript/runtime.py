"""The embedding entry point: a runtime that runs programs."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Union

from fascript.ast_stmts import AstProgram
from fascript.native import ArgType, NativeFunc
from fascript.runtime_base import RuntimeBase
from fascript.task_runner import TaskRunner
from fascript.values import FasValue


class FasRuntime:
    """Runs programs against one global scope that persists between runs."""

    def __init__(self) -> None:
        self._runner = TaskRunner(RuntimeBase())

    def run(self, program: Union[AstProgram, Iterable]) -> Optional[FasValue]:
        """Execute a program; return the value of its last top-level expression."""
        stmts = program.stmts if isinstance(program, AstProgram) else program
        for stmt in stmts:
            self._runner.eval_stmt(stmt)
        return self._runner.take_return_value()

    def set_func(
        self,
        func_name: str,
        func: Callable[..., Any],
        arg_types: Iterable[ArgType] = (),
    ) -> None:
        """Expose a Python callable to scripts as global ``func_name``."""
        native = NativeFunc(func, tuple(arg_types), func_name)
        self._runner.set_global_value(func_name, native.to_fas_value())