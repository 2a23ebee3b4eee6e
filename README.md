# fascript

fascript is a small scripting language that you embed in a Python
application. A program is a tree of statement and expression nodes. A
`FasRuntime` evaluates the tree against a global scope that lasts between
runs. It returns the value of the last top-level expression statement.

## What this package does not do

- It has no parser. It does not read program text. You build programs
  from the node classes in `fascript.ast_stmts` and `fascript.ast_exprs`.
- It has no command-line tool.

Two helpers cover parts of a parser's job:

- `fascript.str_utils.code_to_str` decodes a quoted string literal. It
  strips the quotes and handles the escapes `\\`, `\r`, `\n`, `\t`, `\0`
  and `\xHH`.
- `fascript.ast_exprs.build_op2_expr` takes a flat list of operands and
  operators and builds the binary-operator tree by precedence.

## Example

```python
from fascript.ast_exprs import InvokeExpr, Op2Expr, TempExpr, ValueExpr
from fascript.ast_stmts import AstProgram, DefVarItem, DefVarStmt, ExprStmt
from fascript.runtime import FasRuntime
from fascript.types import TypeKind
from fascript.values import FasValue

runtime = FasRuntime()

program = AstProgram([
    DefVarStmt([DefVarItem("x", ValueExpr(FasValue.from_python(40)))]),
    ExprStmt(Op2Expr(TempExpr("x"), "+", ValueExpr(FasValue.from_python(2)))),
])
print(runtime.run(program).as_int())   # 42

runtime.set_func("shout", lambda s: s.upper(), [TypeKind.STRING])
call = InvokeExpr(TempExpr("shout"), [ValueExpr(FasValue.from_python("hi"))])
print(runtime.run([ExprStmt(call)]).as_str())   # HI
```

`FasRuntime.run` takes an `AstProgram` or any iterable of statements. It
returns a `FasValue`. It returns `None` if the last top-level statement was
not an expression statement.

## Values and types

A `fascript.values.FasValue` holds a `ValueKind` and a Python payload. The
kinds are none, bool, int, float, string, array, int-keyed map,
string-keyed map, function and task. `FasValue.from_python` wraps `None`,
`bool`, `int`, `float` and `str`.

You can convert a value with these methods:

- `as_int()`: floats round half away from zero.
- `as_float()`
- `as_bool()`
- `as_str()`: floats are shown with four decimals and none as `(null)`.
- `as_array(base_type)`
- `as_imap()`
- `as_smap()`
- `as_type(dest_type)`

A conversion that does not apply raises `TypeError`. `get_type()` returns a
`fascript.types.AstType`. Use `array_type`, `map_type`, `func_type`,
`tuple_type` and `parse_type_name` to build types.

Float values compare equal when they differ by at most `0.000001`. Two
function values are never equal.

## Operators

`fascript.op2_calc.calc` evaluates binary operators. `fascript.oper_utils`
classifies operators and gives their precedence.

- **Integers:** `+ - * / % ** | & ^ << >>` and the comparisons. Integers
  are 64-bit. Overflow raises `OverflowError`. Division truncates toward
  zero. Division by zero raises `ZeroDivisionError`. A negative exponent
  gives a float.
- **Floats, and int mixed with float:** `+ - * / **`. The comparisons
  allow a tolerance of `0.000001`.
- **Booleans:** `&& || == !=`.
- **Strings:** `+ == !=`. `string ** int` repeats the string.
- **Arrays of the same type:** `+`, `-`, `&`, `|`, `^`, `==`, `!=`
  and `??`.
- **`??` on a none value:** gives the right-hand side.
- **Compound assignments:** operators such as `+=` and `??=` compute the
  value and assign it to the variable on the left.

Unary `-` works on numbers, `~` on integers and `!` on booleans. These are
prefix forms only.

## Statements

`fascript.ast_stmts` has these statement classes:

- `DefVarStmt`, made of `DefVarItem`s
- `ExprStmt`
- `IfStmt`
- `WhileStmt`
- `DoWhileStmt`
- `ForStmt`: iterates over an `IndexExpr` range, from `left` up to but
  not including `right`.
- `BreakStmt` and `ContinueStmt`: can carry a loop label.
- `ReturnStmt`

Script functions are `FasFunc` objects. `define_func` builds the statement
that binds a function to its name. Each call runs in a fresh scope, and its
arguments are bound by name.

Statements at the top level write to the global scope. Statements inside
loop bodies and calls write to local scopes. Dotted names such as
`os.println` reach into string-map values.

## Tasks

Invoking a `FasTask` evaluates its arguments and starts the body on a
background thread. The body runs with its own evaluator over the same
global scope. The call returns a task value that holds a `TaskValue`. When
the body ends, a `TaskResult` of kind `FINISH` carrying its result is put on
`TaskValue.results`.

A task's `AnnoPart` annotations can be `pause`, `resume`, `degradation`,
`rollback` or `retry`. They are checked when created and kept on the task.
The evaluator does not act on them, and it does not read
`TaskValue.controls`.

## Built-in modules

Every runtime starts with these modules in its global scope:

- `os`:
  - `print(s)` writes a string.
  - `println(s)` writes a string and a newline.
- `test`:
  - `cache_str(s)` appends a string to a process-wide cache.
  - `get_cache()` returns the whole cache.

`fascript.builtins.init_modules` lists their names. `get_module(name)`
builds one of them as a string-map value.

## Host functions

`FasRuntime.set_func(func_name, func, arg_types)` binds a Python callable
to a global name. Each argument is converted before the call, according to
`arg_types`:

- `BOOL`, `INT`, `FLOAT` and `STRING` become `bool`, `int`, `float` and
  `str`.
- `DYNAMIC` passes the `FasValue` itself.
- `VOID` passes `None`.

The return value is wrapped with `FasValue.from_python`. The same wrapping
is available directly through `fascript.native.NativeFunc` and `add_func`.

## Package layout

| Module | Contents |
| --- | --- |
| `fascript.types` | the type model |
| `fascript.values` | runtime values and task channels |
| `fascript.oper_utils` | operator tables and precedence |
| `fascript.str_utils` | string literal decoding |
| `fascript.ast_exprs` | expression nodes and `build_op2_expr` |
| `fascript.ast_stmts` | statement nodes, functions, tasks, programs |
| `fascript.native` | wrapping Python callables |
| `fascript.builtins` | built-in modules |
| `fascript.op2_calc` | binary operator evaluation |
| `fascript.runtime_base` | variable scopes and the global scope |
| `fascript.task_runner` | the evaluator |
| `fascript.runtime` | `FasRuntime`, the entry point for embedding |