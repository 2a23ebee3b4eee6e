"""Runtime values of the script language and task channels."""

from __future__ import annotations

import enum
import math
import queue
from dataclasses import dataclass, field
from typing import Any

from fascript.types import AstType, TypeKind, array_type, map_type

_FLOAT_EPSILON = 0.000001


class TaskControl(enum.Enum):
    """Commands sent to a running task."""

    PAUSE = "pause"
    RESUME = "resume"
    CANCEL = "cancel"
    ROLLBACK = "rollback"


@dataclass(frozen=True)
class TaskResult:
    """A message reported back by a task; progress and finish carry a value."""

    class Kind(enum.Enum):
        PROGRESS_FEEDBACK = "progress_feedback"
        FINISH = "finish"
        CANCELED = "canceled"
        ROLLEDBACK = "rolledback"

    kind: TaskResult.Kind
    value: FasValue | None = None


@dataclass(eq=False)
class TaskValue:
    """The caller's end of a task: sends controls, receives results."""

    controls: queue.SimpleQueue = field(default_factory=queue.SimpleQueue)
    results: queue.SimpleQueue = field(default_factory=queue.SimpleQueue)


@dataclass(eq=False)
class TaskValueShadow:
    """The task's end: receives controls, sends results."""

    controls: queue.SimpleQueue
    results: queue.SimpleQueue


def create_task_channel() -> tuple[TaskValue, TaskValueShadow]:
    """Create a connected pair of task ends."""
    handle = TaskValue()
    return handle, TaskValueShadow(handle.controls, handle.results)


class ValueKind(enum.Enum):
    """The variant a :class:`FasValue` holds."""

    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    IMAP = "imap"
    SMAP = "smap"
    FUNC = "func"
    TASK = "task"


def _round_half_away(x: float) -> int:
    magnitude = math.floor(abs(x) + 0.5)
    return int(magnitude) if x >= 0 else -int(magnitude)


@dataclass(eq=False)
class FasValue:
    """A script value: a kind tag with its Python payload."""

    kind: ValueKind = ValueKind.NONE
    value: Any = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FasValue):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.kind is ValueKind.FLOAT:
            return abs(self.value - other.value) <= _FLOAT_EPSILON
        if self.kind is ValueKind.FUNC:
            return False
        if self.kind in (ValueKind.NONE, ValueKind.TASK):
            return True
        return self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.as_str()

    @classmethod
    def from_python(cls, value: Any) -> FasValue:
        """Wrap a plain Python value (None, bool, int, float or str)."""
        if isinstance(value, FasValue):
            return value
        if value is None:
            return cls(ValueKind.NONE)
        if isinstance(value, bool):
            return cls(ValueKind.BOOL, value)
        if isinstance(value, int):
            return cls(ValueKind.INT, value)
        if isinstance(value, float):
            return cls(ValueKind.FLOAT, value)
        if isinstance(value, str):
            return cls(ValueKind.STRING, value)
        raise TypeError(f"cannot convert {type(value).__name__} to a script value")

    def get_type(self) -> AstType:
        """The script type of this value."""
        kind = self.kind
        if kind is ValueKind.NONE:
            return AstType(TypeKind.VOID)
        if kind is ValueKind.BOOL:
            return AstType(TypeKind.BOOL)
        if kind is ValueKind.INT:
            return AstType(TypeKind.INT)
        if kind is ValueKind.FLOAT:
            return AstType(TypeKind.FLOAT)
        if kind is ValueKind.STRING:
            return AstType(TypeKind.STRING)
        if kind is ValueKind.ARRAY:
            base = self.value[0].get_type() if self.value else AstType(TypeKind.NONE)
            return array_type(base)
        if kind in (ValueKind.IMAP, ValueKind.SMAP):
            val_type = (
                next(reversed(self.value.values())).get_type()
                if self.value
                else AstType(TypeKind.NONE)
            )
            key_kind = TypeKind.INT if kind is ValueKind.IMAP else TypeKind.STRING
            return map_type(AstType(key_kind), val_type)
        if kind is ValueKind.FUNC:
            return self.value.get_type()
        return AstType(TypeKind.TASK)

    def as_str(self) -> str:
        """Text form of the value."""
        kind = self.kind
        if kind is ValueKind.NONE:
            return "(null)"
        if kind is ValueKind.BOOL:
            return "true" if self.value else "false"
        if kind is ValueKind.INT:
            return str(self.value)
        if kind is ValueKind.FLOAT:
            return f"{self.value:.4f}"
        if kind is ValueKind.STRING:
            return self.value
        if kind is ValueKind.ARRAY:
            return "[ " + ", ".join(item.as_str() for item in self.value) + " ]"
        if kind in (ValueKind.IMAP, ValueKind.SMAP):
            items = ", ".join(f"{key}: {item.as_str()}" for key, item in self.value.items())
            return "{ " + items + " }"
        if kind is ValueKind.FUNC:
            return "(func)"
        return "(task)"

    def as_array(self, base_type: AstType) -> list[FasValue]:
        """Items of an array, each converted to ``base_type``."""
        if self.kind is not ValueKind.ARRAY:
            raise TypeError(f"{self.kind.value} value is not an array")
        return [item.as_type(base_type) for item in self.value]

    def as_bool(self) -> bool:
        if self.kind is not ValueKind.BOOL:
            raise TypeError(f"{self.kind.value} value is not a bool")
        return self.value

    def as_float(self) -> float:
        if self.kind in (ValueKind.FLOAT, ValueKind.INT):
            return float(self.value)
        raise TypeError(f"{self.kind.value} value is not a number")

    def as_int(self) -> int:
        """Integer form; floats round half away from zero."""
        if self.kind is ValueKind.INT:
            return self.value
        if self.kind is ValueKind.FLOAT:
            return _round_half_away(self.value)
        raise TypeError(f"{self.kind.value} value is not a number")

    def as_imap(self) -> dict[int, FasValue]:
        if self.kind is not ValueKind.IMAP:
            raise TypeError(f"{self.kind.value} value is not an int map")
        return dict(self.value)

    def as_smap(self) -> dict[str, FasValue]:
        if self.kind is not ValueKind.SMAP:
            raise TypeError(f"{self.kind.value} value is not a string map")
        return dict(self.value)

    def as_type(self, dest_type: AstType) -> FasValue:
        """Convert this value to ``dest_type``."""
        if self.get_type() == dest_type:
            return self
        kind = dest_type.kind
        if kind in (TypeKind.NONE, TypeKind.VOID):
            return FasValue(ValueKind.NONE)
        if kind is TypeKind.ARRAY:
            return FasValue(ValueKind.ARRAY, self.as_array(dest_type.base_type))
        if kind is TypeKind.BOOL:
            return FasValue(ValueKind.BOOL, self.as_bool())
        if kind is TypeKind.DYNAMIC:
            return self
        if kind is TypeKind.FLOAT:
            return FasValue(ValueKind.FLOAT, self.as_float())
        if kind is TypeKind.INT:
            return FasValue(ValueKind.INT, self.as_int())
        if kind is TypeKind.STRING:
            return FasValue(ValueKind.STRING, self.as_str())
        raise TypeError(f"cannot convert {self.kind.value} value to {kind.value}")