"""Variable scopes and the global scope shared by all runners."""

from __future__ import annotations

import enum
import threading
from typing import Callable, Optional

from fascript.builtins import get_module, init_modules
from fascript.values import FasValue, ValueKind


class VariablesType(enum.Enum):
    """What a scope on the stack stands for."""

    INDENT_VARIABLES = "indent_variables"
    INVOKE_ARGUMENTS = "invoke_arguments"


def _clone(value: FasValue) -> FasValue:
    if value.kind is ValueKind.ARRAY:
        return FasValue(ValueKind.ARRAY, [_clone(item) for item in value.value])
    if value.kind in (ValueKind.IMAP, ValueKind.SMAP):
        return FasValue(value.kind, {key: _clone(item) for key, item in value.value.items()})
    return value


class Variables:
    """One scope of named values.

    Dotted names such as ``os.println`` reach into string-map values.
    """

    def __init__(self, var_type: VariablesType = VariablesType.INDENT_VARIABLES) -> None:
        self.var_type = var_type
        self._vars: dict[str, FasValue] = {}

    def _locate(self, name: str) -> Optional[tuple[dict, str]]:
        root, *members = name.split(".")
        if root not in self._vars:
            return None
        holder, key = self._vars, root
        for member in members:
            value = holder[key]
            if value.kind is not ValueKind.SMAP:
                raise TypeError(f"{key!r} is not a string map")
            holder, key = value.value, member
            if key not in holder:
                raise KeyError(member)
        return holder, key

    def get_var(self, name: str) -> Optional[FasValue]:
        """A copy of the value named ``name``, or None if its root is unknown."""
        location = self._locate(name)
        if location is None:
            return None
        holder, key = location
        return _clone(holder[key])

    def update_var(self, name: str, cb: Callable[[FasValue], Optional[FasValue]]) -> bool:
        """Pass the stored value to ``cb``; a value it returns replaces it.

        Returns False if the name's root is unknown.
        """
        location = self._locate(name)
        if location is None:
            return False
        holder, key = location
        replacement = cb(holder[key])
        if replacement is not None:
            holder[key] = replacement
        return True

    def set_var(self, name: str, value: FasValue) -> bool:
        """Bind ``name`` to ``value``.

        A plain name is always bound; a dotted name replaces an existing
        member and returns False if its root is unknown.
        """
        if "." not in name:
            self._vars[name] = value
            return True
        location = self._locate(name)
        if location is None:
            return False
        holder, key = location
        holder[key] = value
        return True


class RuntimeBase:
    """The global scope, preloaded with the built-in modules; thread safe."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._vars = Variables(VariablesType.INDENT_VARIABLES)
        for name in init_modules():
            self._vars.set_var(name, get_module(name))

    def get_var(self, name: str) -> Optional[FasValue]:
        with self._lock:
            return self._vars.get_var(name)

    def update_var(self, name: str, cb: Callable[[FasValue], Optional[FasValue]]) -> bool:
        with self._lock:
            return self._vars.update_var(name, cb)

    def set_var(self, name: str, value: FasValue) -> bool:
        with self._lock:
            return self._vars.set_var(name, value)