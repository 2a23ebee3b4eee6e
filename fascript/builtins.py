"""Modules that every runtime starts with."""

from __future__ import annotations

import threading
from typing import Callable

from fascript.native import add_func
from fascript.types import TypeKind
from fascript.values import FasValue, ValueKind

_cache_lock = threading.Lock()
_cache: list[str] = []


def _print(value: str) -> None:
    print(value, end="")


def _println(value: str) -> None:
    print(value)


def _cache_str(value: str) -> None:
    with _cache_lock:
        _cache.append(value)


def _get_cache() -> str:
    with _cache_lock:
        return "".join(_cache)


def make_os_module() -> dict[str, FasValue]:
    """Members of the ``os`` module: ``print`` and ``println``."""
    module: dict[str, FasValue] = {}
    add_func(module, "print", _print, [TypeKind.STRING])
    add_func(module, "println", _println, [TypeKind.STRING])
    return module


def _make_test_module() -> dict[str, FasValue]:
    module: dict[str, FasValue] = {}
    add_func(module, "cache_str", _cache_str, [TypeKind.STRING])
    add_func(module, "get_cache", _get_cache)
    return module


_MODULES: dict[str, Callable[[], dict[str, FasValue]]] = {
    "os": make_os_module,
    "test": _make_test_module,
}


def init_modules() -> list[str]:
    """Names of the modules defined in every new runtime."""
    return list(_MODULES)


def get_module(name: str) -> FasValue:
    """A fresh string-map value holding the members of module ``name``."""
    try:
        builder = _MODULES[name]
    except KeyError:
        raise ValueError(f"unknown built-in module: {name!r}") from None
    return FasValue(ValueKind.SMAP, builder())