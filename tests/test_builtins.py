import pytest

from fascript.builtins import get_module, init_modules, make_os_module
from fascript.types import func_type
from fascript.values import FasValue, ValueKind


def v(x):
    return FasValue.from_python(x)


def member(module, name):
    return module.value[name].value.func


def test_init_modules_names():
    assert init_modules() == ["os", "test"]


def test_os_module_members():
    module = get_module("os")
    assert module.kind is ValueKind.SMAP
    assert set(module.value) == {"print", "println"}


def test_make_os_module_function_types():
    module = make_os_module()
    assert module["print"].get_type() == func_type(1)
    assert module["println"].get_type() == func_type(1)


def test_println_writes_line(capsys):
    result = member(get_module("os"), "println").call([v("hello")])
    assert capsys.readouterr().out == "hello\n"
    assert result.kind is ValueKind.NONE


def test_print_writes_without_newline(capsys):
    member(get_module("os"), "print").call([v("hello")])
    assert capsys.readouterr().out == "hello"


def test_print_converts_numbers(capsys):
    member(get_module("os"), "print").call([v(12)])
    assert capsys.readouterr().out == "12"


def test_cache_str_appends_to_cache():
    module = get_module("test")
    get_cache = member(module, "get_cache")
    before = get_cache.call([]).as_str()
    member(module, "cache_str").call([v("abc")])
    after = get_cache.call([])
    assert after == v(before + "abc")


def test_cache_is_shared_between_module_instances():
    first = get_module("test")
    second = get_module("test")
    before = member(second, "get_cache").call([]).as_str()
    member(first, "cache_str").call([v("xyz")])
    assert member(second, "get_cache").call([]).as_str() == before + "xyz"


def test_get_cache_takes_no_arguments():
    assert get_module("test").value["get_cache"].get_type() == func_type(0)


def test_unknown_module_raises():
    with pytest.raises(ValueError):
        get_module("net")