import pytest

from fascript.runtime_base import RuntimeBase, Variables, VariablesType
from fascript.values import FasValue, ValueKind


def v(x):
    return FasValue.from_python(x)


def smap(**items):
    return FasValue(ValueKind.SMAP, dict(items))


def test_default_var_type():
    assert Variables().var_type is VariablesType.INDENT_VARIABLES
    assert Variables(VariablesType.INVOKE_ARGUMENTS).var_type is VariablesType.INVOKE_ARGUMENTS


def test_set_and_get_plain_name():
    scope = Variables()
    assert scope.set_var("a", v(1))
    assert scope.get_var("a") == v(1)


def test_missing_name_gives_none():
    assert Variables().get_var("nope") is None
    assert Variables().get_var("nope.x") is None


def test_dotted_get_and_set():
    scope = Variables()
    scope.set_var("m", smap(x=v(1), inner=smap(y=v("a"))))
    assert scope.get_var("m.x") == v(1)
    assert scope.get_var("m.inner.y") == v("a")
    assert scope.set_var("m.inner.y", v("b"))
    assert scope.get_var("m.inner.y") == v("b")


def test_dotted_set_with_missing_root():
    scope = Variables()
    assert not scope.set_var("m.x", v(1))
    assert scope.get_var("m") is None


def test_dotted_set_with_missing_member():
    scope = Variables()
    scope.set_var("m", smap(x=v(1)))
    with pytest.raises(KeyError):
        scope.set_var("m.y", v(2))


def test_dotted_access_into_non_map():
    scope = Variables()
    scope.set_var("n", v(3))
    with pytest.raises(TypeError):
        scope.get_var("n.x")


def test_update_var_replaces_value():
    scope = Variables()
    scope.set_var("a", v(1))
    assert scope.update_var("a", lambda value: v(value.as_int() + 1))
    assert scope.get_var("a") == v(1 + 1)


def test_update_var_missing_name():
    calls = []
    assert not Variables().update_var("a", calls.append)
    assert calls == []


def test_get_var_returns_copy():
    scope = Variables()
    original = FasValue(ValueKind.ARRAY, [v(1)])
    scope.set_var("arr", original)
    got = scope.get_var("arr")
    got.value.append(v(9))
    assert scope.get_var("arr") == FasValue(ValueKind.ARRAY, [v(1)])


def test_runtime_base_has_builtin_modules():
    base = RuntimeBase()
    assert base.get_var("os").kind is ValueKind.SMAP
    assert base.get_var("test").kind is ValueKind.SMAP
    assert base.get_var("os.println").kind is ValueKind.FUNC


def test_runtime_base_builtin_is_callable(capsys):
    func = RuntimeBase().get_var("os.print").value.func
    func.call([v("hi")])
    assert capsys.readouterr().out == "hi"


def test_runtime_base_set_and_update():
    base = RuntimeBase()
    assert base.set_var("g", v(10))
    assert base.update_var("g", lambda value: v(value.as_int() * 2))
    assert base.get_var("g") == v(10 * 2)


def test_runtime_bases_do_not_share_modules():
    first = RuntimeBase()
    assert first.set_var("os.println", v(1))
    assert first.get_var("os.println") == v(1)
    assert RuntimeBase().get_var("os.println").kind is ValueKind.FUNC