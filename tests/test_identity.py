import functools
import os
import string

import pytest

from hookchain.identity import (
    MethodKey,
    ObjectKey,
    QualifiedNameKey,
    callback_key,
    describe_key,
    resolve_callback,
)
from hookchain.registry import HookRegistry


class Greeter:
    def greet(self, name):
        return f"hi {name}"

    @classmethod
    def build(cls):
        return cls()

    @staticmethod
    def shout(text):
        return text.upper()


def test_module_functions_use_qualified_name() -> None:
    assert callback_key(string.capwords) == QualifiedNameKey("string:capwords")
    assert callback_key(Greeter.shout) == QualifiedNameKey(f"{__name__}:Greeter.shout")


def test_builtins_use_qualified_name_and_bound_builtins_use_owner() -> None:
    items: list[int] = []

    assert callback_key(len) == QualifiedNameKey("builtins:len")
    assert callback_key(items.append) == MethodKey(instance_id=id(items), method="append")


def test_bound_methods_match_per_instance() -> None:
    first = Greeter()
    second = Greeter()

    assert callback_key(first.greet) == callback_key(first.greet)
    assert callback_key(first.greet) != callback_key(second.greet)
    assert callback_key(Greeter.build) == MethodKey(instance_id=id(Greeter), method="build")


def test_closures_lambdas_and_partials_use_object_identity() -> None:
    def make():
        def inner(value):
            return value

        return inner

    first, second = make(), make()
    partial = functools.partial(Greeter().greet, "x")
    anonymous = lambda value: value  # noqa: E731

    assert callback_key(first) != callback_key(second)
    assert callback_key(anonymous) == ObjectKey(object_id=id(anonymous))
    assert callback_key(partial) == ObjectKey(object_id=id(partial))


def test_resolve_callback_matches_direct_reference() -> None:
    assert resolve_callback("string:capwords") is string.capwords
    assert callback_key(resolve_callback("os.path.join")) == callback_key(os.path.join)


@pytest.mark.parametrize(
    ("reference", "error"),
    [
        ("capwords", ValueError),
        ("string:", ValueError),
        ("hookchain_missing_module:thing", ValueError),
        ("string:no_such_function", ValueError),
        ("string:ascii_letters", TypeError),
    ],
)
def test_resolve_callback_rejects_bad_references(reference: str, error: type[Exception]) -> None:
    with pytest.raises(error):
        resolve_callback(reference)


def test_describe_key_is_readable() -> None:
    assert describe_key(QualifiedNameKey("string:capwords")) == "string:capwords"
    assert describe_key(MethodKey(instance_id=255, method="greet")) == "method:greet@0xff"
    assert describe_key(ObjectKey(object_id=16)) == "object@0x10"


def _base(value):
    return value


def _make(step):
    @functools.wraps(_base)
    def wrapper(value):
        return value + step

    return wrapper


def test_wrapped_closures_keep_distinct_keys() -> None:
    first, second = _make(1), _make(100)

    assert first.__qualname__ == second.__qualname__ == "_base"
    assert callback_key(first) == ObjectKey(object_id=id(first))
    assert callback_key(first) != callback_key(second)
    assert callback_key(_base) == QualifiedNameKey(f"{__name__}:_base")


def test_wrapped_closures_register_separately() -> None:
    registry = HookRegistry()
    registry.add(_make(1), 10, 1)
    registry.add(_make(100), 10, 1)

    assert len(registry) == 2
    assert registry.apply(0, [0]) == 101
