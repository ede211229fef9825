"""Callback identity keys and dotted-reference resolution."""

from __future__ import annotations

import importlib
import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any


@dataclass(frozen=True)
class QualifiedNameKey:
    """Importable function, static method or builtin, keyed by ``module:qualname``."""

    name: str


@dataclass(frozen=True)
class MethodKey:
    """Method bound to an instance (or to a class, for classmethods)."""

    instance_id: int
    method: str


@dataclass(frozen=True)
class ObjectKey:
    """Closures, lambdas, partials and callable instances."""

    object_id: int


CallbackKey = QualifiedNameKey | MethodKey | ObjectKey


def _resolves_to_itself(function: Callable[..., Any]) -> bool:
    qualname = getattr(function, "__qualname__", None)
    if not qualname or "<" in qualname:
        return False

    target: Any = sys.modules.get(function.__module__)
    for part in qualname.split("."):
        target = getattr(target, part, None)
        if target is None:
            return False
    # functools.wraps copies names onto closures that are not the named object.
    return target is function


def callback_key(callback: Callable[..., Any]) -> CallbackKey:
    if inspect.ismethod(callback):
        return MethodKey(instance_id=id(callback.__self__), method=callback.__func__.__name__)

    if inspect.isbuiltin(callback):
        owner = callback.__self__
        if owner is None or isinstance(owner, ModuleType):
            module = callback.__module__ or "builtins"
            return QualifiedNameKey(f"{module}:{callback.__qualname__}")
        return MethodKey(instance_id=id(owner), method=callback.__name__)

    if inspect.isfunction(callback) and _resolves_to_itself(callback):
        return QualifiedNameKey(f"{callback.__module__}:{callback.__qualname__}")

    return ObjectKey(object_id=id(callback))


def resolve_callback(reference: str) -> Callable[..., Any]:
    """Import the callable named by ``package.module:attr.path``.

    The ``module.attr`` form is accepted as well; the last dot separates the
    module from the attribute in that case.
    """
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise ValueError(f"Malformed callback reference: {reference!r}")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module {module_name!r} for callback {reference!r}") from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ValueError(f"Callback reference {reference!r} has no attribute {part!r}") from exc

    if not callable(target):
        raise TypeError(f"Callback reference {reference!r} does not name a callable")
    return target


def describe_key(key: CallbackKey) -> str:
    if isinstance(key, QualifiedNameKey):
        return key.name
    if isinstance(key, MethodKey):
        return f"method:{key.method}@{key.instance_id:#x}"
    return f"object@{key.object_id:#x}"
