"""Named hook table: one HookRegistry per hook name plus dispatch bookkeeping."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from typing import Any

from hookchain.config import HooksConfig
from hookchain.identity import callback_key, describe_key, resolve_callback
from hookchain.models import HookSummary, RegisteredCallback
from hookchain.registry import HookRegistry

logger = logging.getLogger(__name__)

CallbackRef = Callable[..., Any] | str


def _validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise TypeError(f"Hook name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Hook name must not be empty")
    return name


def _validate_priority(priority: Any) -> int:
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise TypeError(f"Priority must be an integer, got {type(priority).__name__}")
    return priority


def _validate_arity(arity: Any) -> int:
    if isinstance(arity, bool) or not isinstance(arity, int):
        raise TypeError(f"Arity must be an integer, got {type(arity).__name__}")
    if arity < 0:
        raise ValueError(f"Arity must be non-negative, got {arity}")
    return arity


def _coerce_callback(callback: Any) -> Callable[..., Any]:
    if isinstance(callback, str):
        return resolve_callback(callback)
    if not callable(callback):
        raise TypeError(f"Callback must be callable or a dotted reference, got {type(callback).__name__}")
    return callback


def _display_name(callback: Callable[..., Any]) -> str:
    return getattr(callback, "__qualname__", None) or type(callback).__name__


class HookTable:
    """In-process hook table with priority ordering and reentrant dispatch."""

    def __init__(self, config: HooksConfig | None = None) -> None:
        self.config = config or HooksConfig()
        self._registries: dict[str, HookRegistry] = {}
        self._action_counts: Counter[str] = Counter()
        self._active: list[str] = []

    @classmethod
    def from_config(cls, config: HooksConfig) -> HookTable:
        table = cls(config)
        for name, specs in config.hooks.items():
            for spec in specs:
                table.register(name, spec.callback, priority=spec.priority, arity=spec.arity)
        logger.info(
            "Loaded %s preconfigured hook(s) with %s callback(s)",
            len(table.names()),
            sum(len(specs) for specs in config.hooks.values()),
        )
        return table

    def register(
        self,
        name: str,
        callback: CallbackRef,
        priority: int | None = None,
        arity: int | None = None,
    ) -> bool:
        name = _validate_name(name)
        resolved = _coerce_callback(callback)
        priority = self.config.defaults.priority if priority is None else _validate_priority(priority)
        arity = self.config.defaults.arity if arity is None else _validate_arity(arity)

        registry = self._registries.get(name)
        if registry is None:
            registry = self._registries[name] = HookRegistry()
        registry.add(resolved, priority, arity)
        logger.debug("Registered %s on %s (priority=%s arity=%s)", describe_key(callback_key(resolved)), name, priority, arity)
        return True

    def unregister(self, name: str, callback: CallbackRef, priority: int | None = None) -> bool:
        name = _validate_name(name)
        resolved = _coerce_callback(callback)
        priority = self.config.defaults.priority if priority is None else _validate_priority(priority)

        registry = self._registries.get(name)
        if registry is None:
            return False
        removed = registry.remove(resolved, priority)
        if removed:
            logger.debug("Unregistered %s from %s (priority=%s)", describe_key(callback_key(resolved)), name, priority)
        self._prune(name)
        return removed

    def unregister_all(self, name: str, priority: int | None = None) -> bool:
        name = _validate_name(name)
        if priority is not None:
            priority = _validate_priority(priority)

        registry = self._registries.get(name)
        if registry is not None:
            registry.remove_all(priority)
            self._prune(name)
        return True

    def has(self, name: str, callback: CallbackRef | None = None) -> bool | int | None:
        name = _validate_name(name)
        registry = self._registries.get(name)
        if callback is None:
            return registry is not None and registry.has()
        resolved = _coerce_callback(callback)
        if registry is None:
            return None
        return registry.has(resolved)

    def dispatch_filter(self, name: str, value: Any, *args: Any) -> Any:
        self._active.append(name)
        try:
            self._run_all_hook(name, [name, value, *args])
            registry = self._registries.get(name)
            if registry is None:
                return value
            try:
                return registry.apply(value, [value, *args])
            finally:
                self._prune(name)
        finally:
            self._active.pop()

    def dispatch_action(self, name: str, *args: Any) -> None:
        self._action_counts[name] += 1
        self._active.append(name)
        try:
            self._run_all_hook(name, [name, *args])
            registry = self._registries.get(name)
            if registry is None:
                return
            try:
                registry.run_action(list(args))
            finally:
                self._prune(name)
        finally:
            self._active.pop()

    def _run_all_hook(self, name: str, args: list[Any]) -> None:
        all_hook = self.config.all_hook
        if name == all_hook:
            return
        registry = self._registries.get(all_hook)
        if registry is None:
            return
        try:
            registry.run_all(args)
        finally:
            self._prune(all_hook)

    def _prune(self, name: str) -> None:
        # Registries stay in place while dispatching so nested dispatches and
        # re-registrations share one cursor stack and action flag.
        registry = self._registries.get(name)
        if registry is not None and not registry and not registry.is_dispatching:
            del self._registries[name]

    def count(self, name: str) -> int:
        return self._action_counts[name]

    def is_dispatching(self, name: str | None = None) -> bool:
        if name is None:
            return bool(self._active)
        return name in self._active

    def currently_dispatching(self) -> str | None:
        return self._active[-1] if self._active else None

    def current_priority(self, name: str) -> int | None:
        registry = self._registries.get(name)
        if registry is None:
            return None
        return registry.current_priority()

    def registry(self, name: str) -> HookRegistry | None:
        return self._registries.get(name)

    def names(self) -> list[str]:
        return list(self._registries)

    def clear(self) -> None:
        """Remove every registered callback; action counts are kept."""
        for name, registry in list(self._registries.items()):
            registry.remove_all()
            self._prune(name)

    def summary(self) -> list[HookSummary]:
        summaries: list[HookSummary] = []
        for name in sorted(self._registries):
            registry = self._registries[name]
            callbacks = [
                RegisteredCallback(
                    key=describe_key(key),
                    priority=priority,
                    arity=entry.arity,
                    name=_display_name(entry.callback),
                )
                for priority, key, entry in registry.entries()
            ]
            summaries.append(
                HookSummary(
                    name=name,
                    callbacks=callbacks,
                    action_count=self._action_counts[name],
                    dispatching=registry.is_dispatching,
                )
            )
        return summaries
