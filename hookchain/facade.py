"""Filter/action facade over an injected hooks backend.

There is no module-level default instance: build a ``Hooks`` once and pass it
to the code that needs it.

Usage:
    hooks = Hooks()

    def shout(text):
        return text.upper()

    hooks.add_filter("title", shout)
    hooks.apply_filters("title", "hello")  # "HELLO"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hookchain.config import HooksConfig
from hookchain.interfaces import HooksBackend
from hookchain.table import HookTable


class Hooks:
    def __init__(self, backend: HooksBackend | None = None, config: HooksConfig | None = None) -> None:
        if backend is not None and config is not None:
            raise ValueError("Pass either a backend or a config, not both")
        self._backend: HooksBackend = backend if backend is not None else HookTable(config)

    @classmethod
    def from_config(cls, config: HooksConfig) -> Hooks:
        return cls(backend=HookTable.from_config(config))

    @property
    def backend(self) -> HooksBackend:
        return self._backend

    def add_filter(
        self,
        name: str,
        callback: Callable[..., Any] | str,
        priority: int | None = None,
        accepted_args: int | None = None,
    ) -> bool:
        return self._backend.register(name, callback, priority, accepted_args)

    def add_action(
        self,
        name: str,
        callback: Callable[..., Any] | str,
        priority: int | None = None,
        accepted_args: int | None = None,
    ) -> bool:
        return self._backend.register(name, callback, priority, accepted_args)

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        return self._backend.dispatch_filter(name, value, *args)

    def do_action(self, name: str, *args: Any) -> None:
        self._backend.dispatch_action(name, *args)

    def remove_hook(self, name: str, callback: Callable[..., Any] | str, priority: int | None = None) -> bool:
        return self._backend.unregister(name, callback, priority)

    def remove_all_hooks(self, name: str, priority: int | None = None) -> bool:
        return self._backend.unregister_all(name, priority)

    def has_hook(self, name: str, callback: Callable[..., Any] | str | None = None) -> bool | int | None:
        return self._backend.has(name, callback)

    def did_action(self, name: str) -> int:
        """Number of times ``name`` has been fired as an action."""
        return self._backend.count(name)

    def doing_hook(self, name: str | None = None) -> bool:
        return self._backend.is_dispatching(name)

    def current_hook(self) -> str | None:
        return self._backend.currently_dispatching()
