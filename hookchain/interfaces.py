"""Backend interface the hooks facade depends on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class HooksBackend(Protocol):
    def register(
        self,
        name: str,
        callback: Callable[..., Any] | str,
        priority: int | None = None,
        arity: int | None = None,
    ) -> bool: ...

    def unregister(self, name: str, callback: Callable[..., Any] | str, priority: int | None = None) -> bool: ...

    def unregister_all(self, name: str, priority: int | None = None) -> bool: ...

    def has(self, name: str, callback: Callable[..., Any] | str | None = None) -> bool | int | None: ...

    def dispatch_filter(self, name: str, value: Any, *args: Any) -> Any: ...

    def dispatch_action(self, name: str, *args: Any) -> None: ...

    def count(self, name: str) -> int: ...

    def is_dispatching(self, name: str | None = None) -> bool: ...

    def currently_dispatching(self) -> str | None: ...
