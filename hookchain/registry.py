"""Priority-ordered callback registry for a single hook name.

A registry can be mutated while it is being dispatched, including from inside
a recursive dispatch of itself. Every active dispatch owns an
``IterationCursor`` (a snapshot of priorities plus a position); structural
changes to the buckets reconcile all live cursors before the mutating call
returns.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from hookchain.identity import CallbackKey, callback_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallbackEntry:
    callback: Callable[..., Any]
    arity: int

    def invoke(self, args: list[Any]) -> Any:
        if self.arity == 0:
            return self.callback()
        if self.arity >= len(args):
            return self.callback(*args)
        return self.callback(*args[: self.arity])


@dataclass
class IterationCursor:
    priorities: list[int] = field(default_factory=list)
    position: int = 0

    @property
    def current(self) -> int | None:
        if 0 <= self.position < len(self.priorities):
            return self.priorities[self.position]
        return None

    @property
    def exhausted(self) -> bool:
        return self.current is None

    def advance(self) -> int | None:
        self.position += 1
        return self.current


class HookRegistry:
    """Callbacks for one hook, grouped in ascending priority buckets."""

    def __init__(self) -> None:
        self._buckets: dict[int, dict[CallbackKey, CallbackEntry]] = {}
        self._iterations: list[IterationCursor] = []
        self._doing_action = False

    def add(self, callback: Callable[..., Any], priority: int, arity: int) -> bool:
        key = callback_key(callback)
        priority_existed = priority in self._buckets

        self._buckets.setdefault(priority, {})[key] = CallbackEntry(callback=callback, arity=arity)

        if not priority_existed:
            self._buckets = dict(sorted(self._buckets.items()))
            if self._iterations:
                self._resort_active_iterations()
        return True

    def remove(self, callback: Callable[..., Any], priority: int) -> bool:
        bucket = self._buckets.get(priority)
        key = callback_key(callback)
        if bucket is None or key not in bucket:
            return False

        del bucket[key]
        if not bucket:
            del self._buckets[priority]
            if self._iterations:
                self._resort_active_iterations()
        return True

    def remove_all(self, priority: int | None = None) -> None:
        if not self._buckets:
            return

        if priority is None:
            self._buckets.clear()
        elif priority in self._buckets:
            del self._buckets[priority]
        else:
            return

        if self._iterations:
            self._resort_active_iterations()

    def has(self, callback: Callable[..., Any] | None = None) -> bool | int | None:
        if callback is None:
            return bool(self._buckets)

        key = callback_key(callback)
        for priority, bucket in self._buckets.items():
            if key in bucket:
                return priority
        return None

    def _resort_active_iterations(self) -> None:
        new_priorities = list(self._buckets)

        for cursor in self._iterations:
            current = cursor.current
            # Finished iterations stay finished.
            if current is None:
                continue

            if not new_priorities:
                cursor.priorities = []
                cursor.position = 0
                continue

            snapshot = list(new_priorities)
            position = bisect_left(snapshot, current)
            if position == len(snapshot) or snapshot[position] != current:
                # Keep the executing priority as a placeholder so the next
                # advance lands on the first priority above it.
                snapshot.insert(position, current)
            cursor.priorities = snapshot
            cursor.position = position

        logger.debug("Resorted %s active iteration(s) against priorities %s", len(self._iterations), new_priorities)

    def apply(self, value: Any, args: list[Any]) -> Any:
        """Run every callback as a filter and return the threaded value."""
        if not self._buckets:
            return value

        args = list(args)
        cursor = IterationCursor(priorities=list(self._buckets))
        self._iterations.append(cursor)
        try:
            priority = cursor.current
            while priority is not None:
                value = self._run_bucket(priority, value, args)
                priority = cursor.advance()
        finally:
            self._iterations.pop()
        return value

    def _run_bucket(self, priority: int, value: Any, args: list[Any]) -> Any:
        bucket = self._buckets.get(priority)
        if bucket is None:
            return value

        for key in list(bucket):
            entry = self._buckets.get(priority, {}).get(key)
            if entry is None:
                continue
            if not self._doing_action:
                if args:
                    args[0] = value
                else:
                    args.append(value)
            value = entry.invoke(args)
        return value

    def run_action(self, args: list[Any]) -> None:
        previous = self._doing_action
        self._doing_action = True
        try:
            self.apply(None, args)
        finally:
            # Recursive actions keep the flag until the outermost one returns;
            # an action fired from inside a filter hands threading back to it.
            self._doing_action = previous if self._iterations else False

    def run_all(self, args: list[Any]) -> None:
        """Call every callback with the full argument list, ignoring arity."""
        if not self._buckets:
            return

        cursor = IterationCursor(priorities=list(self._buckets))
        self._iterations.append(cursor)
        try:
            priority = cursor.current
            while priority is not None:
                bucket = self._buckets.get(priority, {})
                for key in list(bucket):
                    entry = self._buckets.get(priority, {}).get(key)
                    if entry is not None:
                        entry.callback(*args)
                priority = cursor.advance()
        finally:
            self._iterations.pop()

    def current_priority(self) -> int | None:
        if not self._iterations:
            return None
        return self._iterations[-1].current

    @property
    def depth(self) -> int:
        return len(self._iterations)

    @property
    def is_dispatching(self) -> bool:
        return bool(self._iterations)

    @property
    def doing_action(self) -> bool:
        return self._doing_action

    def priorities(self) -> list[int]:
        return list(self._buckets)

    def callbacks_at(self, priority: int) -> dict[CallbackKey, CallbackEntry]:
        return dict(self._buckets.get(priority, {}))

    def entries(self) -> Iterator[tuple[int, CallbackKey, CallbackEntry]]:
        for priority, bucket in list(self._buckets.items()):
            for key, entry in list(bucket.items()):
                yield priority, key, entry

    def __contains__(self, priority: object) -> bool:
        return priority in self._buckets

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __bool__(self) -> bool:
        return bool(self._buckets)
