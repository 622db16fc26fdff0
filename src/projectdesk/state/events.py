"""Listener plumbing shared by the stores."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

Listener = Callable[[], None]


class Notifier(Protocol):
    """Transient user-facing notifications (toasts)."""

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


async def maybe_await(result: Awaitable[Any] | Any) -> Any:
    """Await *result* if it is awaitable, so callbacks may be sync or async."""
    if inspect.isawaitable(result):
        return await result
    return result


class Observable:
    """Minimal change notification for view state."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def changed(self) -> None:
        for listener in list(self._listeners):
            listener()
