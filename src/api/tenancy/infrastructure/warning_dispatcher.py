"""Fire-and-forget dispatch of tenancy warnings.

Warnings are forwarded on the event loop so the triggering request never
waits on the health tracker, including requests that end in a 403.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class WarningDispatcher:
    """Runs coroutine functions as detached tasks.

    Holds a reference to every pending task until it finishes so tasks are
    not garbage collected mid-flight. ``drain`` waits for what is pending and
    is called on application shutdown.

    Synchronous route handlers run in a worker thread without an event loop;
    dispatches from there are handed to the loop registered with
    ``bind_loop``. The request scope dependency binds it on every request.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Register the application event loop for thread-side dispatches."""
        self._loop = loop

    def dispatch(
        self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> None:
        """Schedule ``func(*args, **kwargs)`` without awaiting it.

        Raises:
            RuntimeError: If called outside a running event loop and no loop
                has been bound.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if self._loop is None:
                raise
            self._loop.call_soon_threadsafe(self._schedule, func, args, kwargs)
            return
        self._schedule(func, args, kwargs)

    def _schedule(
        self,
        func: Callable[..., Awaitable[Any]],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        task = asyncio.get_running_loop().create_task(func(*args, **kwargs))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for all pending dispatches to finish."""
        if not self._tasks:
            return
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
