"""Awaitable helpers: resolve or discard middleware results uniformly.

Middleware can be ``def`` or ``async def``. The asynchronous driver
awaits whatever comes back; the synchronous driver must refuse it and
make sure the refused object does not leak a "never awaited" warning.
This module keeps both checks in exactly one place.

Usage::

    from waypoint._internal.invoke import discard, resolve

    result = await resolve(pending)
"""

import asyncio
import inspect
from typing import Any


def is_pending(value: Any) -> bool:
    """True if *value* is an awaitable the caller would have to wait on."""
    return inspect.isawaitable(value)


async def resolve(value: Any) -> Any:
    """Await *value* if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def discard(value: Any) -> None:
    """Drop a pending value the synchronous driver refused.

    Coroutines are closed so they never run; futures and tasks are
    cancelled. Other awaitables are left to the garbage collector.
    """
    if inspect.iscoroutine(value):
        value.close()
    elif asyncio.isfuture(value):
        if not value.done():
            value.cancel()
        elif not value.cancelled():
            # Mark a stored exception as retrieved
            value.exception()
