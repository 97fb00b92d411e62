"""Adapter for callers that want ``callback(error, result)`` instead of awaiting."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

Callback = Callable[[BaseException | None, Any], None]


def with_callback(awaitable: Awaitable[T], callback: Callback) -> "asyncio.Future[T]":
    """Schedule ``awaitable`` on the running loop and report completion to ``callback``.

    Exactly one of ``error`` / ``result`` is meaningful: on success the callback
    receives ``(None, result)``, on failure ``(exc, None)``. Cancellation is
    reported as ``asyncio.CancelledError``. The returned future can still be
    awaited or cancelled by the caller.
    """
    future = asyncio.ensure_future(awaitable)

    def _done(fut: "asyncio.Future[T]") -> None:
        if fut.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        error = fut.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, fut.result())

    future.add_done_callback(_done)
    return future
