"""Cancellation signal threaded through a call."""

import asyncio
import inspect
import logging
from typing import Awaitable, TypeVar

logger = logging.getLogger("restcall")

T = TypeVar("T")


def raise_if_cancelled(cancel: asyncio.Event | None) -> None:
    """Raise asyncio.CancelledError if the signal is set."""
    if cancel is not None and cancel.is_set():
        raise asyncio.CancelledError("Request cancelled")


async def run_cancellable(awaitable: Awaitable[T], cancel: asyncio.Event | None) -> T:
    """Await ``awaitable`` unless ``cancel`` is set first.

    If the signal is set before or while the awaitable runs, the awaitable is
    cancelled and asyncio.CancelledError is raised, whatever it would have
    returned. Cancelling the calling task cancels the awaitable as well.
    """
    if cancel is not None and cancel.is_set():
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise asyncio.CancelledError("Request cancelled")
    if cancel is None:
        return await awaitable

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise

    if cancel.is_set():
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Cancelled operation failed while stopping: {e}")
        raise asyncio.CancelledError("Request cancelled")

    waiter.cancel()
    return task.result()
