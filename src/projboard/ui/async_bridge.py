"""Run dashboard commands as tracked tasks on the running asyncio loop."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

logger = logging.getLogger(__name__)
_SCHEDULED_TASKS: set[asyncio.Task[Any]] = set()

P = ParamSpec("P")
T = TypeVar("T")


def async_command(
    func: Callable[P, Coroutine[Any, Any, T]],
) -> Callable[P, asyncio.Task[T]]:
    """Make a coroutine function callable from synchronous UI code.

    Each call starts a tracked task and returns it::

        @async_command
        async def on_refresh_clicked() -> None:
            await controller.refresh()
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> asyncio.Task[T]:
        return schedule(func(*args, **kwargs))

    return wrapper


def schedule(coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
    """Start ``coro`` on the running loop and keep a reference until it finishes."""
    task = asyncio.create_task(coro)
    _SCHEDULED_TASKS.add(task)
    task.add_done_callback(_on_task_done)
    return task


def pending_tasks() -> list[asyncio.Task[Any]]:
    return [task for task in _SCHEDULED_TASKS if not task.done()]


async def drain() -> None:
    """Wait until no tracked task is left running, including ones started meanwhile."""
    while tasks := pending_tasks():
        await asyncio.gather(*tasks, return_exceptions=True)


def cancel_all_tasks() -> int:
    """Cancel every tracked task except the caller's; returns how many were cancelled."""
    current = asyncio.current_task()
    cancelled = 0
    for task in list(_SCHEDULED_TASKS):
        if task is not current and task.cancel():
            cancelled += 1
    return cancelled


def _on_task_done(task: asyncio.Task[Any]) -> None:
    _SCHEDULED_TASKS.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Unhandled exception in async command %s", task.get_name(), exc_info=exc)
