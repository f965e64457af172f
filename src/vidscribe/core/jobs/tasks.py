from __future__ import annotations

import asyncio
from typing import Any, Coroutine, Set

from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.tasks")


class TaskHandle:
    """
    Cancellable handle for a coroutine scheduled on the running loop.

    cancel() is idempotent; after it returns, the coroutine never resumes past
    its current await point.
    """

    def __init__(self, task: "asyncio.Task[Any]", *, name: str) -> None:
        self.name = name
        self._task = task
        self._cancel_requested = False
        task.add_done_callback(self._log_outcome)

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested or self._task.cancelled()

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> bool:
        if self._cancel_requested or self._task.done():
            return False
        self._cancel_requested = True
        self._task.cancel()
        return True

    async def wait(self) -> None:
        """Wait for the task to settle without propagating its outcome."""
        if self._task.done():
            return
        await asyncio.wait({self._task})

    def _log_outcome(self, task: "asyncio.Task[Any]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("TASK_FAILED name=%s err=%r", self.name, exc)


def spawn(coro: Coroutine[Any, Any, Any], *, name: str) -> TaskHandle:
    loop = asyncio.get_running_loop()
    return TaskHandle(loop.create_task(coro, name=name), name=name)


class TaskSet:
    """Owner-scoped set of handles; cancel_all() guarantees nothing outlives the owner."""

    def __init__(self) -> None:
        self._handles: Set[TaskHandle] = set()

    def track(self, handle: TaskHandle) -> TaskHandle:
        self._handles.add(handle)
        handle._task.add_done_callback(lambda _t: self._handles.discard(handle))
        return handle

    def __len__(self) -> int:
        return len(self._handles)

    async def cancel_all(self) -> int:
        handles = list(self._handles)
        for h in handles:
            h.cancel()
        for h in handles:
            await h.wait()
        return len(handles)
