"""Detached best-effort tasks.

``BestEffortTasks.spawn`` schedules a coroutine that nobody awaits for
its result. Exceptions it raises are logged and dropped; they never
reach the code that spawned it. The registry keeps a strong reference
to every pending task so the event loop cannot garbage-collect it
mid-flight, and ``drain()`` lets shutdown paths and tests wait for the
outstanding work.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BestEffortTasks:
    """Registry of fire-and-forget tasks with logged failures."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        """Run *coro* in the background. Failures are logged, not raised."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every spawned task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Best-effort task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                "Best-effort task %s failed: %s",
                task.get_name(),
                exc,
                exc_info=exc,
            )
