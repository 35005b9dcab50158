from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger("actiongate.scheduler")

Job = Callable[[], Awaitable[Any]]


class ScheduledHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        ...


class Scheduler(ABC):
    """
    Timer abstraction used by the trust registry refresh loop.

    Implementations run `job` once after `delay` seconds. Tests substitute a
    scheduler that fires jobs on demand.
    """

    @abstractmethod
    def call_later(self, delay: float, job: Job) -> ScheduledHandle:
        raise NotImplementedError


class _AsyncioHandle(ScheduledHandle):
    def __init__(self) -> None:
        self.timer: Optional[asyncio.TimerHandle] = None
        self.task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
        if self.task is not None and not self.task.done():
            self.task.cancel()


class AsyncioScheduler(Scheduler):
    """Runs jobs as tasks on the running event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, job: Job) -> ScheduledHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle = _AsyncioHandle()

        def _fire() -> None:
            handle.task = loop.create_task(self._run(job))

        handle.timer = loop.call_later(delay, _fire)
        return handle

    @staticmethod
    async def _run(job: Job) -> None:
        try:
            await job()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled job failed")
