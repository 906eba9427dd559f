"""Lifecycle observers notified around each job invocation."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from githubcron.types import JobContext

LifecycleCallback = Callable[[JobContext], Awaitable[None] | None]


async def notify(callback: Callable[[JobContext], Any], context: JobContext) -> None:
    """Invoke a sync or async callback and wait for it to finish."""
    outcome = callback(context)
    if inspect.isawaitable(outcome):
        await outcome


class JobObserver:
    """Observer contract. Subclasses override only the hooks they need."""

    async def on_job_start(self, context: JobContext) -> None:
        return None

    async def on_job_complete(self, context: JobContext) -> None:
        return None

    async def on_job_error(self, context: JobContext) -> None:
        return None


class CallbackObserver(JobObserver):
    """Adapt up to three plain callbacks to the observer contract."""

    def __init__(
        self,
        *,
        on_job_start: LifecycleCallback | None = None,
        on_job_complete: LifecycleCallback | None = None,
        on_job_error: LifecycleCallback | None = None,
    ) -> None:
        self._on_job_start = on_job_start
        self._on_job_complete = on_job_complete
        self._on_job_error = on_job_error

    @property
    def empty(self) -> bool:
        return self._on_job_start is None and self._on_job_complete is None and self._on_job_error is None

    async def on_job_start(self, context: JobContext) -> None:
        if self._on_job_start is not None:
            await notify(self._on_job_start, context)

    async def on_job_complete(self, context: JobContext) -> None:
        if self._on_job_complete is not None:
            await notify(self._on_job_complete, context)

    async def on_job_error(self, context: JobContext) -> None:
        if self._on_job_error is not None:
            await notify(self._on_job_error, context)
