"""Data models shared by the registry, dispatcher, workflow generator and adapters."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class JobStatus(str, Enum):
    """Lifecycle state of one job invocation."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class JobContext:
    """Per-invocation record passed to handlers and lifecycle observers.

    The builder functions in :mod:`githubcron.context` return new values;
    a context is never changed in place.
    """

    job_name: str
    started_at: datetime
    headers: Mapping[str, str]
    metadata: Mapping[str, Any] | None = None
    status: JobStatus = JobStatus.RUNNING
    duration_ms: int | None = None
    result: Any = None
    error: BaseException | None = None

    @property
    def finished(self) -> bool:
        return self.status is not JobStatus.RUNNING


JobHandler = Callable[[JobContext], Any | Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class JobDefinition:
    """A registered job: one or more schedules plus the handler to run.

    ``timeout`` (seconds) and ``retry`` are advisory and only shape the
    generated workflow; the dispatcher never enforces them.
    """

    schedule: str | Sequence[str]
    handler: JobHandler
    description: str | None = None
    timeout: int | float | None = None
    retry: bool = True

    @property
    def schedules(self) -> tuple[str, ...]:
        if isinstance(self.schedule, str):
            return (self.schedule,)
        return tuple(self.schedule)


@dataclass(slots=True)
class CronRequest:
    """Platform-independent inbound trigger."""

    job_name: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(slots=True)
class ResponseBody:
    success: bool
    message: str | None = None
    result: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            payload["message"] = self.message
        if self.result is not None:
            payload["result"] = self.result
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class CronResponse:
    """Platform-independent response produced by the dispatcher."""

    status: int
    body: ResponseBody
    headers: dict[str, str] | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True)
class WorkflowOptions:
    """Per-generation options for the GitHub Actions workflow."""

    name: str | None = None
    runner: str = "ubuntu-latest"
    env: dict[str, str] = field(default_factory=dict)
    secret_name: str = "GITHUBCRON_SECRET"
