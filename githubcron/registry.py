"""Insertion-ordered registry of named cron jobs."""

from __future__ import annotations

import logging
from threading import Lock

from githubcron.errors import ErrorCode, GithubCronError
from githubcron.types import JobDefinition

logger = logging.getLogger(__name__)


def is_valid_schedule(expression: str) -> bool:
    """Return True if *expression* has 5 or 6 whitespace-separated fields.

    Only the shape is checked; field values are not range-validated.
    """
    if not isinstance(expression, str):
        return False
    return len(expression.split()) in (5, 6)


class JobRegistry:
    """Registry for job definitions.

    Names are unique. Entries are immutable once registered and iterate in
    registration order.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, JobDefinition] = {}
        self._lock = Lock()

    @staticmethod
    def _check_name(name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("job name must be a non-empty string")
        if name != name.strip():
            raise ValueError(f"job name {name!r} must not have leading or trailing whitespace")

    def register(self, name: str, definition: JobDefinition) -> None:
        """Register *definition* under *name*.

        Raises:
            GithubCronError: ``DUPLICATE_JOB`` if the name is taken, or
                ``INVALID_CRON_EXPRESSION`` if any schedule is malformed.
                The registry is left unchanged in both cases.
        """
        self._check_name(name)
        if not callable(definition.handler):
            raise TypeError(f"handler for job '{name}' must be callable")
        schedules = definition.schedules

        with self._lock:
            if name in self._jobs:
                raise GithubCronError(f"Job \"{name}\" already exists", ErrorCode.DUPLICATE_JOB)
            if not schedules:
                raise GithubCronError(f"Job \"{name}\" has no schedule", ErrorCode.INVALID_CRON_EXPRESSION)
            for schedule in schedules:
                if not is_valid_schedule(schedule):
                    raise GithubCronError(f"Invalid cron expression: {schedule}", ErrorCode.INVALID_CRON_EXPRESSION)
            self._jobs[name] = definition

        logger.info("cron_job_registered name=%s schedules=%s", name, ", ".join(schedules))

    def get(self, name: str) -> JobDefinition | None:
        with self._lock:
            return self._jobs.get(name)

    def list(self) -> dict[str, JobDefinition]:
        """Return a snapshot copy of all registered jobs."""
        with self._lock:
            return dict(self._jobs)

    def names(self) -> list[str]:
        with self._lock:
            return list(self._jobs)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
