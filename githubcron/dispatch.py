"""Dispatch engine: authenticate a trigger, run the job, report the outcome."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence

from githubcron.context import complete_job_context, create_job_context, fail_job_context, monotonic_ms
from githubcron.errors import ErrorCode, GithubCronError
from githubcron.observers import JobObserver
from githubcron.registry import JobRegistry
from githubcron.security import validate_secret
from githubcron.types import CronRequest, CronResponse, JobContext, JobDefinition, ResponseBody

logger = logging.getLogger(__name__)

SECRET_NOT_CONFIGURED = "GITHUBCRON_SECRET is not configured. Set it in your ServerlessCron options."


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _error_response(status: int, message: str) -> CronResponse:
    return CronResponse(status=status, body=ResponseBody(success=False, error=message))


class JobDispatcher:
    """Turn a :class:`CronRequest` into exactly one handler run and a response.

    ``handle_request`` never raises for ordinary exceptions: secret and
    lookup failures map to their structured status, handler failures to 500,
    and observer failures to 500 without a second lifecycle event.
    """

    def __init__(
        self,
        registry: JobRegistry,
        *,
        secret: str,
        observers: Sequence[JobObserver] = (),
        clock: Callable[[], float] = monotonic_ms,
        log: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._secret = secret
        self._observers: list[JobObserver] = list(observers)
        self._clock = clock
        self._logger = log if log is not None else logger

    @property
    def registry(self) -> JobRegistry:
        return self._registry

    def add_observer(self, observer: JobObserver) -> None:
        self._observers.append(observer)

    async def handle_request(self, request: CronRequest) -> CronResponse:
        if not self._secret:
            self._logger.error("cron_dispatch_rejected job=%s reason=secret_not_configured", request.job_name)
            return _error_response(500, SECRET_NOT_CONFIGURED)

        try:
            validate_secret(request.headers, self._secret)
            definition = self._registry.get(request.job_name)
            if definition is None:
                raise GithubCronError(f"Job \"{request.job_name}\" not found", ErrorCode.JOB_NOT_FOUND)
        except GithubCronError as exc:
            self._logger.warning(
                "cron_dispatch_rejected job=%s code=%s status=%s",
                request.job_name,
                exc.code.value,
                exc.status_code,
            )
            return _error_response(exc.status_code, exc.message)

        try:
            return await self._execute(request, definition)
        except Exception as exc:
            self._logger.exception("cron_dispatch_failed job=%s", request.job_name)
            return _error_response(500, _describe(exc))

    async def _execute(self, request: CronRequest, definition: JobDefinition) -> CronResponse:
        job_name = request.job_name
        started_ms = self._clock()
        context = create_job_context(job_name, request.headers)

        observer_error = await self._notify("on_job_start", context)
        if observer_error is not None:
            return _error_response(500, _describe(observer_error))

        self._logger.info("cron_job_start job=%s", job_name)
        try:
            result = definition.handler(context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            failed = fail_job_context(context, exc, started_ms, now_ms=self._clock())
            self._logger.error(
                "cron_job_failed job=%s duration_ms=%s error=%s",
                job_name,
                failed.duration_ms,
                _describe(exc),
            )
            observer_error = await self._notify("on_job_error", failed)
            if observer_error is not None:
                return _error_response(500, _describe(observer_error))
            return _error_response(500, _describe(exc))

        completed = complete_job_context(context, result, started_ms, now_ms=self._clock())
        self._logger.info("cron_job_complete job=%s duration_ms=%s", job_name, completed.duration_ms)
        observer_error = await self._notify("on_job_complete", completed)
        if observer_error is not None:
            return _error_response(500, _describe(observer_error))

        return CronResponse(
            status=200,
            body=ResponseBody(
                success=True,
                message=f"Job \"{job_name}\" executed successfully",
                result=result,
            ),
        )

    async def _notify(self, hook: str, context: JobContext) -> Exception | None:
        for observer in self._observers:
            try:
                await getattr(observer, hook)(context)
            except Exception as exc:
                self._logger.exception("cron_observer_failed job=%s hook=%s", context.job_name, hook)
                return exc
        return None
