"""ServerlessCron - register jobs, serve triggers, generate the workflow."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from githubcron.config import CronConfig, load_config
from githubcron.dispatch import JobDispatcher
from githubcron.observers import CallbackObserver, JobObserver, LifecycleCallback
from githubcron.registry import JobRegistry
from githubcron.types import CronRequest, CronResponse, JobDefinition, JobHandler, WorkflowOptions
from githubcron.workflow import generate_github_workflow, workflow_file_name

if TYPE_CHECKING:
    from fastapi import APIRouter
    from starlette.applications import Starlette
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class ServerlessCron:
    """Entry point tying configuration, job registry and dispatcher together.

    Example::

        cron = ServerlessCron(secret=os.environ["GITHUBCRON_SECRET"], base_url="https://my-app.com")

        @cron.job("daily-cleanup", schedule="0 0 * * *")
        async def daily_cleanup(ctx):
            return {"deleted": await purge_old_rows()}

        app = cron.starlette_app()
    """

    def __init__(
        self,
        config: CronConfig | None = None,
        *,
        registry: JobRegistry | None = None,
        on_job_start: LifecycleCallback | None = None,
        on_job_complete: LifecycleCallback | None = None,
        on_job_error: LifecycleCallback | None = None,
        observers: Sequence[JobObserver] = (),
        log: logging.Logger | None = None,
        **options: Any,
    ) -> None:
        if config is not None and options:
            config = CronConfig(**{**config.model_dump(), **options})
        self.config = config if config is not None else CronConfig(**options)
        self.registry = registry if registry is not None else JobRegistry()
        self._logger = log if log is not None else logger

        all_observers: list[JobObserver] = []
        callbacks = CallbackObserver(
            on_job_start=on_job_start,
            on_job_complete=on_job_complete,
            on_job_error=on_job_error,
        )
        if not callbacks.empty:
            all_observers.append(callbacks)
        all_observers.extend(observers)
        self.dispatcher = JobDispatcher(
            self.registry,
            secret=self.config.secret,
            observers=all_observers,
            log=self._logger,
        )

    @classmethod
    def from_config(cls, path: str | Path | None = None, **kwargs: Any) -> ServerlessCron:
        """Build from githubcron.yaml and ``GITHUBCRON_*`` environment variables.

        Keyword arguments naming a CronConfig field override the file and the
        environment; the remaining ones go to the constructor.

        Raises:
            ConfigLoadError: if the YAML file exists but is malformed.
        """
        fields = {key: kwargs.pop(key) for key in list(kwargs) if key in CronConfig.model_fields}
        return cls(load_config(path, **fields), **kwargs)

    @property
    def cron_path(self) -> str:
        return self.config.cron_path

    @property
    def workflow_name(self) -> str:
        return self.config.workflow_name

    @property
    def workflow_file_name(self) -> str:
        return workflow_file_name(self.config)

    def job(
        self,
        name: str,
        *,
        schedule: str | Sequence[str],
        handler: JobHandler | None = None,
        description: str | None = None,
        timeout: int | float | None = None,
        retry: bool = True,
    ) -> Any:
        """Register a job, directly or as a decorator.

        With ``handler`` given the job is registered immediately. Without it
        a decorator is returned that registers the decorated function and
        hands it back unchanged::

            @cron.job("send-emails", schedule="0 9 * * *")
            async def send_emails(ctx):
                ...

        Raises:
            GithubCronError: ``DUPLICATE_JOB`` or ``INVALID_CRON_EXPRESSION``.
        """

        def _register(fn: JobHandler) -> JobHandler:
            doc = (getattr(fn, "__doc__", None) or "").strip() or None
            self.registry.register(
                name,
                JobDefinition(
                    schedule=schedule,
                    handler=fn,
                    description=description if description is not None else doc,
                    timeout=timeout,
                    retry=retry,
                ),
            )
            return fn

        if handler is not None:
            _register(handler)
            return None
        return _register

    def add_observer(self, observer: JobObserver) -> None:
        self.dispatcher.add_observer(observer)

    def get_jobs(self) -> dict[str, JobDefinition]:
        return self.registry.list()

    async def handle_request(self, request: CronRequest) -> CronResponse:
        return await self.dispatcher.handle_request(request)

    async def trigger(self, job_name: str, headers: dict[str, str] | None = None, body: Any = None) -> CronResponse:
        """Shortcut for ``handle_request(CronRequest(...))``."""
        return await self.handle_request(CronRequest(job_name=job_name, headers=dict(headers or {}), body=body))

    def generate_github_workflow(self, options: WorkflowOptions | None = None) -> str:
        return generate_github_workflow(self.registry.list(), self.config, options)

    def starlette_app(self) -> Starlette:
        from githubcron.adapters.starlette import create_starlette_app

        return create_starlette_app(self)

    def starlette_endpoint(self) -> Callable[..., Any]:
        from githubcron.adapters.starlette import create_starlette_endpoint

        return create_starlette_endpoint(self)

    def fastapi_router(self) -> APIRouter:
        from githubcron.adapters.fastapi import create_fastapi_router

        return create_fastapi_router(self)

    def asgi_app(self) -> ASGIApp:
        from githubcron.adapters.asgi import create_asgi_app

        return create_asgi_app(self)
