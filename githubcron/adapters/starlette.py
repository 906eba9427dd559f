"""Starlette adapter: a route endpoint and a ready-made application."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from githubcron.adapters.base import CronRequestHandler, dispatch

TRIGGER_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_starlette_endpoint(handler: CronRequestHandler) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Endpoint reading the job name from the ``job`` path parameter.

    Mount it on a route such as ``/api/cron/{job}``.
    """

    async def endpoint(request: Request) -> JSONResponse:
        job_name = str(request.path_params.get("job", "")).strip()
        return await dispatch(handler, request, job_name)

    return endpoint


def create_route(handler: CronRequestHandler, path: str | None = None) -> Route:
    prefix = path if path is not None else handler.cron_path
    return Route(
        f"{prefix.rstrip('/')}/{{job}}",
        endpoint=create_starlette_endpoint(handler),
        methods=TRIGGER_METHODS,
    )


def create_starlette_app(handler: CronRequestHandler, path: str | None = None) -> Starlette:
    """Starlette application serving ``<cron_path>/{job}``."""
    return Starlette(routes=[create_route(handler, path)])
