"""Bare ASGI adapter for hosts without a routing framework.

The job name is taken from the request path relative to ``cron_path``,
so ``POST /api/cron/send-emails`` runs ``send-emails``.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from githubcron.adapters.base import CronRequestHandler, dispatch, error_json


def extract_job_name_from_path(pathname: str, cron_path: str) -> str | None:
    base = cron_path.rstrip("/")
    if not pathname.startswith(base):
        return None
    remainder = pathname[len(base) :]
    if remainder and not remainder.startswith("/"):
        return None
    job_name = remainder.strip("/")
    return job_name or None


def create_asgi_app(handler: CronRequestHandler) -> ASGIApp:
    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return
        request = Request(scope, receive)
        job_name = extract_job_name_from_path(request.url.path, handler.cron_path)
        if job_name is None:
            response = error_json(400, f"Invalid path. Expected format: {handler.cron_path}/:job")
        else:
            response = await dispatch(handler, request, job_name)
        await response(scope, receive, send)

    return app
