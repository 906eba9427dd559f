"""FastAPI adapter."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from githubcron.adapters.base import CronRequestHandler, dispatch
from githubcron.adapters.starlette import TRIGGER_METHODS


def create_fastapi_router(handler: CronRequestHandler, path: str | None = None) -> APIRouter:
    """APIRouter exposing ``<cron_path>/{job}``; include it with ``app.include_router``."""
    prefix = (path if path is not None else handler.cron_path).rstrip("/")
    router = APIRouter()

    @router.api_route(f"{prefix}/{{job}}", methods=TRIGGER_METHODS, include_in_schema=True)
    async def trigger_cron_job(job: str, request: Request) -> JSONResponse:
        return await dispatch(handler, request, job.strip())

    return router
