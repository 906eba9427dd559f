"""Translation between Starlette requests/responses and the normalized types."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import JSONResponse

from githubcron.errors import GithubCronError
from githubcron.security import validate_method
from githubcron.types import CronRequest, CronResponse

logger = logging.getLogger(__name__)


class CronRequestHandler(Protocol):
    """What an adapter needs from ServerlessCron."""

    @property
    def cron_path(self) -> str: ...

    async def handle_request(self, request: CronRequest) -> CronResponse: ...


async def parse_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or None when absent or not JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return await request.json()
    except ValueError:
        return None


async def build_cron_request(request: Request, job_name: str) -> CronRequest:
    return CronRequest(
        job_name=job_name,
        headers={key: value for key, value in request.headers.items()},
        body=await parse_json_body(request),
    )


def to_json_response(response: CronResponse) -> JSONResponse:
    """Serialize *response*; results such as datetimes or dataclasses are encoded first.

    A result that still cannot be encoded becomes a 500 JSON error instead of
    a plain-text server error.
    """
    try:
        payload = jsonable_encoder(response.body.to_dict())
        return JSONResponse(payload, status_code=response.status, headers=response.headers)
    except (TypeError, ValueError) as exc:
        logger.error("cron_response_not_serializable status=%s error=%s", response.status, exc)
        return error_json(500, f"Job result is not JSON serializable: {exc.__class__.__name__}")


def error_json(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code, headers=headers)


def method_not_allowed(request: Request) -> JSONResponse | None:
    """Return a 405 response for anything but POST, else None."""
    try:
        validate_method(request.method)
    except GithubCronError as exc:
        return error_json(exc.status_code, exc.message, headers={"Allow": "POST"})
    return None


async def dispatch(handler: CronRequestHandler, request: Request, job_name: str | None) -> JSONResponse:
    """Shared adapter flow: method check, job name check, engine call."""
    rejected = method_not_allowed(request)
    if rejected is not None:
        return rejected
    if not job_name:
        return error_json(400, f"Invalid path. Expected format: {handler.cron_path}/:job")
    cron_request = await build_cron_request(request, job_name)
    return to_json_response(await handler.handle_request(cron_request))
