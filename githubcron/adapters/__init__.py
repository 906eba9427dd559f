"""Platform adapters translating native requests to CronRequest and back."""

from githubcron.adapters.asgi import create_asgi_app, extract_job_name_from_path
from githubcron.adapters.base import build_cron_request, to_json_response
from githubcron.adapters.starlette import create_starlette_app, create_starlette_endpoint

__all__ = [
    "build_cron_request",
    "create_asgi_app",
    "create_starlette_app",
    "create_starlette_endpoint",
    "extract_job_name_from_path",
    "to_json_response",
]
