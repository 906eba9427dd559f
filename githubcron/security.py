"""Request authentication helpers for cron trigger endpoints."""

from __future__ import annotations

import hmac
import secrets
from collections.abc import Mapping

from githubcron.errors import ErrorCode, GithubCronError

SECRET_HEADER = "X-Cron-Secret"


def _normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {str(key).lower(): value for key, value in headers.items()}


def validate_secret(headers: Mapping[str, str], expected_secret: str) -> bool:
    """Check the ``X-Cron-Secret`` header against *expected_secret*.

    Header names are matched case-insensitively. Returns True or raises
    :class:`GithubCronError` with ``MISSING_SECRET`` (401) or
    ``INVALID_SECRET`` (403).
    """
    provided = _normalize_headers(headers).get(SECRET_HEADER.lower())
    if not provided:
        raise GithubCronError(f"Missing {SECRET_HEADER} header", ErrorCode.MISSING_SECRET)
    if not hmac.compare_digest(provided.encode("utf-8"), expected_secret.encode("utf-8")):
        raise GithubCronError("Invalid secret token", ErrorCode.INVALID_SECRET)
    return True


def validate_method(method: str) -> bool:
    """Only POST may trigger a job."""
    if method.upper() != "POST":
        raise GithubCronError("Method not allowed. Only POST is supported.", ErrorCode.METHOD_NOT_ALLOWED)
    return True


def generate_secret(length: int = 32) -> str:
    """Return a random hex token built from *length* random bytes."""
    if length < 1:
        raise ValueError("length must be positive")
    return secrets.token_hex(length)
