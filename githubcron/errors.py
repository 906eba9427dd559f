"""Structured errors raised by githubcron.

Every structured failure carries a stable ``code`` and the HTTP status the
dispatcher reports for it. Handler exceptions are never wrapped in these.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Kinds of structured failures."""

    MISSING_SECRET = "MISSING_SECRET"
    INVALID_SECRET = "INVALID_SECRET"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    JOB_NOT_FOUND = "JOB_NOT_FOUND"
    DUPLICATE_JOB = "DUPLICATE_JOB"
    INVALID_CRON_EXPRESSION = "INVALID_CRON_EXPRESSION"
    MISSING_BASE_URL = "MISSING_BASE_URL"


DEFAULT_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.MISSING_SECRET: 401,
    ErrorCode.INVALID_SECRET: 403,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.JOB_NOT_FOUND: 404,
    ErrorCode.DUPLICATE_JOB: 500,
    ErrorCode.INVALID_CRON_EXPRESSION: 500,
    ErrorCode.MISSING_BASE_URL: 500,
}


class GithubCronError(Exception):
    """Failure with its own error code and response status."""

    def __init__(self, message: str, code: ErrorCode, status_code: int | None = None) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code if status_code is not None else DEFAULT_STATUS_CODES[code]
        super().__init__(message)

    def __repr__(self) -> str:
        return f"GithubCronError(code={self.code.value}, status_code={self.status_code}, message={self.message!r})"
