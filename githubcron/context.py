"""Builders for per-invocation job contexts."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from githubcron.types import JobContext, JobStatus


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def create_job_context(
    job_name: str,
    headers: Mapping[str, str],
    metadata: Mapping[str, Any] | None = None,
) -> JobContext:
    """Build the base context handed to ``on_job_start`` and the handler."""
    return JobContext(
        job_name=job_name,
        started_at=datetime.now(timezone.utc),
        headers=dict(headers),
        metadata=dict(metadata) if metadata is not None else None,
    )


def _elapsed_ms(started_ms: float, now_ms: float | None) -> int:
    current = monotonic_ms() if now_ms is None else now_ms
    return max(0, round(current - started_ms))


def complete_job_context(
    context: JobContext,
    result: Any,
    started_ms: float,
    *,
    now_ms: float | None = None,
) -> JobContext:
    """Return a copy of *context* marked successful with *result* and duration."""
    return replace(
        context,
        status=JobStatus.SUCCESS,
        result=result,
        duration_ms=_elapsed_ms(started_ms, now_ms),
    )


def fail_job_context(
    context: JobContext,
    error: BaseException,
    started_ms: float,
    *,
    now_ms: float | None = None,
) -> JobContext:
    """Return a copy of *context* marked failed with *error* and duration."""
    return replace(
        context,
        status=JobStatus.FAILED,
        error=error,
        duration_ms=_elapsed_ms(started_ms, now_ms),
    )
