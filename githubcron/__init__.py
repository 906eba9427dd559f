"""GitHub Actions powered cron jobs for serverless applications."""

from githubcron.app import ServerlessCron
from githubcron.config import CronConfig, load_config
from githubcron.context import complete_job_context, create_job_context, fail_job_context
from githubcron.dispatch import JobDispatcher
from githubcron.errors import ErrorCode, GithubCronError
from githubcron.observers import CallbackObserver, JobObserver
from githubcron.registry import JobRegistry, is_valid_schedule
from githubcron.security import generate_secret, validate_method, validate_secret
from githubcron.types import (
    CronRequest,
    CronResponse,
    JobContext,
    JobDefinition,
    JobStatus,
    ResponseBody,
    WorkflowOptions,
)
from githubcron.workflow import build_workflow, generate_github_workflow

__all__ = [
    "CallbackObserver",
    "CronConfig",
    "CronRequest",
    "CronResponse",
    "ErrorCode",
    "GithubCronError",
    "JobContext",
    "JobDefinition",
    "JobDispatcher",
    "JobObserver",
    "JobRegistry",
    "JobStatus",
    "ResponseBody",
    "ServerlessCron",
    "WorkflowOptions",
    "build_workflow",
    "complete_job_context",
    "create_job_context",
    "fail_job_context",
    "generate_github_workflow",
    "generate_secret",
    "is_valid_schedule",
    "load_config",
    "validate_method",
    "validate_secret",
]
