"""GitHub Actions workflow generation from registered jobs.

The output is a pure function of the job mapping and configuration: no
clock, randomness or environment lookups are involved.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import yaml  # type: ignore[import-untyped]

from githubcron.config import CronConfig
from githubcron.errors import ErrorCode, GithubCronError
from githubcron.security import SECRET_HEADER
from githubcron.types import JobDefinition, WorkflowOptions

DEFAULT_WORKFLOW_NAME = "Serverless Cron Jobs"


class _LiteralStr(str):
    """String rendered as a YAML literal block."""


class _WorkflowDumper(yaml.SafeDumper):
    pass


def _represent_literal(dumper: yaml.SafeDumper, value: _LiteralStr) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(value), style="|")


_WorkflowDumper.add_representer(_LiteralStr, _represent_literal)


def resolve_base_url(config: CronConfig) -> str:
    """Return the base URL expression used inside the workflow."""
    if config.base_url_env_var:
        return f"${{{{ {config.env_var_source}.{config.base_url_env_var} }}}}"
    if config.base_url:
        return config.base_url
    raise GithubCronError(
        "Either base_url or base_url_env_var is required to generate GitHub workflow",
        ErrorCode.MISSING_BASE_URL,
    )


def workflow_file_name(config: CronConfig) -> str:
    return f"{config.workflow_name}.yml"


def _curl_command(url: str, secret_name: str) -> _LiteralStr:
    lines = [
        "curl -X POST \\",
        f"  -H \"{SECRET_HEADER}: ${{{{ secrets.{secret_name} }}}}\" \\",
        "  -H \"Content-Type: application/json\" \\",
        "  -f \\",
        f"  {url}",
    ]
    return _LiteralStr("\n".join(lines) + "\n")


def _trigger_block(
    job_name: str,
    definition: JobDefinition,
    schedule: str,
    index: int,
    total: int,
    url: str,
    options: WorkflowOptions,
) -> dict[str, Any]:
    step_name = f"Trigger {job_name}" + (f" (Schedule {index + 1})" if total > 1 else "")
    step: dict[str, Any] = {
        "name": step_name,
        "run": _curl_command(url, options.secret_name),
    }
    if definition.retry is not False:
        step["continue-on-error"] = False

    block: dict[str, Any] = {"runs-on": options.runner}
    if definition.timeout:
        block["timeout-minutes"] = math.ceil(definition.timeout / 60)
    block["if"] = (
        f"github.event_name == 'schedule' && github.event.schedule == '{schedule}'"
        " || github.event_name == 'workflow_dispatch'"
    )
    block["steps"] = [step]
    return block


def build_workflow(
    jobs: Mapping[str, JobDefinition],
    config: CronConfig,
    options: WorkflowOptions | None = None,
) -> dict[str, Any]:
    """Project registered jobs into a GitHub Actions workflow mapping.

    Each schedule of a job gets its own trigger block. A job with a single
    schedule keeps its bare name; with several, blocks are suffixed ``-1``,
    ``-2``, ... All blocks of a job POST to the same URL.

    Raises:
        GithubCronError: ``MISSING_BASE_URL`` without a base URL, or
            ``DUPLICATE_JOB`` when two jobs map to the same block id
            (``a`` with two schedules and a job named ``a-1``).
    """
    opts = options or WorkflowOptions()
    base_url = resolve_base_url(config)
    name = config.name or opts.name or DEFAULT_WORKFLOW_NAME

    cron_entries: list[dict[str, str]] = []
    trigger_blocks: dict[str, dict[str, Any]] = {}
    for job_name, definition in jobs.items():
        schedules = definition.schedules
        seen: set[str] = set()
        for schedule in schedules:
            if schedule not in seen:
                seen.add(schedule)
                cron_entries.append({"cron": schedule})

        url = f"{base_url}{config.cron_path}/{job_name}"
        for index, schedule in enumerate(schedules):
            block_id = f"{job_name}-{index + 1}" if len(schedules) > 1 else job_name
            block_key = f"trigger-{block_id}"
            if block_key in trigger_blocks:
                raise GithubCronError(
                    f"Trigger block id \"{block_key}\" for job \"{job_name}\" collides with another job",
                    ErrorCode.DUPLICATE_JOB,
                )
            trigger_blocks[block_key] = _trigger_block(
                job_name, definition, schedule, index, len(schedules), url, opts
            )

    document: dict[str, Any] = {
        "name": name,
        "on": {
            "schedule": cron_entries,
            "workflow_dispatch": None,
        },
    }
    if opts.env:
        document["env"] = dict(opts.env)
    document["jobs"] = trigger_blocks
    return document


def generate_github_workflow(
    jobs: Mapping[str, JobDefinition],
    config: CronConfig,
    options: WorkflowOptions | None = None,
) -> str:
    """Render :func:`build_workflow` as YAML text."""
    document = build_workflow(jobs, config, options)
    return yaml.dump(
        document,
        Dumper=_WorkflowDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
