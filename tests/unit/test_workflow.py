"""Unit tests for GitHub Actions workflow generation."""

from __future__ import annotations

import pytest
import yaml

from githubcron.config import CronConfig
from githubcron.errors import ErrorCode, GithubCronError
from githubcron.types import JobDefinition, WorkflowOptions
from githubcron.workflow import DEFAULT_WORKFLOW_NAME, build_workflow, generate_github_workflow


def _noop(ctx):
    return None


def _jobs(**schedules) -> dict[str, JobDefinition]:
    return {name.replace("_", "-"): JobDefinition(schedule=value, handler=_noop) for name, value in schedules.items()}


def _config(**kwargs) -> CronConfig:
    kwargs.setdefault("secret", "s")
    if "base_url_env_var" not in kwargs:
        kwargs.setdefault("base_url", "https://example.com")
    return CronConfig(**kwargs)


def test_single_schedule_block_uses_bare_name() -> None:
    document = build_workflow(_jobs(cleanup="0 0 * * *"), _config())

    assert list(document["jobs"]) == ["trigger-cleanup"]
    block = document["jobs"]["trigger-cleanup"]
    assert block["runs-on"] == "ubuntu-latest"
    assert block["if"] == (
        "github.event_name == 'schedule' && github.event.schedule == '0 0 * * *'"
        " || github.event_name == 'workflow_dispatch'"
    )
    step = block["steps"][0]
    assert step["name"] == "Trigger cleanup"
    assert "https://example.com/api/cron/cleanup" in step["run"]
    assert 'X-Cron-Secret: ${{ secrets.GITHUBCRON_SECRET }}' in step["run"]
    assert step["continue-on-error"] is False


def test_multiple_schedules_get_suffixed_blocks() -> None:
    document = build_workflow(_jobs(report=["0 9 * * *", "0 17 * * *"]), _config())

    assert list(document["jobs"]) == ["trigger-report-1", "trigger-report-2"]
    assert "trigger-report" not in document["jobs"]
    first, second = document["jobs"].values()
    assert "github.event.schedule == '0 9 * * *'" in first["if"]
    assert "github.event.schedule == '0 17 * * *'" in second["if"]
    assert first["steps"][0]["name"] == "Trigger report (Schedule 1)"
    for block in (first, second):
        assert block["steps"][0]["run"].rstrip().endswith("https://example.com/api/cron/report")


def test_schedule_entries_deduped_within_job() -> None:
    document = build_workflow(
        _jobs(a=["0 0 * * *", "0 0 * * *"], b="0 0 * * *"),
        _config(),
    )
    assert document["on"]["schedule"] == [{"cron": "0 0 * * *"}, {"cron": "0 0 * * *"}]
    assert "workflow_dispatch" in document["on"]


def test_missing_base_url_raises() -> None:
    with pytest.raises(GithubCronError) as exc_info:
        build_workflow(_jobs(a="0 0 * * *"), CronConfig(secret="s"))
    assert exc_info.value.code is ErrorCode.MISSING_BASE_URL


@pytest.mark.parametrize("source", ["vars", "secrets"])
def test_base_url_env_var_renders_expression(source: str) -> None:
    config = _config(base_url_env_var="APP_URL", env_var_source=source)
    document = build_workflow(_jobs(a="0 0 * * *"), config)
    run = document["jobs"]["trigger-a"]["steps"][0]["run"]
    assert f"${{{{ {source}.APP_URL }}}}/api/cron/a" in run


def test_env_var_takes_precedence_over_literal() -> None:
    config = CronConfig(secret="s", base_url="https://literal.example", base_url_env_var="APP_URL")
    run = build_workflow(_jobs(a="0 0 * * *"), config)["jobs"]["trigger-a"]["steps"][0]["run"]
    assert "vars.APP_URL" in run
    assert "literal.example" not in run


def test_custom_cron_path() -> None:
    run = build_workflow(_jobs(a="0 0 * * *"), _config(cron_path="/hooks/cron/"))["jobs"]["trigger-a"]["steps"][0]["run"]
    assert "https://example.com/hooks/cron/a" in run


@pytest.mark.parametrize(("timeout", "minutes"), [(60, 1), (61, 2), (300, 5), (0.5, 1)])
def test_timeout_rounds_up_to_minutes(timeout: float, minutes: int) -> None:
    jobs = {"a": JobDefinition(schedule="0 0 * * *", handler=_noop, timeout=timeout)}
    assert build_workflow(jobs, _config())["jobs"]["trigger-a"]["timeout-minutes"] == minutes


def test_no_timeout_omits_key() -> None:
    assert "timeout-minutes" not in build_workflow(_jobs(a="0 0 * * *"), _config())["jobs"]["trigger-a"]


def test_retry_false_omits_continue_on_error() -> None:
    jobs = {"a": JobDefinition(schedule="0 0 * * *", handler=_noop, retry=False)}
    step = build_workflow(jobs, _config())["jobs"]["trigger-a"]["steps"][0]
    assert "continue-on-error" not in step


def test_workflow_name_resolution() -> None:
    jobs = _jobs(a="0 0 * * *")
    assert build_workflow(jobs, _config())["name"] == DEFAULT_WORKFLOW_NAME
    assert build_workflow(jobs, _config(), WorkflowOptions(name="Nightly"))["name"] == "Nightly"
    assert build_workflow(jobs, _config(name="Configured"), WorkflowOptions(name="Nightly"))["name"] == "Configured"


def test_options_shape_runner_env_and_secret_name() -> None:
    options = WorkflowOptions(runner="self-hosted", env={"TZ": "UTC"}, secret_name="MY_SECRET")
    document = build_workflow(_jobs(a="0 0 * * *"), _config(), options)

    assert document["env"] == {"TZ": "UTC"}
    block = document["jobs"]["trigger-a"]
    assert block["runs-on"] == "self-hosted"
    assert "${{ secrets.MY_SECRET }}" in block["steps"][0]["run"]


def test_no_env_key_without_env() -> None:
    assert "env" not in build_workflow(_jobs(a="0 0 * * *"), _config())


def test_yaml_parses_back_to_same_structure() -> None:
    jobs = _jobs(cleanup="0 0 * * *", report=["0 9 * * *", "0 17 * * *"])
    text = generate_github_workflow(jobs, _config())
    parsed = yaml.safe_load(text)

    assert parsed["name"] == DEFAULT_WORKFLOW_NAME
    assert parsed["on"]["schedule"] == [{"cron": "0 0 * * *"}, {"cron": "0 9 * * *"}, {"cron": "0 17 * * *"}]
    assert parsed["on"]["workflow_dispatch"] is None
    assert list(parsed["jobs"]) == ["trigger-cleanup", "trigger-report-1", "trigger-report-2"]
    assert "run: |" in text


def test_generation_is_deterministic() -> None:
    jobs = _jobs(cleanup="0 0 * * *", report=["0 9 * * *", "0 17 * * *"])
    config = _config()
    assert generate_github_workflow(jobs, config) == generate_github_workflow(jobs, config)


def test_empty_job_set_still_renders() -> None:
    document = build_workflow({}, _config())
    assert document["on"]["schedule"] == []
    assert document["jobs"] == {}


def test_colliding_block_ids_raise() -> None:
    jobs = {
        "a": JobDefinition(schedule=["0 9 * * *", "0 18 * * *"], handler=_noop),
        "a-1": JobDefinition(schedule="0 3 * * *", handler=_noop),
    }
    with pytest.raises(GithubCronError) as exc_info:
        build_workflow(jobs, _config())
    assert exc_info.value.code is ErrorCode.DUPLICATE_JOB
    assert exc_info.value.status_code == 500
    assert "trigger-a-1" in exc_info.value.message


def test_root_cron_path_has_no_double_slash() -> None:
    run = build_workflow(_jobs(a="0 0 * * *"), _config(cron_path="/"))["jobs"]["trigger-a"]["steps"][0]["run"]
    assert "https://example.com/a" in run
    assert "//a" not in run
