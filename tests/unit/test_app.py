"""Unit tests for the ServerlessCron facade."""

from __future__ import annotations

import pytest
import yaml

from githubcron import CronConfig, JobContext, JobObserver, ServerlessCron, WorkflowOptions
from githubcron.errors import ErrorCode, GithubCronError


def test_decorator_registers_and_returns_function(cron: ServerlessCron) -> None:
    @cron.job("daily-cleanup", schedule="0 0 * * *")
    async def daily_cleanup(ctx: JobContext) -> None:
        """Purge expired rows."""

    jobs = cron.get_jobs()
    assert list(jobs) == ["daily-cleanup"]
    assert jobs["daily-cleanup"].handler is daily_cleanup
    assert jobs["daily-cleanup"].description == "Purge expired rows."


def test_direct_registration(cron: ServerlessCron) -> None:
    def report(ctx: JobContext) -> str:
        return "ok"

    assert cron.job("report", schedule=["0 9 * * *", "0 17 * * *"], handler=report, description="Twice daily") is None
    definition = cron.get_jobs()["report"]
    assert definition.schedules == ("0 9 * * *", "0 17 * * *")
    assert definition.description == "Twice daily"


def test_duplicate_registration_raises(cron: ServerlessCron) -> None:
    cron.job("a", schedule="0 0 * * *", handler=lambda ctx: None)
    with pytest.raises(GithubCronError) as exc_info:
        cron.job("a", schedule="0 1 * * *", handler=lambda ctx: None)
    assert exc_info.value.code is ErrorCode.DUPLICATE_JOB


def test_invalid_schedule_raises_from_decorator(cron: ServerlessCron) -> None:
    with pytest.raises(GithubCronError) as exc_info:

        @cron.job("a", schedule="every day")
        def a(ctx: JobContext) -> None:
            pass

    assert exc_info.value.code is ErrorCode.INVALID_CRON_EXPRESSION
    assert cron.get_jobs() == {}


@pytest.mark.asyncio
async def test_trigger_runs_job_with_callbacks(auth_headers: dict[str, str]) -> None:
    events: list[str] = []
    cron = ServerlessCron(
        secret="test-secret",
        base_url="https://example.com",
        on_job_start=lambda ctx: events.append(f"start:{ctx.job_name}"),
        on_job_complete=lambda ctx: events.append(f"complete:{ctx.result}"),
    )

    @cron.job("ping", schedule="*/5 * * * *")
    async def ping(ctx: JobContext) -> str:
        return "pong"

    response = await cron.trigger("ping", headers=auth_headers)
    assert response.status == 200
    assert response.body.result == "pong"
    assert events == ["start:ping", "complete:pong"]


@pytest.mark.asyncio
async def test_extra_observers_follow_callbacks(auth_headers: dict[str, str]) -> None:
    order: list[str] = []

    class Tracker(JobObserver):
        async def on_job_start(self, context: JobContext) -> None:
            order.append("observer")

    cron = ServerlessCron(
        secret="test-secret",
        base_url="https://example.com",
        on_job_start=lambda ctx: order.append("callback"),
        observers=[Tracker()],
    )
    cron.job("ping", schedule="* * * * *", handler=lambda ctx: None)

    await cron.trigger("ping", headers=auth_headers)
    assert order == ["callback", "observer"]


def test_config_and_options_merge() -> None:
    base = CronConfig(secret="s", base_url="https://a.example", name="nightly")
    cron = ServerlessCron(base, base_url="https://b.example")

    assert cron.config.base_url == "https://b.example"
    assert cron.config.name == "nightly"
    assert cron.workflow_file_name == "nightly.yml"


@pytest.mark.asyncio
async def test_from_config_reads_yaml_env_and_keywords(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings_file = tmp_path / "githubcron.yaml"
    settings_file.write_text("name: nightly\nsecret: yaml-secret\nbase_url: https://yaml.example\n", encoding="utf-8")
    monkeypatch.setenv("GITHUBCRON_SECRET", "env-secret")
    started: list[str] = []

    cron = ServerlessCron.from_config(
        settings_file,
        cron_path="/hooks",
        on_job_start=lambda ctx: started.append(ctx.job_name),
    )

    assert cron.config.secret == "env-secret"
    assert cron.config.base_url == "https://yaml.example"
    assert cron.cron_path == "/hooks"
    assert cron.workflow_file_name == "nightly.yml"
    cron.job("ping", schedule="* * * * *", handler=lambda ctx: None)
    response = await cron.trigger("ping", headers={"X-Cron-Secret": "env-secret"})
    assert response.status == 200
    assert started == ["ping"]


def test_from_config_uses_working_directory_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "githubcron.yaml").write_text("base_url: https://cwd.example\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert ServerlessCron.from_config(secret="s").config.base_url == "https://cwd.example"


def test_defaults() -> None:
    cron = ServerlessCron(secret="s")
    assert cron.cron_path == "/api/cron"
    assert cron.workflow_name == "cron-jobs"
    assert cron.workflow_file_name == "cron-jobs.yml"


def test_generate_github_workflow(cron: ServerlessCron) -> None:
    cron.job("cleanup", schedule="0 0 * * *", handler=lambda ctx: None, timeout=120)
    text = cron.generate_github_workflow(WorkflowOptions(name="Cron"))
    parsed = yaml.safe_load(text)

    assert parsed["name"] == "Cron"
    assert parsed["jobs"]["trigger-cleanup"]["timeout-minutes"] == 2
