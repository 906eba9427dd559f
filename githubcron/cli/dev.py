"""Local scheduler that imitates GitHub Actions during development."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx
from croniter import croniter  # type: ignore[import-untyped]
from rich.console import Console

from githubcron.app import ServerlessCron
from githubcron.security import SECRET_HEADER

logger = logging.getLogger(__name__)
console = Console()


@dataclass(slots=True)
class ScheduledTrigger:
    job_name: str
    schedule: str
    next_run: datetime


def resolve_dev_base_url(cron: ServerlessCron, fallback: str) -> str:
    """Prefer the value of ``base_url_env_var`` from the local environment."""
    env_var = cron.config.base_url_env_var
    if env_var:
        value = os.environ.get(env_var, "").strip()
        if value:
            console.print(f"Using {env_var}={value} from environment")
            return value
        console.print(f"[yellow]Environment variable {env_var} not found, using {fallback}[/yellow]")
    return fallback


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DevScheduler:
    """POST to the local cron endpoints whenever a schedule fires."""

    def __init__(
        self,
        cron: ServerlessCron,
        *,
        base_url: str,
        secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = _utcnow,
        sleeper: Callable[[float], Any] = asyncio.sleep,
    ) -> None:
        self._cron = cron
        self._base_url = base_url.rstrip("/")
        self._secret = secret
        self._transport = transport
        self._clock = clock
        self._sleeper = sleeper

    def job_url(self, job_name: str) -> str:
        return f"{self._base_url}{self._cron.cron_path}/{job_name}"

    def next_run(self, schedule: str, now: datetime | None = None) -> datetime:
        return croniter(schedule, now or self._clock()).get_next(datetime)

    def plan(self, now: datetime | None = None) -> list[ScheduledTrigger]:
        """Next fire time of every (job, schedule); unparsable schedules are skipped."""
        current = now or self._clock()
        triggers: list[ScheduledTrigger] = []
        for job_name, definition in self._cron.get_jobs().items():
            for schedule in definition.schedules:
                try:
                    next_run = self.next_run(schedule, current)
                except (ValueError, KeyError) as exc:
                    logger.error("dev_schedule_invalid job=%s schedule=%s error=%s", job_name, schedule, exc)
                    continue
                triggers.append(ScheduledTrigger(job_name=job_name, schedule=schedule, next_run=next_run))
        return triggers

    async def trigger_job(self, job_name: str) -> httpx.Response | None:
        url = self.job_url(job_name)
        logger.info("dev_trigger job=%s url=%s", job_name, url)
        headers = {SECRET_HEADER: self._secret, "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                response = await client.post(url, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("dev_trigger_failed job=%s error=%s", job_name, exc)
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.error("dev_trigger_non_json job=%s status=%s body=%s", job_name, response.status_code, response.text[:200])
            return response
        if isinstance(payload, dict) and payload.get("success"):
            logger.info("dev_trigger_complete job=%s status=%s result=%s", job_name, response.status_code, payload.get("result"))
        else:
            error = payload.get("error") if isinstance(payload, dict) else payload
            logger.error("dev_trigger_rejected job=%s status=%s error=%s", job_name, response.status_code, error)
        return response

    async def _run_schedule(self, trigger: ScheduledTrigger) -> None:
        next_run = trigger.next_run
        while True:
            delay = max(0.0, (next_run - self._clock()).total_seconds())
            await self._sleeper(delay)
            await self.trigger_job(trigger.job_name)
            # strictly after the tick that just fired
            next_run = self.next_run(trigger.schedule, max(self._clock(), next_run))
            console.print(f"{trigger.job_name} rescheduled for {next_run.isoformat()}")

    async def run(self) -> None:
        triggers = self.plan()
        if not triggers:
            console.print("[yellow]No cron jobs to schedule[/yellow]")
            return
        for trigger in triggers:
            console.print(f"{trigger.job_name} ({trigger.schedule}): next run at {trigger.next_run.isoformat()}")
        await asyncio.gather(*(self._run_schedule(trigger) for trigger in triggers))
