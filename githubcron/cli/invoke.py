"""Run one job in-process through the dispatcher."""

from __future__ import annotations

import asyncio
import json
import time

from rich.console import Console

from githubcron.app import ServerlessCron
from githubcron.security import SECRET_HEADER
from githubcron.types import CronResponse

console = Console()


def invoke_job_command(cron: ServerlessCron, job_name: str, secret: str) -> CronResponse:
    console.print(f"Testing job: {job_name}")
    started = time.monotonic()
    response = asyncio.run(
        cron.trigger(
            job_name,
            headers={SECRET_HEADER.lower(): secret, "content-type": "application/json"},
            body={},
        )
    )
    elapsed_ms = round((time.monotonic() - started) * 1000)
    rendered = json.dumps(response.body.to_dict(), indent=2, default=str)
    if response.status == 200:
        console.print(f"[green]Job completed successfully in {elapsed_ms}ms[/green]")
    else:
        console.print(f"[red]Job failed with status {response.status}[/red]")
    console.print(rendered, markup=False)
    return response
