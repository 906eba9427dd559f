"""CLI tools: githubcron init, generate, dev, test, list, secret."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from importlib import metadata
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from githubcron.app import ServerlessCron
from githubcron.cli.loader import DEFAULT_CONFIG, CronLoadError, load_cron, load_env_files
from githubcron.errors import GithubCronError
from githubcron.security import generate_secret

app = typer.Typer(
    name="githubcron",
    help="GitHub Actions powered cron jobs for serverless applications.",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}", soft_wrap=True)
    raise typer.Exit(code=1)


def _load(config: str) -> ServerlessCron:
    try:
        cron = load_cron(config)
    except CronLoadError as exc:
        _fail(str(exc))
    if cron.config.debug:
        logging.getLogger("githubcron").setLevel(logging.DEBUG)
    return cron


def _resolve_secret(secret: str) -> str:
    value = secret or os.environ.get("GITHUBCRON_SECRET", "")
    if not value:
        _fail("GITHUBCRON_SECRET not found. Provide it with --secret or the GITHUBCRON_SECRET environment variable.")
    return value


@app.callback()
def _root(
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit.", is_eager=True),
) -> None:
    if version:
        try:
            installed = metadata.version("githubcron")
        except metadata.PackageNotFoundError:
            installed = "unknown"
        console.print(f"githubcron {installed}")
        raise typer.Exit(code=0)


@app.command("init")
def init_command(
    framework: str = typer.Option("starlette", "--framework", "-f", help="starlette, fastapi or asgi"),
    directory: str = typer.Option(".", "--dir", "-d", help="Output directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Create cron_jobs.py, app.py, .env.example and githubcron.yaml."""
    from githubcron.cli.init_project import init_project_command

    try:
        init_project_command(framework=framework, directory=directory, force=force)
    except (ValueError, FileExistsError) as exc:
        _fail(str(exc))
    console.print("Next: set GITHUBCRON_SECRET in .env, then run `githubcron generate`.")


@app.command("generate")
def generate(
    config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Cron module path or dotted name"),
    output: str = typer.Option("", "--output", "-o", help="Workflow file path"),
) -> None:
    """Generate the GitHub Actions workflow from the registered jobs."""
    from githubcron.cli.generate import generate_command

    load_env_files()
    cron = _load(config)
    try:
        generate_command(cron, output=output or None)
    except GithubCronError as exc:
        _fail(exc.message)


@app.command("dev")
def dev(
    config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Cron module path or dotted name"),
    base_url: str = typer.Option("http://localhost:8000", "--base-url", "-u", help="Base URL of the local server"),
    secret: str = typer.Option("", "--secret", "-s", help="Secret token (defaults to GITHUBCRON_SECRET)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Trigger the local endpoints on schedule, like GitHub Actions would."""
    from githubcron.cli.dev import DevScheduler, resolve_dev_base_url

    _configure_logging(debug)
    loaded = load_env_files()
    if loaded is not None:
        console.print(f"Loaded {loaded.name}")
    cron = _load(config)
    scheduler = DevScheduler(
        cron,
        base_url=resolve_dev_base_url(cron, base_url),
        secret=_resolve_secret(secret),
    )
    console.print("Local cron worker is running. Press Ctrl+C to stop.")
    try:
        asyncio.run(scheduler.run())
    except KeyboardInterrupt:
        console.print("Stopping cron worker...")


@app.command("test")
def run_test_job(
    job_name: str = typer.Argument(..., help="Job to run"),
    config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Cron module path or dotted name"),
    secret: str = typer.Option("", "--secret", "-s", help="Secret token (defaults to GITHUBCRON_SECRET)"),
) -> None:
    """Run one job in-process and print the response."""
    from githubcron.cli.invoke import invoke_job_command

    load_env_files()
    cron = _load(config)
    response = invoke_job_command(cron, job_name, _resolve_secret(secret))
    if response.status != 200:
        raise typer.Exit(code=1)


@app.command("list")
def list_jobs(
    config: str = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Cron module path or dotted name"),
) -> None:
    """Show registered jobs and their schedules."""
    cron = _load(config)
    jobs = cron.get_jobs()
    if not jobs:
        console.print("[yellow]No cron jobs found[/yellow]")
        return
    table = Table(title=cron.workflow_name)
    table.add_column("Job")
    table.add_column("Schedule")
    table.add_column("Description")
    for name, definition in jobs.items():
        table.add_row(name, ", ".join(definition.schedules), definition.description or "")
    console.print(table)


@app.command("secret")
def secret_command(
    length: int = typer.Option(32, "--length", "-l", min=1, help="Number of random bytes"),
) -> None:
    """Print a new random secret for GITHUBCRON_SECRET."""
    typer.echo(generate_secret(length))


def main() -> None:
    """CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)
