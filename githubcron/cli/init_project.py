"""Scaffold cron job files for a new project."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from rich.console import Console

console = Console()

Framework = Literal["starlette", "fastapi", "asgi"]
FRAMEWORKS: tuple[str, ...] = ("starlette", "fastapi", "asgi")
_FRAMEWORK_LABELS = {"starlette": "Starlette", "fastapi": "FastAPI", "asgi": "a plain ASGI server"}


def _template_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "templates"


def _read_template(filename: str) -> str:
    template = _template_dir() / filename
    if not template.exists():
        raise FileNotFoundError(f"Template not found: {template}")
    return template.read_text(encoding="utf-8")


def init_project_command(framework: str = "starlette", directory: str = ".", force: bool = False) -> list[Path]:
    """Write cron_jobs.py, app.py, .env.example and githubcron.yaml into *directory*."""
    if framework not in FRAMEWORKS:
        raise ValueError(f"Unsupported framework '{framework}'. Choose one of: {', '.join(FRAMEWORKS)}")

    target_dir = Path(directory).resolve()
    target_dir.mkdir(parents=True, exist_ok=True)
    outputs = {
        target_dir / "cron_jobs.py": _read_template("cron_jobs.py.tmpl").replace(
            "{{FRAMEWORK}}", _FRAMEWORK_LABELS[framework]
        ),
        target_dir / "app.py": _read_template(f"app_{framework}.py.tmpl"),
    }
    for path in outputs:
        if path.exists() and not force:
            raise FileExistsError(f"File already exists: {path}")

    written: list[Path] = []
    for path, content in outputs.items():
        path.write_text(content, encoding="utf-8")
        console.print(f"[green]Created[/green] {path}")
        written.append(path)

    # settings files are never overwritten, even with --force
    for name, template in ((".env.example", "env.example.tmpl"), ("githubcron.yaml", "githubcron.yaml.tmpl")):
        settings_file = target_dir / name
        if settings_file.exists():
            continue
        settings_file.write_text(_read_template(template), encoding="utf-8")
        console.print(f"[green]Created[/green] {settings_file}")
        written.append(settings_file)
    return written
