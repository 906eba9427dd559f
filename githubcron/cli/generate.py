"""Write the GitHub Actions workflow for the registered jobs."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from githubcron.app import ServerlessCron

console = Console()

WORKFLOWS_DIR = Path(".github") / "workflows"


def find_git_root(start: str | Path) -> Path | None:
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def resolve_output_path(cron: ServerlessCron, output: str | None, cwd: Path | None = None) -> Path:
    """Relative paths resolve against the git root, falling back to *cwd*."""
    base_dir = cwd if cwd is not None else Path.cwd()
    target = Path(output) if output else WORKFLOWS_DIR / cron.workflow_file_name
    if target.is_absolute():
        return target
    git_root = find_git_root(base_dir)
    if git_root is None:
        console.print("[yellow]Could not find git root, using current directory[/yellow]")
        return (base_dir / target).resolve()
    return git_root / target


def generate_command(cron: ServerlessCron, output: str | None = None, cwd: Path | None = None) -> Path:
    config = cron.config
    if config.base_url_env_var:
        console.print(
            f"Using environment variable: ${{{{ {config.env_var_source}.{config.base_url_env_var} }}}}"
        )
    else:
        console.print(f"Using hardcoded URL: {config.base_url}")
        if "localhost" in config.base_url or "127.0.0.1" in config.base_url:
            console.print("[yellow]WARNING: Using localhost in production workflow![/yellow]")

    workflow = cron.generate_github_workflow()
    path = resolve_output_path(cron, output, cwd)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(workflow, encoding="utf-8")
    console.print(f"[green]Generated workflow[/green] {path}")
    if config.base_url_env_var:
        console.print(f"Add {config.base_url_env_var} to GitHub {config.env_var_source} before pushing.")
    console.print("Add GITHUBCRON_SECRET to GitHub Secrets, then commit the workflow file.")
    return path
