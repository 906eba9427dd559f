"""Locate and import the user's ServerlessCron instance."""

from __future__ import annotations

import importlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from dotenv import load_dotenv

from githubcron.app import ServerlessCron

DEFAULT_CONFIG = "cron_jobs.py"
ENV_FILES = (".env.local", ".env")


class CronLoadError(RuntimeError):
    """Raised when the cron module or its ServerlessCron instance cannot be found."""


def load_env_files(directory: str | Path | None = None) -> Path | None:
    """Load the first of ``.env.local`` / ``.env`` found in *directory*."""
    base = Path(directory) if directory is not None else Path.cwd()
    for filename in ENV_FILES:
        candidate = base / filename
        if candidate.exists():
            load_dotenv(candidate, override=False)
            return candidate
    return None


def _describe(exc: BaseException) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return f"{exc.__class__.__name__}: {message}" if message else exc.__class__.__name__


def _ensure_on_path(directory: Path) -> None:
    entry = str(directory)
    if entry not in sys.path:
        sys.path.insert(0, entry)


def _import_file(path: Path) -> ModuleType:
    if not path.exists():
        raise CronLoadError(f"Configuration file not found: {path}")
    module_name = f"_githubcron_user_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise CronLoadError(f"Cannot import configuration file: {path}")
    # sibling modules of the cron file must be importable from it
    _ensure_on_path(path.parent)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise CronLoadError(f"Failed to load {path}: {_describe(exc)}") from exc
    return module


def _import_dotted(name: str) -> ModuleType:
    _ensure_on_path(Path.cwd())
    try:
        return importlib.import_module(name)
    except Exception as exc:
        sys.modules.pop(name, None)
        missing = getattr(exc, "name", None) if isinstance(exc, ModuleNotFoundError) else None
        if missing is not None and (name == missing or name.startswith(f"{missing}.")):
            raise CronLoadError(f"Cannot import module '{name}': {exc}") from exc
        raise CronLoadError(f"Failed to load module '{name}': {_describe(exc)}") from exc


def _find_instance(module: ModuleType, attribute: str | None) -> ServerlessCron:
    if attribute:
        candidate = getattr(module, attribute, None)
        if not isinstance(candidate, ServerlessCron):
            raise CronLoadError(f"'{attribute}' in {module.__name__} is not a ServerlessCron instance")
        return candidate
    named = getattr(module, "cron", None)
    if isinstance(named, ServerlessCron):
        return named
    for value in vars(module).values():
        if isinstance(value, ServerlessCron):
            return value
    raise CronLoadError(
        'Could not find a ServerlessCron instance. Export one as: cron = ServerlessCron(...)'
    )


def load_cron(target: str = DEFAULT_CONFIG) -> ServerlessCron:
    """Import *target* and return its ServerlessCron.

    *target* is a file path (``lib/cron_jobs.py``) or a dotted module
    (``myapp.cron``), optionally suffixed with ``:attribute``.
    """
    spec, _, attribute = target.partition(":")
    spec = spec.strip()
    if spec.endswith(".py") or os.sep in spec or "/" in spec:
        module = _import_file(Path(spec).resolve())
    else:
        module = _import_dotted(spec)
    return _find_instance(module, attribute.strip() or None)
