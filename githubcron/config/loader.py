"""Resolve and load githubcron.yaml into a CronConfig."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic_settings import SettingsConfigDict

from githubcron.config.models import CronConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GITHUBCRON_CONFIG"
DEFAULT_CONFIG_FILENAME = "githubcron.yaml"


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the YAML file: explicit *path*, then ``GITHUBCRON_CONFIG``, then ./githubcron.yaml."""
    if path is not None and str(path).strip():
        return Path(str(path).strip())
    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_config(path: str | Path | None = None, **overrides: Any) -> CronConfig:
    """Build a CronConfig from defaults < YAML < ``GITHUBCRON_*`` environment < *overrides*.

    Overrides whose value is None are ignored. A missing YAML file is not an
    error; a malformed one raises ConfigLoadError.
    """
    target = resolve_config_path(path)
    file_bound = type(
        "FileCronConfig",
        (CronConfig,),
        {"__module__": __name__, "model_config": SettingsConfigDict(yaml_file=target)},
    )
    loaded = file_bound(**{key: value for key, value in overrides.items() if value is not None})
    logger.debug("cron_config_loaded path=%s exists=%s", target, target.is_file())
    return CronConfig.model_validate(loaded.model_dump())
