"""Configuration for githubcron."""

from githubcron.config.loader import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILENAME, load_config, resolve_config_path
from githubcron.config.models import DEFAULT_CRON_PATH, CronConfig
from githubcron.config.sources import ConfigLoadError, CronYamlSource

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigLoadError",
    "CronConfig",
    "CronYamlSource",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_CRON_PATH",
    "load_config",
    "resolve_config_path",
]
