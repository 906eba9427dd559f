"""Configuration model for githubcron."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from githubcron.config.sources import CronYamlSource

DEFAULT_CRON_PATH = "/api/cron"


class CronConfig(BaseSettings):
    """Process-wide settings, fixed when a ServerlessCron is constructed."""

    name: str | None = Field(default=None, description="Workflow name; also names the workflow file.")
    secret: str = Field(default="", description="Shared secret expected in X-Cron-Secret.")
    base_url: str = Field(default="", description="Literal base URL used in the generated workflow.")
    base_url_env_var: str | None = Field(
        default=None,
        description="Name of a GitHub variable or secret holding the base URL.",
    )
    env_var_source: Literal["vars", "secrets"] = "vars"
    cron_path: str = DEFAULT_CRON_PATH
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="GITHUBCRON_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # earlier sources win; YAML is read only when yaml_file is configured
        return (init_settings, env_settings, dotenv_settings, CronYamlSource(settings_cls), file_secret_settings)

    @field_validator("name", "base_url_env_var")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    @field_validator("cron_path")
    @classmethod
    def _path_style(cls, value: str) -> str:
        normalized = value.strip()
        if normalized and not normalized.startswith("/"):
            raise ValueError("cron_path must start with '/'")
        # "/" maps to an empty prefix so job URLs stay "<base>/<job>"
        return normalized.rstrip("/")

    @property
    def workflow_name(self) -> str:
        return self.name or "cron-jobs"
