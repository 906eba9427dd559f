"""pydantic-settings source that reads githubcron.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic_settings import YamlConfigSettingsSource


class ConfigLoadError(ValueError):
    """Raised when configuration YAML cannot be parsed."""


class CronYamlSource(YamlConfigSettingsSource):
    """YAML settings source that reports broken files as ConfigLoadError.

    The file comes from the settings class' ``yaml_file`` option; a missing
    file contributes nothing.
    """

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        try:
            data = super()._read_file(file_path)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                raise ConfigLoadError(f"Invalid YAML at {file_path}:{mark.line + 1}:{mark.column + 1}") from exc
            raise ConfigLoadError(f"Invalid YAML at {file_path}") from exc
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config root must be a mapping: {file_path}")
        return data
