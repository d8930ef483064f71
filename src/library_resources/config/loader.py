"""Settings loader: YAML file, environment and ``.env``."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML

from library_resources.config.schema import Settings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".library-resources.yaml"
ENV_PREFIX = "LIBRARY_RESOURCES_"


class ConfigError(Exception):
    """Raised for settings loading / validation errors."""


# Field name → environment variable.
_SETTINGS_ENV_MAP: dict[str, str] = {
    field: f"{ENV_PREFIX}{field.upper()}"
    for field in Settings.model_fields
    if field != "project_root"
}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = YAML(typ="safe").load(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(raw).__name__}")
    return raw


def _resolve_fields(file_values: dict[str, Any], project_root: Path) -> dict[str, Any]:
    """Merge YAML, env vars and the ``.env`` file.

    Priority (highest wins): YAML value > env var > ``.env`` file.
    """
    env_file = project_root / ".env"
    dotenv_vals = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}

    resolved: dict[str, Any] = {}
    for field, env_key in _SETTINGS_ENV_MAP.items():
        val = file_values.get(field)
        if val is None:
            val = os.environ.get(env_key)
        if val is None:
            val = dotenv_vals.get(env_key)
        if val is not None:
            resolved[field] = val

    unknown = sorted(set(file_values) - set(_SETTINGS_ENV_MAP))
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")
    return resolved


def load_settings(project_root: Path | str | None = None, **overrides: Any) -> Settings:
    """Build ``Settings`` for *project_root* (default: the current directory).

    Keyword overrides beat every other source.

    Raises:
        ConfigError: On YAML parse errors, unknown keys or validation failures.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    config_file = root / CONFIG_FILENAME
    file_values = _read_yaml(config_file) if config_file.is_file() else {}

    fields = _resolve_fields(file_values, root)
    fields.update({k: v for k, v in overrides.items() if v is not None})
    fields["project_root"] = root

    try:
        settings = Settings(**fields)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    logger.debug(
        "Settings loaded for %s (global=%s project=%s)",
        root,
        settings.global_dir,
        settings.resolved_project_dir,
    )
    return settings
