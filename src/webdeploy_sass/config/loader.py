from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from webdeploy_sass.config.models import PluginSettings
from webdeploy_sass.exceptions import ConfigError


def _describe_errors(exc: ValidationError) -> list[str]:
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "settings"
        problems.append(f"{location}: {error['msg']}")
    return problems


def _parse_yaml_file(path: Path) -> Any:
    """Parse YAML file into a Python value."""
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse settings file {path}: {exc}") from exc


def load_settings(raw: Mapping[str, Any] | PluginSettings | None = None) -> PluginSettings:
    """Validate and normalise the plugin settings handed over by the host.

    Args:
        raw: Settings mapping using the host's camelCase keys or the snake_case
            field names. ``None`` means all defaults.

    Returns:
        Immutable PluginSettings instance

    Raises:
        ConfigError: If any setting has the wrong shape
    """
    if isinstance(raw, PluginSettings):
        return raw
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Plugin settings must be a mapping, got {type(raw).__name__}")
    try:
        return PluginSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigError("Invalid SASS plugin settings", problems=_describe_errors(exc)) from exc


def load_settings_file(config_path: Path) -> PluginSettings:
    """Load plugin settings from a YAML document."""
    config_path = config_path.expanduser()
    if not config_path.exists():
        raise ConfigError(f"Settings file not found: {config_path}")
    payload = _parse_yaml_file(config_path)
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Settings file {config_path} must contain a mapping")
    return load_settings(payload)
