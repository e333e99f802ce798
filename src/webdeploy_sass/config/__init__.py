"""Configuration module for the SASS plugin.

Normalizes the host's raw plugin settings into an immutable PluginSettings.
"""

from __future__ import annotations

from webdeploy_sass.config.loader import load_settings, load_settings_file
from webdeploy_sass.config.models import DEFAULT_RENAME_SUFFIX, OUTPUT_STYLES, PluginSettings

__all__ = [
    "DEFAULT_RENAME_SUFFIX",
    "OUTPUT_STYLES",
    "PluginSettings",
    "load_settings",
    "load_settings_file",
]
