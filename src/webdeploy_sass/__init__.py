"""SASS build step for webdeploy pipelines.

Resolves stylesheet imports against in-memory build targets, compiles them with
libsass and prunes include-only modules nothing imported.
"""

from __future__ import annotations

from webdeploy_sass.compilation import CompilationReport
from webdeploy_sass.config import PluginSettings, load_settings, load_settings_file
from webdeploy_sass.exceptions import (
    CompilerError,
    ConfigError,
    IndentedImportError,
    ModuleCollisionError,
    ModuleNotFoundError,
    WebdeploySassError,
)
from webdeploy_sass.plugin import run

__all__ = [
    "CompilationReport",
    "CompilerError",
    "ConfigError",
    "IndentedImportError",
    "ModuleCollisionError",
    "ModuleNotFoundError",
    "PluginSettings",
    "WebdeploySassError",
    "load_settings",
    "load_settings_file",
    "run",
]
