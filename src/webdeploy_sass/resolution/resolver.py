"""
Module key resolution.

Turns target paths and import specifiers into canonical module keys: separator
delimited, extension-less paths relative to the configured module base.

Import specifiers are resolved in a fixed order:
    1. trailing extension removed
    2. ``~`` root marker dropped
    3. ``./`` and ``../`` resolved against the importing module's directory
    4. alias table applied (anchored prefixes, in declared order)
    5. replace table applied (raw prefixes, in declared order)
    6. leading separators stripped

All functions here are pure and safe to call from any thread.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from .path_utils import resolve_path_prefix, resolve_prefix, strip_extension, strip_leading

if TYPE_CHECKING:
    from webdeploy_sass.config.models import PluginSettings

SEPARATOR = "/"
ROOT_MARKER = "~"
CURRENT_DIR_MARKER = "./"
PARENT_DIR_MARKER = "../"


def resolve_module_path(path: str, config: PluginSettings) -> str:
    """Make ``path`` relative to the module base.

    Examples:
        with module_base="src":
        resolve_module_path("/src/lib/core.scss") → "lib/core.scss"
        resolve_module_path("srcx/core.scss") → "srcx/core.scss"
    """
    path = strip_leading(path, SEPARATOR)
    if config.module_base:
        path = resolve_path_prefix(path, config.module_base, "")
    return strip_leading(path, SEPARATOR)


def module_key(path: str, config: PluginSettings) -> str:
    """Canonical module key under which a target at ``path`` is registered."""
    return strip_extension(resolve_module_path(path, config))


def _parent_dir(current_dir: str) -> str:
    return posixpath.dirname(current_dir.rstrip(SEPARATOR))


def resolve_import_path(specifier: str, current_dir: str, config: PluginSettings) -> str:
    """
    Resolve an import specifier to a module key.

    Args:
        specifier: Import string as written in the stylesheet
        current_dir: Key-space directory of the importing module
        config: Resolution settings

    Returns:
        Canonical module key

    Examples:
        resolve_import_path("../mixins", "theme/dark", cfg) → "theme/mixins"
        resolve_import_path("./colors.scss", "theme", cfg) → "theme/colors"
        with alias={"@core": "lib/core"}:
        resolve_import_path("@core/button", "", cfg) → "lib/core/button"
    """
    path = strip_extension(specifier)

    if path.startswith(ROOT_MARKER):
        return resolve_import_path(path[len(ROOT_MARKER):], "", config)

    if config.resolve_relative_paths:
        if path.startswith(PARENT_DIR_MARKER):
            remainder = path[len(PARENT_DIR_MARKER):]
            return resolve_import_path(
                CURRENT_DIR_MARKER + remainder, _parent_dir(current_dir), config
            )
        if path.startswith(CURRENT_DIR_MARKER):
            remainder = path[len(CURRENT_DIR_MARKER):]
            if remainder.startswith((CURRENT_DIR_MARKER, PARENT_DIR_MARKER)):
                return resolve_import_path(remainder, current_dir, config)
            joined = posixpath.join(current_dir, remainder) if current_dir else remainder
            return resolve_import_path(SEPARATOR + joined, current_dir, config)

    path = strip_leading(path, SEPARATOR)
    for prefix, replacement in config.alias.items():
        path = resolve_path_prefix(path, prefix, replacement)
    for prefix, replacement in config.replace.items():
        path = resolve_prefix(path, prefix, replacement)

    return strip_leading(path, SEPARATOR)
