"""Module key resolution for stylesheet imports."""

from __future__ import annotations

from .path_utils import (
    resolve_path_prefix,
    resolve_prefix,
    strip,
    strip_extension,
    strip_leading,
    strip_trailing,
)
from .resolver import SEPARATOR, module_key, resolve_import_path, resolve_module_path

__all__ = [
    "SEPARATOR",
    "module_key",
    "resolve_import_path",
    "resolve_module_path",
    "resolve_path_prefix",
    "resolve_prefix",
    "strip",
    "strip_extension",
    "strip_leading",
    "strip_trailing",
]
