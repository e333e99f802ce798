"""Virtual module registry and the importer bridged into the compiler."""

from __future__ import annotations

from .importer import Importer, ImportResult
from .modules import ModuleRegistry
from .usage import UsageTracker

__all__ = ["ImportResult", "Importer", "ModuleRegistry", "UsageTracker"]
