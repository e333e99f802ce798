"""Contracts between the plugin and the host build pipeline."""

from __future__ import annotations

from .interfaces import BuildContext, DependencyGraph, OutputTarget, Target
from .memory import MemoryBuildContext, MemoryDependencyGraph, MemoryTarget

__all__ = [
    "BuildContext",
    "DependencyGraph",
    "MemoryBuildContext",
    "MemoryDependencyGraph",
    "MemoryTarget",
    "OutputTarget",
    "Target",
]
