"""Structural types for the host pipeline objects the plugin works with.

The host owns every object described here. The plugin reads target content,
appends dependency edges, and asks the context to create or remove targets.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol


class Target(Protocol):
    source_path: str
    is_include_only: bool

    @property
    def target_name(self) -> str: ...

    @property
    def content(self) -> bytes:
        """Raw bytes; only valid after load_content() returned."""
        ...

    def load_content(self) -> bytes: ...


class OutputTarget(Protocol):
    source_path: str

    def write(self, data: bytes) -> None: ...


class DependencyGraph(Protocol):
    def add_edge(self, consumer: str, dependency: str) -> None: ...


class BuildContext(Protocol):
    graph: DependencyGraph

    def iter_targets(self) -> Iterable[Target]: ...

    def resolve_output_target(
        self, path: str | None, source_targets: Sequence[Target]
    ) -> OutputTarget | None:
        """Replace ``source_targets`` with a new target at ``path``.

        Passing ``None`` removes the source targets without creating anything.
        """
        ...

    def remove_targets(self, targets: Sequence[Target], *, sever_graph_edges: bool) -> None: ...
