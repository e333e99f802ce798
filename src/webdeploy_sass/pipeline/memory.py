"""In-memory build context used by embedding hosts and the test suite."""

from __future__ import annotations

import posixpath
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .interfaces import Target


@dataclass
class MemoryTarget:
    source_path: str
    data: bytes = b""
    is_include_only: bool = False
    _content: bytes | None = field(default=None, init=False, repr=False)

    @property
    def target_name(self) -> str:
        return posixpath.basename(self.source_path)

    @property
    def content(self) -> bytes:
        if self._content is None:
            raise RuntimeError(f"Content of {self.source_path} has not been loaded")
        return self._content

    @property
    def is_loaded(self) -> bool:
        return self._content is not None

    def load_content(self) -> bytes:
        if self._content is None:
            self._content = self.data
        return self._content

    def write(self, data: bytes) -> None:
        self.data += data
        self._content = self.data


class MemoryDependencyGraph:
    def __init__(self) -> None:
        self._edges: set[tuple[str, str]] = set()
        self._lock = threading.Lock()

    def add_edge(self, consumer: str, dependency: str) -> None:
        with self._lock:
            self._edges.add((consumer, dependency))

    def remove_node(self, path: str) -> None:
        with self._lock:
            self._edges = {edge for edge in self._edges if path not in edge}

    @property
    def edges(self) -> set[tuple[str, str]]:
        with self._lock:
            return set(self._edges)

    def dependencies_of(self, consumer: str) -> set[str]:
        return {dep for src, dep in self.edges if src == consumer}

    def has_node(self, path: str) -> bool:
        return any(path in edge for edge in self.edges)


class MemoryBuildContext:
    """Target table keyed by source path.

    Output targets replace their sources in the table, so after a pass the
    table holds exactly the surviving build artifacts.
    """

    def __init__(self, targets: Iterable[MemoryTarget] = ()) -> None:
        self.graph = MemoryDependencyGraph()
        self._targets: dict[str, MemoryTarget] = {}
        self._lock = threading.Lock()
        for target in targets:
            self.add_target(target)

    def add_target(self, target: MemoryTarget) -> MemoryTarget:
        with self._lock:
            self._targets[target.source_path] = target
        return target

    def iter_targets(self) -> Iterable[MemoryTarget]:
        with self._lock:
            return list(self._targets.values())

    def get(self, path: str) -> MemoryTarget | None:
        with self._lock:
            return self._targets.get(path)

    @property
    def paths(self) -> list[str]:
        with self._lock:
            return list(self._targets)

    def resolve_output_target(
        self, path: str | None, source_targets: Sequence[Target]
    ) -> MemoryTarget | None:
        with self._lock:
            for source in source_targets:
                self._targets.pop(source.source_path, None)
            if path is None:
                return None
            output = MemoryTarget(source_path=path)
            output.load_content()
            self._targets[path] = output
            return output

    def remove_targets(self, targets: Sequence[Target], *, sever_graph_edges: bool) -> None:
        with self._lock:
            for target in targets:
                self._targets.pop(target.source_path, None)
        if sever_graph_edges:
            for target in targets:
                self.graph.remove_node(target.source_path)
