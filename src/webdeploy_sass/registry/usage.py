from __future__ import annotations

import threading
from collections.abc import Iterable

from webdeploy_sass.pipeline.interfaces import DependencyGraph, Target


class UsageTracker:
    """Records which targets were imported during one compilation pass.

    Every record also adds the consumer -> dependency edge to the host graph.
    Both updates happen under one lock since importers may run on compiler
    threads.
    """

    def __init__(self, graph: DependencyGraph | None = None):
        self._graph = graph
        self._used: set[str] = set()
        self._lock = threading.Lock()

    def record(self, consumer: str, dependency: str) -> None:
        with self._lock:
            if self._graph is not None:
                self._graph.add_edge(consumer, dependency)
            self._used.add(dependency)

    def was_used(self, path: str) -> bool:
        with self._lock:
            return path in self._used

    def partition(self, targets: Iterable[Target]) -> tuple[list[Target], list[Target]]:
        """Split ``targets`` into (imported at least once, never imported)."""
        used: list[Target] = []
        unused: list[Target] = []
        for target in targets:
            (used if self.was_used(target.source_path) else unused).append(target)
        return used, unused

    def __len__(self) -> int:
        with self._lock:
            return len(self._used)
