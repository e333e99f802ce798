from __future__ import annotations

import posixpath
import threading
from dataclasses import dataclass, field
from typing import NamedTuple

from webdeploy_sass.config.models import PluginSettings
from webdeploy_sass.exceptions import IndentedImportError, ModuleNotFoundError, WebdeploySassError
from webdeploy_sass.logging_utils.logger import get_logger
from webdeploy_sass.pipeline.interfaces import Target
from webdeploy_sass.resolution.path_utils import strip_leading
from webdeploy_sass.resolution.resolver import SEPARATOR, resolve_import_path, resolve_module_path

from .modules import ModuleRegistry
from .usage import UsageTracker

logger = get_logger(__name__)

INDENTED_SUFFIX = ".sass"


def is_indented(target: Target) -> bool:
    return target.target_name.endswith(INDENTED_SUFFIX)


def synthetic_root(target: Target) -> str:
    """Absolute-looking path handed to the compiler as the entry document name."""
    return SEPARATOR + strip_leading(target.source_path, SEPARATOR)


class ImportResult(NamedTuple):
    key: str
    contents: str

    @property
    def filename(self) -> str:
        """Name the compiler reports back as ``previous`` for nested imports."""
        return self.key


@dataclass
class Importer:
    """Import callback bound to the target currently being compiled.

    The compiler calls it with the specifier as written and the name of the
    document containing the import: either the entry document or a filename
    this importer returned earlier.
    """

    registry: ModuleRegistry
    parent: Target
    tracker: UsageTracker
    config: PluginSettings
    failures: list[WebdeploySassError] = field(default_factory=list)
    _issued: dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def root_path(self) -> str:
        return synthetic_root(self.parent)

    def current_dir(self, previous: str | None) -> str:
        # Anything not handed out by this importer is the entry document.
        with self._lock:
            key = self._issued.get(previous) if previous else None
        if key is not None:
            return posixpath.dirname(key)
        return resolve_module_path(posixpath.dirname(self.root_path), self.config)

    def __call__(self, specifier: str, previous: str | None = None) -> ImportResult:
        key = resolve_import_path(specifier, self.current_dir(previous), self.config)
        target = self.registry.get(key)
        if target is None:
            error = ModuleNotFoundError(specifier, key, consumer=self.parent.source_path)
            self.failures.append(error)
            raise error

        if is_indented(target):
            # libsass parses every imported source as SCSS.
            error = IndentedImportError(
                specifier, target.source_path, consumer=self.parent.source_path
            )
            self.failures.append(error)
            raise error

        self.tracker.record(self.parent.source_path, target.source_path)
        logger.debug("%s: '%s' -> %s", self.parent.source_path, specifier, target.source_path)

        result = ImportResult(key=key, contents=target.content.decode("utf-8"))
        with self._lock:
            self._issued[result.filename] = key
        return result
