from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from webdeploy_sass.config.models import PluginSettings
from webdeploy_sass.exceptions import ModuleCollisionError
from webdeploy_sass.logging_utils.logger import get_logger
from webdeploy_sass.pipeline.interfaces import Target
from webdeploy_sass.resolution.resolver import module_key

logger = get_logger(__name__)


class ModuleRegistry(Mapping[str, Target]):
    """Read-only mapping from module key to the target that provides it."""

    def __init__(self, modules: Mapping[str, Target]):
        self._modules = MappingProxyType(dict(modules))

    @classmethod
    def build(cls, targets: Iterable[Target], config: PluginSettings) -> ModuleRegistry:
        modules: dict[str, Target] = {}
        for target in targets:
            key = module_key(target.source_path, config)
            existing = modules.get(key)
            if existing is not None:
                raise ModuleCollisionError(key, existing.source_path, target.source_path)
            modules[key] = target
        logger.debug("Registered %d stylesheet modules", len(modules))
        return cls(modules)

    def __getitem__(self, key: str) -> Target:
        return self._modules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)
