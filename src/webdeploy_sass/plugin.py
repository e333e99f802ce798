"""Entry point the host pipeline calls for the ``sass`` build step."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from webdeploy_sass.compilation import CompilationReport, Compiler, compile_targets
from webdeploy_sass.config import PluginSettings, load_settings
from webdeploy_sass.logging_utils.logger import get_logger
from webdeploy_sass.pipeline.interfaces import BuildContext

logger = get_logger(__name__)


def run(
    context: BuildContext,
    settings: Mapping[str, Any] | PluginSettings | None = None,
    *,
    compiler: Compiler | None = None,
) -> CompilationReport:
    """Compile the context's stylesheet targets.

    Settings are validated before anything is loaded, so a ConfigError never
    leaves the context half processed.
    """
    config = load_settings(settings)
    logger.debug(
        "Running sass step (module base %r, %d aliases, %d replacements)",
        config.module_base,
        len(config.alias),
        len(config.replace),
    )
    return compile_targets(context, config, compiler)
