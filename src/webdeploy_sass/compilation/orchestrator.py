from __future__ import annotations

import posixpath
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from webdeploy_sass.config.models import PluginSettings
from webdeploy_sass.exceptions import CompilerError
from webdeploy_sass.logging_utils.logger import get_logger
from webdeploy_sass.pipeline.interfaces import BuildContext, Target
from webdeploy_sass.registry.importer import Importer, is_indented
from webdeploy_sass.registry.modules import ModuleRegistry
from webdeploy_sass.registry.usage import UsageTracker

from .compiler import CompileRequest, CompileResult, Compiler, SassCompiler

logger = get_logger(__name__)

_LOAD_WORKERS = 8


@dataclass
class CompilationReport:
    """Outcome of one compilation pass, keyed by source path."""

    compiled: dict[str, str] = field(default_factory=dict)
    emptied: list[str] = field(default_factory=list)
    retained: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def select_candidates(context: BuildContext, config: PluginSettings) -> list[Target]:
    return [
        target
        for target in context.iter_targets()
        if config.candidate_pattern.search(target.target_name)
    ]


def load_contents(targets: Sequence[Target]) -> None:
    """Load every target's content; returns only once all loads finished."""
    if not targets:
        return
    with ThreadPoolExecutor(max_workers=min(_LOAD_WORKERS, len(targets))) as executor:
        for _ in executor.map(lambda target: target.load_content(), targets):
            pass


def partition_targets(
    targets: Sequence[Target], config: PluginSettings
) -> tuple[list[Target], list[Target]]:
    """Split targets into (to render, to possibly prune)."""
    to_render: list[Target] = []
    to_prune: list[Target] = []
    for target in targets:
        if target.is_include_only or not config.is_filtered_in(target.source_path):
            to_prune.append(target)
        else:
            to_render.append(target)
    return to_render, to_prune


def output_path(target: Target, config: PluginSettings) -> str:
    if not config.rename:
        return target.source_path
    stem, _ = posixpath.splitext(target.source_path)
    return stem + config.rename


def compile_target(
    target: Target,
    registry: ModuleRegistry,
    tracker: UsageTracker,
    config: PluginSettings,
    compiler: Compiler,
) -> CompileResult:
    """Compile one target through an importer bound to it. Thread-safe worker function."""
    importer = Importer(registry=registry, parent=target, tracker=tracker, config=config)
    request = CompileRequest(
        content=target.content.decode("utf-8"),
        root_path=importer.root_path,
        importer=importer,
        include_paths=[posixpath.dirname(importer.root_path)],
        indented=is_indented(target),
        output_style=config.output_style,
    )
    try:
        return compiler.compile(request)
    except CompilerError as exc:
        # The compiler wraps importer exceptions in its own error type.
        failure = importer.failures[0] if importer.failures else None
        if failure is exc:
            raise
        if failure is not None:
            raise failure from exc
        raise exc.for_target(target.source_path) from exc


def _materialize(
    context: BuildContext,
    target: Target,
    result: CompileResult,
    config: PluginSettings,
    report: CompilationReport,
) -> None:
    if len(result) > 0:
        path = output_path(target, config)
        output = context.resolve_output_target(path, [target])
        if output is not None:
            output.write(result.output)
        report.compiled[target.source_path] = path
        logger.info("Compiled %s -> %s", target.source_path, path)
    else:
        context.resolve_output_target(None, [target])
        report.emptied.append(target.source_path)
        logger.info("Removed %s (compiled to empty output)", target.source_path)


def compile_targets(
    context: BuildContext,
    config: PluginSettings,
    compiler: Compiler | None = None,
) -> CompilationReport:
    """Compile every renderable stylesheet target and prune unused ones.

    Args:
        context: Host build context providing targets and the dependency graph
        config: Normalised plugin settings
        compiler: Stylesheet compiler, libsass by default

    Returns:
        CompilationReport describing what happened to each target

    Raises:
        ModuleCollisionError: If two targets share a module key
        ModuleNotFoundError: If an import cannot be resolved
        CompilerError: If the compiler rejects a target
    """
    compiler = compiler or SassCompiler()
    report = CompilationReport()

    candidates = select_candidates(context, config)
    if not candidates:
        logger.debug("No stylesheet targets to compile")
        return report

    load_contents(candidates)
    registry = ModuleRegistry.build(candidates, config)
    tracker = UsageTracker(context.graph)
    to_render, to_prune = partition_targets(candidates, config)

    failure: Exception | None = None
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures: dict[Future[CompileResult], Target] = {
            executor.submit(compile_target, target, registry, tracker, config, compiler): target
            for target in to_render
        }
        for future in as_completed(futures):
            if failure is not None or future.cancelled():
                continue
            target = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                logger.error("Failed to compile %s: %s", target.source_path, exc)
                failure = exc
                for pending in futures:
                    pending.cancel()
                continue
            _materialize(context, target, result, config, report)

    if failure is not None:
        raise failure

    retained, unused = tracker.partition(to_prune)
    report.retained = [target.source_path for target in retained]
    report.removed = [target.source_path for target in unused]
    if unused:
        context.remove_targets(unused, sever_graph_edges=True)
        logger.info("Removed %d unused stylesheet targets", len(unused))
    return report
