"""Compilation of stylesheet targets."""

from __future__ import annotations

from .compiler import CompileRequest, CompileResult, Compiler, SassCompiler, parse_compiler_message
from .orchestrator import (
    CompilationReport,
    compile_target,
    compile_targets,
    load_contents,
    output_path,
    partition_targets,
    select_candidates,
)

__all__ = [
    "CompilationReport",
    "CompileRequest",
    "CompileResult",
    "Compiler",
    "SassCompiler",
    "compile_target",
    "compile_targets",
    "load_contents",
    "output_path",
    "parse_compiler_message",
    "partition_targets",
    "select_candidates",
]
