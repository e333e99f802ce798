"""Shared fixtures: an in-memory build context and a scripted compiler."""

from __future__ import annotations

import re
import threading

import pytest

from webdeploy_sass.compilation.compiler import CompileRequest, CompileResult, Compiler
from webdeploy_sass.exceptions import CompilerError, WebdeploySassError
from webdeploy_sass.pipeline.memory import MemoryBuildContext, MemoryTarget

_IMPORT_LINE = re.compile(r"""^@(?:import|use)\s+["']([^"']+)["'];?$""")
_ERROR_LINE = re.compile(r"""^@error\s+["']([^"']+)["'];?$""")


class ScriptedCompiler(Compiler):
    """Line-oriented stand-in for libsass.

    ``@import "x";`` lines go through the importer, ``$name: value;`` lines
    produce nothing, ``@error "msg";`` fails with the current position and
    every other non-blank line is copied to the output.
    """

    def __init__(self, *, wrap_import_errors: bool = False):
        self.wrap_import_errors = wrap_import_errors
        self.requests: list[CompileRequest] = []
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def compile(self, request: CompileRequest) -> CompileResult:
        with self._lock:
            self.requests.append(request)
        lines = self._render(request, request.content, request.root_path)
        return CompileResult(output="\n".join(lines).encode("utf-8"))

    def _render(self, request: CompileRequest, content: str, document: str) -> list[str]:
        output: list[str] = []
        for number, raw_line in enumerate(content.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("$"):
                continue
            error = _ERROR_LINE.match(line)
            if error:
                raise CompilerError(error.group(1), file=document.lstrip("/"), line=number)
            imported = _IMPORT_LINE.match(line)
            if imported is None:
                output.append(line)
                continue
            with self._lock:
                self.calls.append((imported.group(1), document))
            try:
                result = request.importer(imported.group(1), document)
            except WebdeploySassError as exc:
                if self.wrap_import_errors:
                    raise CompilerError(f"Error: {exc}") from exc
                raise
            output.extend(self._render(request, result.contents, result.filename))
        return output


@pytest.fixture
def compiler() -> ScriptedCompiler:
    return ScriptedCompiler()


@pytest.fixture
def make_context():
    def _make(files: dict[str, str], include_only: tuple[str, ...] = ()) -> MemoryBuildContext:
        return MemoryBuildContext(
            MemoryTarget(
                source_path=path,
                data=content.encode("utf-8"),
                is_include_only=path in include_only,
            )
            for path, content in files.items()
        )

    return _make


@pytest.fixture
def wrapping_compiler() -> ScriptedCompiler:
    """Reports importer failures the way libsass does, wrapped in a CompilerError."""
    return ScriptedCompiler(wrap_import_errors=True)
