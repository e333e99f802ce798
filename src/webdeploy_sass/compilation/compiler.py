"""Bridge between the orchestrator and the external stylesheet compiler."""

from __future__ import annotations

import abc
import posixpath
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import sass

from webdeploy_sass.exceptions import CompilerError
from webdeploy_sass.registry.importer import ImportResult

ImporterCallback = Callable[[str, str | None], ImportResult]

_LOCATION_PATTERN = re.compile(r"on line (?P<line>\d+)(?::\d+)? of (?P<file>\S+)")
_ERROR_PREFIX = "Error: "
_ENTRY_DOCUMENT = "stdin"


@dataclass
class CompileRequest:
    content: str
    root_path: str
    importer: ImporterCallback
    include_paths: Sequence[str] = field(default_factory=list)
    indented: bool = False
    output_style: str = "nested"


@dataclass
class CompileResult:
    output: bytes

    def __len__(self) -> int:
        return len(self.output)


class Compiler(abc.ABC):
    @abc.abstractmethod
    def compile(self, request: CompileRequest) -> CompileResult:
        """Compile ``request.content``, raising CompilerError on failure."""
        raise NotImplementedError


def parse_compiler_message(text: str, *, entry_path: str | None = None) -> CompilerError:
    """Build a CompilerError from a libsass error report.

    Examples:
        >>> str(parse_compiler_message('Error: Undefined variable: "$x".\\n        on line 3:12 of stdin', entry_path="app.scss"))
        'Undefined variable: "$x". in app.scss:3'
    """
    match = _LOCATION_PATTERN.search(text)
    if match is None:
        return CompilerError(text.strip())

    message = text.strip().splitlines()[0]
    if message.startswith(_ERROR_PREFIX):
        message = message[len(_ERROR_PREFIX):]
    file = match.group("file")
    if posixpath.basename(file) == _ENTRY_DOCUMENT and entry_path:
        file = entry_path
    return CompilerError(message.strip(), file=file, line=int(match.group("line")))


def _as_sass_importer(importer: ImporterCallback) -> Callable[[str, str], list[tuple[str, str]]]:
    def sass_importer(path: str, prev: str) -> list[tuple[str, str]]:
        result = importer(path, prev)
        return [(result.filename, result.contents)]

    return sass_importer


class SassCompiler(Compiler):
    """Compiles stylesheets with libsass.

    Every import goes through the request's importer, so libsass never falls
    back to reading the file system on its own.
    """

    def compile(self, request: CompileRequest) -> CompileResult:
        try:
            css = sass.compile(
                string=request.content,
                output_style=request.output_style,
                include_paths=list(request.include_paths),
                indented=request.indented,
                importers=((0, _as_sass_importer(request.importer)),),
            )
        except sass.CompileError as exc:
            raise parse_compiler_message(
                str(exc), entry_path=request.root_path.lstrip("/")
            ) from exc
        return CompileResult(output=css.encode("utf-8"))
