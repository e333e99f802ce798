from __future__ import annotations

import pytest

from webdeploy_sass.compilation.compiler import CompileRequest, SassCompiler, parse_compiler_message
from webdeploy_sass.exceptions import CompilerError, IndentedImportError, ModuleNotFoundError
from webdeploy_sass.plugin import run
from webdeploy_sass.registry.importer import ImportResult


def _unused_importer(path: str, prev: str | None = None) -> ImportResult:
    raise AssertionError(f"unexpected import of {path}")


class TestParseCompilerMessage:
    def test_entry_document_is_attributed_to_target(self):
        error = parse_compiler_message(
            'Error: Undefined variable: "$x".\n        on line 3:12 of stdin\n>> a { b: $x; }',
            entry_path="src/app.scss",
        )

        assert error.message == 'Undefined variable: "$x".'
        assert error.file == "src/app.scss"
        assert error.line == 3
        assert str(error) == 'Undefined variable: "$x". in src/app.scss:3'

    def test_imported_document_keeps_its_name(self):
        error = parse_compiler_message(
            "Error: Invalid CSS\n        on line 7 of lib/core/button\n        from line 1 of stdin",
            entry_path="src/app.scss",
        )

        assert error.file == "lib/core/button"
        assert error.line == 7

    def test_message_without_position_is_verbatim(self):
        error = parse_compiler_message("Internal Error: out of memory")

        assert not error.has_location
        assert str(error) == "Internal Error: out of memory"


class TestSassCompiler:
    def test_compiles_scss(self):
        result = SassCompiler().compile(
            CompileRequest(
                content="a { b { color: red; } }",
                root_path="/app.scss",
                importer=_unused_importer,
                output_style="compressed",
            )
        )

        assert b"a b{color:red}" in result.output

    def test_compiles_indented_syntax(self):
        result = SassCompiler().compile(
            CompileRequest(
                content="a\n  color: red\n",
                root_path="/app.sass",
                importer=_unused_importer,
                indented=True,
                output_style="compressed",
            )
        )

        assert b"a{color:red}" in result.output

    def test_imports_go_through_importer(self):
        seen: list[tuple[str, str]] = []

        def importer(path: str, prev: str | None = None) -> ImportResult:
            seen.append((path, prev))
            return ImportResult(key="lib/colors", contents="$w: 10px;")

        result = SassCompiler().compile(
            CompileRequest(
                content='@import "colors";\na { width: $w; }',
                root_path="/app.scss",
                importer=importer,
                output_style="compressed",
            )
        )

        assert b"width:10px" in result.output
        assert [path for path, _ in seen] == ["colors"]

    def test_errors_become_compiler_errors(self):
        with pytest.raises(CompilerError) as exc_info:
            SassCompiler().compile(
                CompileRequest(
                    content="a { color: $missing; }",
                    root_path="/src/app.scss",
                    importer=_unused_importer,
                )
            )

        assert "Undefined variable" in exc_info.value.message
        assert exc_info.value.file == "src/app.scss"
        assert exc_info.value.line == 1


class TestLibsassPipeline:
    settings = {
        "moduleBase": "src",
        "alias": {"@core": "lib/core"},
        "targets": [r"^src/[^/]+\.scss$"],
        "outputStyle": "compressed",
    }

    def test_alias_and_nested_relative_imports(self, make_context):
        context = make_context(
            {
                "src/a.scss": '@import "@core/button";\n.a { width: $c; }',
                "src/lib/core/button.scss": '@import "./colors";\n$c: $w;',
                "src/lib/core/colors.scss": "$w: 10px;",
            }
        )

        report = run(context, self.settings)

        assert report.compiled == {"src/a.scss": "src/a.scss"}
        assert report.retained == ["src/lib/core/button.scss", "src/lib/core/colors.scss"]
        assert b".a{width:10px}" in context.get("src/a.scss").data
        assert context.graph.edges == {
            ("src/a.scss", "src/lib/core/button.scss"),
            ("src/a.scss", "src/lib/core/colors.scss"),
        }

    def test_missing_module_surfaces_resolution_error(self, make_context):
        context = make_context({"src/a.scss": '@import "@core/button";\n.a { color: red; }'})

        with pytest.raises(ModuleNotFoundError) as exc_info:
            run(context, self.settings)

        assert exc_info.value.resolved_key == "lib/core/button"

    def test_indented_import_is_rejected(self, make_context):
        context = make_context(
            {
                "src/a.scss": '@import "theme/dark";\n.a { color: $bg; }',
                "src/theme/dark.sass": "$bg: black\n",
            }
        )

        with pytest.raises(IndentedImportError) as exc_info:
            run(context, self.settings)

        assert exc_info.value.source_path == "src/theme/dark.sass"
        assert "must use SCSS syntax" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, CompilerError)

    def test_entry_relative_import_ignores_stdin_named_module(self, make_context):
        """libsass names the entry document ``stdin``; a ``stdin`` module must not move it."""
        context = make_context(
            {
                "dir/a.scss": '@import "./x";',
                "dir/x.scss": ".x { width: 1px; }",
                "stdin.scss": ".stdin { width: 2px; }",
            },
            include_only=("dir/x.scss", "stdin.scss"),
        )

        report = run(context, {"outputStyle": "compressed"})

        assert report.compiled == {"dir/a.scss": "dir/a.scss"}
        assert report.retained == ["dir/x.scss"]
        assert report.removed == ["stdin.scss"]
        assert b".x{width:1px}" in context.get("dir/a.scss").data
