"""Custom exceptions for the webdeploy SASS plugin."""

from __future__ import annotations


class WebdeploySassError(Exception):
    """Base exception for all plugin errors."""

    pass


class ConfigError(WebdeploySassError):
    """Raised when plugin settings are malformed.

    Surfaced before any target is compiled.
    """

    def __init__(self, message: str, *, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = message + "\n" + "\n".join(f"  - {item}" for item in self.problems)
        super().__init__(message)


class ModuleCollisionError(ConfigError):
    """Raised when two targets normalize to the same module key."""

    def __init__(self, key: str, first_path: str, second_path: str):
        self.key = key
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(
            f"Module key '{key}' is ambiguous: "
            f"'{first_path}' and '{second_path}' both resolve to it"
        )


class ModuleNotFoundError(WebdeploySassError):
    """Raised when an import specifier resolves to a key with no target."""

    def __init__(self, specifier: str, resolved_key: str, consumer: str | None = None):
        """Initialize error with context.

        Args:
            specifier: The import string exactly as written in the stylesheet
            resolved_key: Module key the specifier resolved to
            consumer: Source path of the target being compiled
        """
        self.specifier = specifier
        self.resolved_key = resolved_key
        self.consumer = consumer
        message = f"Module '{specifier}' ('{resolved_key}') does not exist"
        if consumer:
            message += f" (imported from '{consumer}')"
        super().__init__(message)


class CompilerError(WebdeploySassError):
    """Raised when the stylesheet compiler rejects a target.

    When the compiler reports a position the message reads
    ``<message> in <file>:<line>``; otherwise the compiler's text is kept verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        file: str | None = None,
        line: int | None = None,
        target: str | None = None,
    ):
        self.message = message
        self.file = file
        self.line = line
        self.target = target
        super().__init__(self._get_message())

    @property
    def has_location(self) -> bool:
        return self.file is not None and self.line is not None

    def _get_message(self) -> str:
        if self.has_location:
            return f"{self.message} in {self.file}:{self.line}"
        return self.message

    def for_target(self, target: str) -> CompilerError:
        """Return a copy of this error attributed to ``target``."""
        return CompilerError(self.message, file=self.file, line=self.line, target=target)


class IndentedImportError(CompilerError):
    """Raised when an import resolves to an indented-syntax (``.sass``) module.

    Only entry documents may use the indented syntax; libsass reads every
    imported source as SCSS.
    """

    def __init__(self, specifier: str, source_path: str, consumer: str | None = None):
        self.specifier = specifier
        self.source_path = source_path
        self.consumer = consumer
        super().__init__(
            f"Cannot import indented-syntax module '{specifier}' ('{source_path}'); "
            "imported stylesheets must use SCSS syntax",
            target=consumer,
        )
