"""String-level helpers for normalizing module paths."""

from __future__ import annotations

import re

_EXTENSION_PATTERN = re.compile(r"(?<=[^/])\.[^./]+$")


def _check_token(token: str) -> None:
    if not token:
        raise ValueError("strip token must be a non-empty string")


def strip_leading(value: str, token: str) -> str:
    """Remove every leading repetition of ``token`` from ``value``."""
    _check_token(token)
    while value.startswith(token):
        value = value[len(token):]
    return value


def strip_trailing(value: str, token: str) -> str:
    """Remove every trailing repetition of ``token`` from ``value``."""
    _check_token(token)
    while value.endswith(token):
        value = value[: -len(token)]
    return value


def strip(value: str, token: str) -> str:
    return strip_trailing(strip_leading(value, token), token)


def strip_extension(path: str) -> str:
    """Remove the last dot-delimited suffix of ``path``.

    Only the final ``.ext`` run is removed, and only when it does not start a
    path segment, so dot-files keep their name.

    Examples:
        >>> strip_extension("styles/app.scss")
        'styles/app'

        >>> strip_extension("theme/.hidden")
        'theme/.hidden'

        >>> strip_extension("v1.2/button")
        'v1.2/button'

        >>> strip_extension("a..b")
        'a.'
    """
    return _EXTENSION_PATTERN.sub("", path)


def resolve_path_prefix(path: str, prefix: str, replacement: str) -> str:
    """Swap ``prefix`` for ``replacement`` when it names a leading path segment.

    The prefix must match the whole path or be followed by a separator, so
    ``foobar`` is never matched by the prefix ``foo``.

    Examples:
        >>> resolve_path_prefix("@core/button", "@core", "lib/core")
        'lib/core/button'

        >>> resolve_path_prefix("@corex/button", "@core", "lib/core")
        '@corex/button'
    """
    if path == prefix:
        return replacement
    if path.startswith(prefix + "/"):
        return replacement + path[len(prefix):]
    return path


def resolve_prefix(value: str, prefix: str, replacement: str) -> str:
    """Swap ``prefix`` for ``replacement`` without any boundary check."""
    if value.startswith(prefix):
        return replacement + value[len(prefix):]
    return value
