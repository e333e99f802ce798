from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webdeploy_sass.resolution.path_utils import strip

DEFAULT_RENAME_SUFFIX = ".css"
DEFAULT_CANDIDATE_PATTERN = re.compile(r"\.s[ac]ss$")
OUTPUT_STYLES = ("nested", "expanded", "compact", "compressed")


def _strip_separators(value: str) -> str:
    return strip(value, "/")


def _normalise_table(table: Mapping[str, str], *, name: str) -> Mapping[str, str]:
    normalised: dict[str, str] = {}
    for raw_key, raw_value in table.items():
        key = _strip_separators(raw_key)
        if not key:
            raise ValueError(f"{name} keys must name a path, got {raw_key!r}")
        if key in normalised:
            raise ValueError(f"{name} key {raw_key!r} duplicates {key!r}")
        normalised[key] = _strip_separators(raw_value)
    return MappingProxyType(normalised)


class PluginSettings(BaseModel):
    """Resolution and compilation settings, built once per pipeline run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    module_base: str = Field(default="", alias="moduleBase")
    alias: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    replace: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    resolve_relative_paths: bool = Field(default=True, alias="resolveRelativePaths")
    targets: tuple[re.Pattern[str], ...] = Field(
        default=(), description="Only targets whose source path matches one of these are compiled"
    )
    rename: str | None = Field(default=None, description="Suffix substituted into compiled output paths")

    candidate_pattern: re.Pattern[str] = Field(default=DEFAULT_CANDIDATE_PATTERN, alias="match")
    output_style: str = Field(default="nested", alias="outputStyle")
    workers: int = Field(default=1, ge=1, description="Number of targets compiled in parallel")

    @field_validator("module_base")
    @classmethod
    def _normalise_module_base(cls, value: str) -> str:
        return _strip_separators(value)

    @field_validator("alias")
    @classmethod
    def _normalise_alias(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _normalise_table(value, name="alias")

    @field_validator("replace")
    @classmethod
    def _normalise_replace(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _normalise_table(value, name="replace")

    @field_validator("rename", mode="before")
    @classmethod
    def _normalise_rename(cls, value: Any) -> str | None:
        if value is None:
            return None
        if value is True:
            return DEFAULT_RENAME_SUFFIX
        if isinstance(value, str) and value.strip():
            suffix = value.strip()
            return suffix if suffix.startswith(".") else f".{suffix}"
        raise ValueError("rename must be true or a non-empty suffix string")

    @field_validator("output_style")
    @classmethod
    def _normalise_output_style(cls, value: str) -> str:
        normalised = value.strip().lower()
        if normalised not in OUTPUT_STYLES:
            raise ValueError(f"output_style must be one of {', '.join(OUTPUT_STYLES)}")
        return normalised

    def is_filtered_in(self, source_path: str) -> bool:
        """Whether the target filter allows ``source_path`` to be compiled."""
        if not self.targets:
            return True
        return any(pattern.search(source_path) for pattern in self.targets)
