from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from parse.sources import SUPPORTED_LANGUAGES
from rules.namespaces import DEFAULT_EXTERNAL_PREFIXES, NAMESPACE_SEPARATOR

CONFIG_FILENAME = "depgraph.toml"

ErrorHandling = Literal["continue", "stop"]
SourceLanguage = Literal["ruby", "python"]


class NamespacesConfig(BaseModel):
    """Namespace boundary conventions."""

    model_config = ConfigDict(extra="forbid")

    external_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTERNAL_PREFIXES),
        description="Top-level namespace segments treated as external",
    )

    @field_validator("external_prefixes")
    @classmethod
    def validate_external_prefixes(cls, v: list[str]) -> list[str]:
        for prefix in v:
            if not prefix or NAMESPACE_SEPARATOR in prefix:
                msg = (
                    f"Invalid external prefix '{prefix}': must be a single "
                    "non-empty namespace segment"
                )
                raise ValueError(msg)
        return v


class PipelineConfig(BaseModel):
    """Analyzer pipeline behaviour."""

    model_config = ConfigDict(extra="forbid")

    error_handling: ErrorHandling = Field(
        default="continue",
        description="Record analyzer failures and continue, or stop on the first",
    )
    enable_caching: bool = Field(
        default=False,
        description="Reuse results for identical dependency maps",
    )


class DepGraphConfig(BaseModel):
    """Configuration for depgraph-core analysis runs."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".depgraph",
        description="Output directory for generated artifacts",
    )
    language: SourceLanguage = Field(
        default="ruby",
        description=f"Source language to analyze ({', '.join(SUPPORTED_LANGUAGES)})",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    namespaces: NamespacesConfig = Field(default_factory=NamespacesConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the analyzed root.

    Absolute paths, home-relative paths and paths escaping the root are
    rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_dir.startswith("~") or output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    if not resolved_output.is_relative_to(resolved_root):
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg)

    return resolved_output


def _read_toml(config_path: Path) -> dict[str, Any]:
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e


def load_config(root: Path) -> DepGraphConfig:
    """Load configuration from depgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DepGraphConfig()

    data = _read_toml(config_path)
    try:
        return DepGraphConfig.model_validate(data)
    except ValueError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
