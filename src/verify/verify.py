"""Determinism verification for depgraph-core artifacts."""

from __future__ import annotations

import filecmp
import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import orjson

from artifacts.write import generate_all_artifacts
from contract.artifacts import ANALYSIS_SUMMARY_JSON
from parse.sources import SUPPORTED_LANGUAGES
from rules.config import ConfigError, DepGraphConfig, load_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _relative_files(directory: Path) -> set[str]:
    return {
        path.relative_to(directory).as_posix()
        for path in directory.rglob("*")
        if path.is_file()
    }


def _check_artifacts_dir(artifacts_dir: Path) -> None:
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)


def _recorded_language(artifacts_dir: Path) -> str | None:
    """Return the language an existing analysis_summary.json was built for."""
    summary_path = artifacts_dir / ANALYSIS_SUMMARY_JSON
    try:
        summary = orjson.loads(summary_path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        logger.debug("No usable %s in %s: %s", ANALYSIS_SUMMARY_JSON, artifacts_dir, exc)
        return None
    language = summary.get("language") if isinstance(summary, dict) else None
    if language in SUPPORTED_LANGUAGES:
        return language
    return None


def _verification_config(
    root: Path, artifacts_dir: Path, language: str | None
) -> DepGraphConfig:
    config = load_config(root)
    if language is None:
        language = _recorded_language(artifacts_dir)
    if language is None or language == config.language:
        return config
    if language not in SUPPORTED_LANGUAGES:
        msg = (
            f"Unsupported language '{language}'. "
            f"Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )
        raise ConfigError(msg)
    return config.model_copy(update={"language": language})


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    language: str | None = None,
) -> DeterminismResult:
    """Regenerate artifacts and compare them with an existing directory.

    Artifacts are written to a temporary directory and compared byte-for-byte
    with ``artifacts_dir`` by relative path. The language is ``language`` when
    given, else the one recorded in the existing analysis_summary.json, else
    the depgraph.toml setting.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
        ConfigError: If depgraph.toml is invalid or the language is unsupported.
    """
    _check_artifacts_dir(artifacts_dir)
    config = _verification_config(root, artifacts_dir, language)

    with tempfile.TemporaryDirectory() as temp_dir:
        fresh_dir = Path(temp_dir)
        generate_all_artifacts(root=root, out_dir=fresh_dir, config=config)

        existing = _relative_files(artifacts_dir)
        regenerated = _relative_files(fresh_dir)

        missing = sorted(existing - regenerated)
        extra = sorted(regenerated - existing)
        mismatches = [
            name
            for name in sorted(existing & regenerated)
            if not filecmp.cmp(artifacts_dir / name, fresh_dir / name, shallow=False)
        ]

    ok = not (missing or extra or mismatches)
    if not ok:
        logger.info(
            "Determinism check failed: %d missing, %d extra, %d mismatched",
            len(missing),
            len(extra),
            len(mismatches),
        )
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )


__all__ = ["DeterminismResult", "verify_determinism"]
