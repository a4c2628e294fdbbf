"""Command-line interface for depgraph-core."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from artifacts.write import generate_all_artifacts
from parse.sources import SUPPORTED_LANGUAGES
from rules.config import ConfigError, load_config, resolve_output_dir
from utils import VALID_LOG_LEVELS, configure_logging
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="depgraph")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze", help="Extract class dependencies and write artifacts"
    )
    _add_common_paths(analyze_parser)
    analyze_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )
    analyze_parser.add_argument(
        "--language",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help="Source language (default: config language)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )
    verify_parser.add_argument(
        "--language",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help="Source language (default: language recorded in the artifacts)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_analyze(root: Path, out_dir: str | None, language: str | None) -> int:
    try:
        config = load_config(root)
        if language is not None:
            config = config.model_copy(update={"language": language})
        result = generate_all_artifacts(
            root=root,
            out_dir=_resolve_output_dir(out_dir),
            config=config,
        )
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    sys.stdout.write(
        f"{result['class_count']} classes, {result['edge_count']} edges, "
        f"{result['cycle_count']} cycles, "
        f"boundary health {result['boundary_health_score']:.1f}/10\n"
    )
    return 0


def _handle_verify(
    root: Path, artifacts_dir: str | None, language: str | None
) -> int:
    try:
        resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2
    try:
        result = verify_determinism(
            root=root,
            artifacts_dir=resolved_artifacts_dir,
            language=language,
        )
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    root = Path(args.root).expanduser().resolve()

    if args.command == "analyze":
        return _handle_analyze(root, args.out_dir, args.language)

    if args.command == "verify":
        return _handle_verify(root, args.artifacts_dir, args.language)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
