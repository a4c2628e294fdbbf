"""Source file discovery respecting .gitignore and include/exclude globs."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    IgnoreMatcher = Callable[[str], bool]

logger = logging.getLogger(__name__)


def _stays_under(path: Path, root: Path) -> bool:
    """Return True when ``path`` resolves to a location inside ``root``."""
    try:
        return path.resolve().is_relative_to(root.resolve())
    except OSError:
        return False


def _matches_any(rel_path: str, patterns: list[str] | None) -> bool:
    return bool(patterns) and any(fnmatch(rel_path, pat) for pat in patterns or ())


def _should_include_file(
    path: Path,
    directory: Path,
    output_dir: str,
    gitignore_matches: IgnoreMatcher | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Apply symlink, root, output-dir, gitignore and glob filters to one path."""
    if path.is_symlink() or not path.is_file():
        return False
    if not _stays_under(path, directory):
        logger.debug("Skipping %s: resolves outside %s", path, directory)
        return False

    rel_path = path.relative_to(directory)
    if output_dir and rel_path.parts[:1] == (output_dir,):
        return False
    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_posix = rel_path.as_posix()
    if include_patterns and not _matches_any(rel_posix, include_patterns):
        return False
    return not _matches_any(rel_posix, exclude_patterns)


def _gitignore_files(root: Path, *, nested: bool) -> list[Path]:
    """Return the .gitignore files to honour, ordered by relative path."""
    candidates = {root / ".gitignore"}
    if nested:
        candidates.update(root.rglob(".gitignore"))
    found = [path for path in candidates if path.is_file()]
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> IgnoreMatcher | None:
    gitignore_paths = _gitignore_files(root, nested=nested_gitignore)
    if not gitignore_paths:
        return None
    if len(gitignore_paths) == 1 and not nested_gitignore:
        return cast("IgnoreMatcher", parse_gitignore(gitignore_paths[0]))

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # path outside this .gitignore's base directory
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    suffixes: Iterable[str] = (".rb",),
    output_dir: str = ".depgraph",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find source files in a directory, respecting .gitignore.

    Args:
        directory: Directory to search
        suffixes: File suffixes to collect (e.g. ``(".rb",)``)
        output_dir: Top-level directory name to skip (default ".depgraph")
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        nested_gitignore: Compose every .gitignore under the directory
            instead of only the root one

    Yields:
        Path objects sorted lexicographically by relative path.
    """
    wanted = tuple(suffixes)
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    selected = sorted(
        (
            path
            for path in directory.rglob("*")
            if path.suffix in wanted
            and _should_include_file(
                path,
                directory,
                output_dir,
                gitignore_matches,
                include_patterns,
                exclude_patterns,
            )
        ),
        key=lambda p: p.relative_to(directory).as_posix(),
    )
    logger.debug("Found %d source files under %s", len(selected), directory)

    yield from selected


__all__ = ["_should_include_file", "find_source_files"]
