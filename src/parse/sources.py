"""Source-level entry points: parse a unit and extract its dependencies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.extractor import extract_dependencies
from parse.treesitter_python import parse_python
from parse.treesitter_ruby import parse_ruby

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from parse.accumulator import DependencyMap
    from parse.syntax import SyntaxNode

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("ruby", "python")

LANGUAGE_SUFFIXES: dict[str, tuple[str, ...]] = {
    "ruby": (".rb",),
    "python": (".py",),
}

_FRONT_ENDS: dict[str, Callable[[bytes], SyntaxNode | None]] = {
    "ruby": parse_ruby,
    "python": parse_python,
}


def _front_end(language: str) -> Callable[[bytes], SyntaxNode | None]:
    try:
        return _FRONT_ENDS[language]
    except KeyError:
        msg = (
            f"Unsupported language '{language}'. "
            f"Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )
        raise ValueError(msg) from None


def extract_source_dependencies(source: bytes | str, language: str) -> DependencyMap:
    """Parse one source unit and return its DependencyMap.

    Sources that fail to parse yield an empty map.
    """
    parse = _front_end(language)
    source_bytes = source.encode("utf8") if isinstance(source, str) else source
    return extract_dependencies(parse(source_bytes))


def extract_file_dependencies(file_path: Path, language: str) -> DependencyMap:
    """Extract the DependencyMap of a single source file.

    Unreadable files yield an empty map.
    """
    parse = _front_end(language)
    try:
        source_bytes = file_path.read_bytes()
    except OSError as exc:
        logger.debug("Skipping unreadable file %s: %s", file_path, exc)
        return {}
    return extract_dependencies(parse(source_bytes))


__all__ = [
    "LANGUAGE_SUFFIXES",
    "SUPPORTED_LANGUAGES",
    "extract_file_dependencies",
    "extract_source_dependencies",
]
