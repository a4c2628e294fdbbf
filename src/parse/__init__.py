"""Parsing and dependency extraction for depgraph-core."""

from parse.accumulator import (
    DependencyAccumulator,
    DependencyFact,
    DependencyMap,
    Reference,
    merge_dependency_maps,
)
from parse.dispatch import NodeDispatcher, flatten_fragments
from parse.extractor import extract_dependencies
from parse.sources import (
    LANGUAGE_SUFFIXES,
    SUPPORTED_LANGUAGES,
    extract_file_dependencies,
    extract_source_dependencies,
)
from parse.syntax import InvalidInputError, SyntaxNode

__all__ = [
    "LANGUAGE_SUFFIXES",
    "SUPPORTED_LANGUAGES",
    "DependencyAccumulator",
    "DependencyFact",
    "DependencyMap",
    "InvalidInputError",
    "NodeDispatcher",
    "Reference",
    "SyntaxNode",
    "extract_dependencies",
    "extract_file_dependencies",
    "extract_source_dependencies",
    "flatten_fragments",
    "merge_dependency_maps",
]
