"""Artifact generators for depgraph-core."""

from artifacts.generators.deps import DepsGenerator

__all__ = ["DepsGenerator"]
