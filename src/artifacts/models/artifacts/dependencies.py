"""Dependency models for class relationships.

This module contains models for the dependency graph derived from a
DependencyMap and the aggregate statistics computed over it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Schema version constant
SCHEMA_VERSION = 1


class DependencyGraph(BaseModel):
    """Directed class dependency graph in first-seen order."""

    nodes: list[str] = Field(default_factory=list)
    edges: list[tuple[str, str]] = Field(default_factory=list)


class DependencyStatistics(BaseModel):
    """Aggregate counts over a DependencyMap."""

    total_classes: int = 0
    total_dependencies: int = 0
    most_used_dependency: str | None = None
    dependency_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Number of distinct owners referencing each target",
    )


__all__ = ["SCHEMA_VERSION", "DependencyGraph", "DependencyStatistics"]
