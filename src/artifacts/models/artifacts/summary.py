"""Analysis summary model written as ``analysis_summary.json``."""

from __future__ import annotations

from pydantic import BaseModel, Field

from artifacts.models.artifacts.architecture import (
    ArchitecturalCycle,
    NamespaceViolation,
)
from artifacts.models.artifacts.dependencies import (
    SCHEMA_VERSION,
    DependencyGraph,
    DependencyStatistics,
)


class AnalyzerFailure(BaseModel):
    """An analyzer that raised while the pipeline kept going."""

    analyzer: str
    error_type: str
    message: str


class AnalysisSummary(BaseModel):
    """Everything derived from one DependencyMap."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    language: str
    file_count: int = 0
    node_count: int = 0
    edge_count: int = 0
    graph: DependencyGraph = Field(default_factory=DependencyGraph)
    cycles: list[list[str]] = Field(default_factory=list)
    cross_namespace_cycles: list[ArchitecturalCycle] = Field(default_factory=list)
    boundary_violations: list[NamespaceViolation] = Field(default_factory=list)
    boundary_health_score: float = 10.0
    depths: dict[str, int] = Field(default_factory=dict)
    statistics: DependencyStatistics = Field(default_factory=DependencyStatistics)
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)
    errors: list[AnalyzerFailure] = Field(default_factory=list)


__all__ = ["AnalysisSummary", "AnalyzerFailure"]
