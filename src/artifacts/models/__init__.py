"""Model namespace for depgraph-core artifact schemas."""

from artifacts.models.artifacts.architecture import (
    ArchitecturalCycle,
    NamespaceViolation,
    Severity,
)
from artifacts.models.artifacts.dependencies import (
    DependencyGraph,
    DependencyStatistics,
)
from artifacts.models.artifacts.summary import AnalysisSummary, AnalyzerFailure

__all__ = [
    "AnalysisSummary",
    "AnalyzerFailure",
    "ArchitecturalCycle",
    "DependencyGraph",
    "DependencyStatistics",
    "NamespaceViolation",
    "Severity",
]
