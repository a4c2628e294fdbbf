"""Analyzers composed by the analysis pipeline.

Every analyzer is built from a DependencyMap, exposes a stable ``key`` used to
slot its result into the summary, and computes that result in ``analyze()``.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Protocol

from artifacts.summaries.builders import compute_statistics
from graph.algos import build_graph, dependency_depths, find_cycles
from rules.namespaces import (
    DEFAULT_EXTERNAL_PREFIXES,
    boundary_violations,
    cross_namespace_cycles,
    health_score_from_violations,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from artifacts.models.artifacts.architecture import (
        ArchitecturalCycle,
        NamespaceViolation,
    )
    from artifacts.models.artifacts.dependencies import (
        DependencyGraph,
        DependencyStatistics,
    )
    from parse.accumulator import DependencyMap


class Analyzer(Protocol):
    @property
    def key(self) -> str: ...

    def analyze(self) -> Any: ...


class GraphAnalyzer:
    """Expose the dependency graph itself."""

    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "graph"

    def analyze(self) -> DependencyGraph:
        return build_graph(self.dependency_map)


class CycleAnalyzer:
    """Find circular dependencies between classes."""

    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "cycles"

    def analyze(self) -> list[list[str]]:
        return find_cycles(build_graph(self.dependency_map))


class CrossNamespaceCycleAnalyzer:
    """Find circular dependencies spanning more than one namespace."""

    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "cross_namespace_cycles"

    def analyze(self) -> list[ArchitecturalCycle]:
        return cross_namespace_cycles(find_cycles(build_graph(self.dependency_map)))


class BoundaryViolationAnalyzer:
    def __init__(
        self,
        dependency_map: DependencyMap,
        external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
    ) -> None:
        self.dependency_map = dependency_map
        self.external_prefixes = tuple(external_prefixes)

    @property
    def key(self) -> str:
        return "boundary_violations"

    def analyze(self) -> list[NamespaceViolation]:
        return boundary_violations(self.dependency_map, self.external_prefixes)


class BoundaryHealthAnalyzer(BoundaryViolationAnalyzer):
    @property
    def key(self) -> str:
        return "boundary_health_score"

    def analyze(self) -> float:
        return health_score_from_violations(super().analyze())


class DepthAnalyzer:
    """Longest outgoing dependency chain per class."""

    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "depths"

    def analyze(self) -> dict[str, int]:
        return dependency_depths(build_graph(self.dependency_map))


class StatisticsAnalyzer:
    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "statistics"

    def analyze(self) -> DependencyStatistics:
        return compute_statistics(self.dependency_map)


def default_analyzer_factories(
    external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> list[Callable[[DependencyMap], Analyzer]]:
    """Return the standard analyzer set in summary order."""
    prefixes = tuple(external_prefixes)
    return [
        GraphAnalyzer,
        CycleAnalyzer,
        CrossNamespaceCycleAnalyzer,
        partial(BoundaryViolationAnalyzer, external_prefixes=prefixes),
        partial(BoundaryHealthAnalyzer, external_prefixes=prefixes),
        DepthAnalyzer,
        StatisticsAnalyzer,
    ]


__all__ = [
    "Analyzer",
    "BoundaryHealthAnalyzer",
    "BoundaryViolationAnalyzer",
    "CrossNamespaceCycleAnalyzer",
    "CycleAnalyzer",
    "DepthAnalyzer",
    "GraphAnalyzer",
    "StatisticsAnalyzer",
    "default_analyzer_factories",
]
