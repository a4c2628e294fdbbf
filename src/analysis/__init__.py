"""Analyzer composition for depgraph-core."""

from analysis.analyzers import (
    BoundaryHealthAnalyzer,
    BoundaryViolationAnalyzer,
    CrossNamespaceCycleAnalyzer,
    CycleAnalyzer,
    DepthAnalyzer,
    GraphAnalyzer,
    StatisticsAnalyzer,
    default_analyzer_factories,
)
from analysis.pipeline import AnalysisCache, AnalysisPipeline, PipelineResult

__all__ = [
    "AnalysisCache",
    "AnalysisPipeline",
    "BoundaryHealthAnalyzer",
    "BoundaryViolationAnalyzer",
    "CrossNamespaceCycleAnalyzer",
    "CycleAnalyzer",
    "DepthAnalyzer",
    "GraphAnalyzer",
    "PipelineResult",
    "StatisticsAnalyzer",
    "default_analyzer_factories",
]
