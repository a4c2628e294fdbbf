"""Summary helpers for depgraph-core artifacts."""

from artifacts.summaries.builders import (
    compute_dependency_counts,
    compute_fan_stats,
    compute_statistics,
)

__all__ = ["compute_dependency_counts", "compute_fan_stats", "compute_statistics"]
