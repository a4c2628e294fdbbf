"""Rule definitions for depgraph-core."""

from rules.config import (
    ConfigError,
    DepGraphConfig,
    NamespacesConfig,
    PipelineConfig,
    load_config,
)
from rules.namespaces import (
    boundary_health_score,
    boundary_violations,
    cross_namespace_cycles,
    extract_namespace,
    is_cross_namespace,
)

__all__ = [
    "ConfigError",
    "DepGraphConfig",
    "NamespacesConfig",
    "PipelineConfig",
    "boundary_health_score",
    "boundary_violations",
    "cross_namespace_cycles",
    "extract_namespace",
    "is_cross_namespace",
    "load_config",
]
