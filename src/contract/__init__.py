"""Stable artifact contract surface for depgraph-core."""

from contract.artifacts import (
    ANALYSIS_SUMMARY_JSON,
    ARTIFACT_FILENAMES,
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    DEPENDENCIES_JSON,
    DEPS_EDGELIST,
    ArtifactSpec,
)

__all__ = [
    "ANALYSIS_SUMMARY_JSON",
    "ARTIFACT_FILENAMES",
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "DEPENDENCIES_JSON",
    "DEPS_EDGELIST",
    "ArtifactSpec",
]
