"""Artifact contract definitions.

Filenames and formats of the files written by ``depgraph analyze``. These are
the stable identifiers consumers and the determinism check rely on.
"""

from __future__ import annotations

from dataclasses import dataclass

from artifacts.models.artifacts.dependencies import SCHEMA_VERSION

ARTIFACT_SCHEMA_VERSION = SCHEMA_VERSION

DEPENDENCIES_JSON = "dependencies.json"
DEPS_EDGELIST = "deps.edgelist"
ANALYSIS_SUMMARY_JSON = "analysis_summary.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Filename and format of one contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "dependencies": ArtifactSpec(
        filename=DEPENDENCIES_JSON,
        format="json",
        required_fields_note="DependencyMap: class -> [{target: [members]}].",
    ),
    "deps_edgelist": ArtifactSpec(
        filename=DEPS_EDGELIST,
        format="edgelist",
        required_fields_note="One 'source -> target' line per graph edge.",
    ),
    "analysis_summary": ArtifactSpec(
        filename=ANALYSIS_SUMMARY_JSON,
        format="json",
        required_fields_note="AnalysisSummary fields required by contract.",
    ),
}

ARTIFACT_FILENAMES: tuple[str, ...] = tuple(
    spec.filename for spec in ARTIFACT_SPECS.values()
)
