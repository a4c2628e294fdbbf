from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from analysis.pipeline import AnalysisCache
from artifacts.generators import DepsGenerator
from artifacts.models.artifacts.summary import AnalysisSummary
from contract.artifacts import ARTIFACT_FILENAMES
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import DepGraphConfig

logger = logging.getLogger(__name__)

# Shared by every run in this process that enables caching.
_PIPELINE_CACHE = AnalysisCache()


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: DepGraphConfig | None = None,
) -> dict[str, object]:
    """Generate deterministic dependency artifacts for a repository.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from depgraph.toml when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    logger.info("Generating artifacts for %s into %s", root, out_dir)

    deps_gen = DepsGenerator()
    dependency_map, summary_dict = deps_gen.generate(
        root=root,
        out_dir=out_dir,
        language=config.language,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
        external_prefixes=config.namespaces.external_prefixes,
        error_handling=config.pipeline.error_handling,
        cache=_PIPELINE_CACHE if config.pipeline.enable_caching else None,
    )
    summary = AnalysisSummary(**summary_dict)

    return {
        "file_count": summary.file_count,
        "class_count": len(dependency_map),
        "node_count": summary.node_count,
        "edge_count": summary.edge_count,
        "cycle_count": len(summary.cycles),
        "violation_count": len(summary.boundary_violations),
        "boundary_health_score": summary.boundary_health_score,
        "error_count": len(summary.errors),
        "artifacts": [str(out_dir / name) for name in ARTIFACT_FILENAMES],
    }
