"""Class dependency generator for depgraph-core artifacts."""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from analysis.analyzers import default_analyzer_factories
from analysis.pipeline import AnalysisPipeline
from artifacts.models.artifacts.summary import AnalysisSummary
from artifacts.summaries.builders import compute_fan_stats
from artifacts.utils import _get_output_dir_name, _write_edgelist, _write_json
from contract.artifacts import ANALYSIS_SUMMARY_JSON, DEPENDENCIES_JSON, DEPS_EDGELIST
from graph.algos import build_graph
from parse.accumulator import merge_dependency_maps
from parse.sources import LANGUAGE_SUFFIXES, extract_file_dependencies
from rules.namespaces import DEFAULT_EXTERNAL_PREFIXES
from scan.files import find_source_files

if TYPE_CHECKING:
    from analysis.pipeline import AnalysisCache, PipelineResult
    from parse.accumulator import DependencyMap

logger = logging.getLogger(__name__)

# Summary fields filled straight from analyzer results of the same key.
_RESULT_FIELDS = (
    "cycles",
    "cross_namespace_cycles",
    "boundary_violations",
    "boundary_health_score",
    "depths",
    "statistics",
)


def _build_summary(
    dependency_map: DependencyMap,
    outcome: PipelineResult,
    *,
    language: str,
    file_count: int,
) -> AnalysisSummary:
    graph = outcome.results.get("graph") or build_graph(dependency_map)
    fan_in, fan_out = compute_fan_stats(graph.edges)

    fields: dict[str, Any] = {
        key: outcome.results[key] for key in _RESULT_FIELDS if key in outcome.results
    }
    return AnalysisSummary(
        language=language,
        file_count=file_count,
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        graph=graph,
        fan_in=dict(sorted(fan_in.items())),
        fan_out=dict(sorted(fan_out.items())),
        errors=list(outcome.errors),
        **fields,
    )


class DepsGenerator:
    """Generator for class dependency artifacts."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "deps"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[DependencyMap, dict[str, Any]]:
        """Generate dependencies.json, deps.edgelist and analysis_summary.json."""
        language: str = kwargs.get("language", "ruby")
        include_patterns: list[str] | None = kwargs.get("include_patterns")
        exclude_patterns: list[str] | None = kwargs.get("exclude_patterns")
        nested_gitignore: bool = kwargs.get("nested_gitignore", False)
        external_prefixes: list[str] = kwargs.get(
            "external_prefixes", list(DEFAULT_EXTERNAL_PREFIXES)
        )
        error_handling: str = kwargs.get("error_handling", "continue")
        cache: AnalysisCache | None = kwargs.get("cache")

        out_dir.mkdir(parents=True, exist_ok=True)

        out_dir_name = _get_output_dir_name(out_dir, root)

        file_maps: list[DependencyMap] = []
        for file_path in find_source_files(
            root,
            suffixes=LANGUAGE_SUFFIXES[language],
            output_dir=out_dir_name,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
        ):
            logger.debug("Extracting %s", file_path.relative_to(root).as_posix())
            file_maps.append(extract_file_dependencies(file_path, language))

        dependency_map = merge_dependency_maps(file_maps)
        logger.info(
            "Extracted %d classes from %d %s files",
            len(dependency_map),
            len(file_maps),
            language,
        )

        pipeline = AnalysisPipeline(
            default_analyzer_factories(external_prefixes),
            error_handling=error_handling,  # type: ignore[arg-type]
            cache=cache,
        )
        outcome = pipeline.run(dependency_map)

        summary = _build_summary(
            dependency_map,
            outcome,
            language=language,
            file_count=len(file_maps),
        )

        # first-seen key order is part of the DependencyMap format
        _write_json(out_dir / DEPENDENCIES_JSON, dependency_map, sort_keys=False)
        _write_edgelist(out_dir / DEPS_EDGELIST, summary.graph.edges)
        _write_json(out_dir / ANALYSIS_SUMMARY_JSON, summary)

        return dependency_map, summary.model_dump()


__all__ = [
    "ANALYSIS_SUMMARY_JSON",
    "DEPENDENCIES_JSON",
    "DEPS_EDGELIST",
    "DepsGenerator",
]
