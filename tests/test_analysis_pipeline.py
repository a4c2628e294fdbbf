from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from analysis.analyzers import (
    BoundaryHealthAnalyzer,
    CycleAnalyzer,
    StatisticsAnalyzer,
    default_analyzer_factories,
)
from analysis.pipeline import AnalysisCache, AnalysisPipeline
from artifacts.models.artifacts.summary import AnalyzerFailure

if TYPE_CHECKING:
    from parse.accumulator import DependencyMap

_GAME_MAP: DependencyMap = {
    "Game::Player": [{"Game::Enemy": ["health"]}, {"External::Logger": ["info"]}],
    "Game::Enemy": [{"Game::Player": ["position"]}],
}


class _FailingAnalyzer:
    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "failing"

    def analyze(self) -> None:
        msg = "analyzer exploded"
        raise RuntimeError(msg)


class _CountingAnalyzer:
    calls = 0

    def __init__(self, dependency_map: DependencyMap) -> None:
        self.dependency_map = dependency_map

    @property
    def key(self) -> str:
        return "owners"

    def analyze(self) -> list[str]:
        type(self).calls += 1
        return list(self.dependency_map)


def _broken_factory(dependency_map: DependencyMap) -> _CountingAnalyzer:
    msg = "cannot build"
    raise ValueError(msg)


def test_default_pipeline_fills_every_key() -> None:
    result = AnalysisPipeline().run(_GAME_MAP)

    assert list(result.results) == [
        "graph",
        "cycles",
        "cross_namespace_cycles",
        "boundary_violations",
        "boundary_health_score",
        "depths",
        "statistics",
    ]
    assert result.errors == ()
    assert result.results["cycles"] == [["Game::Player", "Game::Enemy", "Game::Player"]]
    assert result.results["cross_namespace_cycles"] == []
    assert result.results["boundary_health_score"] == pytest.approx(9.7)
    assert result.results["statistics"].most_used_dependency == "Game::Enemy"


def test_pipeline_runs_only_injected_analyzers() -> None:
    result = AnalysisPipeline([CycleAnalyzer, StatisticsAnalyzer]).run(_GAME_MAP)

    assert list(result.results) == ["cycles", "statistics"]


def test_factories_receive_external_prefixes() -> None:
    factories = default_analyzer_factories(external_prefixes=["Game"])

    result = AnalysisPipeline(factories).run(_GAME_MAP)

    # both namespaces of the only violation are now external
    assert [v.severity for v in result.results["boundary_violations"]] == ["high"]
    assert result.results["boundary_health_score"] == pytest.approx(9.7)


def test_continue_records_failure_and_keeps_going() -> None:
    pipeline = AnalysisPipeline(
        [CycleAnalyzer, _FailingAnalyzer, BoundaryHealthAnalyzer],
        error_handling="continue",
    )

    result = pipeline.run(_GAME_MAP)

    assert list(result.results) == ["cycles", "boundary_health_score"]
    assert result.errors == (
        AnalyzerFailure(
            analyzer="failing",
            error_type="RuntimeError",
            message="analyzer exploded",
        ),
    )


def test_continue_records_construction_failure() -> None:
    result = AnalysisPipeline([_broken_factory, CycleAnalyzer]).run(_GAME_MAP)

    assert list(result.results) == ["cycles"]
    assert result.errors[0].analyzer == "_broken_factory"
    assert result.errors[0].error_type == "ValueError"


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="analysis.pipeline"):
        AnalysisPipeline([_FailingAnalyzer]).run(_GAME_MAP)

    assert "Analyzer failing failed: analyzer exploded" in caplog.text


def test_stop_propagates_failure() -> None:
    pipeline = AnalysisPipeline([_FailingAnalyzer], error_handling="stop")

    with pytest.raises(RuntimeError, match="analyzer exploded"):
        pipeline.run(_GAME_MAP)


def test_cache_reuses_results_for_identical_maps() -> None:
    _CountingAnalyzer.calls = 0
    cache = AnalysisCache()
    pipeline = AnalysisPipeline([_CountingAnalyzer], cache=cache)

    first = pipeline.run(_GAME_MAP)
    second = pipeline.run(dict(_GAME_MAP))

    assert _CountingAnalyzer.calls == 1
    assert len(cache) == 1
    assert first == second


def test_cache_hits_are_independent_copies() -> None:
    cache = AnalysisCache()
    pipeline = AnalysisPipeline([_CountingAnalyzer], cache=cache)

    first = pipeline.run(_GAME_MAP)
    first.results["owners"].append("Mutated")

    assert pipeline.run(_GAME_MAP).results["owners"] == ["Game::Player", "Game::Enemy"]


def test_cache_fingerprint_depends_on_content_and_order() -> None:
    reordered = {
        "Game::Enemy": _GAME_MAP["Game::Enemy"],
        "Game::Player": _GAME_MAP["Game::Player"],
    }
    fingerprint = AnalysisCache.fingerprint(_GAME_MAP)

    assert fingerprint == AnalysisCache.fingerprint(dict(_GAME_MAP))
    assert fingerprint != AnalysisCache.fingerprint(reordered)
    assert fingerprint != AnalysisCache.fingerprint({})


def test_cache_shared_between_threads() -> None:
    cache = AnalysisCache()
    pipeline = AnalysisPipeline(cache=cache)

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(pipeline.run, [_GAME_MAP] * 8))

    assert len(cache) == 1
    assert all(result == results[0] for result in results)
