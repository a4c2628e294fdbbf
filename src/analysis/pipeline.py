"""Analyzer pipeline with optional result caching."""

from __future__ import annotations

import copy
import hashlib
import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson

from analysis.analyzers import default_analyzer_factories
from artifacts.models.artifacts.summary import AnalyzerFailure

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from analysis.analyzers import Analyzer
    from parse.accumulator import DependencyMap
    from rules.config import ErrorHandling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    results: dict[str, Any] = field(default_factory=dict)
    errors: tuple[AnalyzerFailure, ...] = field(default_factory=tuple)


class AnalysisCache:
    """Pipeline results keyed by a DependencyMap fingerprint.

    A single lock guards the entries so one cache may be shared between
    threads. Stored and returned results are deep copies.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, PipelineResult] = {}

    @staticmethod
    def fingerprint(dependency_map: DependencyMap) -> str:
        # key order is significant: it drives output order
        return hashlib.sha256(orjson.dumps(dependency_map)).hexdigest()

    def get(self, key: str) -> PipelineResult | None:
        with self._lock:
            cached = self._entries.get(key)
        return copy.deepcopy(cached) if cached is not None else None

    def put(self, key: str, result: PipelineResult) -> None:
        stored = copy.deepcopy(result)
        with self._lock:
            self._entries[key] = stored

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _analyzer_label(analyzer: Any, factory: Any) -> str:
    key = getattr(analyzer, "key", None)
    if isinstance(key, str):
        return key
    target = getattr(factory, "func", factory)
    return getattr(target, "__name__", type(target).__name__)


class AnalysisPipeline:
    """Run a fixed set of analyzers over one DependencyMap.

    Args:
        factories: Callables building an analyzer from a DependencyMap; the
            default set is used when omitted.
        error_handling: ``"continue"`` records a failing analyzer and keeps
            going, ``"stop"`` re-raises its exception.
        cache: Optional cache shared across runs of this pipeline.
    """

    def __init__(
        self,
        factories: Sequence[Callable[[DependencyMap], Analyzer]] | None = None,
        *,
        error_handling: ErrorHandling = "continue",
        cache: AnalysisCache | None = None,
    ) -> None:
        self.factories = (
            list(factories) if factories is not None else default_analyzer_factories()
        )
        self.error_handling = error_handling
        self.cache = cache

    def run(self, dependency_map: DependencyMap) -> PipelineResult:
        cache_key: str | None = None
        if self.cache is not None:
            cache_key = self.cache.fingerprint(dependency_map)
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Pipeline cache hit for %s", cache_key[:12])
                return cached

        results: dict[str, Any] = {}
        errors: list[AnalyzerFailure] = []

        for factory in self.factories:
            analyzer: Any = None
            try:
                analyzer = factory(dependency_map)
                results[analyzer.key] = analyzer.analyze()
            except Exception as exc:
                if self.error_handling == "stop":
                    raise
                label = _analyzer_label(analyzer, factory)
                logger.warning("Analyzer %s failed: %s", label, exc)
                errors.append(
                    AnalyzerFailure(
                        analyzer=label,
                        error_type=type(exc).__name__,
                        message=str(exc),
                    )
                )

        result = PipelineResult(results=results, errors=tuple(errors))
        if self.cache is not None and cache_key is not None:
            self.cache.put(cache_key, result)
        return result


__all__ = ["AnalysisCache", "AnalysisPipeline", "PipelineResult"]
