"""Namespace classification, cross-namespace cycles and boundary violations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.architecture import (
    ArchitecturalCycle,
    NamespaceViolation,
    Severity,
)
from graph.algos import build_graph

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from parse.accumulator import DependencyMap

NAMESPACE_SEPARATOR = "::"

DEFAULT_EXTERNAL_PREFIXES: tuple[str, ...] = ("External",)

SEVERITY_HIGH: Severity = "high"
SEVERITY_MEDIUM: Severity = "medium"

PENALTY_HIGH = 3.0
PENALTY_MEDIUM = 2.0

PERFECT_HEALTH_SCORE = 10.0
WORST_HEALTH_SCORE = 0.0

ROOT_NAMESPACE_LABEL = "(root)"


def extract_namespace(qualified_name: str) -> str:
    """Return every qualifier segment except the last.

    Examples:
        >>> extract_namespace("App::Models::User")
        'App::Models'
        >>> extract_namespace("User")
        ''
    """
    parts = qualified_name.split(NAMESPACE_SEPARATOR)
    return NAMESPACE_SEPARATOR.join(parts[:-1])


def cycle_namespaces(cycle: Sequence[str]) -> list[str]:
    """Return the sorted distinct namespaces of a closed cycle's nodes."""
    members = cycle[:-1] if len(cycle) > 1 and cycle[0] == cycle[-1] else cycle
    return sorted({extract_namespace(name) for name in members})


def is_cross_namespace(cycle: Sequence[str]) -> bool:
    return len(cycle_namespaces(cycle)) > 1


def cross_namespace_cycles(cycles: Iterable[Sequence[str]]) -> list[ArchitecturalCycle]:
    """Keep only cycles spanning more than one namespace, annotated.

    A cycle across namespaces is always reported with high severity.
    """
    return [
        ArchitecturalCycle(
            cycle=list(cycle),
            namespaces=cycle_namespaces(cycle),
            severity=SEVERITY_HIGH,
        )
        for cycle in cycles
        if is_cross_namespace(cycle)
    ]


def is_external_namespace(namespace: str, external_prefixes: Iterable[str]) -> bool:
    """Check whether a namespace's top-level segment is reserved as external."""
    if not namespace:
        return False
    return namespace.split(NAMESPACE_SEPARATOR)[0] in set(external_prefixes)


def violation_severity(
    source_namespace: str,
    target_namespace: str,
    external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> Severity:
    prefixes = tuple(external_prefixes)
    if is_external_namespace(source_namespace, prefixes) or is_external_namespace(
        target_namespace, prefixes
    ):
        return SEVERITY_HIGH
    return SEVERITY_MEDIUM


def _label(namespace: str) -> str:
    return namespace or ROOT_NAMESPACE_LABEL


def _recommendation(
    source_namespace: str,
    target_namespace: str,
    severity: Severity,
    external_prefixes: Iterable[str],
) -> str:
    source = _label(source_namespace)
    target = _label(target_namespace)
    if severity == SEVERITY_HIGH:
        if is_external_namespace(target_namespace, external_prefixes):
            return (
                f"Introduce an adapter or facade in {source} to isolate the "
                f"external dependency on {target}"
            )
        return (
            f"External namespace {source} reaches into {target}; "
            "invert the dependency behind an interface owned by the external side"
        )
    return (
        f"Consider introducing an interface or service layer between {source} "
        f"and {target} to reduce direct cross-namespace coupling"
    )


def boundary_violations(
    dependency_map: DependencyMap,
    external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> list[NamespaceViolation]:
    """Report every dependency edge whose endpoints live in different namespaces."""
    prefixes = tuple(external_prefixes)
    violations: list[NamespaceViolation] = []

    for source_class, target_class in build_graph(dependency_map).edges:
        source_namespace = extract_namespace(source_class)
        target_namespace = extract_namespace(target_class)
        if source_namespace == target_namespace:
            continue

        severity = violation_severity(source_namespace, target_namespace, prefixes)
        violations.append(
            NamespaceViolation(
                source_class=source_class,
                source_namespace=source_namespace,
                target_class=target_class,
                target_namespace=target_namespace,
                severity=severity,
                recommendation=_recommendation(
                    source_namespace, target_namespace, severity, prefixes
                ),
            )
        )

    return violations


def group_violations_by_namespace_pair(
    violations: Iterable[NamespaceViolation],
) -> dict[str, list[NamespaceViolation]]:
    """Group violations under ``"<source ns> -> <target ns>"`` keys."""
    grouped: dict[str, list[NamespaceViolation]] = {}
    for violation in violations:
        key = (
            f"{_label(violation.source_namespace)} -> "
            f"{_label(violation.target_namespace)}"
        )
        grouped.setdefault(key, []).append(violation)
    return grouped


def health_score_from_violations(violations: Iterable[NamespaceViolation]) -> float:
    """Score boundary health from 10.0 (no violations) down to 0.0."""
    total_penalty = sum(
        PENALTY_HIGH if violation.severity == SEVERITY_HIGH else PENALTY_MEDIUM
        for violation in violations
    )
    penalty = min(total_penalty / 10.0, PERFECT_HEALTH_SCORE)
    return max(PERFECT_HEALTH_SCORE - penalty, WORST_HEALTH_SCORE)


def boundary_health_score(
    dependency_map: DependencyMap,
    external_prefixes: Iterable[str] = DEFAULT_EXTERNAL_PREFIXES,
) -> float:
    return health_score_from_violations(
        boundary_violations(dependency_map, external_prefixes)
    )


__all__ = [
    "DEFAULT_EXTERNAL_PREFIXES",
    "NAMESPACE_SEPARATOR",
    "PENALTY_HIGH",
    "PENALTY_MEDIUM",
    "PERFECT_HEALTH_SCORE",
    "boundary_health_score",
    "boundary_violations",
    "cross_namespace_cycles",
    "cycle_namespaces",
    "extract_namespace",
    "group_violations_by_namespace_pair",
    "health_score_from_violations",
    "is_cross_namespace",
    "is_external_namespace",
    "violation_severity",
]
