"""Summary builders for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.dependencies import DependencyStatistics

if TYPE_CHECKING:
    from collections.abc import Iterable

    from parse.accumulator import DependencyMap


def compute_fan_stats(
    edges: Iterable[tuple[str, str]],
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for source, target in edges:
        fan_out[source] = fan_out.get(source, 0) + 1
        fan_in[target] = fan_in.get(target, 0) + 1

    return fan_in, fan_out


def compute_dependency_counts(dependency_map: DependencyMap) -> dict[str, int]:
    """Count, per target, the distinct owners referencing it (first-seen order)."""
    referencing_owners: dict[str, set[str]] = {}

    for owner, groups in dependency_map.items():
        for group in groups:
            if not isinstance(group, dict):
                continue
            for target in group:
                referencing_owners.setdefault(target, set()).add(owner)

    return {target: len(owners) for target, owners in referencing_owners.items()}


def compute_statistics(dependency_map: DependencyMap) -> DependencyStatistics:
    """Compute aggregate statistics over a DependencyMap.

    Ties for the most used dependency go to the target seen first.
    """
    dependency_counts = compute_dependency_counts(dependency_map)

    most_used: str | None = None
    if dependency_counts:
        # max() keeps the first maximal element
        most_used = max(dependency_counts, key=dependency_counts.__getitem__)

    return DependencyStatistics(
        total_classes=len(dependency_map),
        total_dependencies=len(dependency_counts),
        most_used_dependency=most_used,
        dependency_counts=dependency_counts,
    )
