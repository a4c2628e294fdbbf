"""Ordered, de-duplicating accumulation of dependency facts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable

DependencyGroup = dict[str, list[str]]
DependencyMap = dict[str, list[DependencyGroup]]


class Reference(NamedTuple):
    """A dependency fragment produced by a node handler, before an owner is known."""

    target: str
    member: str | None = None


@dataclass(frozen=True)
class DependencyFact:
    """A single ``(owner, target, member)`` observation.

    ``member`` is None for a plain constant reference.
    """

    owner: str
    target: str
    member: str | None = None


class DependencyAccumulator:
    """Builder for a DependencyMap.

    Targets keep first-seen order per owner and members keep first-seen order
    per target; repeated members are dropped.
    """

    def __init__(self) -> None:
        # dicts double as ordered sets for members
        self._owners: dict[str, dict[str, dict[str, None]]] = {}

    def ensure_owner(self, owner: str) -> None:
        self._owners.setdefault(owner, {})

    def add(self, fact: DependencyFact) -> None:
        groups = self._owners.setdefault(fact.owner, {})
        members = groups.setdefault(fact.target, {})
        if fact.member is not None:
            members.setdefault(fact.member, None)

    def add_all(self, facts: Iterable[DependencyFact]) -> None:
        for fact in facts:
            self.add(fact)

    def finalize(self) -> DependencyMap:
        return {
            owner: [{target: list(members)} for target, members in groups.items()]
            for owner, groups in self._owners.items()
        }


def merge_dependency_maps(maps: Iterable[DependencyMap]) -> DependencyMap:
    """Merge per-unit maps by concatenating each owner's groups in input order."""
    merged: DependencyMap = {}
    for dependency_map in maps:
        for owner, groups in dependency_map.items():
            merged.setdefault(owner, []).extend(
                {target: list(members) for target, members in group.items()}
                for group in groups
            )
    return merged


__all__ = [
    "DependencyAccumulator",
    "DependencyFact",
    "DependencyGroup",
    "DependencyMap",
    "Reference",
    "merge_dependency_maps",
]
