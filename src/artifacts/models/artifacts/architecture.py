"""Architectural finding models: cross-namespace cycles and boundary violations."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Severity = Literal["high", "medium"]


class ArchitecturalCycle(BaseModel):
    """A dependency cycle annotated with the namespaces it spans."""

    cycle: list[str]
    namespaces: list[str]
    severity: Severity = "high"


class NamespaceViolation(BaseModel):
    """A dependency edge crossing a namespace boundary."""

    source_class: str
    source_namespace: str
    target_class: str
    target_namespace: str
    severity: Severity
    recommendation: str


__all__ = ["ArchitecturalCycle", "NamespaceViolation", "Severity"]
