from __future__ import annotations

from enum import Enum

from event_routing_engine.core.engine import RoutingVerdict


class ImpactLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


IMPACT_LABELS: dict[ImpactLevel, str] = {
    ImpactLevel.LOW: "Low impact",
    ImpactLevel.MEDIUM: "Medium impact",
    ImpactLevel.HIGH: "High impact",
}


def classify(verdict: RoutingVerdict) -> ImpactLevel:
    """Summarize a verdict as an impact level: silent drop dominates contract issues."""
    if verdict.silent_drop:
        return ImpactLevel.HIGH
    if verdict.has_violations:
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW


def impact_label(verdict: RoutingVerdict) -> str:
    return IMPACT_LABELS[classify(verdict)]
