from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from event_routing_engine.core.classification import IMPACT_LABELS, ImpactLevel, classify
from event_routing_engine.core.engine import RoutingVerdict
from event_routing_engine.core.models import Target

NO_VIOLATIONS_LINE = "No contract violations detected for this sample event."


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def summary_text(verdict: RoutingVerdict) -> str:
    """One-line summary: matched-rule count, destination count and impact label."""
    level = classify(verdict)
    label = IMPACT_LABELS[level]
    if level is ImpactLevel.HIGH:
        return f"0 matching routes · {label} · Event will be silently dropped"

    parts = [
        _plural(len(verdict.matched_rules), "matching route"),
        label,
        _plural(len(verdict.destinations), "destination"),
    ]
    if level is ImpactLevel.MEDIUM:
        parts.append("Contract issues detected")
    else:
        parts.append("No critical issues detected")
    return " · ".join(parts)


def trace_lines(verdict: RoutingVerdict) -> list[str]:
    """Per-rule trace in rule-set declaration order."""
    lines: list[str] = []
    for result in verdict.results:
        label = result.rule.label or result.rule.id
        if not result.matched:
            lines.append(f"{label}: NO MATCH")
        elif result.targets:
            lines.append(f"{label}: MATCH → {', '.join(t.label for t in result.targets)}")
        else:
            lines.append(f"{label}: MATCH (no targets configured)")
    return lines


def violation_lines(verdict: RoutingVerdict) -> list[str]:
    lines = [
        f"{result.rule.label or result.rule.id}: {message}"
        for result in verdict.matched_rules
        for message in result.messages()
    ]
    return lines or [NO_VIOLATIONS_LINE]


class RouteLane(BaseModel):
    """One row of the routing map: event, rule, and where the event ends up."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    label: str
    expression: str
    status: str = Field(description="MATCH or NO MATCH.")
    targets: tuple[Target, ...] = ()
    drop_risk: bool = Field(
        default=False,
        description="Set on every lane when no rule matched, so the drop shows on each path.",
    )


def routing_map(verdict: RoutingVerdict) -> list[RouteLane]:
    return [
        RouteLane(
            rule_id=result.rule.id,
            label=result.rule.label or result.rule.id,
            expression=result.rule.display_expression,
            status="MATCH" if result.matched else "NO MATCH",
            targets=result.targets,
            drop_risk=verdict.silent_drop,
        )
        for result in verdict.results
    ]
