from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from event_routing_engine.config import CatalogSettings
from event_routing_engine.core import (
    InvalidEvent,
    RouteLane,
    RoutingEngine,
    RoutingVerdict,
    RuleSetError,
    RuleSetNotFound,
    classify,
    impact_label,
    routing_map,
    summary_text,
    trace_lines,
    violation_lines,
)


class EvaluateRequest(BaseModel):
    fields: dict[str, Any] = Field(default_factory=dict, description="Event field mapping.")


class RuleSetSummary(BaseModel):
    id: str
    label: str
    description: str
    rule_count: int
    sample_event_ids: list[str]


class EvaluateResponse(BaseModel):
    rule_set_id: str
    impact: str
    impact_label: str
    summary: str
    destinations: list[str]
    silent_drop: bool
    has_violations: bool
    trace: list[str]
    violations: list[str]
    routing_map: list[RouteLane]
    verdict: dict


settings = CatalogSettings()
settings.configure_logging()

app = FastAPI(title="event-routing-engine: routing preview example")

# Rule-set catalog (hot-reloadable) and a shared, stateless engine
catalog = settings.build_catalog()
engine = RoutingEngine()


@app.get("/rule-sets", response_model=list[RuleSetSummary])
def list_rule_sets() -> list[RuleSetSummary]:
    return [
        RuleSetSummary(
            id=rule_set.id,
            label=rule_set.label,
            description=rule_set.description,
            rule_count=len(rule_set.rules),
            sample_event_ids=[event.id for event in rule_set.events],
        )
        for rule_set in catalog.snapshot().values()
    ]


@app.get("/rule-sets/{rule_set_id}")
def get_rule_set(rule_set_id: str) -> dict:
    try:
        return catalog.get(rule_set_id).model_dump(mode="json")
    except RuleSetNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/rule-sets/{rule_set_id}/evaluate", response_model=EvaluateResponse)
def evaluate_event(rule_set_id: str, req: EvaluateRequest) -> EvaluateResponse:
    try:
        rule_set = catalog.get(rule_set_id)
    except RuleSetNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    try:
        verdict = engine.evaluate(req.fields, rule_set)
    except InvalidEvent as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return _respond(verdict)


@app.post(
    "/rule-sets/{rule_set_id}/samples/{event_id}/evaluate", response_model=EvaluateResponse
)
def evaluate_sample(rule_set_id: str, event_id: str) -> EvaluateResponse:
    try:
        rule_set = catalog.get(rule_set_id)
    except RuleSetNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    sample = rule_set.get_event(event_id)
    if sample is None:
        raise HTTPException(status_code=404, detail=f"Sample event '{event_id}' not found")
    return _respond(engine.evaluate(sample, rule_set))


def _respond(verdict: RoutingVerdict) -> EvaluateResponse:
    return EvaluateResponse(
        rule_set_id=verdict.rule_set_id,
        impact=classify(verdict).value,
        impact_label=impact_label(verdict),
        summary=summary_text(verdict),
        destinations=list(verdict.destinations),
        silent_drop=verdict.silent_drop,
        has_violations=verdict.has_violations,
        trace=trace_lines(verdict),
        violations=violation_lines(verdict),
        routing_map=routing_map(verdict),
        verdict=verdict.model_dump(mode="json"),
    )


@app.post("/rule-sets/reload", response_model=list[str])
def reload_rule_sets() -> list[str]:
    try:
        catalog.reload()
    except RuleSetError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return catalog.ids()
