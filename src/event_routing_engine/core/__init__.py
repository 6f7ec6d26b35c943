"""Core (framework-agnostic) primitives for event-routing-engine."""

from event_routing_engine.core.catalog import (
    RuleSetCatalog,
    load_builtin_rule_sets,
    load_rule_sets,
    parse_rule_sets,
)
from event_routing_engine.core.classification import IMPACT_LABELS, ImpactLevel, classify, impact_label
from event_routing_engine.core.contracts import ContractViolation, ViolationKind, validate_contract
from event_routing_engine.core.engine import RoutingEngine, RoutingVerdict, RuleResult, evaluate
from event_routing_engine.core.events import EvaluationEvent
from event_routing_engine.core.exceptions import (
    EventRoutingError,
    InvalidEvent,
    RuleSetError,
    RuleSetNotFound,
)
from event_routing_engine.core.models import (
    Contract,
    Event,
    RouteRule,
    RuleSet,
    SampleEvent,
    Target,
    TargetKind,
)
from event_routing_engine.core.predicates import (
    AllOf,
    Always,
    AnyOf,
    Equals,
    Not,
    NotEquals,
    OneOf,
    Predicate,
    Truthy,
)
from event_routing_engine.core.reporting import (
    RouteLane,
    routing_map,
    summary_text,
    trace_lines,
    violation_lines,
)

__all__ = [
    "EventRoutingError",
    "RuleSetError",
    "RuleSetNotFound",
    "InvalidEvent",
    "EvaluationEvent",
    "Event",
    "SampleEvent",
    "Target",
    "TargetKind",
    "Contract",
    "RouteRule",
    "RuleSet",
    "Predicate",
    "Always",
    "Equals",
    "NotEquals",
    "OneOf",
    "Truthy",
    "AllOf",
    "AnyOf",
    "Not",
    "ContractViolation",
    "ViolationKind",
    "validate_contract",
    "RuleResult",
    "RoutingVerdict",
    "RoutingEngine",
    "evaluate",
    "ImpactLevel",
    "IMPACT_LABELS",
    "classify",
    "impact_label",
    "summary_text",
    "RouteLane",
    "routing_map",
    "trace_lines",
    "violation_lines",
    "RuleSetCatalog",
    "load_rule_sets",
    "load_builtin_rule_sets",
    "parse_rule_sets",
]
