from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from event_routing_engine.core.contracts import ContractViolation, validate_contract
from event_routing_engine.core.events import EvaluationEvent
from event_routing_engine.core.exceptions import InvalidEvent
from event_routing_engine.core.models import Event, RouteRule, RuleSet, SampleEvent, Target


class RuleResult(BaseModel):
    """Outcome of one rule against one event."""

    model_config = ConfigDict(frozen=True)

    rule: RouteRule
    matched: bool
    violations: tuple[ContractViolation, ...] = Field(
        default=(),
        description="Contract violations; always empty when the rule did not match.",
    )
    targets: tuple[Target, ...] = Field(
        default=(),
        description="Targets the event is forwarded to; always empty when the rule did not match.",
    )

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    def messages(self) -> list[str]:
        return [violation.message for violation in self.violations]


class RoutingVerdict(BaseModel):
    """Per-rule trace plus the aggregate routing decision for one event."""

    model_config = ConfigDict(frozen=True)

    rule_set_id: str
    results: tuple[RuleResult, ...]
    destinations: tuple[str, ...] = Field(
        description="Unique target labels across matched rules, in first-seen order."
    )
    silent_drop: bool = Field(description="True when no rule matched the event.")
    has_violations: bool = Field(description="True when a matched rule reported a contract violation.")

    @property
    def matched_rules(self) -> tuple[RuleResult, ...]:
        return tuple(result for result in self.results if result.matched)


EventLike = Union[Event, Mapping[str, Any]]


class RoutingEngine:
    """Evaluates every rule of a rule set against an event (fan-out, no first-match-wins).

    The engine holds no per-evaluation state, so one instance can be shared
    across threads.
    """

    def __init__(
        self,
        *,
        on_event: Callable[[EvaluationEvent], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._on_event = on_event
        self._logger = logger or logging.getLogger(__name__)

    def _emit(
        self, kind: str, payload: dict, error: BaseException | None = None
    ) -> None:
        event = EvaluationEvent(kind=kind, payload=payload, error=error)
        if self._on_event:
            try:
                self._on_event(event)
            except Exception:
                # Observability hooks should not break evaluation.
                self._logger.debug("Evaluation event hook failed", exc_info=True)
        if error:
            self._logger.debug("routing.%s error=%s payload=%s", kind, error, payload)
        else:
            self._logger.debug("routing.%s payload=%s", kind, payload)

    def evaluate(self, event: EventLike, rule_set: RuleSet) -> RoutingVerdict:
        """Route one event through a rule set.

        - Matched rules with a contract are validated; violations are attached but
          never remove the match or its targets.
        - Unmatched rules carry no violations and no targets.
        - `silent_drop` is set when nothing matched, which includes an empty rule set.
        """
        if not isinstance(event, Event):
            try:
                event = Event.from_payload(event)
            except InvalidEvent as error:
                self._emit(
                    "invalid_event",
                    {"rule_set": rule_set.id, "fields": sorted(str(name) for name in event)},
                    error=error,
                )
                raise

        self._emit(
            "evaluation_start",
            {"rule_set": rule_set.id, "rule_count": len(rule_set.rules)},
        )

        results = [self._evaluate_rule(rule, event) for rule in rule_set.rules]

        destinations: list[str] = []
        for result in results:
            for target in result.targets:
                if target.label not in destinations:
                    destinations.append(target.label)

        matched_count = sum(1 for result in results if result.matched)
        verdict = RoutingVerdict(
            rule_set_id=rule_set.id,
            results=tuple(results),
            destinations=tuple(destinations),
            silent_drop=matched_count == 0,
            has_violations=any(result.matched and result.violations for result in results),
        )

        if verdict.silent_drop:
            self._emit("silent_drop", {"rule_set": rule_set.id, "fields": sorted(event.payload)})
        self._emit(
            "evaluation_done",
            {
                "rule_set": rule_set.id,
                "matched": matched_count,
                "destinations": list(verdict.destinations),
                "has_violations": verdict.has_violations,
            },
        )
        return verdict

    def evaluate_samples(self, rule_set: RuleSet) -> list[tuple[SampleEvent, RoutingVerdict]]:
        """Evaluate each sample event bundled with the rule set, in declaration order."""
        return [(sample, self.evaluate(sample, rule_set)) for sample in rule_set.events]

    def _evaluate_rule(self, rule: RouteRule, event: Event) -> RuleResult:
        if not rule.matches(event):
            self._emit("rule_skipped", {"rule": rule.id})
            return RuleResult(rule=rule, matched=False)

        violations = validate_contract(rule.contract, event) if rule.contract else []
        self._emit(
            "rule_matched",
            {"rule": rule.id, "targets": [target.label for target in rule.targets]},
        )
        if violations:
            self._emit(
                "contract_violations",
                {"rule": rule.id, "violations": [v.message for v in violations]},
            )
        return RuleResult(
            rule=rule,
            matched=True,
            violations=tuple(violations),
            targets=rule.targets,
        )


_default_engine = RoutingEngine()


def evaluate(event: EventLike, rule_set: RuleSet) -> RoutingVerdict:
    """Evaluate an event against a rule set with a default, hook-less engine."""
    return _default_engine.evaluate(event, rule_set)
