from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationError,
    model_validator,
)

from event_routing_engine.core.exceptions import InvalidEvent, RuleSetError
from event_routing_engine.core.predicates import Predicate
from event_routing_engine.core.values import FieldValue

_FROZEN = ConfigDict(frozen=True, extra="forbid")


def _freeze(value: dict) -> Mapping:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping) -> dict:
    return dict(value)


# `frozen=True` only blocks reassignment; mapping fields are stored read-only too.
Payload = Annotated[dict[str, FieldValue], AfterValidator(_freeze), PlainSerializer(_thaw)]
AllowedValues = Annotated[
    dict[str, tuple[FieldValue, ...]], AfterValidator(_freeze), PlainSerializer(_thaw)
]


class Event(BaseModel):
    """One occurrence to be routed: a sparse mapping of field name to scalar value.

    A missing key and a key holding ``None`` are different things; contract
    checks treat both as "not provided" but predicates can tell them apart.
    """

    model_config = _FROZEN

    payload: Payload = Field(default_factory=dict, validate_default=True)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Event:
        try:
            return cls(payload=dict(payload))
        except ValidationError as exc:
            raise InvalidEvent(str(exc)) from exc

    def has(self, name: str) -> bool:
        return name in self.payload

    def get(self, name: str) -> Optional[FieldValue]:
        return self.payload.get(name)

    def is_provided(self, name: str) -> bool:
        """True when the field is present and not null."""
        return self.payload.get(name) is not None


class SampleEvent(Event):
    """Named example event bundled with a rule set for previews and tests."""

    id: str = Field(min_length=1)
    label: str = ""


class TargetKind(str, Enum):
    TOPIC = "topic"
    QUEUE = "queue"
    OTHER = "other"


class Target(BaseModel):
    """Destination a matched rule forwards to."""

    model_config = _FROZEN

    id: str = Field(min_length=1)
    label: str = Field(min_length=1, description="Destination name, e.g. a topic or queue name.")
    kind: TargetKind = TargetKind.OTHER


class Contract(BaseModel):
    """Data constraints checked only when the owning rule matches."""

    model_config = _FROZEN

    required_fields: tuple[str, ...] = Field(
        default=(),
        description="Fields that must be present and non-null, checked in order.",
    )
    allowed_values: AllowedValues = Field(
        default_factory=dict,
        validate_default=True,
        description="Acceptable values per field, checked only when the field is provided.",
    )


class RouteRule(BaseModel):
    """Predicate plus the targets (and optional contract) it routes to."""

    model_config = _FROZEN

    id: str = Field(min_length=1)
    label: str = ""
    expression: Optional[str] = Field(
        default=None,
        description="Human-readable predicate for traces; derived from the predicate when omitted.",
    )
    predicate: Predicate
    targets: tuple[Target, ...] = ()
    contract: Optional[Contract] = None

    @property
    def display_expression(self) -> str:
        return self.expression if self.expression is not None else self.predicate.describe()

    def matches(self, event: Event) -> bool:
        return self.predicate.evaluate(event.payload)


class RuleSet(BaseModel):
    """Named, ordered collection of route rules evaluated against one event.

    Rule order only affects trace ordering; every rule is evaluated on its own.
    """

    model_config = _FROZEN

    id: str = Field(min_length=1)
    label: str = ""
    description: str = ""
    events: tuple[SampleEvent, ...] = ()
    rules: tuple[RouteRule, ...] = ()

    @model_validator(mode="after")
    def _check_identifiers(self) -> RuleSet:
        _reject_duplicates("rule", [rule.id for rule in self.rules])
        _reject_duplicates("sample event", [event.id for event in self.events])

        declared: dict[str, Target] = {}
        for rule in self.rules:
            for target in rule.targets:
                seen = declared.setdefault(target.id, target)
                if seen != target:
                    raise ValueError(
                        f"Target '{target.id}' is declared with conflicting definitions "
                        f"({seen.label}/{seen.kind.value} vs {target.label}/{target.kind.value})."
                    )
        return self

    @classmethod
    def load(cls, data: Mapping[str, Any]) -> RuleSet:
        """Build a rule set from configuration data, raising `RuleSetError` if invalid."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise RuleSetError(str(exc)) from exc

    def get_event(self, event_id: str) -> Optional[SampleEvent]:
        return next((event for event in self.events if event.id == event_id), None)


def _reject_duplicates(what: str, ids: list[str]) -> None:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            raise ValueError(f"Duplicate {what} id '{item}'.")
        seen.add(item)
