import pytest
from pydantic import ValidationError

from event_routing_engine.core import (
    Contract,
    Equals,
    Event,
    InvalidEvent,
    RouteRule,
    RuleSet,
    RuleSetError,
    SampleEvent,
    Target,
    TargetKind,
)


def _rule(rule_id: str, *targets: Target) -> RouteRule:
    return RouteRule(id=rule_id, predicate=Equals(field="type", value="X"), targets=targets)


def test_event_distinguishes_absent_from_null() -> None:
    event = Event(payload={"currency": None})

    assert event.has("currency") is True
    assert event.is_provided("currency") is False
    assert event.has("region") is False
    assert event.get("region") is None


def test_event_keeps_value_types() -> None:
    event = Event(payload={"flag": True, "count": 3, "ratio": 0.5, "name": "x"})

    assert event.payload["flag"] is True
    assert type(event.payload["count"]) is int
    assert type(event.payload["ratio"]) is float


def test_event_is_immutable() -> None:
    event = Event(payload={"type": "X"})
    with pytest.raises(ValidationError):
        event.payload = {}  # type: ignore[misc]
    with pytest.raises(TypeError):
        event.payload["type"] = "Changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        del event.payload["type"]  # type: ignore[attr-defined]

    assert event.payload["type"] == "X"


def test_event_copies_input_mapping() -> None:
    source = {"type": "X"}
    event = Event(payload=source)
    source["type"] = "Changed"

    assert event.get("type") == "X"


def test_empty_event_payload_is_read_only() -> None:
    with pytest.raises(TypeError):
        Event().payload["type"] = "X"  # type: ignore[index]


def test_contract_allowed_values_are_read_only() -> None:
    contract = Contract(allowed_values={"region": ("EU",)})
    with pytest.raises(TypeError):
        contract.allowed_values["region"] = ("US",)  # type: ignore[index]
    with pytest.raises(TypeError):
        Contract().allowed_values["region"] = ("US",)  # type: ignore[index]


def test_read_only_mappings_still_serialize() -> None:
    contract = Contract(required_fields=("region",), allowed_values={"region": ("EU", "UK")})
    event = Event(payload={"region": "EU", "consent": False, "count": 2})

    assert event.model_dump() == {"payload": {"region": "EU", "consent": False, "count": 2}}
    assert Event.model_validate_json(event.model_dump_json()) == event
    assert contract.model_dump(mode="json") == {
        "required_fields": ["region"],
        "allowed_values": {"region": ["EU", "UK"]},
    }


def test_event_from_payload_rejects_non_scalars() -> None:
    with pytest.raises(InvalidEvent):
        Event.from_payload({"items": [1, 2, 3]})


def test_rule_set_rejects_duplicate_rule_ids() -> None:
    with pytest.raises(ValidationError, match="Duplicate rule id 'a'"):
        RuleSet(id="rs", rules=(_rule("a"), _rule("a")))


def test_rule_set_rejects_duplicate_sample_event_ids() -> None:
    with pytest.raises(ValidationError, match="Duplicate sample event id"):
        RuleSet(
            id="rs",
            events=(
                SampleEvent(id="e1", payload={"type": "X"}),
                SampleEvent(id="e1", payload={"type": "Y"}),
            ),
        )


def test_rule_set_rejects_conflicting_target_definitions() -> None:
    with pytest.raises(ValidationError, match="conflicting definitions"):
        RuleSet(
            id="rs",
            rules=(
                _rule("a", Target(id="t", label="billing.invoices", kind=TargetKind.TOPIC)),
                _rule("b", Target(id="t", label="billing.other", kind=TargetKind.TOPIC)),
            ),
        )


def test_rule_set_allows_shared_target_declarations() -> None:
    target = Target(id="t", label="audit.events", kind=TargetKind.TOPIC)
    rule_set = RuleSet(id="rs", rules=(_rule("a", target), _rule("b", target)))

    assert [rule.id for rule in rule_set.rules] == ["a", "b"]


def test_rule_set_load_wraps_validation_errors() -> None:
    with pytest.raises(RuleSetError):
        RuleSet.load({"id": "rs", "rules": [{"id": "a", "predicate": {"op": "eval", "code": "1"}}]})


def test_rule_set_load_rejects_unknown_keys() -> None:
    with pytest.raises(RuleSetError):
        RuleSet.load({"id": "rs", "priority": 1})


def test_display_expression_falls_back_to_predicate() -> None:
    rule = RouteRule(id="a", predicate=Equals(field="status", value="PAID"))

    assert rule.display_expression == 'status === "PAID"'
    assert rule.model_copy(update={"expression": "custom"}).display_expression == "custom"
