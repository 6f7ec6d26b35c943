from pydantic import TypeAdapter

from event_routing_engine.core import AllOf, Always, AnyOf, Equals, Not, NotEquals, OneOf, Predicate, Truthy


def test_equals_is_strict_about_types() -> None:
    assert Equals(field="flag", value=True).evaluate({"flag": True}) is True
    assert Equals(field="flag", value=True).evaluate({"flag": 1}) is False
    assert Equals(field="flag", value=True).evaluate({"flag": "true"}) is False
    assert Equals(field="n", value=1).evaluate({"n": 1.0}) is True
    assert Equals(field="n", value=1).evaluate({"n": "1"}) is False


def test_equals_treats_absent_field_as_no_match() -> None:
    assert Equals(field="status", value="PAID").evaluate({}) is False
    assert Equals(field="status", value=None).evaluate({}) is False
    assert Equals(field="status", value=None).evaluate({"status": None}) is True


def test_not_equals_matches_absent_field() -> None:
    assert NotEquals(field="region", value="EU").evaluate({}) is True
    assert NotEquals(field="region", value="EU").evaluate({"region": "EU"}) is False
    assert NotEquals(field="region", value="EU").evaluate({"region": "US"}) is True


def test_one_of() -> None:
    predicate = OneOf(field="channel", values=("WEB", "API"))
    assert predicate.evaluate({"channel": "API"}) is True
    assert predicate.evaluate({"channel": "POS"}) is False
    assert predicate.evaluate({}) is False


def test_truthy_follows_scalar_truthiness() -> None:
    predicate = Truthy(field="region")
    assert predicate.evaluate({"region": "US"}) is True
    assert predicate.evaluate({"region": ""}) is False
    assert predicate.evaluate({"region": 0}) is False
    assert predicate.evaluate({"region": float("nan")}) is False
    assert predicate.evaluate({"region": None}) is False
    assert predicate.evaluate({}) is False


def test_combinators() -> None:
    is_order = Equals(field="type", value="OrderPlaced")
    is_paid = Equals(field="status", value="PAID")
    fields = {"type": "OrderPlaced", "status": "PENDING"}

    assert AllOf(predicates=(is_order, is_paid)).evaluate(fields) is False
    assert AnyOf(predicates=(is_order, is_paid)).evaluate(fields) is True
    assert Not(predicate=is_paid).evaluate(fields) is True
    assert AllOf(predicates=()).evaluate(fields) is True
    assert AnyOf(predicates=()).evaluate(fields) is False
    assert Always().evaluate({}) is True


def test_predicates_load_from_plain_data() -> None:
    predicate = TypeAdapter(Predicate).validate_python(
        {
            "op": "all_of",
            "predicates": [
                {"op": "equals", "field": "type", "value": "UserPageView"},
                {"op": "not", "predicate": {"op": "equals", "field": "region", "value": "EU"}},
            ],
        }
    )

    assert isinstance(predicate, AllOf)
    assert predicate.evaluate({"type": "UserPageView", "region": "US"}) is True
    assert predicate.evaluate({"type": "UserPageView", "region": "EU"}) is False


def test_describe_renders_readable_expression() -> None:
    predicate = AllOf(
        predicates=(
            Equals(field="type", value="UserPageView"),
            AnyOf(predicates=(Equals(field="region", value="EU"), Truthy(field="gdpr"))),
            Not(predicate=Equals(field="marketing_consent", value=True)),
        )
    )

    assert predicate.describe() == (
        'type === "UserPageView" && (region === "EU" || gdpr) && !(marketing_consent === true)'
    )
