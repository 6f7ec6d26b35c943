"""Ready-made routing predicates.

A predicate is a pure, total function over an event's field mapping. Absent
fields never raise; they simply make comparisons fail (or, for
``not_equals``, succeed). Predicates are plain data so rule sets can be
loaded from configuration without evaluating any code.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from event_routing_engine.core.values import FieldValue, Fields, is_truthy, strict_equals


class _PredicateBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def evaluate(self, fields: Fields) -> bool:  # pragma: no cover
        raise NotImplementedError

    def describe(self) -> str:  # pragma: no cover
        raise NotImplementedError


class Always(_PredicateBase):
    """Matches every event."""

    op: Literal["always"] = "always"

    def evaluate(self, fields: Fields) -> bool:
        return True

    def describe(self) -> str:
        return "true"


class Equals(_PredicateBase):
    """Field is present and strictly equal to `value`."""

    op: Literal["equals"] = "equals"
    field: str
    value: FieldValue

    def evaluate(self, fields: Fields) -> bool:
        return self.field in fields and strict_equals(fields[self.field], self.value)

    def describe(self) -> str:
        return f"{self.field} === {_quote(self.value)}"


class NotEquals(_PredicateBase):
    """Field is absent or not strictly equal to `value`."""

    op: Literal["not_equals"] = "not_equals"
    field: str
    value: FieldValue

    def evaluate(self, fields: Fields) -> bool:
        return self.field not in fields or not strict_equals(fields[self.field], self.value)

    def describe(self) -> str:
        return f"{self.field} !== {_quote(self.value)}"


class OneOf(_PredicateBase):
    """Field is present and strictly equal to one of `values`."""

    op: Literal["one_of"] = "one_of"
    field: str
    values: tuple[FieldValue, ...]

    def evaluate(self, fields: Fields) -> bool:
        if self.field not in fields:
            return False
        actual = fields[self.field]
        return any(strict_equals(actual, candidate) for candidate in self.values)

    def describe(self) -> str:
        return f"{self.field} in [{', '.join(_quote(v) for v in self.values)}]"


class Truthy(_PredicateBase):
    """Field is present and truthy (non-empty string, non-zero number, true)."""

    op: Literal["truthy"] = "truthy"
    field: str

    def evaluate(self, fields: Fields) -> bool:
        return is_truthy(fields.get(self.field))

    def describe(self) -> str:
        return self.field


class AllOf(_PredicateBase):
    op: Literal["all_of"] = "all_of"
    predicates: tuple[Predicate, ...]

    def evaluate(self, fields: Fields) -> bool:
        return all(p.evaluate(fields) for p in self.predicates)

    def describe(self) -> str:
        return " && ".join(_group(p) for p in self.predicates) or "true"


class AnyOf(_PredicateBase):
    op: Literal["any_of"] = "any_of"
    predicates: tuple[Predicate, ...]

    def evaluate(self, fields: Fields) -> bool:
        return any(p.evaluate(fields) for p in self.predicates)

    def describe(self) -> str:
        return " || ".join(_group(p) for p in self.predicates) or "false"


class Not(_PredicateBase):
    op: Literal["not"] = "not"
    predicate: Predicate

    def evaluate(self, fields: Fields) -> bool:
        return not self.predicate.evaluate(fields)

    def describe(self) -> str:
        if isinstance(self.predicate, Truthy):
            return f"!{self.predicate.describe()}"
        return f"!({self.predicate.describe()})"


Predicate = Annotated[
    Union[Always, Equals, NotEquals, OneOf, Truthy, AllOf, AnyOf, Not],
    Field(discriminator="op"),
]

AllOf.model_rebuild()
AnyOf.model_rebuild()
Not.model_rebuild()


def _quote(value: FieldValue) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _group(predicate: _PredicateBase) -> str:
    text = predicate.describe()
    if isinstance(predicate, (AllOf, AnyOf)) and len(predicate.predicates) > 1:
        return f"({text})"
    return text
