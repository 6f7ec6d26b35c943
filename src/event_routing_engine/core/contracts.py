from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from event_routing_engine.core.models import Contract, Event
from event_routing_engine.core.values import display_value, strict_equals


class ViolationKind(str, Enum):
    MISSING_FIELD = "missing_field"
    DISALLOWED_VALUE = "disallowed_value"


class ContractViolation(BaseModel):
    """A single data-contract problem found on a matched event."""

    model_config = ConfigDict(frozen=True)

    field: str
    kind: ViolationKind
    message: str = Field(description="Operator-facing description of the violation.")

    def __str__(self) -> str:
        return self.message


def validate_contract(contract: Contract, event: Event) -> list[ContractViolation]:
    """Check an event against a contract, returning violations in declaration order.

    Required fields are reported first (in `required_fields` order), then
    allowed-value mismatches (in `allowed_values` order). A field that is
    absent or null only ever fails the required check; the two checks are
    independent, so a field may appear in both lists.
    """
    violations: list[ContractViolation] = []

    for name in contract.required_fields:
        if not event.is_provided(name):
            violations.append(
                ContractViolation(
                    field=name,
                    kind=ViolationKind.MISSING_FIELD,
                    message=f'Missing required field "{name}".',
                )
            )

    for name, allowed in contract.allowed_values.items():
        if not event.is_provided(name):
            continue
        actual = event.get(name)
        if any(strict_equals(actual, candidate) for candidate in allowed):
            continue
        allowed_text = ", ".join(display_value(v) for v in allowed)
        violations.append(
            ContractViolation(
                field=name,
                kind=ViolationKind.DISALLOWED_VALUE,
                message=(
                    f'Field "{name}" has value "{display_value(actual)}", '
                    f"which is outside the allowed set: {allowed_text}."
                ),
            )
        )

    return violations
