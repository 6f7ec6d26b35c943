"""Scalar field values carried by events and how they compare."""

from __future__ import annotations

import math
from typing import Mapping, Optional, Union

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr

# Tagged scalar: no coercion between booleans, numbers and strings.
FieldValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, None]

Fields = Mapping[str, FieldValue]


def strict_equals(left: FieldValue, right: FieldValue) -> bool:
    """Identity-style equality: `True` never equals `1` and `"1"` never equals `1`."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def is_truthy(value: Optional[FieldValue]) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def display_value(value: FieldValue) -> str:
    """Render a value for violation messages and traces."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
