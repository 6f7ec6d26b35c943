"""Evaluation observability events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EvaluationEvent:
    """Structured event emitted while a rule set is evaluated."""

    kind: str
    payload: Dict[str, Any]
    error: Optional[BaseException] = None
