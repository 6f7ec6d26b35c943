from __future__ import annotations

import json
import logging
import threading
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

from event_routing_engine.core.exceptions import RuleSetError, RuleSetNotFound
from event_routing_engine.core.models import RuleSet

logger = logging.getLogger(__name__)

BUILTIN_SCENARIOS = "scenarios.json"


def parse_rule_sets(document: Mapping[str, Any]) -> list[RuleSet]:
    """Build rule sets from a `{"rule_sets": [...]}` document."""
    raw = document.get("rule_sets") if isinstance(document, Mapping) else None
    if not isinstance(raw, list):
        raise RuleSetError("Catalog document must contain a 'rule_sets' list.")
    return [RuleSet.load(item) for item in raw]


def load_rule_sets(path: Union[str, Path]) -> list[RuleSet]:
    """Read and validate rule sets from a JSON file."""
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RuleSetError(f"Cannot read rule sets from '{path}': {exc}") from exc
    return parse_rule_sets(document)


def load_builtin_rule_sets() -> list[RuleSet]:
    """The sample order and user-event scenarios shipped with the package."""
    text = (
        resources.files("event_routing_engine.data")
        .joinpath(BUILTIN_SCENARIOS)
        .read_text(encoding="utf-8")
    )
    return parse_rule_sets(json.loads(text))


class RuleSetCatalog:
    """Read-mostly catalog of rule sets.

    Readers get an immutable snapshot; `publish` swaps in a whole new snapshot
    so evaluations already in flight keep a consistent view.
    """

    def __init__(
        self,
        rule_sets: Iterable[RuleSet] = (),
        *,
        source: Optional[Path] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._source = source
        self._snapshot: Mapping[str, RuleSet] = MappingProxyType({})
        self.publish(rule_sets)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> RuleSetCatalog:
        path = Path(path)
        return cls(load_rule_sets(path), source=path)

    @classmethod
    def builtin(cls) -> RuleSetCatalog:
        return cls(load_builtin_rule_sets())

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def publish(self, rule_sets: Iterable[RuleSet]) -> None:
        """Replace the catalog contents with a new, validated snapshot."""
        staged: dict[str, RuleSet] = {}
        for rule_set in rule_sets:
            if rule_set.id in staged:
                raise RuleSetError(f"Duplicate rule set id '{rule_set.id}'.")
            staged[rule_set.id] = rule_set

        with self._lock:
            self._snapshot = MappingProxyType(staged)
        logger.debug("catalog.publish rule_sets=%s", list(staged))

    def reload(self) -> None:
        """Re-read the source file and publish it; bundled data when there is no file."""
        rule_sets = load_rule_sets(self._source) if self._source else load_builtin_rule_sets()
        self.publish(rule_sets)

    def snapshot(self) -> Mapping[str, RuleSet]:
        return self._snapshot

    def ids(self) -> list[str]:
        return list(self._snapshot)

    def get(self, rule_set_id: str) -> RuleSet:
        rule_set = self._snapshot.get(rule_set_id)
        if rule_set is None:
            raise RuleSetNotFound(f"Rule set '{rule_set_id}' not found.")
        return rule_set

    def __contains__(self, rule_set_id: object) -> bool:
        return rule_set_id in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)
