from __future__ import annotations


class EventRoutingError(Exception):
    """Base error for event-routing-engine."""


class RuleSetError(EventRoutingError):
    """A rule set (or catalog document) is invalid and cannot be loaded."""


class RuleSetNotFound(EventRoutingError):
    """Requested rule set is not present in the catalog."""


class InvalidEvent(EventRoutingError):
    """Event payload does not hold a valid field mapping."""
