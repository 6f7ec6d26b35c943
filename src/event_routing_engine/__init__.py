"""Rule evaluation and contract validation for event routing."""

__version__ = "0.1.0"
