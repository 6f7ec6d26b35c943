"""Bundled sample rule sets."""
