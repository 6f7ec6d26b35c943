"""
Environment-driven settings for services built around the routing engine.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from event_routing_engine.core.catalog import RuleSetCatalog


class CatalogSettings:
    """Catalog location and log level, read from the environment."""

    def __init__(self) -> None:
        # Unset means the scenarios bundled with the package.
        path = os.getenv("EVENT_ROUTING_CATALOG_PATH", "").strip()
        self.catalog_path: Optional[Path] = Path(path) if path else None
        self.log_level: str = os.getenv("EVENT_ROUTING_LOG_LEVEL", "INFO").upper()

    def build_catalog(self) -> RuleSetCatalog:
        if self.catalog_path is None:
            return RuleSetCatalog.builtin()
        return RuleSetCatalog.from_path(self.catalog_path)

    def configure_logging(self) -> None:
        logging.basicConfig(level=getattr(logging, self.log_level, logging.INFO))
