"""
services/container.py
──────────────────────────────────────────────────────────────────────────────
Dependency Injection container.

THIS IS THE ONLY FILE THAT NAMES CONCRETE ADAPTER CLASSES.

Replace the data source:
  - from nace_mcp.adapters.json_source import JsonFileSource
  + from nace_mcp.adapters.http_source import HttpSource

Thread safety:
  @lru_cache(maxsize=1) makes get_engine() return the same instance across
  calls.  The index is immutable once built, so the engine can be shared by
  every concurrent MCP request without locking.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from nace_mcp.adapters.json_source import JsonFileSource
from nace_mcp.config.settings import Settings, get_settings
from nace_mcp.ports.source_port import ClassificationSourcePort
from nace_mcp.services.index import build_index
from nace_mcp.services.query_engine import QueryEngine

logger = logging.getLogger(__name__)


def build_engine(source: ClassificationSourcePort, settings: Settings) -> QueryEngine:
    """Load rows from *source*, build the index and wrap it in a QueryEngine."""
    rows = source.load_rows()
    index = build_index(rows)
    return QueryEngine(index=index, settings=settings)


@lru_cache(maxsize=1)
def get_engine() -> QueryEngine:
    """Build and return the fully wired QueryEngine singleton.

    The ``@lru_cache`` ensures the index is built only once per process
    lifetime.

    Raises:
        DataSourceError: If the classification file is missing or malformed.
        ConfigurationError: If an environment override is invalid.
    """
    settings = get_settings()
    source = JsonFileSource(settings)
    logger.info("Building QueryEngine | source=%s", source.name)

    engine = build_engine(source, settings)

    logger.info("QueryEngine ready | entries=%d", len(engine.index))
    return engine
