"""
tests/conftest.py
──────────────────────────────────────────────────────────────────────────────
Shared pytest fixtures and an in-memory source implementation.

InMemorySource implements ClassificationSourcePort via structural subtyping —
it does NOT inherit from any base class.  Tests use it to exercise the index
and query engine without touching the filesystem.

Fixture hierarchy:
  settings       → Settings with the default result limits
  rows           → small two-section table (A/01/01.1… and C/10/10.1…)
  memory_source  → InMemorySource over rows
  index          → ClassificationIndex built from rows
  engine         → QueryEngine over index
  chain_index    → the minimal four-row chain A → 01 → 01.1 → 01.11
"""
from __future__ import annotations

from pathlib import Path

import pytest

from nace_mcp.config.settings import Settings
from nace_mcp.domain.models import RawRow
from nace_mcp.services.index import build_index
from nace_mcp.services.query_engine import QueryEngine


# ── Fixture data ───────────────────────────────────────────────────────────

def _row(section, division=None, group=None, class_=None, activity=""):
    return {
        "Section": section,
        "Division": division,
        "Group": group,
        "Class": class_,
        "Activity": activity,
    }


_ROWS: list[dict] = [
    _row("A", activity="Agriculture, forestry and fishing"),
    _row("A", "01", activity="Crop and animal production, hunting and related service activities"),
    _row("A", "01", "01.1", activity="Growing of non-perennial crops"),
    _row("A", "01", "01.1", "01.11",
         activity="Growing of cereals, other than rice, leguminous crops and oil seeds"),
    _row("A", "01", "01.1", "01.12", activity="Growing of rice"),
    _row("A", "01", "01.2", activity="Growing of perennial crops"),
    _row("A", "01", "01.2", "01.21", activity="Growing of grapes"),
    _row("C", activity="Manufacturing"),
    _row("C", "10", activity="Manufacture of food products"),
    _row("C", "10", "10.1",
         activity="Processing and preserving of meat and production of meat products"),
    _row("C", "10", "10.1", "10.11", activity="Processing and preserving of meat"),
    _row("C", "10", "10.6",
         activity="Manufacture of grain mill products, starches and starch products"),
    _row("C", "10", "10.6", "10.61", activity="Manufacture of grain mill products"),
]

_CHAIN_ROWS: list[dict] = [
    _row("A", activity="Agriculture, forestry and fishing"),
    _row("A", "01", activity="Crop and animal production, hunting and related service activities"),
    _row("A", "01", "01.1", activity="Growing of non-perennial crops"),
    _row("A", "01", "01.1", "01.11",
         activity="Growing of cereals, other than rice, leguminous crops and oil seeds"),
]


class InMemorySource:
    """Fake ClassificationSourcePort backed by a list of dicts."""

    name = "memory"

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def load_rows(self) -> list[RawRow]:
        return [RawRow.model_validate(r) for r in self._rows]


# ── pytest fixtures ────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Return a Settings instance with the published result limits."""
    return Settings(
        data_path=Path("unused.json"),
        browse_limit=50,
        search_limit=10,
        suggest_limit=5,
        min_token_length=3,
    )


@pytest.fixture
def rows() -> list[dict]:
    return [dict(r) for r in _ROWS]


@pytest.fixture
def memory_source(rows):
    return InMemorySource(rows)


@pytest.fixture
def index(rows):
    return build_index(rows)


@pytest.fixture
def engine(index, settings):
    return QueryEngine(index=index, settings=settings)


@pytest.fixture
def chain_index():
    return build_index(_CHAIN_ROWS)
