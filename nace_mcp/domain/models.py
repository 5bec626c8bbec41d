"""
domain/models.py
──────────────────────────────────────────────────────────────────────────────
Pure domain objects — Pydantic models with no imports from adapters or ports.

These models are the lingua franca of the entire system:
  • adapters produce RawRow objects from whatever the source format is
  • services normalise them into ClassificationEntry and answer queries
  • interfaces (MCP server, CLI) serialise the result shapes

The result shapes (BrowseItem, SearchHit, Suggestion) carry exactly the
fields MCP clients rely on; do not add fields to them casually.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ── Enums ──────────────────────────────────────────────────────────────────────

class ClassificationLevel(str, Enum):
    """The four tiers of the NACE hierarchy, broadest first."""
    SECTION  = "section"   # single letter, e.g. "A"
    DIVISION = "division"  # two digits, e.g. "01"
    GROUP    = "group"     # e.g. "01.1"
    CLASS    = "class"     # e.g. "01.11"


# ── Input ──────────────────────────────────────────────────────────────────────

class RawRow(BaseModel):
    """One row of the source table.

    The level is implicit: the deepest populated code field wins.  Rows
    cascade, so a class row also carries its group, division and section.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    section:  Optional[str] = Field(None, alias="Section")
    division: Optional[str] = Field(None, alias="Division")
    group:    Optional[str] = Field(None, alias="Group")
    class_:   Optional[str] = Field(None, alias="Class")
    activity: str           = Field(..., alias="Activity")


# ── Index entry ────────────────────────────────────────────────────────────────

class ClassificationEntry(BaseModel):
    """A single node of the classification, with an explicit level tag."""

    model_config = ConfigDict(frozen=True)

    code:   str
    label:  str
    level:  ClassificationLevel
    parent: Optional[str] = None

    @model_validator(mode="after")
    def _parent_matches_level(self) -> "ClassificationEntry":
        if self.level == ClassificationLevel.SECTION and self.parent is not None:
            raise ValueError(f"section {self.code!r} cannot have a parent")
        if self.level != ClassificationLevel.SECTION and self.parent is None:
            raise ValueError(f"{self.level.value} {self.code!r} requires a parent")
        return self


# ── Query results ──────────────────────────────────────────────────────────────

class BrowseItem(BaseModel):
    """Child enumeration row — the caller already knows the level context."""

    code:  str
    label: str


class SearchHit(BaseModel):
    """Substring search match."""

    code:  str
    label: str
    level: ClassificationLevel


class Suggestion(BaseModel):
    """Fuzzy suggestion candidate; 'reason' lists the matched tokens."""

    code:   str
    label:  str
    level:  ClassificationLevel
    reason: str


class SuggestResponse(BaseModel):
    """Outcome of QueryEngine.suggest().

    When the description contains no meaningful tokens, 'results' is empty
    and 'message' holds an informational notice.  That is not an error.
    """

    query:   str
    tokens:  list[str]
    results: list[Suggestion] = Field(default_factory=list)
    message: Optional[str] = None

    @property
    def has_tokens(self) -> bool:
        return bool(self.tokens)
