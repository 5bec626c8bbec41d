"""
services/index.py
──────────────────────────────────────────────────────────────────────────────
Row normalisation and the in-memory classification index.

normalize_row() turns the implicit level encoding of a source row (which
code fields are populated) into an explicit ClassificationEntry:

  Class set     → level=class,    parent=Group
  Group set     → level=group,    parent=Division
  Division set  → level=division, parent=Section
  otherwise     → level=section,  parent=None

build_index() runs every row through normalize_row() in source order and
freezes the result.  Top-level sections live in their own tuple (roots)
rather than under a sentinel key in the children map, so no real code can
ever collide with it.

Rows whose populated fields contradict the level rules (e.g. a division
with no section) surface as DataSourceError with the row number.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from nace_mcp.domain.exceptions import DataSourceError
from nace_mcp.domain.models import ClassificationEntry, ClassificationLevel, RawRow

logger = logging.getLogger(__name__)


# ── Normaliser ─────────────────────────────────────────────────────────────────

def normalize_row(row: RawRow | Mapping[str, Any]) -> ClassificationEntry:
    """Convert one source row into an entry with explicit level and parent."""
    if not isinstance(row, RawRow):
        row = RawRow.model_validate(row)

    if row.class_ is not None:
        code, level, parent = row.class_, ClassificationLevel.CLASS, row.group
    elif row.group is not None:
        code, level, parent = row.group, ClassificationLevel.GROUP, row.division
    elif row.division is not None:
        code, level, parent = row.division, ClassificationLevel.DIVISION, row.section
    else:
        code, level, parent = row.section, ClassificationLevel.SECTION, None

    return ClassificationEntry(code=code, label=row.activity, level=level, parent=parent)


# ── Index ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ClassificationIndex:
    """Immutable code → entry and parent → children lookup tables.

    Built once by build_index(); all query operations are pure reads.

    Attributes:
        by_code:  Every entry keyed by its code, in source row order.
        roots:    Section codes in source row order.
        children: Child codes per parent code, in source row order.
                  Leaf codes have no key.
    """

    by_code: Mapping[str, ClassificationEntry]
    roots: tuple[str, ...]
    children: Mapping[str, tuple[str, ...]]

    def __len__(self) -> int:
        return len(self.by_code)

    def __contains__(self, code: object) -> bool:
        return code in self.by_code

    def get(self, code: str) -> ClassificationEntry | None:
        return self.by_code.get(code)

    def children_of(self, code: str | None) -> tuple[str, ...]:
        """Child codes of *code*, or the top-level sections when code is None."""
        if code is None:
            return self.roots
        return self.children.get(code, ())

    def entries(self) -> Iterator[ClassificationEntry]:
        """Iterate all entries in source row order."""
        return iter(self.by_code.values())


def build_index(rows: Iterable[RawRow | Mapping[str, Any]]) -> ClassificationIndex:
    """Normalise *rows* and freeze them into a ClassificationIndex.

    Args:
        rows: Source rows in their original order.

    Returns:
        The immutable index.

    Raises:
        DataSourceError: If a row is malformed or two rows produce the
            same code.
    """
    by_code: dict[str, ClassificationEntry] = {}
    roots: list[str] = []
    children: dict[str, list[str]] = {}

    for i, row in enumerate(rows):
        try:
            entry = normalize_row(row)
        except ValidationError as exc:
            raise DataSourceError(f"Invalid row #{i}: {exc}") from exc
        if entry.code in by_code:
            raise DataSourceError(f"Duplicate classification code: {entry.code!r}")
        by_code[entry.code] = entry

        if entry.parent is None:
            roots.append(entry.code)
        else:
            children.setdefault(entry.parent, []).append(entry.code)

    counts = Counter(e.level.value for e in by_code.values())
    logger.info(
        "Index built | entries=%d sections=%d divisions=%d groups=%d classes=%d",
        len(by_code),
        counts["section"],
        counts["division"],
        counts["group"],
        counts["class"],
    )

    return ClassificationIndex(
        by_code=MappingProxyType(by_code),
        roots=tuple(roots),
        children=MappingProxyType({k: tuple(v) for k, v in children.items()}),
    )
