"""
services/query_engine.py
──────────────────────────────────────────────────────────────────────────────
The four read-only query operations over a ClassificationIndex.

  get      → full entry for one code                       (Not-Found)
  browse   → direct children as {code, label}, ≤ 50        (Not-Found)
  search   → case-insensitive label substring, ≤ 10        (Invalid-Input)
  suggest  → token-overlap scoring, top 5 with a reason    (Invalid-Input)

search stops at the first N matches in index order; it does not rank.
suggest scores each entry by the flat count of query tokens found as
substrings of its label, then sorts by score descending.  Python's sort is
stable, so equal scores keep index order and results are reproducible.

tokenize() and format_reason() are module-level pure functions so unit
tests can call them without building an index.
"""
from __future__ import annotations

import logging

from nace_mcp.config.settings import Settings
from nace_mcp.domain.exceptions import InvalidInputError, NotFoundError
from nace_mcp.domain.models import (
    BrowseItem,
    ClassificationEntry,
    SearchHit,
    Suggestion,
    SuggestResponse,
)
from nace_mcp.services.index import ClassificationIndex
from nace_mcp.services.resolver import resolve_code

logger = logging.getLogger(__name__)

STOP_WORDS: frozenset[str] = frozenset({
    "and", "the", "for", "with", "are", "its", "this", "that",
    "into", "from", "not", "all", "but", "other", "than",
})

NO_TOKENS_MESSAGE = "No meaningful tokens found. Try a more descriptive phrase."


class QueryEngine:
    """Pure query operations over a frozen ClassificationIndex.

    Inject via services/container.py.  Safe to share between concurrent
    callers: neither the engine nor the index holds mutable state.

    Args:
        index:    The built classification index.
        settings: Shared application settings (result limits).
    """

    def __init__(self, index: ClassificationIndex, settings: Settings) -> None:
        self._index = index
        self._browse_limit = settings.browse_limit
        self._search_limit = settings.search_limit
        self._suggest_limit = settings.suggest_limit
        self._min_token_length = settings.min_token_length

    @property
    def index(self) -> ClassificationIndex:
        return self._index

    # ── Public API ─────────────────────────────────────────────────────────

    def get(self, code: str) -> ClassificationEntry:
        """Return the full entry for *code*.

        Raises:
            NotFoundError: If the code does not resolve.
        """
        resolved = resolve_code(self._index, code)
        if resolved is None:
            logger.info("get | code=%r not found", code)
            raise NotFoundError(
                code,
                f'Code "{code}" not found. Use nace_browse() to explore available codes.',
            )
        return self._index.by_code[resolved]

    def browse(self, parent_code: str | None = None) -> list[BrowseItem]:
        """List direct children of *parent_code*, or the sections if omitted.

        Raises:
            NotFoundError: If a parent code is given and does not resolve.
        """
        if parent_code is None or not parent_code.strip():
            codes = self._index.children_of(None)
        else:
            resolved = resolve_code(self._index, parent_code)
            if resolved is None:
                logger.info("browse | parent=%r not found", parent_code)
                raise NotFoundError(parent_code)
            codes = self._index.children_of(resolved)

        by_code = self._index.by_code
        items = [
            BrowseItem(code=c, label=by_code[c].label)
            for c in codes[: self._browse_limit]
        ]
        logger.debug("browse | parent=%r children=%d", parent_code, len(items))
        return items

    def search(self, query: str) -> list[SearchHit]:
        """Return the first matches whose label contains *query*.

        Matching is case-insensitive and not word-bounded.

        Raises:
            InvalidInputError: If the query is empty after trimming.
        """
        q = query.strip()
        if not q:
            raise InvalidInputError("query", "Query must not be empty.")

        needle = q.lower()
        hits: list[SearchHit] = []
        for entry in self._index.entries():
            if needle in entry.label.lower():
                hits.append(SearchHit(code=entry.code, label=entry.label, level=entry.level))
                if len(hits) >= self._search_limit:
                    break

        logger.info("search | query=%r hits=%d", q[:80], len(hits))
        return hits

    def suggest(self, activity_description: str) -> SuggestResponse:
        """Rank entries by how many description tokens their label contains.

        Returns:
            SuggestResponse with up to suggest_limit results, or an empty
            result list plus an informational message when no meaningful
            tokens remain after filtering.

        Raises:
            InvalidInputError: If the description is empty after trimming.
        """
        desc = activity_description.strip()
        if not desc:
            raise InvalidInputError("activity_description")

        tokens = tokenize(desc, min_length=self._min_token_length)
        if not tokens:
            logger.info("suggest | query=%r no meaningful tokens", desc[:80])
            return SuggestResponse(query=desc, tokens=[], message=NO_TOKENS_MESSAGE)

        scored: list[tuple[int, Suggestion]] = []
        for entry in self._index.entries():
            label_lower = entry.label.lower()
            matched = [t for t in tokens if t in label_lower]
            if not matched:
                continue
            scored.append((
                len(matched),
                Suggestion(
                    code=entry.code,
                    label=entry.label,
                    level=entry.level,
                    reason=format_reason(matched),
                ),
            ))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        results = [s for _, s in scored[: self._suggest_limit]]

        logger.info(
            "suggest | query=%r tokens=%s candidates=%d top=%s",
            desc[:80],
            tokens,
            len(scored),
            results[0].code if results else None,
        )
        return SuggestResponse(query=desc, tokens=tokens, results=results)


# ── Pure helpers ───────────────────────────────────────────────────────────────

def tokenize(text: str, min_length: int = 3) -> list[str]:
    """Lower-case, split on whitespace, drop short tokens and stop words.

    Examples:
        >>> tokenize("Growing of Rice")
        ['growing', 'rice']
        >>> tokenize("and the for")
        []
    """
    return [
        t for t in text.lower().split()
        if len(t) >= min_length and t not in STOP_WORDS
    ]


def format_reason(matched: list[str]) -> str:
    """Render matched tokens as 'Matched: "a", "b"'."""
    return "Matched: " + ", ".join(f'"{t}"' for t in matched)
