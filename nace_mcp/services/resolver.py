"""
services/resolver.py
──────────────────────────────────────────────────────────────────────────────
Maps free-form user input onto a stored code.

Section codes are single letters and accepted in any case ("a" → "A").
Numeric codes ("01", "01.1", "01.11") must match exactly, dots included.
The upper-cased form is tried first since it covers the section case.
"""
from __future__ import annotations

from nace_mcp.services.index import ClassificationIndex


def resolve_code(index: ClassificationIndex, raw: str) -> str | None:
    """Return the canonical stored code for *raw*, or None if absent.

    Examples:
        >>> resolve_code(index, " a ")     # section, any case
        'A'
        >>> resolve_code(index, "01.11")   # numeric, exact
        '01.11'
        >>> resolve_code(index, "1.11") is None
        True
    """
    trimmed = raw.strip()
    upper = trimmed.upper()
    if upper in index:
        return upper
    if trimmed in index:
        return trimmed
    return None
