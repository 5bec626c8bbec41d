"""
ports/source_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for the classification table source.

The core only needs an ordered list of RawRow objects.  Row order matters:
it becomes the traversal order of browse and the scan order of search and
suggest.

Current implementation: JsonFileSource (bundled or NACE_DATA_PATH file)
To swap (e.g. fetch from an HTTP endpoint): write a new adapter implementing
this Protocol and change ONE line in services/container.py.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from nace_mcp.domain.models import RawRow


@runtime_checkable
class ClassificationSourcePort(Protocol):
    """Contract for a provider of raw classification rows."""

    @property
    def name(self) -> str:
        """Human-readable identifier of the source (file path, URL…)."""
        ...

    def load_rows(self) -> list[RawRow]:
        """Load every row of the classification table, in source order.

        Returns:
            List of validated RawRow objects.

        Raises:
            DataSourceError: If the source is missing or malformed.
        """
        ...
