"""
adapters/json_source.py
──────────────────────────────────────────────────────────────────────────────
Implements ClassificationSourcePort by reading a JSON array from disk.

Expected document layout (NACE Rev. 2.1 export):
  [
    {"Section": "A", "Division": null, "Group": null, "Class": null,
     "Activity": "Agriculture, forestry and fishing"},
    {"Section": "A", "Division": "01", "Group": null, "Class": null,
     "Activity": "Crop and animal production, hunting and related ..."},
    ...
  ]

The file is read once at startup; nothing here is on the query path.
"""
from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from nace_mcp.config.settings import Settings
from nace_mcp.domain.exceptions import DataSourceError
from nace_mcp.domain.models import RawRow

logger = logging.getLogger(__name__)


class JsonFileSource:
    """JSON file implementation of ClassificationSourcePort.

    Injected into the index build via services/container.py.
    """

    def __init__(self, settings: Settings) -> None:
        self._path = settings.data_path
        logger.debug("JsonFileSource ready | path=%s", self._path)

    @property
    def name(self) -> str:
        return str(self._path)

    def load_rows(self) -> list[RawRow]:
        """Read and validate every row of the JSON table."""
        if not self._path.exists():
            raise DataSourceError(f"Classification file not found: {self._path}")

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise DataSourceError(
                f"Invalid JSON in {self._path}: {exc}"
            ) from exc

        if not isinstance(data, list):
            raise DataSourceError(
                f"Expected a JSON array in {self._path}, got {type(data).__name__}"
            )

        rows: list[RawRow] = []
        for i, item in enumerate(data):
            try:
                rows.append(RawRow.model_validate(item))
            except ValidationError as exc:
                raise DataSourceError(
                    f"Invalid row #{i} in {self._path}: {exc}"
                ) from exc

        logger.info("Loaded %d rows from %s", len(rows), self._path)
        return rows
