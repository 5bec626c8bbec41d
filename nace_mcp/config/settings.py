"""
config/settings.py
──────────────────────────────────────────────────────────────────────────────
Single source of truth for all tuneable parameters.

All values can be overridden via environment variables or a .env file placed
at the project root.  The frozen dataclass ensures settings are never mutated
at runtime.

  NACE_DATA_PATH   → point at a full NACE export instead of the bundled table
  MCP_TRANSPORT    → stdio (default) | sse | streamable-http
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from nace_mcp.domain.exceptions import ConfigurationError

# Load .env from project root (two levels up from this file)
load_dotenv(Path(__file__).parent.parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).parent.parent / "data" / "codes-2.1.json"


def _env(key: str, default: str) -> str:
    return os.getenv(key, default)


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {key} must be an integer, got {raw!r}"
        ) from None


def _env_path(key: str, default: Path) -> Path:
    return Path(os.getenv(key, str(default)))


@dataclass(frozen=True)
class Settings:
    """Immutable application settings loaded from environment variables."""

    # ── Data source ────────────────────────────────────────────────────────
    data_path: Path = field(
        default_factory=lambda: _env_path("NACE_DATA_PATH", _DEFAULT_DATA_PATH)
    )

    # ── Result truncation ──────────────────────────────────────────────────
    # Defaults are the published tool contract; lowering them is safe,
    # raising them changes what MCP clients can expect.
    browse_limit: int = field(
        default_factory=lambda: _env_int("NACE_BROWSE_LIMIT", 50)
    )
    search_limit: int = field(
        default_factory=lambda: _env_int("NACE_SEARCH_LIMIT", 10)
    )
    suggest_limit: int = field(
        default_factory=lambda: _env_int("NACE_SUGGEST_LIMIT", 5)
    )
    min_token_length: int = field(
        default_factory=lambda: _env_int("NACE_MIN_TOKEN_LENGTH", 3)
    )

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = field(
        default_factory=lambda: _env("NACE_LOG_LEVEL", "WARNING")
    )

    # ── MCP transport ──────────────────────────────────────────────────────
    mcp_transport: str = field(
        default_factory=lambda: _env("MCP_TRANSPORT", "stdio")
    )
    mcp_host: str = field(default_factory=lambda: _env("MCP_HOST", "127.0.0.1"))
    mcp_port: int = field(default_factory=lambda: _env_int("MCP_PORT", 8000))

    def __post_init__(self) -> None:
        for name in ("browse_limit", "search_limit", "suggest_limit", "min_token_length"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(f"{name} must be at least 1, got {value}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns a cached singleton Settings instance.

    Use this everywhere instead of instantiating Settings() directly —
    it guarantees a single object is shared across the entire process.
    """
    return Settings()
