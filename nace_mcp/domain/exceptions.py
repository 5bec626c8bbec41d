"""
domain/exceptions.py
──────────────────────────────────────────────────────────────────────────────
Custom exception hierarchy.

All exceptions are rooted at NACEError so callers can catch broadly
(except NACEError) or narrowly (except NotFoundError).

Interfaces map these to their own failure channels:
  NotFoundError       → MCP ToolError / CLI exit 1
  InvalidInputError   → MCP ToolError / CLI exit 2
  DataSourceError     → startup failure
  ConfigurationError  → startup failure
"""
from __future__ import annotations


class NACEError(Exception):
    """Base exception for all application errors."""


class ConfigurationError(NACEError):
    """Raised when required configuration is missing or invalid."""


class DataSourceError(NACEError):
    """Raised when the classification rows cannot be loaded or indexed."""


class NotFoundError(NACEError):
    """Raised when a code does not resolve to any entry in the index."""

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or f'Code "{code}" not found.')


class InvalidInputError(NACEError):
    """Raised when a required string argument is empty or whitespace-only."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} must not be empty.")
