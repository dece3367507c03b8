"""Custom exception hierarchy for the insight engine."""

from __future__ import annotations

from typing import Any


class InsightEngineError(Exception):
    """Base exception for all insight engine errors."""


# --- Configuration ---
class ConfigError(InsightEngineError):
    """Invalid or missing configuration."""


class UnknownGeneratorError(ConfigError):
    """Requested insight generator is not registered."""


# --- Input ---
class ValidationError(InsightEngineError):
    """Malformed journal entry supplied by the caller.

    Raised at the boundary (``parse_entry`` / ``parse_entries``) so that
    the engine only ever sees well-typed, finite, immutable entries.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.index = index
        self.errors = errors or []
        if index is not None:
            message = f"entry[{index}]: {message}"
        super().__init__(message)
