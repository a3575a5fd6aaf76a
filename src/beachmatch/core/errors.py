"""
Error taxonomy for the recommendation core.

None of these errors is recovered inside the core. The API layer turns them into
HTTP responses via `status_code` / `to_dict()`; the CLI prints the message.
"""

from __future__ import annotations

from typing import Any


class RecommendationError(Exception):
    """Base class for errors surfaced by `recommend_beaches`."""

    error_code = "RECOMMENDATION_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(RecommendationError):
    """The caller sent no selected options, malformed IDs or a bad limit."""

    error_code = "INVALID_INPUT"
    status_code = 400


class ConfigurationError(RecommendationError):
    """The user has no resolvable preference weights."""

    error_code = "PREFERENCES_NOT_FOUND"
    status_code = 400


class DataUnavailableError(RecommendationError):
    """A required input snapshot could not be read from the data-access layer."""

    error_code = "DATA_UNAVAILABLE"
    status_code = 503

    def __init__(self, dataset: str, reason: str | None = None):
        self.dataset = dataset
        message = f"Data source '{dataset}' is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"dataset": dataset})
