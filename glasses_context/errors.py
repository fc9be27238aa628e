"""Error taxonomy for ingestion and context queries."""

from __future__ import annotations


class ContextQueryError(Exception):
    """Base class for all glasses-context errors."""

    pass


class InvalidInputError(ContextQueryError):
    """A question or payload field was missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PersistenceError(ContextQueryError):
    """Reading or writing an artifact on disk failed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ReasoningError(ContextQueryError):
    """The reasoning API returned a non-success status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MissingConfigurationError(ContextQueryError):
    """A required setting (e.g. the API key) is not configured."""

    pass


__all__ = [
    "ContextQueryError",
    "InvalidInputError",
    "MissingConfigurationError",
    "PersistenceError",
    "ReasoningError",
]
