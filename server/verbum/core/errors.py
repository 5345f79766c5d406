"""
Exception hierarchy for the scripture grounding core.

Embedding failures, storage failures and empty-corpus preconditions are kept
as distinct types so callers never confuse "the service failed" with
"nothing relevant was found".
"""

from typing import Any, Optional


class VerbumError(Exception):
    """Base exception for all grounding core errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(VerbumError):
    """Raised when required settings are missing."""


class EmbeddingServiceError(VerbumError):
    """Raised when the upstream embedding call fails or returns a bad payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if body:
            details["body"] = body
        self.status_code = status_code
        self.body = body
        super().__init__(message, details)


class RetrievalBackendError(VerbumError):
    """Raised when the verse store or similarity search cannot be reached."""


class VerseNotFoundError(RetrievalBackendError):
    """Raised when a canonical index or verse id does not exist in the store."""


class EmptyCorpusError(VerbumError):
    """Raised when a daily selection is requested against an empty corpus."""

    def __init__(self, message: str = "Verse corpus is empty") -> None:
        super().__init__(message)
