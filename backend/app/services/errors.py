"""Error types raised by the analysis pipeline."""

from __future__ import annotations

NON_RETRYABLE_STATUSES = frozenset({401, 403})


class AnalysisError(Exception):
    """Base class for recoverable analysis failures (caller falls back)."""


class LLMError(AnalysisError):
    """A completion request failed.

    ``status`` is the HTTP status of the provider response, or ``None``
    when no response was received (timeout, connection error).
    """

    def __init__(self, status: int | None, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @property
    def retryable(self) -> bool:
        return self.status not in NON_RETRYABLE_STATUSES

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


class ParseError(AnalysisError):
    """No JSON object could be recovered from the model output."""
