"""Tracker error types."""

from __future__ import annotations

from enum import Enum


class TrackerErrorCode(Enum):
    """Error classification codes."""

    DATA_SOURCE = "data_source"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    VALIDATION_FAILED = "validation_failed"
    INSUFFICIENT_HISTORY = "insufficient_history"
    NOTIFICATION_FAILED = "notification_failed"
    PERSISTENCE_FAILED = "persistence_failed"


class TrackerError(Exception):
    """Tracker exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller should retry with another provider.
    """

    default_code = TrackerErrorCode.DATA_SOURCE

    def __init__(
        self,
        message: str,
        code: TrackerErrorCode | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.retryable = retryable


class DataSourceError(TrackerError):
    """Fetching price bars failed or returned unusable data."""

    default_code = TrackerErrorCode.DATA_SOURCE


class InsufficientHistory(TrackerError):
    """Fewer bars are available than an Ichimoku window needs.

    Attributes:
        available: Number of bars present in the window.
        required: Number of bars the window needs.
        window: Name of the window that came up short.
    """

    default_code = TrackerErrorCode.INSUFFICIENT_HISTORY

    def __init__(self, available: int, required: int, window: str = "series") -> None:
        super().__init__(
            f"Not enough history for {window}: {available}/{required} bars"
        )
        self.available = available
        self.required = required
        self.window = window


class NotificationError(TrackerError):
    """Sending an alert notification failed."""

    default_code = TrackerErrorCode.NOTIFICATION_FAILED


class PersistenceError(TrackerError):
    """Durable state could not be read or written."""

    default_code = TrackerErrorCode.PERSISTENCE_FAILED
