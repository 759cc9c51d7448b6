"""Moving statistics error types."""

from __future__ import annotations

from enum import Enum


class MovingStatsErrorCode(Enum):
    """Error classification codes."""

    INVALID_WINDOW = "invalid_window"
    WINDOW_TOO_LARGE = "window_too_large"
    LENGTH_MISMATCH = "length_mismatch"
    LOCK_FAILED = "lock_failed"
    FEED_ERROR = "feed_error"
    FEED_EXHAUSTED = "feed_exhausted"


class MovingStatsError(Exception):
    """Moving statistics exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller may try the same operation again.
            The engine itself never retries.
    """

    def __init__(
        self,
        message: str,
        code: MovingStatsErrorCode = MovingStatsErrorCode.INVALID_WINDOW,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class LockAcquisitionError(MovingStatsError):
    """Shared or exclusive access to the window could not be obtained.

    Infrastructure fault, kept apart from the domain errors above so callers
    can propagate it instead of correcting their input.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code=MovingStatsErrorCode.LOCK_FAILED)
