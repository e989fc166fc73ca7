"""Retry error taxonomy.

Every error raised by the engine itself derives from :class:`RetryError` and
carries a machine-readable :class:`RetryErrorKind`. Operation errors that are
judged non-retryable are never wrapped; they surface unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RetryErrorKind(str, Enum):
    RETRY = "retry"
    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"
    ATTEMPTS_EXCEEDED = "attempts_exceeded"
    REPORT_VALIDATION = "report_validation"


@dataclass(eq=False)
class RetryError(Exception):
    message: str
    cause: BaseException | None = None
    kind: RetryErrorKind = RetryErrorKind.RETRY

    def __post_init__(self) -> None:
        self.args = (self.message,)
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class RetryConfigurationError(RetryError):
    """Policy rejected before any attempt was made."""

    kind: RetryErrorKind = RetryErrorKind.CONFIGURATION


@dataclass(eq=False)
class RetryTimeoutError(RetryError):
    """Deadline passed before the next attempt could start."""

    message: str = "Retry timeout exceeded"
    kind: RetryErrorKind = RetryErrorKind.TIMEOUT


@dataclass(eq=False)
class RetryAttemptsExceededError(RetryError):
    """Retry budget exhausted while the last error was still retryable."""

    message: str = "Maximum retry attempts exceeded"
    kind: RetryErrorKind = RetryErrorKind.ATTEMPTS_EXCEEDED


@dataclass(eq=False)
class RetryReportValidationError(RetryError):
    kind: RetryErrorKind = RetryErrorKind.REPORT_VALIDATION


ConfigurationError = RetryConfigurationError
AttemptsExceededError = RetryAttemptsExceededError
ReportValidationError = RetryReportValidationError
