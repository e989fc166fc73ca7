"""Async retry engine with immutable audit reports."""

from .config import RetryPolicy, coerce_policy
from .engine import RetryService, calculate_delay, retry, retry_service, retrying
from .errors import (
    AttemptsExceededError,
    ConfigurationError,
    ReportValidationError,
    RetryAttemptsExceededError,
    RetryConfigurationError,
    RetryError,
    RetryErrorKind,
    RetryReportValidationError,
    RetryTimeoutError,
)
from .logging import SafeLogger, configure_logging
from .report import ReasonKind, RetryReason, RetryReport, RetryReportBuilder, validate_report
from .sanitize import UNSTRINGIFIABLE, sanitize, serialized_length
from .timer import ManualTimer, MonotonicTimer, Timer
from .validation import validate_policy

__all__ = [
    "AttemptsExceededError",
    "calculate_delay",
    "coerce_policy",
    "ConfigurationError",
    "configure_logging",
    "ManualTimer",
    "MonotonicTimer",
    "ReasonKind",
    "ReportValidationError",
    "retry",
    "retry_service",
    "RetryAttemptsExceededError",
    "RetryConfigurationError",
    "RetryError",
    "RetryErrorKind",
    "retrying",
    "RetryPolicy",
    "RetryReason",
    "RetryReport",
    "RetryReportBuilder",
    "RetryReportValidationError",
    "RetryService",
    "RetryTimeoutError",
    "SafeLogger",
    "sanitize",
    "serialized_length",
    "Timer",
    "UNSTRINGIFIABLE",
    "validate_policy",
    "validate_report",
]
