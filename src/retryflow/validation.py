"""Pre-flight policy checks."""

from __future__ import annotations

from retryflow.config import RetryPolicy
from retryflow.errors import RetryConfigurationError


def validate_policy(policy: RetryPolicy) -> None:
    if policy.max_retries < 0:
        raise RetryConfigurationError("Negative retries")
    if policy.base_delay < 0:
        raise RetryConfigurationError("Delay cannot be negative")
    if policy.timeout is not None and policy.timeout <= 0:
        raise RetryConfigurationError("Timeout must be greater than zero")
    if policy.sanitization_threshold < 0:
        raise RetryConfigurationError("Sanitization threshold cannot be negative")
