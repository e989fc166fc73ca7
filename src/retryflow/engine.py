"""Attempt loop: run an async operation until it succeeds or a limit is hit."""

from __future__ import annotations

import functools
import logging as py_logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, NoReturn, ParamSpec, TypeVar

from retryflow.config import RetryPolicy, coerce_policy
from retryflow.errors import RetryAttemptsExceededError, RetryTimeoutError
from retryflow.logging import LogHandler, SafeLogger
from retryflow.report import ReasonKind, RetryReport, RetryReportBuilder
from retryflow.timer import MonotonicTimer, Timer
from retryflow.validation import validate_policy

T = TypeVar("T")
P = ParamSpec("P")


def calculate_delay(policy: RetryPolicy, retries_left: int) -> float:
    if policy.exponential_backoff:
        return policy.base_delay * (policy.max_retries - retries_left + 1)
    return policy.base_delay


class RetryService:
    """Runs operations under a :class:`RetryPolicy` and reports every step.

    The service only holds its logger and timer; all per-call state (deadline,
    retry budget, report builder) lives inside :meth:`retry`, so one instance
    can serve any number of concurrent calls.
    """

    def __init__(
        self,
        logger: py_logging.Logger | LogHandler | None = None,
        timer: Timer | None = None,
    ) -> None:
        self.logger = SafeLogger(logger if logger is not None else py_logging.getLogger(__name__))
        self.timer: Timer = timer if timer is not None else MonotonicTimer()

    def now(self) -> float:
        return self.timer.now()

    async def retry(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy | Mapping[str, Any],
    ) -> T:
        resolved = coerce_policy(policy)
        validate_policy(resolved)

        deadline = self.timer.now() + resolved.timeout if resolved.timeout is not None else None
        builder = RetryReportBuilder(self.timer.now())
        retries_left = resolved.max_retries

        while True:
            builder = builder.with_attempt()

            if deadline is not None and self.timer.now() > deadline:
                self._raise_timeout(builder, resolved)

            current_delay = calculate_delay(resolved, retries_left)
            try:
                self.logger.debug("Attempting operation, retries left: %s", retries_left)
                result = await operation()
            except Exception as exc:
                self.logger.debug("Error encountered: %s. Retries left: %s", exc, retries_left)
                builder = builder.with_error(exc)
                should_retry = resolved.retry_on_error is None or resolved.retry_on_error(exc)

                if not should_retry or retries_left <= 0:
                    self.logger.debug("No retries left or error is not retryable; raising")
                    self._complete(builder.with_failure(self.timer.now()), resolved)
                    if should_retry:
                        raise RetryAttemptsExceededError(
                            f"Maximum retry attempts ({resolved.max_retries}) exceeded: {exc}",
                            cause=exc,
                        ) from exc
                    raise

                builder = self._schedule(builder, resolved, ReasonKind.ERROR, exc, current_delay)
            else:
                wants_retry = resolved.retry_on_result is not None and resolved.retry_on_result(result)
                if not wants_retry or retries_left <= 0:
                    if wants_retry:
                        self.logger.debug("No retries left for retryable result; returning it")
                    self._complete(builder.with_success(self.timer.now()), resolved)
                    return result

                builder = self._schedule(builder, resolved, ReasonKind.RESULT, result, current_delay)

            self.logger.debug("Retrying in %s... Retries left: %s", current_delay, retries_left - 1)
            if current_delay:
                await self.timer.delay(current_delay)
            retries_left -= 1

    @staticmethod
    def _schedule(
        builder: RetryReportBuilder,
        policy: RetryPolicy,
        kind: ReasonKind,
        value: object,
        delay: float,
    ) -> RetryReportBuilder:
        return builder.with_retry_reason(
            kind,
            value,
            policy.sanitize_reasons,
            policy.sanitization_threshold,
        ).with_delay(delay)

    @staticmethod
    def _complete(builder: RetryReportBuilder, policy: RetryPolicy) -> RetryReport:
        report = builder.build()
        if policy.on_complete is not None:
            policy.on_complete(report)
        return report

    def _raise_timeout(self, builder: RetryReportBuilder, policy: RetryPolicy) -> NoReturn:
        self.logger.debug("Retry timeout exceeded")
        report = self._complete(builder.with_timeout(self.timer.now()), policy)
        last_error = report.last_error
        if last_error is not None:
            raise RetryTimeoutError("Retry timeout exceeded", cause=last_error) from last_error
        raise RetryTimeoutError("Retry timeout exceeded")


retry_service = RetryService()


async def retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | Mapping[str, Any],
    *,
    logger: py_logging.Logger | LogHandler | None = None,
    timer: Timer | None = None,
) -> T:
    if logger is None and timer is None:
        return await retry_service.retry(operation, policy)
    return await RetryService(logger, timer).retry(operation, policy)


def retrying(
    policy: RetryPolicy | Mapping[str, Any],
    *,
    service: RetryService | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorate an ``async def`` so every call goes through the retry loop."""
    resolved = coerce_policy(policy)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            runner = service if service is not None else retry_service
            return await runner.retry(functools.partial(func, *args, **kwargs), resolved)

        return wrapper

    return decorator
