"""Retry audit report and its copy-on-write builder."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from typing_extensions import TypedDict

from retryflow.config import DEFAULT_SANITIZATION_THRESHOLD
from retryflow.errors import RetryReportValidationError
from retryflow.sanitize import sanitize


class ReasonKind(str, Enum):
    ERROR = "error"
    RESULT = "result"


@dataclass(frozen=True)
class RetryReason:
    kind: ReasonKind
    value: object


class ErrorEntry(TypedDict):
    type: str
    message: str


class RetryReasonDict(TypedDict):
    kind: str
    value: object


class RetryReportDict(TypedDict):
    start_time: float
    total_time: float
    attempts: int
    errors: list[ErrorEntry]
    delays: list[float]
    succeeded: bool
    timed_out: bool | None
    retry_reasons: list[RetryReasonDict]


@dataclass(frozen=True)
class RetryReport:
    start_time: float
    total_time: float = 0.0
    attempts: int = 0
    errors: tuple[BaseException, ...] = ()
    delays: tuple[float, ...] = ()
    succeeded: bool = False
    timed_out: bool | None = None
    retry_reasons: tuple[RetryReason, ...] = ()

    @property
    def last_error(self) -> BaseException | None:
        return self.errors[-1] if self.errors else None

    def to_dict(self) -> RetryReportDict:
        return {
            "start_time": self.start_time,
            "total_time": self.total_time,
            "attempts": self.attempts,
            "errors": [
                ErrorEntry(type=type(error).__name__, message=str(error)) for error in self.errors
            ],
            "delays": list(self.delays),
            "succeeded": self.succeeded,
            "timed_out": self.timed_out,
            "retry_reasons": [
                RetryReasonDict(kind=reason.kind.value, value=reason.value)
                for reason in self.retry_reasons
            ],
        }


def validate_report(report: RetryReport) -> RetryReport:
    if report.total_time < 0:
        raise RetryReportValidationError("Invalid report: total_time cannot be negative")
    if report.attempts < 0:
        raise RetryReportValidationError("Invalid report: attempts cannot be negative")
    return report


class RetryReportBuilder:
    """Immutable report accumulator.

    Every ``with_*`` method returns a new builder; the receiver and any report
    it already produced are left untouched, so a builder can be handed from one
    loop iteration to the next without aliasing.
    """

    __slots__ = ("_report",)

    def __init__(self, start_time: float, *, _report: RetryReport | None = None) -> None:
        self._report = _report if _report is not None else RetryReport(start_time=start_time)

    @property
    def start_time(self) -> float:
        return self._report.start_time

    def _copy_with(self, **changes: object) -> RetryReportBuilder:
        return RetryReportBuilder(self._report.start_time, _report=replace(self._report, **changes))

    def with_attempt(self) -> RetryReportBuilder:
        return self._copy_with(attempts=self._report.attempts + 1)

    def with_error(self, error: object) -> RetryReportBuilder:
        recorded = error if isinstance(error, BaseException) else Exception(str(error))
        return self._copy_with(errors=(*self._report.errors, recorded))

    def with_delay(self, delay: float) -> RetryReportBuilder:
        return self._copy_with(delays=(*self._report.delays, delay))

    def with_retry_reason(
        self,
        kind: ReasonKind | str,
        value: object,
        sanitize_value: bool = True,
        threshold: int = DEFAULT_SANITIZATION_THRESHOLD,
    ) -> RetryReportBuilder:
        reason = RetryReason(kind=ReasonKind(kind), value=sanitize(value, sanitize_value, threshold))
        return self._copy_with(retry_reasons=(*self._report.retry_reasons, reason))

    def with_success(self, current_time: float) -> RetryReportBuilder:
        return self._copy_with(succeeded=True, total_time=current_time - self._report.start_time)

    def with_timeout(self, current_time: float) -> RetryReportBuilder:
        return self._copy_with(timed_out=True, total_time=current_time - self._report.start_time)

    def with_failure(self, current_time: float) -> RetryReportBuilder:
        return self._copy_with(succeeded=False, total_time=current_time - self._report.start_time)

    def build(self) -> RetryReport:
        return validate_report(self._report)
