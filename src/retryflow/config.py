"""Retry policy model and package defaults."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from retryflow.errors import RetryConfigurationError

DEFAULT_SANITIZATION_THRESHOLD = 500
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV = "RETRYFLOW_LOG_LEVEL"


class RetryPolicy(BaseModel):
    """Immutable configuration for one ``retry`` call.

    Only field types are checked here. Range checks live in
    :func:`retryflow.validation.validate_policy` so that a bad value is
    reported by ``retry`` as :class:`RetryConfigurationError`.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    max_retries: int = Field(validation_alias=AliasChoices("max_retries", "retries"))
    base_delay: float = Field(default=0.0, validation_alias=AliasChoices("base_delay", "delay"))
    exponential_backoff: bool = False
    retry_on_error: Callable[[Exception], bool] | None = None
    retry_on_result: Callable[[Any], bool] | None = None
    timeout: float | None = None
    on_complete: Callable[[Any], None] | None = None
    sanitize_reasons: bool = Field(
        default=True,
        validation_alias=AliasChoices("sanitize_reasons", "sanitize_retry_reasons"),
    )
    sanitization_threshold: int = DEFAULT_SANITIZATION_THRESHOLD

    def with_overrides(self, **changes: Any) -> RetryPolicy:
        aliases = {
            choice: name
            for name, info in type(self).model_fields.items()
            if isinstance(info.validation_alias, AliasChoices)
            for choice in info.validation_alias.choices
            if isinstance(choice, str)
        }
        payload = {name: value for name, value in self}
        payload.update({aliases.get(key, key): value for key, value in changes.items()})
        return coerce_policy(payload)


def coerce_policy(policy: RetryPolicy | Mapping[str, Any]) -> RetryPolicy:
    if isinstance(policy, RetryPolicy):
        return policy
    if not isinstance(policy, Mapping):
        raise RetryConfigurationError(f"Unsupported retry policy type: {type(policy).__name__}")
    try:
        return RetryPolicy.model_validate(dict(policy))
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in item["loc"]) for item in exc.errors())
        raise RetryConfigurationError(f"Invalid retry policy fields: {fields}", cause=exc) from exc
