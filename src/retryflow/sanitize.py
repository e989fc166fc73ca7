"""Size-bounding of arbitrary values embedded into retry reports."""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic_core import PydanticSerializationError, to_jsonable_python

from retryflow.config import DEFAULT_SANITIZATION_THRESHOLD

UNSTRINGIFIABLE = "Unstringifiable Object"
_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def _to_jsonable(value: object) -> object:
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}
    if isinstance(value, Mapping):
        return dict(value)
    try:
        return to_jsonable_python(value)
    except PydanticSerializationError:
        pass
    try:
        return vars(value)
    except TypeError:
        raise TypeError(f"Object of type {type(value).__name__} is not serializable") from None


def serialized_length(value: object) -> int:
    """Length of ``value`` rendered as JSON; serialization errors propagate."""
    return len(json.dumps(value, default=_to_jsonable))


def sanitize(
    value: object,
    enabled: bool = True,
    threshold: int = DEFAULT_SANITIZATION_THRESHOLD,
) -> object:
    if not enabled or value is None or isinstance(value, _SCALARS):
        return value

    try:
        length = serialized_length(value)
    except (TypeError, ValueError, RecursionError):
        return UNSTRINGIFIABLE

    if length <= threshold:
        return value

    type_name = getattr(type(value), "__name__", "") or "Object"
    return f"Large {type_name}: {length} chars"
