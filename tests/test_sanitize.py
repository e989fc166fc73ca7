from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from retryflow.sanitize import UNSTRINGIFIABLE, sanitize, serialized_length


class Payload:
    def __init__(self, data: str) -> None:
        self.data = data


@dataclass
class Envelope:
    body: str


class Snapshot(BaseModel):
    items: list[int]


def test_scalars_pass_through() -> None:
    long_text = "x" * 10_000

    assert sanitize(None) is None
    assert sanitize(long_text) is long_text
    assert sanitize(12345, threshold=0) == 12345
    assert sanitize(True, threshold=0) is True


def test_small_values_are_returned_unchanged() -> None:
    value = {"status": "pending"}

    assert sanitize(value) is value


def test_large_mapping_is_replaced_with_placeholder() -> None:
    value = {"data": "x" * 600}

    assert sanitize(value) == f"Large dict: {len(json.dumps(value))} chars"


def test_large_custom_object_uses_class_name() -> None:
    value = Payload("y" * 600)

    assert sanitize(value) == f"Large Payload: {serialized_length(value)} chars"


def test_dataclass_and_model_are_measured_by_fields() -> None:
    envelope = Envelope(body="z" * 20)
    snapshot = Snapshot(items=list(range(3)))

    assert serialized_length(envelope) == len(json.dumps({"body": "z" * 20}))
    assert serialized_length(snapshot) == len(json.dumps({"items": [0, 1, 2]}))
    assert sanitize(envelope, threshold=5).startswith("Large Envelope: ")
    assert sanitize(snapshot, threshold=5).startswith("Large Snapshot: ")


def test_exceptions_are_measured_by_type_and_message() -> None:
    error = RuntimeError("e" * 600)

    assert sanitize(error) == f"Large RuntimeError: {serialized_length(error)} chars"
    short = RuntimeError("short")
    assert sanitize(short) is short


def test_circular_reference_is_unstringifiable() -> None:
    value: dict[str, object] = {"name": "loop"}
    value["self"] = value

    assert sanitize(value) == UNSTRINGIFIABLE
    assert UNSTRINGIFIABLE == "Unstringifiable Object"


def test_circular_object_graph_is_unstringifiable() -> None:
    node = Payload("a")
    node.data = node  # type: ignore[assignment]

    assert sanitize(node) == UNSTRINGIFIABLE


def test_unserializable_object_is_unstringifiable() -> None:
    class Slotted:
        __slots__ = ("value",)

        def __init__(self) -> None:
            self.value = 1

    assert sanitize(Slotted()) == UNSTRINGIFIABLE


def test_disabled_sanitization_returns_original() -> None:
    value: dict[str, object] = {"data": "x" * 600}
    value["self"] = value

    assert sanitize(value, enabled=False) is value


def test_zero_threshold_replaces_every_object() -> None:
    assert sanitize({}, threshold=0) == "Large dict: 2 chars"
    assert sanitize([1], threshold=0) == "Large list: 3 chars"


def test_higher_threshold_preserves_value() -> None:
    value = {"data": "x" * 600}

    assert sanitize(value, threshold=10_000) is value


def test_sets_are_serialized_as_lists() -> None:
    assert serialized_length({1, 2}) == len("[1, 2]")


class Color(Enum):
    RED = 1


def test_datetime_values_are_serializable() -> None:
    value = {"at": datetime(2024, 1, 1)}

    assert sanitize(value) is value
    assert serialized_length(value) == len(json.dumps({"at": "2024-01-01T00:00:00"}))


def test_enum_values_are_serializable() -> None:
    value = {"color": Color.RED}

    assert sanitize(value) is value
    assert serialized_length(value) == len(json.dumps({"color": 1}))


def test_decimal_values_are_serializable() -> None:
    value = [Decimal("1.50")]

    assert sanitize(value) is value
    assert sanitize(value, threshold=0) == f"Large list: {serialized_length(value)} chars"
