from __future__ import annotations

from pathlib import Path

import pytest

from retryflow.timer import ManualTimer


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, object, tuple[object, ...]]] = []

    def _record(self, level: str, message: object, args: tuple[object, ...]) -> None:
        self.records.append((level, message, args))

    def trace(self, message: object, *args: object) -> None:
        self._record("trace", message, args)

    def debug(self, message: object, *args: object) -> None:
        self._record("debug", message, args)

    def info(self, message: object, *args: object) -> None:
        self._record("info", message, args)

    def warn(self, message: object, *args: object) -> None:
        self._record("warn", message, args)

    def error(self, message: object, *args: object) -> None:
        self._record("error", message, args)

    def levels(self) -> list[str]:
        return [level for level, _, _ in self.records]


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "property" in path.parts:
            item.add_marker(pytest.mark.property)
