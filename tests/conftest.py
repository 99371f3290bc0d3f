"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from sysstatus.health.engine import Check, CheckError, Report, Status
from sysstatus.health.store import StateStore
from sysstatus.health.summary import Alert
from sysstatus.notifications import Channel


class StaticCheck(Check):
    """Check whose status can be changed between runs."""

    def __init__(self, status: Status = Status.NOMINAL, message: str = "ok") -> None:
        self.status = status
        self.message = message
        self.calls = 0

    def report(self) -> Report:
        self.calls += 1
        return Report(status=self.status, message=self.message)


class FailingCheck(Check):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or CheckError("service manager unreachable")

    def report(self) -> Report:
        raise self.error


class RecordingChannel(Channel):
    name = "recording"

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[Alert] = []

    def send(self, alert: Alert) -> bool:
        self.sent.append(alert)
        return self.result


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "persistence.json"


@pytest.fixture
def make_store(state_path: Path):
    def _make(*names: str) -> StateStore:
        return StateStore(names, path=state_path)
    return _make


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
