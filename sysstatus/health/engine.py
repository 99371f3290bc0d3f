"""Health check engine — status model, check contract and escalation.

Every registered check yields exactly one Report per run. A check that
fails is converted into a Warning report instead of aborting the run.
Escalation compares each check's new status against the one persisted
from the previous run; only upward transitions raise an alert.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


# ── Models ───────────────────────────────────────────────────────────────────


class Status(str, Enum):
    """Check severity, ordered NOMINAL < WARNING < CRITICAL."""

    NOMINAL = "nominal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def default(cls) -> Status:
        return cls.NOMINAL

    @classmethod
    def parse(cls, token: str) -> Status:
        """Parse a persisted token, case-insensitively. Raises ValueError."""
        return cls(token.strip().lower())

    # str already defines ordering, so each comparison is overridden explicitly.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_RANK = {Status.NOMINAL: 0, Status.WARNING: 1, Status.CRITICAL: 2}


@dataclass(frozen=True)
class Report:
    """Outcome of a single check for a single run.

    The first line of ``message`` is the summary; further lines are detail.
    """

    status: Status
    message: str

    @property
    def summary(self) -> str:
        lines = self.message.splitlines()
        return lines[0] if lines else ""

    @property
    def details(self) -> list[str]:
        return self.message.splitlines()[1:]


# ── Check contract ───────────────────────────────────────────────────────────


class CheckError(Exception):
    """Raised by a check when it cannot determine its status."""


class Check(ABC):
    """A single health check. Stateless across runs."""

    @abstractmethod
    def report(self) -> Report:
        """Produce a Report, or raise CheckError for expected failures."""


def to_report(name: str, check: Check) -> Report:
    """Run a check, turning any failure into a Warning report."""
    try:
        return check.report()
    except CheckError as exc:
        logger.warning("Check %s failed: %s", name, exc)
        return Report(status=Status.WARNING, message=str(exc))
    except Exception as exc:
        logger.warning("Check %s crashed", name, exc_info=True)
        return Report(status=Status.WARNING, message=f"Error: {type(exc).__name__}: {exc}")


def run_checks(checks: list[tuple[str, Check]]) -> list[tuple[str, Report]]:
    """Run every check in registration order."""
    return [(name, to_report(name, check)) for name, check in checks]


# ── Escalation ───────────────────────────────────────────────────────────────


def is_escalation(previous: Status, current: Status) -> bool:
    return current > previous


def evaluate(
    results: list[tuple[str, Report]],
    state: MutableMapping[str, Status],
) -> bool:
    """Decide whether the run must alert, updating ``state`` in place.

    Returns True if any check's status rose above its persisted value.
    Each check's entry is overwritten with the current status whether or
    not it escalated.
    """
    should_alert = False
    for name, report in results:
        previous = state[name]
        if is_escalation(previous, report.status):
            logger.debug("Check %s escalated: %s -> %s", name, previous, report.status)
            should_alert = True
        state[name] = report.status
    return should_alert


def count_by_status(reports: list[Report]) -> Mapping[Status, int]:
    counts = {status: 0 for status in Status}
    for report in reports:
        counts[report.status] += 1
    return counts
