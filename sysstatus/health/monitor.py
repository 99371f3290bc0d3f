"""Health monitor — one complete, linear check run.

load state → run checks → evaluate escalation → persist state →
(if escalated) build alert → dispatch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sysstatus.health.engine import Report, evaluate, run_checks
from sysstatus.health.registry import CheckRegistry, check_names, default_checks
from sysstatus.health.store import PersistedState, StateStore
from sysstatus.health.summary import Alert, build_alert
from sysstatus.notifications import Channel, ConsoleChannel

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a single monitor run."""

    reports: list[tuple[str, Report]]
    should_alert: bool
    state: PersistedState
    alert: Alert | None = None
    persisted: bool = False
    delivered: bool = False


class HealthMonitor:
    """Runs all registered checks and alerts on escalation."""

    def __init__(
        self,
        checks: CheckRegistry | None = None,
        store: StateStore | None = None,
        channel: Channel | None = None,
    ) -> None:
        self.checks = checks if checks is not None else default_checks()
        self.store = store or StateStore(check_names(self.checks))
        self.channel = channel or ConsoleChannel()

        if self.store.names != check_names(self.checks):
            raise ValueError(
                f"State store fields {self.store.names} do not match checks "
                f"{check_names(self.checks)}"
            )

    def run_once(self) -> RunResult:
        state = self.store.load()
        results = run_checks(self.checks)
        should_alert = evaluate(results, state)

        # The alert decision is final; a failed write only loses memory.
        persisted = self.store.store(state)

        result = RunResult(
            reports=results,
            should_alert=should_alert,
            state=state,
            persisted=persisted,
        )

        if not should_alert:
            logger.info("No escalation since last run, not alerting")
            return result

        result.alert = build_alert([report for _, report in results])
        try:
            result.delivered = self.channel.send(result.alert)
        except Exception:
            logger.exception("Alert dispatch via %s failed", self.channel.name)
        return result
