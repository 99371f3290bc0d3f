"""Registered checks — the fixed, ordered list the monitor runs.

Names are persistence keys: renaming one resets that check's
escalation memory.
"""

from __future__ import annotations

from sysstatus.health.checks import DiskCheck, FailedUnitsCheck
from sysstatus.health.engine import Check

CheckRegistry = list[tuple[str, Check]]


def default_checks() -> CheckRegistry:
    """The host checks, in report order."""
    return [
        ("disk", DiskCheck()),
        ("failed_units", FailedUnitsCheck()),
    ]


def check_names(checks: CheckRegistry) -> tuple[str, ...]:
    names = tuple(name for name, _ in checks)
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate check names: {names}")
    return names
