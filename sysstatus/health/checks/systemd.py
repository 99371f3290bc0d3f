"""Failed systemd units check.

Asks the service manager for units in the ``failed`` state through
``systemctl list-units``.
"""

from __future__ import annotations

import logging
import subprocess

from sysstatus.config import settings
from sysstatus.health.engine import Check, CheckError, Report, Status

logger = logging.getLogger(__name__)

LIST_FAILED_ARGS = ("list-units", "--state=failed", "--plain", "--no-legend", "--no-pager", "--all")


class FailedUnitsCheck(Check):
    """Critical when any unit is in the failed state."""

    def __init__(self, systemctl_path: str | None = None, timeout: float = 30) -> None:
        self.systemctl_path = systemctl_path or settings.systemctl_path
        self.timeout = timeout

    def list_failed_units(self) -> list[str]:
        cmd = [self.systemctl_path, *LIST_FAILED_ARGS]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise CheckError(f"systemctl not found at '{self.systemctl_path}'") from exc
        except subprocess.TimeoutExpired as exc:
            raise CheckError(f"systemctl timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise CheckError(f"running systemctl: {exc}") from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise CheckError(f"listing failed units: {detail}")

        return parse_unit_names(result.stdout)

    def report(self) -> Report:
        units = self.list_failed_units()
        logger.debug("Failed units: %s", units)

        if not units:
            return Report(status=Status.NOMINAL, message="All systemd units are happy")

        lines = [f"{len(units)} systemd units have failed:"]
        lines.extend(f'- "{name}"' for name in units)
        return Report(status=Status.CRITICAL, message="\n".join(lines))


def parse_unit_names(output: str) -> list[str]:
    """Extract unit names (first column) from plain list-units output."""
    names = []
    for line in output.splitlines():
        fields = line.split()
        if not fields:
            continue
        # Some systemd versions still prefix failed units with a marker
        if fields[0] in ("●", "*") and len(fields) > 1:
            fields = fields[1:]
        names.append(fields[0])
    return names
