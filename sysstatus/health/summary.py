"""Alert aggregation — turns a run's reports into one composite message.

Reports are ordered most severe first (stable, so registration order is
kept within a severity) and grouped under one heading per status::

    [!] System Status: 1 critical, 1 warning, 2 nominal

    # Critical:

    - 2 systemd units have failed:
      - "foo.service"

    # Warning:
    ...
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby

from sysstatus.config import settings
from sysstatus.health.engine import Report, Status, count_by_status

ATTENTION_MARKER = "[!]"
DETAIL_INDENT = "  "


@dataclass(frozen=True)
class Alert:
    """A rendered notification."""

    subject: str
    body: str
    critical: int = 0
    warning: int = 0
    nominal: int = 0

    def as_text(self) -> str:
        return f"{self.subject}\n\n{self.body}"


def sort_reports(reports: list[Report]) -> list[Report]:
    """Most severe first; equal statuses keep their original order."""
    return sorted(reports, key=lambda r: r.status.rank, reverse=True)


def format_subject(critical: int, warning: int, nominal: int, prefix: str | None = None) -> str:
    parts = []
    if critical:
        parts.append(f"{critical} critical")
    if warning:
        parts.append(f"{warning} warning")
    parts.append(f"{nominal} nominal")

    subject = f"{prefix or settings.mail_subject_prefix}: {', '.join(parts)}"
    if critical or warning:
        subject = f"{ATTENTION_MARKER} {subject}"
    return subject


def format_report(report: Report) -> str:
    """Render one report as a bullet with indented continuation lines."""
    out = [f"- {report.summary}"]
    out.extend(f"{DETAIL_INDENT}{line}" for line in report.details)
    return "\n".join(out)


def format_body(reports: list[Report]) -> str:
    """Render already-sorted reports, one heading per status group."""
    chunks = []
    for status, group in groupby(reports, key=lambda r: r.status):
        chunks.append(f"# {status.label}:\n")
        chunks.extend(f"{format_report(report)}\n" for report in group)
    return "".join(f"{chunk}\n" for chunk in chunks)


def build_alert(reports: list[Report], prefix: str | None = None) -> Alert:
    """Aggregate a run's reports into a single Alert."""
    counts = count_by_status(reports)
    critical = counts[Status.CRITICAL]
    warning = counts[Status.WARNING]
    nominal = counts[Status.NOMINAL]
    ordered = sort_reports(reports)
    return Alert(
        subject=format_subject(critical, warning, nominal, prefix),
        body=format_body(ordered),
        critical=critical,
        warning=warning,
        nominal=nominal,
    )
