"""Disk utilization check via statvfs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from rich.filesize import decimal

from sysstatus.config import settings
from sysstatus.health.engine import Check, CheckError, Report, Status


@dataclass
class DiskStats:
    size: int
    use_percentage: float


class DiskCheck(Check):
    """Reports how full the filesystem holding ``path`` is."""

    def __init__(
        self,
        path: Path | str | None = None,
        warning_percent: float | None = None,
        critical_percent: float | None = None,
    ) -> None:
        self.path = Path(path or settings.disk_path)
        self.warning_percent = (
            settings.disk_warning_percent if warning_percent is None else warning_percent
        )
        self.critical_percent = (
            settings.disk_critical_percent if critical_percent is None else critical_percent
        )

    def get_stats(self) -> DiskStats:
        try:
            raw = os.statvfs(self.path)
        except OSError as exc:
            raise CheckError(f"statvfs({str(self.path)!r}): {exc.strerror or exc}") from exc

        blocks = raw.f_blocks
        if blocks == 0:
            raise CheckError(f"statvfs({str(self.path)!r}): filesystem reports zero blocks")

        # Tenths of a percent, truncated
        used_permille = (blocks - raw.f_bavail) * 1000 // blocks
        return DiskStats(size=blocks * raw.f_frsize, use_percentage=used_permille / 10)

    def classify(self, use_percentage: float) -> Status:
        if use_percentage > self.critical_percent:
            return Status.CRITICAL
        if use_percentage > self.warning_percent:
            return Status.WARNING
        return Status.NOMINAL

    def report(self) -> Report:
        stats = self.get_stats()
        size = decimal(stats.size, precision=0)
        return Report(
            status=self.classify(stats.use_percentage),
            message=f"{stats.use_percentage:.1f}% of {size} is in use on {str(self.path)!r}",
        )
