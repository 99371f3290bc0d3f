"""Concrete health checks."""

from .disk import DiskCheck
from .systemd import FailedUnitsCheck

__all__ = ["DiskCheck", "FailedUnitsCheck"]
