"""Console channel — writes the alert verbatim to stdout."""

from __future__ import annotations

import sys
from typing import TextIO

from sysstatus.health.summary import Alert

from .base import Channel


class ConsoleChannel(Channel):
    """Prints alerts to stdout."""

    name = "stdout"

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def send(self, alert: Alert) -> bool:
        stream = self.stream or sys.stdout
        stream.write(alert.as_text())
        stream.flush()
        return True
