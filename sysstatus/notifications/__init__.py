"""Alert delivery channels — console and local mail.

Delivery problems are logged, never raised: a failed notification must
not abort a monitoring run.
"""

from __future__ import annotations

from enum import Enum

from .base import Channel
from .console import ConsoleChannel
from .mail import DispatchError, MailChannel


class Output(str, Enum):
    MAIL = "mail"
    STDOUT = "stdout"


def get_channel(output: Output | str) -> Channel:
    """Return the channel for a configured output."""
    output = Output(output)
    if output is Output.MAIL:
        return MailChannel()
    return ConsoleChannel()


__all__ = [
    "Channel",
    "ConsoleChannel",
    "DispatchError",
    "MailChannel",
    "Output",
    "get_channel",
]
