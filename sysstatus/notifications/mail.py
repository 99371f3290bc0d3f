"""Mail channel — hands the alert to a local sendmail-compatible agent."""

from __future__ import annotations

import logging
import subprocess
from email.message import EmailMessage

from sysstatus.config import settings
from sysstatus.health.summary import Alert

from .base import Channel

logger = logging.getLogger(__name__)


class DispatchError(Exception):
    """Raised when the mail transport rejects or cannot take a message."""


class MailChannel(Channel):
    """Send alerts through ``sendmail -i -- <recipient>``."""

    name = "mail"

    def __init__(
        self,
        to_address: str | None = None,
        from_address: str | None = None,
        sendmail_path: str | None = None,
        timeout: float = 60,
    ) -> None:
        self.to_address = to_address or settings.mail_to
        self.from_address = from_address or settings.mail_from
        self.sendmail_path = sendmail_path or settings.sendmail_path
        self.timeout = timeout

    def build_message(self, alert: Alert) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = self.to_address
        message["Subject"] = alert.subject
        message.set_content(alert.body)
        return message

    def deliver(self, raw: str) -> None:
        """Pipe a raw RFC 822 message to sendmail. Raises DispatchError."""
        cmd = [self.sendmail_path, "-i", "--", self.to_address]
        try:
            result = subprocess.run(
                cmd,
                input=raw,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise DispatchError(f"sendmail not found at '{self.sendmail_path}'") from exc
        except subprocess.TimeoutExpired as exc:
            raise DispatchError(f"sendmail timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise DispatchError(f"spawning sendmail: {exc}") from exc

        if result.returncode != 0:
            detail = result.stderr.strip()
            raise DispatchError(
                f"sendmail exited with status {result.returncode}"
                + (f": {detail}" if detail else "")
            )

    def send(self, alert: Alert) -> bool:
        logger.info(
            "Reporting via mail to %s (%d critical, %d warning, %d nominal)",
            self.to_address, alert.critical, alert.warning, alert.nominal,
        )
        try:
            self.deliver(self.build_message(alert).as_string())
        except DispatchError as exc:
            logger.error("Error sending mail: %s", exc)
            return False
        return True
