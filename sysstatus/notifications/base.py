"""Base channel interface."""

from abc import ABC, abstractmethod

from sysstatus.health.summary import Alert


class Channel(ABC):
    """Abstract base class for alert channels."""

    name: str = "channel"

    @abstractmethod
    def send(self, alert: Alert) -> bool:
        """
        Deliver an alert.

        Args:
            alert: The rendered alert to deliver

        Returns:
            True if the alert was delivered, False otherwise
        """
