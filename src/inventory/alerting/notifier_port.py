"""Notification port: abstract interface for delivering alerts to actors."""

from abc import ABC, abstractmethod


class NotifierPort(ABC):
    """Abstract interface for notification dispatch adapters."""

    @abstractmethod
    def send(self, actor_id: str, title: str, message: str, metadata: dict | None = None) -> dict:
        """Deliver one notification to one actor.

        Returns:
            dict with keys: notification_id, status ("sent" or "failed"), error (optional)
        """
        ...
