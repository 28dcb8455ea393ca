"""Notification queue port: abstract interface for publishing order messages."""

from abc import ABC, abstractmethod

ORDER_NOTIFICATIONS_QUEUE = "order-notifications"


class NotificationQueue(ABC):
    """Abstract interface for queue adapters."""

    @abstractmethod
    def send(self, queue_name: str, message: dict) -> dict:
        """Publish a JSON-serializable message to a named queue.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
