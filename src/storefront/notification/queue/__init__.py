"""Notification queue factory.

Provides get_queue() / set_queue() to swap implementations:
- FakeQueue for development and testing (default)
- BrokerQueue when NOTIFICATION_QUEUE=broker
"""

import os

from storefront.notification.queue.fake_adapter import FakeQueue
from storefront.notification.queue.port import NotificationQueue

_current_queue: NotificationQueue | None = None


def get_queue() -> NotificationQueue:
    """Return the current notification queue."""
    global _current_queue
    if _current_queue is None:
        if os.getenv("NOTIFICATION_QUEUE", "memory").lower() == "broker":
            from storefront.notification.queue.broker_adapter import BrokerQueue

            _current_queue = BrokerQueue()
        else:
            _current_queue = FakeQueue()
    return _current_queue


def set_queue(queue: NotificationQueue) -> None:
    """Override the active queue (useful for tests)."""
    global _current_queue
    _current_queue = queue


def reset_queue() -> None:
    """Reset to the default queue."""
    global _current_queue
    _current_queue = None
