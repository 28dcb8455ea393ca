"""Fake queue adapter: records published messages in memory."""

import json
from uuid import uuid4

from storefront.notification.queue.port import NotificationQueue


class FakeQueue(NotificationQueue):
    """Queue adapter that keeps messages per queue for test assertions."""

    def __init__(self):
        self.messages: dict[str, list[dict]] = {}
        self.should_succeed = True
        self.failure_reason = "Queue unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Queue unavailable"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, queue_name: str, message: dict) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        # Round-trip through JSON so callers see exactly what a real queue would store
        self.messages.setdefault(queue_name, []).append(json.loads(json.dumps(message)))
        return {"message_id": f"msg-{uuid4().hex[:12]}", "status": "sent"}

    def messages_on(self, queue_name: str) -> list[dict]:
        return list(self.messages.get(queue_name, []))

    def reset(self):
        self.messages.clear()
        self.should_succeed = True
        self.failure_reason = "Queue unavailable"
