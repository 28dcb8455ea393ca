"""Queue adapter backed by the domain's configured Protean broker."""

from protean.utils.globals import current_domain

from storefront.notification.queue.port import NotificationQueue


class BrokerQueue(NotificationQueue):
    def __init__(self, broker_name: str = "default"):
        self.broker_name = broker_name

    def send(self, queue_name: str, message: dict) -> dict:
        broker = current_domain.brokers[self.broker_name]
        message_id = broker.publish(queue_name, message)
        return {"message_id": message_id, "status": "sent"}
