"""Publishes order lifecycle events as customer notifications.

Every message goes to the ``order-notifications`` queue through the
configured queue adapter. A failed publish is logged; the order change it
describes has already been committed.
"""

from protean.utils.mixins import handle

from storefront.domain import logger, storefront
from storefront.notification.messages import order_created_message, status_changed_message
from storefront.notification.queue import get_queue
from storefront.notification.queue.port import ORDER_NOTIFICATIONS_QUEUE
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus


def _publish(message: dict, order_id) -> None:
    try:
        result = get_queue().send(ORDER_NOTIFICATIONS_QUEUE, message)
    except Exception as e:
        logger.error(
            "Order notification publish failed",
            order_id=str(order_id),
            error=str(e),
        )
        return

    if result.get("status") != "sent":
        logger.error(
            "Order notification not delivered",
            order_id=str(order_id),
            error=result.get("error"),
        )


@storefront.event_handler(part_of=Order)
class OrderNotificationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        _publish(order_created_message(event), event.order_id)

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        _publish(
            status_changed_message(event.order_id, event.customer_name, event.new_status, event.changed_at),
            event.order_id,
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        _publish(
            status_changed_message(
                event.order_id,
                event.customer_name,
                OrderStatus.CANCELLED.value,
                event.cancelled_at,
            ),
            event.order_id,
        )
