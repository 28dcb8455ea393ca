"""Order status workflow: commands and handler.

Cancelling an order (directly, or by setting its status to Cancelled) puts
the ordered quantities back on the shelf within the same unit of work.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order, OrderStatus
from storefront.product.product import Product


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    tracking_number = String(max_length=100)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)


def restore_stock(order: Order) -> None:
    """Return every line's quantity to its product. Missing products are skipped."""
    product_repo = current_domain.repository_for(Product)
    for item in order.items:
        try:
            product = product_repo.get(str(item.product_id))
        except ObjectNotFoundError:
            logger.warning(
                "Product missing while restoring stock",
                order_id=str(order.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
            )
            continue
        product.restore_stock(item.quantity, reason=f"Order {order.order_number} cancelled")
        product_repo.add(product)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        order.update_status(command.status, tracking_number=command.tracking_number)
        if OrderStatus(order.status) == OrderStatus.CANCELLED:
            restore_stock(order)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            status=order.status,
            tracking_number=order.tracking_number,
        )
        return order.status

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        order.cancel(reason=command.reason)
        restore_stock(order)
        repo.add(order)

        logger.info("Order cancelled", order_id=str(order.id), order_number=order.order_number)
        return order.status
