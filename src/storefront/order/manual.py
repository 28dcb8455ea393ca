"""Manual orders: staff key in a single-product order for a registered customer.

The order skips the cart and starts as Submitted. Stock is taken in the same
unit of work, and the usual order-created notification goes out on commit.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import logger, storefront
from storefront.order.order import Order, OrderStatus
from storefront.product.product import Product

INVALID_SELECTION = "Invalid customer or product selected."


@storefront.command(part_of="Order")
class CreateManualOrder:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    shipping_address = String(max_length=500)
    phone_number = String(max_length=20)
    notes = String(max_length=1000)


def _active_customer(customer_id) -> User | None:
    try:
        user = current_domain.repository_for(User).get(str(customer_id))
    except ObjectNotFoundError:
        return None
    return user if user.is_active else None


@storefront.command_handler(part_of=Order)
class ManualOrderHandler:
    @handle(CreateManualOrder)
    def create_manual_order(self, command):
        product_repo = current_domain.repository_for(Product)
        order_repo = current_domain.repository_for(Order)

        customer = _active_customer(command.customer_id)
        product = product_repo.find_live(command.product_id)
        if customer is None or product is None:
            raise ValidationError({"order": [INVALID_SELECTION]})

        if product.stock < command.quantity:
            raise ValidationError({"quantity": [f"Insufficient stock. Available: {product.stock}"]})

        now = datetime.now(UTC)
        order = Order.place(
            order_number=order_repo.next_order_number(now.strftime("%Y%m%d")),
            customer_name=customer.full_name,
            customer_email=customer.email,
            user_id=str(customer.id),
            shipping_address=command.shipping_address or customer.address,
            phone_number=command.phone_number or customer.phone_number,
            notes=command.notes,
            placed_at=now,
            status=OrderStatus.SUBMITTED,
            lines=[
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "image_url": product.image_url,
                    "quantity": command.quantity,
                    "unit_price": product.price,
                }
            ],
        )

        product.remove_stock(command.quantity, reason=f"Order {order.order_number} placed")
        product_repo.add(product)
        order_repo.add(order)

        logger.info(
            "Manual order created",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(customer.id),
            product_id=str(product.id),
            quantity=command.quantity,
        )
        return str(order.id)
