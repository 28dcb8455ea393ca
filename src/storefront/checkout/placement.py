"""Order placement: turn a validated cart into a Pending order.

The handler runs inside a single unit of work. Every product is re-read and
its stock and price checked before anything is written. Then stock is
decremented, the order is stored and the cart is emptied. A failure at any
step leaves the cart, the products and the order table untouched.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.pricing import money


@storefront.command(part_of="Order")
class PlaceOrder:
    session_id = String(required=True, max_length=255)
    user_id = Identifier()
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    shipping_address = String(required=True, max_length=500)
    phone_number = String(max_length=20)
    notes = String(max_length=1000)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        product_repo = current_domain.repository_for(Product)
        order_repo = current_domain.repository_for(Order)

        cart = cart_repo.for_session(command.session_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty."]})

        # Check every line against live stock and price before touching anything
        reservations = []
        for item in cart.items:
            product = product_repo.find_live(item.product_id)
            if product is None:
                raise ValidationError({"cart": [f"'{item.product_name}' is no longer available."]})
            if item.quantity > product.stock:
                raise ValidationError(
                    {"cart": [f"Only {product.stock} of '{item.product_name}' are available."]}
                )
            if money(item.unit_price) != money(product.price):
                raise ValidationError(
                    {"cart": [f"The price for '{item.product_name}' has changed to {product.price:.2f}."]}
                )
            reservations.append((product, item))

        now = datetime.now(UTC)
        order_number = order_repo.next_order_number(now.strftime("%Y%m%d"))

        order = Order.place(
            order_number=order_number,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            shipping_address=command.shipping_address,
            phone_number=command.phone_number,
            notes=command.notes,
            user_id=command.user_id or cart.user_id,
            placed_at=now,
            lines=[
                {
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "image_url": item.image_url,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                }
                for item in cart.items
            ],
        )

        for product, item in reservations:
            product.remove_stock(item.quantity, reason=f"Order {order_number} placed")
            product_repo.add(product)

        order_repo.add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total_amount=order.total_amount,
            lines=len(order.items),
        )
        return str(order.id)
