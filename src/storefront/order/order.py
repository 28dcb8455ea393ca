"""Order aggregate: an immutable snapshot of ordered lines plus its status.

Status workflow:
    Pending, Submitted, Shipped  → any status (editable)
    Delivered, Completed, Cancelled → terminal, no further edits

Cancellation is only possible from an editable state. Line items are copied
from the cart at checkout and never change afterwards.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.shared.pricing import calculate_totals, line_total, money


class OrderStatus(Enum):
    PENDING = "Pending"
    SUBMITTED = "Submitted"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


TERMINAL_STATES = {
    OrderStatus.DELIVERED,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
}

_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.SUBMITTED,
    OrderStatus.SHIPPED,
}


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Unknown order status '{value}'. Expected one of: {allowed}"]}) from None


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    image_url = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id = Identifier()
    order_number = String(required=True, max_length=50)
    order_day = String(max_length=8)  # YYYYMMDD, drives the per-day sequence
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    customer_name = String(required=True, max_length=100)
    customer_email = String(max_length=254)
    shipping_address = String(max_length=500)
    phone_number = String(max_length=20)
    notes = String(max_length=1000)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total_amount = Float(default=0.0)
    tracking_number = String(max_length=100)
    cancellation_reason = String(max_length=500)
    ordered_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer_name,
        lines,
        user_id=None,
        customer_email=None,
        shipping_address=None,
        phone_number=None,
        notes=None,
        placed_at=None,
        status=OrderStatus.PENDING,
    ):
        """Create an order from line snapshots.

        Args:
            lines: list of dicts with product_id, product_name, image_url,
                quantity and unit_price.
            status: starting status. Checkout orders start Pending, orders
                keyed in by staff start Submitted.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = placed_at or datetime.now(UTC)
        items = [
            OrderItem(
                product_id=line["product_id"],
                product_name=line["product_name"],
                image_url=line.get("image_url"),
                quantity=line["quantity"],
                unit_price=money(line["unit_price"]),
                total_price=line_total(line["quantity"], line["unit_price"]),
            )
            for line in lines
        ]
        totals = calculate_totals(sum(item.total_price for item in items))

        order = cls(
            user_id=user_id,
            order_number=order_number,
            order_day=now.strftime("%Y%m%d"),
            status=status.value,
            customer_name=customer_name,
            customer_email=customer_email,
            shipping_address=shipping_address,
            phone_number=phone_number,
            notes=notes,
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping_cost=totals.shipping_cost,
            total_amount=totals.total,
            ordered_at=now,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id) if user_id else None,
                customer_name=customer_name,
                customer_email=customer_email,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "product_name": item.product_name,
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                            "total_price": item.total_price,
                        }
                        for item in items
                    ]
                ),
                total_units=order.total_units,
                subtotal=totals.subtotal,
                tax=totals.tax,
                shipping_cost=totals.shipping_cost,
                total_amount=totals.total,
                ordered_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def total_units(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_terminal(self) -> bool:
        return OrderStatus(self.status) in TERMINAL_STATES

    @property
    def can_cancel(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    # -------------------------------------------------------------------
    # Status workflow
    # -------------------------------------------------------------------
    def update_status(self, new_status, tracking_number=None):
        """Move the order to ``new_status`` and record an optional tracking number.

        Entering Cancelled goes through ``cancel`` so the cancellation is
        recorded the same way regardless of the entry point.
        """
        target = parse_status(new_status)
        current = OrderStatus(self.status)

        if current in TERMINAL_STATES:
            raise ValidationError({"status": [f"Cannot edit an order that is {current.value}"]})

        if target == OrderStatus.CANCELLED:
            if tracking_number:
                self.tracking_number = tracking_number
            self.cancel()
            return

        now = datetime.now(UTC)
        if tracking_number:
            self.tracking_number = tracking_number
        if target == OrderStatus.SHIPPED and self.shipped_at is None:
            self.shipped_at = now
        if target == OrderStatus.DELIVERED and self.delivered_at is None:
            self.delivered_at = now
        self.updated_at = now

        if target == current:
            return

        self.status = target.value
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_name=self.customer_name,
                previous_status=current.value,
                new_status=target.value,
                tracking_number=self.tracking_number,
                changed_at=now,
            )
        )

    def cancel(self, reason=None):
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise ValidationError({"status": [f"Cannot cancel an order that is {current.value}"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_name=self.customer_name,
                previous_status=current.value,
                reason=reason,
                cancelled_at=now,
            )
        )
