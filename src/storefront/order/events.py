"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was placed, either at checkout or keyed in by staff."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier()
    customer_name = String(required=True)
    customer_email = String()
    items = Text(required=True)  # JSON: list of {product_id, product_name, quantity, unit_price, total_price}
    total_units = Integer(required=True)
    subtotal = Float(required=True)
    tax = Float(required=True)
    shipping_cost = Float(required=True)
    total_amount = Float(required=True)
    ordered_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_name = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    tracking_number = String()
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled. Stock for its lines is restored in the same unit of work."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_name = String(required=True)
    previous_status = String(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)
