"""Order notification message shapes published on the order-notifications queue."""

import json


def order_created_message(event) -> dict:
    """Summary of a newly placed order: one line per order, product names joined."""
    items = json.loads(event.items) if isinstance(event.items, str) else (event.items or [])
    return {
        "OrderId": str(event.order_id),
        "OrderNumber": event.order_number,
        "CustomerName": event.customer_name,
        "ProductName": ", ".join(item["product_name"] for item in items),
        "Quantity": event.total_units,
        "TotalPrice": event.total_amount,
    }


def status_changed_message(order_id, customer_name, new_status, updated_at) -> dict:
    return {
        "OrderId": str(order_id),
        "CustomerName": customer_name,
        "NewStatus": new_status,
        "UpdatedDate": updated_at.isoformat(),
    }
