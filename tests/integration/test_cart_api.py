"""Integration tests for Cart and Checkout API endpoints via TestClient."""

from protean import current_domain
from storefront.notification.queue.port import ORDER_NOTIFICATIONS_QUEUE
from storefront.order.order import Order
from storefront.product.product import Product

SESSION = "sess-api-001"

CHECKOUT_FORM = {
    "customer_name": "Karabo Molefe",
    "customer_email": "karabo@example.com",
    "shipping_address": "7 Vilakazi Street, Soweto",
    "phone_number": "+27 11 555 0175",
}


def _add_item(client, product_id, quantity=1, session_id=SESSION):
    return client.post(f"/carts/{session_id}/items", json={"product_id": product_id, "quantity": quantity})


class TestViewCart:
    def test_new_session_has_empty_cart(self, client):
        response = client.get(f"/carts/{SESSION}")
        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["total"] == 0

    def test_count_for_unknown_session(self, client):
        assert client.get("/carts/unknown/count").json() == {"count": 0}


class TestAddToCart:
    def test_add_item(self, client, create_product):
        product_id = create_product(price=30.00)
        response = _add_item(client, product_id, quantity=2)
        assert response.status_code == 201

        body = response.json()
        assert body["total_items"] == 2
        assert body["subtotal"] == 60.00
        assert body["tax"] == 9.00
        assert body["shipping_cost"] == 10.00
        assert body["total"] == 79.00
        assert body["items"][0]["total_price"] == 60.00

    def test_merge_quantities(self, client, create_product):
        product_id = create_product()
        _add_item(client, product_id, quantity=1)
        response = _add_item(client, product_id, quantity=2)
        assert len(response.json()["items"]) == 1
        assert response.json()["items"][0]["quantity"] == 3

    def test_insufficient_stock(self, client, create_product):
        product_id = create_product(stock=2)
        response = _add_item(client, product_id, quantity=3)
        assert response.status_code == 400

    def test_unknown_product(self, client):
        assert _add_item(client, "ghost").status_code == 404

    def test_cart_count(self, client, create_product):
        _add_item(client, create_product(name="Hat"), quantity=2)
        _add_item(client, create_product(name="Belt"), quantity=1)
        assert client.get(f"/carts/{SESSION}/count").json() == {"count": 3}


class TestUpdateAndRemove:
    def test_update_quantity(self, client, create_product):
        product_id = create_product()
        _add_item(client, product_id)
        response = client.put(f"/carts/{SESSION}/items/{product_id}", json={"quantity": 5})
        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 5

    def test_update_to_zero_removes(self, client, create_product):
        product_id = create_product()
        _add_item(client, product_id)
        response = client.put(f"/carts/{SESSION}/items/{product_id}", json={"quantity": 0})
        assert response.json()["items"] == []

    def test_remove_item(self, client, create_product):
        product_id = create_product()
        _add_item(client, product_id)
        response = client.delete(f"/carts/{SESSION}/items/{product_id}")
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_clear_cart(self, client, create_product):
        _add_item(client, create_product(name="Hat"))
        _add_item(client, create_product(name="Belt"))
        assert client.delete(f"/carts/{SESSION}").status_code == 200
        assert client.get(f"/carts/{SESSION}/count").json() == {"count": 0}


class TestCheckoutPage:
    def test_empty_cart(self, client):
        response = client.get(f"/carts/{SESSION}/checkout")
        assert response.status_code == 400
        assert response.json()["error"] == "Your cart is empty. Please add items before checkout."

    def test_ready_cart(self, client, create_product):
        _add_item(client, create_product())
        response = client.get(f"/carts/{SESSION}/checkout")
        assert response.status_code == 200
        assert response.json()["cart"]["total_items"] == 1

    def test_adjusted_cart(self, client, create_product):
        product_id = create_product(price=80.00)
        _add_item(client, product_id)
        client.put(f"/products/{product_id}", json={"name": "Sneakers", "price": 70.00, "stock": 10})

        response = client.get(f"/carts/{SESSION}/checkout")
        assert response.status_code == 409
        assert response.json()["warnings"] == ["The price for 'Sneakers' has changed to 70.00."]


class TestSubmitCheckout:
    def test_successful_checkout(self, client, create_product, notification_queue):
        product_id = create_product(price=80.00, stock=10)
        _add_item(client, product_id, quantity=2)

        response = client.post(f"/carts/{SESSION}/checkout", json=CHECKOUT_FORM)
        assert response.status_code == 201
        body = response.json()
        assert body["order_number"].startswith("ORD-")
        assert body["error"] is None

        order = current_domain.repository_for(Order).get(body["order_id"])
        assert order.status == "Pending"
        assert order.customer_name == "Karabo Molefe"
        assert current_domain.repository_for(Product).get(product_id).stock == 8
        assert client.get(f"/carts/{SESSION}/count").json() == {"count": 0}
        assert len(notification_queue.messages_on(ORDER_NOTIFICATIONS_QUEUE)) == 1

    def test_empty_cart(self, client):
        response = client.post(f"/carts/{SESSION}/checkout", json=CHECKOUT_FORM)
        assert response.status_code == 400
        assert response.json()["error"] == "Your cart is empty."

    def test_adjusted_cart(self, client, create_product):
        product_id = create_product(stock=10)
        _add_item(client, product_id, quantity=5)
        client.put(f"/products/{product_id}", json={"name": "Sneakers", "price": 80.00, "stock": 0})

        response = client.post(f"/carts/{SESSION}/checkout", json=CHECKOUT_FORM)
        assert response.status_code == 409
        assert response.json()["warnings"] == ["'Sneakers' is now out of stock and has been removed."]
        assert current_domain.repository_for(Order).all_recent() == []

    def test_missing_fields(self, client, create_product):
        _add_item(client, create_product())
        response = client.post(f"/carts/{SESSION}/checkout", json={"customer_name": "Karabo"})
        assert response.status_code == 422
