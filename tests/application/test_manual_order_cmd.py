"""Application tests for orders keyed in by staff."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.account.profile import DeactivateUser
from storefront.account.registration import RegisterUser
from storefront.notification.queue.port import ORDER_NOTIFICATIONS_QUEUE
from storefront.order.manual import INVALID_SELECTION, CreateManualOrder
from storefront.order.order import Order, OrderStatus
from storefront.product.management import DeactivateProduct
from storefront.product.product import Product


def _register_customer():
    return current_domain.process(
        RegisterUser(
            username="sipho",
            email="sipho@example.com",
            password="s3cure-pass",
            first_name="Sipho",
            last_name="Dlamini",
            phone_number="+27 31 555 0188",
            address="4 Florida Road, Durban",
        ),
        asynchronous=False,
    )


def _create_product(name="Desk Lamp", price=35.00, stock=4):
    product = Product.create(name=name, price=price, stock=stock)
    current_domain.repository_for(Product).add(product)
    return str(product.id)


def _create_order(customer_id, product_id, quantity=2, **extra):
    return current_domain.process(
        CreateManualOrder(customer_id=customer_id, product_id=product_id, quantity=quantity, **extra),
        asynchronous=False,
    )


class TestCreateManualOrder:
    def test_order_starts_submitted(self):
        customer_id = _register_customer()
        product_id = _create_product()

        order = current_domain.repository_for(Order).get(_create_order(customer_id, product_id))

        assert order.status == OrderStatus.SUBMITTED.value
        assert order.order_number.startswith("ORD-")
        assert order.user_id == customer_id
        assert order.customer_name == "Sipho Dlamini"
        assert order.customer_email == "sipho@example.com"
        assert len(order.items) == 1
        assert order.items[0].product_name == "Desk Lamp"
        assert order.items[0].quantity == 2

    def test_totals_follow_pricing_rules(self):
        order_id = _create_order(_register_customer(), _create_product(price=35.00))
        order = current_domain.repository_for(Order).get(order_id)

        assert order.subtotal == 70.00
        assert order.tax == 10.50
        assert order.shipping_cost == 10.00
        assert order.total_amount == 90.50

    def test_customer_contact_details_are_defaults(self):
        order_id = _create_order(_register_customer(), _create_product())
        order = current_domain.repository_for(Order).get(order_id)

        assert order.shipping_address == "4 Florida Road, Durban"
        assert order.phone_number == "+27 31 555 0188"

    def test_explicit_shipping_address_wins(self):
        order_id = _create_order(
            _register_customer(),
            _create_product(),
            shipping_address="1 Dock Road, Cape Town",
        )
        assert current_domain.repository_for(Order).get(order_id).shipping_address == "1 Dock Road, Cape Town"

    def test_stock_is_taken(self):
        product_id = _create_product(stock=4)
        _create_order(_register_customer(), product_id, quantity=3)
        assert current_domain.repository_for(Product).get(product_id).stock == 1

    def test_notification_is_queued(self, notification_queue):
        order_id = _create_order(_register_customer(), _create_product(price=35.00), quantity=2)

        messages = notification_queue.messages_on(ORDER_NOTIFICATIONS_QUEUE)
        assert len(messages) == 1
        assert messages[0]["OrderId"] == order_id
        assert messages[0]["CustomerName"] == "Sipho Dlamini"
        assert messages[0]["ProductName"] == "Desk Lamp"
        assert messages[0]["Quantity"] == 2
        assert messages[0]["TotalPrice"] == 90.50


class TestManualOrderRejections:
    def test_insufficient_stock(self):
        product_id = _create_product(stock=1)
        with pytest.raises(ValidationError) as exc:
            _create_order(_register_customer(), product_id, quantity=2)

        assert exc.value.messages["quantity"] == ["Insufficient stock. Available: 1"]
        assert current_domain.repository_for(Product).get(product_id).stock == 1
        assert current_domain.repository_for(Order).all_recent() == []

    def test_unknown_customer(self):
        with pytest.raises(ValidationError) as exc:
            _create_order("no-such-customer", _create_product())
        assert exc.value.messages["order"] == [INVALID_SELECTION]

    def test_inactive_customer(self):
        customer_id = _register_customer()
        current_domain.process(DeactivateUser(user_id=customer_id), asynchronous=False)

        with pytest.raises(ValidationError):
            _create_order(customer_id, _create_product())

    def test_withdrawn_product(self):
        product_id = _create_product()
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ValidationError) as exc:
            _create_order(_register_customer(), product_id)
        assert exc.value.messages["order"] == [INVALID_SELECTION]
